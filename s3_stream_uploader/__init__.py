"""S3 Stream Uploader パッケージ

シーク不可能なストリームをS3互換ストレージへマルチパートアップロードする。
"""
from typing import BinaryIO, Optional
from .models.config import Config, UploadConfig, LoggingConfig, KILOBYTE, MEGABYTE, DEFAULT_REGION
from .models.events import EventKind, Event, Progress, Retry, Complete, Error
from .models.errors import (
    UploadError,
    ConfigurationError,
    StreamReadError,
    SessionInitError,
    PartUploadError,
    CompletionError,
    AbortError,
)
from .utils.logger import LoggerManager
from .utils.text import english_join
from .core.backend import StorageBackend, S3Backend
from .core.channel import EventStream
from .core.orchestrator import send

__version__ = "0.1.0"


class StreamUploader:
    """S3ストリームアップローダーのメインクラス"""

    def __init__(self, config: Config, backend: Optional[StorageBackend] = None):
        self.config = config
        self.backend = backend

        # ロガーをセットアップ
        self.logger = LoggerManager.setup(self.config.logging)

    @classmethod
    def from_file(cls, config_path: str = "config.json") -> 'StreamUploader':
        """設定ファイルから作成"""
        return cls(Config.from_file(config_path))

    def send(self, stream: BinaryIO, key: Optional[str] = None) -> EventStream:
        """ストリームのアップロードを開始"""
        return send(self.config.upload, stream, key, backend=self.backend)


__all__ = [
    'StreamUploader',
    'send',
    'Config',
    'UploadConfig',
    'LoggingConfig',
    'KILOBYTE',
    'MEGABYTE',
    'DEFAULT_REGION',
    'EventKind',
    'Event',
    'Progress',
    'Retry',
    'Complete',
    'Error',
    'UploadError',
    'ConfigurationError',
    'StreamReadError',
    'SessionInitError',
    'PartUploadError',
    'CompletionError',
    'AbortError',
    'StorageBackend',
    'S3Backend',
    'EventStream',
    'english_join',
    '__version__',
]
