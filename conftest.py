"""テスト共通のフィクスチャとフェイク"""
import io
from typing import Any, Dict, List, Optional

import pytest
from botocore.exceptions import ClientError

from s3_stream_uploader.core.backend import StorageBackend
from s3_stream_uploader.models.config import UploadConfig
from s3_stream_uploader.models.session import Part
from s3_stream_uploader.utils.logger import LoggerManager


def client_error(code: str = "InternalError", message: str = "error",
                 operation: str = "TestOperation") -> ClientError:
    """指定コードのbotocore ClientErrorを作成"""
    return ClientError({"Error": {"Code": code, "Message": message}}, operation)


class FakeBackend(StorageBackend):
    """呼び出しを記録するメモリ上のバックエンド

    upload_failures: パート番号 -> 失敗させる回数（先頭から）
    """

    def __init__(
        self,
        upload_failures: Optional[Dict[int, int]] = None,
        initiate_error: Optional[Exception] = None,
        complete_error: Optional[Exception] = None,
        abort_error: Optional[Exception] = None,
    ):
        self.upload_failures = dict(upload_failures or {})
        self.initiate_error = initiate_error
        self.complete_error = complete_error
        self.abort_error = abort_error

        self.calls: List[tuple] = []
        self.attempts: Dict[int, int] = {}
        self.stored: Dict[int, bytes] = {}
        self.content_type: Optional[str] = None

    def initiate(self, bucket: str, key: str, content_type: str) -> str:
        self.calls.append(("initiate", bucket, key, content_type))
        if self.initiate_error:
            raise self.initiate_error
        self.content_type = content_type
        return "upload-1"

    def upload_part(self, upload_id: str, key: str, part_number: int, data: bytes) -> str:
        self.calls.append(("upload_part", upload_id, key, part_number, len(data)))
        self.attempts[part_number] = self.attempts.get(part_number, 0) + 1
        if self.upload_failures.get(part_number, 0) > 0:
            self.upload_failures[part_number] -= 1
            raise client_error("SlowDown", f"part {part_number} rejected", "UploadPart")
        self.stored[part_number] = bytes(data)
        return f'"etag-{part_number}"'

    def complete_upload(self, upload_id: str, key: str, parts: List[Part]) -> Dict[str, Any]:
        self.calls.append(("complete_upload", upload_id, key, [p.part_number for p in parts]))
        if self.complete_error:
            raise self.complete_error
        return {"Bucket": "test-bucket", "Key": key, "ETag": '"final-etag"'}

    def abort_upload(self, upload_id: str, key: str) -> None:
        self.calls.append(("abort_upload", upload_id, key))
        if self.abort_error:
            raise self.abort_error

    def call_names(self) -> List[str]:
        return [call[0] for call in self.calls]


class FailingStream(io.RawIOBase):
    """fail_after バイト返した後に読み込みエラーになるストリーム"""

    def __init__(self, fail_after: int):
        self.remaining = fail_after

    def readable(self) -> bool:
        return True

    def readinto(self, buffer) -> int:
        if self.remaining <= 0:
            raise OSError("connection reset by peer")
        n = min(len(buffer), self.remaining)
        buffer[:n] = b"x" * n
        self.remaining -= n
        return n


@pytest.fixture
def upload_config() -> UploadConfig:
    return UploadConfig(
        bucket="test-bucket",
        access_key="AKIAEXAMPLE",
        secret_key="secret",
        key="backups/dump.rdb",
        max_retries=3,
        max_part_size=1024,
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture(autouse=True)
def reset_logger():
    yield
    LoggerManager.reset()
