"""アップロード処理のエラー定義"""
from typing import List, Optional

from ..utils.text import english_join


class UploadError(Exception):
    """アップロード失敗の基底クラス"""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class ConfigurationError(UploadError):
    """必須設定が不足している（I/O前に検出）"""

    def __init__(self, missing: List[str]):
        super().__init__(f"missing {english_join(missing, oxford_comma=True)}")
        self.missing = list(missing)


class StreamReadError(UploadError):
    """入力ストリームの読み込み中に失敗した"""

    def __init__(self, cause: BaseException):
        super().__init__(f"could not read input stream: {cause}", cause)


class SessionInitError(UploadError):
    """マルチパートアップロードを開始できなかった"""

    def __init__(self, bucket: str, key: str, cause: BaseException):
        super().__init__(
            f"could not initiate multipart upload to {bucket}/{key}: {cause}", cause
        )


class PartUploadError(UploadError):
    """パートのアップロードがリトライ上限に達した"""

    def __init__(self, part_number: int, attempts: int, cause: BaseException):
        super().__init__(
            f"part #{part_number} failed after {attempts} attempt(s): {cause}", cause
        )
        self.part_number = part_number
        self.attempts = attempts


class CompletionError(UploadError):
    """マルチパートアップロードの完了処理に失敗した"""

    def __init__(self, cause: BaseException):
        super().__init__(f"could not complete multipart upload: {cause}", cause)


class AbortError(UploadError):
    """失敗後の中断処理にも失敗した

    単独では通知されず、常に元のエラーと組み合わせて報告される。
    リモートにアップロード途中のセッションが残っている可能性がある。
    """

    def __init__(self, original: BaseException, abort_cause: BaseException):
        super().__init__(
            f"upload error: {original}, as well as an error aborting the upload: {abort_cause}",
            original,
        )
        self.original = original
        self.abort_cause = abort_cause
