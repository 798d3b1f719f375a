"""パートアップロードの実行"""
from typing import Callable

from ..models.errors import PartUploadError
from ..models.events import Event, Retry
from ..models.session import Part, UploadSession
from ..utils.logger import LoggerManager
from .backend import StorageBackend


class PartUploader:
    """1チャンクを1パートとしてアップロード

    失敗したら待たずにすぐ再試行する。最終試行以外の失敗ごとにRetryを通知し、
    max_retries回すべて失敗したらPartUploadErrorを送出する。
    成功時はイベントを出さない（ProgressはOrchestratorが出す）。
    """

    def __init__(self, backend: StorageBackend, max_retries: int, emit: Callable[[Event], None]):
        if max_retries < 1:
            raise ValueError(f"Invalid max_retries: {max_retries}")
        self.backend = backend
        self.max_retries = max_retries
        self.emit = emit
        self.logger = LoggerManager.get_logger()

    def upload(self, session: UploadSession, chunk: bytes) -> Part:
        """セッションの次のパート番号でチャンクをアップロード"""
        part_number = session.next_part_number

        for attempt in range(1, self.max_retries + 1):
            try:
                etag = self.backend.upload_part(session.upload_id, session.key, part_number, chunk)
            except Exception as e:
                if attempt == self.max_retries:
                    self.logger.error(
                        f"Part #{part_number} failed after {attempt} attempts: {e}"
                    )
                    raise PartUploadError(part_number, attempt, e) from e

                self.logger.warning(
                    f"Part #{part_number} failed (attempt {attempt}/{self.max_retries}), retrying: {e}"
                )
                self.emit(Retry(
                    part_number=part_number,
                    retry_number=attempt,
                    max_retries=self.max_retries,
                ))
            else:
                return Part(part_number=part_number, etag=etag, size=len(chunk))

        # max_retries >= 1 なのでここには来ない
        raise AssertionError("unreachable")
