"""マルチパートアップロードの完了と中断"""
from typing import Any, Dict

from ..models.session import UploadSession
from ..utils.logger import LoggerManager
from .backend import StorageBackend


class Finalizer:
    """セッションを完了または中断する

    どちらも1回のアップロードにつき1度だけ呼べる。
    """

    def __init__(self, backend: StorageBackend):
        self.backend = backend
        self.logger = LoggerManager.get_logger()
        self._finalized = False

    def _mark_finalized(self, session: UploadSession) -> None:
        if self._finalized:
            raise RuntimeError(f"Upload {session.upload_id} has already been finalized")
        self._finalized = True

    def complete(self, session: UploadSession) -> Dict[str, Any]:
        """パート一覧を送信してアップロードを完了"""
        self._mark_finalized(session)
        parts = sorted(session.parts, key=lambda part: part.part_number)

        self.logger.info(
            f"Completing upload {session.bucket}/{session.key} with {len(parts)} parts"
        )
        return self.backend.complete_upload(session.upload_id, session.key, parts)

    def abort(self, session: UploadSession) -> None:
        """アップロードを中断（パートが0件でもよい）"""
        self._mark_finalized(session)

        self.logger.warning(
            f"Aborting upload {session.bucket}/{session.key} "
            f"({len(session.parts)} parts uploaded)"
        )
        self.backend.abort_upload(session.upload_id, session.key)
