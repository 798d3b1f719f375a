"""アップロード全体の制御"""
import threading
from enum import Enum
from typing import BinaryIO, Callable, Optional

from ..models.config import UploadConfig
from ..models.errors import (
    AbortError,
    CompletionError,
    ConfigurationError,
    PartUploadError,
    SessionInitError,
    StreamReadError,
)
from ..models.events import Complete, Error, Event, Progress
from ..models.session import UploadSession
from ..utils.logger import LoggerManager
from ..utils.sniff import detect_content_type
from ..utils.stream_utils import iter_chunks
from .backend import S3Backend, StorageBackend
from .channel import EventStream
from .finalizer import Finalizer
from .uploader import PartUploader


class UploadState(str, Enum):
    """アップロードの状態"""
    UNINITIALIZED = "uninitialized"
    ACTIVE = "active"
    COMPLETING = "completing"
    ABORTING = "aborting"
    DONE = "done"
    FAILED = "failed"


class Orchestrator:
    """チャンク分割 → パートアップロード → 完了/中断 を順に実行

    1回のアップロードにつき1インスタンス。イベントはすべてEventStreamに流れ、
    最後に必ず Complete か Error のどちらか1つが届く。
    """

    def __init__(
        self,
        config: UploadConfig,
        stream: BinaryIO,
        key: str,
        events: EventStream,
        backend: Optional[StorageBackend] = None,
        content_sniffer: Callable[[bytes], str] = detect_content_type,
    ):
        self.config = config
        self.stream = stream
        self.key = key
        self.events = events
        self.content_sniffer = content_sniffer
        self.logger = LoggerManager.get_logger()

        self.state = UploadState.UNINITIALIZED
        self.session: Optional[UploadSession] = None
        self._backend = backend
        self._finalizer: Optional[Finalizer] = None

    def run(self) -> Event:
        """アップロードを実行して終端イベントを送信"""
        try:
            terminal = self._run()
        except Exception as e:
            # 想定外の例外でも終端イベントは必ず1つ送る
            self.logger.exception(f"Unexpected error uploading to {self.config.bucket}/{self.key}")
            if self.session is not None and self.state == UploadState.ACTIVE:
                # リモートのセッションが開いたままにならないよう中断する
                terminal = self._abort(self._finalizer, e)
            else:
                terminal = self._fail(e)

        self.events.publish(terminal)
        return terminal

    def _run(self) -> Event:
        missing = self.config.missing_fields()
        if missing:
            error = ConfigurationError(missing)
            self.logger.error(f"Invalid configuration: {error}")
            return self._fail(error)

        backend = self._backend or S3Backend.from_config(self.config)
        uploader = PartUploader(backend, self.config.max_retries, self.events.publish)
        finalizer = self._finalizer = Finalizer(backend)

        self.logger.info(
            f"Starting upload to {self.config.bucket}/{self.key} "
            f"(part size {self.config.max_part_size} bytes, {self.config.max_retries} attempts per part)"
        )

        try:
            for chunk in iter_chunks(self.stream, self.config.max_part_size):
                if self.session is None:
                    self.session = self._open_session(backend, chunk)
                    self.state = UploadState.ACTIVE

                part = uploader.upload(self.session, chunk)
                self.session.add_part(part)
                self.logger.debug(f"Uploaded part #{part.part_number} ({part.size} bytes)")
                self.events.publish(Progress(part_number=part.part_number, bytes=part.size))

        except SessionInitError as e:
            self.logger.error(str(e))
            return self._fail(e)
        except (StreamReadError, PartUploadError) as e:
            self.logger.error(f"Upload to {self.config.bucket}/{self.key} failed: {e}")
            return self._abort(finalizer, e)

        if self.session is None:
            self.logger.warning(
                f"Input stream was empty, nothing uploaded to {self.config.bucket}/{self.key}"
            )
            self.state = UploadState.DONE
            return Complete(total_bytes=0, result=None)

        self.state = UploadState.COMPLETING
        try:
            result = finalizer.complete(self.session)
        except Exception as e:
            # パートはサーバー側に保存済みなので中断はしない
            error = CompletionError(e)
            self.logger.error(str(error))
            return self._fail(error)

        total_bytes = self.session.total_bytes
        self.state = UploadState.DONE
        self.logger.info(
            f"Upload to {self.config.bucket}/{self.key} completed: "
            f"{len(self.session.parts)} parts, {total_bytes} bytes"
        )
        return Complete(total_bytes=total_bytes, result=result)

    def _open_session(self, backend: StorageBackend, chunk: bytes) -> UploadSession:
        """最初のチャンクからContent-Typeを判定してリモートのセッションを開始"""
        content_type = self.content_sniffer(chunk)
        try:
            upload_id = backend.initiate(self.config.bucket, self.key, content_type)
        except Exception as e:
            raise SessionInitError(self.config.bucket, self.key, e) from e

        self.logger.info(
            f"Initiated multipart upload {upload_id} for {self.config.bucket}/{self.key} ({content_type})"
        )
        return UploadSession(bucket=self.config.bucket, key=self.key, upload_id=upload_id)

    def _abort(self, finalizer: Finalizer, error: BaseException) -> Error:
        """失敗したアップロードを中断"""
        if self.session is None:
            # リモートのセッションがまだないので中断するものはない
            return self._fail(error)

        self.state = UploadState.ABORTING
        try:
            finalizer.abort(self.session)
        except Exception as e:
            compound = AbortError(error, e)
            self.logger.error(
                f"Could not abort upload {self.session.upload_id}, it may be left dangling: {e}"
            )
            return self._fail(compound)

        self.logger.info(f"Aborted upload {self.session.upload_id}")
        return self._fail(error)

    def _fail(self, error: BaseException) -> Error:
        self.state = UploadState.FAILED
        return Error(cause=error)


def send(
    config: UploadConfig,
    stream: BinaryIO,
    key: Optional[str] = None,
    backend: Optional[StorageBackend] = None,
    content_sniffer: Callable[[bytes], str] = detect_content_type,
) -> EventStream:
    """ストリームをバックグラウンドでアップロードし、イベントの流れを返す

    keyを省略した場合はconfig.keyを使う。
    """
    config = config.with_key(key)
    events = EventStream()
    orchestrator = Orchestrator(
        config,
        stream,
        config.key or "",
        events,
        backend=backend,
        content_sniffer=content_sniffer,
    )

    thread = threading.Thread(
        target=orchestrator.run,
        name=f"s3-stream-upload-{config.bucket}/{config.key}",
        daemon=True,
    )
    thread.start()
    return events
