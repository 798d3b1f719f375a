"""アップロード中に通知されるイベント

イベントは閉じた直和型として扱う。利用側は ``event.kind`` で分岐する。
Complete と Error は終端イベントで、どちらか一方だけが必ず最後に届く。
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional


class EventKind(str, Enum):
    """イベントの種類"""
    PROGRESS = "progress"
    RETRY = "retry"
    COMPLETE = "complete"
    ERROR = "error"


@dataclass(frozen=True)
class Event:
    """イベントの基底クラス"""
    kind: EventKind = field(init=False)

    @property
    def is_terminal(self) -> bool:
        return self.kind in (EventKind.COMPLETE, EventKind.ERROR)


@dataclass(frozen=True)
class Progress(Event):
    """パートのアップロードが成功した"""
    part_number: int
    bytes: int
    kind: EventKind = field(default=EventKind.PROGRESS, init=False)


@dataclass(frozen=True)
class Retry(Event):
    """パートのアップロードに失敗し、再試行する"""
    part_number: int
    retry_number: int
    max_retries: int
    kind: EventKind = field(default=EventKind.RETRY, init=False)


@dataclass(frozen=True)
class Complete(Event):
    """アップロードが完了した（終端）

    resultはバックエンドの完了レスポンス。空の入力ではNone。
    """
    total_bytes: int
    result: Optional[Dict[str, Any]] = None
    kind: EventKind = field(default=EventKind.COMPLETE, init=False)


@dataclass(frozen=True)
class Error(Event):
    """アップロードが失敗した（終端）"""
    cause: BaseException
    kind: EventKind = field(default=EventKind.ERROR, init=False)

    @property
    def message(self) -> str:
        return str(self.cause)

    def __str__(self) -> str:
        return self.message
