"""Orchestratorから呼び出し側へのイベント通知"""
import queue
import threading
from typing import Iterator, Optional

from ..models.events import Event


class EventStream:
    """単一の送信側・単一の受信側をつなぐイベントの流れ

    キューは長さ1なので、受信側が取り出すまで送信側は待たされる。
    終端イベント（Complete / Error）の後には何も送られない。
    """

    def __init__(self, maxsize: int = 1):
        self._queue: "queue.Queue[Event]" = queue.Queue(maxsize=maxsize)
        self._lock = threading.Lock()
        self._closed = False
        self._terminal: Optional[Event] = None

    # --- 送信側 ---

    def publish(self, event: Event) -> None:
        """イベントを送信（終端イベントを送ると閉じる）"""
        with self._lock:
            if self._closed:
                raise RuntimeError(f"Event stream is closed, cannot publish {event.kind.value}")
            if event.is_terminal:
                self._closed = True
        self._queue.put(event)

    @property
    def closed(self) -> bool:
        """終端イベントが送信済みか"""
        return self._closed

    # --- 受信側 ---

    def get(self, timeout: Optional[float] = None) -> Event:
        """次のイベントを取得

        終端イベントを受け取った後に呼ぶとRuntimeError。
        timeout内に届かなければqueue.Emptyが送出される。
        """
        if self._terminal is not None:
            raise RuntimeError("Terminal event has already been received")
        event = self._queue.get(timeout=timeout)
        if event.is_terminal:
            self._terminal = event
        return event

    def __iter__(self) -> Iterator[Event]:
        while self._terminal is None:
            yield self.get()

    def wait(self, timeout: Optional[float] = None) -> Event:
        """残りのイベントを読み捨てて終端イベントを返す

        timeoutは各イベントの待ち時間に適用される。
        """
        while self._terminal is None:
            self.get(timeout=timeout)
        return self._terminal

    @property
    def terminal_event(self) -> Optional[Event]:
        """受信済みの終端イベント"""
        return self._terminal
