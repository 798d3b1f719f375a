"""アップロード進捗の表示"""
import sys
import time
from typing import Optional, TextIO

from ..models.events import Event, EventKind


def format_bytes(size: int) -> str:
    """バイト数を読みやすい形式に変換（SI単位）"""
    value = float(size)
    for unit in ("B", "kB", "MB", "GB", "TB"):
        if value < 1000 or unit == "TB":
            if unit == "B":
                return f"{int(value)} B"
            return f"{value:.1f} {unit}"
        value /= 1000
    return f"{size} B"


class ProgressPrinter:
    """イベントをコンソールに表示

    silentの場合はエラー以外を表示しない。
    """

    def __init__(self, out: Optional[TextIO] = None, silent: bool = False):
        self.out = out or sys.stderr
        self.silent = silent
        self.start_time = time.time()

    def start(self):
        """アップロード開始"""
        self.start_time = time.time()
        if not self.silent:
            self._print("> Starting upload...")

    def __call__(self, event: Event):
        """イベントを1行で表示"""
        if event.kind == EventKind.PROGRESS:
            if not self.silent:
                self._print(f"> Uploaded part #{event.part_number} {format_bytes(event.bytes)}")
        elif event.kind == EventKind.RETRY:
            if not self.silent:
                self._print(
                    f"Retrying part #{event.part_number} "
                    f"try {event.retry_number} of {event.max_retries}"
                )
        elif event.kind == EventKind.COMPLETE:
            if not self.silent:
                elapsed_time = time.time() - self.start_time
                self._print(
                    f"✔ Done. Sent {format_bytes(event.total_bytes)} in {elapsed_time:.3f}s."
                )
        elif event.kind == EventKind.ERROR:
            # エラーはsilentでも表示
            message = " ".join(event.message.split())
            self._print(f"✘ Upload failed:\n\n    {message}\n")

    def _print(self, line: str):
        print(line, file=self.out, flush=True)
