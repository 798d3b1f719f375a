"""マルチパートアップロードのセッション情報"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class Part:
    """アップロード済みのパート"""
    part_number: int
    etag: str
    size: int

    def __post_init__(self):
        if self.part_number < 1:
            raise ValueError(f"Invalid part_number: {self.part_number}. Must be at least 1")

    def to_s3(self) -> Dict[str, Any]:
        """CompleteMultipartUploadに渡す形式に変換"""
        return {"ETag": self.etag, "PartNumber": self.part_number}


@dataclass
class UploadSession:
    """リモートのマルチパートアップロード1件分の状態

    最初の空でないチャンクを読んだ時点で作成される。パートは追加のみで、
    パート番号は1から欠番なしで増えていくため、常に昇順に並んでいる。
    """
    bucket: str
    key: str
    upload_id: str
    parts: List[Part] = field(default_factory=list)
    next_part_number: int = 1

    def add_part(self, part: Part) -> None:
        """アップロード済みパートを追加"""
        if part.part_number != self.next_part_number:
            raise ValueError(
                f"Out of order part #{part.part_number}, expected #{self.next_part_number}"
            )
        self.parts.append(part)
        self.next_part_number += 1

    @property
    def total_bytes(self) -> int:
        return sum(part.size for part in self.parts)
