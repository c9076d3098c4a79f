"""歸檔候選項目（每批次計算，不持久化）。"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class ArchiveCandidate:
    source_path: Path
    archive_root: Path
    destination_path: Path

    def to_dict(self) -> dict[str, object]:
        return {
            "source_path": str(self.source_path),
            "archive_root": str(self.archive_root),
            "destination_path": str(self.destination_path),
        }
