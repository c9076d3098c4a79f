"""錯誤與警告記錄。"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

ARCHIVE_FAILED = "W-ARCHIVE"
DELETE_FAILED = "W-DELETE"


class ErrorLevel(str, Enum):
    INFO = "I"
    RECOVERABLE = "W"
    FATAL = "E"


@dataclass
class ProcessError:
    code: str
    level: ErrorLevel
    message: str
    file_path: Optional[str] = None

    def as_pair(self) -> Tuple[str, str]:
        return self.file_path or "", self.message

    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "level": self.level.value,
            "message": self.message,
            "file_path": self.file_path,
        }
