"""掃描與批次進度事件模型。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Optional


class ProgressEventType(str, Enum):
    PHASE_START = "PHASE_START"
    PHASE_END = "PHASE_END"
    DIRECTORY_DONE = "DIRECTORY_DONE"
    FILE_DONE = "FILE_DONE"


@dataclass
class ProgressEvent:
    event_type: ProgressEventType
    timestamp: datetime = field(default_factory=datetime.now)
    phase_name: Optional[str] = None
    current: int = 0
    total: int = 0
    path: Optional[str] = None
    status: Optional[str] = None

    @property
    def message(self) -> str:
        if self.event_type == ProgressEventType.DIRECTORY_DONE:
            return f"Processing {self.current} of {self.total} directories..."
        if self.event_type == ProgressEventType.FILE_DONE:
            return f"{self.status or 'DONE'}: {self.path}"
        return f"{self.phase_name or ''} {self.event_type.value}".strip()
