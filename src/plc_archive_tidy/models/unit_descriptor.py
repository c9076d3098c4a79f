"""單元（Location/Unit 資料夾）描述紀錄。"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
import re
from typing import Optional

from ..utils import path_classifier, time_utils

MULTIPLE_PROGRAM_FILES = "Multiple program files"
PROGRAM_FILE_NOT_FOUND = "Program file not found"
MULTIPLE_SECONDARY_FILES = "Multiple MER files"
SECONDARY_FILE_NOT_FOUND = "MER file not found"

_BACKUP_SUFFIX = re.compile(r"^(?P<base>.*) \(plus (?P<count>\d+) bak files?\)$", re.DOTALL)


class ProgramFileKind(str, Enum):
    SINGLE = "SINGLE"
    MULTIPLE = "MULTIPLE"
    MISSING = "MISSING"


def backup_suffix(backup_count: int) -> str:
    if backup_count <= 0:
        return ""
    plural = "s" if backup_count > 1 else ""
    return f" (plus {backup_count} bak file{plural})"


@dataclass(frozen=True)
class ProgramFile:
    kind: ProgramFileKind
    name: Optional[str] = None
    count: int = 0
    backup_count: int = 0
    label: Optional[str] = None

    @classmethod
    def single(cls, name: str, backup_count: int = 0) -> "ProgramFile":
        return cls(kind=ProgramFileKind.SINGLE, name=name, count=1, backup_count=backup_count)

    @classmethod
    def multiple(cls, count: int, backup_count: int = 0) -> "ProgramFile":
        return cls(kind=ProgramFileKind.MULTIPLE, count=count, backup_count=backup_count)

    @classmethod
    def missing(cls) -> "ProgramFile":
        return cls(kind=ProgramFileKind.MISSING)

    @classmethod
    def from_display(cls, display: str, count: int) -> "ProgramFile":
        """由持久化的顯示字串與檔案數重建；無法還原時保留原字串。"""
        base, backup_count = display, 0
        match = _BACKUP_SUFFIX.match(display)
        if match:
            base, backup_count = match.group("base"), int(match.group("count"))

        if count <= 0:
            parsed = cls.missing()
        elif count > 1:
            parsed = cls.multiple(count, backup_count)
        else:
            parsed = cls.single(base, backup_count)

        if parsed.display != display:
            return cls(
                kind=parsed.kind,
                name=parsed.name,
                count=max(0, count),
                backup_count=backup_count,
                label=display,
            )
        return parsed

    @property
    def display(self) -> str:
        if self.label is not None:
            return self.label
        if self.kind == ProgramFileKind.SINGLE:
            text = self.name or ""
        elif self.kind == ProgramFileKind.MULTIPLE:
            text = MULTIPLE_PROGRAM_FILES
        else:
            return PROGRAM_FILE_NOT_FOUND
        return text + backup_suffix(self.backup_count)

    @property
    def filename(self) -> Optional[str]:
        if self.kind != ProgramFileKind.SINGLE or not self.name:
            return None
        return path_classifier.strip_count_suffix(self.name)


@dataclass
class UnitDescriptor:
    location: str
    unit: str
    program_file: ProgramFile
    program_file_modified: datetime
    secondary_file: str
    secondary_file_modified: Optional[datetime]
    quarter: str
    directory_path: str
    program_count: int

    @property
    def program_file_display(self) -> str:
        return self.program_file.display

    @property
    def program_path(self) -> Optional[Path]:
        filename = self.program_file.filename
        if filename is None or not self.directory_path:
            return None
        return Path(self.directory_path) / filename

    def sort_key(self) -> tuple[str, str, str]:
        return (
            self.location.upper(),
            self.unit.upper(),
            self.program_file_display.upper(),
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "location": self.location,
            "unit": self.unit,
            "programFile": self.program_file_display,
            "programFileModified": time_utils.format_timestamp(self.program_file_modified),
            "quickPanelFile": self.secondary_file,
            "quickPanelFileModified": time_utils.format_optional(self.secondary_file_modified),
            "quarter": self.quarter,
            "directoryPath": self.directory_path,
            "programCountInDir": self.program_count,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "UnitDescriptor":
        count = int(data.get("programCountInDir", 1) or 0)
        modified_raw = data.get("programFileModified")
        return cls(
            location=str(data.get("location") or ""),
            unit=str(data.get("unit") or ""),
            program_file=ProgramFile.from_display(str(data.get("programFile") or ""), count),
            program_file_modified=(
                time_utils.parse_timestamp(str(modified_raw))
                if modified_raw
                else time_utils.SENTINEL_MODIFIED
            ),
            secondary_file=str(data.get("quickPanelFile") or ""),
            secondary_file_modified=time_utils.parse_optional(data.get("quickPanelFileModified")),  # type: ignore[arg-type]
            quarter=str(data.get("quarter") or ""),
            directory_path=str(data.get("directoryPath") or ""),
            program_count=count,
        )
