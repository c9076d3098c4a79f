"""單元明細：列出 Location/Unit 底下各資料夾的實際檔案。"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from ..config import ConfigManager
from ..models import SECONDARY_FILE_NOT_FOUND, ResultAggregate
from ..utils import file_ops, path_classifier, path_utils, time_utils
from ..utils.logger import get_logger
from .result_index import NO_LOCATION, NO_UNIT, Selection


@dataclass
class UnitFile:
    path: Path
    kind: str
    modified: Optional[datetime]
    size_kb: int

    @property
    def name(self) -> str:
        return self.path.name


@dataclass
class DirectoryListing:
    directory: Path
    program_files: List[UnitFile] = field(default_factory=list)
    secondary_files: List[UnitFile] = field(default_factory=list)

    @property
    def secondary_missing(self) -> bool:
        return not self.secondary_files

    @property
    def has_multiple_programs(self) -> bool:
        return len(self.program_files) > 1


@dataclass
class UnitDetails:
    location: str
    unit: str
    note: str
    directories: List[DirectoryListing]

    @property
    def header(self) -> str:
        return f"Details: Location = {self.location or NO_LOCATION}  |  Unit = {self.unit or NO_UNIT}"

    @property
    def multi_program_folder_count(self) -> int:
        return sum(1 for listing in self.directories if listing.has_multiple_programs)

    @property
    def warning(self) -> str:
        count = self.multi_program_folder_count
        if count == 0:
            return ""
        return f"Warning: {count} folder(s) contain multiple program files."


class UnitInspector:
    def __init__(self, config: ConfigManager, logger=None) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.program_extensions = config.program_extensions
        self.secondary_extension = config.secondary_extension
        self.backup_marker = config.backup_marker

    def inspect(self, aggregate: ResultAggregate, location: str, unit: str) -> UnitDetails:
        selection = Selection.for_unit(location, unit)
        directories: dict[str, Path] = {}
        rows = sorted(
            (row for row in aggregate.results if selection.matches(row) and row.directory_path),
            key=lambda row: (row.directory_path.upper(), row.program_file_display.upper()),
        )
        for row in rows:
            directories.setdefault(path_utils.casefold_key(row.directory_path), Path(row.directory_path))

        return UnitDetails(
            location=location,
            unit=unit,
            note=aggregate.get_note(location, unit),
            directories=[self._list_directory(directory) for directory in directories.values()],
        )

    def _list_directory(self, directory: Path) -> DirectoryListing:
        listing = DirectoryListing(directory=directory)
        try:
            files = file_ops.list_files(directory)
        except OSError as exc:
            self.logger.warning(f"無法列出資料夾: {directory} ({exc})")
            return listing
        for path in files:
            if path_classifier.is_program_file(path, self.program_extensions, self.backup_marker):
                listing.program_files.append(self._describe(path, "Program"))
            elif path_classifier.has_extension(path, self.secondary_extension):
                listing.secondary_files.append(self._describe(path, "MER"))
        return listing

    def _describe(self, path: Path, kind: str) -> UnitFile:
        try:
            stat = path.stat()
        except OSError:
            return UnitFile(path=path, kind=kind, modified=None, size_kb=0)
        return UnitFile(
            path=path,
            kind=kind,
            modified=time_utils.get_last_write_time(path),
            size_kb=stat.st_size // 1024,
        )


def format_unit_details(details: UnitDetails) -> List[str]:
    lines = [details.header]
    if details.warning:
        lines.append(details.warning)
    if details.note:
        lines.append(f"Note: {details.note}")
    for listing in details.directories:
        lines.append(f"[Directory] {listing.directory}")
        for item in listing.program_files + listing.secondary_files:
            lines.append(
                f"  {item.name}\t{item.kind}\t{time_utils.format_for_display(item.modified)}\t{item.size_kb:,} KB"
            )
        if listing.secondary_missing:
            lines.append(f"  {SECONDARY_FILE_NOT_FOUND}\tMER")
    return lines
