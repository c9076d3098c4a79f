"""重複程式檔資料夾偵測。

以磁碟上的實際檔案為準：每個有程式檔的資料夾都會重新列舉，
不從顯示字串（例如 "Multiple program files"）反推檔名。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List

from ..config import ConfigManager
from ..models import ResultAggregate, UnitDescriptor
from ..utils import file_ops, path_classifier, path_utils, time_utils
from ..utils.error_handler import ScanError, ValidationError
from ..utils.logger import get_logger


@dataclass
class DuplicateGroup:
    directory: Path
    files: List[Path]


@dataclass
class DuplicateReport:
    groups: List[DuplicateGroup]

    @property
    def candidates(self) -> List[Path]:
        return [path for group in self.groups for path in group.files]

    @property
    def is_empty(self) -> bool:
        return not self.groups


@dataclass
class MultipleFilesReport:
    program_files: List[Path] = field(default_factory=list)
    secondary_files: List[Path] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.program_files and not self.secondary_files


class DuplicateDetector:
    def __init__(self, config: ConfigManager, logger=None) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.program_extensions = config.program_extensions
        self.secondary_extension = config.secondary_extension
        self.backup_marker = config.backup_marker

    def detect(self, aggregate: ResultAggregate) -> DuplicateReport:
        groups: List[DuplicateGroup] = []
        for directory in self._program_directories(aggregate.results):
            files = self._list_program_files(directory)
            if len(files) <= 1:
                continue
            ordered = sorted(files, key=self._safe_modified)
            groups.append(DuplicateGroup(directory=directory, files=ordered))
            self.logger.info(f"重複程式檔資料夾: {directory} ({len(ordered)} 個檔案)")
        return DuplicateReport(groups=groups)

    def find_backup_files(self, root: Path) -> List[Path]:
        backups: List[Path] = []
        for _directory, files in self._walk(root):
            backups.extend(
                path for path in files if path_classifier.is_backup_file(path, self.backup_marker)
            )
        return backups

    def find_multiple_files(self, root: Path) -> MultipleFilesReport:
        report = MultipleFilesReport()
        for _directory, files in self._walk(root):
            secondary = [path for path in files if path_classifier.has_extension(path, self.secondary_extension)]
            if len(secondary) > 1:
                report.secondary_files.extend(secondary)
            programs = [
                path
                for path in files
                if path_classifier.is_program_file(path, self.program_extensions, self.backup_marker)
            ]
            if len(programs) > 1:
                report.program_files.extend(programs)
        return report

    def _walk(self, root: Path):
        if root is None or not str(root).strip() or not Path(root).is_dir():
            raise ValidationError(f"Select a valid search directory first: {root}")
        try:
            yield from file_ops.walk_directories(Path(root))
        except OSError as exc:
            self.logger.error(f"列舉失敗: {root} ({exc})")
            raise ScanError(str(root), exc) from exc

    def _program_directories(self, rows: Iterable[UnitDescriptor]) -> List[Path]:
        seen: dict[str, Path] = {}
        for row in rows:
            if row.program_count <= 0 or not row.directory_path:
                continue
            seen.setdefault(path_utils.casefold_key(row.directory_path), Path(row.directory_path))
        return list(seen.values())

    def _list_program_files(self, directory: Path) -> List[Path]:
        try:
            files = file_ops.list_files(directory)
        except OSError as exc:
            self.logger.warning(f"無法列出資料夾: {directory} ({exc})")
            return []
        distinct: dict[str, Path] = {}
        for path in files:
            if path_classifier.is_program_file(path, self.program_extensions, self.backup_marker):
                distinct.setdefault(path_utils.casefold_key(path), path)
        return list(distinct.values())

    def _safe_modified(self, path: Path):
        try:
            return time_utils.get_last_write_time(path)
        except OSError:
            return time_utils.SENTINEL_MODIFIED
