"""目錄樹掃描與單元描述建立。"""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Callable, Optional

from ..config import ConfigManager
from ..models import (
    MULTIPLE_SECONDARY_FILES,
    SECONDARY_FILE_NOT_FOUND,
    ProgressEvent,
    ProgressEventType,
    ProgramFile,
    UnitDescriptor,
    sort_descriptors,
)
from ..utils import file_ops, path_classifier, path_utils, time_utils
from ..utils.cancel import CancellationToken
from ..utils.error_handler import ScanError, ValidationError
from ..utils.logger import get_logger


@dataclass
class ScanResult:
    results: list[UnitDescriptor]
    program_files: list[Path]


@dataclass
class _DirectoryListing:
    path: Path
    files: list[Path]


class DirectoryScanner:
    def __init__(self, config: ConfigManager, logger=None) -> None:
        self.config = config
        self.logger = logger or get_logger(self.__class__.__name__)
        self.program_extensions = config.program_extensions
        self.secondary_extension = config.secondary_extension
        self.backup_marker = config.backup_marker

    def scan(
        self,
        root: Path,
        progress_callback: Optional[Callable[[ProgressEvent], None]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ScanResult:
        if not str(root).strip() or not root.is_dir():
            raise ValidationError(f"Select a valid search directory first: {root}")
        root = Path(os.path.abspath(root))

        try:
            listings = [_DirectoryListing(path, files) for path, files in file_ops.walk_directories(root)]
        except OSError as exc:
            self.logger.error(f"掃描失敗: {root} ({exc})")
            raise ScanError(str(root), exc) from exc

        program_files = [
            path
            for listing in listings
            for path in listing.files
            if path_classifier.is_program_file(path, self.program_extensions, self.backup_marker)
        ]
        by_parent: dict[str, list[Path]] = {}
        for path in program_files:
            by_parent.setdefault(path_utils.casefold_key(path.parent), []).append(path)

        total = len(listings)
        self._emit(progress_callback, ProgressEvent(ProgressEventType.PHASE_START, phase_name="Scan", total=total))

        rows: list[UnitDescriptor] = []
        for index, listing in enumerate(listings, start=1):
            if cancel_token is not None:
                cancel_token.raise_if_cancelled(f"已取消掃描: {root}")
            try:
                row = self._describe_directory(
                    root,
                    listing,
                    by_parent.get(path_utils.casefold_key(listing.path), []),
                )
            except OSError as exc:
                self.logger.error(f"掃描失敗: {listing.path} ({exc})")
                raise ScanError(str(root), exc) from exc
            if row is not None:
                rows.append(row)
            self._emit(
                progress_callback,
                ProgressEvent(
                    ProgressEventType.DIRECTORY_DONE,
                    phase_name="Scan",
                    current=index,
                    total=total,
                    path=str(listing.path),
                ),
            )

        ordered = sort_descriptors(rows)
        self._emit(
            progress_callback,
            ProgressEvent(ProgressEventType.PHASE_END, phase_name="Scan", current=total, total=total),
        )
        self.logger.info(f"掃描完成，共 {total} 個資料夾，{len(ordered)} 筆結果")
        return ScanResult(results=ordered, program_files=program_files)

    def _describe_directory(
        self,
        root: Path,
        listing: _DirectoryListing,
        files_in_dir: list[Path],
    ) -> Optional[UnitDescriptor]:
        program_count = len(files_in_dir)
        secondary_files = [
            path for path in listing.files if path_classifier.has_extension(path, self.secondary_extension)
        ]
        backup_count = sum(
            1 for path in listing.files if path_classifier.is_backup_file(path, self.backup_marker)
        )

        if program_count == 0 and not secondary_files:
            return None

        secondary_name, secondary_modified = self._describe_secondary(secondary_files)
        location, unit = path_classifier.extract_location_unit(path_utils.relative_dir(root, listing.path))

        if program_count > 0:
            if program_count == 1:
                program_file = ProgramFile.single(files_in_dir[0].name, backup_count)
            else:
                program_file = ProgramFile.multiple(program_count, backup_count)
            # 代表時間取列舉順序的第一個檔案
            program_modified = time_utils.get_last_write_time(files_in_dir[0])
            quarter = path_classifier.to_quarter(program_modified)
        else:
            program_file = ProgramFile.missing()
            program_modified = time_utils.SENTINEL_MODIFIED
            quarter = ""

        return UnitDescriptor(
            location=location,
            unit=unit,
            program_file=program_file,
            program_file_modified=program_modified,
            secondary_file=secondary_name,
            secondary_file_modified=secondary_modified,
            quarter=quarter,
            directory_path=str(listing.path),
            program_count=program_count,
        )

    def _describe_secondary(self, secondary_files: list[Path]):
        if len(secondary_files) > 1:
            return MULTIPLE_SECONDARY_FILES, None
        if len(secondary_files) == 1:
            path = secondary_files[0]
            return path.name, time_utils.get_last_write_time(path)
        return SECONDARY_FILE_NOT_FOUND, None

    def _emit(self, callback, event: ProgressEvent) -> None:
        if callback is not None:
            callback(event)
