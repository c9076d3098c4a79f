"""Flat archive moves and backup-file purging."""

from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from ..config import ConfigManager
from ..models import ArchiveCandidate, ProgressEvent, ProgressEventType, ProcessError
from ..models.error_record import ARCHIVE_FAILED, DELETE_FAILED
from ..utils import file_ops, path_utils
from ..utils.error_handler import ErrorHandler, ValidationError
from ..utils.logger import get_logger


@dataclass
class BatchResult:
    archived: int = 0
    archive_failed: int = 0
    deleted: int = 0
    delete_failed: int = 0
    errors: List[ProcessError] = field(default_factory=list)
    moved: List[ArchiveCandidate] = field(default_factory=list)

    @property
    def failures(self) -> List[Tuple[str, str]]:
        return [error.as_pair() for error in self.errors]

    @property
    def has_failures(self) -> bool:
        return self.archive_failed > 0 or self.delete_failed > 0

    def merge(self, other: "BatchResult") -> "BatchResult":
        return BatchResult(
            archived=self.archived + other.archived,
            archive_failed=self.archive_failed + other.archive_failed,
            deleted=self.deleted + other.deleted,
            delete_failed=self.delete_failed + other.delete_failed,
            errors=self.errors + other.errors,
            moved=self.moved + other.moved,
        )


class ArchiveEngine:
    def __init__(self, config: ConfigManager, logger=None) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.first_sequence = int(config.get("archive.first_sequence", 2))

    def validate_archive_root(self, scan_root: Path | str | None, archive_root: Path | str | None) -> None:
        if scan_root is None or not str(scan_root).strip() or not Path(scan_root).is_dir():
            raise ValidationError("Select a valid search directory first.")
        if archive_root is None or not str(archive_root).strip():
            raise ValidationError("Select an archive directory.")
        if path_utils.is_nested_inside(Path(archive_root), Path(scan_root)):
            raise ValidationError("Archive directory cannot be inside the search directory.")

    def compute_flat_destination(self, archive_root: Path, source_path: Path) -> Path:
        archive_root.mkdir(parents=True, exist_ok=True)
        file_name = source_path.name
        if not file_name:
            raise ValueError(f"Source path does not contain a valid file name: {source_path}")
        return self._make_unique_name(archive_root, file_name)

    def move_to_archive(self, source_path: Path, archive_root: Path) -> ArchiveCandidate:
        destination = self.compute_flat_destination(archive_root, source_path)
        result = file_ops.safe_move(source_path, destination, logger=self.logger)
        if not result.success:
            raise OSError(result.error_message)
        return ArchiveCandidate(
            source_path=source_path,
            archive_root=archive_root,
            destination_path=destination,
        )

    def archive_batch(
        self,
        paths: Iterable[Path],
        archive_root: Path,
        progress_callback: Optional[Callable[[ProgressEvent], None]] = None,
    ) -> BatchResult:
        result = BatchResult()
        handler = ErrorHandler()
        for index, source in enumerate(paths, start=1):
            try:
                candidate = self.move_to_archive(source, archive_root)
            except (OSError, ValueError) as exc:
                result.archive_failed += 1
                handler.add_warning(ARCHIVE_FAILED, str(exc), file_path=str(source))
                self.logger.warning(f"歸檔失敗: {source} ({exc})")
                status = "FAILED"
            else:
                result.archived += 1
                result.moved.append(candidate)
                status = "ARCHIVED"
            self._emit(progress_callback, "Archive", index, source, status)
        result.errors = handler.errors
        return result

    def purge_backup_files(
        self,
        paths: Iterable[Path],
        progress_callback: Optional[Callable[[ProgressEvent], None]] = None,
    ) -> BatchResult:
        result = BatchResult()
        handler = ErrorHandler()
        for index, path in enumerate(paths, start=1):
            outcome = file_ops.safe_trash(path, logger=self.logger)
            if outcome.success:
                result.deleted += 1
                status = "TRASHED"
            else:
                result.delete_failed += 1
                handler.add_warning(DELETE_FAILED, outcome.error_message or "", file_path=str(path))
                status = "FAILED"
            self._emit(progress_callback, "Purge", index, path, status)
        result.errors = handler.errors
        return result

    def _make_unique_name(self, directory: Path, file_name: str) -> Path:
        candidate = directory / file_name
        if not candidate.exists():
            return candidate
        stem, ext = os.path.splitext(file_name)
        seq = self.first_sequence
        while True:
            candidate = directory / f"{stem} ({seq}){ext}"
            if not candidate.exists():
                return candidate
            seq += 1

    def _emit(self, callback, phase_name: str, index: int, path: Path, status: str) -> None:
        if callback is None:
            return
        callback(
            ProgressEvent(
                event_type=ProgressEventType.FILE_DONE,
                phase_name=phase_name,
                current=index,
                path=str(path),
                status=status,
            )
        )
