"""Pipeline coordinator for scan, filter and cleanup."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from ..config import ConfigManager
from ..models import ProgressEvent, ResultAggregate, UnitDescriptor
from ..utils.cancel import CancellationToken, CancelledError
from ..utils.error_handler import ScanError
from ..utils.logger import get_logger
from .archiver import ArchiveEngine, BatchResult
from .duplicate_detector import DuplicateDetector, DuplicateReport
from .result_index import FilterState, ResultIndex, Selection
from .scanner import DirectoryScanner, ScanResult


@dataclass
class CleanupPlan:
    scan_root: Path
    archive_root: Path
    backup_files: List[Path]
    duplicates: DuplicateReport

    @property
    def archive_files(self) -> List[Path]:
        return self.duplicates.candidates

    @property
    def is_empty(self) -> bool:
        return not self.backup_files and self.duplicates.is_empty


@dataclass
class CleanupResult:
    plan: CleanupPlan
    batch: Optional[BatchResult]
    cancelled: bool
    rescan: Optional[ScanResult] = None
    rescan_error: Optional[Exception] = None


class Pipeline:
    def __init__(self, config: ConfigManager, logger=None) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.scanner = DirectoryScanner(config, self.logger)
        self.detector = DuplicateDetector(config, self.logger)
        self.archiver = ArchiveEngine(config, self.logger)

    def scan(
        self,
        aggregate: ResultAggregate,
        root: Path,
        *,
        progress_callback: Optional[Callable[[ProgressEvent], None]] = None,
        cancel_token: Optional[CancellationToken] = None,
    ) -> ScanResult:
        # 掃描完整成功後才取代結果；失敗時 aggregate 保持原狀
        result = self.scanner.scan(root, progress_callback=progress_callback, cancel_token=cancel_token)
        aggregate.replace_results(result.results)
        return result

    def filter(
        self,
        aggregate: ResultAggregate,
        selection: Optional[Selection] = None,
        state: Optional[FilterState] = None,
    ) -> List[UnitDescriptor]:
        return ResultIndex(aggregate.results).filter(selection, state)

    def detect_duplicates(self, aggregate: ResultAggregate) -> DuplicateReport:
        return self.detector.detect(aggregate)

    def archive_batch(
        self,
        candidates: List[Path],
        archive_root: Path,
        progress_callback: Optional[Callable[[ProgressEvent], None]] = None,
    ) -> BatchResult:
        return self.archiver.archive_batch(candidates, archive_root, progress_callback)

    def purge_backups(
        self,
        root: Path,
        progress_callback: Optional[Callable[[ProgressEvent], None]] = None,
    ) -> BatchResult:
        return self.archiver.purge_backup_files(self.detector.find_backup_files(root), progress_callback)

    def plan_cleanup(self, aggregate: ResultAggregate, scan_root: Path, archive_root: Path) -> CleanupPlan:
        self.archiver.validate_archive_root(scan_root, archive_root)
        return CleanupPlan(
            scan_root=scan_root,
            archive_root=archive_root,
            backup_files=self.detector.find_backup_files(scan_root),
            duplicates=self.detector.detect(aggregate),
        )

    def cleanup(
        self,
        aggregate: ResultAggregate,
        scan_root: Path,
        archive_root: Path,
        *,
        confirm: Optional[Callable[[CleanupPlan], bool]] = None,
        progress_callback: Optional[Callable[[ProgressEvent], None]] = None,
    ) -> CleanupResult:
        plan = self.plan_cleanup(aggregate, scan_root, archive_root)
        if confirm is not None and not confirm(plan):
            self.logger.info("使用者取消清理")
            return CleanupResult(plan=plan, batch=None, cancelled=True)

        purged = self.archiver.purge_backup_files(plan.backup_files, progress_callback)
        archived = self.archiver.archive_batch(plan.archive_files, archive_root, progress_callback)
        batch = purged.merge(archived)
        self.logger.info(
            f"清理完成：刪除 {batch.deleted}（失敗 {batch.delete_failed}），"
            f"歸檔 {batch.archived}（失敗 {batch.archive_failed}）"
        )

        try:
            rescan = self.scan(aggregate, scan_root, progress_callback=progress_callback)
        except (ScanError, CancelledError) as exc:
            # 檔案已異動；保留批次結果，結果清單維持舊值
            self.logger.error(f"清理後重新掃描失敗: {scan_root} ({exc})")
            return CleanupResult(plan=plan, batch=batch, cancelled=False, rescan_error=exc)
        return CleanupResult(plan=plan, batch=batch, cancelled=False, rescan=rescan)
