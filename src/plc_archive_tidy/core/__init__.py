"""核心流程模組。"""

from .archiver import ArchiveEngine, BatchResult
from .duplicate_detector import DuplicateDetector, DuplicateGroup, DuplicateReport, MultipleFilesReport
from .pipeline import CleanupPlan, CleanupResult, Pipeline
from .result_index import FilterState, LocationNode, ResultIndex, Selection, SelectionKind, UnitNode
from .scanner import DirectoryScanner, ScanResult
from .state_store import StateStore
from .unit_inspector import UnitDetails, UnitInspector, format_unit_details
from .unit_scaffold import UnitScaffolder

__all__ = [
    "ArchiveEngine",
    "BatchResult",
    "CleanupPlan",
    "CleanupResult",
    "DirectoryScanner",
    "DuplicateDetector",
    "DuplicateGroup",
    "DuplicateReport",
    "FilterState",
    "LocationNode",
    "MultipleFilesReport",
    "Pipeline",
    "ResultIndex",
    "ScanResult",
    "Selection",
    "SelectionKind",
    "StateStore",
    "UnitDetails",
    "UnitInspector",
    "UnitNode",
    "UnitScaffolder",
    "format_unit_details",
]
