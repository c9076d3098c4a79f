"""資料模型模組。"""

from .app_settings import AppSettings
from .archive_candidate import ArchiveCandidate
from .error_record import ErrorLevel, ProcessError
from .progress_event import ProgressEvent, ProgressEventType
from .result_aggregate import ResultAggregate, note_key, sort_descriptors
from .unit_descriptor import (
    MULTIPLE_PROGRAM_FILES,
    MULTIPLE_SECONDARY_FILES,
    PROGRAM_FILE_NOT_FOUND,
    SECONDARY_FILE_NOT_FOUND,
    ProgramFile,
    ProgramFileKind,
    UnitDescriptor,
)

__all__ = [
    "AppSettings",
    "ArchiveCandidate",
    "ErrorLevel",
    "ProcessError",
    "ProgressEvent",
    "ProgressEventType",
    "ResultAggregate",
    "note_key",
    "sort_descriptors",
    "MULTIPLE_PROGRAM_FILES",
    "MULTIPLE_SECONDARY_FILES",
    "PROGRAM_FILE_NOT_FOUND",
    "SECONDARY_FILE_NOT_FOUND",
    "ProgramFile",
    "ProgramFileKind",
    "UnitDescriptor",
]
