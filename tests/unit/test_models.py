from datetime import datetime
from pathlib import Path

from plc_archive_tidy.models import (
    MULTIPLE_PROGRAM_FILES,
    PROGRAM_FILE_NOT_FOUND,
    SECONDARY_FILE_NOT_FOUND,
    ArchiveCandidate,
    ErrorLevel,
    ProcessError,
    ProgramFile,
    ProgramFileKind,
    ResultAggregate,
    UnitDescriptor,
    note_key,
)
from plc_archive_tidy.utils.time_utils import SENTINEL_MODIFIED


def _make_row(program_file: ProgramFile, count: int, **overrides) -> UnitDescriptor:
    values = dict(
        location="North",
        unit="Unit1",
        program_file=program_file,
        program_file_modified=datetime(2025, 7, 1, 8, 30),
        secondary_file="Panel.MER",
        secondary_file_modified=datetime(2025, 6, 30, 12, 0),
        quarter="25-Q3",
        directory_path="/plant/North/Unit1",
        program_count=count,
    )
    values.update(overrides)
    return UnitDescriptor(**values)


def test_program_file_display_variants() -> None:
    assert ProgramFile.single("Main.ACD").display == "Main.ACD"
    assert ProgramFile.single("Main.ACD", backup_count=1).display == "Main.ACD (plus 1 bak file)"
    assert ProgramFile.multiple(3, backup_count=2).display == f"{MULTIPLE_PROGRAM_FILES} (plus 2 bak files)"
    assert ProgramFile.missing().display == PROGRAM_FILE_NOT_FOUND


def test_program_file_from_display_recovers_variant() -> None:
    single = ProgramFile.from_display("Main.ACD (plus 2 bak files)", 1)
    assert single.kind == ProgramFileKind.SINGLE
    assert single.name == "Main.ACD"
    assert single.backup_count == 2
    assert single.label is None

    multiple = ProgramFile.from_display(MULTIPLE_PROGRAM_FILES, 4)
    assert multiple.kind == ProgramFileKind.MULTIPLE
    assert multiple.filename is None

    missing = ProgramFile.from_display(PROGRAM_FILE_NOT_FOUND, 0)
    assert missing.kind == ProgramFileKind.MISSING


def test_program_file_keeps_unrecognized_label() -> None:
    legacy = ProgramFile.from_display("Main.ACD [2 in folder]", 2)

    assert legacy.kind == ProgramFileKind.MULTIPLE
    assert legacy.display == "Main.ACD [2 in folder]"
    assert legacy.filename is None


def test_single_program_path_strips_count_suffix() -> None:
    row = _make_row(ProgramFile.from_display("Main.ACD [1 in folder]", 1), 1)

    assert row.program_file_display == "Main.ACD [1 in folder]"
    assert row.program_path == Path("/plant/North/Unit1") / "Main.ACD"


def test_multiple_row_has_no_program_path() -> None:
    row = _make_row(ProgramFile.multiple(2), 2)
    assert row.program_path is None


def test_unit_descriptor_serialization() -> None:
    row = _make_row(ProgramFile.single("Main.ACD"), 1)
    data = row.to_dict()

    assert data["programFile"] == "Main.ACD"
    assert data["programFileModified"] == "2025-07-01T08:30:00"
    assert data["quickPanelFileModified"] == "2025-06-30T12:00:00"
    assert data["programCountInDir"] == 1
    assert UnitDescriptor.from_dict(data).to_dict() == data


def test_missing_program_row_serialization() -> None:
    row = _make_row(
        ProgramFile.missing(),
        0,
        program_file_modified=SENTINEL_MODIFIED,
        secondary_file=SECONDARY_FILE_NOT_FOUND,
        secondary_file_modified=None,
        quarter="",
    )
    data = row.to_dict()

    assert data["quickPanelFileModified"] is None
    restored = UnitDescriptor.from_dict(data)
    assert restored.program_file_modified == SENTINEL_MODIFIED
    assert restored.program_file.kind == ProgramFileKind.MISSING


def test_aggregate_notes_survive_result_replacement() -> None:
    aggregate = ResultAggregate()
    aggregate.set_note("North", "Unit1", "swap CPU in Q4")
    aggregate.replace_results([_make_row(ProgramFile.single("Main.ACD"), 1)])
    aggregate.replace_results([])

    assert aggregate.results_count == 0
    assert aggregate.has_notes
    assert aggregate.get_note("North", "Unit1") == "swap CPU in Q4"
    assert aggregate.get_note("North", "Unit2") == ""
    assert note_key("North", "Unit1") == "North::Unit1"


def test_archive_candidate_and_error_serialization() -> None:
    candidate = ArchiveCandidate(
        source_path=Path("a/Main.ACD"),
        archive_root=Path("archive"),
        destination_path=Path("archive/Main (2).ACD"),
    )
    assert candidate.to_dict()["destination_path"].endswith("Main (2).ACD")

    error = ProcessError(
        code="W-ARCHIVE",
        level=ErrorLevel.RECOVERABLE,
        message="Permission denied",
        file_path="locked.ACD",
    )
    assert error.to_dict()["level"] == "W"
