import os
from pathlib import Path
from unittest.mock import patch

import pytest

from plc_archive_tidy.config import ConfigManager
from plc_archive_tidy.core import ArchiveEngine
from plc_archive_tidy.models import ProgressEventType
from plc_archive_tidy.models.error_record import ARCHIVE_FAILED, DELETE_FAILED
from plc_archive_tidy.utils.error_handler import ValidationError


def _write(path: Path, text: str = "x") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def _fake_trash(path: str) -> None:
    os.remove(path)


def test_compute_flat_destination_adds_counter(tmp_path: Path) -> None:
    archive_root = tmp_path / "archive"
    engine = ArchiveEngine(ConfigManager())

    first = engine.compute_flat_destination(archive_root, Path("/plc/North/Unit1/Main.ACD"))
    assert first == archive_root / "Main.ACD"
    _write(first)

    second = engine.compute_flat_destination(archive_root, Path("/plc/North/Unit2/Main.ACD"))
    assert second == archive_root / "Main (2).ACD"
    _write(second)

    third = engine.compute_flat_destination(archive_root, Path("/plc/South/Unit1/Main.ACD"))
    assert third == archive_root / "Main (3).ACD"


def test_compute_flat_destination_creates_archive_root(tmp_path: Path) -> None:
    archive_root = tmp_path / "new" / "archive"

    ArchiveEngine(ConfigManager()).compute_flat_destination(archive_root, Path("Main.RSS"))

    assert archive_root.is_dir()


def test_archive_batch_flattens_same_names(tmp_path: Path) -> None:
    sources = [
        _write(tmp_path / "plc" / "North" / "Unit1" / "Main.ACD", "one"),
        _write(tmp_path / "plc" / "North" / "Unit2" / "Main.ACD", "two"),
    ]
    archive_root = tmp_path / "archive"

    result = ArchiveEngine(ConfigManager()).archive_batch(sources, archive_root)

    assert result.archived == 2
    assert result.archive_failed == 0
    assert (archive_root / "Main.ACD").read_text(encoding="utf-8") == "one"
    assert (archive_root / "Main (2).ACD").read_text(encoding="utf-8") == "two"
    assert [candidate.source_path for candidate in result.moved] == sources
    assert not any(path.exists() for path in sources)


def test_archive_batch_continues_after_failure(tmp_path: Path) -> None:
    good = _write(tmp_path / "plc" / "Unit1" / "Good.ACD")
    missing = tmp_path / "plc" / "Unit1" / "Missing.ACD"
    events = []

    result = ArchiveEngine(ConfigManager()).archive_batch([missing, good], tmp_path / "archive", events.append)

    assert result.archived == 1
    assert result.archive_failed == 1
    assert len(result.errors) == 1
    assert result.errors[0].code == ARCHIVE_FAILED
    assert result.failures[0][0] == str(missing)
    assert result.has_failures is True
    assert [event.status for event in events] == ["FAILED", "ARCHIVED"]
    assert all(event.event_type == ProgressEventType.FILE_DONE for event in events)


def test_purge_backup_files(tmp_path: Path) -> None:
    first = _write(tmp_path / "Unit1" / "Main_bak.ACD")
    second = _write(tmp_path / "Unit1" / "Main.ACD.BAK")

    with patch("plc_archive_tidy.utils.file_ops.send2trash", side_effect=_fake_trash):
        result = ArchiveEngine(ConfigManager()).purge_backup_files([first, second])

    assert result.deleted == 2
    assert result.delete_failed == 0
    assert not first.exists()
    assert not second.exists()


def test_purge_backup_files_records_failures(tmp_path: Path) -> None:
    locked = _write(tmp_path / "Unit1" / "Locked_bak.ACD")
    free = _write(tmp_path / "Unit1" / "Free_bak.ACD")

    def _trash(path: str) -> None:
        if path == str(locked):
            raise PermissionError("File in use")
        os.remove(path)

    with patch("plc_archive_tidy.utils.file_ops.send2trash", side_effect=_trash):
        result = ArchiveEngine(ConfigManager()).purge_backup_files([locked, free])

    assert result.deleted == 1
    assert result.delete_failed == 1
    assert result.errors[0].code == DELETE_FAILED
    assert result.failures == [(str(locked), "File in use")]
    assert locked.exists()


def test_batch_merge() -> None:
    engine = ArchiveEngine(ConfigManager())
    merged = engine.purge_backup_files([]).merge(engine.archive_batch([], Path("unused")))

    assert (merged.deleted, merged.archived, merged.errors) == (0, 0, [])


def test_validate_archive_root(tmp_path: Path) -> None:
    scan_root = tmp_path / "plc"
    scan_root.mkdir()
    engine = ArchiveEngine(ConfigManager())

    engine.validate_archive_root(scan_root, tmp_path / "archive")

    with pytest.raises(ValidationError, match="inside the search directory"):
        engine.validate_archive_root(scan_root, scan_root / "Archive")
    with pytest.raises(ValidationError, match="archive directory"):
        engine.validate_archive_root(scan_root, "  ")
    with pytest.raises(ValidationError, match="valid search directory"):
        engine.validate_archive_root(tmp_path / "missing", tmp_path / "archive")


def test_validate_archive_root_uses_plain_prefix(tmp_path: Path) -> None:
    scan_root = tmp_path / "plc"
    scan_root.mkdir()

    with pytest.raises(ValidationError):
        ArchiveEngine(ConfigManager()).validate_archive_root(scan_root, tmp_path / "plc2")


def test_configured_first_sequence(tmp_path: Path) -> None:
    archive_root = tmp_path / "archive"
    _write(archive_root / "Main.ACD")
    config = ConfigManager()
    config.set("archive.first_sequence", 10)

    destination = ArchiveEngine(config).compute_flat_destination(archive_root, Path("Main.ACD"))

    assert destination == archive_root / "Main (10).ACD"
