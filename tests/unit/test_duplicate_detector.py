import os
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from plc_archive_tidy.config import ConfigManager
from plc_archive_tidy.core import DirectoryScanner, DuplicateDetector
from plc_archive_tidy.models import ResultAggregate
from plc_archive_tidy.utils.error_handler import ScanError, ValidationError


def _write(path: Path, modified: datetime | None = None) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("x", encoding="utf-8")
    if modified is not None:
        stamp = modified.timestamp()
        os.utime(path, (stamp, stamp))
    return path


def _scanned(root: Path) -> ResultAggregate:
    aggregate = ResultAggregate()
    aggregate.replace_results(DirectoryScanner(ConfigManager()).scan(root).results)
    return aggregate


def test_single_program_never_flagged(tmp_path: Path) -> None:
    _write(tmp_path / "North" / "Unit1" / "Main.ACD")
    _write(tmp_path / "North" / "Unit1" / "Main_bak.ACD")
    _write(tmp_path / "North" / "Unit1" / "Panel.MER")

    report = DuplicateDetector(ConfigManager()).detect(_scanned(tmp_path))

    assert report.is_empty
    assert report.candidates == []


def test_multiple_programs_flagged_oldest_first(tmp_path: Path) -> None:
    unit_dir = tmp_path / "North" / "Unit1"
    newer = _write(unit_dir / "A.ACD", datetime(2025, 6, 1))
    older = _write(unit_dir / "B.RSS", datetime(2024, 6, 1))
    _write(tmp_path / "North" / "Unit2" / "Only.ACD")

    report = DuplicateDetector(ConfigManager()).detect(_scanned(tmp_path))

    assert len(report.groups) == 1
    assert report.groups[0].directory == unit_dir
    assert report.candidates == [older, newer]


def test_detect_reads_disk_not_display_text(tmp_path: Path) -> None:
    unit_dir = tmp_path / "North" / "Unit1"
    _write(unit_dir / "A.ACD")
    _write(unit_dir / "B.ACD")
    aggregate = _scanned(tmp_path)
    (unit_dir / "B.ACD").unlink()

    report = DuplicateDetector(ConfigManager()).detect(aggregate)

    assert report.is_empty


def test_detect_skips_vanished_directory(tmp_path: Path) -> None:
    unit_dir = tmp_path / "North" / "Unit1"
    _write(unit_dir / "A.ACD")
    _write(unit_dir / "B.ACD")
    aggregate = _scanned(tmp_path)
    for path in unit_dir.iterdir():
        path.unlink()
    unit_dir.rmdir()

    assert DuplicateDetector(ConfigManager()).detect(aggregate).is_empty


def test_find_backup_files(tmp_path: Path) -> None:
    first = _write(tmp_path / "North" / "Unit1" / "Main_BAK.ACD")
    second = _write(tmp_path / "South" / "notes.bak")
    _write(tmp_path / "South" / "back.ACD")

    backups = DuplicateDetector(ConfigManager()).find_backup_files(tmp_path)

    assert backups == [first, second]


def test_find_multiple_files(tmp_path: Path) -> None:
    mer_dir = tmp_path / "North" / "Unit1"
    first_mer = _write(mer_dir / "A.MER")
    second_mer = _write(mer_dir / "b.mer")
    _write(tmp_path / "North" / "Unit2" / "Only.MER")
    acd_a = _write(tmp_path / "South" / "Unit1" / "A.ACD")
    acd_b = _write(tmp_path / "South" / "Unit1" / "B.ACD")

    report = DuplicateDetector(ConfigManager()).find_multiple_files(tmp_path)

    assert report.secondary_files == [first_mer, second_mer]
    assert report.program_files == [acd_a, acd_b]
    assert not report.is_empty


def test_walks_reject_missing_root(tmp_path: Path) -> None:
    detector = DuplicateDetector(ConfigManager())

    with pytest.raises(ValidationError):
        detector.find_backup_files(tmp_path / "missing")
    with pytest.raises(ValidationError):
        detector.find_multiple_files(tmp_path / "missing")


def test_walk_errors_raise_scan_error(tmp_path: Path) -> None:
    _write(tmp_path / "North" / "Unit1" / "A.MER")
    detector = DuplicateDetector(ConfigManager())

    with patch(
        "plc_archive_tidy.utils.file_ops.walk_directories",
        side_effect=PermissionError("Access denied"),
    ):
        with pytest.raises(ScanError):
            detector.find_backup_files(tmp_path)
        with pytest.raises(ScanError):
            detector.find_multiple_files(tmp_path)
