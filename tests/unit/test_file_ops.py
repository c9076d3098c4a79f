import os
from pathlib import Path
from unittest.mock import patch

from plc_archive_tidy.utils import file_ops


def _fake_trash(path: str) -> None:
    os.remove(path)


def test_safe_move(tmp_path: Path) -> None:
    src = tmp_path / "source.ACD"
    dst = tmp_path / "archive" / "source.ACD"
    dst.parent.mkdir()
    src.write_text("hello", encoding="utf-8")

    result = file_ops.safe_move(src, dst)

    assert result.success is True
    assert result.value == dst
    assert dst.read_text(encoding="utf-8") == "hello"
    assert not src.exists()


def test_safe_move_missing_source(tmp_path: Path) -> None:
    result = file_ops.safe_move(tmp_path / "missing.ACD", tmp_path / "dest.ACD")

    assert result.success is False
    assert "Source file not found" in (result.error_message or "")


def test_safe_move_refuses_overwrite(tmp_path: Path) -> None:
    src = tmp_path / "source.ACD"
    dst = tmp_path / "dest.ACD"
    src.write_text("new", encoding="utf-8")
    dst.write_text("old", encoding="utf-8")

    result = file_ops.safe_move(src, dst)

    assert result.success is False
    assert dst.read_text(encoding="utf-8") == "old"
    assert src.exists()


def test_safe_move_reports_os_error(tmp_path: Path) -> None:
    src = tmp_path / "source.ACD"
    src.write_text("hello", encoding="utf-8")

    with patch(
        "plc_archive_tidy.utils.file_ops.shutil.move",
        side_effect=PermissionError("File in use"),
    ):
        result = file_ops.safe_move(src, tmp_path / "dest.ACD")

    assert result.success is False
    assert result.error_message == "File in use"
    assert src.exists()


def test_safe_trash(tmp_path: Path) -> None:
    target = tmp_path / "Main_bak.ACD"
    target.write_text("x", encoding="utf-8")

    with patch("plc_archive_tidy.utils.file_ops.send2trash", side_effect=_fake_trash) as trash:
        result = file_ops.safe_trash(target)

    assert result.success is True
    trash.assert_called_once_with(str(target))
    assert not target.exists()


def test_safe_trash_failure(tmp_path: Path) -> None:
    target = tmp_path / "Main_bak.ACD"
    target.write_text("x", encoding="utf-8")

    with patch(
        "plc_archive_tidy.utils.file_ops.send2trash",
        side_effect=OSError("Trash unavailable"),
    ):
        result = file_ops.safe_trash(target)

    assert result.success is False
    assert result.error_message == "Trash unavailable"
    assert target.exists()


def test_safe_trash_missing_file(tmp_path: Path) -> None:
    with patch("plc_archive_tidy.utils.file_ops.send2trash") as trash:
        result = file_ops.safe_trash(tmp_path / "gone.bak")

    assert result.success is False
    trash.assert_not_called()


def test_list_files_sorted_case_insensitive(tmp_path: Path) -> None:
    for name in ["b.ACD", "A.MER", "c.txt"]:
        (tmp_path / name).write_text("x", encoding="utf-8")
    (tmp_path / "sub").mkdir()

    names = [path.name for path in file_ops.list_files(tmp_path)]

    assert names == ["A.MER", "b.ACD", "c.txt"]


def test_walk_directories_includes_root(tmp_path: Path) -> None:
    (tmp_path / "b").mkdir()
    (tmp_path / "A" / "x").mkdir(parents=True)
    (tmp_path / "A" / "x" / "Main.ACD").write_text("x", encoding="utf-8")

    walked = list(file_ops.walk_directories(tmp_path))

    assert [path for path, _ in walked] == [
        tmp_path,
        tmp_path / "A",
        tmp_path / "A" / "x",
        tmp_path / "b",
    ]
    assert walked[2][1] == [tmp_path / "A" / "x" / "Main.ACD"]
