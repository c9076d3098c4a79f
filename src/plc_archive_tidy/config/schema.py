"""設定檔驗證邏輯。"""

from __future__ import annotations

import logging
from typing import Any


def _is_extension(value: Any) -> bool:
    return isinstance(value, str) and value.startswith(".") and len(value) > 1


def validate_config(config: dict[str, Any]) -> list[str]:
    errors: list[str] = []

    def add_error(path: str, message: str) -> None:
        errors.append(f"{path}: {message}")

    file_extensions = config.get("file_extensions", {})
    program_exts = file_extensions.get("program", [])
    secondary_ext = file_extensions.get("secondary", "")
    if not isinstance(program_exts, list) or not program_exts:
        add_error("file_extensions.program", "必須是非空清單")
    elif any(not _is_extension(item) for item in program_exts):
        add_error("file_extensions.program", "清單項目必須是以 . 開頭的副檔名")
    if not _is_extension(secondary_ext):
        add_error("file_extensions.secondary", "必須是以 . 開頭的副檔名")
    elif isinstance(program_exts, list) and any(
        isinstance(item, str) and item.lower() == secondary_ext.lower() for item in program_exts
    ):
        add_error("file_extensions.secondary", "不可與程式檔副檔名重複")

    backup = config.get("backup", {})
    marker = backup.get("marker", "bak")
    if not isinstance(marker, str) or not marker.strip():
        add_error("backup.marker", "必須是非空字串")

    archive = config.get("archive", {})
    first_sequence = archive.get("first_sequence", 2)
    if not isinstance(first_sequence, int) or isinstance(first_sequence, bool) or first_sequence < 2:
        add_error("archive.first_sequence", "必須是大於等於 2 的整數")

    state = config.get("state", {})
    for key in ("dir_name", "state_file", "settings_file"):
        value = state.get(key)
        if not isinstance(value, str) or not value.strip():
            add_error(f"state.{key}", "必須是非空字串")

    unit_template = config.get("unit_template", {})
    subfolders = unit_template.get("subfolders", [])
    if not isinstance(subfolders, list) or any(
        not isinstance(item, str) or not item.strip() for item in subfolders
    ):
        add_error("unit_template.subfolders", "必須是非空字串清單")

    logging_config = config.get("logging", {})
    level = logging_config.get("level", "INFO")
    if not isinstance(level, str) or not isinstance(logging.getLevelName(level.upper()), int):
        add_error("logging.level", "必須是有效的 logging 等級")
    log_file = logging_config.get("file", "")
    if not isinstance(log_file, str) or not log_file.strip():
        add_error("logging.file", "必須是非空字串")

    report = config.get("report", {})
    dir_name = report.get("dir_name", "REPORT")
    if not isinstance(dir_name, str) or not dir_name.strip():
        add_error("report.dir_name", "必須是非空字串")

    return errors
