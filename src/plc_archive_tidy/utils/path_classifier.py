"""檔名與路徑分類規則（純函式）。"""

from __future__ import annotations

import os
import re
from datetime import datetime
from pathlib import PurePath
from typing import Iterable, Tuple

BACKUP_MARKER = "bak"
COUNT_SUFFIX_START = " ["
COUNT_SUFFIX_END = " in folder]"

_SEPARATORS = re.compile(r"[\\/]")


def has_extension(path: str | os.PathLike[str], ext: str) -> bool:
    return PurePath(path).suffix.lower() == ext.lower()


def is_backup_file(path: str | os.PathLike[str], marker: str = BACKUP_MARKER) -> bool:
    # 只看檔名，不限於副檔名位置
    return marker.lower() in PurePath(path).name.lower()


def is_program_file(
    path: str | os.PathLike[str],
    extensions: Iterable[str],
    marker: str = BACKUP_MARKER,
) -> bool:
    if is_backup_file(path, marker):
        return False
    return any(has_extension(path, ext) for ext in extensions)


def extract_location_unit(relative_dir: str) -> Tuple[str, str]:
    if not relative_dir:
        return "", ""
    parts = [part for part in _SEPARATORS.split(relative_dir) if part and part != "."]
    location = parts[0] if len(parts) >= 1 else ""
    unit = parts[1] if len(parts) >= 2 else ""
    return location, unit


def to_quarter(timestamp: datetime) -> str:
    quarter = ((timestamp.month - 1) // 3) + 1
    return f"{timestamp.year % 100:02d}-Q{quarter}"


def strip_count_suffix(display: str) -> str:
    """還原 "name [N in folder]" 形式的顯示字串。

    僅適用於資料夾內只有一個程式檔的列；多檔列的顯示字串不含檔名。
    """
    idx = display.rfind(COUNT_SUFFIX_START)
    if idx > 0 and display.lower().endswith(COUNT_SUFFIX_END):
        return display[:idx]
    return display
