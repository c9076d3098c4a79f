"""路徑處理工具。"""

from __future__ import annotations

import os
from pathlib import Path


def relative_dir(root: Path, directory: Path) -> str:
    return os.path.relpath(directory, root)


def casefold_key(path: Path | str) -> str:
    return str(path).upper()


def is_nested_inside(child: Path, parent: Path) -> bool:
    """以完整絕對路徑做不分大小寫的前綴比對。"""
    full_child = str(child.expanduser().resolve())
    full_parent = str(parent.expanduser().resolve())
    return full_child.upper().startswith(full_parent.upper())
