"""時間戳處理工具。"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Optional

SENTINEL_MODIFIED = datetime.min


def get_last_write_time(path: Path) -> datetime:
    return datetime.fromtimestamp(path.stat().st_mtime)


def format_timestamp(value: datetime) -> str:
    return value.isoformat()


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value)


def format_optional(value: Optional[datetime]) -> Optional[str]:
    return format_timestamp(value) if value is not None else None


def parse_optional(value: Optional[str]) -> Optional[datetime]:
    if value is None or value == "":
        return None
    return parse_timestamp(value)


def format_for_display(value: Optional[datetime]) -> str:
    if value is None or value == SENTINEL_MODIFIED:
        return ""
    return value.strftime("%Y-%m-%d %H:%M:%S")

