"""使用者目錄設定（settings.json）。"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass
class AppSettings:
    last_search_directory: Optional[str] = None
    archive_directory: Optional[str] = None
    json_directory: Optional[str] = None
    decommission_directory: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {
            "LastSearchDirectory": self.last_search_directory,
            "ArchiveDirectory": self.archive_directory,
            "JsonDirectory": self.json_directory,
            "DecommissionDirectory": self.decommission_directory,
        }

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "AppSettings":
        def _value(key: str) -> Optional[str]:
            value = data.get(key)
            return str(value) if value else None

        return cls(
            last_search_directory=_value("LastSearchDirectory"),
            archive_directory=_value("ArchiveDirectory"),
            json_directory=_value("JsonDirectory"),
            decommission_directory=_value("DecommissionDirectory"),
        )
