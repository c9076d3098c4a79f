"""state.json / settings.json 持久化。"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Optional

from ..config import ConfigManager
from ..models import AppSettings, ResultAggregate
from ..utils.logger import get_logger


def default_base_dir(dir_name: str) -> Path:
    appdata = os.environ.get("APPDATA")
    if appdata:
        return Path(appdata) / dir_name
    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / dir_name
    return Path.home() / ".config" / dir_name


def _read_json(path: Path) -> Any:
    with path.open("r", encoding="utf-8") as handle:
        return json.load(handle)


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    temp_path = path.with_name(path.name + ".tmp")
    with temp_path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, ensure_ascii=False, indent=2)
    temp_path.replace(path)


class StateStore:
    """結果與設定檔皆放在同一個 base 目錄下，可個別指定路徑覆寫。"""

    def __init__(
        self,
        config: Optional[ConfigManager] = None,
        *,
        base_dir: Optional[Path] = None,
        state_path: Optional[Path] = None,
        settings_path: Optional[Path] = None,
        logger=None,
    ) -> None:
        config = config or ConfigManager()
        self.logger = logger or get_logger(self.__class__.__name__)
        self.base_dir = base_dir or default_base_dir(str(config.get("state.dir_name", "GLACTPM")))
        self.state_path = state_path or self.base_dir / str(config.get("state.state_file", "state.json"))
        self.settings_path = settings_path or self.base_dir / str(
            config.get("state.settings_file", "settings.json")
        )

    def load_aggregate(self) -> ResultAggregate:
        if not self.state_path.exists():
            return ResultAggregate()
        try:
            data = _read_json(self.state_path)
            if isinstance(data, dict):
                return ResultAggregate.from_dict(data)
        except ValueError as exc:
            self.logger.warning(f"state 檔無法解析，改用空白狀態: {self.state_path} ({exc})")
            return ResultAggregate()
        self.logger.warning(f"state 檔格式不正確，改用空白狀態: {self.state_path}")
        return ResultAggregate()

    def save_aggregate(self, aggregate: ResultAggregate) -> Path:
        _write_json(self.state_path, aggregate.to_dict())
        return self.state_path

    def load_settings(self) -> AppSettings:
        if not self.settings_path.exists():
            return AppSettings()
        try:
            data = _read_json(self.settings_path)
        except ValueError as exc:
            self.logger.warning(f"settings 檔無法解析，改用預設值: {self.settings_path} ({exc})")
            return AppSettings()
        if not isinstance(data, dict):
            return AppSettings()
        return AppSettings.from_dict(data)

    def save_settings(self, settings: AppSettings) -> Path:
        _write_json(self.settings_path, settings.to_dict())
        return self.settings_path
