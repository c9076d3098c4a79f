"""新增單元資料夾結構。"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List

from ..config import ConfigManager
from ..utils.error_handler import ValidationError
from ..utils.logger import get_logger


class UnitScaffolder:
    def __init__(self, config: ConfigManager, logger=None) -> None:
        self.logger = logger or get_logger(self.__class__.__name__)
        self.subfolders = [str(item) for item in config.get("unit_template.subfolders", [])]

    def create_units(self, root: Path | str | None, location: str, unit_names: Iterable[str]) -> List[Path]:
        if root is None or not str(root).strip() or not Path(root).is_dir():
            raise ValidationError("Please choose a valid Program Directory first.")
        if not location or not location.strip():
            raise ValidationError("Location name is required.")

        created: List[Path] = []
        for name in unit_names:
            if not name or not name.strip():
                continue
            unit_path = Path(root) / location.strip() / name.strip()
            unit_path.mkdir(parents=True, exist_ok=True)
            for subfolder in self.subfolders:
                (unit_path / subfolder).mkdir(exist_ok=True)
            created.append(unit_path)
            self.logger.info(f"已建立單元資料夾: {unit_path}")
        return created
