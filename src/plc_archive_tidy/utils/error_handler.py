"""錯誤收集與報告工具。"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from ..models.error_record import ErrorLevel, ProcessError


class ValidationError(Exception):
    """輸入路徑不合法；任何檔案異動前即中止。"""

    code = "E-VALIDATION"


class ScanError(Exception):
    """目錄樹列舉失敗；整次掃描中止，既有結果不變。"""

    code = "E-SCAN"

    def __init__(self, root: str, cause: BaseException) -> None:
        super().__init__(f"掃描失敗: {root} ({cause})")
        self.root = root
        self.cause = cause


@dataclass
class ErrorHandler:
    """集中管理錯誤與警告。"""

    errors: List[ProcessError] = field(default_factory=list)

    def add(self, error: ProcessError) -> None:
        self.errors.append(error)

    def add_warning(self, code: str, message: str, file_path: Optional[str] = None) -> None:
        self.add(
            ProcessError(code=code, level=ErrorLevel.RECOVERABLE, message=message, file_path=file_path)
        )

    def add_fatal(self, code: str, message: str, file_path: Optional[str] = None) -> None:
        self.add(ProcessError(code=code, level=ErrorLevel.FATAL, message=message, file_path=file_path))

    def get_by_level(self, level: ErrorLevel) -> List[ProcessError]:
        return [error for error in self.errors if error.level == level]

    def get_by_code(self, code: str) -> List[ProcessError]:
        return [error for error in self.errors if error.code == code]

    def to_dicts(self) -> List[dict[str, object]]:
        return [error.to_dict() for error in self.errors]
