"""安全檔案操作（move/trash）。"""

from __future__ import annotations

from dataclasses import dataclass
from functools import wraps
import os
import shutil
import time
from pathlib import Path
from typing import Any, Callable, Iterator, Optional

from send2trash import send2trash

from .logger import get_logger


@dataclass
class OperationResult:
    success: bool
    error_message: Optional[str] = None
    elapsed_time: float = 0.0
    value: Any = None


def safe_op(
    *,
    exceptions: Optional[tuple[type[BaseException], ...]] = None,
    logger=None,
) -> Callable:
    """包裝檔案操作：例外轉為失敗結果，不重試。"""

    resolved_exceptions = exceptions if exceptions is not None else (OSError,)
    op_logger = logger or get_logger("FileOps")

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> OperationResult:
            start_time = time.time()
            try:
                value = func(*args, **kwargs)
            except resolved_exceptions as exc:
                op_logger.warning("檔案操作失敗：%s", exc)
                return OperationResult(
                    success=False,
                    error_message=str(exc) or exc.__class__.__name__,
                    elapsed_time=time.time() - start_time,
                )
            return OperationResult(
                success=True,
                elapsed_time=time.time() - start_time,
                value=value,
            )

        return wrapper

    return decorator


def safe_move(src_path: Path, dst_path: Path, *, logger=None) -> OperationResult:
    op_logger = logger or get_logger("FileOps")

    @safe_op(logger=op_logger)
    def _move() -> Path:
        if not src_path.is_file():
            raise FileNotFoundError(f"Source file not found: {src_path}")
        if dst_path.exists():
            raise FileExistsError(f"Destination already exists: {dst_path}")
        shutil.move(str(src_path), str(dst_path))
        op_logger.info(f"ARCHIVED: {src_path} -> {dst_path}")
        return dst_path

    return _move()


def safe_trash(path: Path, *, logger=None) -> OperationResult:
    op_logger = logger or get_logger("FileOps")

    @safe_op(logger=op_logger)
    def _trash() -> Path:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")
        send2trash(str(path))
        op_logger.info(f"TRASHED: {path}")
        return path

    return _trash()


def list_files(directory: Path) -> list[Path]:
    """列出目錄下一層的檔案，依名稱（不分大小寫）排序。"""
    with os.scandir(directory) as entries:
        names = [entry.name for entry in entries if entry.is_file()]
    return [directory / name for name in sorted(names, key=str.upper)]


def walk_directories(root: Path) -> Iterator[tuple[Path, list[Path]]]:
    """由上而下列舉 root（含）下所有目錄與其檔案；列舉錯誤直接拋出。"""

    def _raise(exc: OSError) -> None:
        raise exc

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise):
        dirnames.sort(key=str.upper)
        current = Path(dirpath)
        yield current, [current / name for name in sorted(filenames, key=str.upper)]
