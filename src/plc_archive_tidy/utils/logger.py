"""日誌工具。"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

DEFAULT_LOG_FILE = "plc_archive_tidy.log"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def get_logger(
    name: str,
    log_file: Optional[Path] = None,
    level: str = "INFO",
) -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger

    resolved_level = logging.getLevelName(level.upper())
    if not isinstance(resolved_level, int):
        resolved_level = logging.INFO
    logger.setLevel(resolved_level)

    log_path = log_file or (Path.cwd() / DEFAULT_LOG_FILE)
    formatter = logging.Formatter(LOG_FORMAT)

    file_handler = logging.FileHandler(log_path, encoding="utf-8", delay=True)
    file_handler.setLevel(logging.WARNING)
    file_handler.setFormatter(formatter)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(resolved_level)
    stream_handler.setFormatter(formatter)

    logger.addHandler(file_handler)
    logger.addHandler(stream_handler)

    return logger


def get_configured_logger(name: str, config) -> logging.Logger:
    """依設定的等級與檔名建立 logger。"""
    log_name = str(config.get("logging.file", DEFAULT_LOG_FILE))
    return get_logger(
        name,
        log_file=Path.cwd() / log_name,
        level=str(config.get("logging.level", "INFO")),
    )
