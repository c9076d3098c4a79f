"""工具模組。"""

from . import file_ops, path_classifier, path_utils, time_utils
from .cancel import CancelledError, CancellationToken

__all__ = [
    "file_ops",
    "path_classifier",
    "path_utils",
    "time_utils",
    "CancelledError",
    "CancellationToken",
]
