"""清理摘要與結果報表輸出工具。"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable

from ..models import ProcessError, UnitDescriptor
from . import time_utils

RESULT_FIELDNAMES = [
    "location",
    "unit",
    "programFile",
    "programFileModified",
    "quickPanelFile",
    "quickPanelFileModified",
    "quarter",
]

ERROR_FIELDNAMES = ["code", "level", "file_path", "message"]


def ensure_report_dir(output_root: Path, dir_name: str = "REPORT") -> Path:
    report_dir = output_root / dir_name
    report_dir.mkdir(parents=True, exist_ok=True)
    return report_dir


def build_cleanup_summary_text(batch) -> str:
    lines = [
        "Cleanup complete.",
        f"Deleted bak files: {batch.deleted}, Failed: {batch.delete_failed}",
        f"Archived: {batch.archived}, Failed: {batch.archive_failed}",
    ]
    if batch.errors:
        lines.append("")
        lines.append("Errors:")
        for path, message in batch.failures:
            lines.append(f"{path} -> {message}")
    return "\n".join(lines)


def write_summary(report_dir: Path, batch) -> Path:
    summary_path = report_dir / "summary.txt"
    summary_path.write_text(build_cleanup_summary_text(batch) + "\n", encoding="utf-8")
    return summary_path


def write_errors_csv(report_dir: Path, errors: Iterable[ProcessError]) -> Path:
    report_path = report_dir / "errors.csv"
    with report_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=ERROR_FIELDNAMES)
        writer.writeheader()
        for error in errors:
            payload = error.to_dict()
            writer.writerow({field: payload.get(field) for field in ERROR_FIELDNAMES})
    return report_path


def write_results_csv(report_dir: Path, rows: Iterable[UnitDescriptor]) -> Path:
    report_path = report_dir / "results.csv"
    with report_path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.DictWriter(handle, fieldnames=RESULT_FIELDNAMES)
        writer.writeheader()
        for row in rows:
            writer.writerow(
                {
                    "location": row.location,
                    "unit": row.unit,
                    "programFile": row.program_file_display,
                    "programFileModified": time_utils.format_for_display(row.program_file_modified),
                    "quickPanelFile": row.secondary_file,
                    "quickPanelFileModified": time_utils.format_for_display(row.secondary_file_modified),
                    "quarter": row.quarter,
                }
            )
    return report_path


def format_result_row(row: UnitDescriptor) -> str:
    return "\t".join(
        [
            row.location,
            row.unit,
            row.program_file_display,
            time_utils.format_for_display(row.program_file_modified),
            row.secondary_file,
            time_utils.format_for_display(row.secondary_file_modified),
            row.quarter,
        ]
    )
