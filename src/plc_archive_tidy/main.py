from __future__ import annotations

import argparse
from pathlib import Path
from typing import Optional

from . import __version__
from .config import ConfigManager
from .core import (
    CleanupPlan,
    FilterState,
    Pipeline,
    ResultIndex,
    Selection,
    StateStore,
    UnitInspector,
    UnitScaffolder,
    format_unit_details,
)
from .core.result_index import ALL_RESULTS
from .models import AppSettings
from .utils import reporting, time_utils
from .utils.cancel import CancelledError
from .utils.error_handler import ScanError, ValidationError
from .utils.logger import get_configured_logger


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    print(f"plc-archive-tidy v{__version__}")
    if args.command is None:
        parser.print_help()
        return 0

    config = ConfigManager(Path(args.config) if args.config else None)
    config_errors = config.validate_config()
    if config_errors:
        for error in config_errors:
            print(f"Config error: {error}")
        return 2

    logger = get_configured_logger("PlcArchiveTidy", config)
    store = StateStore(
        config,
        base_dir=Path(args.state_dir) if args.state_dir else None,
        logger=logger,
    )
    handlers = {
        "scan": _run_scan,
        "list": _run_list,
        "tree": _run_tree,
        "details": _run_details,
        "duplicates": _run_duplicates,
        "cleanup": _run_cleanup,
        "note": _run_note,
        "new-unit": _run_new_unit,
        "settings": _run_settings,
    }
    try:
        return handlers[args.command](args, config, store)
    except ValidationError as exc:
        print(f"Invalid input: {exc}")
        return 2
    except ScanError as exc:
        print(f"Search failed: {exc}")
        return 1
    except CancelledError as exc:
        print(f"Cancelled: {exc}")
        return 1


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="plc_archive_tidy")
    parser.add_argument("--config", help="Path to config file", default=None)
    parser.add_argument("--state-dir", help="Folder holding state.json and settings.json", default=None)

    subparsers = parser.add_subparsers(dest="command")

    scan = subparsers.add_parser("scan", help="Scan the program directory and replace results")
    scan.add_argument("--root", help="Program directory (defaults to the last search directory)")

    list_cmd = subparsers.add_parser("list", help="List stored results")
    list_cmd.add_argument("--location", help="Only this location")
    list_cmd.add_argument("--unit", help="Only this unit (requires --location)")
    predicate = list_cmd.add_mutually_exclusive_group()
    predicate.add_argument("--missing-mer", action="store_true", help="Rows without a MER file")
    predicate.add_argument("--missing-program", action="store_true", help="Rows without a program file")
    list_cmd.add_argument("--export", help="Write results.csv into this folder")

    subparsers.add_parser("tree", help="Show the Location/Unit tree")

    details = subparsers.add_parser("details", help="Show files of one unit")
    details.add_argument("--location", required=True)
    details.add_argument("--unit", required=True)

    duplicates = subparsers.add_parser("duplicates", help="Show folders with multiple files")
    duplicates.add_argument("--root", help="Program directory (defaults to the last search directory)")

    cleanup = subparsers.add_parser("cleanup", help="Trash bak files and archive duplicate program files")
    cleanup.add_argument("--root", help="Program directory (defaults to the last search directory)")
    cleanup.add_argument("--archive", help="Flat archive directory (defaults to the saved one)")
    cleanup.add_argument("--yes", action="store_true", help="Skip confirmation")
    cleanup.add_argument("--report", help="Write summary.txt and errors.csv into this folder")

    note = subparsers.add_parser("note", help="Show or edit a unit note")
    note.add_argument("--location", required=True)
    note.add_argument("--unit", required=True)
    note.add_argument("--set", dest="text", help="New note text")

    new_unit = subparsers.add_parser("new-unit", help="Create unit folder structure")
    new_unit.add_argument("--root", help="Program directory (defaults to the last search directory)")
    new_unit.add_argument("--location", required=True)
    new_unit.add_argument("units", nargs="+", help="Unit names")

    settings = subparsers.add_parser("settings", help="Show or change saved directories")
    settings.add_argument("--root")
    settings.add_argument("--archive")
    settings.add_argument("--json-dir")
    settings.add_argument("--decommission")

    return parser


def _resolve_root(value: Optional[str], settings: AppSettings) -> Path:
    root = value or settings.last_search_directory
    if not root or not root.strip():
        raise ValidationError("Select a valid search directory first.")
    return Path(root)


def _print_progress(event) -> None:
    if event.current and event.total and event.current == event.total:
        print(event.message)


def _run_scan(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    settings = store.load_settings()
    root = _resolve_root(args.root, settings)
    aggregate = store.load_aggregate()

    pipeline = Pipeline(config, store.logger)
    pipeline.scan(aggregate, root, progress_callback=_print_progress)
    store.save_aggregate(aggregate)
    settings.last_search_directory = str(root)
    store.save_settings(settings)
    print(f"Loaded {aggregate.results_count} results.")
    return 0


def _run_list(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    aggregate = store.load_aggregate()
    if args.unit and not args.location:
        raise ValidationError("--unit requires --location")
    if args.location and args.unit:
        selection = Selection.for_unit(args.location, args.unit)
    elif args.location:
        selection = Selection.for_location(args.location)
    else:
        selection = Selection.all()

    state = FilterState()
    if args.missing_mer:
        state.set_missing_secondary()
    elif args.missing_program:
        state.set_missing_program()

    rows = Pipeline(config, store.logger).filter(aggregate, selection, state)
    for row in rows:
        print(reporting.format_result_row(row))
    print(f"{len(rows)} row(s)")
    if args.export:
        report_path = reporting.write_results_csv(Path(args.export), rows)
        print(f"Report written to: {report_path}")
    return 0


def _run_tree(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    aggregate = store.load_aggregate()
    print(ALL_RESULTS)
    for location in ResultIndex(aggregate.results).build_tree():
        print(f"  {location.label}")
        for unit in location.units:
            print(f"    {unit.label}")
    return 0


def _run_details(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    aggregate = store.load_aggregate()
    details = UnitInspector(config, store.logger).inspect(aggregate, args.location, args.unit)
    for line in format_unit_details(details):
        print(line)
    return 0


def _run_duplicates(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    settings = store.load_settings()
    aggregate = store.load_aggregate()
    pipeline = Pipeline(config, store.logger)

    report = pipeline.detect_duplicates(aggregate)
    for group in report.groups:
        print(f"[Directory] {group.directory}")
        for path in group.files:
            print(f"  {path.name}\t{time_utils.format_for_display(time_utils.get_last_write_time(path))}")

    root_value = args.root or settings.last_search_directory
    if root_value and Path(root_value).is_dir():
        multiple = pipeline.detector.find_multiple_files(Path(root_value))
        if multiple.secondary_files:
            print("Multiple MER Files in Folders")
            for path in multiple.secondary_files:
                print(f"  {path}")
        if report.is_empty and multiple.is_empty:
            print("No duplicate program files or multiple MER files found.")
    elif report.is_empty:
        print("No duplicate program files found. Run scan to detect duplicates.")
    return 0


def _confirm_cleanup(plan: CleanupPlan) -> bool:
    print(f"bak files to trash: {len(plan.backup_files)}")
    for path in plan.backup_files:
        print(f"  {path}")
    print(f"Program files to archive: {len(plan.archive_files)}")
    for path in plan.archive_files:
        print(f"  {path}")
    answer = input("Proceed? [y/N] ")
    return answer.strip().lower() in {"y", "yes"}


def _run_cleanup(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    settings = store.load_settings()
    root = _resolve_root(args.root, settings)
    archive_value = args.archive or settings.archive_directory
    if not archive_value:
        raise ValidationError("Select an archive directory.")
    archive_root = Path(archive_value)
    aggregate = store.load_aggregate()

    pipeline = Pipeline(config, store.logger)
    result = pipeline.cleanup(
        aggregate,
        root,
        archive_root,
        confirm=None if args.yes else _confirm_cleanup,
    )
    if result.cancelled or result.batch is None:
        print("Cleanup cancelled.")
        return 0

    store.save_aggregate(aggregate)
    settings.last_search_directory = str(root)
    settings.archive_directory = str(archive_root)
    store.save_settings(settings)

    print(reporting.build_cleanup_summary_text(result.batch))
    if args.report:
        report_dir = reporting.ensure_report_dir(Path(args.report), str(config.get("report.dir_name", "REPORT")))
        reporting.write_summary(report_dir, result.batch)
        reporting.write_errors_csv(report_dir, result.batch.errors)
        print(f"Report written to: {report_dir}")
    if result.rescan_error is not None:
        print(f"Search failed: {result.rescan_error}")
        return 1
    return 1 if result.batch.has_failures else 0


def _run_note(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    aggregate = store.load_aggregate()
    if args.text is None:
        print(aggregate.get_note(args.location, args.unit))
        return 0
    aggregate.set_note(args.location, args.unit, args.text)
    store.save_aggregate(aggregate)
    print("Note saved.")
    return 0


def _run_new_unit(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    settings = store.load_settings()
    root = _resolve_root(args.root, settings)
    created = UnitScaffolder(config, store.logger).create_units(root, args.location, args.units)
    for path in created:
        print(f"Created: {path}")

    aggregate = store.load_aggregate()
    Pipeline(config, store.logger).scan(aggregate, root)
    store.save_aggregate(aggregate)
    print("Folder structure created.")
    return 0


def _run_settings(args: argparse.Namespace, config: ConfigManager, store: StateStore) -> int:
    settings = store.load_settings()
    changed = False
    for attr, value in (
        ("last_search_directory", args.root),
        ("archive_directory", args.archive),
        ("json_directory", args.json_dir),
        ("decommission_directory", args.decommission),
    ):
        if value and value.strip():
            setattr(settings, attr, value.strip())
            changed = True
    if changed:
        store.save_settings(settings)
    for key, value in settings.to_dict().items():
        print(f"{key}: {value or ''}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
