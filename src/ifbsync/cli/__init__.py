"""Command-line interface for ifbsync."""

from __future__ import annotations

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from ifbsync.cli.progress import RichSyncProgress
from ifbsync.config import load_config
from ifbsync.contracts.exceptions import (
    AuthenticationError,
    ConfigError,
    DatasetLoadError,
    ProviderError,
    SyncError,
)
from ifbsync.contracts.sync import SyncResult
from ifbsync.sdk import IfbSync, load_dataset


def _package_version() -> str:
    try:
        return version("ifbsync")
    except PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ifbsync")
    parser.add_argument("--version", action="version", version=f"%(prog)s {_package_version()}")

    subparsers = parser.add_subparsers(dest="command", required=True)

    sync_parser = subparsers.add_parser("sync", help="Sync a local dataset into an iFormBuilder page")
    sync_parser.add_argument("--config", required=True, help="Path to ifbsync.json")
    sync_parser.add_argument("--data", required=True, help="Dataset file (.json or .csv)")
    sync_parser.add_argument("--form-name", required=True, help="Target page name (created if absent)")
    sync_parser.add_argument("--uid", required=True, help="Column that uniquely identifies a row")
    sync_parser.add_argument("--label", help="Label for a newly created page")
    sync_parser.add_argument("--no-update", dest="update", action="store_false", help="Do not update changed rows")
    sync_parser.add_argument("--delete", action="store_true", help="Delete remote rows missing from the dataset")
    sync_parser.add_argument("--dry-run", action="store_true", help="Report counts without writing anything")
    sync_parser.add_argument(
        "--datetime-column",
        action="append",
        default=[],
        metavar="COLUMN",
        help="Parse COLUMN as ISO-8601 datetimes (repeatable)",
    )
    sync_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    metadata_parser = subparsers.add_parser("metadata", help="Write a Markdown metadata report for a page")
    metadata_parser.add_argument("--config", required=True, help="Path to ifbsync.json")
    metadata_parser.add_argument("--page-id", required=True, type=int, help="Page to describe")
    metadata_parser.add_argument("--output", required=True, help="Output Markdown file")
    metadata_parser.add_argument("--no-subforms", dest="subforms", action="store_false", help="Skip subforms")
    metadata_parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    return parser


def _run_sync(args: argparse.Namespace) -> SyncResult:
    config = load_config(args.config)
    dataset = load_dataset(args.data, datetime_columns=args.datetime_column)
    with RichSyncProgress() as progress:
        result = IfbSync.from_config(config, progress=progress).sync_table(
            dataset,
            args.form_name,
            args.uid,
            label=args.label,
            update=args.update,
            delete=args.delete,
            dry_run=args.dry_run,
        )
    print(_format_summary(result, update=args.update, delete=args.delete))
    return result


def _run_metadata(args: argparse.Namespace) -> None:
    config = load_config(args.config)
    path = IfbSync.from_config(config).form_metadata(args.page_id, args.output, subforms=args.subforms)
    print(f"Metadata written to {path}")


def _format_summary(result: SyncResult, *, update: bool, delete: bool) -> str:
    mode = "dry-run" if result.dry_run else "apply"
    lines = [
        "",
        f"ifbsync - sync complete ({mode})",
        "",
        f"  Page:      {result.page_name} ({result.page_id}){' [created]' if result.page_created else ''}",
        f"  Fields:    {', '.join(result.fields)}",
        f"  Existing:  {result.remote_records} record(s)",
        f"  Inserted:  {result.inserted}",
    ]
    if update:
        lines.append(f"  Updated:   {result.updated}")
    if delete:
        lines.append(f"  Deleted:   {result.deleted}")
    if result.dry_run:
        lines.extend(["", "  [dry-run] No changes were made"])
    lines.append("")
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s %(message)s", stream=sys.stderr)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s", stream=sys.stderr)

    try:
        if args.command == "sync":
            _run_sync(args)
        elif args.command == "metadata":
            _run_metadata(args)
        return 0
    except (ConfigError, DatasetLoadError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 3
    except (AuthenticationError, ProviderError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 4
    except SyncError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 5
    except Exception as exc:  # pragma: no cover
        print(f"error: {exc}", file=sys.stderr)
        return 1
