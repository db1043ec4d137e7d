"""Ledger CLI entry points.
This module exposes production and delivery commands.
It maps argparse commands onto SDK calls and prints JSON results.
"""

from __future__ import annotations

import argparse
from dataclasses import replace
import json
from pathlib import Path
from typing import Any, Sequence

from core.config import LedgerConfig
from core.types import ReconciliationResult
from store.ledger_sdk import LedgerClient


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level CLI parser.

    Returns:
        Configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="ledger", description="Production and delivery ledger")
    parser.add_argument("--data-root", help="Override LEDGER_DATA_ROOT for this command")
    subparsers = parser.add_subparsers(dest="command", required=True)
    _add_production_list_command(subparsers)
    _add_production_summary_command(subparsers)
    _add_production_import_command(subparsers)
    _add_production_delete_command(subparsers)
    _add_production_migrate_command(subparsers)
    _add_delivery_recent_command(subparsers)
    _add_delivery_import_command(subparsers)
    _add_delivery_record_command(subparsers)
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the ledger CLI.

    Args:
        argv: Optional argument vector.

    Returns:
        Process exit code.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    client = _build_client(args.data_root)
    if args.command == "production-list":
        return _run_production_list_command(client, args)
    if args.command == "production-summary":
        return _run_production_summary_command(client)
    if args.command == "production-import":
        return _run_production_import_command(client, args)
    if args.command == "production-delete":
        return _run_production_delete_command(client, args)
    if args.command == "production-migrate":
        return _run_production_migrate_command(client, args)
    if args.command == "delivery-recent":
        return _run_delivery_recent_command(client, args)
    if args.command == "delivery-import":
        return _run_delivery_import_command(client, args)
    if args.command == "delivery-record":
        return _run_delivery_record_command(client, args)
    parser.error(f"Unsupported command: {args.command}")
    return 2


def _build_client(data_root: str | None) -> LedgerClient:
    """Build SDK client with optional data-root override.

    Args:
        data_root: Optional override path.

    Returns:
        Configured SDK client.
    """
    config = LedgerConfig.from_env()
    if data_root:
        config = replace(config, data_root=Path(data_root).expanduser().resolve())
    return LedgerClient(config)


def _print_json(payload: object) -> None:
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def _reconciliation_counts(result: ReconciliationResult) -> dict[str, object]:
    return {
        "added": len(result.added),
        "updated": len(result.updated),
        "unchanged": len(result.unchanged),
        "errors": [failure.to_dict() for failure in result.errors],
    }


def _run_production_list_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Handle production-list command."""
    if args.date:
        records = client.production.get_by_date(args.date)
    else:
        records = client.production.get_all()
    _print_json(records)
    return 0


def _run_production_summary_command(client: LedgerClient) -> int:
    """Handle production-summary command."""
    _print_json([summary.to_dict() for summary in client.production.get_grouped_by_date()])
    return 0


def _run_production_import_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Handle production-import command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = client.import_production_file(args.source)
    _print_json(_reconciliation_counts(result))
    return 0


def _run_production_delete_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Handle production-delete command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    store = client.production
    if args.all:
        result = store.delete_all()
    elif args.ids:
        result = store.delete_by_ids(args.ids)
    else:
        result = store.delete_by_dates(args.dates)
    _print_json(result.to_dict())
    return 0


def _run_production_migrate_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Handle production-migrate command.

    Args:
        client: SDK client.
        args: Parsed CLI args.

    Returns:
        Exit code.
    """
    result = client.migrate_legacy_file(args.source, reconcile=args.reconcile)
    if isinstance(result, ReconciliationResult):
        _print_json(_reconciliation_counts(result))
    else:
        _print_json(result.to_dict())
    return 0


def _run_delivery_recent_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Handle delivery-recent command."""
    _print_json(client.delivery.get_recent_days(args.days))
    return 0


def _run_delivery_import_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Handle delivery-import command."""
    result = client.import_delivery_file(args.source)
    _print_json(result.to_dict())
    return 0


def _run_delivery_record_command(client: LedgerClient, args: argparse.Namespace) -> int:
    """Handle delivery-record command."""
    entries = [{"hour": args.hour, "quantity": args.quantity}]
    _print_json(client.record_delivery_hours(entries, iso_date=args.date))
    return 0


def _add_production_list_command(subparsers: Any) -> None:
    """Register production-list subcommand."""
    parser = subparsers.add_parser("production-list", help="List production records")
    parser.add_argument("--date", help="Only records of this date")


def _add_production_summary_command(subparsers: Any) -> None:
    """Register production-summary subcommand."""
    subparsers.add_parser("production-summary", help="Per-date record counts and totals")


def _add_production_import_command(subparsers: Any) -> None:
    """Register production-import subcommand."""
    parser = subparsers.add_parser(
        "production-import",
        help="Reconcile a production sheet against stored records",
    )
    parser.add_argument("source", help="Sheet file (.xlsx, .csv, .txt, .tsv)")


def _add_production_delete_command(subparsers: Any) -> None:
    """Register production-delete subcommand."""
    parser = subparsers.add_parser("production-delete", help="Delete production records")
    target = parser.add_mutually_exclusive_group(required=True)
    target.add_argument("--id", dest="ids", nargs="+", help="Record ids to delete")
    target.add_argument("--date", dest="dates", nargs="+", help="Dates to delete")
    target.add_argument("--all", action="store_true", help="Delete every record")


def _add_production_migrate_command(subparsers: Any) -> None:
    """Register production-migrate subcommand."""
    parser = subparsers.add_parser(
        "production-migrate",
        help="Load a sheet in the older line/sequence batch layout",
    )
    parser.add_argument("source", help="Sheet file (.xlsx, .csv, .txt, .tsv)")
    parser.add_argument(
        "--reconcile",
        action="store_true",
        help="Only write batches whose compared fields changed",
    )


def _add_delivery_recent_command(subparsers: Any) -> None:
    """Register delivery-recent subcommand."""
    parser = subparsers.add_parser("delivery-recent", help="Show the latest delivery days")
    parser.add_argument("--days", type=int, help="Number of days, LEDGER_RECENT_DAYS by default")


def _add_delivery_import_command(subparsers: Any) -> None:
    """Register delivery-import subcommand."""
    parser = subparsers.add_parser("delivery-import", help="Import a delivery export")
    parser.add_argument("source", help="Delimited text (per-date overwrite) or .xlsx (full replace)")


def _add_delivery_record_command(subparsers: Any) -> None:
    """Register delivery-record subcommand."""
    parser = subparsers.add_parser(
        "delivery-record",
        help="Record a cumulative quantity at an hour boundary",
    )
    parser.add_argument("--hour", type=int, required=True, help="Hour of day, 0-23")
    parser.add_argument("--quantity", type=int, required=True, help="Cumulative quantity")
    parser.add_argument("--date", help="Day in YYYY-MM-DD form, today by default")
