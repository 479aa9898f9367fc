"""Command-line front end for the service-order tracker."""
import argparse
from pathlib import Path
from typing import Any, Dict, List, Optional

from pcctrack.core.logging import configure_logging
from pcctrack.core.models import DateType, Record, RecordFilter, StatusFilter
from pcctrack.core.utils import data_dir
from pcctrack.reporting.sinks import write_csv
from pcctrack.reporting.templates import build_invoice, build_statement, format_money, records_to_export_rows
from pcctrack.storage.json_store import JsonStore
from pcctrack.tracker import Tracker


def _add_record_fields(parser: argparse.ArgumentParser, passport_required: bool) -> None:
    parser.add_argument("--passport", required=passport_required, help="Passport / PCC number")
    parser.add_argument("--name", help="PCC holder name")
    parser.add_argument("--reference", help="Customer reference or mobile number")
    parser.add_argument("--total", help="Total fee (currency text allowed)")
    parser.add_argument("--paid", help="Amount paid in advance")
    parser.add_argument("--service-type", choices=["normal", "urgent"])
    parser.add_argument("--date", help="Entry date (YYYY-MM-DD); defaults to today")


def _add_filter_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--search", default="", help="Match passport, name, reference or serial")
    parser.add_argument(
        "--status",
        choices=[item.value.lower() for item in StatusFilter],
        default="all",
        help="'due' keeps records with a balance outstanding",
    )
    parser.add_argument("--date-type", choices=["entry", "delivery"], default="entry")
    parser.add_argument("--date", help="Exact date (YYYY-MM-DD) to match")


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI entry point."""

    parser = argparse.ArgumentParser(description="Track passport / PCC service orders")
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding the tracker's JSON documents (defaults to $PCC_DATA_DIR or ./data)",
    )
    parser.add_argument("--log-level", help="Logging level (defaults to $LOG_LEVEL or INFO)")
    commands = parser.add_subparsers(dest="command", required=True)

    add = commands.add_parser("add", help="Create a new record with the next serial")
    _add_record_fields(add, passport_required=True)

    edit = commands.add_parser("edit", help="Edit fields of an existing record")
    edit.add_argument("record", help="Record id or serial number")
    _add_record_fields(edit, passport_required=False)
    edit.add_argument("--received-by")

    deliver = commands.add_parser("deliver", help="Mark a record delivered")
    deliver.add_argument("record", help="Record id or serial number")
    deliver.add_argument("--clear-due", action="store_true", help="Settle the remaining balance")
    deliver.add_argument("--received-by", default="")
    deliver.add_argument("--date", help="Delivery date (YYYY-MM-DD); defaults to today")

    delete = commands.add_parser("delete", help="Permanently remove a record")
    delete.add_argument("record", help="Record id or serial number")

    listing = commands.add_parser("list", help="List records matching filters")
    _add_filter_args(listing)

    stats = commands.add_parser("stats", help="Show dashboard totals")
    stats.add_argument("--today", help="Override today's date (YYYY-MM-DD)")

    importer = commands.add_parser("import", help="Merge records from a spreadsheet")
    importer.add_argument("path", type=Path)
    importer.add_argument("--replace", action="store_true", help="Replace the working set instead of merging")

    restore = commands.add_parser("restore", help="Replace the working set from a JSON or spreadsheet backup")
    restore.add_argument("path", type=Path)

    export = commands.add_parser("export", help="Write a backup of all records")
    export.add_argument("--output-dir", type=Path, default=Path("output"))
    export.add_argument("--format", choices=["xlsx", "csv"], default="xlsx")

    invoice = commands.add_parser("invoice", help="Print invoice details for one record")
    invoice.add_argument("record", help="Record id or serial number")

    statement = commands.add_parser("statement", help="Print a statement for selected or filtered records")
    statement.add_argument("records", nargs="*", help="Record ids or serials; defaults to the filtered view")
    _add_filter_args(statement)

    profile = commands.add_parser("profile", help="Show or update the shop profile")
    profile.add_argument("--shop-name")
    profile.add_argument("--address")
    profile.add_argument("--phone")
    return parser


def _record_payload(args: argparse.Namespace) -> Dict[str, Any]:
    payload = {
        "pcc_number": args.passport,
        "pcc_holder_name": args.name,
        "customer_name": args.reference,
        "total_amount": args.total,
        "paid_amount": args.paid,
        "service_type": args.service_type,
        "entry_date": args.date,
        "received_by": getattr(args, "received_by", None),
    }
    return {key: value for key, value in payload.items() if value is not None}


def _record_filter(args: argparse.Namespace) -> RecordFilter:
    return RecordFilter(
        search_text=args.search,
        status_filter=StatusFilter(args.status.upper()),
        date_type=DateType(args.date_type.upper()),
        date_value=args.date,
    )


def _resolve(tracker: Tracker, reference: str) -> Optional[Record]:
    return tracker.get(reference) or tracker.find_by_serial(reference)


def _format_row(record: Record) -> str:
    return (
        f"#{record.serial_no:<5} {record.pcc_number:<12} {record.pcc_holder_name[:24]:<24} "
        f"{record.status.value:<9} {record.entry_date:<10} due {format_money(record.due_amount)}"
    )


def _print_records(records: List[Record]) -> None:
    for record in records:
        print(_format_row(record))
    print(f"{len(records)} record(s)")


def run(args: argparse.Namespace, tracker: Tracker) -> int:
    """Execute one parsed command against ``tracker``; returns an exit code."""

    if args.command == "add":
        record = tracker.add(_record_payload(args))
        print(f"Added #{record.serial_no} ({record.id})")
        return 0

    if args.command in {"edit", "deliver", "delete", "invoice"}:
        record = _resolve(tracker, args.record)
        if record is None:
            print(f"Record {args.record} not found")
            return 1
        if args.command == "edit":
            record = tracker.edit(record.id, _record_payload(args))
            print(_format_row(record))
        elif args.command == "deliver":
            record = tracker.deliver(
                record.id,
                clear_due=args.clear_due,
                received_by=args.received_by,
                delivery_date=args.date,
            )
            print(_format_row(record))
        elif args.command == "delete":
            tracker.delete(record.id)
            print(f"Deleted #{record.serial_no}")
        else:
            invoice = build_invoice(record, tracker.profile)
            for key, value in invoice.items():
                print(f"{key}: {value}")
        return 0

    if args.command == "list":
        _print_records(tracker.query(_record_filter(args)))
        return 0

    if args.command == "stats":
        for key, value in vars(tracker.stats(today=args.today)).items():
            print(f"{key}: {value}")
        return 0

    if args.command == "import":
        result = tracker.import_file(args.path, merge=not args.replace)
        for alert in result.alerts:
            print(alert)
        print(f"Imported {result.accepted} of {result.rows_read} rows")
        return 0 if result.ok else 1

    if args.command == "restore":
        result = tracker.restore_file(args.path)
        for alert in result.alerts:
            print(alert)
        if not result.ok:
            return 1
        print(f"Restored {result.accepted} records; next serial {tracker.next_serial_preview()}")
        return 0

    if args.command == "export":
        if args.format == "csv":
            target = args.output_dir / "records.csv"
            write_csv(records_to_export_rows(tracker.records), target)
        else:
            target = tracker.export_backup(args.output_dir)
        print(f"Wrote {target}")
        return 0

    if args.command == "statement":
        if args.records:
            selected = [_resolve(tracker, ref) for ref in args.records]
            records = tracker.select(record.id for record in selected if record is not None)
        else:
            records = tracker.query(_record_filter(args))
        statement = build_statement(records, tracker.profile)
        print(f"{statement['shop_name']} - STATEMENT {statement['date']}")
        for row in statement["rows"]:
            print(f"#{row['serial_no']:<5} {row['pcc_number']:<12} {row['status']:<9} {row['due']}")
        print(
            f"Files {statement['total_files']}  Completed {statement['completed']}  "
            f"Billed {statement['total_billed']}  Due {statement['total_due']}"
        )
        return 0

    if args.command == "profile":
        changes = {
            key: value
            for key, value in {"shop_name": args.shop_name, "address": args.address, "phone": args.phone}.items()
            if value is not None
        }
        profile = tracker.update_profile(**changes) if changes else tracker.profile
        for key, value in vars(profile).items():
            print(f"{key}: {value}")
        return 0

    return 2


def main(argv: Optional[List[str]] = None) -> int:
    """Entrypoint for running the tracker from the command line."""

    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)
    tracker = Tracker.open(JsonStore(args.data_dir or data_dir()))
    return run(args, tracker)


if __name__ == "__main__":
    raise SystemExit(main())
