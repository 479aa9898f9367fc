"""Row and document shapes handed to export and print collaborators.

Nothing here changes a record; it only flattens records, the shop profile and
precomputed totals into plain dictionaries.
"""
from __future__ import annotations

from typing import Any, Dict, Iterable, List

from pcctrack.core.models import BusinessProfile, Record
from pcctrack.core.normalize import today_iso
from pcctrack.core.stats import summarize

CURRENCY_PREFIX = "TK"

EXPORT_HEADERS = [
    "SL",
    "Passport",
    "Name",
    "Reference",
    "Total",
    "Paid",
    "Due",
    "Status",
    "Date",
    "Receiver",
]


def _clean_text(value: str | None) -> str:
    if not value:
        return ""
    return " ".join(value.split())


def format_money(value: float) -> str:
    """``TK 12,500`` style label; decimals only when the amount has them."""

    if float(value).is_integer():
        return f"{CURRENCY_PREFIX} {value:,.0f}"
    return f"{CURRENCY_PREFIX} {value:,.2f}"


def record_to_export_row(record: Record) -> Dict[str, Any]:
    """Convert a record into a backup spreadsheet row.

    The headers resolve back through the import alias table, so a backup can
    be restored with the regular import path.
    """

    return {
        "SL": record.serial_no,
        "Passport": record.pcc_number,
        "Name": _clean_text(record.pcc_holder_name),
        "Reference": _clean_text(record.customer_name),
        "Total": record.total_amount,
        "Paid": record.paid_amount,
        "Due": record.due_amount,
        "Status": record.status.value,
        "Date": record.entry_date,
        "Receiver": _clean_text(record.received_by) or "N/A",
    }


def records_to_export_rows(records: Iterable[Record]) -> List[Dict[str, Any]]:
    return [record_to_export_row(record) for record in records]


def _shop_header(profile: BusinessProfile) -> Dict[str, str]:
    return {"shop_name": profile.shop_name, "address": profile.address, "phone": profile.phone}


def build_invoice(record: Record, profile: BusinessProfile) -> Dict[str, Any]:
    """Single-order invoice data."""

    return {
        **_shop_header(profile),
        "serial_no": record.serial_no,
        "pcc_number": record.pcc_number,
        "pcc_holder_name": record.pcc_holder_name,
        "reference": record.customer_name or "N/A",
        "entry_date": record.entry_date,
        "status": record.status.value.upper(),
        "service_type": record.service_type.value,
        "received_by": record.received_by or "PENDING",
        "total": format_money(record.total_amount),
        "paid": format_money(record.paid_amount),
        "due": format_money(record.due_amount),
        "balance_label": "PAID" if record.due_amount == 0 else "DUE",
    }


def build_statement(
    records: Iterable[Record],
    profile: BusinessProfile,
    today: str | None = None,
) -> Dict[str, Any]:
    """Batch statement: one row per record plus aggregate totals."""

    records = list(records)
    stats = summarize(records, today=today)
    rows = [
        {
            "serial_no": record.serial_no,
            "pcc_holder_name": record.pcc_holder_name,
            "pcc_number": record.pcc_number,
            "reference": record.customer_name or "N/A",
            "entry_date": record.entry_date,
            "status": "COLLECTED" if record.is_delivered else "PENDING",
            "due": format_money(record.due_amount),
        }
        for record in records
    ]
    return {
        **_shop_header(profile),
        "date": today or today_iso(),
        "total_files": stats.total_records,
        "completed": stats.total_delivered,
        "total_billed": format_money(stats.total_billed_amount),
        "total_due": format_money(stats.total_due_amount),
        "total_due_amount": stats.total_due_amount,
        "rows": rows,
    }
