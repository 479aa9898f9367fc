"""Header alias table for loosely structured spreadsheet rows.

Each canonical field lists the column headers it may appear under, in
priority order. Headers are compared case-insensitively after trimming.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple

FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "total_amount": ("total", "fee", "amount", "totalamount"),
    "paid_amount": ("paid", "paid amount", "advance", "paidamount"),
    "pcc_number": ("passport", "pcc number", "passport number", "pccnumber"),
    "status": ("status", "delivery status"),
    "serial_no": ("sl", "serial", "id", "serialno"),
    "pcc_holder_name": ("name", "holder name", "client name", "pccholdername"),
    "customer_name": ("reference", "customer", "mobile", "customername"),
    "received_by": ("receiver", "received by", "receivedby"),
    "entry_date": ("date", "entry date", "entrydate"),
}


@dataclass(frozen=True)
class ResolvedRow:
    """Raw cell values keyed by canonical field; ``None`` when no alias matched."""

    total_amount: Any = None
    paid_amount: Any = None
    pcc_number: Any = None
    status: Any = None
    serial_no: Any = None
    pcc_holder_name: Any = None
    customer_name: Any = None
    received_by: Any = None
    entry_date: Any = None


def _header_index(row: Mapping[str, Any]) -> Dict[str, str]:
    """Map normalized header -> actual key, keeping the first occurrence."""

    index: Dict[str, str] = {}
    for key in row:
        index.setdefault(str(key).strip().lower(), key)
    return index


def resolve_field(row: Mapping[str, Any], field: str) -> Optional[Any]:
    """Return the value of the first alias of ``field`` present in ``row``."""

    index = _header_index(row)
    for alias in FIELD_ALIASES[field]:
        if alias in index:
            return row[index[alias]]
    return None


def resolve_row(row: Mapping[str, Any]) -> ResolvedRow:
    index = _header_index(row)
    values: Dict[str, Any] = {}
    for field, aliases in FIELD_ALIASES.items():
        for alias in aliases:
            if alias in index:
                values[field] = row[index[alias]]
                break
    return ResolvedRow(**values)
