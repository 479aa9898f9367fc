"""Money, date, and text normalizers shared by manual entry and imports.

Everything here is a pure function of its input (plus "today" when a date is
missing) and never raises on malformed data: unusable amounts become ``0.0``,
missing dates become today's date, and missing text becomes ``""``.
"""
from __future__ import annotations

import math
import re
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

_NON_AMOUNT_CHARS = re.compile(r"[^0-9.]")
_LEADING_FLOAT = re.compile(r"\d+\.?\d*|\.\d+")
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def today_iso() -> str:
    """Return the local calendar date as ``YYYY-MM-DD``."""

    return date.today().isoformat()


def now_iso() -> str:
    """Return the current UTC timestamp as ISO-8601 with a ``Z`` suffix."""

    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def to_amount(value: Any) -> float:
    """Coerce a numeric or currency-formatted value into a float.

    Numbers pass through. Text is stripped of every character that is not a
    digit or a decimal point (currency symbols, thousands separators,
    whitespace) and the leading numeric portion is parsed. Anything that does
    not yield a number normalizes to ``0.0``.
    """

    if isinstance(value, bool) or value is None:
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        amount = float(value)
        return 0.0 if math.isnan(amount) else amount

    cleaned = _NON_AMOUNT_CHARS.sub("", str(value))
    match = _LEADING_FLOAT.match(cleaned)
    if not match:
        return 0.0
    return float(match.group(0))


def to_iso_date(value: Any, today: str | None = None) -> str:
    """Render a spreadsheet date cell as an ISO date string.

    Native ``date``/``datetime`` values become ``YYYY-MM-DD``; any other
    non-blank value is kept verbatim after trimming; blanks default to today.
    """

    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = clean_text(value)
    return text or today or today_iso()


def clean_text(value: Any) -> str:
    """Return trimmed text for a loosely typed cell; ``None`` becomes ``""``.

    Whole-number floats (how spreadsheets often hand back serials) lose their
    trailing ``.0``.
    """

    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def parse_serial(value: Any) -> int | None:
    """Parse the leading integer of a serial number, or ``None`` if absent."""

    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    match = _LEADING_INT.match(clean_text(value))
    return int(match.group(1)) if match else None
