"""Turn spreadsheet rows into canonical records.

Rows arrive as string-keyed mappings with unknown headers and mixed cell
types. Column names are resolved through the alias table, amounts and dates
are normalized, and status text is matched against "delivered" tokens. A row
is accepted only if it carries a document (passport/PCC) number.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, List, Mapping, Optional

from pcctrack.core.models import Record, ServiceType, normalize_status
from pcctrack.core.normalize import clean_text, now_iso, to_amount, to_iso_date, today_iso
from pcctrack.core.records import generate_id, normalize_pcc_number
from pcctrack.ingestion.aliases import ResolvedRow, resolve_row

logger = logging.getLogger(__name__)


@dataclass
class ImportResult:
    """Outcome of one import: accepted records plus row counts."""

    records: List[Record] = field(default_factory=list)
    rows_read: int = 0
    ok: bool = True
    alerts: List[str] = field(default_factory=list)

    @property
    def accepted(self) -> int:
        return len(self.records)

    @property
    def rejected(self) -> int:
        return self.rows_read - self.accepted


def row_to_record(
    row: Mapping[str, Any],
    now: str | None = None,
    today: str | None = None,
) -> Optional[Record]:
    """Normalize one row, or return ``None`` if it has no document number."""

    resolved: ResolvedRow = resolve_row(row)
    pcc_number = normalize_pcc_number(resolved.pcc_number)
    if not pcc_number:
        return None

    total = to_amount(resolved.total_amount)
    paid = to_amount(resolved.paid_amount)
    return Record(
        id=generate_id(),
        serial_no=clean_text(resolved.serial_no),
        pcc_number=pcc_number,
        pcc_holder_name=clean_text(resolved.pcc_holder_name),
        customer_name=clean_text(resolved.customer_name),
        total_amount=total,
        paid_amount=paid,
        due_amount=total - paid,
        service_type=ServiceType.NORMAL,
        status=normalize_status(resolved.status),
        received_by=clean_text(resolved.received_by),
        entry_date=to_iso_date(resolved.entry_date, today=today),
        created_at=now or now_iso(),
    )


def normalize_rows(
    rows: Iterable[Mapping[str, Any]],
    now: str | None = None,
    today: str | None = None,
) -> ImportResult:
    """Normalize ``rows`` in source order, dropping rows without a document number."""

    now = now or now_iso()
    today = today or today_iso()
    result = ImportResult()
    for position, row in enumerate(rows, start=1):
        result.rows_read += 1
        record = row_to_record(row, now=now, today=today)
        if record is None:
            logger.debug("Skipping row %d: no passport/PCC number", position)
            continue
        result.records.append(record)

    logger.info("Accepted %d of %d imported rows", result.accepted, result.rows_read)
    return result
