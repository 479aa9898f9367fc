"""Record creation, edits, and the delivery transition.

All three return new :class:`Record` instances. ``due_amount`` is always
derived from the normalized total and paid amounts; a caller-supplied due
amount is discarded.
"""
from __future__ import annotations

import logging
import uuid
from dataclasses import replace
from typing import Any, Dict, Mapping

from pcctrack.core.models import (
    RECORD_FIELDS,
    DeliveryStatus,
    Record,
    coerce_service_type,
    coerce_status,
)
from pcctrack.core.normalize import clean_text, now_iso, to_amount, today_iso

logger = logging.getLogger(__name__)

# Set once at creation, or derived.
PROTECTED_FIELDS = frozenset({"id", "serial_no", "created_at", "due_amount"})
EDITABLE_FIELDS = frozenset(RECORD_FIELDS) - PROTECTED_FIELDS


def generate_id() -> str:
    return uuid.uuid4().hex


def normalize_pcc_number(value: Any) -> str:
    return clean_text(value).upper()


def _clean_payload(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Drop ``None`` values and protected fields; reject unknown names."""

    unknown = set(payload) - set(RECORD_FIELDS)
    if unknown:
        raise ValueError(f"Unknown record fields: {', '.join(sorted(unknown))}")

    cleaned: Dict[str, Any] = {}
    for key, value in payload.items():
        if value is None:
            continue
        if key in PROTECTED_FIELDS:
            logger.debug("Ignoring protected field %s in payload", key)
            continue
        cleaned[key] = value

    if "pcc_number" in cleaned:
        cleaned["pcc_number"] = normalize_pcc_number(cleaned["pcc_number"])
    if "status" in cleaned:
        cleaned["status"] = coerce_status(cleaned["status"])
    if "service_type" in cleaned:
        cleaned["service_type"] = coerce_service_type(cleaned["service_type"])
    for key in ("total_amount", "paid_amount"):
        if key in cleaned:
            cleaned[key] = to_amount(cleaned[key])
    return cleaned


def create_record(
    payload: Mapping[str, Any],
    serial_no: str,
    now: str | None = None,
    today: str | None = None,
) -> Record:
    """Build a new record from a manual-entry field set."""

    fields = _clean_payload(payload)
    if not fields.get("pcc_number"):
        raise ValueError("pcc_number is required")

    total = fields.pop("total_amount", 0.0)
    paid = fields.pop("paid_amount", 0.0)
    fields.setdefault("entry_date", today or today_iso())
    return Record(
        id=generate_id(),
        serial_no=str(serial_no),
        created_at=now or now_iso(),
        total_amount=total,
        paid_amount=paid,
        due_amount=total - paid,
        **fields,
    )


def edit_record(record: Record, updates: Mapping[str, Any]) -> Record:
    """Return ``record`` with ``updates`` applied and the due amount re-derived.

    Fields missing from ``updates`` (or given as ``None``) keep their values.
    """

    fields = _clean_payload(updates)
    if "pcc_number" in fields and not fields["pcc_number"]:
        raise ValueError("pcc_number cannot be blank")
    if fields.get("status", record.status) is not record.status:
        raise ValueError("status changes go through deliver_record")

    total = fields.pop("total_amount", record.total_amount)
    paid = fields.pop("paid_amount", record.paid_amount)
    return replace(
        record,
        total_amount=total,
        paid_amount=paid,
        due_amount=total - paid,
        **fields,
    )


def deliver_record(
    record: Record,
    clear_due: bool,
    received_by: str | None = "",
    delivery_date: str | None = None,
    today: str | None = None,
) -> Record:
    """Mark ``record`` delivered.

    The entry date is re-anchored to the delivery date so date views show the
    completed transaction. Re-delivering an already delivered record simply
    overwrites the delivery fields. With ``clear_due`` the balance is settled
    in full; otherwise amounts are left alone.
    """

    final_date = clean_text(delivery_date) or today or today_iso()
    receiver = clean_text(received_by) or record.received_by
    updated = replace(
        record,
        status=DeliveryStatus.DELIVERED,
        delivery_date=final_date,
        entry_date=final_date,
        received_by=receiver,
    )
    if clear_due:
        updated = replace(updated, paid_amount=record.total_amount, due_amount=0.0)
    return updated
