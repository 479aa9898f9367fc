"""Dashboard and batch totals over a record set."""
from __future__ import annotations

from typing import Iterable

from pcctrack.core.models import DashboardStats, DeliveryStatus, Record
from pcctrack.core.normalize import today_iso


def summarize(records: Iterable[Record], today: str | None = None) -> DashboardStats:
    """Reduce ``records`` to dashboard counts and sums. Empty input yields zeros."""

    today = today or today_iso()
    total = pending = delivered = entries_today = deliveries_today = 0
    due_sum = billed_sum = 0.0

    for record in records:
        total += 1
        if record.status is DeliveryStatus.DELIVERED:
            delivered += 1
            if record.delivery_date == today:
                deliveries_today += 1
        else:
            pending += 1
        if record.entry_date == today:
            entries_today += 1
        due_sum += record.due_amount or 0.0
        billed_sum += record.total_amount or 0.0

    return DashboardStats(
        total_records=total,
        total_pending=pending,
        total_delivered=delivered,
        total_due_amount=due_sum,
        total_billed_amount=billed_sum,
        today_entries=entries_today,
        today_deliveries=deliveries_today,
    )
