"""Search and filter over a working set.

Every predicate is a plain O(n) scan; filters compose with AND and keep the
working-set order.
"""
from __future__ import annotations

from typing import Callable, Collection, Iterable, List

from pcctrack.core.models import DateType, DeliveryStatus, Record, RecordFilter, StatusFilter

_SEARCH_FIELDS = ("pcc_number", "customer_name", "pcc_holder_name", "serial_no")


def matches_search(record: Record, search_text: str) -> bool:
    needle = (search_text or "").strip().lower()
    if not needle:
        return True
    for name in _SEARCH_FIELDS:
        value = getattr(record, name, None)
        if needle in str(value or "").lower():
            return True
    return False


def matches_status(record: Record, status_filter: StatusFilter) -> bool:
    if status_filter in (StatusFilter.ALL, StatusFilter.DUE):
        return True
    return record.status is DeliveryStatus[status_filter.name]


def matches_due(record: Record, status_filter: StatusFilter) -> bool:
    if status_filter is not StatusFilter.DUE:
        return True
    return record.due_amount > 0


def matches_date(record: Record, date_type: DateType, date_value: str | None) -> bool:
    if not date_value:
        return True
    if date_type is DateType.DELIVERY:
        return record.delivery_date == date_value
    return record.entry_date == date_value


def build_predicate(record_filter: RecordFilter) -> Callable[[Record], bool]:
    status_filter = StatusFilter(record_filter.status_filter)
    date_type = DateType(record_filter.date_type)

    def predicate(record: Record) -> bool:
        return (
            matches_search(record, record_filter.search_text)
            and matches_status(record, status_filter)
            and matches_due(record, status_filter)
            and matches_date(record, date_type, record_filter.date_value)
        )

    return predicate


def filter_records(records: Iterable[Record], record_filter: RecordFilter | None = None) -> List[Record]:
    """Return the records matching ``record_filter`` in their original order."""

    predicate = build_predicate(record_filter or RecordFilter())
    return [record for record in records if predicate(record)]


def select_records(records: Iterable[Record], ids: Collection[str]) -> List[Record]:
    """Return the records whose id is in ``ids``, in working-set order."""

    wanted = set(ids)
    return [record for record in records if record.id in wanted]
