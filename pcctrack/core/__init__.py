"""Core building blocks for the pcctrack package."""
from pcctrack.core.logging import configure_logging
from pcctrack.core.models import (
    BusinessProfile,
    DashboardStats,
    DateType,
    DeliveryStatus,
    Record,
    RecordFilter,
    ServiceType,
    StatusFilter,
)
from pcctrack.core.normalize import to_amount, to_iso_date
from pcctrack.core.query import filter_records, select_records
from pcctrack.core.records import create_record, deliver_record, edit_record
from pcctrack.core.serials import TrackerState, allocate_serial, reconcile_last_serial
from pcctrack.core.stats import summarize

__all__ = [
    "configure_logging",
    "BusinessProfile",
    "DashboardStats",
    "DateType",
    "DeliveryStatus",
    "Record",
    "RecordFilter",
    "ServiceType",
    "StatusFilter",
    "to_amount",
    "to_iso_date",
    "filter_records",
    "select_records",
    "create_record",
    "deliver_record",
    "edit_record",
    "TrackerState",
    "allocate_serial",
    "reconcile_last_serial",
    "summarize",
]
