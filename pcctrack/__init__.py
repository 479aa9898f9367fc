"""Service-order tracking for a passport / PCC processing counter."""
from pcctrack.core import (
    BusinessProfile,
    DashboardStats,
    DateType,
    DeliveryStatus,
    Record,
    RecordFilter,
    ServiceType,
    StatusFilter,
    TrackerState,
    allocate_serial,
    configure_logging,
    create_record,
    deliver_record,
    edit_record,
    filter_records,
    reconcile_last_serial,
    select_records,
    summarize,
    to_amount,
    to_iso_date,
)
from pcctrack.ingestion import ImportResult, SpreadsheetError, normalize_rows, read_rows
from pcctrack.reporting import build_invoice, build_statement, records_to_export_rows
from pcctrack.storage import JsonStore, MemoryStore
from pcctrack.tracker import Tracker

__all__ = [
    "BusinessProfile",
    "DashboardStats",
    "DateType",
    "DeliveryStatus",
    "ImportResult",
    "JsonStore",
    "MemoryStore",
    "Record",
    "RecordFilter",
    "ServiceType",
    "SpreadsheetError",
    "StatusFilter",
    "Tracker",
    "TrackerState",
    "allocate_serial",
    "build_invoice",
    "build_statement",
    "configure_logging",
    "create_record",
    "deliver_record",
    "edit_record",
    "filter_records",
    "normalize_rows",
    "read_rows",
    "reconcile_last_serial",
    "records_to_export_rows",
    "select_records",
    "summarize",
    "to_amount",
    "to_iso_date",
]
