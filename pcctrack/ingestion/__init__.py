"""Spreadsheet ingestion: file decoding and row reconciliation."""
from pcctrack.ingestion.aliases import FIELD_ALIASES, ResolvedRow, resolve_field, resolve_row
from pcctrack.ingestion.loader import SpreadsheetError, read_rows
from pcctrack.ingestion.spreadsheet import ImportResult, normalize_rows, normalize_status, row_to_record

__all__ = [
    "FIELD_ALIASES",
    "ResolvedRow",
    "resolve_field",
    "resolve_row",
    "SpreadsheetError",
    "read_rows",
    "ImportResult",
    "normalize_rows",
    "normalize_status",
    "row_to_record",
]
