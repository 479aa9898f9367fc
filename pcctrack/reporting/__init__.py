"""Export rows, invoice/statement data, and file sinks."""
from pcctrack.reporting.sinks import backup_filename, ensure_output_dir, write_csv, write_excel
from pcctrack.reporting.templates import (
    EXPORT_HEADERS,
    build_invoice,
    build_statement,
    format_money,
    record_to_export_row,
    records_to_export_rows,
)

__all__ = [
    "backup_filename",
    "ensure_output_dir",
    "write_csv",
    "write_excel",
    "EXPORT_HEADERS",
    "build_invoice",
    "build_statement",
    "format_money",
    "record_to_export_row",
    "records_to_export_rows",
]
