"""Decode spreadsheet files into generic rows.

This layer only unpacks the file container. Header resolution and value
normalization happen in :mod:`pcctrack.ingestion.spreadsheet`.
"""
from __future__ import annotations

import csv
import logging
import zipfile
from pathlib import Path
from typing import Any, Dict, List

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".xlsx", ".xlsm", ".csv")


class SpreadsheetError(ValueError):
    """Raised when a spreadsheet cannot be decoded into rows."""


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _rows_from_table(header: List[Any], body) -> List[Dict[str, Any]]:
    keys = [None if _is_blank(cell) else str(cell) for cell in header]
    rows: List[Dict[str, Any]] = []
    for values in body:
        row = {
            key: value
            for key, value in zip(keys, values)
            if key is not None and not _is_blank(value)
        }
        if row:
            rows.append(row)
    return rows


def read_xlsx_rows(path: Path) -> List[Dict[str, Any]]:
    """Read the first worksheet; the first row holds the headers.

    Date cells come back from openpyxl as ``datetime`` objects.
    """

    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError) as exc:
        raise SpreadsheetError(f"Could not open workbook {path.name}: {exc}") from exc

    try:
        sheet = workbook.worksheets[0]
        table = sheet.iter_rows(values_only=True)
        header = next(table, None)
        if header is None:
            return []
        return _rows_from_table(list(header), table)
    finally:
        workbook.close()


def read_csv_rows(path: Path) -> List[Dict[str, Any]]:
    try:
        with path.open(newline="", encoding="utf-8-sig") as handle:
            reader = csv.reader(handle)
            header = next(reader, None)
            if header is None:
                return []
            return _rows_from_table(header, reader)
    except (csv.Error, UnicodeDecodeError) as exc:
        raise SpreadsheetError(f"Could not read CSV {path.name}: {exc}") from exc


def read_rows(path: Path) -> List[Dict[str, Any]]:
    """Decode ``path`` into a list of header-keyed rows."""

    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise SpreadsheetError(f"Unsupported spreadsheet type: {path.name}")

    logger.info("Reading rows from %s", path)
    rows = read_csv_rows(path) if suffix == ".csv" else read_xlsx_rows(path)
    logger.info("Read %d rows from %s", len(rows), path.name)
    return rows
