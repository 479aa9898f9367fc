"""Helper sinks for writing exported records to disk."""
from __future__ import annotations

import csv
import re
from pathlib import Path
from typing import Any, Dict, Iterable, List

from openpyxl import Workbook

from pcctrack.reporting.templates import EXPORT_HEADERS


def ensure_output_dir(output_path: Path) -> None:
    """Create parent folders for sink outputs when missing."""

    output_path.parent.mkdir(parents=True, exist_ok=True)


def backup_filename(shop_name: str, date: str) -> str:
    """``<shop>_Statement_<date>.xlsx`` with path-unsafe characters replaced."""

    safe_shop = re.sub(r'[\\/:*?"<>|]+', "_", shop_name).strip() or "records"
    return f"{safe_shop}_Statement_{date}.xlsx"


def write_excel(rows: Iterable[Dict[str, Any]], output_path: Path, sheet_title: str = "Records") -> None:
    """Write rows to an Excel workbook using openpyxl."""

    rows = list(rows)
    ensure_output_dir(output_path)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_title
    headers: List[str] = list(rows[0].keys()) if rows else list(EXPORT_HEADERS)
    sheet.append(headers)
    for row in rows:
        sheet.append([row.get(header, "") for header in headers])
    workbook.save(output_path)


def write_csv(rows: Iterable[Dict[str, Any]], output_path: Path) -> None:
    """Write exported rows to a CSV file with the backup headers."""

    rows = list(rows)
    ensure_output_dir(output_path)
    with output_path.open("w", newline="", encoding="utf-8") as csvfile:
        writer = csv.DictWriter(csvfile, fieldnames=EXPORT_HEADERS)
        writer.writeheader()
        writer.writerows(rows)
