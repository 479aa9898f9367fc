"""Working-set session tying the record engine to a persistence store.

A :class:`Tracker` holds the in-memory working set and the serial/profile
state for one writer. Every mutation builds a new list, swaps it in, and
flushes it to the store in full.
"""
from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import Any, Iterable, List, Mapping, Optional

from pcctrack.core.models import BusinessProfile, DashboardStats, Record, RecordFilter
from pcctrack.core.normalize import today_iso
from pcctrack.core.query import filter_records, select_records
from pcctrack.core.records import create_record, deliver_record, edit_record
from pcctrack.core.serials import TrackerState, allocate_serial, next_serial, reconcile_state
from pcctrack.core.stats import summarize
from pcctrack.ingestion.loader import SUPPORTED_SUFFIXES, SpreadsheetError, read_rows
from pcctrack.ingestion.spreadsheet import ImportResult, normalize_rows
from pcctrack.reporting.sinks import backup_filename, write_excel
from pcctrack.reporting.templates import records_to_export_rows
from pcctrack.storage.json_store import RecordStore, read_backup

logger = logging.getLogger(__name__)


class Tracker:
    """Single-writer session over a working set of records."""

    def __init__(
        self,
        store: RecordStore,
        records: Iterable[Record] = (),
        state: TrackerState | None = None,
    ) -> None:
        self.store = store
        self._records: List[Record] = list(records)
        self.state = state or TrackerState()

    @classmethod
    def open(cls, store: RecordStore) -> "Tracker":
        """Load the persisted working set, last serial and profile."""

        records, last_serial, profile = store.load()
        return cls(store, records, TrackerState(last_serial=last_serial, profile=profile))

    @property
    def records(self) -> List[Record]:
        return list(self._records)

    @property
    def profile(self) -> BusinessProfile:
        return self.state.profile

    def _replace_records(self, records: List[Record]) -> None:
        self._records = records
        self.store.save(records)

    def _index_of(self, record_id: str) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.id == record_id:
                return index
        return None

    def _swap(self, index: int, record: Record) -> None:
        updated = list(self._records)
        updated[index] = record
        self._replace_records(updated)

    def get(self, record_id: str) -> Optional[Record]:
        index = self._index_of(record_id)
        return None if index is None else self._records[index]

    def find_by_serial(self, serial_no: str) -> Optional[Record]:
        for record in self._records:
            if record.serial_no == serial_no:
                return record
        return None

    def next_serial_preview(self) -> str:
        return next_serial(self.state)

    def add(self, payload: Mapping[str, Any], now: str | None = None, today: str | None = None) -> Record:
        """Create a manual record with the next serial; it goes to the front."""

        serial_no, new_state = allocate_serial(self.state)
        record = create_record(payload, serial_no, now=now, today=today)
        self.state = new_state
        self._replace_records([record, *self._records])
        self.store.save_last_serial(self.state.last_serial)
        logger.info("Created record %s (serial %s)", record.id, record.serial_no)
        return record

    def edit(self, record_id: str, updates: Mapping[str, Any]) -> Optional[Record]:
        """Apply ``updates`` to a record; ``None`` if the id is unknown."""

        index = self._index_of(record_id)
        if index is None:
            logger.info("Edit skipped: record %s not found", record_id)
            return None
        record = edit_record(self._records[index], updates)
        self._swap(index, record)
        logger.info("Edited record %s", record_id)
        return record

    def deliver(
        self,
        record_id: str,
        clear_due: bool = False,
        received_by: str | None = "",
        delivery_date: str | None = None,
        today: str | None = None,
    ) -> Optional[Record]:
        """Mark a record delivered; ``None`` if the id is unknown."""

        index = self._index_of(record_id)
        if index is None:
            logger.info("Delivery skipped: record %s not found", record_id)
            return None
        record = deliver_record(
            self._records[index],
            clear_due=clear_due,
            received_by=received_by,
            delivery_date=delivery_date,
            today=today,
        )
        self._swap(index, record)
        logger.info("Delivered record %s on %s", record_id, record.delivery_date)
        return record

    def delete(self, record_id: str) -> bool:
        index = self._index_of(record_id)
        if index is None:
            logger.info("Delete skipped: record %s not found", record_id)
            return False
        self._replace_records([r for r in self._records if r.id != record_id])
        logger.info("Deleted record %s", record_id)
        return True

    def restore(self, records: Iterable[Record]) -> None:
        """Bulk replace the working set and reconcile the serial counter."""

        records = list(records)
        self.state = reconcile_state(self.state, records)
        self._replace_records(records)
        self.store.save_last_serial(self.state.last_serial)
        logger.info(
            "Working set replaced with %d records; last serial is now %d",
            len(records),
            self.state.last_serial,
        )

    def import_merge(self, imported: Iterable[Record]) -> None:
        """Place imported records ahead of the current ones, then bulk replace."""

        self.restore([*imported, *self._records])

    def import_file(
        self,
        path: Path,
        merge: bool = True,
        now: str | None = None,
        today: str | None = None,
    ) -> ImportResult:
        """Import a spreadsheet, merging into (or replacing) the working set.

        Decoding failures are logged and reported through ``ImportResult.ok``;
        the working set is only touched when at least one row is accepted.
        """

        try:
            rows = read_rows(Path(path))
        except (SpreadsheetError, OSError) as exc:
            logger.exception("Failed to import %s", path)
            return ImportResult(ok=False, alerts=[f"Failed to import {Path(path).name}: {exc}"])

        result = normalize_rows(rows, now=now, today=today)
        if result.rejected:
            result.alerts.append(f"Skipped {result.rejected} rows without a passport number")
            logger.warning("Skipped %d rows without a passport number", result.rejected)
        if not result.records:
            return result

        if merge:
            self.import_merge(result.records)
        else:
            self.restore(result.records)
        return result

    def restore_file(
        self,
        path: Path,
        now: str | None = None,
        today: str | None = None,
    ) -> ImportResult:
        """Replace the working set from a JSON or spreadsheet backup.

        Spreadsheets go through :meth:`import_file`. JSON backups are validated
        in full before anything is replaced; a rejected or empty backup leaves
        the working set as it was.
        """

        path = Path(path)
        if path.suffix.lower() in SUPPORTED_SUFFIXES:
            return self.import_file(path, merge=False, now=now, today=today)

        try:
            records = read_backup(path)
        except (ValueError, OSError) as exc:
            logger.exception("Failed to restore %s", path)
            return ImportResult(ok=False, alerts=[f"Failed to restore {path.name}: {exc}"])

        result = ImportResult(records=records, rows_read=len(records))
        if not records:
            result.alerts.append(f"{path.name} holds no records; nothing restored")
            logger.warning("Backup %s holds no records", path)
            return result
        self.restore(records)
        return result

    def update_profile(self, **changes: Any) -> BusinessProfile:
        profile = replace(self.state.profile, **changes)
        self.state = replace(self.state, profile=profile)
        self.store.save_profile(profile)
        return profile

    def query(self, record_filter: RecordFilter | None = None) -> List[Record]:
        return filter_records(self._records, record_filter)

    def select(self, ids: Iterable[str]) -> List[Record]:
        return select_records(self._records, list(ids))

    def stats(self, today: str | None = None) -> DashboardStats:
        return summarize(self._records, today=today)

    def export_backup(
        self,
        directory: Path,
        records: Iterable[Record] | None = None,
        today: str | None = None,
    ) -> Path:
        """Write a backup workbook and stamp the profile's last backup date."""

        today = today or today_iso()
        target = Path(directory) / backup_filename(self.profile.shop_name, today)
        rows = records_to_export_rows(self._records if records is None else records)
        write_excel(rows, target)
        self.update_profile(last_backup_date=today)
        logger.info("Wrote backup of %d records to %s", len(rows), target)
        return target
