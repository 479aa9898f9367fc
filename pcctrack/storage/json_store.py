"""JSON-file persistence for the working set, last serial, and shop profile.

Each value lives in its own document under the data directory and is
rewritten in full on every save through a temporary file, so a failed
write leaves the previous document in place. Missing or unreadable
documents load as defaults so a fresh install starts empty.
"""
from __future__ import annotations

import contextlib
import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, List, Protocol, Tuple

from pcctrack.core.models import BusinessProfile, Record

logger = logging.getLogger(__name__)

RECORDS_FILE = "pcc_tracker_records.json"
SERIAL_FILE = "pcc_tracker_last_serial.json"
PROFILE_FILE = "pcc_business_profile.json"

Snapshot = Tuple[List[Record], int, BusinessProfile]


class RecordStore(Protocol):
    def load(self) -> Snapshot: ...

    def save(self, records: Iterable[Record]) -> None: ...

    def save_last_serial(self, serial: int) -> None: ...

    def save_profile(self, profile: BusinessProfile) -> None: ...


class JsonStore:
    """Store backed by three JSON documents in ``directory``."""

    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def _read(self, name: str) -> Any:
        path = self.directory / name
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as exc:
            logger.warning("Ignoring unreadable %s: %s", path, exc)
            return None

    def _write(self, name: str, payload: Any) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / name
        tmp = path.with_name(path.name + ".tmp")
        try:
            tmp.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
            os.replace(tmp, path)
        except Exception:
            with contextlib.suppress(FileNotFoundError):
                tmp.unlink()
            raise

    def load(self) -> Snapshot:
        raw_records = self._read(RECORDS_FILE)
        if raw_records is not None and not isinstance(raw_records, list):
            logger.warning("Ignoring records document that is not a list")
            raw_records = None
        records: List[Record] = []
        for item in raw_records or []:
            if not isinstance(item, dict):
                logger.warning("Skipping stored record that is not an object: %r", item)
                continue
            records.append(Record.from_dict(item))

        raw_serial = self._read(SERIAL_FILE)
        try:
            last_serial = int(raw_serial or 0)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid last serial %r", raw_serial)
            last_serial = 0

        raw_profile = self._read(PROFILE_FILE)
        profile = BusinessProfile.from_dict(raw_profile) if isinstance(raw_profile, dict) else BusinessProfile()

        logger.info("Loaded %d records from %s", len(records), self.directory)
        return records, last_serial, profile

    def save(self, records: Iterable[Record]) -> None:
        self._write(RECORDS_FILE, [record.to_dict() for record in records])

    def save_last_serial(self, serial: int) -> None:
        self._write(SERIAL_FILE, serial)

    def save_profile(self, profile: BusinessProfile) -> None:
        self._write(PROFILE_FILE, profile.to_dict())


class MemoryStore:
    """In-process store; handy for tests and throwaway sessions."""

    def __init__(
        self,
        records: Iterable[Record] = (),
        last_serial: int = 0,
        profile: BusinessProfile | None = None,
    ) -> None:
        self.records = list(records)
        self.last_serial = last_serial
        self.profile = profile or BusinessProfile()
        self.saves = 0

    def load(self) -> Snapshot:
        return list(self.records), self.last_serial, self.profile

    def save(self, records: Iterable[Record]) -> None:
        self.records = list(records)
        self.saves += 1

    def save_last_serial(self, serial: int) -> None:
        self.last_serial = serial

    def save_profile(self, profile: BusinessProfile) -> None:
        self.profile = profile


def read_backup(path: Path) -> List[Record]:
    """Read a JSON backup written by :meth:`JsonStore.save`.

    The document must be a list of record objects, each with an ``id`` and a
    ``pccNumber``. Anything else raises ``ValueError`` naming the first bad
    entry; nothing is returned partially.
    """

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"expected a list of records, got {type(data).__name__}")
    records: List[Record] = []
    for position, item in enumerate(data, start=1):
        if not isinstance(item, dict):
            raise ValueError(f"entry {position} is not a record object")
        missing = [key for key in ("id", "pccNumber") if not str(item.get(key) or "").strip()]
        if missing:
            raise ValueError(f"entry {position} is missing {', '.join(missing)}")
        records.append(Record.from_dict(item))
    return records
