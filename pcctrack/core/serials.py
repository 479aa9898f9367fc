"""Serial number allocation and reconciliation.

Serials are the human-facing order numbers. The last issued serial lives in a
caller-owned :class:`TrackerState` rather than in module globals; allocation
returns a new state instead of mutating the old one.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, Tuple

from pcctrack.core.models import BusinessProfile, Record
from pcctrack.core.normalize import parse_serial

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TrackerState:
    """Process-wide values persisted alongside the working set."""

    last_serial: int = 0
    profile: BusinessProfile = field(default_factory=BusinessProfile)


def next_serial(state: TrackerState) -> str:
    """Serial the next manual record will receive, without allocating it."""

    return str(state.last_serial + 1)


def allocate_serial(state: TrackerState) -> Tuple[str, TrackerState]:
    """Issue the next serial and return it with the advanced state."""

    issued = state.last_serial + 1
    return str(issued), replace(state, last_serial=issued)


def reconcile_last_serial(records: Iterable[Record]) -> int:
    """Highest parseable serial across ``records``, or 0.

    Unparsable serials are ignored so sparse or messy imported numbering never
    blocks the next manual entry.
    """

    highest = 0
    skipped = 0
    for record in records:
        parsed = parse_serial(record.serial_no)
        if parsed is None:
            skipped += 1
            continue
        highest = max(highest, parsed)
    if skipped:
        logger.debug("Ignored %d non-numeric serials while reconciling", skipped)
    return highest


def reconcile_state(state: TrackerState, records: Iterable[Record]) -> TrackerState:
    """Return ``state`` with ``last_serial`` recomputed from a full working set."""

    return replace(state, last_serial=reconcile_last_serial(records))
