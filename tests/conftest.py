"""Pytest configuration to make the local package importable without installation."""
import itertools
import sys
from pathlib import Path

import pytest

# Ensure repository root is on sys.path for module resolution
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from pcctrack.cli import main as cli_main
from pcctrack.core.models import Record
from pcctrack.storage import MemoryStore
from pcctrack.tracker import Tracker

TODAY = "2024-05-10"
NOW = "2024-05-10T09:30:00.000Z"


@pytest.fixture
def today() -> str:
    return TODAY


@pytest.fixture
def now() -> str:
    return NOW


@pytest.fixture
def make_record():
    """Factory for records with sensible defaults and unique ids."""

    counter = itertools.count(1)

    def _make(**overrides) -> Record:
        number = next(counter)
        values = {
            "id": f"rec-{number}",
            "serial_no": str(number),
            "pcc_number": f"A{number:07d}",
            "entry_date": "2024-01-01",
            "created_at": NOW,
        }
        values.update(overrides)
        return Record(**values)

    return _make


@pytest.fixture
def store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def tracker(store: MemoryStore) -> Tracker:
    return Tracker.open(store)


@pytest.fixture
def run_cli(tmp_path: Path, capsys: pytest.CaptureFixture):
    """Invoke the CLI against a temporary data directory and return its output."""

    data_dir = tmp_path / "data"

    def _run(args: list[str]) -> tuple[int, str]:
        code = cli_main(["--data-dir", str(data_dir), *args])
        return code, capsys.readouterr().out

    return _run
