"""Environment-driven configuration."""
from pathlib import Path

import pytest

from pcctrack.core.utils import data_dir, get_config_value, load_env_file


@pytest.fixture
def unset_data_dir(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove PCC_DATA_DIR and restore the environment afterwards, even if an env file sets it."""

    monkeypatch.setenv("PCC_DATA_DIR", "placeholder")
    monkeypatch.delenv("PCC_DATA_DIR")


def test_env_file_supplies_missing_values(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, unset_data_dir):
    env_file = tmp_path / "pcctrack.env"
    env_file.write_text("# local settings\nPCC_DATA_DIR='/srv/pcc'\nBROKEN LINE\n", encoding="utf-8")
    monkeypatch.setenv("PCC_ENV_FILE", str(env_file))

    assert data_dir() == Path("/srv/pcc")


def test_existing_environment_wins(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    env_file = tmp_path / "pcctrack.env"
    env_file.write_text("PCC_DATA_DIR=from-file\n", encoding="utf-8")
    monkeypatch.setenv("PCC_DATA_DIR", "from-env")

    load_env_file(env_file)

    assert get_config_value("PCC_DATA_DIR") == "from-env"


def test_defaults_without_configuration(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, unset_data_dir):
    monkeypatch.setenv("PCC_ENV_FILE", str(tmp_path / "absent.env"))

    assert data_dir() == Path("data")
