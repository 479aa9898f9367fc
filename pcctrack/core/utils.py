"""Configuration helpers: environment variables with an optional env file."""
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_ENV_FILE = Path("secrets/pcctrack.env")
DEFAULT_DATA_DIR = "data"


def load_env_file(path: Path) -> None:
    """Load environment variables from a file if it exists.

    Variables already present in the environment are left untouched.
    """
    if not path.exists():
        return

    try:
        with path.open(encoding="utf-8") as handle:
            for raw_line in handle:
                line = raw_line.strip()
                if not line or line.startswith("#") or "=" not in line:
                    continue
                key, value = line.split("=", 1)
                key = key.strip()
                if not key or key in os.environ:
                    continue
                os.environ[key] = value.strip().strip('"').strip("'")
    except OSError as exc:
        logger.debug("Could not load env file %s: %s", path, exc)


def get_config_value(key: str, default: str = "") -> str:
    """Get a configuration value from the environment.

    The env file named by ``PCC_ENV_FILE`` (or ``secrets/pcctrack.env``) is
    consulted first so local setups do not need exported variables.
    """
    load_env_file(Path(os.getenv("PCC_ENV_FILE", str(DEFAULT_ENV_FILE))))
    return os.getenv(key, default)


def data_dir() -> Path:
    """Directory holding the persisted working set."""
    return Path(get_config_value("PCC_DATA_DIR", DEFAULT_DATA_DIR))
