"""Shared utility functions for the quote_autopilot package."""
import logging
import os
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)


def get_config_value(key: str, default: str = "") -> str:
    """Get a configuration value from the process environment."""

    return os.getenv(key, default)


def get_int_config(key: str, default: int) -> int:
    """Read an integer setting, keeping the default when the value is malformed."""

    raw = get_config_value(key, "")
    if not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring non-integer value %r for %s", raw, key)
        return default


def load_env_file(path: Path) -> None:
    """Load environment variables from a file if it exists."""
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


def unique(values: Iterable[str]) -> List[str]:
    """De-duplicate while keeping first-seen order."""

    return list(dict.fromkeys(values))
