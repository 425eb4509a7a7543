"""Configuration defaults and .env loading.

WHY: Line width, measurement policy, tab size, and log verbosity differ per
terminal and per workflow. Keeping their defaults in one place, overridable
from the environment or a .env file, means the CLI and any embedding code
agree on them without passing flags everywhere.

HOW: python-dotenv loads the .env file on import. Defaults are module-level
constants read with os.getenv. load_width() and load_tab_size() validate
their values and raise a clear ValueError when they are unusable.

RULES:
- TEXTFLOW_WIDTH: default line width (default 80, must be >= 1)
- TEXTFLOW_POLICY: default measurement policy name (default "default")
- TEXTFLOW_TAB_SIZE: tab width for the terminal policy (default 4, >= 1)
- TEXTFLOW_LOG_LEVEL: logging level name for the CLI (default "WARNING")
- Values are read at call time by the load_* helpers, so tests can
  monkeypatch the environment
"""

from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env from the working directory (where the CLI is run from)
load_dotenv()

DEFAULT_WIDTH = 80
DEFAULT_POLICY = "default"
DEFAULT_TAB_SIZE = 4
DEFAULT_LOG_LEVEL = "WARNING"


def _load_positive_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError("{} must be an integer, got '{}'".format(name, raw)) from None
    if value < 1:
        raise ValueError("{} must be at least 1, got {}".format(name, value))
    return value


def load_width() -> int:
    """Return the configured default line width.

    Raises:
        ValueError: If TEXTFLOW_WIDTH is not a positive integer.
    """
    return _load_positive_int("TEXTFLOW_WIDTH", DEFAULT_WIDTH)


def load_tab_size() -> int:
    """Return the configured tab width for the terminal policy.

    Raises:
        ValueError: If TEXTFLOW_TAB_SIZE is not a positive integer.
    """
    return _load_positive_int("TEXTFLOW_TAB_SIZE", DEFAULT_TAB_SIZE)


def load_policy() -> str:
    """Return the configured measurement policy name (validated by the caller)."""
    return os.getenv("TEXTFLOW_POLICY", DEFAULT_POLICY).strip() or DEFAULT_POLICY


def load_log_level() -> str:
    """Return the configured log level name, upper-cased."""
    return os.getenv("TEXTFLOW_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
