"""Default locations of the Messages database."""

import os
from pathlib import Path

from imessagedb.table import DEFAULT_PATH_MACOS


def home() -> str:
    """Return the user's home directory from ``HOME``, or an empty string."""
    return os.environ.get("HOME", "")


def default_db_path() -> Path:
    """Return the default path of the macOS Messages database."""
    return Path(f"{home()}/{DEFAULT_PATH_MACOS}")