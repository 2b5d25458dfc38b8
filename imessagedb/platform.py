"""The platform that produced a Messages database."""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path

from imessagedb.table import DEFAULT_PATH_IOS, TableError


class Platform(Enum):
    """Source platform of the database."""

    macOS = "macOS"
    iOS = "iOS"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def default(cls) -> Platform:
        """Return the default platform, macOS."""
        return cls.macOS

    @classmethod
    def determine(cls, db_path: str | os.PathLike[str]) -> Platform:
        """Guess the platform from a database path, defaulting to macOS."""
        path = Path(db_path)
        ios_parts = Path(DEFAULT_PATH_IOS).parts
        if path.parts[-len(ios_parts):] == ios_parts:
            raise TableError(
                "The path provided points to a database inside of an iOS backup, "
                "not the root of the backup."
            )

        if (path / DEFAULT_PATH_IOS).exists():
            return cls.iOS
        if path.is_file():
            return cls.macOS
        # A missing database is reported when the connection is opened.
        return cls.default()

    @classmethod
    def from_cli(cls, platform: str) -> Platform | None:
        """Match user input case-insensitively to a platform, if any."""
        return {"macos": cls.macOS, "ios": cls.iOS}.get(platform.lower())