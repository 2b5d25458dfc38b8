"""Shared table constants and helpers for opening the Messages database."""

from __future__ import annotations

import os
import sqlite3
from pathlib import Path

# Table names
HANDLE = "handle"
MESSAGE = "message"
CHAT = "chat"
ATTACHMENT = "attachment"
CHAT_MESSAGE_JOIN = "chat_message_join"
MESSAGE_ATTACHMENT_JOIN = "message_attachment_join"
CHAT_HANDLE_JOIN = "chat_handle_join"
RECENTLY_DELETED = "chat_recoverable_message_join"

# Column names
MESSAGE_PAYLOAD = "payload_data"
MESSAGE_SUMMARY_INFO = "message_summary_info"
ATTRIBUTED_BODY = "attributedBody"
STICKER_USER_INFO = "sticker_user_info"
ATTRIBUTION_INFO = "attribution_info"

# Default information
ME = "Me"
YOU = "You"
UNKNOWN = "Unknown"
DEFAULT_PATH_MACOS = "Library/Messages/chat.db"
DEFAULT_PATH_IOS = "3d/3d0d7e5fb2ce288813306e4d4636395e047a3d28"
ORPHANED = "orphaned"
FITNESS_RECEIVER = "$(kIMTranscriptPluginBreadcrumbTextReceiverIdentifier)"
ATTACHMENTS_DIR = "attachments"


class TableError(Exception):
    """Raised when the database cannot be connected to or read."""


def get_connection(path: str | os.PathLike[str]) -> sqlite3.Connection:
    """Open the database at ``path`` in read-only mode."""
    db_path = Path(path)
    if db_path.is_file():
        uri = db_path.resolve().as_uri() + "?mode=ro"
        try:
            return sqlite3.connect(uri, uri=True, check_same_thread=False)
        except sqlite3.Error as why:
            raise TableError(
                f"Unable to read from chat database: {why}\n"
                "Ensure full disk access is enabled for your terminal emulator in "
                "System Settings > Privacy & Security > Full Disk Access"
            ) from why

    if db_path.exists():
        raise TableError(f"Specified path `{db_path}` is not a database!")

    raise TableError(f"Database not found at {db_path}")


def get_db_size(path: str | os.PathLike[str]) -> int:
    """Return the size of the database file on disk, in bytes."""
    try:
        return os.stat(path).st_size
    except OSError as why:
        raise TableError(f"Unable to read file metadata: {why}") from why