"""Filter configuration for message queries."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass
class QueryContext:
    """Filters applied to a SQL query."""

    limit: int | None = None
    selected_handle_ids: set[int] | None = None
    selected_chat_ids: set[int] | None = None

    def set_limit(self, limit: int) -> None:
        """Limit the number of messages retrieved."""
        self.limit = limit

    def set_selected_handle_ids(self, selected_handle_ids: Iterable[int]) -> None:
        """Select handle IDs; an empty collection clears the selection."""
        self.selected_handle_ids = set(selected_handle_ids) or None

    def set_selected_chat_ids(self, selected_chat_ids: Iterable[int]) -> None:
        """Select chat IDs; an empty collection clears the selection."""
        self.selected_chat_ids = set(selected_chat_ids) or None

    def has_filters(self) -> bool:
        """Return whether any filter is set."""
        return (
            self.limit is not None
            or self.selected_chat_ids is not None
            or self.selected_handle_ids is not None
        )