"""Parsing of Apple bundle IDs found on message balloons."""

from __future__ import annotations


def parse_balloon_bundle_id(bundle_id: str | None) -> str | None:
    """Extract the app bundle ID from a balloon's bundle ID.

    A single-part ID is returned as is; otherwise the third colon-separated
    part is returned, or ``None`` when there is none.
    """
    if bundle_id is None:
        return None
    parts = bundle_id.split(":")
    if len(parts) == 1:
        return parts[0]
    return parts[2] if len(parts) > 2 else None