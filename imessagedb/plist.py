"""Helpers for property list data and ``NSKeyedArchiver`` documents.

Property lists are handled in the form :mod:`plistlib` produces: ``dict``,
``list``, ``str``, ``bytes``, ``bool``, ``int``, ``float``, ``datetime`` and
:class:`plistlib.UID`. The main entry point is :func:`parse_ns_keyed_archiver`;
for ordinary property lists use :func:`plist_as_dictionary`.
"""

from __future__ import annotations

import math
from plistlib import UID
from typing import Any

_I64_MAX = 2**63 - 1
_I64_MIN = -(2**63)


class PlistParseError(Exception):
    """Raised when property list data does not have the expected shape."""

    @classmethod
    def missing_key(cls, key: str) -> PlistParseError:
        return cls(f"Missing expected key: {key}")

    @classmethod
    def invalid_type(cls, key: str, expected: str) -> PlistParseError:
        return cls(f"Invalid data type for {key}: expected {expected}")

    @classmethod
    def invalid_type_index(cls, idx: int, expected: str) -> PlistParseError:
        return cls(f"Invalid data type at index {idx}: expected {expected}")

    @classmethod
    def no_value_at_index(cls, idx: int) -> PlistParseError:
        return cls(f"Payload has no value at index {idx}")

    @classmethod
    def invalid_dictionary_size(cls, keys: int, values: int) -> PlistParseError:
        return cls(f"Dictionary has {keys} keys and {values} values")


def parse_ns_keyed_archiver(plist: Any) -> Any:
    """Resolve the UID pointers of an ``NSKeyedArchiver`` document.

    Starting at the object that ``$top.root`` points to, every pointer into
    ``$objects`` is replaced with the value it references.
    """
    body = plist_as_dictionary(plist)
    objects = extract_array_key(body, "$objects")
    root = _extract_uid_key(extract_dictionary(body, "$top"), "root")
    return _follow_uid(objects, root)


def _object_at(objects: list[Any], idx: int) -> Any:
    if 0 <= idx < len(objects):
        return objects[idx]
    raise PlistParseError.no_value_at_index(idx)


def _follow_uid(
    objects: list[Any],
    root: int,
    parent: str | None = None,
    item: Any = None,
) -> Any:
    """Follow pointers recursively, promoting values to where they are referenced."""
    if item is None:
        item = _object_at(objects, root)

    if isinstance(item, list):
        return [
            _follow_uid(objects, entry.data, parent)
            for entry in item
            if isinstance(entry, UID)
        ]

    if isinstance(item, dict):
        result: dict[str, Any] = {}
        if "NS.relative" in item:
            # A dictionary that only points at a single other value
            relative = item["NS.relative"]
            if isinstance(relative, UID) and parent is not None:
                result[parent] = _follow_uid(objects, relative.data, parent)
        elif "NS.keys" in item and "NS.objects" in item:
            keys = extract_array_key(item, "NS.keys")
            values = extract_array_key(item, "NS.objects")
            if len(keys) != len(values):
                raise PlistParseError.invalid_dictionary_size(len(keys), len(values))
            for idx, (key_ref, value_ref) in enumerate(zip(keys, values)):
                key_index = _uid_value(key_ref, idx)
                value_index = _uid_value(value_ref, idx)
                key = _object_at(objects, key_index)
                if not isinstance(key, str):
                    raise PlistParseError.invalid_type_index(key_index, "string")
                result[key] = _follow_uid(objects, value_index, key)
        else:
            for key, value in item.items():
                if key == "$class":
                    continue
                if isinstance(value, UID):
                    result[key] = _follow_uid(objects, value.data, key)
                elif parent is not None:
                    result[parent] = _follow_uid(objects, root, parent, value)
        return result

    if isinstance(item, UID):
        return _follow_uid(objects, item.data)

    return item


def _uid_value(value: Any, idx: int) -> int:
    if not isinstance(value, UID):
        raise PlistParseError.invalid_type_index(idx, "uid")
    return value.data


def plist_as_dictionary(plist: Any) -> dict[str, Any]:
    """Return ``plist`` if it is a dictionary."""
    if not isinstance(plist, dict):
        raise PlistParseError.invalid_type("body", "dictionary")
    return plist


def _get(body: dict[str, Any], key: str) -> Any:
    try:
        return body[key]
    except KeyError:
        raise PlistParseError.missing_key(key) from None


def extract_dictionary(body: dict[str, Any], key: str) -> dict[str, Any]:
    """Return the dictionary stored under ``key``."""
    value = _get(body, key)
    if not isinstance(value, dict):
        raise PlistParseError.invalid_type(key, "dictionary")
    return value


def extract_array_key(body: dict[str, Any], key: str) -> list[Any]:
    """Return the array stored under ``key``."""
    value = _get(body, key)
    if not isinstance(value, list):
        raise PlistParseError.invalid_type(key, "array")
    return value


def _extract_uid_key(body: dict[str, Any], key: str) -> int:
    value = _get(body, key)
    if not isinstance(value, UID):
        raise PlistParseError.invalid_type(key, "uid")
    return value.data


def extract_bytes_key(body: dict[str, Any], key: str) -> bytes:
    """Return the data stored under ``key``."""
    value = _get(body, key)
    if not isinstance(value, (bytes, bytearray)):
        raise PlistParseError.invalid_type(key, "data")
    return bytes(value)


def extract_int_key(body: dict[str, Any], key: str) -> int:
    """Return the real number stored under ``key``, truncated to an integer."""
    value = _get(body, key)
    if not isinstance(value, float):
        raise PlistParseError.invalid_type(key, "int")
    if math.isnan(value):
        return 0
    if value >= _I64_MAX:
        return _I64_MAX
    if value <= _I64_MIN:
        return _I64_MIN
    return int(value)


def get_string_from_dict(payload: Any, key: str) -> str | None:
    """Return a non-empty string from ``{key: "value"}``."""
    if not isinstance(payload, dict):
        return None
    value = payload.get(key)
    return value if isinstance(value, str) and value else None


def get_value_from_dict(payload: Any, key: str) -> Any | None:
    """Return the value stored under ``key`` of a dictionary."""
    if not isinstance(payload, dict):
        return None
    return payload.get(key)


def get_bool_from_dict(payload: Any, key: str) -> bool | None:
    """Return a boolean from ``{key: true}``."""
    if not isinstance(payload, dict):
        return None
    value = payload.get(key)
    return value if isinstance(value, bool) else None


def _nested(payload: Any, key: str) -> Any | None:
    if not isinstance(payload, dict):
        return None
    inner = payload.get(key)
    if not isinstance(inner, dict):
        return None
    return inner.get(key)


def get_string_from_nested_dict(payload: Any, key: str) -> str | None:
    """Return a non-empty string from ``{key: {key: "value"}}``."""
    value = _nested(payload, key)
    return value if isinstance(value, str) and value else None


def get_float_from_nested_dict(payload: Any, key: str) -> float | None:
    """Return a real number from ``{key: {key: 1.2}}``."""
    value = _nested(payload, key)
    return value if isinstance(value, float) else None