"""Data structures produced and used by the ``typedstream`` parser.

``typedstream`` is the binary serialization format behind ``NSArchiver``;
it stores typed C and Objective-C values and object graphs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class TypedStreamError(Exception):
    """Raised when a ``typedstream`` cannot be deserialized."""

    @classmethod
    def out_of_bounds(cls, index: int, length: int) -> TypedStreamError:
        return cls(f"Index {index} is outside of range {length}!")

    @classmethod
    def invalid_pointer(cls, pointer: int) -> TypedStreamError:
        return cls(f"Failed to parse pointer: {pointer:#x}")

    @classmethod
    def invalid_array(cls) -> TypedStreamError:
        return cls("Failed to parse array data")

    @classmethod
    def invalid_header(cls) -> TypedStreamError:
        return cls("Invalid typedstream header!")

    @classmethod
    def string_parse_error(cls, why: Exception) -> TypedStreamError:
        return cls(f"Failed to parse string: {why}")


@dataclass(frozen=True)
class Class:
    """A class stored in the stream, with its encoded version."""

    name: str
    version: int


class OutputKind(Enum):
    """The kinds of value read out of a stream."""

    STRING = auto()
    SIGNED_INTEGER = auto()
    UNSIGNED_INTEGER = auto()
    FLOAT = auto()
    DOUBLE = auto()
    BYTE = auto()
    ARRAY = auto()
    CLASS = auto()


@dataclass(frozen=True)
class OutputData:
    """A single value read from the stream, tagged with its kind.

    ``value`` is a ``str`` for strings, an ``int`` for integers and bytes of
    unknown type, a ``float`` for floats and doubles, ``bytes`` for arrays
    and a :class:`Class` for classes.
    """

    kind: OutputKind
    value: Any


class ArchivableKind(Enum):
    """The kinds of archived item found in a stream."""

    OBJECT = auto()
    DATA = auto()
    CLASS = auto()
    PLACEHOLDER = auto()
    TYPE = auto()


@dataclass
class Archivable:
    """An item archived in the stream.

    * ``OBJECT``: an instance of ``class_info`` with its values in ``data``,
      in order of appearance, since property names are not stored.
    * ``DATA``: values in ``data`` that belong to no class.
    * ``CLASS``: a class in ``class_info``, usually part of an inheritance
      chain, holding no data itself.
    * ``PLACEHOLDER``: a reserved slot in the object table.
    * ``TYPE``: types in ``types`` that were never replaced by an object.
    """

    kind: ArchivableKind
    class_info: Class | None = None
    data: list[OutputData] = field(default_factory=list)
    types: list[Type] = field(default_factory=list)

    @classmethod
    def of_object(cls, class_info: Class, data: list[OutputData]) -> Archivable:
        return cls(ArchivableKind.OBJECT, class_info=class_info, data=list(data))

    @classmethod
    def of_data(cls, data: list[OutputData]) -> Archivable:
        return cls(ArchivableKind.DATA, data=list(data))

    @classmethod
    def of_class(cls, class_info: Class) -> Archivable:
        return cls(ArchivableKind.CLASS, class_info=class_info)

    @classmethod
    def placeholder(cls) -> Archivable:
        return cls(ArchivableKind.PLACEHOLDER)

    @classmethod
    def of_types(cls, types: list[Type]) -> Archivable:
        return cls(ArchivableKind.TYPE, types=list(types))

    def _first_of(self, class_names: tuple[str, ...], kind: OutputKind) -> Any | None:
        if self.kind is not ArchivableKind.OBJECT or self.class_info is None:
            return None
        if self.class_info.name not in class_names or not self.data:
            return None
        first = self.data[0]
        return first.value if first.kind is kind else None

    def as_nsstring(self) -> str | None:
        """Return the text of an ``NSString`` or ``NSMutableString`` object."""
        return self._first_of(("NSString", "NSMutableString"), OutputKind.STRING)

    def as_nsnumber_int(self) -> int | None:
        """Return the signed integer held by an ``NSNumber`` object."""
        return self._first_of(("NSNumber",), OutputKind.SIGNED_INTEGER)

    def as_nsnumber_float(self) -> float | None:
        """Return the double held by an ``NSNumber`` object."""
        return self._first_of(("NSNumber",), OutputKind.DOUBLE)


class TypeKind(Enum):
    """Primitive type encodings that can appear in a stream."""

    UTF8_STRING = auto()
    EMBEDDED_DATA = auto()
    OBJECT = auto()
    SIGNED_INT = auto()
    UNSIGNED_INT = auto()
    FLOAT = auto()
    DOUBLE = auto()
    STRING = auto()
    ARRAY = auto()
    UNKNOWN = auto()


_BYTE_TYPES = {
    0x40: TypeKind.OBJECT,
    0x2B: TypeKind.UTF8_STRING,
    0x2A: TypeKind.EMBEDDED_DATA,
    0x66: TypeKind.FLOAT,
    0x64: TypeKind.DOUBLE,
    **dict.fromkeys((0x63, 0x69, 0x6C, 0x71, 0x73), TypeKind.SIGNED_INT),
    **dict.fromkeys((0x43, 0x49, 0x4C, 0x51, 0x53), TypeKind.UNSIGNED_INT),
}

_ARRAY_START = 0x5B


@dataclass(frozen=True)
class Type:
    """A type encoding read from the stream.

    ``value`` holds the text of a ``STRING`` type, the length of an
    ``ARRAY`` type and the raw byte of an ``UNKNOWN`` type.
    """

    kind: TypeKind
    value: Any = None

    @classmethod
    def from_byte(cls, byte: int) -> Type:
        """Decode a single type byte."""
        kind = _BYTE_TYPES.get(byte)
        if kind is None:
            return cls(TypeKind.UNKNOWN, byte)
        return cls(kind)

    @classmethod
    def new_string(cls, text: str) -> Type:
        """Make a reusable text type, such as a class name."""
        return cls(TypeKind.STRING, text)

    @classmethod
    def get_array_length(cls, types: bytes | bytearray | list[int]) -> list[Type] | None:
        """Parse an array encoding like ``[123c]`` into its length.

        Returns ``None`` unless the data starts with ``[`` followed by digits.
        """
        data = bytes(types)
        if not data or data[0] != _ARRAY_START:
            return None
        digits = bytearray()
        for byte in data[1:]:
            if not 0x30 <= byte <= 0x39:
                break
            digits.append(byte)
        if not digits:
            return None
        return [cls(TypeKind.ARRAY, int(digits.decode("ascii")))]