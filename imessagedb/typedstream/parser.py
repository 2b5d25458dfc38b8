"""Deserialization of ``typedstream`` data, as used by ``NSAttributedString``.

A stream begins with a header holding the format version, a signature and
the system version, followed by typed values. Each type and class is written
literally the first time it appears and referenced by index afterwards.
"""

from __future__ import annotations

import struct

from imessagedb.typedstream.models import (
    Archivable,
    ArchivableKind,
    Class,
    OutputData,
    OutputKind,
    Type,
    TypedStreamError,
    TypeKind,
)

# Marks an integer stored in the next two bytes
_I_16 = 0x81
# Marks an integer stored in the next four bytes
_I_32 = 0x82
# Marks a float or double; the type decides the width
_DECIMAL = 0x83
# Marks the start of a new object
_START = 0x84
# Marks the absence of more data, e.g. the end of an inheritance chain
_EMPTY = 0x85
# Marks the last byte of an object
_END = 0x86
# Values at or above this tag are indexes into already-seen tables
_REFERENCE_TAG = 0x92

_ARRAY_START = 0x5B


def _as_f32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def _copy(item: Archivable) -> Archivable:
    return Archivable(item.kind, item.class_info, list(item.data), list(item.types))


class TypedStreamReader:
    """Reads the archived objects out of a ``typedstream``."""

    def __init__(self, stream: bytes | bytearray) -> None:
        self._stream = bytes(stream)
        self._idx = 0
        # Types in order of first appearance, referenced by index later
        self._types_table: list[list[Type]] = []
        # Archived items in order of first appearance, referenced by index later
        self._object_table: list[Archivable] = []
        # Embedded types already copied into the object table
        self._seen_embedded_types: set[int] = set()
        # Position of the current placeholder in the object table
        self._placeholder: int | None = None

    # Low-level reads

    def _get_byte(self, byte_idx: int) -> int:
        if byte_idx < len(self._stream):
            return self._stream[byte_idx]
        raise TypedStreamError.out_of_bounds(byte_idx, len(self._stream))

    def _current_byte(self) -> int:
        return self._get_byte(self._idx)

    def _next_byte(self) -> int:
        return self._get_byte(self._idx + 1)

    def _read_exact_bytes(self, n: int) -> bytes:
        end = self._idx + n
        if end > len(self._stream):
            raise TypedStreamError.out_of_bounds(end, len(self._stream))
        data = self._stream[self._idx:end]
        self._idx = end
        return data

    def _read_exact_as_string(self, n: int) -> str:
        data = self._read_exact_bytes(n)
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as why:
            raise TypedStreamError.string_parse_error(why) from why

    def _read_signed_int(self) -> int:
        while True:
            byte = self._current_byte()
            if byte == _I_16:
                self._idx += 1
                return struct.unpack("<h", self._read_exact_bytes(2))[0]
            if byte == _I_32:
                self._idx += 1
                return struct.unpack("<i", self._read_exact_bytes(4))[0]
            if byte > _REFERENCE_TAG and self._next_byte() != _END:
                self._idx += 1
                continue
            self._idx += 1
            return byte - 0x100 if byte >= 0x80 else byte

    def _read_unsigned_int(self) -> int:
        byte = self._current_byte()
        if byte == _I_16:
            self._idx += 1
            return struct.unpack("<H", self._read_exact_bytes(2))[0]
        if byte == _I_32:
            self._idx += 1
            return struct.unpack("<I", self._read_exact_bytes(4))[0]
        self._idx += 1
        return byte

    def _read_float(self) -> float:
        byte = self._current_byte()
        if byte == _DECIMAL:
            self._idx += 1
            return struct.unpack("<f", self._read_exact_bytes(4))[0]
        if byte not in (_I_16, _I_32):
            self._idx += 1
        return _as_f32(float(self._read_signed_int()))

    def _read_double(self) -> float:
        byte = self._current_byte()
        if byte == _DECIMAL:
            self._idx += 1
            return struct.unpack("<d", self._read_exact_bytes(8))[0]
        if byte not in (_I_16, _I_32):
            self._idx += 1
        return float(self._read_signed_int())

    def _read_string(self) -> str:
        length = self._read_unsigned_int()
        return self._read_exact_as_string(length)

    def _read_type(self) -> list[Type]:
        length = self._read_unsigned_int()
        types = self._read_exact_bytes(length)
        if types[:1] == bytes([_ARRAY_START]):
            array = Type.get_array_length(types)
            if array is None:
                raise TypedStreamError.invalid_array()
            return array
        return [Type.from_byte(byte) for byte in types]

    def _read_pointer(self) -> int:
        pointer = self._current_byte()
        self._idx += 1
        if pointer < _REFERENCE_TAG:
            raise TypedStreamError.invalid_pointer(pointer)
        return pointer - _REFERENCE_TAG

    # Classes, objects and types

    def _read_class(self) -> int | list[Archivable]:
        """Return an index into the object table or a new class hierarchy."""
        byte = self._current_byte()
        if byte == _START:
            while self._current_byte() == _START:
                self._idx += 1
            length = self._read_unsigned_int()
            if length >= _REFERENCE_TAG:
                return length - _REFERENCE_TAG

            class_name = self._read_exact_as_string(length)
            version = self._read_unsigned_int()
            self._types_table.append([Type.new_string(class_name)])

            hierarchy = [Archivable.of_class(Class(class_name, version))]
            parent = self._read_class()
            if isinstance(parent, list):
                hierarchy.extend(parent)
            return hierarchy
        if byte == _EMPTY:
            self._idx += 1
            return []
        return self._read_pointer()

    def _table_object(self, index: int) -> Archivable | None:
        if 0 <= index < len(self._object_table):
            return self._object_table[index]
        return None

    def _read_object(self) -> Archivable | None:
        byte = self._current_byte()
        if byte == _START:
            result = self._read_class()
            if isinstance(result, int):
                return self._table_object(result)
            self._object_table.extend(result)
            return None
        if byte == _EMPTY:
            self._idx += 1
            return None
        return self._table_object(self._read_pointer())

    def _read_embedded_data(self) -> Archivable | None:
        # Skip the start marker
        self._idx += 1
        types = self._get_type(embedded=True)
        if types is None:
            return None
        return self._read_types(types)

    def _get_type(self, embedded: bool) -> list[Type] | None:
        """Read the current types literally or from the types table."""
        byte = self._current_byte()
        if byte == _START:
            self._idx += 1
            object_types = self._read_type()
            if embedded:
                self._object_table.append(Archivable.of_types(object_types))
                self._seen_embedded_types.add(max(len(self._object_table) - 1, 0))
            self._types_table.append(object_types)
            return list(object_types)
        if byte == _END:
            return None

        # Skip repeated types, for example in a dictionary
        while self._current_byte() == self._next_byte():
            self._idx += 1

        ref_tag = self._read_pointer()
        if not 0 <= ref_tag < len(self._types_table):
            return None
        result = self._types_table[ref_tag]
        if embedded and ref_tag not in self._seen_embedded_types:
            # Only the first reference to an embedded type is kept
            self._object_table.append(Archivable.of_types(result))
            self._seen_embedded_types.add(ref_tag)
        return list(result)

    def _read_types(self, found_types: list[Type]) -> Archivable | None:
        """Read values from the stream as described by ``found_types``."""
        out: list[OutputData] = []
        is_obj = False

        for found in found_types:
            kind = found.kind
            if kind is TypeKind.UTF8_STRING:
                out.append(OutputData(OutputKind.STRING, self._read_string()))
            elif kind is TypeKind.EMBEDDED_DATA:
                return self._read_embedded_data()
            elif kind is TypeKind.OBJECT:
                is_obj = True
                self._placeholder = len(self._object_table)
                self._object_table.append(Archivable.placeholder())
                found_object = self._read_object()
                if found_object is not None:
                    item = _copy(found_object)
                    if item.kind is ArchivableKind.OBJECT:
                        # An object that already has data is returned as is
                        if item.data:
                            self._placeholder = None
                            self._object_table.pop()
                            return item
                        out.extend(item.data)
                    elif item.kind is ArchivableKind.CLASS:
                        out.append(OutputData(OutputKind.CLASS, item.class_info))
                    elif item.kind is ArchivableKind.DATA:
                        out.extend(item.data)
            elif kind is TypeKind.SIGNED_INT:
                out.append(OutputData(OutputKind.SIGNED_INTEGER, self._read_signed_int()))
            elif kind is TypeKind.UNSIGNED_INT:
                out.append(
                    OutputData(OutputKind.UNSIGNED_INTEGER, self._read_unsigned_int())
                )
            elif kind is TypeKind.FLOAT:
                out.append(OutputData(OutputKind.FLOAT, self._read_float()))
            elif kind is TypeKind.DOUBLE:
                out.append(OutputData(OutputKind.DOUBLE, self._read_double()))
            elif kind is TypeKind.UNKNOWN:
                out.append(OutputData(OutputKind.BYTE, found.value))
            elif kind is TypeKind.STRING:
                out.append(OutputData(OutputKind.STRING, found.value))
            elif kind is TypeKind.ARRAY:
                out.append(OutputData(OutputKind.ARRAY, self._read_exact_bytes(found.value)))

        spot = self._placeholder
        if spot is not None and out:
            table = self._object_table
            following = self._table_object(spot + 1)
            current = self._table_object(spot)
            if out[-1].kind is OutputKind.CLASS:
                # A class whose data has not been read yet
                table[spot] = Archivable.of_object(out[-1].value, [])
            elif following is not None and following.kind is ArchivableKind.CLASS:
                # The slot after the placeholder holds the top of a new hierarchy
                table[spot] = Archivable.of_object(following.class_info, out)
                self._placeholder = None
                return _copy(table[spot])
            elif current is not None and current.kind is ArchivableKind.OBJECT:
                # Data for a class that was already seen
                current.data.extend(out)
                self._placeholder = None
                return _copy(current)
            else:
                # A field of the parent object whose name is unknown
                table[spot] = Archivable.of_data(out)
                self._placeholder = None
                return _copy(table[spot])

        if out and not is_obj:
            return Archivable.of_data(out)
        return None

    # Public interface

    def validate_header(self) -> None:
        """Check that the stream starts with the macOS/iOS header."""
        typedstream_version = self._read_unsigned_int()
        signature = self._read_string()
        system_version = self._read_signed_int()
        if (
            typedstream_version != 4
            or signature != "streamtyped"
            or system_version != 1000
        ):
            raise TypedStreamError.invalid_header()

    def parse(self) -> list[Archivable]:
        """Return the archived items in the order they occur in the stream.

        Property names are not stored, so an object's values are kept in
        order of appearance; inheritance chains are not retained.
        """
        results: list[Archivable] = []
        self.validate_header()

        while self._idx < len(self._stream):
            if self._current_byte() == _END:
                self._idx += 1
                continue

            found_types = self._get_type(embedded=False)
            if found_types is None:
                continue
            try:
                result = self._read_types(found_types)
            except TypedStreamError:
                continue
            if result is not None:
                results.append(result)

        return results