import pytest

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


def test_can_get_array_good():
    items = bytes([0x5B, 0x39, 0x30, 0x34, 0x63, 0x5D])
    assert Type.get_array_length(items) == [Type(TypeKind.ARRAY, 904)]


def test_cant_get_array_bad():
    items = bytes([0x39, 0x30, 0x34, 0x63, 0x5D])
    assert Type.get_array_length(items) is None


def test_cant_get_array_without_digits():
    assert Type.get_array_length(bytes([0x5B, 0x63, 0x5D])) is None


def test_cant_get_array_empty():
    assert Type.get_array_length(b"") is None


def test_get_array_accepts_list_of_ints():
    assert Type.get_array_length([0x5B, 0x37, 0x5D]) == [Type(TypeKind.ARRAY, 7)]


@pytest.mark.parametrize(
    ("byte", "kind"),
    [
        (0x40, TypeKind.OBJECT),
        (0x2B, TypeKind.UTF8_STRING),
        (0x2A, TypeKind.EMBEDDED_DATA),
        (0x66, TypeKind.FLOAT),
        (0x64, TypeKind.DOUBLE),
        (0x63, TypeKind.SIGNED_INT),
        (0x69, TypeKind.SIGNED_INT),
        (0x6C, TypeKind.SIGNED_INT),
        (0x71, TypeKind.SIGNED_INT),
        (0x73, TypeKind.SIGNED_INT),
        (0x43, TypeKind.UNSIGNED_INT),
        (0x49, TypeKind.UNSIGNED_INT),
        (0x4C, TypeKind.UNSIGNED_INT),
        (0x51, TypeKind.UNSIGNED_INT),
        (0x53, TypeKind.UNSIGNED_INT),
    ],
)
def test_from_byte_known(byte, kind):
    assert Type.from_byte(byte) == Type(kind)


def test_from_byte_unknown_keeps_byte():
    assert Type.from_byte(0x7A) == Type(TypeKind.UNKNOWN, 0x7A)


def test_new_string():
    assert Type.new_string("NSString") == Type(TypeKind.STRING, "NSString")


def test_as_nsstring():
    nsstring = Archivable.of_object(
        Class("NSString", 1), [OutputData(OutputKind.STRING, "Hello world")]
    )
    assert nsstring.as_nsstring() == "Hello world"


def test_as_nsstring_mutable():
    text = Archivable.of_object(
        Class("NSMutableString", 1), [OutputData(OutputKind.STRING, "Example")]
    )
    assert text.as_nsstring() == "Example"


def test_as_nsstring_wrong_class():
    number = Archivable.of_object(
        Class("NSNumber", 1), [OutputData(OutputKind.SIGNED_INTEGER, 100)]
    )
    assert number.as_nsstring() is None


def test_as_nsnumber_int():
    number = Archivable.of_object(
        Class("NSNumber", 1), [OutputData(OutputKind.SIGNED_INTEGER, 100)]
    )
    assert number.as_nsnumber_int() == 100
    assert number.as_nsnumber_float() is None


def test_as_nsnumber_int_wrong_class():
    text = Archivable.of_object(
        Class("NSString", 1), [OutputData(OutputKind.STRING, "Hello world")]
    )
    assert text.as_nsnumber_int() is None


def test_as_nsnumber_float():
    number = Archivable.of_object(
        Class("NSNumber", 1), [OutputData(OutputKind.DOUBLE, 100.001)]
    )
    assert number.as_nsnumber_float() == 100.001
    assert number.as_nsnumber_int() is None


def test_as_nsnumber_float_wrong_class():
    text = Archivable.of_object(
        Class("NSString", 1), [OutputData(OutputKind.STRING, "Hello world")]
    )
    assert text.as_nsnumber_float() is None


def test_data_is_not_an_object():
    data = Archivable.of_data([OutputData(OutputKind.STRING, "Hello world")])
    assert data.kind is ArchivableKind.DATA
    assert data.as_nsstring() is None


def test_empty_object_has_no_string():
    empty = Archivable.of_object(Class("NSString", 1), [])
    assert empty.as_nsstring() is None


def test_constructors_copy_data():
    values = [OutputData(OutputKind.SIGNED_INTEGER, 1)]
    item = Archivable.of_data(values)
    values.append(OutputData(OutputKind.SIGNED_INTEGER, 2))
    assert item.data == [OutputData(OutputKind.SIGNED_INTEGER, 1)]


def test_placeholder_and_types():
    assert Archivable.placeholder() == Archivable(ArchivableKind.PLACEHOLDER)
    typed = Archivable.of_types([Type(TypeKind.OBJECT)])
    assert typed.kind is ArchivableKind.TYPE
    assert typed.types == [Type(TypeKind.OBJECT)]


def test_error_messages():
    assert "10" in str(TypedStreamError.out_of_bounds(10, 5))
    with pytest.raises(TypedStreamError, match="header"):
        raise TypedStreamError.invalid_header()