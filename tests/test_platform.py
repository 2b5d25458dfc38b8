import pytest

from imessagedb.platform import Platform
from imessagedb.table import DEFAULT_PATH_IOS, TableError


@pytest.mark.parametrize("text", ["macos", "MACOS", "MacOS"])
def test_can_parse_macos_any_case(text):
    assert Platform.from_cli(text) is Platform.macOS


@pytest.mark.parametrize("text", ["ios", "IOS", "iOS"])
def test_can_parse_ios_any_case(text):
    assert Platform.from_cli(text) is Platform.iOS


@pytest.mark.parametrize("text", ["mac", "iphone", ""])
def test_cant_parse_invalid(text):
    assert Platform.from_cli(text) is None


def test_cant_build_ends_with_ios_backup():
    with pytest.raises(TableError):
        Platform.determine(DEFAULT_PATH_IOS)


def test_cant_build_ends_with_ios_backup_nested(tmp_path):
    with pytest.raises(TableError):
        Platform.determine(tmp_path / DEFAULT_PATH_IOS)


def test_determine_ios_backup_root(tmp_path):
    db = tmp_path / DEFAULT_PATH_IOS
    db.parent.mkdir(parents=True)
    db.write_bytes(b"")
    assert Platform.determine(tmp_path) is Platform.iOS


def test_determine_macos_file(tmp_path):
    db = tmp_path / "chat.db"
    db.write_bytes(b"")
    assert Platform.determine(db) is Platform.macOS


def test_determine_missing_defaults_to_macos(tmp_path):
    assert Platform.determine(tmp_path / "missing.db") is Platform.macOS


def test_default_is_macos():
    assert Platform.default() is Platform.macOS


@pytest.mark.parametrize(
    ("text", "expected"),
    [("MACOS", "macOS"), ("ios", "iOS")],
)
def test_display(text, expected):
    assert str(Platform.from_cli(text)) == expected