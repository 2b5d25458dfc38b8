import sqlite3

import pytest

from imessagedb.table import TableError, get_connection, get_db_size


@pytest.fixture
def db_file(tmp_path):
    path = tmp_path / "chat.db"
    conn = sqlite3.connect(path)
    conn.execute("CREATE TABLE message (ROWID INTEGER PRIMARY KEY, text TEXT)")
    conn.execute("INSERT INTO message (text) VALUES ('hello')")
    conn.commit()
    conn.close()
    return path


def test_can_connect_and_read(db_file):
    conn = get_connection(db_file)
    try:
        rows = conn.execute("SELECT text FROM message").fetchall()
    finally:
        conn.close()
    assert rows == [("hello",)]


def test_connection_is_read_only(db_file):
    conn = get_connection(db_file)
    try:
        with pytest.raises(sqlite3.OperationalError):
            conn.execute("INSERT INTO message (text) VALUES ('nope')")
    finally:
        conn.close()


def test_directory_is_not_a_database(tmp_path):
    with pytest.raises(TableError, match="is not a database!"):
        get_connection(tmp_path)


def test_missing_database(tmp_path):
    missing = tmp_path / "missing.db"
    with pytest.raises(TableError, match="Database not found at"):
        get_connection(missing)


def test_db_size_matches_file(tmp_path):
    path = tmp_path / "blob.bin"
    data = b"x" * 4096
    path.write_bytes(data)
    assert get_db_size(path) == len(data)


def test_db_size_of_real_database(db_file):
    assert get_db_size(db_file) == db_file.stat().st_size


def test_db_size_missing_raises(tmp_path):
    with pytest.raises(TableError):
        get_db_size(tmp_path / "missing.db")