# imessagedb

Building blocks for reading a Messages `chat.db` SQLite database. The package can:

- open the database read-only;
- decode `NSKeyedArchiver` property lists;
- deserialize `typedstream` message bodies;
- format dates, intervals and file sizes.

It uses only the standard library.

## Installation

From a checkout of the project:

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Opening a database

```python
from imessagedb.dirs import default_db_path
from imessagedb.table import get_connection, get_db_size, TableError
from imessagedb.size import format_file_size

path = default_db_path()          # $HOME/Library/Messages/chat.db
try:
    conn = get_connection(path)   # read-only sqlite3.Connection
    print(format_file_size(get_db_size(path)))   # e.g. "5.35 MB"
except TableError as err:
    print(err)
```

`get_connection` and `get_db_size` raise `TableError` in these cases:

- the path is missing;
- the path is not a file;
- the file cannot be opened or read.

`imessagedb.table` also holds the database's table and column names as
constants, such as `MESSAGE`, `CHAT`, `ATTRIBUTED_BODY` and
`MESSAGE_PAYLOAD`. It also holds default names such as `ME`, `YOU` and
`UNKNOWN`.

### macOS database or iOS backup

`imessagedb.platform.Platform.determine(path)` returns `Platform.iOS` when
`path` is the root of an iOS backup. It returns `Platform.macOS` in every
other case.

It raises `TableError` if the path points at the database file inside a
backup rather than at the backup's root. `Platform.from_cli("ios")` matches
user input case-insensitively and returns `None` for anything unknown.

## Dates

Timestamps in the database count nanoseconds from 2001-01-01 UTC.

```python
from imessagedb.dates import get_offset, get_local_time, format_date, readable_diff

when = get_local_time(674526582885055488, get_offset())
print(format_date(when))          # e.g. "May 20, 2020  9:10:11 AM"
```

- `get_local_time` returns an aware `datetime` in the local time zone. It
  raises `MessageError` for a timestamp that cannot be represented.
- `format_date` also accepts an exception and then returns its message.
- `readable_diff(start, end)` renders an interval such as
  `"2 days, 5 hours, 22 minutes, 34 seconds"`. It returns `None` in these
  cases:
  - either argument is not a `datetime`;
  - `end` comes before `start`.

## Property lists

`imessagedb.plist` works on property lists in the form `plistlib` produces
them.

`parse_ns_keyed_archiver` starts at the object that `$top.root` points to. It
replaces each UID pointer into `$objects` with the value it refers to, which
gives a plain nested structure.

```python
import plistlib
from imessagedb.plist import parse_ns_keyed_archiver, get_string_from_dict

payload = parse_ns_keyed_archiver(plistlib.loads(blob))
url = get_string_from_dict(payload, "URL")
```

There are two kinds of helper:

- `extract_dictionary`, `extract_array_key`, `extract_bytes_key` and
  `extract_int_key` raise `PlistParseError` when a key is missing or holds the
  wrong type. `extract_int_key` reads a real number and truncates it.
- `get_string_from_dict`, `get_value_from_dict`, `get_bool_from_dict`,
  `get_string_from_nested_dict` and `get_float_from_nested_dict` return
  `None` instead of raising.

## typedstream bodies

```python
from imessagedb.typedstream.parser import TypedStreamReader

items = TypedStreamReader(blob).parse()
text = next((item.as_nsstring() for item in items if item.as_nsstring()), None)
```

`parse` checks the stream header and returns the `Archivable` items in the
order they appear. If the header is wrong or the data runs out, it raises
`TypedStreamError`.

The data model is in `imessagedb.typedstream.models`:

- `Archivable` has the convenience accessors `as_nsstring`, `as_nsnumber_int`
  and `as_nsnumber_float`.
- The other model classes are `OutputData`, `Class` and `Type`.

## Other helpers

- `imessagedb.bundle_id.parse_balloon_bundle_id` extracts an app's bundle
  ID from a balloon bundle ID.
- `imessagedb.query_context.QueryContext` holds query filters:
  - an optional message limit;
  - sets of selected chat IDs and handle IDs; an empty set clears a selection.

  `has_filters()` reports whether any filter is set.
- `imessagedb.output.processing()` writes a `Processing...` line to standard
  output. `done_processing()` returns the cursor so later output overwrites
  that line.

## What this package does not do

The package is a library only. It does not provide:

- a command-line tool or an exporter;
- models for the rows of the message, chat, handle or attachment tables;
- queries over those tables.

`get_connection` gives you a `sqlite3.Connection`; reading the tables is up
to the caller.