"""Terminal progress messages that can be overwritten later."""

import sys

_PROCESSING = "\rProcessing..."
_CARRIAGE_RETURN = "\r"


def _emit(text: str) -> None:
    stream = sys.stdout
    stream.write(text)
    try:
        stream.flush()
    except OSError:
        pass


def processing() -> None:
    """Write a progress message that a later write can overwrite."""
    _emit(_PROCESSING)


def done_processing() -> None:
    """Return the cursor to the line start so output can overwrite it."""
    _emit(_CARRIAGE_RETURN)