"""Human-readable file size strings."""

_DIVISOR = 1024.0
_UNITS = ("B", "KB", "MB", "GB", "TB")


def format_file_size(total_bytes: int) -> str:
    """Format a byte count such as ``5612000`` as ``"5.35 MB"``."""
    value = float(total_bytes)
    unit = _UNITS[0]
    for next_unit in _UNITS[1:]:
        if value <= _DIVISOR:
            break
        value /= _DIVISOR
        unit = next_unit
    return f"{value:.2f} {unit}"