"""
This module contains helper functions for formatting data into human-readable strings,
used mainly when logging the outcome of a recording.
"""

from datetime import timedelta


def format_timedelta(td_object: timedelta) -> str:
    """
    Formats a timedelta object into a "HH:MM:SS.mmm" string.

    Args:
        td_object: The timedelta object to format.

    Returns:
        For example, a timedelta of 7261.5 seconds becomes "02:01:01.500".
        Returns "00:00:00.000" if the input is not a timedelta.
    """
    if not isinstance(td_object, timedelta):
        return "00:00:00.000"

    total_ms = max(int(td_object.total_seconds() * 1000), 0)
    total_seconds, milliseconds = divmod(total_ms, 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02}:{minutes:02}:{seconds:02}.{milliseconds:03}"


def formatted_size(size_bytes: int) -> str:
    """
    Converts a size in bytes to a human-readable string (e.g., B, KB, MB, GB, TB).

    For example, 1536 becomes "1.50 KB", and 2097152 becomes "2.00 MB".
    """
    if size_bytes <= 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB", "PB"]
    factor = 1024.0
    size = float(size_bytes)

    for unit in units:
        if size < factor:
            return f"{int(size)} B" if unit == "B" else f"{size:.2f} {unit}"
        size /= factor
    return f"{size * factor:.2f} {units[-1]}"
