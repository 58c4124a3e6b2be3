"""Logging, configuration, error types, and file helpers shared by the rest of the package."""

from __future__ import annotations

from datetime import datetime


def pathSafeTime(dt: datetime | None = None) -> str:
    """Return a time stamp of `dt` that can be embedded in a file name.

    Args:
        dt: The date and time to stamp. Defaults to now.

    Returns:
        ISO representation of `dt` without colons or decimal points.
    """
    if dt is None:
        dt = datetime.now()
    return dt.isoformat().replace(":", "-").replace(".", "")
