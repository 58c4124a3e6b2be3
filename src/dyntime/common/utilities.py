"""Various helper functions that are used across multiple modules."""

from __future__ import annotations

# Standard Library Imports
from math import isfinite
from typing import TYPE_CHECKING

# Local Imports
from .exceptions import DataFormatError
from .logger import dyntimeLogError

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable, Sequence
    from os import PathLike


def loadDatFile(file_name: str | PathLike) -> list[str]:
    """Load the raw lines of a whitespace-delimited dat file.

    Args:
        file_name (``str``): name of dat file to load

    Raises:
        :class:`.DataFormatError`: if the file cannot be found, cannot be read as text, or is empty

    Returns:
        ``list``: lines of the file, trailing newlines removed
    """
    try:
        with open(file_name, encoding="utf-8") as data_file:
            lines = [line.rstrip("\n") for line in data_file]
    except FileNotFoundError as err:
        msg = f"Could not find DAT file: {file_name}"
        dyntimeLogError(msg)
        raise DataFormatError(msg) from err
    except (OSError, UnicodeDecodeError) as err:
        msg = f"Could not read DAT file {file_name}: {err}"
        dyntimeLogError(msg)
        raise DataFormatError(msg) from err

    if not any(line.strip() for line in lines):
        msg = f"Empty DAT file: {file_name}"
        dyntimeLogError(msg)
        raise DataFormatError(msg)

    return lines


def textToLines(text: str | Iterable[str]) -> list[str]:
    """Normalize replacement table content given either as one string or as a sequence of lines."""
    if isinstance(text, str):
        return text.splitlines()
    return [str(line).rstrip("\n") for line in text]


def splitRecords(
    lines: Sequence[str],
    comment_prefixes: tuple[str, ...] = ("!", "#"),
    skip_header: bool = False,
) -> list[tuple[int, list[str]]]:
    """Split dat lines into whitespace-separated fields, dropping blanks and comments.

    Args:
        lines (``list``): raw lines of the table
        comment_prefixes (``tuple``, optional): leading characters that mark a comment line
        skip_header (``bool``, optional): whether the first line is a header to ignore

    Returns:
        ``list``: ``(line_number, fields)`` pairs, line numbers starting at 1
    """
    records = []
    for line_number, line in enumerate(lines, start=1):
        if skip_header and line_number == 1:
            continue
        stripped = line.strip()
        if not stripped or stripped.startswith(comment_prefixes):
            continue
        records.append((line_number, stripped.split()))

    return records


def parseFloatFields(fields: Sequence[str], source: str, line_number: int) -> list[float]:
    """Convert every field of a record to ``float``.

    Raises:
        :class:`.DataFormatError`: if a field is not numeric, or is not finite (``nan``, ``inf``)
    """
    try:
        values = [float(field) for field in fields]
    except ValueError as err:
        msg = f"Non-numeric field in {source}, line {line_number}: {' '.join(fields)!r}"
        dyntimeLogError(msg)
        raise DataFormatError(msg) from err

    if not all(isfinite(value) for value in values):
        msg = f"Non-finite field in {source}, line {line_number}: {' '.join(fields)!r}"
        dyntimeLogError(msg)
        raise DataFormatError(msg)

    return values
