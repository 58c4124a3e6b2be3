"""Contains all the custom-defined exceptions used in DYNTIME."""

from __future__ import annotations


class TimeScaleError(Exception):
    """Base exception for every failure surfaced by a time scale calculation.

    The underlying parse or lookup exception, when there is one, is chained as ``__cause__``.
    """


class DateError(TimeScaleError):
    """Exception indicating an invalid calendar date or Julian day was supplied."""


class DataFormatError(TimeScaleError):
    """Exception indicating a reference table is missing or malformed."""


class ConfigurationError(TimeScaleError):
    """Exception indicating an invalid observer, DST rule, or configuration value."""
