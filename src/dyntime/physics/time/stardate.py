"""Defines :class:`.CalendarDate` and the conversions between calendar dates and Julian days.

Calendar dates use astronomical year numbering (year ``0`` is 1 BC, year ``-1`` is 2 BC, ...)
and follow the proleptic Julian calendar before 1582 October 5 and the Gregorian calendar from
1582 October 15. The ten days in between never existed and are rejected.

Every conversion is available in ``float`` precision, and in ``decimal.Decimal`` precision
for callers that need the Julian day to better than a microsecond:

.. code-block:: python

    date = CalendarDate(2000, 1, 1, 12)
    date.toJulianDay()                 # 2451545.0
    date.toExactJulianDay()            # Decimal('2451545.0')
    CalendarDate.fromJulianDay(2451545.0) == date

References:
    :cite:t:`meeus_1998_astro`, Chapter 7
"""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from datetime import datetime, timedelta
from decimal import Decimal
from math import floor, isfinite

# Local Imports
from ...common.exceptions import DateError
from ...common.logger import dyntimeLogError
from .. import constants as const

GREGORIAN_REFORM: tuple[int, int, int] = (1582, 10, 15)
"""``tuple``: first date of the Gregorian calendar."""

JULIAN_REFORM_END: tuple[int, int, int] = (1582, 10, 5)
"""``tuple``: first date that was skipped by the Gregorian reform."""

_DAYS_IN_MONTH = (31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)


def isGregorian(year: int, month: int, day: int) -> bool:
    """Return whether a calendar date belongs to the Gregorian calendar."""
    return (year, month, day) >= GREGORIAN_REFORM


def isLeapYear(year: int, gregorian: bool = True) -> bool:
    """Return whether `year` is a leap year in the Gregorian or Julian calendar."""
    if not gregorian:
        return year % 4 == 0
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def daysInMonth(year: int, month: int) -> int:
    """Number of days of `month` in `year`, taking the calendar of that year into account."""
    if month == 2 and isLeapYear(year, gregorian=year > GREGORIAN_REFORM[0]):
        return 29
    return _DAYS_IN_MONTH[month - 1]


def _dayNumber(year: int, month: int, day: int) -> int:
    """Return the Julian day number at noon of the given calendar date.

    Integer form of Meeus eq. 7.1, so the result is exact for any year.
    """
    gregorian = isGregorian(year, month, day)
    if month <= 2:
        year -= 1
        month += 12

    correction = 0
    if gregorian:
        century = year // 100
        correction = 2 - century + century // 4

    return (1461 * (year + 4716)) // 4 + (306001 * (month + 1)) // 10000 + day + correction - 1524


@dataclass(frozen=True)
class CalendarDate:
    """Immutable calendar date and time of day."""

    year: int
    """``int``: astronomical year number."""

    month: int
    """``int``: month of the year, 1-12."""

    day: int
    """``int``: day of the month."""

    hour: int = 0
    """``int``: hour of the day, 0-23."""

    minute: int = 0
    """``int``: minute of the hour, 0-59."""

    second: float | Decimal = 0.0
    """``float``: seconds of the minute, including a possible leap second."""

    def __post_init__(self):
        """Validate the date fields.

        Raises:
            :class:`.DateError`: if any field is out of range or the date falls in the 1582 gap
        """
        if not 1 <= self.month <= 12:
            self._fail(f"Month must be in 1-12, got {self.month}")
        if not 1 <= self.day <= daysInMonth(self.year, self.month):
            self._fail(f"Invalid day {self.day} for {self.year}-{self.month:02d}")
        if JULIAN_REFORM_END <= (self.year, self.month, self.day) < GREGORIAN_REFORM:
            self._fail(f"Date {self.year}-{self.month:02d}-{self.day:02d} does not exist (Gregorian reform)")
        if not 0 <= self.hour < 24:
            self._fail(f"Hour must be in 0-23, got {self.hour}")
        if not 0 <= self.minute < 60:
            self._fail(f"Minute must be in 0-59, got {self.minute}")
        if not 0 <= self.second < 61:
            self._fail(f"Second must be in [0, 61), got {self.second}")

    @staticmethod
    def _fail(msg: str):
        dyntimeLogError(msg)
        raise DateError(msg)

    @property
    def fractional_year(self) -> float:
        """``float``: year plus month/day fraction, counting every month as 30 days."""
        return self.year + (self.month - 1 + (self.day - 1.0) / 30.0) / 12.0

    @property
    def day_fraction(self) -> float:
        """``float``: elapsed fraction of the day at this time."""
        return (self.hour * 3600 + self.minute * 60 + float(self.second)) / const.DAYS2SEC

    def toJulianDay(self) -> float:
        """Return the Julian day of this date and time as a ``float``."""
        return _dayNumber(self.year, self.month, self.day) - 0.5 + self.day_fraction

    def toExactJulianDay(self) -> Decimal:
        """Return the Julian day of this date and time as a ``decimal.Decimal``.

        The result is exact for integral seconds and whatever ``float`` seconds carry otherwise.
        """
        seconds = Decimal(self.hour * 3600 + self.minute * 60) + Decimal(self.second)
        return Decimal(_dayNumber(self.year, self.month, self.day)) - Decimal("0.5") + seconds / Decimal(86400)

    @classmethod
    def fromJulianDay(cls, julian_day: float | Decimal) -> CalendarDate:
        """Build the calendar date and time of a Julian day (Meeus, chapter 7).

        Args:
            julian_day (``float`` | ``Decimal``): Julian day to convert

        Raises:
            :class:`.DateError`: if `julian_day` is not a finite number

        Returns:
            :class:`.CalendarDate`: date, with ``Decimal`` seconds when `julian_day` is a ``Decimal``
        """
        exact = isinstance(julian_day, Decimal)
        if not exact and not isfinite(julian_day):
            msg = f"Julian day must be finite, got {julian_day}"
            dyntimeLogError(msg)
            raise DateError(msg)

        shifted = julian_day + (Decimal("0.5") if exact else 0.5)
        day_number = floor(shifted)
        fraction = shifted - day_number

        alpha_base = day_number
        if day_number >= 2299161:
            alpha = (4 * day_number - 7468865) // 146097
            alpha_base = day_number + 1 + alpha - alpha // 4

        b_term = alpha_base + 1524
        c_term = (20 * b_term - 2442) // 7305
        d_term = (1461 * c_term) // 4
        e_term = (10000 * (b_term - d_term)) // 306001

        day = b_term - d_term - (306001 * e_term) // 10000
        month = e_term - 1 if e_term < 14 else e_term - 13
        year = c_term - 4716 if month > 2 else c_term - 4715

        if exact:
            seconds = fraction * Decimal(86400)
        else:
            # Round-off can push the time of day to 24h
            seconds = min(fraction * const.DAYS2SEC, const.DAYS2SEC - 1e-6)
        hour = int(seconds // 3600)
        minute = int((seconds - hour * 3600) // 60)
        second = seconds - hour * 3600 - minute * 60

        return cls(year, month, day, hour, minute, second)

    def __str__(self):
        """ISO-like representation, with the astronomical year number."""
        return f"{self.year:05d}-{self.month:02d}-{self.day:02d}T{self.hour:02d}:{self.minute:02d}:{float(self.second):09.6f}"


def julianDay(year: int, month: int, day: int, hour: int = 0, minute: int = 0, second: float = 0.0) -> float:
    """Shortcut for ``CalendarDate(...).toJulianDay()``."""
    return CalendarDate(year, month, day, hour, minute, second).toJulianDay()


def datetimeToJulianDay(date_time: datetime) -> float:
    """Convert a ``datetime`` object to a Julian day.

    Args:
        date_time (``datetime``): ``datetime`` object to be converted, its time zone is ignored

    Returns:
        ``float``: Julian day of `date_time`
    """
    return julianDay(
        date_time.year,
        date_time.month,
        date_time.day,
        date_time.hour,
        date_time.minute,
        date_time.second + date_time.microsecond / 1e6,
    )


def julianDayToDatetime(julian_day: float) -> datetime:
    """Convert a Julian day to a naive ``datetime`` object, rounded to the microsecond.

    Raises:
        :class:`.DateError`: if the date is outside the range of ``datetime``
    """
    date = CalendarDate.fromJulianDay(julian_day)
    if not 1 <= date.year <= 9999 or not isGregorian(date.year, date.month, date.day):
        msg = f"Julian day {julian_day} cannot be represented as a datetime"
        dyntimeLogError(msg)
        raise DateError(msg)

    date_time = datetime(date.year, date.month, date.day, date.hour, date.minute)
    return date_time + timedelta(microseconds=round(float(date.second) * 1e6))
