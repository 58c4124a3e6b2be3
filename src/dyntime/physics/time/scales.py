"""Defines the :class:`.Scale` enumeration and the scale-tagged :class:`.Moment`."""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from math import isfinite

# Local Imports
from ...common.exceptions import DateError
from ...common.logger import dyntimeLogError
from .stardate import CalendarDate


class Scale(Enum):
    """Time scales a :class:`.Moment` can be expressed in.

    TAI, TCB and TCG are derived scales, reachable only through the ``getJDIn*`` helpers.
    """

    LOCAL = "LT"
    """Civil time of the observer: UTC plus time zone plus daylight saving time."""

    UT1 = "UT1"
    """Universal time, tied to the rotation of the Earth."""

    UTC = "UTC"
    """Coordinated universal time, atomic time stepped by leap seconds."""

    TT = "TT"
    """Terrestrial time, TAI + 32.184 s."""

    TDB = "TDB"
    """Barycentric dynamical time."""


@dataclass(frozen=True)
class Moment:
    """Immutable instant: a Julian day tagged with the time scale it is expressed in.

    The Julian day is meaningless without its scale. Conversions between scales preserve the
    instant, not the number.
    """

    julian_day: float | Decimal
    """``float`` | ``Decimal``: Julian day in :attr:`.scale`."""

    scale: Scale
    """:class:`.Scale`: scale of :attr:`.julian_day`."""

    def __post_init__(self):
        """Normalize integral Julian days and reject non-numeric or non-finite ones."""
        if not isinstance(self.scale, Scale):
            msg = f"Moment scale must be a Scale, got {self.scale!r}"
            dyntimeLogError(msg)
            raise DateError(msg)

        julian_day = self.julian_day
        if isinstance(julian_day, int) and not isinstance(julian_day, bool):
            julian_day = float(julian_day)
            object.__setattr__(self, "julian_day", julian_day)

        if not isinstance(julian_day, float | Decimal) or not isfinite(julian_day):
            msg = f"Moment Julian day must be a finite float or Decimal, got {julian_day!r}"
            dyntimeLogError(msg)
            raise DateError(msg)

    @property
    def is_exact(self) -> bool:
        """``bool``: whether the Julian day is held as a ``decimal.Decimal``."""
        return isinstance(self.julian_day, Decimal)

    @property
    def calendar_date(self) -> CalendarDate:
        """:class:`.CalendarDate`: calendar date of the Julian day, in :attr:`.scale`."""
        return CalendarDate.fromJulianDay(self.julian_day)

    @classmethod
    def fromCalendar(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: float = 0.0,
        scale: Scale = Scale.UTC,
        exact: bool = False,
    ) -> Moment:
        """Build a :class:`.Moment` from a calendar date.

        Args:
            year (``int``): astronomical year
            month (``int``): month of the year
            day (``int``): day of the month
            hour (``int``, optional): hour of the day
            minute (``int``, optional): minute of the hour
            second (``float``, optional): seconds of the minute
            scale (:class:`.Scale`, optional): scale the date is expressed in. Defaults to UTC.
            exact (``bool``, optional): hold the Julian day as a ``decimal.Decimal``

        Raises:
            :class:`.DateError`: for an invalid calendar date
        """
        date = CalendarDate(year, month, day, hour, minute, second)
        julian_day = date.toExactJulianDay() if exact else date.toJulianDay()
        return cls(julian_day, scale)

    def __str__(self):
        """Return a string representation of this :class:`.Moment`."""
        return f"Moment(JD {self.julian_day} {self.scale.value})"
