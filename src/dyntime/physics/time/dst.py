"""Daylight saving time rules and the DST boundary calculator.

A :class:`.DstRule` is a closed set of variants:

- :attr:`.DstRule.NONE`: the observer never applies DST.
- :class:`.FixedDstRule`: DST starts and ends on a :class:`.SundayRule` of every year.
- :class:`.SwitchingDstRule`: one fixed rule before a Julian day, another one after it.

Transitions happen `transition_hour` hours (UT) after 0h UT of the transition Sunday. Rules are
only applied from 1970 on, earlier dates never have DST.
"""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar

# Local Imports
from ...common.exceptions import ConfigurationError
from ...common.logger import dyntimeLogDebug, dyntimeLogError
from .. import constants as const
from .stardate import CalendarDate, daysInMonth

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from .context import TimeScaleContext
    from .observer import ObserverContext


DST_START_YEAR: int = 1970
"""``int``: default first year in which DST rules are applied."""

NEW_USA_RULE_JD: float = 2454102.0
"""``float``: Julian day (2007 January 1) from which the 2007 US rule is in force."""


def weekday(julian_day: float) -> int:
    """Day of the week of a Julian day, 0 for Sunday through 6 for Saturday."""
    return int(julian_day + 1.5) % 7


class SundayRule(Enum):
    """Closed set of "Nth (or last) Sunday of a month" transition dates.

    Each member carries its legacy integer code, the month, the ordinal of the Sunday in the
    month (``-1`` for the last one) and the offset in years from the year being evaluated.
    """

    LAST_SUNDAY_MARCH = (1, 3, -1, 0)
    LAST_SUNDAY_OCTOBER = (2, 10, -1, 0)
    LAST_SUNDAY_APRIL = (3, 4, -1, 0)
    LAST_SUNDAY_NOVEMBER = (4, 11, -1, 0)
    LAST_SUNDAY_MARCH_NEXT_YEAR = (5, 3, -1, 1)
    LAST_SUNDAY_APRIL_NEXT_YEAR = (6, 4, -1, 1)
    FIRST_SUNDAY_APRIL = (7, 4, 1, 0)
    FIRST_SUNDAY_NOVEMBER = (8, 11, 1, 0)
    SECOND_SUNDAY_MARCH = (9, 3, 2, 0)

    def __init__(self, code: int, month: int, ordinal: int, year_offset: int):
        """Unpack the member definition."""
        self.code = code
        self.month = month
        self.ordinal = ordinal
        self.year_offset = year_offset

    @classmethod
    def fromCode(cls, code: int) -> SundayRule:
        """Return the member with legacy integer `code` (1-9)."""
        for member in cls:
            if member.code == code:
                return member
        msg = f"Unknown Sunday rule code: {code}"
        dyntimeLogError(msg)
        raise ConfigurationError(msg)

    def julianDay(self, year: int) -> float:
        """Julian day at 0h UT of the Sunday this rule designates, relative to `year`."""
        year += self.year_offset
        if self.ordinal < 0:
            last_day = CalendarDate(year, self.month, daysInMonth(year, self.month)).toJulianDay()
            return last_day - weekday(last_day)

        first_day = CalendarDate(year, self.month, 1).toJulianDay()
        first_sunday = first_day + (7 - weekday(first_day)) % 7
        return first_sunday + 7 * (self.ordinal - 1)


class DstRule:
    """Daylight saving time rule of an observer.

    The base class is the "no DST" variant, use :attr:`.DstRule.NONE`. The named national
    rules are class attributes: ``N1``, ``N2``, ``S1``, ``S2``, ``USA_OLD``, ``USA_NEW`` and
    ``USA_AUTO``.
    """

    NONE: ClassVar[DstRule]
    N1: ClassVar[FixedDstRule]
    N2: ClassVar[FixedDstRule]
    S1: ClassVar[FixedDstRule]
    S2: ClassVar[FixedDstRule]
    USA_OLD: ClassVar[FixedDstRule]
    USA_NEW: ClassVar[FixedDstRule]
    USA_AUTO: ClassVar[SwitchingDstRule]

    def ruleAt(self, julian_day: float) -> FixedDstRule | None:
        """Return the fixed rule in force at `julian_day`, or ``None`` if DST never applies."""
        return None

    @staticmethod
    def custom(start_code: int, end_code: int, transition_hour: float = 0.0) -> DstRule:
        """Build a rule from the legacy integer encoding of its start and end Sundays.

        Args:
            start_code (``int``): :class:`.SundayRule` code of the start, 0 for unknown
            end_code (``int``): :class:`.SundayRule` code of the end, 0 for unknown
            transition_hour (``float``, optional): UT hour of the transitions

        Raises:
            :class:`.ConfigurationError`: if a code is outside 0-9

        Returns:
            :class:`.DstRule`: :attr:`.DstRule.NONE` when either code is unknown
        """
        for code in (start_code, end_code):
            if not 0 <= code <= 9:
                msg = f"Custom DST rule has invalid start/end fields: {start_code}, {end_code}"
                dyntimeLogError(msg)
                raise ConfigurationError(msg)

        if start_code == 0 or end_code == 0:
            dyntimeLogDebug("Custom DST rule with an unknown field, DST disabled")
            return DstRule.NONE

        return FixedDstRule(
            start=SundayRule.fromCode(start_code),
            end=SundayRule.fromCode(end_code),
            transition_hour=transition_hour,
            name="CUSTOM",
        )

    def __repr__(self):
        """Return a string representation of the "no DST" rule."""
        return "DstRule.NONE"


@dataclass(frozen=True, repr=False)
class FixedDstRule(DstRule):
    """DST between the same two Sundays of every year."""

    start: SundayRule
    end: SundayRule
    transition_hour: float = 1.0
    shift_hours: float = 1.0
    name: str = "CUSTOM"

    def ruleAt(self, julian_day: float) -> FixedDstRule:
        """A fixed rule is always in force."""
        return self

    @property
    def wraps_year(self) -> bool:
        """``bool``: whether DST ends in the year after it starts (southern hemisphere)."""
        return self.end.year_offset > self.start.year_offset

    def window(self, julian_day: float, year: int) -> tuple[float, float]:
        """Return the UT Julian days of the DST start and end around `julian_day`.

        Rules that wrap the year use the window that started in the previous year when
        `julian_day` lies before this year's start.
        """
        start = self.start.julianDay(year)
        if self.wraps_year and julian_day < start:
            year -= 1
            start = self.start.julianDay(year)

        offset = self.transition_hour / const.HOURS_PER_DAY
        return start + offset, self.end.julianDay(year) + offset

    def __repr__(self):
        """Return a string representation of this rule."""
        return f"DstRule.{self.name}({self.start.name} - {self.end.name})"


@dataclass(frozen=True, repr=False)
class SwitchingDstRule(DstRule):
    """One fixed rule before `switch_jd`, another from then on."""

    before: FixedDstRule
    after: FixedDstRule
    switch_jd: float
    name: str = "SWITCHING"

    def ruleAt(self, julian_day: float) -> FixedDstRule:
        """Return the rule in force at `julian_day`."""
        return self.before if julian_day < self.switch_jd else self.after

    def __repr__(self):
        """Return a string representation of this rule."""
        return f"DstRule.{self.name}({self.before!r} until JD {self.switch_jd}, then {self.after!r})"


DstRule.NONE = DstRule()
DstRule.N1 = FixedDstRule(SundayRule.LAST_SUNDAY_MARCH, SundayRule.LAST_SUNDAY_OCTOBER, name="N1")
DstRule.N2 = FixedDstRule(SundayRule.LAST_SUNDAY_APRIL, SundayRule.LAST_SUNDAY_NOVEMBER, name="N2")
DstRule.S1 = FixedDstRule(SundayRule.LAST_SUNDAY_OCTOBER, SundayRule.LAST_SUNDAY_MARCH_NEXT_YEAR, name="S1")
DstRule.S2 = FixedDstRule(SundayRule.LAST_SUNDAY_NOVEMBER, SundayRule.LAST_SUNDAY_APRIL_NEXT_YEAR, name="S2")
DstRule.USA_OLD = FixedDstRule(SundayRule.FIRST_SUNDAY_APRIL, SundayRule.LAST_SUNDAY_OCTOBER, name="USA_OLD")
DstRule.USA_NEW = FixedDstRule(SundayRule.SECOND_SUNDAY_MARCH, SundayRule.FIRST_SUNDAY_NOVEMBER, name="USA_NEW")
DstRule.USA_AUTO = SwitchingDstRule(DstRule.USA_OLD, DstRule.USA_NEW, NEW_USA_RULE_JD, name="USA_AUTO")


def getDSTStartEnd(context: TimeScaleContext, jd_ut: float, observer: ObserverContext) -> tuple[float, float] | None:
    """Return the start and end of DST, in UT, for the year of `jd_ut`.

    Args:
        context (:class:`.TimeScaleContext`): time scale context, supplies the first DST year
        jd_ut (``float``): Julian day in UT
        observer (:class:`.ObserverContext`): observer whose DST rule is used

    Returns:
        ``tuple`` | ``None``: start and end Julian days (UT), ``None`` when DST never applies
    """
    rule = observer.dst_rule.ruleAt(jd_ut)
    if rule is None:
        return None

    year = CalendarDate.fromJulianDay(jd_ut).year
    if year < context.dst_start_year:
        return None

    return rule.window(jd_ut, year)


def getDST(context: TimeScaleContext, jd_ut: float, observer: ObserverContext) -> float:
    """Return the DST shift, in hours, in force at `jd_ut` for `observer`.

    The last result is memoized in `context`, keyed on the Julian day and the observer.

    Args:
        context (:class:`.TimeScaleContext`): time scale context
        jd_ut (``float``): Julian day in UT
        observer (:class:`.ObserverContext`): observer whose DST rule is used

    Returns:
        ``float``: 0 outside DST, else the shift of the rule (usually 1 hour)
    """
    if observer.dst_rule is DstRule.NONE or jd_ut < const.UNIX_EPOCH_JD:
        return 0.0

    if context.last_dst is not None:
        last_jd, last_observer, last_value = context.last_dst
        if last_jd == jd_ut and last_observer == observer:
            return last_value

    value = 0.0
    window = getDSTStartEnd(context, jd_ut, observer)
    if window is not None and window[0] < jd_ut < window[1]:
        value = observer.dst_rule.ruleAt(jd_ut).shift_hours

    context.last_dst = (jd_ut, observer, value)
    return value
