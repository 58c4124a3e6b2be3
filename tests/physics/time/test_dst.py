from __future__ import annotations

# Third Party Imports
import pytest

# DYNTIME Imports
from dyntime.common.exceptions import ConfigurationError
from dyntime.physics.time.context import TimeScaleContext
from dyntime.physics.time.dst import (
    NEW_USA_RULE_JD,
    DstRule,
    FixedDstRule,
    SundayRule,
    getDST,
    getDSTStartEnd,
    weekday,
)
from dyntime.physics.time.observer import ObserverContext
from dyntime.physics.time.stardate import julianDay

ONE_MINUTE = 1.0 / 1440.0


def testWeekday():
    """Test the day of the week of known dates."""
    assert weekday(julianDay(2015, 3, 8)) == 0
    assert weekday(julianDay(2000, 1, 1)) == 6
    assert weekday(julianDay(2000, 1, 1, 23, 59)) == 6


@pytest.mark.parametrize(
    ("rule", "year", "expected"),
    [
        (SundayRule.SECOND_SUNDAY_MARCH, 2015, (2015, 3, 8)),
        (SundayRule.FIRST_SUNDAY_NOVEMBER, 2015, (2015, 11, 1)),
        (SundayRule.LAST_SUNDAY_MARCH, 2015, (2015, 3, 29)),
        (SundayRule.LAST_SUNDAY_OCTOBER, 2015, (2015, 10, 25)),
        (SundayRule.FIRST_SUNDAY_APRIL, 2006, (2006, 4, 2)),
        (SundayRule.LAST_SUNDAY_APRIL, 2021, (2021, 4, 25)),
        (SundayRule.LAST_SUNDAY_NOVEMBER, 2021, (2021, 11, 28)),
        (SundayRule.LAST_SUNDAY_MARCH_NEXT_YEAR, 2015, (2016, 3, 27)),
        (SundayRule.LAST_SUNDAY_APRIL_NEXT_YEAR, 2020, (2021, 4, 25)),
    ],
)
def testSundayRules(rule: SundayRule, year: int, expected: tuple[int, int, int]):
    """Test the Sunday designated by every rule."""
    assert rule.julianDay(year) == julianDay(*expected)


def testSundayRuleCodes():
    """Test the legacy integer codes of the Sunday rules."""
    assert [SundayRule.fromCode(code) for code in range(1, 10)] == list(SundayRule)
    with pytest.raises(ConfigurationError):
        SundayRule.fromCode(10)


class TestUSANewRule:
    """Test the 2007 US rule over 2015."""

    @pytest.fixture(autouse=True)
    def _setUp(self, context: TimeScaleContext):
        """Build the observer, and the DST window of 2015."""
        self.context = context
        self.observer = ObserverContext(time_zone=-5.0, dst_rule=DstRule.USA_NEW)
        self.start, self.end = getDSTStartEnd(context, julianDay(2015, 6, 1), self.observer)

    def testWindow(self):
        """Test that DST starts before March 15 and ends after October 25."""
        assert self.start < julianDay(2015, 3, 15)
        assert self.end > julianDay(2015, 10, 25)
        assert self.start == julianDay(2015, 3, 8, 1)
        assert self.end == julianDay(2015, 11, 1, 1)

    def testTransitions(self):
        """Test the DST shift on both sides of each transition."""
        assert getDST(self.context, self.start - ONE_MINUTE, self.observer) == 0.0
        assert getDST(self.context, self.start + ONE_MINUTE, self.observer) == 1.0
        assert getDST(self.context, self.end - ONE_MINUTE, self.observer) == 1.0
        assert getDST(self.context, self.end + ONE_MINUTE, self.observer) == 0.0

    def testMemo(self):
        """Test that the last result is remembered per Julian day and observer."""
        julian_day = julianDay(2015, 7, 4)
        assert getDST(self.context, julian_day, self.observer) == 1.0
        assert self.context.last_dst == (julian_day, self.observer, 1.0)

        # A different observer misses the memo
        assert getDST(self.context, julian_day, ObserverContext(dst_rule=DstRule.N1, time_zone=1.0)) == 1.0
        assert getDST(self.context, julian_day, ObserverContext(dst_rule=DstRule.S1)) == 0.0


def testSouthernRule(context: TimeScaleContext):
    """Test a rule whose window crosses the new year."""
    observer = ObserverContext(time_zone=10.0, dst_rule=DstRule.S1)
    assert getDST(context, julianDay(2015, 2, 1), observer) == 1.0
    assert getDST(context, julianDay(2015, 7, 1), observer) == 0.0
    assert getDST(context, julianDay(2015, 12, 1), observer) == 1.0

    start, end = getDSTStartEnd(context, julianDay(2015, 2, 1), observer)
    assert start == julianDay(2014, 10, 26, 1)
    assert end == julianDay(2015, 3, 29, 1)


def testAutoRule(context: TimeScaleContext):
    """Test that the US rule switches in 2007."""
    observer = ObserverContext(dst_rule=DstRule.USA_AUTO)
    assert DstRule.USA_AUTO.ruleAt(NEW_USA_RULE_JD - 1.0) is DstRule.USA_OLD
    assert DstRule.USA_AUTO.ruleAt(NEW_USA_RULE_JD) is DstRule.USA_NEW

    # Between the second Sunday of March and the first Sunday of April
    assert getDST(context, julianDay(2006, 3, 20), observer) == 0.0
    assert getDST(context, julianDay(2015, 3, 20), observer) == 1.0


def testNoDST(context: TimeScaleContext):
    """Test that DST never applies before 1970 or without a rule."""
    observer = ObserverContext(dst_rule=DstRule.N1)
    assert getDST(context, julianDay(1965, 7, 1), observer) == 0.0
    assert getDSTStartEnd(context, julianDay(1965, 7, 1), observer) is None

    assert getDST(context, julianDay(2015, 7, 1), ObserverContext()) == 0.0
    assert getDSTStartEnd(context, julianDay(2015, 7, 1), ObserverContext()) is None


def testDSTStartYear():
    """Test that the first DST year comes from the context."""
    context = TimeScaleContext(dst_start_year=2000)
    observer = ObserverContext(dst_rule=DstRule.N1)
    assert getDST(context, julianDay(1995, 7, 1), observer) == 0.0
    assert getDST(context, julianDay(2005, 7, 1), observer) == 1.0


def testCustomRule(context: TimeScaleContext):
    """Test building rules from the legacy integer encoding."""
    assert DstRule.custom(0, 2) is DstRule.NONE
    assert DstRule.custom(1, 0) is DstRule.NONE

    rule = DstRule.custom(1, 2, transition_hour=2.0)
    assert isinstance(rule, FixedDstRule)
    assert (rule.start, rule.end) == (SundayRule.LAST_SUNDAY_MARCH, SundayRule.LAST_SUNDAY_OCTOBER)

    start, end = getDSTStartEnd(context, julianDay(2015, 6, 1), ObserverContext(dst_rule=rule))
    assert start == julianDay(2015, 3, 29, 2)
    assert end == julianDay(2015, 10, 25, 2)

    with pytest.raises(ConfigurationError):
        DstRule.custom(10, 2)
    with pytest.raises(ConfigurationError):
        DstRule.custom(1, -1)


def testRepr():
    """Test the string representation of rules."""
    assert repr(DstRule.NONE) == "DstRule.NONE"
    assert repr(DstRule.N1) == "DstRule.N1(LAST_SUNDAY_MARCH - LAST_SUNDAY_OCTOBER)"
    assert "until JD 2454102.0" in repr(DstRule.USA_AUTO)
