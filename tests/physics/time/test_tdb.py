from __future__ import annotations

# Third Party Imports
import pytest
from numpy import isclose

# DYNTIME Imports
from dyntime.physics.constants import DEG2RAD, J2000, JULIAN_DAYS_PER_MILLENNIUM, TAI_1977_JD
from dyntime.physics.time.context import TimeScaleContext
from dyntime.physics.time.observer import ObserverContext
from dyntime.physics.time.stardate import julianDay
from dyntime.physics.time.tdb import (
    fastTDBminusTT,
    getTCBminusTDB,
    getTCGminusTCB,
    getTCGminusTT,
    jplMassCorrection,
    julianMillennia,
    tdbMinusTT,
    topocentricTerm,
)

GEOCENTER = ObserverContext(on_earth=False)
GREENWICH = ObserverContext(latitude=51.4769 * DEG2RAD, height=46.0)

NEAR_J2000 = [julianDay(year, month, 1) for year in (1971, 1985, 2000, 2012, 2029) for month in (1, 4, 7, 10)]


def testJulianMillennia():
    """Test the time argument of the series."""
    assert julianMillennia(J2000) == 0.0
    assert julianMillennia(J2000 + JULIAN_DAYS_PER_MILLENNIUM) == 1.0


@pytest.mark.parametrize("jd_tt", NEAR_J2000)
def testFastAgreesWithFull(context: TimeScaleContext, jd_tt: float):
    """Test that the 7-term approximation agrees with the full series within 30 years of J2000."""
    full = tdbMinusTT(context, jd_tt, GREENWICH, prefer_precision=True)
    fast = tdbMinusTT(context, jd_tt, GREENWICH, prefer_precision=False)
    assert abs(full - fast) < 1e-3
    assert abs(fast - fastTDBminusTT(julianMillennia(jd_tt))) < 1e-15


def testFastSeriesAnnualPeriod(context: TimeScaleContext):
    """Test that the 7-term approximation follows the annual term of the full series."""
    jd_tt = J2000 + 90.0
    full = tdbMinusTT(context, jd_tt, GEOCENTER, prefer_precision=True)
    fast = fastTDBminusTT(julianMillennia(jd_tt))
    assert isclose(fast, 1.64e-3, atol=2e-5)
    assert abs(full - fast) < 2e-5

    # One Julian year later the dominant term is back in phase
    next_year = fastTDBminusTT(julianMillennia(jd_tt + 365.25))
    assert abs(next_year - fast) < 3e-5
    # Half a year later it has changed sign
    assert fastTDBminusTT(julianMillennia(jd_tt + 182.625)) < -1.5e-3


@pytest.mark.parametrize("jd_tt", NEAR_J2000)
def testAmplitude(context: TimeScaleContext, jd_tt: float):
    """Test that TDB-TT stays within its known 1.7 ms amplitude."""
    assert abs(tdbMinusTT(context, jd_tt, GEOCENTER)) < 1.8e-3


def testFastOnlyNearJ2000(context: TimeScaleContext):
    """Test that the full series is used far from J2000 even when speed is preferred."""
    jd_tt = julianDay(1700, 1, 1)
    fast = tdbMinusTT(context, jd_tt, GEOCENTER, prefer_precision=False)
    context.clearCache()
    full = tdbMinusTT(context, jd_tt, GEOCENTER, prefer_precision=True)
    assert fast == full


def testTopocentricTerm():
    """Test the size of the topocentric term, and that it vanishes off the Earth."""
    millennia = julianMillennia(julianDay(2010, 6, 1))
    jd_ut1 = julianDay(2010, 6, 1)
    assert topocentricTerm(millennia, jd_ut1, GEOCENTER) == 0.0

    equator = ObserverContext()
    values = [topocentricTerm(millennia, jd_ut1 + hour / 24.0, equator) for hour in range(24)]
    assert max(abs(value) for value in values) < 2.2e-6
    # Diurnal term changes sign over a day
    assert min(values) < 0.0 < max(values)


def testJPLMassCorrection():
    """Test that the planetary mass correction is at the nanosecond level near J2000."""
    assert abs(jplMassCorrection(0.0)) < 1e-8
    assert abs(jplMassCorrection(0.2)) < 1e-8


def testMemo(context: TimeScaleContext):
    """Test that the last value is reused within one second, for the same observer and flag."""
    jd_tt = julianDay(2018, 12, 1, 12)
    value = tdbMinusTT(context, jd_tt, GREENWICH)
    assert context.last_tdb_minus_tt == (jd_tt, GREENWICH, True, value)

    assert tdbMinusTT(context, jd_tt + 0.5 / 86400.0, GREENWICH) == value
    assert context.last_tdb_minus_tt[0] == jd_tt

    tdbMinusTT(context, jd_tt, GEOCENTER)
    assert context.last_tdb_minus_tt[1] == GEOCENTER


def testCoordinateTimesAtEpoch():
    """Test that the coordinate time offsets vanish at 1977 January 1.0 TAI."""
    assert getTCBminusTDB(TAI_1977_JD) == 0.0
    assert getTCGminusTT(TAI_1977_JD) == 0.0
    # Only the periodic part of TCG-TCB remains at the epoch
    assert isclose(getTCGminusTCB(TAI_1977_JD), -8.4e-5, atol=3e-6)


def testCoordinateTimesAtJ2000():
    """Test the coordinate time offsets at J2000."""
    assert isclose(getTCBminusTDB(J2000), 11.2537, atol=1e-3)
    assert isclose(getTCGminusTT(J2000), 0.5058, atol=1e-4)
    # TCB runs faster than TCG
    assert getTCGminusTCB(J2000) < -10.0
    assert getTCGminusTCB(J2000 + 3652.5) < getTCGminusTCB(J2000)
