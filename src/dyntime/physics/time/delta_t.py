"""TT-UT1 (Delta T) interpolation over the historical table, with its extrapolations.

- Before the table: ``-20 + 32 t**2``, ``t = (year - 1820) / 100`` (Morrison & Stephenson 2004).
- Inside the table: natural cubic spline.
- After the table: linear continuation of the last table interval.
- More than a year after the table, when extrapolation is allowed: the long range formulae of
  Espenak & Meeus (NASA/TP-2006-214141).

Values outside the modern, directly observed era (before 1955, or from the long range formulae)
are corrected from the lunar tidal acceleration adopted by Morrison & Stephenson (-26"/cy^2) to
the current one (-25.858"/cy^2).

References:
    #. Morrison, L. V. & Stephenson, F. R., JHA 35, 327 (2004)
    #. Espenak, F. & Meeus, J., Five Millennium Canon of Solar Eclipses, NASA/TP-2006-214141
    #. Chapront, J. et al., A&A 387, 700 (2002)
"""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Local Imports
from ...common.logger import dyntimeLogDebug
from .. import constants as const
from .dst import getDST
from .scales import Scale
from .stardate import CalendarDate

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from .context import TimeScaleContext
    from .observer import ObserverContext
    from .scales import Moment
    from .tables import DeltaTTable


SECULAR_CORRECTION_EPOCH_JD: float = 2435109.0
"""``float``: Julian day (1955.0) at which the tidal acceleration correction vanishes."""

OBSERVED_ERA_START: float = 1955.0
"""``float``: fractional year from which tabulated values need no tidal correction."""

EXTRAPOLATION_MARGIN_DAYS: float = 365.0
"""``float``: days after the table end during which the linear continuation is used."""


def _secularCorrectionSeconds(jd_tt: float) -> float:
    """TT-UT1 correction, in seconds, for the revised lunar tidal acceleration."""
    centuries = (jd_tt - SECULAR_CORRECTION_EPOCH_JD) / const.JULIAN_DAYS_PER_CENTURY
    acceleration_change = const.MOON_SECULAR_ACCELERATION - const.MORRISON_STEPHENSON_ACCELERATION
    return -0.91072 * acceleration_change * centuries * centuries


def dynamicalTimeCorrectionForMoonSecularAcceleration(jd: float) -> float:
    """Correct a dynamical time Julian day for the revised lunar tidal acceleration.

    Morrison & Stephenson use -26"/cy^2 for the secular acceleration of the Moon. The correction
    to the current value is a few tenths of a second in modern times, and a few minutes in
    antiquity (-202 s in year -2000, -12 s in year 1000, 0 in 1955).

    Args:
        jd (``float``): Julian day in TT or TDB

    Returns:
        ``float``: corrected Julian day, in the same scale
    """
    return jd + _secularCorrectionSeconds(jd) / const.DAYS2SEC


def _longRangeDeltaT(date: CalendarDate) -> float:
    """Espenak & Meeus polynomial for dates well past the table."""
    fractional_year = date.fractional_year
    if date.year < 2050:
        years = fractional_year - 2000.0
        return 62.92 + 0.32217 * years + 0.005589 * years * years

    centuries = (fractional_year - 1820.0) / 100.0
    if date.year < 2150:
        return -20.0 + 32.0 * centuries * centuries - 0.5628 * (2150.0 - fractional_year)
    return -20.0 + 32.0 * centuries * centuries


def deltaTFromTable(table: DeltaTTable, jd_ut: float, allow_extrapolation: bool = True) -> float:
    """Evaluate TT-UT1 at `jd_ut` over a parsed table.

    Args:
        table (:class:`.DeltaTTable`): TT-UT1 samples and spline
        jd_ut (``float``): Julian day in UT
        allow_extrapolation (``bool``, optional): use the long range formulae a year past the table

    Returns:
        ``float``: TT-UT1 in seconds
    """
    date = CalendarDate.fromJulianDay(jd_ut)
    if jd_ut < table.min_jd:
        centuries = (date.fractional_year - 1820.0) / 100.0
        value = -20.0 + 32.0 * centuries * centuries
    elif jd_ut < table.max_jd:
        value = table.interpolate(jd_ut)
    else:
        value = table.extrapolate(jd_ut)

    long_range = allow_extrapolation and jd_ut > table.max_jd + EXTRAPOLATION_MARGIN_DAYS
    if long_range:
        dyntimeLogDebug(f"TT-UT1 at JD {jd_ut} is past the table end, using the long range formulae")
        value = _longRangeDeltaT(date)

    if date.fractional_year < OBSERVED_ERA_START or long_range:
        value += _secularCorrectionSeconds(jd_ut + value / const.DAYS2SEC)

    return value


def ttMinusUt1AtDate(context: TimeScaleContext, jd_ut: float) -> float:
    """Return TT-UT1 in seconds for a Julian day in UT.

    The last result is memoized in `context`. This is the date-only entry point used to
    estimate UT from dynamical time.
    """
    if context.last_date_delta_t is not None and context.last_date_delta_t[0] == jd_ut:
        return context.last_date_delta_t[1]

    value = deltaTFromTable(context.delta_t, jd_ut, context.allow_extrapolation)
    context.last_date_delta_t = (jd_ut, value)
    return value


def localToUniversal(context: TimeScaleContext, jd_local: float, observer: ObserverContext) -> tuple[float, float]:
    """Reduce a local time Julian day to UT.

    Removes the time zone, then the DST shift found at the resulting instant. The shift is
    re-evaluated once at the corrected instant and dropped if DST is not in force there.

    Returns:
        ``tuple``: Julian day in UT, and the DST shift in hours that was applied
    """
    jd_ut = jd_local - observer.time_zone / const.HOURS_PER_DAY
    dst = getDST(context, jd_ut, observer)
    if dst != 0.0:
        corrected = jd_ut - dst / const.HOURS_PER_DAY
        if getDST(context, corrected, observer) != 0.0:
            return corrected, dst
    return jd_ut, 0.0


def universalTimeEstimate(context: TimeScaleContext, moment: Moment, observer: ObserverContext) -> float:
    """Return the Julian day in UT of `moment`, close enough to look up UT-keyed tables.

    UTC stands in for UT1. Dynamical times subtract the TT-UT1 found at the dynamical date.
    """
    julian_day = float(moment.julian_day)
    if moment.scale is Scale.LOCAL:
        return localToUniversal(context, julian_day, observer)[0]
    if moment.scale in (Scale.TT, Scale.TDB):
        return julian_day - ttMinusUt1AtDate(context, julian_day) / const.DAYS2SEC
    return julian_day


def getTTminusUT1(context: TimeScaleContext, moment: Moment, observer: ObserverContext) -> float:
    """Return TT-UT1 in seconds at the instant of `moment`.

    The instant is first reduced to UT. The last ``(UT, value)`` pair is memoized in `context`,
    and can be overridden with :func:`.forceTTminusUT1`.

    Args:
        context (:class:`.TimeScaleContext`): time scale context holding the TT-UT1 table
        moment (:class:`.Moment`): instant, in any scale
        observer (:class:`.ObserverContext`): observer, for the reduction of local time

    Returns:
        ``float``: TT-UT1 in seconds
    """
    jd_ut = universalTimeEstimate(context, moment, observer)
    if context.last_delta_t is not None and context.last_delta_t[0] == jd_ut:
        return context.last_delta_t[1]

    value = deltaTFromTable(context.delta_t, jd_ut, context.allow_extrapolation)
    context.last_delta_t = (jd_ut, value)
    return value


def forceTTminusUT1(context: TimeScaleContext, moment: Moment, observer: ObserverContext, value: float):
    """Force the TT-UT1 returned for the instant of `moment`.

    The forced value lives in the memo cell of `context`, it is lost as soon as TT-UT1 is
    evaluated at another instant or the cache is cleared.
    """
    jd_ut = universalTimeEstimate(context, moment, observer)
    context.last_delta_t = (jd_ut, float(value))


def getTTminusUT1LastDateAvailable(context: TimeScaleContext) -> float:
    """Return the last tabulated Julian day of the TT-UT1 table of `context`."""
    return context.delta_t.max_jd
