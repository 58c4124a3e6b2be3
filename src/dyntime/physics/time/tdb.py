"""TDB-TT periodic series, and the linear models of the coordinate time scales.

TDB-TT is evaluated either with the 7-term approximation of USNO Circular 179 (eq. 2.6, about
10 microseconds near J2000) or with the full Fairhead & Bretagnon (1990) series, corrected to JPL
planetary masses and completed by the topocentric terms of Moyer (1981) and Murray (1983).

References:
    #. Fairhead, L. & Bretagnon, P., A&A 229, 240 (1990)
    #. Kaplan, G. H., USNO Circular 179 (2005)
    #. Moyer, T. D., Cel. Mech. 23, 33 (1981)
    #. Murray, C. A., Vectorial Astrometry, Adam Hilger (1983)
    #. Simon, J. L. et al., A&A 282, 663 (1994)
    #. IAU 2006 Resolution B3, IERS Conventions (2010) chapter 10
"""

from __future__ import annotations

# Standard Library Imports
from math import floor
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import cos, sin

# Local Imports
from .. import constants as const
from .delta_t import getTTminusUT1
from .scales import Moment, Scale

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from .context import TimeScaleContext
    from .observer import ObserverContext


FAST_SERIES_LIMIT: float = 0.1
"""``float``: Julian millennia from J2000 within which the 7-term approximation may be used."""

TCG_TCB_RATE: float = 1.4808268457e-8
"""``float``: rate of TCG-TCB (Seidelmann & Kovalevsky 2002)."""


def julianMillennia(jd_tt: float) -> float:
    """Julian millennia of TT elapsed since J2000."""
    return (jd_tt - const.J2000) / const.JULIAN_DAYS_PER_MILLENNIUM


def fastTDBminusTT(millennia: float) -> float:
    """USNO Circular 179, eq. 2.6: TDB-TT in seconds to about 10 microseconds near J2000.

    The coefficients of the approximation are per Julian century, `millennia` is scaled to match.
    """
    centuries = 10.0 * millennia
    return (
        0.001657 * sin(628.3076 * centuries + 6.2401)
        + 0.000022 * sin(575.3385 * centuries + 4.2970)
        + 0.000014 * sin(1256.6152 * centuries + 6.1969)
        + 0.000005 * sin(606.9777 * centuries + 4.0212)
        + 0.000005 * sin(52.9691 * centuries + 0.4444)
        + 0.000002 * sin(21.3299 * centuries + 5.5431)
        + 0.000010 * centuries * sin(628.3076 * centuries + 4.2490)
    )


def jplMassCorrection(millennia: float) -> float:
    """Adjustment of the series from IAU to JPL planetary masses, in seconds."""
    return (
        0.00065e-6 * sin(6069.776754 * millennia + 4.021194)
        + 0.00033e-6 * sin(213.299095 * millennia + 5.543132)
        - 0.00196e-6 * sin(6208.294251 * millennia + 5.696701)
        - 0.00173e-6 * sin(74.781599 * millennia + 2.435900)
        + 0.03638e-6 * millennia * millennia
    )


def _argument(degrees: float, arcsec_rate: float, time_arg: float) -> float:
    """Fundamental argument in radians, from its value at J2000 and its rate in arcsec/millennium."""
    return ((degrees + arcsec_rate * time_arg) % 360.0) * const.DEG2RAD


def topocentricTerm(millennia: float, jd_ut1: float, observer: ObserverContext) -> float:
    """Topocentric part of TDB-TT in seconds, zero for an observer off the Earth.

    Args:
        millennia (``float``): Julian millennia of TT from J2000
        jd_ut1 (``float``): Julian day in UT1 of the same instant
        observer (:class:`.ObserverContext`): observer position

    Returns:
        ``float``: topocentric term in seconds
    """
    if not observer.on_earth:
        return 0.0

    spin_axis = observer.spin_axis_distance
    equatorial = observer.equatorial_plane_distance

    day_fraction = jd_ut1 - floor(jd_ut1) + 0.5
    if day_fraction > 1.0:
        day_fraction -= 1.0
    solar_time = day_fraction * const.TWOPI + observer.longitude

    # Fundamental arguments, Simon et al. 1994
    time_arg = millennia / 3600.0
    sun_longitude = _argument(280.46645683, 1296027711.03429, time_arg)
    sun_anomaly = _argument(357.52910918, 1295965810.481, time_arg)
    elongation = _argument(297.85019547, 16029616012.090, time_arg)
    jupiter_longitude = _argument(34.35151874, 109306899.89453, time_arg)
    saturn_longitude = _argument(50.07744430, 44046398.47038, time_arg)

    return float(
        0.00029e-10 * spin_axis * sin(solar_time + sun_longitude - saturn_longitude)
        + 0.00100e-10 * spin_axis * sin(solar_time - 2.0 * sun_anomaly)
        + 0.00133e-10 * spin_axis * sin(solar_time - elongation)
        + 0.00133e-10 * spin_axis * sin(solar_time + sun_longitude - jupiter_longitude)
        - 0.00229e-10 * spin_axis * sin(solar_time + 2.0 * sun_longitude + sun_anomaly)
        - 0.02200e-10 * equatorial * cos(sun_longitude + sun_anomaly)
        + 0.05312e-10 * spin_axis * sin(solar_time - sun_anomaly)
        - 0.13677e-10 * spin_axis * sin(solar_time + 2.0 * sun_longitude)
        - 1.31840e-10 * equatorial * cos(sun_longitude)
        + 3.17679e-10 * spin_axis * sin(solar_time),
    )


def tdbMinusTT(
    context: TimeScaleContext,
    jd_tt: float,
    observer: ObserverContext,
    prefer_precision: bool = True,
) -> float:
    """Return TDB-TT in seconds at a Julian day in TT.

    The last result is memoized in `context` and reused for any Julian day within one second,
    for the same observer and precision flag.

    Args:
        context (:class:`.TimeScaleContext`): time scale context holding the series coefficients
        jd_tt (``float``): Julian day in TT
        observer (:class:`.ObserverContext`): observer, for the topocentric term
        prefer_precision (``bool``, optional): always use the full series

    Returns:
        ``float``: TDB-TT in seconds
    """
    if context.last_tdb_minus_tt is not None:
        last_jd, last_observer, last_precision, last_value = context.last_tdb_minus_tt
        if (
            abs(jd_tt - last_jd) < const.SEC2DAYS
            and last_precision == prefer_precision
            and last_observer == observer
        ):
            return last_value

    millennia = julianMillennia(jd_tt)
    if not prefer_precision and abs(millennia) < FAST_SERIES_LIMIT:
        value = float(fastTDBminusTT(millennia))
    else:
        jd_ut1 = jd_tt - getTTminusUT1(context, Moment(jd_tt, Scale.TT), observer) / const.DAYS2SEC
        value = (
            topocentricTerm(millennia, jd_ut1, observer)
            + context.fairhead.evaluate(millennia)
            + float(jplMassCorrection(millennia))
        )

    context.last_tdb_minus_tt = (jd_tt, observer, prefer_precision, value)
    return value


def getTCBminusTDB(jd_tdb: float) -> float:
    """Return TCB-TDB in seconds (IAU 2006 Resolution B3), zero at 1977 January 1.0 TAI.

    The constant TDB0 of the resolution is left out.
    """
    return (float(jd_tdb) - const.TAI_1977_JD) * (const.L_B / (1.0 - const.L_B)) * const.DAYS2SEC


def getTCGminusTT(jd_tt: float) -> float:
    """Return TCG-TT in seconds (IAU 2000 Resolution B1.9), zero at 1977 January 1.0 TAI."""
    return (float(jd_tt) - const.TAI_1977_JD) * (const.L_G / (1.0 - const.L_G)) * const.DAYS2SEC


def getTCGminusTCB(jd_tcb: float) -> float:
    """Return TCG-TCB in seconds, to better than a millisecond.

    Linear drift plus the main periodic terms due to the eccentric orbit of the Earth, following
    Seidelmann & Kovalevsky (2002). Their expression ``drift + periodic`` is TCB-TCG, so it is
    negated here: TCB runs faster than TCG and the result decreases with time.

    Note:
        Unlike TCB-TDB and TCG-TT, the result does not vanish at 1977 January 1.0 TAI. The drift
        does, but the periodic part leaves about -8.4e-5 s there.
    """
    jd_tcb = float(jd_tcb)
    drift = (jd_tcb - const.TAI_1977_JD) * (TCG_TCB_RATE / (1.0 - TCG_TCB_RATE)) * const.DAYS2SEC
    anomaly = (357.53 + 0.985003 * (jd_tcb - const.J2000)) * const.DEG2RAD
    return -(drift + float(0.0015658 * sin(anomaly) + 0.000014 * sin(2.0 * anomaly)))
