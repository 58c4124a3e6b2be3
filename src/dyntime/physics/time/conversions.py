"""Converts Julian days between the LOCAL, UTC, UT1, TT and TDB time scales.

The five scales form a chain, each link being a single offset:

.. code-block:: text

    LOCAL --(time zone + DST)--> UTC --(UT1-UTC)--> UT1 --(TT-UT1)--> TT --(TDB-TT)--> TDB

A conversion adds the links between the source and the target scale when moving right along the
chain, and subtracts them when moving left. Only the links in between are evaluated, so that a
UT1 to TT conversion never looks at DST rules. UT1-UTC is only applied when
:attr:`.EphemerisConfig.correct_for_eop` is set, otherwise UT1 and UTC are the same scale.

Every link is evaluated in ``float``. :func:`.getExactJD` composes the same links with
``decimal.Decimal`` arithmetic, so that the Julian day itself keeps its full precision.
"""

from __future__ import annotations

# Standard Library Imports
from decimal import Decimal, localcontext
from typing import TYPE_CHECKING

# Local Imports
from ...common.logger import dyntimeLogWarning
from .. import constants as const
from ..transforms.eops import MissingEOP
from .delta_t import getTTminusUT1, localToUniversal, ttMinusUt1AtDate
from .dst import getDST
from .leap_seconds import getTAIminusUTC
from .observer import EphemerisConfig, ObserverContext
from .scales import Moment, Scale
from .tdb import getTCBminusTDB, getTCGminusTT, tdbMinusTT

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from .context import TimeScaleContext


SCALE_CHAIN: tuple[Scale, ...] = (Scale.LOCAL, Scale.UTC, Scale.UT1, Scale.TT, Scale.TDB)
"""``tuple``: scales in chain order, link ``i`` joins ``SCALE_CHAIN[i]`` to ``SCALE_CHAIN[i + 1]``."""

DEFAULT_OBSERVER = ObserverContext()
""":class:`.ObserverContext`: geocentric observer in the UTC time zone without DST."""

DEFAULT_EPHEMERIS = EphemerisConfig()
""":class:`.EphemerisConfig`: EOP corrections and the full TDB-TT series."""

_LOCAL_TO_UTC, _UTC_TO_UT1, _UT1_TO_TT, _TT_TO_TDB = range(4)


def _isIdentity(source: Scale, target: Scale, eph: EphemerisConfig) -> bool:
    if source is target:
        return True
    return not eph.correct_for_eop and {source, target} == {Scale.UT1, Scale.UTC}


def _ut1MinusUtc(context: TimeScaleContext, jd_utc: float) -> float:
    try:
        return context.eop_loader.getUT1minusUTC(jd_utc)
    except MissingEOP as err:
        dyntimeLogWarning(f"{err}. Using UT1-UTC = 0")
        return 0.0


def _linkOffsets(
    context: TimeScaleContext,
    moment: Moment,
    target: Scale,
    observer: ObserverContext,
    eph: EphemerisConfig,
) -> tuple[int, int, list[float]]:
    """Evaluate the chain links between the scale of `moment` and `target`.

    Returns:
        ``tuple``: chain index of the source, chain index of the target, and the offset in seconds
            of every link (zero for links that are not crossed)
    """
    source_index = SCALE_CHAIN.index(moment.scale)
    target_index = SCALE_CHAIN.index(target)
    low, high = sorted((source_index, target_index))
    crossed = range(low, high)
    julian_day = float(moment.julian_day)

    # UT instant of the moment, UTC standing in for UT1
    local_dst = 0.0
    if moment.scale is Scale.LOCAL:
        jd_ut, local_dst = localToUniversal(context, julian_day, observer)
    elif moment.scale in (Scale.TT, Scale.TDB):
        jd_ut = julian_day - ttMinusUt1AtDate(context, julian_day) / const.DAYS2SEC
    else:
        jd_ut = julian_day

    offsets = [0.0, 0.0, 0.0, 0.0]
    if _LOCAL_TO_UTC in crossed:
        dst = local_dst if moment.scale is Scale.LOCAL else getDST(context, jd_ut, observer)
        offsets[_LOCAL_TO_UTC] = -(observer.time_zone + dst) * 3600.0

    if _UTC_TO_UT1 in crossed and eph.correct_for_eop:
        offsets[_UTC_TO_UT1] = _ut1MinusUtc(context, jd_ut)

    if _UT1_TO_TT in crossed:
        offsets[_UT1_TO_TT] = getTTminusUT1(context, moment, observer)

    if _TT_TO_TDB in crossed:
        if moment.scale in (Scale.TT, Scale.TDB):
            jd_tt = julian_day
        else:
            jd_tt = julian_day + sum(offsets[source_index:_TT_TO_TDB]) / const.DAYS2SEC
        offsets[_TT_TO_TDB] = tdbMinusTT(context, jd_tt, observer, eph.prefer_precision)

    return source_index, target_index, offsets


def _totalOffset(source_index: int, target_index: int, offsets: list[float]) -> float:
    """Signed sum, in seconds, of the links crossed from source to target."""
    if target_index > source_index:
        return sum(offsets[source_index:target_index])
    return -sum(offsets[target_index:source_index])


def getJD(
    context: TimeScaleContext,
    moment: Moment,
    target: Scale,
    observer: ObserverContext | None = None,
    eph: EphemerisConfig | None = None,
) -> float:
    """Return the Julian day of `moment` in the `target` time scale.

    Args:
        context (:class:`.TimeScaleContext`): time scale context
        moment (:class:`.Moment`): instant to convert
        target (:class:`.Scale`): scale of the result
        observer (:class:`.ObserverContext`, optional): observer, defaults to :data:`.DEFAULT_OBSERVER`
        eph (:class:`.EphemerisConfig`, optional): switches, defaults to :data:`.DEFAULT_EPHEMERIS`

    Returns:
        ``float``: Julian day in `target`. The input Julian day itself for an identity conversion.
    """
    observer = observer or DEFAULT_OBSERVER
    eph = eph or DEFAULT_EPHEMERIS
    if _isIdentity(moment.scale, target, eph):
        return float(moment.julian_day)

    source_index, target_index, offsets = _linkOffsets(context, moment, target, observer, eph)
    return float(moment.julian_day) + _totalOffset(source_index, target_index, offsets) / const.DAYS2SEC


def getExactJD(
    context: TimeScaleContext,
    moment: Moment,
    target: Scale,
    observer: ObserverContext | None = None,
    eph: EphemerisConfig | None = None,
) -> Decimal:
    """Return the Julian day of `moment` in the `target` time scale, as a ``decimal.Decimal``.

    The offsets are the ones :func:`.getJD` uses, composed with the decimal precision of `context`.

    Args:
        context (:class:`.TimeScaleContext`): time scale context
        moment (:class:`.Moment`): instant to convert, a ``float`` Julian day is taken exactly
        target (:class:`.Scale`): scale of the result
        observer (:class:`.ObserverContext`, optional): observer, defaults to :data:`.DEFAULT_OBSERVER`
        eph (:class:`.EphemerisConfig`, optional): switches, defaults to :data:`.DEFAULT_EPHEMERIS`

    Returns:
        ``Decimal``: Julian day in `target`
    """
    observer = observer or DEFAULT_OBSERVER
    eph = eph or DEFAULT_EPHEMERIS
    julian_day = moment.julian_day if moment.is_exact else Decimal(moment.julian_day)
    if _isIdentity(moment.scale, target, eph):
        return julian_day

    source_index, target_index, offsets = _linkOffsets(context, moment, target, observer, eph)
    low, high = sorted((source_index, target_index))
    with localcontext() as decimal_context:
        decimal_context.prec = context.decimal_precision
        total = sum((Decimal(offset) for offset in offsets[low:high]), Decimal(0))
        if target_index < source_index:
            total = -total
        return julian_day + total / Decimal(86400)


def convert(
    context: TimeScaleContext,
    moment: Moment,
    target: Scale,
    observer: ObserverContext | None = None,
    eph: EphemerisConfig | None = None,
) -> Moment:
    """Express `moment` in the `target` time scale.

    Exact moments go through :func:`.getExactJD`, the others through :func:`.getJD`.
    """
    if moment.is_exact:
        return Moment(getExactJD(context, moment, target, observer, eph), target)
    return Moment(getJD(context, moment, target, observer, eph), target)


def getCalcTime(
    context: TimeScaleContext,
    moment: Moment,
    observer: ObserverContext | None = None,
    eph: EphemerisConfig | None = None,
) -> float:
    """Return Julian centuries of TT elapsed since J2000, the time argument of most ephemerides."""
    jd_tt = getJD(context, moment, Scale.TT, observer, eph)
    return (jd_tt - const.J2000) / const.JULIAN_DAYS_PER_CENTURY


def getTDBminusTT(
    context: TimeScaleContext,
    moment: Moment,
    observer: ObserverContext | None = None,
    eph: EphemerisConfig | None = None,
) -> float:
    """Return TDB-TT in seconds at the instant of `moment`.

    TDB moments are read as TT, the difference being far below the accuracy of the series.

    Args:
        context (:class:`.TimeScaleContext`): time scale context
        moment (:class:`.Moment`): instant, in any scale
        observer (:class:`.ObserverContext`, optional): observer, for the topocentric term
        eph (:class:`.EphemerisConfig`, optional): switches, for the choice of series

    Returns:
        ``float``: TDB-TT in seconds
    """
    observer = observer or DEFAULT_OBSERVER
    eph = eph or DEFAULT_EPHEMERIS
    if moment.scale in (Scale.TT, Scale.TDB):
        jd_tt = float(moment.julian_day)
    else:
        jd_tt = getJD(context, moment, Scale.TT, observer, eph)
    return tdbMinusTT(context, jd_tt, observer, eph.prefer_precision)


def getJDInTCB(
    context: TimeScaleContext,
    moment: Moment,
    observer: ObserverContext | None = None,
    eph: EphemerisConfig | None = None,
) -> float:
    """Return the Julian day of `moment` in TCB (barycentric coordinate time)."""
    jd_tdb = getJD(context, moment, Scale.TDB, observer, eph)
    return jd_tdb + getTCBminusTDB(jd_tdb) / const.DAYS2SEC


def getJDInTCG(
    context: TimeScaleContext,
    moment: Moment,
    observer: ObserverContext | None = None,
    eph: EphemerisConfig | None = None,
) -> float:
    """Return the Julian day of `moment` in TCG (geocentric coordinate time)."""
    jd_tt = getJD(context, moment, Scale.TT, observer, eph)
    return jd_tt + getTCGminusTT(jd_tt) / const.DAYS2SEC


def getJDInTAI(
    context: TimeScaleContext,
    moment: Moment,
    observer: ObserverContext | None = None,
    eph: EphemerisConfig | None = None,
) -> float:
    """Return the Julian day of `moment` in TAI (international atomic time)."""
    jd_utc = getJD(context, moment, Scale.UTC, observer, eph)
    return jd_utc + getTAIminusUTC(context, jd_utc) / const.DAYS2SEC
