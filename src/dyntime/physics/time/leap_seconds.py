"""TAI-UTC and TT-UTC lookups over the leap second table.

References:
    #. U.S. Naval Observatory, ``tai-utc.dat``
    #. IAU SOFA, ``iauDat``
    #. Explanatory Supplement to the Astronomical Almanac (1992), Section 2.58.1
"""

from __future__ import annotations

# Standard Library Imports
from bisect import bisect_right
from typing import TYPE_CHECKING

# Local Imports
from ...common.logger import dyntimeLogDebug
from .. import constants as const
from .stardate import julianDay

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Sequence

    # Local Imports
    from .context import TimeScaleContext
    from .tables import LeapSecondEntry


TAI_UTC_START_JD: float = julianDay(1961, 1, 1)
"""``float``: Julian day before which TAI-UTC is taken as zero."""

PRE_1972_DRIFT: dict[tuple[int, int], tuple[float, float]] = {
    (1960, 1): (37300.0, 0.001296),
    (1961, 1): (37300.0, 0.001296),
    (1961, 8): (37300.0, 0.001296),
    (1962, 1): (37665.0, 0.0011232),
    (1963, 11): (37665.0, 0.0011232),
    (1964, 1): (38761.0, 0.001296),
    (1964, 4): (38761.0, 0.001296),
    (1964, 9): (38761.0, 0.001296),
    (1965, 1): (38761.0, 0.001296),
    (1965, 3): (38761.0, 0.001296),
    (1965, 7): (38761.0, 0.001296),
    (1965, 9): (38761.0, 0.001296),
    (1966, 1): (39126.0, 0.002592),
    (1968, 2): (39126.0, 0.002592),
}
"""``dict``: reference MJD and rate (s/day) of the linear drift of each pre-1972 entry."""


def taiMinusUtcFromTable(entries: Sequence[LeapSecondEntry], jd_utc: float) -> float:
    """Evaluate TAI-UTC at `jd_utc` over a parsed leap second table.

    Args:
        entries (``list``): :class:`.LeapSecondEntry` rows sorted by effective date
        jd_utc (``float``): Julian day in UTC

    Returns:
        ``float``: TAI-UTC in seconds
    """
    if jd_utc < TAI_UTC_START_JD:
        dyntimeLogDebug(f"TAI-UTC is unknown before 1961, using 0 at JD {jd_utc}")
        return 0.0

    index = bisect_right([entry.julian_day for entry in entries], jd_utc) - 1
    if index < 0:
        return 0.0

    entry = entries[index]
    value = entry.tai_minus_utc
    drift = PRE_1972_DRIFT.get((entry.year, entry.month))
    if drift is not None:
        reference_mjd, rate = drift
        value += (jd_utc - const.MJD_OFFSET - reference_mjd) * rate

    return value


def getTAIminusUTC(context: TimeScaleContext, jd_utc: float) -> float:
    """Return TAI-UTC in seconds at `jd_utc`.

    Zero before 1961. Between 1961 and 1972 UTC drifted linearly against TAI, and the drift of the
    entry in force is added. From 1972 on the value is the step of the most recent entry.

    Args:
        context (:class:`.TimeScaleContext`): time scale context holding the leap second table
        jd_utc (``float``): Julian day in UTC

    Returns:
        ``float``: TAI-UTC in seconds
    """
    return taiMinusUtcFromTable(context.leap_seconds, float(jd_utc))


def getTTminusUTC(context: TimeScaleContext, jd_utc: float) -> float:
    """Return TT-UTC in seconds at `jd_utc`, 32.184 s plus TAI-UTC."""
    return const.TT_MINUS_TAI + getTAIminusUTC(context, jd_utc)
