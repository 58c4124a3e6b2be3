"""Main Module Documentation.

:mod:`dyntime` converts instants between the local, universal (UT1, UTC), terrestrial (TT) and
barycentric dynamical (TDB) time scales, and to the derived TAI, TCG and TCB scales.

A conversion needs a :class:`.TimeScaleContext` holding the reference tables, a :class:`.Moment`,
and optionally an :class:`.ObserverContext` and an :class:`.EphemerisConfig`:

.. code-block:: python

    from dyntime import Moment, Scale, TimeScaleContext, getJD

    context = TimeScaleContext()
    moment = Moment.fromCalendar(2024, 3, 20, 12, scale=Scale.UTC)
    jd_tdb = getJD(context, moment, Scale.TDB)
"""

from __future__ import annotations

__version__ = "1.0.0"

# Local Imports
# forward-facing API import
from .common.exceptions import ConfigurationError, DataFormatError, DateError, TimeScaleError
from .physics.time.context import TimeScaleContext
from .physics.time.conversions import (
    convert,
    getCalcTime,
    getExactJD,
    getJD,
    getJDInTAI,
    getJDInTCB,
    getJDInTCG,
    getTDBminusTT,
)
from .physics.time.delta_t import (
    dynamicalTimeCorrectionForMoonSecularAcceleration,
    forceTTminusUT1,
    getTTminusUT1,
    getTTminusUT1LastDateAvailable,
)
from .physics.time.dst import DstRule, SundayRule, getDST, getDSTStartEnd
from .physics.time.leap_seconds import getTAIminusUTC, getTTminusUTC
from .physics.time.observer import EphemerisConfig, ObserverContext
from .physics.time.scales import Moment, Scale
from .physics.time.stardate import CalendarDate, julianDay
from .physics.time.tdb import getTCBminusTDB, getTCGminusTCB, getTCGminusTT
from .physics.transforms.eops import MissingEOP

__all__ = [
    "CalendarDate",
    "ConfigurationError",
    "DataFormatError",
    "DateError",
    "DstRule",
    "EphemerisConfig",
    "MissingEOP",
    "Moment",
    "ObserverContext",
    "Scale",
    "SundayRule",
    "TimeScaleContext",
    "TimeScaleError",
    "convert",
    "dynamicalTimeCorrectionForMoonSecularAcceleration",
    "forceTTminusUT1",
    "getCalcTime",
    "getDST",
    "getDSTStartEnd",
    "getExactJD",
    "getJD",
    "getJDInTAI",
    "getJDInTCB",
    "getJDInTCG",
    "getTAIminusUTC",
    "getTCBminusTDB",
    "getTCGminusTCB",
    "getTCGminusTT",
    "getTDBminusTT",
    "getTTminusUT1",
    "getTTminusUT1LastDateAvailable",
    "getTTminusUTC",
    "julianDay",
]
