"""Global math, physics, and time constants.

This module holds all constants that are used in various places across the
codebase, allowing for a consistent place to store them. Constants specific
to one algorithm remain in that module.

References:
    #. Meeus, J., Astronomical Algorithms, 2nd ed., Willmann-Bell, 1998
    #. IERS Conventions (2010), IERS Technical Note No. 36
    #. IAU 2006 Resolution B3
"""

from __future__ import annotations

# Third Party Imports
from numpy import pi

# Conversion constants
PI = pi
TWOPI = 2.0 * pi
DEG2RAD = pi / 180.0
RAD2DEG = 180.0 / pi
HOURS_PER_DAY = 24.0
MINUTES_PER_DAY = 1440.0
DAYS2SEC = 24.0 * 3600
SEC2DAYS = 1.0 / DAYS2SEC
M2KM = 1.0 / 1000.0

# Julian day epochs
J2000 = 2451545.0  # 2000 January 1.5 TT
JULIAN_DAYS_PER_CENTURY = 36525.0
JULIAN_DAYS_PER_MILLENNIUM = 365250.0
MJD_OFFSET = 2400000.5  # JD - MJD
GREGORIAN_START_JD = 2299160.5  # 1582 October 15, 0h
UNIX_EPOCH_JD = 2440587.5  # 1970 January 1, 0h
TAI_1977_JD = 2443144.5003725  # 1977 January 1, 0h TAI, expressed in TT/TCG/TCB

# Time scale constants
TT_MINUS_TAI = 32.184  # seconds, exact
L_G = 6.969290134e-10  # TCG/TT rate, IAU 2000 Resolution B1.9
L_B = 1.550519768e-8  # TCB/TDB rate, IAU 2006 Resolution B3

# Lunar tidal acceleration (arcsec/century^2)
MOON_SECULAR_ACCELERATION = -25.858  # ELP2000 / Chapront et al. 2002
MORRISON_STEPHENSON_ACCELERATION = -26.0  # adopted by Morrison & Stephenson 2004

# WGS84 reference ellipsoid
EARTH_EQUATORIAL_RADIUS = 6378.137  # km
EARTH_FLATTENING = 1.0 / 298.257223563
