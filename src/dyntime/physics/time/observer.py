"""Defines the observer and ephemeris settings that a time scale conversion depends on."""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass, field
from math import isfinite

# Third Party Imports
from numpy import cos, sin, sqrt

# Local Imports
from ...common.exceptions import ConfigurationError
from ...common.logger import dyntimeLogError
from .. import constants as const
from .dst import DstRule


@dataclass(frozen=True)
class ObserverContext:
    """Immutable description of where, and under which civil time rules, an observer is."""

    time_zone: float = 0.0
    """``float``: time zone offset from UTC in hours, positive east."""

    longitude: float = 0.0
    """``float``: geodetic longitude in radians, positive east."""

    latitude: float = 0.0
    """``float``: geodetic latitude in radians."""

    height: float = 0.0
    """``float``: height above the WGS84 ellipsoid in meters."""

    dst_rule: DstRule = field(default=DstRule.NONE)
    """:class:`.DstRule`: daylight saving time rule."""

    on_earth: bool = True
    """``bool``: whether the observer stands on the Earth, else the topocentric TDB term is zero."""

    def __post_init__(self):
        """Validate the observer.

        Raises:
            :class:`.ConfigurationError`: for a non-finite field, a latitude beyond the poles, a time
                zone beyond +/-14 hours, or a DST rule that is not a :class:`.DstRule`
        """
        for name in ("time_zone", "longitude", "latitude", "height"):
            if not isfinite(getattr(self, name)):
                self._fail(f"Observer {name} must be finite, got {getattr(self, name)}")
        if abs(self.latitude) > const.PI / 2:
            self._fail(f"Observer latitude must be within [-pi/2, pi/2] radians, got {self.latitude}")
        if abs(self.time_zone) > 14:
            self._fail(f"Observer time zone must be within +/-14 hours, got {self.time_zone}")
        if not isinstance(self.dst_rule, DstRule):
            self._fail(f"Observer DST rule must be a DstRule, got {self.dst_rule!r}")

    @staticmethod
    def _fail(msg: str):
        dyntimeLogError(msg)
        raise ConfigurationError(msg)

    def _ellipsoidFactors(self) -> tuple[float, float]:
        flat = (1.0 - const.EARTH_FLATTENING) ** 2
        cos_lat = cos(self.latitude)
        sin_lat = sin(self.latitude)
        big_c = 1.0 / sqrt(cos_lat**2 + flat * sin_lat**2)
        return big_c, flat * big_c

    @property
    def spin_axis_distance(self) -> float:
        """``float``: distance from the Earth's spin axis in km (``U``)."""
        big_c, _ = self._ellipsoidFactors()
        return float((const.EARTH_EQUATORIAL_RADIUS * big_c + self.height * const.M2KM) * cos(self.latitude))

    @property
    def equatorial_plane_distance(self) -> float:
        """``float``: distance north of the equatorial plane in km (``V``)."""
        _, big_s = self._ellipsoidFactors()
        return float((const.EARTH_EQUATORIAL_RADIUS * big_s + self.height * const.M2KM) * sin(self.latitude))


@dataclass(frozen=True)
class EphemerisConfig:
    """Immutable switches controlling how conversions trade speed for accuracy."""

    correct_for_eop: bool = True
    """``bool``: apply UT1-UTC, otherwise UT1 and UTC are treated as the same scale."""

    prefer_precision: bool = True
    """``bool``: always evaluate the full TDB-TT series instead of the 7-term approximation."""
