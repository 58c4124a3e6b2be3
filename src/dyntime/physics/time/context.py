"""Defines :class:`.TimeScaleContext`, the owner of every piece of mutable time scale state."""

from __future__ import annotations

# Standard Library Imports
from typing import TYPE_CHECKING

# Local Imports
from ...common.behavioral_config import BehavioralConfig
from ...common.exceptions import ConfigurationError
from ...common.logger import PACKAGE_LOGGER_NAME, Logger, dyntimeLogError, dyntimeLogInfo
from ..transforms.eops import getEOPLoader
from ..transforms.eops.loaders import DerivedEOPLoader
from .tables import loadDeltaTTable, loadFairheadTerms, loadLeapSeconds

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable

    # Local Imports
    from ..transforms.eops.loaders import EOPLoader
    from .observer import ObserverContext
    from .tables import DeltaTTable, FairheadSeries, LeapSecondEntry


class TimeScaleContext:
    """Reference tables, settings, and memo cells shared by a sequence of conversions.

    A context is cheap to build once the bundled tables are cached, and every conversion takes one
    explicitly. The memo cells each remember the last computed value only.

    Note:
        A context is not thread-safe. Multi-threaded hosts should hold one context per thread.
    """

    def __init__(
        self,
        allow_extrapolation: bool | None = None,
        decimal_precision: int | None = None,
        dst_start_year: int | None = None,
        eop_loader: EOPLoader | None = None,
    ):
        """Load the tables and settings of a new context.

        Settings left as ``None`` are read from the ``[timescale]`` and ``[eop]`` sections of
        :class:`.BehavioralConfig`. The package logger is set up from its ``[logging]`` section,
        once per process unless ``AllowMultipleHandlers`` is set.

        Args:
            allow_extrapolation (``bool``, optional): use the long range TT-UT1 formulae past the table
            decimal_precision (``int``, optional): significant digits of the exact conversion path
            dst_start_year (``int``, optional): first year in which DST rules apply
            eop_loader (:class:`.EOPLoader`, optional): source of UT1-UTC

        Raises:
            :class:`.DataFormatError`: if a bundled table is missing or malformed
            :class:`.ConfigurationError`: for a non-positive decimal precision or unknown EOP loader
        """
        config = BehavioralConfig.getConfig()
        self.logger = Logger(PACKAGE_LOGGER_NAME)

        if allow_extrapolation is None:
            allow_extrapolation = config.timescale.AllowDeltaTExtrapolation
        if decimal_precision is None:
            decimal_precision = config.timescale.DecimalPrecision
        if dst_start_year is None:
            dst_start_year = config.timescale.DSTStartYear

        if decimal_precision < 1:
            msg = f"Decimal precision must be positive, got {decimal_precision}"
            dyntimeLogError(msg)
            raise ConfigurationError(msg)

        self.allow_extrapolation: bool = allow_extrapolation
        self.decimal_precision: int = decimal_precision
        self.dst_start_year: int = dst_start_year

        self.leap_seconds: list[LeapSecondEntry] = loadLeapSeconds()
        self.delta_t: DeltaTTable = loadDeltaTTable()
        self.fairhead: FairheadSeries = loadFairheadTerms()

        self._custom_eop_loader = eop_loader is not None or config.eop.LoaderName != "DerivedEOPLoader"
        self.eop_loader: EOPLoader = eop_loader if eop_loader is not None else self._defaultEOPLoader()

        self.last_delta_t: tuple[float, float] | None = None
        self.last_date_delta_t: tuple[float, float] | None = None
        self.last_tdb_minus_tt: tuple[float, ObserverContext, bool, float] | None = None
        self.last_dst: tuple[float, ObserverContext, float] | None = None

    def _defaultEOPLoader(self) -> EOPLoader:
        """Derive UT1-UTC from this context's tables, unless the config names another loader."""
        if not self._custom_eop_loader:
            return DerivedEOPLoader(
                leap_seconds=self.leap_seconds,
                delta_t=self.delta_t,
                allow_extrapolation=self.allow_extrapolation,
            )
        return getEOPLoader()

    def clearCache(self):
        """Forget every memoized value, including a TT-UT1 value forced for testing."""
        self.last_delta_t = None
        self.last_date_delta_t = None
        self.last_tdb_minus_tt = None
        self.last_dst = None

    def updateLeapSecondsAndDT(
        self,
        leap_text: str | Iterable[str] | None = None,
        delta_t_text: str | Iterable[str] | None = None,
    ):
        """Replace the leap second and TT-UT1 tables, for instance with newer IERS data.

        A table left as ``None`` is reloaded from the module cache. The memo cells are cleared.

        Args:
            leap_text (``str`` | ``list``, optional): replacement leap second table
            delta_t_text (``str`` | ``list``, optional): replacement TT-UT1 table

        Raises:
            :class:`.DataFormatError`: if a replacement table is malformed, the context is left unchanged
        """
        leap_seconds = loadLeapSeconds(leap_text)
        delta_t = loadDeltaTTable(delta_t_text)

        self.leap_seconds = leap_seconds
        self.delta_t = delta_t
        if not self._custom_eop_loader:
            self.eop_loader = self._defaultEOPLoader()
        self.clearCache()
        dyntimeLogInfo(
            f"Time scale tables updated: {len(leap_seconds)} leap second entries, TT-UT1 up to JD {delta_t.max_jd}",
        )
