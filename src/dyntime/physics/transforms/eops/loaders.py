"""Module defining the infrastructure used to retrieve UT1-UTC from various sources."""

from __future__ import annotations

# Standard Library Imports
from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING

# Third Party Imports
from numpy import array, float64, interp, searchsorted

# Local Imports
from ....common.exceptions import DataFormatError, DateError
from ....common.logger import dyntimeLogError, dyntimeLogInfo
from ....common.utilities import loadDatFile, parseFloatFields, splitRecords
from ...constants import MJD_OFFSET, TT_MINUS_TAI
from ...time.delta_t import deltaTFromTable
from ...time.leap_seconds import taiMinusUtcFromTable
from ...time.stardate import CalendarDate
from ...time.tables import loadDeltaTTable, loadLeapSeconds
from . import MissingEOP

# Type Checking Imports
if TYPE_CHECKING:
    # Local Imports
    from ...time.tables import DeltaTTable, LeapSecondEntry


class EOPLoader(ABC):
    """Abstract class defining how Earth Orientation Parameters should be loaded."""

    def __init__(self, location: str):
        """Initializes the loader.

        Args:
            location (str): Specifies where the EOP content to load is located.
        """
        self._location: str = location

    @abstractmethod
    def getUT1minusUTC(self, jd_utc: float) -> float:
        """Return UT1-UTC in seconds at a Julian day in UTC.

        Raises:
            MissingEOP: If the loader has no data covering `jd_utc`.
        """
        raise NotImplementedError


class DerivedEOPLoader(EOPLoader):
    """Derives UT1-UTC from the leap second and TT-UT1 tables.

    ``UT1-UTC = 32.184 s + (TAI-UTC) - (TT-UT1)``. Every date is covered, to the accuracy of the
    TT-UT1 table.
    """

    def __init__(
        self,
        location: str = "",
        leap_seconds: list[LeapSecondEntry] | None = None,
        delta_t: DeltaTTable | None = None,
        allow_extrapolation: bool = True,
    ):
        """Initializes the loader.

        Args:
            location (str, optional): Unused, derived values have no source file.
            leap_seconds (list, optional): TAI-UTC table. Defaults to the bundled one.
            delta_t (DeltaTTable, optional): TT-UT1 table. Defaults to the bundled one.
            allow_extrapolation (bool, optional): Use the long range TT-UT1 formulae past the table.
        """
        super().__init__(location)
        self._leap_seconds = leap_seconds if leap_seconds is not None else loadLeapSeconds()
        self._delta_t = delta_t if delta_t is not None else loadDeltaTTable()
        self._allow_extrapolation = allow_extrapolation

    def getUT1minusUTC(self, jd_utc: float) -> float:
        """Return the derived UT1-UTC in seconds at a Julian day in UTC."""
        delta_t = deltaTFromTable(self._delta_t, jd_utc, self._allow_extrapolation)
        return TT_MINUS_TAI + taiMinusUtcFromTable(self._leap_seconds, jd_utc) - delta_t


class DotDatEOPLoader(EOPLoader, ABC):
    """Abstract interface defining how to properly load a '.dat' EOP data file.

    Rows hold ``year month day mjd x y UT1-UTC LOD dX dY dPsi dEps TAI-UTC``, one per day. Only
    the date, UT1-UTC and TAI-UTC columns are used.
    """

    COLUMNS: int = 13
    """int: Number of columns of a '.dat' row."""

    def __init__(self, location: str):
        """Initializes the loader.

        Args:
            location (str): Specifies where the EOP content to load is located.
        """
        super().__init__(location)
        self._mjd = array([], dtype=float64)
        self._ut1_minus_tai = array([], dtype=float64)
        self._tai_minus_utc = array([], dtype=float64)
        self._is_loaded: bool = False

    @abstractmethod
    def load(self):
        """Load the EOP content into local memory.

        A concrete implementation of this method should set the :attr:`._is_loaded` to ``True``.
        """
        raise NotImplementedError

    def _fail(self, msg: str, err: Exception | None = None):
        dyntimeLogError(msg)
        if err is not None:
            raise DataFormatError(msg) from err
        raise DataFormatError(msg)

    def _rowMJD(self, eop: list[float], line_number: int) -> float:
        """Validate the calendar date of a row against its MJD column, and return the MJD."""
        year, month, day, mjd = eop[:4]
        if any(value != int(value) for value in (year, month, day)):
            self._fail(f"Non-integral date in {self._location}, line {line_number}")
        try:
            date = CalendarDate(int(year), int(month), int(day))
        except DateError as err:
            self._fail(f"Invalid date in {self._location}, line {line_number}", err)

        if date.toJulianDay() - MJD_OFFSET != mjd:
            self._fail(f"MJD {mjd} does not match {date} in {self._location}, line {line_number}")
        return mjd

    def _parseDatData(self, lines: list[str]):
        """Loads the specified '.dat' `lines` into local memory.

        Args:
            lines (list[str]): EOP data file contents read with :meth:`.loadDatFile()`.

        Raises:
            DataFormatError: On a row with the wrong number of columns, a non-numeric field, an
                invalid date, a date that disagrees with its MJD, or a repeated day.
        """
        rows = []
        for line_number, fields in splitRecords(lines):
            if len(fields) != self.COLUMNS:
                self._fail(f"Expected {self.COLUMNS} EOP columns in {self._location}, line {line_number}")
            eop = parseFloatFields(fields, self._location, line_number)
            rows.append((self._rowMJD(eop, line_number), eop[6] - eop[12], eop[12]))

        rows.sort()
        mjd = array([row[0] for row in rows], dtype=float64)
        if (mjd[1:] == mjd[:-1]).any():
            self._fail(f"Repeated EOP day in {self._location}")

        self._mjd = mjd
        self._ut1_minus_tai = array([row[1] for row in rows], dtype=float64)
        self._tai_minus_utc = array([row[2] for row in rows], dtype=float64)
        self._is_loaded = True
        dyntimeLogInfo(f"Loaded {len(rows)} EOP records from {self._location}")

    def getUT1minusUTC(self, jd_utc: float) -> float:
        """Return UT1-UTC in seconds, interpolated linearly between daily records.

        UT1-TAI is interpolated, since it is continuous across leap seconds, and the TAI-UTC of the
        day in progress is added back.

        Raises:
            MissingEOP: If `jd_utc` is outside the days covered by the file.
        """
        if not self._is_loaded:
            self.load()

        mjd = jd_utc - MJD_OFFSET
        if not self._mjd.size or mjd < self._mjd[0] or mjd > self._mjd[-1]:
            date = CalendarDate.fromJulianDay(jd_utc)
            err = f"Could not retrieve EOP data for specified date: {date}"
            raise MissingEOP(err)

        index = searchsorted(self._mjd, mjd, side="right") - 1
        return float(interp(mjd, self._mjd, self._ut1_minus_tai)) + float(self._tai_minus_utc[index])


class LocalDotDatEOPLoader(DotDatEOPLoader):
    """Concrete class defining how EOPs should be loaded as a local '.dat' file."""

    def __init__(self, location: str) -> None:
        """Initializes the loader.

        Args:
            location (str): Specifies where the EOP content to loaded is located.
        """
        super().__init__(location)
        self._path = Path(self._location)

    def load(self) -> None:
        """Load the EOP content of the local file into memory."""
        self._parseDatData(loadDatFile(self._path))
