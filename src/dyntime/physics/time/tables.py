"""Loads the reference tables that the time scale calculations depend on.

Three datasets ship with the package, under ``dyntime/physics/data/timescales/``:

- ``leap_seconds.dat``: TAI-UTC step table, one ``year month TAI-UTC`` row per change, after a
  header line.
- ``tt_minus_ut1.dat``: historical TT-UT1 (Delta T) samples, ``year month day value`` or
  ``fractional-year value`` rows.
- ``fairhead.dat``: Fairhead & Bretagnon (1990) TDB-TT series, ``power amplitude frequency phase``
  rows.

Each dataset is parsed once and cached by name. Passing replacement text to a loader parses it
and replaces the cached entry, which lets operators apply new IERS data without a new release.
"""

from __future__ import annotations

# Standard Library Imports
from dataclasses import dataclass
from importlib import resources
from math import floor
from typing import TYPE_CHECKING, NamedTuple

# Third Party Imports
from numpy import array, asarray, diff, float64, sin
from scipy.interpolate import CubicSpline

# Local Imports
from ...common.exceptions import DataFormatError, DateError
from ...common.logger import dyntimeLogError, dyntimeLogInfo
from ...common.utilities import loadDatFile, parseFloatFields, splitRecords, textToLines
from .stardate import julianDay

# Type Checking Imports
if TYPE_CHECKING:
    # Standard Library Imports
    from collections.abc import Iterable, Sequence

    # Third Party Imports
    from numpy import ndarray


DATA_PACKAGE: str = "dyntime.physics"
"""``str``: package holding the bundled data directory."""

DATA_DIRECTORY: str = "data/timescales"
"""``str``: data directory, relative to :data:`.DATA_PACKAGE`."""

LEAP_SECONDS_FILE: str = "leap_seconds.dat"
DELTA_T_FILE: str = "tt_minus_ut1.dat"
FAIRHEAD_FILE: str = "fairhead.dat"

INTEGER_LEAP_SECOND_YEAR: int = 1972
"""``int``: first year of integral TAI-UTC steps."""

FAIRHEAD_POWERS: int = 5
"""``int``: number of power-of-time groups in the Fairhead & Bretagnon series."""

_DATASETS: dict[str, object] = {}
"""``dict``: parsed datasets, keyed by dataset name."""


class LeapSecondEntry(NamedTuple):
    """One row of the TAI-UTC table, effective from 0h UTC on the first day of the month."""

    year: int
    month: int
    tai_minus_utc: float
    julian_day: float


@dataclass(frozen=True, eq=False)
class DeltaTTable:
    """Historical TT-UT1 samples and their natural cubic spline."""

    julian_days: ndarray
    """``ndarray``: strictly increasing sample Julian days (UT)."""

    values: ndarray
    """``ndarray``: TT-UT1 in seconds at each sample."""

    spline: CubicSpline
    """``CubicSpline``: natural cubic spline through the samples."""

    @property
    def min_jd(self) -> float:
        """``float``: first tabulated Julian day."""
        return float(self.julian_days[0])

    @property
    def max_jd(self) -> float:
        """``float``: last tabulated Julian day."""
        return float(self.julian_days[-1])

    @property
    def last_slope(self) -> float:
        """``float``: TT-UT1 rate over the last table interval, in seconds per day."""
        return float((self.values[-1] - self.values[-2]) / (self.julian_days[-1] - self.julian_days[-2]))

    def interpolate(self, julian_day: float) -> float:
        """Spline value at `julian_day`, which must lie inside the table."""
        return float(self.spline(julian_day))

    def extrapolate(self, julian_day: float) -> float:
        """Continue the table past its end with the slope of the last interval."""
        return float(self.values[-1]) + (julian_day - self.max_jd) * self.last_slope


@dataclass(frozen=True, eq=False)
class FairheadSeries:
    """Fairhead & Bretagnon TDB-TT series, grouped by power of time.

    Each group ``k`` holds arrays of amplitudes (s), frequencies (rad per Julian millennium) and
    phases (rad), contributing ``T**k * sum(A * sin(w * T + phi))``.
    """

    amplitudes: tuple[ndarray, ...]
    frequencies: tuple[ndarray, ...]
    phases: tuple[ndarray, ...]

    @property
    def term_counts(self) -> tuple[int, ...]:
        """``tuple``: number of terms of each power group."""
        return tuple(len(group) for group in self.amplitudes)

    def evaluate(self, millennia: float) -> float:
        """Sum the series at `millennia` Julian millennia of TT from J2000.

        The power groups are combined with Horner's rule.
        """
        total = 0.0
        for power in reversed(range(FAIRHEAD_POWERS)):
            group = (self.amplitudes[power] * sin(self.frequencies[power] * millennia + self.phases[power])).sum()
            total = total * millennia + float(group)
        return total


def _fail(msg: str, err: Exception | None = None):
    dyntimeLogError(msg)
    if err is not None:
        raise DataFormatError(msg) from err
    raise DataFormatError(msg)


def _readDataset(file_name: str, override_text: str | Iterable[str] | None) -> tuple[list[str], str]:
    """Return the raw lines of a dataset and a label naming where they came from."""
    if override_text is not None:
        return textToLines(override_text), f"replacement {file_name}"

    res = resources.files(DATA_PACKAGE).joinpath(f"{DATA_DIRECTORY}/{file_name}")
    with resources.as_file(res) as res_filepath:
        return loadDatFile(res_filepath), str(file_name)


def _asInteger(value: float, field_name: str, source: str, line_number: int) -> int:
    if value != int(value):
        _fail(f"Non-integral {field_name} in {source}, line {line_number}: {value}")
    return int(value)


def _checkFieldCount(fields: Sequence[str], allowed: tuple[int, ...], source: str, line_number: int):
    if len(fields) not in allowed:
        _fail(f"Expected {' or '.join(map(str, allowed))} fields in {source}, line {line_number}, got {len(fields)}")


def parseLeapSeconds(lines: Sequence[str], source: str = LEAP_SECONDS_FILE) -> list[LeapSecondEntry]:
    """Parse and validate the lines of a TAI-UTC table.

    Args:
        lines (``list``): table lines, the first one being a header
        source (``str``, optional): name used in error messages

    Raises:
        :class:`.DataFormatError`: on a malformed record, an empty table, effective dates that are
            not strictly increasing, or TAI-UTC decreasing once steps are integral

    Returns:
        ``list``: :class:`.LeapSecondEntry` rows, sorted by effective date
    """
    entries: list[LeapSecondEntry] = []
    for line_number, fields in splitRecords(lines, skip_header=True):
        _checkFieldCount(fields, (3,), source, line_number)
        year, month, value = parseFloatFields(fields, source, line_number)
        year = _asInteger(year, "year", source, line_number)
        month = _asInteger(month, "month", source, line_number)
        if not 1 <= month <= 12:
            _fail(f"Month out of range in {source}, line {line_number}: {month}")

        entry = LeapSecondEntry(year, month, value, julianDay(year, month, 1))
        if entries:
            previous = entries[-1]
            if entry.julian_day <= previous.julian_day:
                _fail(f"Leap second dates are not increasing in {source}, line {line_number}")
            if year >= INTEGER_LEAP_SECOND_YEAR and previous.year >= INTEGER_LEAP_SECOND_YEAR:
                if value < previous.tai_minus_utc:
                    _fail(f"TAI-UTC decreases in {source}, line {line_number}")
        entries.append(entry)

    if not entries:
        _fail(f"No leap second entries in {source}")

    return entries


def _sampleJulianDay(fields: list[float], source: str, line_number: int) -> float:
    """Julian day (0h UT) of a TT-UT1 record, in either of its two forms."""
    try:
        if len(fields) == 4:
            year = _asInteger(fields[0], "year", source, line_number)
            month = _asInteger(fields[1], "month", source, line_number)
            day = _asInteger(fields[2], "day", source, line_number)
            return julianDay(year, month, day)

        year = floor(fields[0])
        month = 1 + round((fields[0] - year) * 12)
        if month > 12:
            year, month = year + 1, 1
        return julianDay(year, month, 1)
    except DateError as err:
        _fail(f"Invalid date in {source}, line {line_number}", err)


def parseDeltaTTable(lines: Sequence[str], source: str = DELTA_T_FILE) -> DeltaTTable:
    """Parse the lines of a TT-UT1 table and build its spline.

    Raises:
        :class:`.DataFormatError`: on a malformed record, fewer than two samples, or a repeated date

    Returns:
        :class:`.DeltaTTable`: samples sorted by Julian day
    """
    samples: dict[float, float] = {}
    for line_number, fields in splitRecords(lines, comment_prefixes=("!", "#")):
        _checkFieldCount(fields, (2, 4), source, line_number)
        values = parseFloatFields(fields, source, line_number)
        julian_day = _sampleJulianDay(values, source, line_number)
        if julian_day in samples:
            _fail(f"Repeated TT-UT1 date in {source}, line {line_number}")
        samples[julian_day] = values[-1]

    if len(samples) < 2:
        _fail(f"TT-UT1 table {source} needs at least two samples, got {len(samples)}")

    julian_days = array(sorted(samples), dtype=float64)
    values = array([samples[jd] for jd in julian_days], dtype=float64)
    if (diff(julian_days) <= 0).any():
        _fail(f"TT-UT1 dates are not increasing in {source}")

    return DeltaTTable(julian_days, values, CubicSpline(julian_days, values, bc_type="natural"))


def parseFairheadTerms(lines: Sequence[str], source: str = FAIRHEAD_FILE) -> FairheadSeries:
    """Parse the lines of the Fairhead & Bretagnon coefficient table.

    Raises:
        :class:`.DataFormatError`: on a malformed record, a power outside 0-4, or an empty table
    """
    groups: list[list[tuple[float, float, float]]] = [[] for _ in range(FAIRHEAD_POWERS)]
    for line_number, fields in splitRecords(lines, comment_prefixes=("!", "#")):
        _checkFieldCount(fields, (4,), source, line_number)
        power, amplitude, frequency, phase = parseFloatFields(fields, source, line_number)
        power = _asInteger(power, "power", source, line_number)
        if not 0 <= power < FAIRHEAD_POWERS:
            _fail(f"Power of time out of range in {source}, line {line_number}: {power}")
        groups[power].append((amplitude, frequency, phase))

    if not any(groups):
        _fail(f"No series terms in {source}")

    columns = [asarray(group, dtype=float64).reshape(-1, 3) for group in groups]
    return FairheadSeries(
        amplitudes=tuple(column[:, 0] for column in columns),
        frequencies=tuple(column[:, 1] for column in columns),
        phases=tuple(column[:, 2] for column in columns),
    )


def _loadDataset(name: str, file_name: str, parser, override_text):
    if override_text is None and name in _DATASETS:
        return _DATASETS[name]

    lines, source = _readDataset(file_name, override_text)
    dataset = parser(lines, source)
    _DATASETS[name] = dataset
    dyntimeLogInfo(f"Loaded {name} table from {source}")
    return dataset


def loadLeapSeconds(override_text: str | Iterable[str] | None = None) -> list[LeapSecondEntry]:
    """Return the TAI-UTC table, the bundled one unless `override_text` replaces it.

    Args:
        override_text (``str`` | ``list``, optional): replacement table content

    Raises:
        :class:`.DataFormatError`: if the table is missing or malformed
    """
    return _loadDataset("leap_seconds", LEAP_SECONDS_FILE, parseLeapSeconds, override_text)


def loadDeltaTTable(override_text: str | Iterable[str] | None = None) -> DeltaTTable:
    """Return the TT-UT1 table, the bundled one unless `override_text` replaces it.

    Args:
        override_text (``str`` | ``list``, optional): replacement table content

    Raises:
        :class:`.DataFormatError`: if the table is missing or malformed
    """
    return _loadDataset("delta_t", DELTA_T_FILE, parseDeltaTTable, override_text)


def loadFairheadTerms(override_text: str | Iterable[str] | None = None) -> FairheadSeries:
    """Return the TDB-TT series coefficients, the bundled ones unless `override_text` replaces them.

    Raises:
        :class:`.DataFormatError`: if the table is missing or malformed
    """
    return _loadDataset("fairhead", FAIRHEAD_FILE, parseFairheadTerms, override_text)


def clearDatasets():
    """Forget every parsed dataset, the next load re-reads the bundled files."""
    _DATASETS.clear()
