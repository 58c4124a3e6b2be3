"""Configure importable things that aren't pytest fixtures."""

from __future__ import annotations

# Standard Library Imports
from pathlib import Path

# Third Party Imports
from numpy import isclose

# DYNTIME Imports
from dyntime.physics.time.stardate import julianDay

# Common file paths
FIXTURE_DATA_DIR = Path(__file__).parent / "datafiles"
EOP_FILE_PATH = Path("dat/eops.dat")
TIMESCALE_DIR = Path("timescales")


# Common julian dates, away from leap seconds and DST transitions
TEST_START_JD: float = julianDay(2018, 12, 1, 12)
MODERN_JDS: tuple[float, ...] = (
    julianDay(1995, 2, 14, 6, 30),
    julianDay(2004, 5, 20, 18),
    TEST_START_JD,
    julianDay(2021, 8, 10, 3, 15, 27.5),
)

ROUND_TRIP_TOLERANCE_DAYS: float = 1e-9
"""``float``: allowed round trip error of a conversion, in days."""


def closeDays(first: float, second: float, tolerance: float = ROUND_TRIP_TOLERANCE_DAYS) -> bool:
    """Return whether two Julian days agree to `tolerance` days."""
    return bool(isclose(float(first), float(second), rtol=0.0, atol=tolerance))
