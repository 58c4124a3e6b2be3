from __future__ import annotations

# Standard Library Imports
import os

# Third Party Imports
import pytest
from numpy import isclose

# DYNTIME Imports
from dyntime.common.exceptions import ConfigurationError, DataFormatError, TimeScaleError
from dyntime.physics.constants import MJD_OFFSET
from dyntime.physics.time.stardate import julianDay
from dyntime.physics.time.tables import parseDeltaTTable, parseLeapSeconds
from dyntime.physics.transforms.eops import MissingEOP, getEOPLoader
from dyntime.physics.transforms.eops.getter import clearEOPLoaders
from dyntime.physics.transforms.eops.loaders import DerivedEOPLoader, LocalDotDatEOPLoader

# Local Imports
from .. import EOP_FILE_PATH, FIXTURE_DATA_DIR


def testMissingEOPIsTimeScaleError():
    """Test that a missing EOP can be caught as any other time scale error."""
    assert issubclass(MissingEOP, TimeScaleError)


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testCustomEOPFile(datafiles: str):
    """Test UT1-UTC read through a configured custom file loader."""
    eop_file = os.path.join(datafiles, EOP_FILE_PATH)
    loader = getEOPLoader(loader_name="LocalDotDatEOPLoader", loader_location=eop_file)

    assert isinstance(loader, LocalDotDatEOPLoader)
    assert isclose(loader.getUT1minusUTC(julianDay(2015, 6, 30)), -0.678)


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testDotDatLoader(datafiles: str):
    """Test coverage and interpolation of a '.dat' loader."""
    loader = LocalDotDatEOPLoader(os.path.join(datafiles, EOP_FILE_PATH))

    # Daily records are reproduced
    assert isclose(loader.getUT1minusUTC(57202.0 + MJD_OFFSET), -0.6769)
    # UT1-TAI is interpolated, the leap second of the day in progress added back
    assert isclose(loader.getUT1minusUTC(57203.5 + MJD_OFFSET), -0.67855)
    assert isclose(loader.getUT1minusUTC(57204.5 + MJD_OFFSET), 0.32035)
    # Both ends of the file are covered
    assert isclose(loader.getUT1minusUTC(57201.0 + MJD_OFFSET), -0.6758)
    assert isclose(loader.getUT1minusUTC(57206.0 + MJD_OFFSET), 0.3187)

    with pytest.raises(MissingEOP):
        loader.getUT1minusUTC(57200.0 + MJD_OFFSET)
    with pytest.raises(MissingEOP):
        loader.getUT1minusUTC(57206.5 + MJD_OFFSET)


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testBadColumns(datafiles: str):
    """Test that a '.dat' row with the wrong number of columns is rejected."""
    loader = LocalDotDatEOPLoader(os.path.join(datafiles, "dat/eops_bad_columns.dat"))
    with pytest.raises(DataFormatError, match="Expected 13 EOP columns"):
        loader.load()


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testBadDate(datafiles: str):
    """Test that a '.dat' row with an impossible calendar date is rejected."""
    loader = LocalDotDatEOPLoader(os.path.join(datafiles, "dat/eops_bad_date.dat"))
    with pytest.raises(DataFormatError, match="Invalid date") as error:
        loader.getUT1minusUTC(julianDay(2015, 6, 29))
    assert error.value.__cause__ is not None


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testDateDisagreesWithMJD(datafiles: str):
    """Test that a '.dat' row whose date and MJD columns disagree is rejected."""
    loader = LocalDotDatEOPLoader(os.path.join(datafiles, "dat/eops_bad_mjd.dat"))
    with pytest.raises(DataFormatError, match="does not match"):
        loader.load()


def testNonFiniteField(tmp_path):
    """Test that a '.dat' row holding a NaN is rejected."""
    eop_file = tmp_path / "eops_nan.dat"
    eop_file.write_text(
        "2015  6 28 57201  0.109213  0.439151 nan  0.0011000 -0.000120  0.000098 -0.103210 -0.009512 35\n",
        encoding="utf-8",
    )
    loader = LocalDotDatEOPLoader(str(eop_file))
    with pytest.raises(DataFormatError, match="Non-finite"):
        loader.load()


def testMissingFile():
    """Test that a '.dat' file that does not exist is reported on first use."""
    loader = LocalDotDatEOPLoader("not/a/file.dat")
    with pytest.raises(DataFormatError):
        loader.getUT1minusUTC(julianDay(2015, 7, 1))


def testUnreadableFile(tmp_path):
    """Test that a directory or a binary file given as '.dat' file is reported as a format error."""
    with pytest.raises(DataFormatError):
        LocalDotDatEOPLoader(str(tmp_path)).load()

    binary_file = tmp_path / "eops.bin"
    binary_file.write_bytes(b"\xff\xfe\xfa\x00\x81")
    with pytest.raises(DataFormatError, match="Could not read"):
        LocalDotDatEOPLoader(str(binary_file)).load()


def testDefaultDerivedLoader():
    """Test UT1-UTC derived from the bundled tables, the default loader."""
    loader = getEOPLoader()

    assert isinstance(loader, DerivedEOPLoader)
    assert abs(loader.getUT1minusUTC(julianDay(2018, 3, 15))) < 0.9
    # Every date is covered
    assert isinstance(loader.getUT1minusUTC(julianDay(1800, 1, 1)), float)


def testDerivedValue():
    """Test that derived UT1-UTC is 32.184 s plus TAI-UTC minus TT-UT1."""
    leap_seconds = parseLeapSeconds(["HEADER", "1972 1 10.0", "2017 1 37.0"])
    delta_t = parseDeltaTTable(["2018 1 1 69.0", "2019 1 1 69.0", "2020 1 1 69.0"])
    loader = DerivedEOPLoader(leap_seconds=leap_seconds, delta_t=delta_t)
    assert isclose(loader.getUT1minusUTC(julianDay(2018, 6, 1)), 0.184)


def testLoaderCache():
    """Test that loaders are cached by name and location."""
    first = getEOPLoader("DerivedEOPLoader", "")
    assert getEOPLoader() is first
    clearEOPLoaders()
    assert getEOPLoader() is not first


def testInvalidLoader():
    """Test catching an invalid loader name."""
    loader_name: str = "MadeUpDotDatLoader"  # Invalid loader name
    with pytest.raises(ConfigurationError):
        getEOPLoader(loader_name=loader_name)
