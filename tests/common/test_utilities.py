from __future__ import annotations

# Standard Library Imports
import os
from datetime import datetime

# Third Party Imports
import pytest

# DYNTIME Imports
import dyntime.common.utilities as utils
from dyntime.common import pathSafeTime
from dyntime.common.exceptions import DataFormatError

# Local Imports
from .. import EOP_FILE_PATH, FIXTURE_DATA_DIR


@pytest.mark.datafiles(FIXTURE_DATA_DIR)
def testLoadDatFile(datafiles: str):
    """Ensure dat file loader works properly."""
    # Valid dat file
    lines = utils.loadDatFile(os.path.join(datafiles, EOP_FILE_PATH))
    assert len(lines) == 7
    assert not any(line.endswith("\n") for line in lines)

    # Empty dat file
    with pytest.raises(DataFormatError, match="Empty DAT file:") as exc_info:
        utils.loadDatFile(os.path.join(datafiles, "dat/empty.dat"))
    err_msg: str = exc_info.value.args[0]
    assert err_msg.endswith(".dat")

    # Non-existent dat file
    with pytest.raises(DataFormatError, match="Could not find DAT file:") as exc_info:
        utils.loadDatFile(os.path.join(datafiles, "dat/nonexistent.dat"))
    assert isinstance(exc_info.value.__cause__, FileNotFoundError)


def testLoadUnreadableDatFile(tmp_path):
    """Ensure files that cannot be read as text are reported as format errors."""
    with pytest.raises(DataFormatError, match="Could not read DAT file") as exc_info:
        utils.loadDatFile(tmp_path)
    assert isinstance(exc_info.value.__cause__, IsADirectoryError)

    binary_file = tmp_path / "binary.dat"
    binary_file.write_bytes(b"\xff\xfe\x00\x81")
    with pytest.raises(DataFormatError, match="Could not read DAT file") as exc_info:
        utils.loadDatFile(binary_file)
    assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)


def testTextToLines():
    """Ensure replacement table content is normalized to a list of lines."""
    assert utils.textToLines("a b\nc d\n") == ["a b", "c d"]
    assert utils.textToLines(["a b\n", "c d"]) == ["a b", "c d"]
    assert utils.textToLines("") == []


def testSplitRecords():
    """Ensure comments, blanks, and the optional header are dropped with line numbers kept."""
    lines = ["HEADER LINE", "", "! comment", "# another", "  1 2 3  ", "4 5"]
    assert utils.splitRecords(lines) == [(1, ["HEADER", "LINE"]), (5, ["1", "2", "3"]), (6, ["4", "5"])]
    assert utils.splitRecords(lines, skip_header=True) == [(5, ["1", "2", "3"]), (6, ["4", "5"])]
    assert utils.splitRecords(["% x", "1"], comment_prefixes=("%",)) == [(2, ["1"])]


def testParseFloatFields():
    """Ensure numeric fields are converted and bad ones are reported with their location."""
    assert utils.parseFloatFields(["1", "-2.5", "3e2"], "table.dat", 4) == [1.0, -2.5, 300.0]
    with pytest.raises(DataFormatError, match="table.dat, line 7"):
        utils.parseFloatFields(["1", "two"], "table.dat", 7)
    for non_finite in ("nan", "inf", "-Infinity"):
        with pytest.raises(DataFormatError, match="Non-finite field in table.dat, line 3"):
            utils.parseFloatFields(["1", non_finite], "table.dat", 3)


def testPathSafeTime():
    """Ensure time stamps contain neither colons nor decimal points."""
    stamp = pathSafeTime(datetime(2021, 3, 4, 5, 6, 7, 890))
    assert stamp == "2021-03-04T05-06-07000890"
    assert ":" not in pathSafeTime()
