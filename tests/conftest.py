from __future__ import annotations

# Standard Library Imports
import logging
import sys
from typing import TYPE_CHECKING

# Third Party Imports
import pytest

# DYNTIME Imports
from dyntime.common.behavioral_config import BehavioralConfig
from dyntime.physics.time.context import TimeScaleContext
from dyntime.physics.time.tables import clearDatasets
from dyntime.physics.transforms.eops.getter import clearEOPLoaders

# Type Checking Imports
if TYPE_CHECKING:
    # DYNTIME Imports
    from dyntime.common.logger import Logger


@pytest.fixture(autouse=True)
def _patchMissingEnvVariables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Automatically delete each environment variable, if set.

    Args:
        monkeypatch (:class:`pytest.MonkeyPatch`): monkeypatch obj to track changes

    Note:
        This is used so tests can assume a "blank" configuration, and it won't
        overwrite a user's custom-set environment variables.
    """
    with monkeypatch.context() as m_patch:
        m_patch.delenv("DYNTIME_BEHAVIOR_CONFIG", raising=False)
        BehavioralConfig.resetConfig()
        yield
        # Make sure we reset the config after each test function
        BehavioralConfig.resetConfig()


@pytest.fixture(autouse=True)
def _resetModuleCaches() -> None:
    """Make sure replaced tables and cached EOP loaders never leak between tests."""
    yield
    clearDatasets()
    clearEOPLoaders()


@pytest.fixture(scope="session", name="test_logger")
def getTestLoggerObject() -> Logger:
    """Create a custom :class:`logging.Logger` object."""
    logger = logging.getLogger("Unit Test Logger")
    logger.setLevel(logging.DEBUG)
    handler = logging.StreamHandler(stream=sys.stdout)
    handler.setFormatter(logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return logger


@pytest.fixture(name="context")
def getTimeScaleContext() -> TimeScaleContext:
    """Return a :class:`.TimeScaleContext` built from the bundled tables and default settings."""
    return TimeScaleContext()


def pytest_addoption(parser: pytest.Parser) -> None:
    """Add command line options."""
    parser.addoption("--runslow", action="store_true", default=False, help="run slow tests")


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest options without an .ini file."""
    config.addinivalue_line("markers", "slow: mark test as slow to run")


def pytest_collection_modifyitems(
    session: pytest.Session,
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Collect pytest modifiers."""
    if config.getoption("--runslow"):
        # --runslow given in cli: do not skip slow tests
        return
    skip_slow = pytest.mark.skip(reason="need --runslow option to run")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)
