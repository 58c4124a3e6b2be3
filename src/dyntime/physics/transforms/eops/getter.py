"""Module defining how to select and cache the configured source of UT1-UTC."""

from __future__ import annotations

# Standard Library Imports
from collections import namedtuple
from typing import TYPE_CHECKING

# Local Imports
from ....common.behavioral_config import BehavioralConfig
from ....common.exceptions import ConfigurationError
from ....common.logger import dyntimeLogError
from .loaders import DerivedEOPLoader, LocalDotDatEOPLoader

if TYPE_CHECKING:
    # Local Imports
    from .loaders import EOPLoader


LoaderTag = namedtuple("LoaderTag", ("loader_name", "loader_location"))
"""NamedTuple: Tag used to identify different :class:`.EOPLoader`'s."""

_LOADER_MAP: dict[str, type[EOPLoader]] = {
    "DerivedEOPLoader": DerivedEOPLoader,
    "LocalDotDatEOPLoader": LocalDotDatEOPLoader,
}
"""dict[str, type[EOPLoader]]: Maps loader class names to loader class references."""

_EOP_LOADERS: dict[LoaderTag, EOPLoader] = {}
"""dict[LoaderTag, EOPLoader]: Stores configured loaders based on tag."""


def getEOPLoader(loader_name: str | None = None, loader_location: str | None = None) -> EOPLoader:
    """Return EOP loader specified by `loader_name` and `loader_location`.

    Args:
        loader_name (str, optional): Name of the concrete :class:`.EOPLoader` implementation to use.
            Defaults to ``[eop] LoaderName`` of the behavioral config.
        loader_location (str, optional): Location that the specified :class:`.EOPLoader` will load
            EOP data from. Defaults to ``[eop] LoaderLocation`` of the behavioral config.

    Raises:
        ConfigurationError: If `loader_name` is not a known loader.

    Returns:
        EOPLoader: :class:`.EOPLoader` object specified by `loader_name` and `loader_location`.
    """
    behave_config = BehavioralConfig.getConfig()
    if loader_name is None:
        loader_name = behave_config.eop.LoaderName

    if loader_location is None:
        loader_location = behave_config.eop.LoaderLocation

    tag = LoaderTag(loader_name, loader_location)
    loader = _EOP_LOADERS.get(tag)
    if not loader:
        try:
            loader = _LOADER_MAP[loader_name](loader_location)
        except KeyError as err:
            msg = f"Specified loader '{loader_name}' is undefined"
            dyntimeLogError(msg)
            raise ConfigurationError(msg) from err
        _EOP_LOADERS[tag] = loader
    return loader


def clearEOPLoaders():
    """Forget every cached loader, the next lookup builds them again."""
    _EOP_LOADERS.clear()
