"""Defines the :class:`.Logger` class and the package-level logging helpers.

The helpers publish to the ``"dyntime"`` logger. Its handler and level come from the ``[logging]``
section of :class:`.BehavioralConfig`, applied by the :class:`.Logger` that every
:class:`.TimeScaleContext` builds for that logger.
"""

from __future__ import annotations

# Standard Library Imports
import logging
import sys
from logging.handlers import RotatingFileHandler
from os import makedirs
from os.path import exists, join

# Local Imports
from . import pathSafeTime
from .behavioral_config import BehavioralConfig

PACKAGE_LOGGER_NAME: str = "dyntime"
"""``str``: name of the logger that the one-liner helpers publish to."""


class Logger:
    """Extended logger wraps the standard Python logging package.

    Handlers, levels, and log file names are taken from the ``[logging]`` section of
    :class:`.BehavioralConfig` unless given explicitly.
    """

    def __init__(self, name, level=None, path=None, allow_multiple_handlers=None):
        """Configure the logging information for this Logger instance.

        Args:
            name (``str``): name of the logger instance
            level (``int``, optional): level at which log messages are published
            path (``str``, optional): directory where the log file is stored, or ``"stdout"``
            allow_multiple_handlers (``bool``, optional): whether multiple log handlers are permitted
        """
        config = BehavioralConfig.getConfig().logging
        if not level:
            level = config.Level
        if not path:
            path = config.OutputLocation
        if allow_multiple_handlers is None:
            allow_multiple_handlers = config.AllowMultipleHandlers

        self.logger = logging.getLogger(name)
        if not self.logger.handlers or allow_multiple_handlers is True:
            if path == "stdout":
                self.filename = "stdout"
                handler = logging.StreamHandler(sys.stdout)

            else:
                if not exists(path):
                    self.logger.info(f"Path did not exist: {path!r}. Creating path...")
                    makedirs(path)

                log_name = f"{name}_{pathSafeTime()}.log"
                self.filename = join(path, log_name)
                handler = RotatingFileHandler(
                    self.filename,
                    maxBytes=config.MaxFileSize,
                    backupCount=config.MaxFileCount,
                )

            formatter = logging.Formatter("%(asctime)s - %(module)s - %(levelname)s - %(message)s")
            handler.setFormatter(formatter)

            self.logger.setLevel(level)
            self.logger.addHandler(handler)

    def __getattr__(self, name):
        """Delegate everything else to the wrapped :class:`logging.Logger`."""
        return getattr(self.logger, name)


def _dyntimeLog(message: str, level: int):
    """Log a message to the top-level package log record.

    One-liner for functions that need to log without holding a :class:`.Logger`.

    Args:
        message (``str``): message to record in the log.
        level (``int``): level at which to log this message, corresponding to `logging.LOG_LEVEL`.
    """
    logging.getLogger(PACKAGE_LOGGER_NAME).log(msg=message, level=level)


def dyntimeLogCritical(message: str):
    """Log a CRITICAL message to the top-level log record.

    See Also:
        :func:`._dyntimeLog`
    """
    _dyntimeLog(message, level=logging.CRITICAL)


def dyntimeLogError(message: str):
    """Log an ERROR message to the top-level log record.

    See Also:
        :func:`._dyntimeLog`
    """
    _dyntimeLog(message, level=logging.ERROR)


def dyntimeLogWarning(message: str):
    """Log a WARNING message to the top-level log record.

    See Also:
        :func:`._dyntimeLog`
    """
    _dyntimeLog(message, level=logging.WARNING)


def dyntimeLogInfo(message: str):
    """Log an INFO message to the top-level log record.

    See Also:
        :func:`._dyntimeLog`
    """
    _dyntimeLog(message, level=logging.INFO)


def dyntimeLogDebug(message: str):
    """Log a DEBUG message to the top-level log record.

    See Also:
        :func:`._dyntimeLog`
    """
    _dyntimeLog(message, level=logging.DEBUG)
