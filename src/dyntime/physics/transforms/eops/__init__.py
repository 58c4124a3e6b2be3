"""Earth orientation parameters package, the source of UT1-UTC for the time scale conversions."""

# Local Imports
from ....common.exceptions import TimeScaleError


class MissingEOP(TimeScaleError):  # noqa: N818
    """Error thrown when UT1-UTC can't be found for a specified date."""


# Local Imports
# forward-facing API import
from .getter import getEOPLoader  # noqa: E402, F401
