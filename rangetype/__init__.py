import logging

from .errors import (
    IncompatibleIntervals,
    InvalidInterval,
    OutOfRange,
    RangeOverflow,
    RangeTypeError,
)
from .interval import Interval
from .types import (
    INT8,
    INT16,
    INT32,
    INT64,
    UINT8,
    UINT16,
    UINT32,
    UINT64,
    RangeType,
)
from .value import (
    CheckResult,
    Op,
    RangeValue,
    combine,
    construct,
    try_combine,
    try_construct,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Interval",
    "RangeValue",
    "RangeType",
    "Op",
    "CheckResult",
    "construct",
    "combine",
    "try_construct",
    "try_combine",
    "RangeTypeError",
    "InvalidInterval",
    "OutOfRange",
    "IncompatibleIntervals",
    "RangeOverflow",
    "INT8",
    "INT16",
    "INT32",
    "INT64",
    "UINT8",
    "UINT16",
    "UINT32",
    "UINT64",
]
