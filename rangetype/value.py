import logging
import operator as op
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from typing_extensions import override

from rangetype.errors import (
    IncompatibleIntervals,
    OutOfRange,
    RangeOverflow,
    RangeTypeError,
)
from rangetype.interval import Interval
from rangetype.util import is_integer

logger = logging.getLogger(__name__)


class Op(Enum):
    ADD = "+"
    SUBTRACT = "-"
    MULTIPLY = "*"
    DIVIDE = "//"


OPERATORS: dict[Op, Callable[[int, int], int]] = {
    Op.ADD: op.add,
    Op.SUBTRACT: op.sub,
    Op.MULTIPLY: op.mul,
    Op.DIVIDE: op.floordiv,
}


@dataclass(frozen=True, kw_only=True)
class RangeValue:
    """An integer tagged with the closed interval it must stay inside.

    Values are immutable: arithmetic returns a new value. Two values are only
    combinable when their intervals are identical, and every result is
    re-checked against that interval.
    """

    payload: int
    bounds: Interval

    def __post_init__(self) -> None:
        if not is_integer(self.payload):
            raise TypeError(
                f"RangeValue payload must be an int.\n"
                f"Got {type(self.payload).__name__!r}: {self.payload!r}"
            )
        if self.payload not in self.bounds:
            logger.debug("rejected %d outside %s", self.payload, self.bounds)
            raise OutOfRange(self.payload, self.bounds)

    def raw(self) -> int:
        return self.payload

    def interval(self) -> Interval:
        return self.bounds

    def with_interval(self, low: int, high: int) -> "RangeValue":
        """Re-declare this value over another interval, checking it again."""
        return construct(self.payload, low, high)

    def __add__(self, other: Any) -> "RangeValue":
        if not isinstance(other, RangeValue):
            return NotImplemented
        return combine(self, other, Op.ADD)

    def __sub__(self, other: Any) -> "RangeValue":
        if not isinstance(other, RangeValue):
            return NotImplemented
        return combine(self, other, Op.SUBTRACT)

    def __mul__(self, other: Any) -> "RangeValue":
        if not isinstance(other, RangeValue):
            return NotImplemented
        return combine(self, other, Op.MULTIPLY)

    def __floordiv__(self, other: Any) -> "RangeValue":
        if not isinstance(other, RangeValue):
            return NotImplemented
        return combine(self, other, Op.DIVIDE)

    def __neg__(self) -> "RangeValue":
        result = -self.payload
        if result not in self.bounds:
            logger.debug("negation of %d overflows %s", self.payload, self.bounds)
            operand = f"({self.payload})" if self.payload < 0 else str(self.payload)
            raise RangeOverflow(result, self.bounds, f"-{operand}")
        return RangeValue(payload=result, bounds=self.bounds)

    # Ordering looks at payloads only, so values from different intervals
    # can still be sorted.
    def __lt__(self, other: Any) -> bool:
        if not isinstance(other, RangeValue):
            return NotImplemented
        return self.payload < other.payload

    def __le__(self, other: Any) -> bool:
        if not isinstance(other, RangeValue):
            return NotImplemented
        return self.payload <= other.payload

    def __gt__(self, other: Any) -> bool:
        if not isinstance(other, RangeValue):
            return NotImplemented
        return self.payload > other.payload

    def __ge__(self, other: Any) -> bool:
        if not isinstance(other, RangeValue):
            return NotImplemented
        return self.payload >= other.payload

    def __int__(self) -> int:
        return self.payload

    @override
    def __str__(self) -> str:
        return str(self.payload)


@dataclass(frozen=True)
class CheckResult:
    """Result of a non-raising construct/combine.

    Attributes:
        success: True if the value satisfies its interval, False otherwise
        value: The checked value if successful, None if failed
        error: The interval violation if failed, None if successful
    """

    success: bool
    value: RangeValue | None
    error: RangeTypeError | None


def construct(value: int, low: int, high: int) -> RangeValue:
    """Build a value checked against the inclusive interval [low, high].

    Raises:
        InvalidInterval: If low > high
        OutOfRange: If value falls outside [low, high]
        TypeError: If any argument is not an int
    """
    return RangeValue(payload=value, bounds=Interval(low=low, high=high))


def combine(a: RangeValue, b: RangeValue, operation: Op) -> RangeValue:
    """Apply `operation` to two values declared over the same interval.

    The intervals must be identical before anything is computed, and the
    result must land inside that interval. Nothing is clamped.

    `Op.DIVIDE` is floor division, so it differs from truncating division
    when the operands have mixed signs (-7 // 2 == -4, not -3).

    Raises:
        IncompatibleIntervals: If a and b carry different intervals
        RangeOverflow: If the result falls outside the shared interval
        ZeroDivisionError: If dividing by a zero payload
        TypeError: If an operand is not a RangeValue or `operation` is not an Op
    """
    if not isinstance(operation, Op):
        raise TypeError(
            f"combine() operation must be an Op.\n"
            f"Got {type(operation).__name__!r}: {operation!r}\n"
            f"Hint: use one of {', '.join(f'Op.{o.name}' for o in Op)}"
        )
    if not isinstance(a, RangeValue) or not isinstance(b, RangeValue):
        raise TypeError(
            f"combine() operands must be RangeValue objects.\n"
            f"Got: {type(a).__name__} {operation.value} {type(b).__name__}"
        )
    if a.bounds != b.bounds:
        logger.debug("refusing %s between %s and %s", operation.name, a.bounds, b.bounds)
        raise IncompatibleIntervals(a.bounds, b.bounds)

    result = OPERATORS[operation](a.payload, b.payload)
    if result not in a.bounds:
        logger.debug("%s of %d and %d overflows %s", operation.name, a.payload, b.payload, a.bounds)
        raise RangeOverflow(
            result, a.bounds, f"{a.payload} {operation.value} {b.payload}"
        )
    return RangeValue(payload=result, bounds=a.bounds)


def try_construct(value: int, low: int, high: int) -> CheckResult:
    """Like `construct`, but report interval violations instead of raising."""
    try:
        checked = construct(value, low, high)
    except RangeTypeError as e:
        return CheckResult(success=False, value=None, error=e)
    return CheckResult(success=True, value=checked, error=None)


def try_combine(a: RangeValue, b: RangeValue, operation: Op) -> CheckResult:
    """Like `combine`, but report interval violations instead of raising."""
    try:
        checked = combine(a, b, operation)
    except RangeTypeError as e:
        return CheckResult(success=False, value=None, error=e)
    return CheckResult(success=True, value=checked, error=None)
