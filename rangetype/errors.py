"""Errors raised when a range-checked value would break its interval."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rangetype.interval import Interval


class RangeTypeError(ValueError):
    """Base class for every interval violation."""


class InvalidInterval(RangeTypeError):
    def __init__(self, low: int, high: int):
        self.low: int = low
        self.high: int = high
        super().__init__(
            f"Interval low ({low}) must be <= high ({high}).\n"
            f"Hint: bounds are inclusive, a single-value interval is "
            f"Interval(low={low}, high={low})"
        )


class OutOfRange(RangeTypeError):
    def __init__(self, value: int, interval: "Interval"):
        self.value: int = value
        self.interval: "Interval" = interval
        super().__init__(f"{value} is not in the range {interval}")


class IncompatibleIntervals(RangeTypeError):
    def __init__(self, left: "Interval", right: "Interval"):
        self.left: "Interval" = left
        self.right: "Interval" = right
        super().__init__(
            f"Cannot combine values from different intervals.\n"
            f"Got: {left} and {right}\n"
            f"Hint: re-declare one operand explicitly, e.g. "
            f"value.with_interval({left.low}, {left.high})"
        )


class RangeOverflow(RangeTypeError):
    def __init__(self, value: int, interval: "Interval", expression: str):
        self.value: int = value
        self.interval: "Interval" = interval
        self.expression: str = expression
        super().__init__(
            f"{expression} = {value} overflows the range {interval}\n"
            f"Hint: results are never clamped, widen the interval or check "
            f"operands before combining them"
        )
