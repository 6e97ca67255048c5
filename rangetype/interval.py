from dataclasses import dataclass

from rangetype.errors import InvalidInterval
from rangetype.util import is_integer


@dataclass(frozen=True, kw_only=True)
class Interval:
    low: int
    high: int

    def __post_init__(self) -> None:
        for edge, bound in (("low", self.low), ("high", self.high)):
            if not is_integer(bound):
                raise TypeError(
                    f"Interval {edge} bound must be an int.\n"
                    f"Got {type(bound).__name__!r}: {bound!r}"
                )
        if self.low > self.high:
            raise InvalidInterval(self.low, self.high)

    def __contains__(self, value: object) -> bool:
        return is_integer(value) and self.low <= value <= self.high  # type: ignore[operator]

    @property
    def size(self) -> int:
        """Number of integers in the interval, both ends included."""
        return self.high - self.low + 1

    def __str__(self) -> str:
        return f"[{self.low}, {self.high}]"
