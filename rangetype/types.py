"""Named, reusable range types.

A `RangeType` is an interval with a name, callable like a constructor:

    >>> Percent = RangeType(0, 100, name="Percent")
    >>> Percent(42) + Percent(8)
    RangeValue(payload=50, bounds=Interval(low=0, high=100))

Identity stays structural: two range types with the same bounds build
values that can be combined with each other.
"""

from rangetype.interval import Interval
from rangetype.util import WIDTHS, int_bounds
from rangetype.value import CheckResult, RangeValue, construct, try_construct


class RangeType:
    __slots__ = ("_interval", "_name")

    def __init__(self, low: int, high: int, name: str | None = None):
        self._interval: Interval = Interval(low=low, high=high)
        self._name: str = name or f"RangeType{self._interval}"

    # Read-only: the hash depends on the interval.
    @property
    def interval(self) -> Interval:
        return self._interval

    @property
    def name(self) -> str:
        return self._name

    def __call__(self, value: int) -> RangeValue:
        return construct(value, self.interval.low, self.interval.high)

    def check(self, value: int) -> CheckResult:
        return try_construct(value, self.interval.low, self.interval.high)

    def __contains__(self, value: object) -> bool:
        return value in self.interval

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeType):
            return NotImplemented
        return self.interval == other.interval

    def __hash__(self) -> int:
        return hash(self.interval)

    @property
    def min(self) -> RangeValue:
        return self(self.interval.low)

    @property
    def max(self) -> RangeValue:
        return self(self.interval.high)

    def __repr__(self) -> str:
        return f"RangeType({self.interval.low}, {self.interval.high}, name={self.name!r})"


def _machine_type(signed: bool, bits: int) -> RangeType:
    low, high = int_bounds(signed, bits)
    return RangeType(low, high, name=f"{'int' if signed else 'uint'}{bits}")


INT8, INT16, INT32, INT64 = (_machine_type(True, bits) for bits in WIDTHS)
UINT8, UINT16, UINT32, UINT64 = (_machine_type(False, bits) for bits in WIDTHS)

MACHINE_TYPES: dict[str, RangeType] = {
    t.name.upper(): t
    for t in (INT8, INT16, INT32, INT64, UINT8, UINT16, UINT32, UINT64)
}
