"""Tests for range-checked values and checked arithmetic."""

import logging

import pytest
from hypothesis import given
from hypothesis import strategies as st

from rangetype import (
    CheckResult,
    IncompatibleIntervals,
    Interval,
    InvalidInterval,
    Op,
    OutOfRange,
    RangeOverflow,
    RangeTypeError,
    RangeValue,
    combine,
    construct,
    try_combine,
    try_construct,
)


def test_construct_within_interval() -> None:
    value = construct(1, 0, 10)

    assert value.raw() == 1
    assert value.interval() == Interval(low=0, high=10)


def test_construct_on_both_bounds() -> None:
    assert construct(0, 0, 10).raw() == 0
    assert construct(10, 0, 10).raw() == 10


def test_construct_outside_interval() -> None:
    with pytest.raises(OutOfRange) as excinfo:
        construct(11, 0, 10)

    assert excinfo.value.value == 11
    assert excinfo.value.interval == Interval(low=0, high=10)
    assert "11 is not in the range [0, 10]" in str(excinfo.value)


def test_construct_below_interval() -> None:
    with pytest.raises(OutOfRange):
        construct(-1, 0, 10)


def test_construct_malformed_interval() -> None:
    with pytest.raises(InvalidInterval):
        construct(0, 5, 2)


def test_construct_rejects_non_integer_payload() -> None:
    with pytest.raises(TypeError):
        construct(1.0, 0, 10)  # type: ignore[arg-type]
    with pytest.raises(TypeError):
        construct(True, 0, 10)  # type: ignore[arg-type]


def test_direct_instantiation_still_checks_bounds() -> None:
    with pytest.raises(OutOfRange):
        RangeValue(payload=20, bounds=Interval(low=0, high=10))


def test_interval_identity_is_structural() -> None:
    assert construct(5, 0, 10).interval() == construct(5, 0, 10).interval()


def test_accessors_are_idempotent() -> None:
    value = construct(7, 0, 10)

    assert [value.raw() for _ in range(3)] == [7, 7, 7]
    assert [value.interval() for _ in range(3)] == [Interval(low=0, high=10)] * 3


def test_values_are_immutable() -> None:
    value = construct(7, 0, 10)

    with pytest.raises(AttributeError):
        value.payload = 8  # type: ignore[misc]


def test_equality_needs_interval_and_payload() -> None:
    assert construct(1, 0, 1) == construct(1, 0, 1)
    assert not construct(1, 0, 1) != construct(1, 0, 1)
    assert construct(1, 0, 1) != construct(1, 0, 3)
    assert construct(1, 0, 3) != construct(2, 0, 3)


def test_equality_with_plain_int_is_false() -> None:
    assert construct(1, 0, 3) != 1


def test_values_are_hashable() -> None:
    values = {construct(1, 0, 3), construct(1, 0, 3), construct(1, 0, 4)}

    assert len(values) == 2


def test_ordering_compares_payloads_across_intervals() -> None:
    assert construct(1, 0, 3) < construct(2, 1, 4)
    assert construct(2, 1, 4) > construct(1, 0, 3)
    assert construct(2, 0, 3) <= construct(2, 0, 9)
    assert construct(2, 0, 3) >= construct(2, 0, 9)
    assert sorted([construct(3, 0, 5), construct(1, 0, 9)]) == [
        construct(1, 0, 9),
        construct(3, 0, 5),
    ]


def test_ordering_with_plain_int_is_a_type_error() -> None:
    with pytest.raises(TypeError):
        construct(1, 0, 3) < 2  # type: ignore[operator]


def test_str_repr_and_int() -> None:
    value = construct(5, 0, 10)

    assert str(value) == "5"
    assert repr(value) == "RangeValue(payload=5, bounds=Interval(low=0, high=10))"
    assert int(value) == 5


def test_add_within_interval() -> None:
    result = combine(construct(5, 0, 10), construct(4, 0, 10), Op.ADD)

    assert result == construct(9, 0, 10)


def test_add_reaching_upper_bound() -> None:
    result = combine(construct(5, 0, 10), construct(5, 0, 10), Op.ADD)

    assert result.raw() == 10


def test_add_past_upper_bound() -> None:
    with pytest.raises(RangeOverflow) as excinfo:
        combine(construct(5, 0, 10), construct(6, 0, 10), Op.ADD)

    assert excinfo.value.value == 11
    assert excinfo.value.interval == Interval(low=0, high=10)
    assert excinfo.value.expression == "5 + 6"


def test_different_intervals_are_rejected_before_arithmetic() -> None:
    with pytest.raises(IncompatibleIntervals) as excinfo:
        combine(construct(5, 0, 10), construct(10, 10, 128), Op.ADD)

    assert excinfo.value.left == Interval(low=0, high=10)
    assert excinfo.value.right == Interval(low=10, high=128)


def test_subset_interval_is_still_incompatible() -> None:
    with pytest.raises(IncompatibleIntervals):
        combine(construct(1, 0, 10), construct(1, 0, 11), Op.ADD)


def test_subtract_below_lower_bound() -> None:
    assert combine(construct(5, 0, 10), construct(5, 0, 10), Op.SUBTRACT).raw() == 0

    with pytest.raises(RangeOverflow):
        combine(construct(4, 0, 10), construct(5, 0, 10), Op.SUBTRACT)


def test_multiply_with_negative_bounds() -> None:
    assert combine(construct(-3, -10, 10), construct(3, -10, 10), Op.MULTIPLY).raw() == -9

    with pytest.raises(RangeOverflow):
        combine(construct(-4, -10, 10), construct(3, -10, 10), Op.MULTIPLY)


def test_divide_floors() -> None:
    assert combine(construct(7, -10, 10), construct(2, -10, 10), Op.DIVIDE).raw() == 3
    assert combine(construct(-7, -10, 10), construct(2, -10, 10), Op.DIVIDE).raw() == -4


def test_divide_by_zero() -> None:
    with pytest.raises(ZeroDivisionError):
        combine(construct(7, 0, 10), construct(0, 0, 10), Op.DIVIDE)


def test_combine_rejects_non_values() -> None:
    with pytest.raises(TypeError):
        combine(construct(1, 0, 10), 1, Op.ADD)  # type: ignore[arg-type]


def test_operators_call_combine() -> None:
    a = construct(6, 0, 10)
    b = construct(3, 0, 10)

    assert a + b == construct(9, 0, 10)
    assert a - b == construct(3, 0, 10)
    assert b * construct(2, 0, 10) == construct(6, 0, 10)
    assert a // b == construct(2, 0, 10)


def test_operators_fail_fast() -> None:
    with pytest.raises(RangeOverflow):
        construct(6, 0, 10) + construct(6, 0, 10)
    with pytest.raises(IncompatibleIntervals):
        construct(1, 0, 1) + construct(1, 0, 2)


def test_operators_refuse_plain_ints() -> None:
    with pytest.raises(TypeError):
        construct(1, 0, 10) + 1  # type: ignore[operator]
    with pytest.raises(TypeError):
        1 + construct(1, 0, 10)  # type: ignore[operator]


def test_negation() -> None:
    assert -construct(3, -5, 5) == construct(-3, -5, 5)

    with pytest.raises(RangeOverflow):
        -construct(3, 0, 10)


def test_negation_of_asymmetric_interval() -> None:
    with pytest.raises(RangeOverflow):
        -construct(-128, -128, 127)


def test_operands_are_not_mutated() -> None:
    a = construct(2, 0, 10)
    b = construct(3, 0, 10)

    a + b

    assert a.raw() == 2
    assert b.raw() == 3


def test_with_interval_rechecks() -> None:
    value = construct(5, 0, 10)

    assert value.with_interval(5, 20) == construct(5, 5, 20)
    with pytest.raises(OutOfRange):
        value.with_interval(6, 20)


def test_try_construct_reports_errors() -> None:
    ok = try_construct(5, 0, 10)
    bad = try_construct(50, 0, 10)
    malformed = try_construct(0, 5, 2)

    assert ok == CheckResult(success=True, value=construct(5, 0, 10), error=None)
    assert bad.success is False
    assert bad.value is None
    assert isinstance(bad.error, OutOfRange)
    assert isinstance(malformed.error, InvalidInterval)


def test_try_combine_reports_errors() -> None:
    ok = try_combine(construct(5, 0, 10), construct(5, 0, 10), Op.ADD)
    overflow = try_combine(construct(5, 0, 10), construct(6, 0, 10), Op.ADD)
    mismatch = try_combine(construct(1, 0, 10), construct(1, 0, 11), Op.ADD)

    assert ok.success is True
    assert ok.value == construct(10, 0, 10)
    assert isinstance(overflow.error, RangeOverflow)
    assert isinstance(mismatch.error, IncompatibleIntervals)


def test_errors_share_a_base_class() -> None:
    for cls in (InvalidInterval, OutOfRange, IncompatibleIntervals, RangeOverflow):
        assert issubclass(cls, RangeTypeError)
        assert issubclass(cls, ValueError)


def test_rejections_are_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="rangetype"):
        with pytest.raises(RangeOverflow):
            construct(9, 0, 10) + construct(9, 0, 10)

    assert any("overflows" in record.getMessage() for record in caplog.records)


@st.composite
def _operand_pairs(draw):
    low = draw(st.integers(min_value=-1000, max_value=1000))
    high = draw(st.integers(min_value=low, max_value=low + 2000))
    a = draw(st.integers(min_value=low, max_value=high))
    b = draw(st.integers(min_value=low, max_value=high))
    return construct(a, low, high), construct(b, low, high)


@given(_operand_pairs(), st.sampled_from([Op.ADD, Op.SUBTRACT, Op.MULTIPLY]))
def test_results_always_satisfy_their_interval(pair, operation) -> None:
    a, b = pair
    result = try_combine(a, b, operation)

    if result.success:
        assert result.value is not None
        assert result.value.interval() == a.interval()
        assert a.interval().low <= result.value.raw() <= a.interval().high
    else:
        assert isinstance(result.error, RangeOverflow)
        assert result.error.value not in a.interval()


def test_combine_rejects_unknown_operation() -> None:
    with pytest.raises(TypeError) as excinfo:
        combine(construct(1, 0, 10), construct(1, 0, 10), "add")  # type: ignore[arg-type]

    assert "Op.ADD" in str(excinfo.value)


def test_negation_message_parenthesizes_negative_payload() -> None:
    with pytest.raises(RangeOverflow) as excinfo:
        -construct(-128, -128, 127)

    assert excinfo.value.expression == "-(-128)"
    assert str(excinfo.value).startswith("-(-128) = 128 overflows")
