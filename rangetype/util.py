"""Utility constants and helpers for rangetype.

Integer widths used by the predefined machine-width range types.
"""

# Integer widths (bits)
BYTE = 8
WORD = 16
DWORD = 32
QWORD = 64

WIDTHS = (BYTE, WORD, DWORD, QWORD)


def int_bounds(signed: bool, bits: int) -> tuple[int, int]:
    """Calculate the inclusive bounds of a machine integer.

    ex. int_bounds(True, 8) -> (-128, 127)
        int_bounds(False, 8) -> (0, 255)
    """
    if signed:
        return -(2 ** (bits - 1)), (2 ** (bits - 1)) - 1
    return 0, (2**bits) - 1


def is_integer(value: object) -> bool:
    """True for real integers; bools are rejected even though they subclass int."""
    return isinstance(value, int) and not isinstance(value, bool)
