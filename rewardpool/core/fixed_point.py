#!filepath: rewardpool/core/fixed_point.py
"""
Integer fixed-point helpers.

All magnitudes in the pool are unsigned 256-bit integers. Python ints are
unbounded, so the product inside ``mul_div`` is never truncated; the 256-bit
range is enforced on operands and result instead.
"""
from __future__ import annotations

from rewardpool.utils.errors import FixedPointOverflow, InvalidAmount

# reward-per-unit scale of the accumulator
SCALE = 10 ** 27

UINT256_MAX = 2 ** 256 - 1


def check_uint(value: int, name: str = "value") -> int:
    """
    Validate an external unsigned amount. bool is rejected even though it is an int.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmount(f"{name} must be int, got {type(value).__name__}")
    if value < 0 or value > UINT256_MAX:
        raise InvalidAmount(f"{name} out of uint256 range: {value}")
    return value


def mul_div(a: int, b: int, c: int) -> int:
    """
    floor(a * b / c) with a full-width intermediate.

    Raises
    ------
    ZeroDivisionError
        c == 0
    FixedPointOverflow
        any operand or the result falls outside [0, 2**256)
    """
    for operand in (a, b, c):
        if operand < 0 or operand > UINT256_MAX:
            raise FixedPointOverflow(f"operand out of uint256 range: {operand}")
    if c == 0:
        raise ZeroDivisionError("mul_div by zero")

    result = (a * b) // c
    if result > UINT256_MAX:
        raise FixedPointOverflow(f"mul_div result overflows uint256: {a} * {b} / {c}")
    return result
