#!filepath: tests/core/test_fixed_point.py
import pytest

from rewardpool.core.fixed_point import SCALE, UINT256_MAX, check_uint, mul_div
from rewardpool.utils.errors import FixedPointOverflow, InvalidAmount


def test_mul_div_floors():
    assert mul_div(10, 10, 3) == 33
    assert mul_div(1, SCALE, 3) == SCALE // 3


def test_mul_div_keeps_full_width_intermediate():
    """
    Contract:
    a * b may exceed 256 bits as long as the quotient fits
    """
    a = 2 ** 255
    b = 2 ** 200
    assert mul_div(a, b, 2 ** 200) == a


def test_mul_div_result_overflow_is_fatal():
    with pytest.raises(FixedPointOverflow):
        mul_div(UINT256_MAX, 2, 1)


def test_mul_div_rejects_out_of_range_operands():
    with pytest.raises(FixedPointOverflow):
        mul_div(-1, 1, 1)
    with pytest.raises(FixedPointOverflow):
        mul_div(UINT256_MAX + 1, 1, 1)


def test_mul_div_by_zero():
    with pytest.raises(ZeroDivisionError):
        mul_div(1, 1, 0)


@pytest.mark.parametrize("bad", [-1, UINT256_MAX + 1, 1.5, "10", True])
def test_check_uint_rejects(bad):
    with pytest.raises(InvalidAmount):
        check_uint(bad)


def test_check_uint_accepts_bounds():
    assert check_uint(0) == 0
    assert check_uint(UINT256_MAX) == UINT256_MAX
