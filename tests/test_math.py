import math

import pytest

from box_domain import I8, I128, IntDomain
from box_errors import (
    ArithmeticOverflow,
    DivisionByZero,
    InvalidModulus,
    NegativeShiftAmount,
    NotInvertible,
)
from box_math import divide, inv_modulo, modulo


def test_domain_bounds():
    assert (I8.min, I8.max) == (-128, 127)
    assert I128.max == 2**127 - 1
    with pytest.raises(ValueError):
        IntDomain(12)


def test_checked_arithmetic():
    assert I8.add(100, 27) == 127
    with pytest.raises(ArithmeticOverflow):
        I8.add(100, 28)
    with pytest.raises(ArithmeticOverflow):
        I8.sub(-100, 29)
    with pytest.raises(ArithmeticOverflow):
        I8.mul(16, 8)
    assert I8.mul(-16, 8) == -128
    with pytest.raises(ArithmeticOverflow):
        I128.mul(2**100, 2**100)


def test_complement_stays_in_range():
    assert I8.complement(0) == -1
    assert I8.complement(127) == -128
    assert I8.complement(-128) == 127


def test_shifts():
    assert I8.shift_left(1, 6) == 64
    with pytest.raises(ArithmeticOverflow):
        I8.shift_left(1, 7)
    with pytest.raises(ArithmeticOverflow):
        I8.shift_left(1, 10**12)
    assert I8.shift_left(0, 10**12) == 0
    assert I8.shift_right(-128, 3) == -16
    assert I8.shift_right(-1, 10**12) == -1
    with pytest.raises(NegativeShiftAmount):
        I8.shift_left(1, -1)
    with pytest.raises(NegativeShiftAmount):
        I8.shift_right(1, -1)


def test_divide_truncates_toward_zero():
    assert divide(7, 2) == 3
    assert divide(-7, 2) == -3
    assert divide(7, -2) == -3
    assert divide(-7, -2) == 3
    with pytest.raises(DivisionByZero):
        divide(1, 0)
    with pytest.raises(ArithmeticOverflow):
        divide(-128, -1, I8)


def test_modulo_takes_sign_of_divisor():
    assert modulo(7, 3) == 1
    assert modulo(-7, 3) == 2
    assert modulo(7, -3) == -2
    assert modulo(-7, -3) == -1
    assert modulo(-6, 3) == 0


@pytest.mark.parametrize("a", [-5, 0, 1, 42])
def test_modulo_by_zero(a):
    with pytest.raises(InvalidModulus):
        modulo(a, 0)


def test_inv_modulo():
    assert inv_modulo(3, 7) == 5
    assert inv_modulo(-3, 7) == 2
    assert inv_modulo(10, 7) == 5
    with pytest.raises(InvalidModulus):
        inv_modulo(3, 0)
    with pytest.raises(NotInvertible):
        inv_modulo(3, 1)
    with pytest.raises(NotInvertible):
        inv_modulo(3, -7)


def test_inv_modulo_fails_without_coprime():
    for b in range(2, 30):
        for a in range(-30, 30):
            if math.gcd(a % b, b) != 1:
                with pytest.raises(NotInvertible):
                    inv_modulo(a, b)
            else:
                assert (inv_modulo(a, b) * a) % b == 1
