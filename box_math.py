from __future__ import annotations

from typing import Optional

from box_domain import I128, IntDomain
from box_errors import DivisionByZero, InvalidModulus, NotInvertible


def divide(a: int, b: int, domain: Optional[IntDomain] = None) -> int:
    """Integer division truncating toward zero, like native machine division."""
    if domain is None:
        domain = I128
    if b == 0:
        raise DivisionByZero("cannot use 0 as a divisor")
    q = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        q = -q
    return domain.check(q, f"{a} / {b}")


def modulo(a: int, b: int) -> int:
    """Remainder carrying the sign of the divisor."""
    if b == 0:
        raise InvalidModulus("cannot use 0 as a modulus")
    return a % b


def inv_modulo(a: int, b: int) -> int:
    """Smallest n in 1..b-1 with n * a == 1 (mod b)."""
    x = modulo(a, b)
    # no candidate n exists below a modulus of 1 or less
    if b <= 1:
        raise NotInvertible(f"{a} is not invertible modulo {b}")
    try:
        return pow(x, -1, b)
    except ValueError:
        raise NotInvertible(f"{a} is not invertible modulo {b}") from None
