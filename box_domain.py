"""Fixed-width signed integer domain used by the expression engine.

Python integers never overflow, so every operation that could leave the
chosen width is checked explicitly and raises ``ArithmeticOverflow``.
"""

from __future__ import annotations

from dataclasses import dataclass

from box_errors import ArithmeticOverflow, NegativeShiftAmount


DEFAULT_BITS = 128
WIDTHS = (8, 16, 32, 64, 128)


@dataclass(frozen=True)
class IntDomain:
    bits: int = DEFAULT_BITS

    def __post_init__(self):
        if self.bits not in WIDTHS:
            raise ValueError(f"unsupported width {self.bits}")

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1))

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1

    def contains(self, value: int) -> bool:
        return self.min <= value <= self.max

    def check(self, value: int, op: str = "value") -> int:
        if not self.contains(value):
            raise ArithmeticOverflow(f"{op} overflows i{self.bits}: {value}")
        return value

    def add(self, a: int, b: int) -> int:
        return self.check(a + b, f"{a} + {b}")

    def sub(self, a: int, b: int) -> int:
        return self.check(a - b, f"{a} - {b}")

    def mul(self, a: int, b: int) -> int:
        return self.check(a * b, f"{a} * {b}")

    def neg(self, a: int) -> int:
        return self.check(-a, f"-{a}")

    def complement(self, a: int) -> int:
        # ~a stays in range for every in-range a (two's complement)
        return ~a

    def shift_amount(self, b: int) -> int:
        if b < 0:
            raise NegativeShiftAmount(f"cannot shift by {b}")
        return b

    def shift_left(self, a: int, b: int) -> int:
        amount = self.shift_amount(b)
        if a == 0:
            return 0
        if amount >= self.bits:
            raise ArithmeticOverflow(f"{a} << {b} overflows i{self.bits}")
        return self.check(a << amount, f"{a} << {b}")

    def shift_right(self, a: int, b: int) -> int:
        amount = min(self.shift_amount(b), self.bits)
        return a >> amount


I8 = IntDomain(8)
I16 = IntDomain(16)
I32 = IntDomain(32)
I64 = IntDomain(64)
I128 = IntDomain(128)
