# -----------------------------------------------------------------------------
#  inttypes.py
#  Fixed-width integer type descriptors
# -----------------------------------------------------------------------------
"""
Python ints never overflow, but callers porting fixed-width code (or sizing
tables for a C extension) want the same fail-fast behaviour a u64 would give.
Every core function that produces integers accepts an optional ``itype``;
``None`` means an unbounded Python int.
"""

from __future__ import annotations

from dataclasses import dataclass

from numkit.utility import IntTypeOverflowError


@dataclass(frozen=True, slots=True)
class IntType:
    bits: int
    signed: bool

    @property
    def name(self) -> str:
        return f"{'i' if self.signed else 'u'}{self.bits}"

    @property
    def min(self) -> int:
        return -(1 << (self.bits - 1)) if self.signed else 0

    @property
    def max(self) -> int:
        return (1 << (self.bits - 1)) - 1 if self.signed else (1 << self.bits) - 1

    def fits(self, value: int) -> bool:
        return self.min <= value <= self.max

    def check(self, value: int, label: str = "value") -> int:
        """Return value unchanged, or raise IntTypeOverflowError if it does not fit."""
        if not self.fits(value):
            raise IntTypeOverflowError(
                f"{label} {value} does not fit in {self.name} "
                f"[{self.min}, {self.max}]."
            )
        return value

    def __str__(self) -> str:
        return self.name


U8 = IntType(8, False)
U16 = IntType(16, False)
U32 = IntType(32, False)
U64 = IntType(64, False)
U128 = IntType(128, False)
I8 = IntType(8, True)
I16 = IntType(16, True)
I32 = IntType(32, True)
I64 = IntType(64, True)
I128 = IntType(128, True)
USIZE = U64
ISIZE = I64

ALL_TYPES: tuple[IntType, ...] = (U8, U16, U32, U64, U128, I8, I16, I32, I64, I128)


def check(itype: IntType | None, value: int, label: str = "value") -> int:
    """Range-check value against itype; a None itype accepts everything."""
    if itype is not None:
        itype.check(value, label)
    return value
