# -----------------------------------------------------------------------------
#  sequences.py
#  Integer sequences with closed-form partial sums
# -----------------------------------------------------------------------------
"""
Forward-only iterators over classic integer sequences.

Every sequence supports ``sum_next_n(n)``: consume the next n terms and
return their sum. Arithmetic and square sequences do this in O(1) by
subtracting two closed-form prefix sums; Fibonacci uses ΣF = F(k+2) − 1;
Collatz has no closed form and adds term by term. ``nth(n)`` skips n terms
and returns the one after them, like ``next(islice(seq, n, None))``.

    >>> s = NatNumSeq()
    >>> s.sum_next_n(5), next(s)
    (15, 6)
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import islice
from math import sqrt

import gmpy2

from numkit.inttypes import IntType, check
from numkit.log import get_logger
from numkit.runtime import CFG
from numkit.utility import PreconditionError, as_int

logger = get_logger(__name__)

_SQRT5 = sqrt(5)
_PHI = (1 + _SQRT5) / 2
_PSI = (1 - _SQRT5) / 2
_LOG2_PHI = 0.6943  # log2(φ), rounded up


def _count(n: int) -> int:
    n = as_int(n, "n")
    if n < 0:
        raise PreconditionError("Term count must be non-negative.")
    return n


class Sequence(Iterator[int]):
    """Base sequence: term-by-term sum_next_n and nth."""

    __slots__ = ("_itype",)

    def __init__(self, itype: IntType | None = None):
        self._itype = itype

    def _check(self, value: int, label: str = "term") -> int:
        return check(self._itype, value, label)

    def sum_next_n(self, n: int) -> int:
        """Sum of the next n terms; stops early if the sequence ends."""
        total = 0
        for term in islice(self, _count(n)):
            total += term
        return self._check(total, "sum")

    def nth(self, n: int) -> int | None:
        return next(islice(self, _count(n), None), None)


class _ClosedFormSeq(Sequence):
    """
    Infinite sequence given by term(i) and prefix(i) = term(0) + ... +
    term(i − 1), where i counts terms already produced.
    """

    __slots__ = ("_i",)

    def __init__(self, itype: IntType | None = None):
        super().__init__(itype)
        self._i = 0

    @staticmethod
    def _term(i: int) -> int:
        raise NotImplementedError

    @staticmethod
    def _prefix(i: int) -> int:
        raise NotImplementedError

    def __next__(self) -> int:
        value = self._check(self._term(self._i))
        self._i += 1
        return value

    def nth(self, n: int) -> int:
        target = self._i + _count(n)
        value = self._check(self._term(target))
        self._i = target + 1
        return value

    def sum_next_n(self, n: int) -> int:
        n = _count(n)
        total = self._check(self._prefix(self._i + n) - self._prefix(self._i), "sum")
        self._i += n
        return total

    def __repr__(self) -> str:
        return f"{type(self).__name__}(next={self._term(self._i)})"


class NatNumSeq(_ClosedFormSeq):
    """1, 2, 3, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return i + 1

    @staticmethod
    def _prefix(i: int) -> int:
        return i * (i + 1) // 2


class NatNumW0Seq(_ClosedFormSeq):
    """0, 1, 2, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return i

    @staticmethod
    def _prefix(i: int) -> int:
        return i * (i - 1) // 2


class OddNatNumSeq(_ClosedFormSeq):
    """1, 3, 5, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return 2 * i + 1

    @staticmethod
    def _prefix(i: int) -> int:
        return i * i


class EvenNatNumSeq(_ClosedFormSeq):
    """2, 4, 6, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return 2 * i + 2

    @staticmethod
    def _prefix(i: int) -> int:
        return i * (i + 1)


class EvenNatNumW0Seq(_ClosedFormSeq):
    """0, 2, 4, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return 2 * i

    @staticmethod
    def _prefix(i: int) -> int:
        return i * (i - 1)


class NatNumSqSeq(_ClosedFormSeq):
    """1, 4, 9, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return (i + 1) ** 2

    @staticmethod
    def _prefix(i: int) -> int:
        return i * (i + 1) * (2 * i + 1) // 6


class NatNumW0SqSeq(_ClosedFormSeq):
    """0, 1, 4, 9, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return i * i

    @staticmethod
    def _prefix(i: int) -> int:
        return (i - 1) * i * (2 * i - 1) // 6


class OddNatNumSqSeq(_ClosedFormSeq):
    """1, 9, 25, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return (2 * i + 1) ** 2

    @staticmethod
    def _prefix(i: int) -> int:
        return i * (2 * i - 1) * (2 * i + 1) // 3


class EvenNatNumSqSeq(_ClosedFormSeq):
    """4, 16, 36, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return (2 * i + 2) ** 2

    @staticmethod
    def _prefix(i: int) -> int:
        return 2 * i * (i + 1) * (2 * i + 1) // 3


class EvenNatNumW0SqSeq(_ClosedFormSeq):
    """0, 4, 16, 36, ..."""

    @staticmethod
    def _term(i: int) -> int:
        return (2 * i) ** 2

    @staticmethod
    def _prefix(i: int) -> int:
        return 2 * (i - 1) * i * (2 * i - 1) // 3


# --- Fibonacci ---


def fibonacci(k: int) -> int:
    """
    F(k) by Binet's formula, F(0) = 0, F(1) = 1.

    Double precision is exact up to FIBONACCI.FLOAT_BINET_MAX (70 by
    default); beyond it gmpy2 mpfr is used with enough bits for F(k).
    """
    k = as_int(k, "k")
    if k < 0:
        raise PreconditionError("Fibonacci index must be non-negative.")
    if k <= int(CFG("FIBONACCI.FLOAT_BINET_MAX", 70)):
        return round((_PHI**k - _PSI**k) / _SQRT5)

    bits = int(k * _LOG2_PHI) + 64
    logger.debug("F(%d) via mpfr Binet at %d bits", k, bits)
    with gmpy2.context(precision=bits):
        sqrt5 = gmpy2.sqrt(5)
        phi = (1 + sqrt5) / 2
        # |ψ^k| / √5 < 0.5 for k >= 1, so rounding φ^k / √5 is enough
        return int(gmpy2.rint(phi**k / sqrt5))


class FibonacciSeq(Sequence):
    """0, 1, 1, 2, 3, 5, ..."""

    __slots__ = ("_curr", "_index", "_next")

    def __init__(self, itype: IntType | None = None):
        super().__init__(itype)
        self._curr = 0
        self._next = 1
        self._index = 0

    def __next__(self) -> int:
        value = self._check(self._curr)
        self._curr, self._next = self._next, self._curr + self._next
        self._index += 1
        return value

    def _jump(self, index: int) -> None:
        self._index = index
        self._curr = fibonacci(index)
        self._next = fibonacci(index + 1)

    def nth(self, n: int) -> int:
        index = self._index + _count(n)
        curr, nxt = fibonacci(index), fibonacci(index + 1)
        value = self._check(curr)
        self._index, self._curr, self._next = index + 1, nxt, curr + nxt
        return value

    def sum_next_n(self, n: int) -> int:
        n = _count(n)
        if n == 0:
            return 0
        k = self._index
        # Σ_{i<k} F(i) = F(k+1) − 1
        total = self._check(fibonacci(k + n + 1) - fibonacci(k + 1), "sum")
        self._jump(k + n)
        return total


# --- Collatz ---


class CollatzSeq(Sequence):
    """start, then n/2 or 3n + 1, ending after 1."""

    __slots__ = ("_current",)

    def __init__(self, start: int, itype: IntType | None = None):
        super().__init__(itype)
        start = as_int(start, "start")
        if start < 1:
            raise PreconditionError("Collatz sequence requires a positive starting point.")
        self._current = self._check(start, "start")

    def __next__(self) -> int:
        value = self._current
        if value == 0:
            raise StopIteration
        self._check(value)
        if value % 2 == 0:
            self._current = value // 2
        elif value == 1:
            self._current = 0
        else:
            self._current = 3 * value + 1
        return value
