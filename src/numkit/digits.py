# -----------------------------------------------------------------------------
#  digits.py
#  Radix digit iteration and digit-based predicates
# -----------------------------------------------------------------------------
"""
Digits of a non-negative integer in an arbitrary radix.

``DigitsIter`` is double ended: ``next()`` yields the most significant digit
first, ``next_back()`` (or ``reversed(it)``, which shares the same state) the
least significant first. Both ends can be consumed in any interleaving and
meet in the middle; ``len(it)`` is always the exact number of digits left.

    >>> list(digits(1203))
    [1, 2, 0, 3]
    >>> it = digits(1203); it.next_back(), next(it), len(it)
    (3, 1, 2)
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from functools import cache

from numkit.arith import factorial_0_to_n
from numkit.inttypes import IntType, check
from numkit.utility import PreconditionError, as_int, ilog

HEX_DIGITS_LOWER = "0123456789abcdef"
HEX_DIGITS_UPPER = "0123456789ABCDEF"

_MISSING = object()


def _check_radix(radix: int, itype: IntType | None) -> int:
    radix = as_int(radix, "radix")
    if radix < 2:  # noqa: PLR2004
        raise PreconditionError("Radix must be at least 2.")
    check(itype, radix, "radix")
    return radix


class DigitsIter:
    """Exact-size, double-ended iterator over the digits of n in base radix."""

    __slots__ = ("_front_weight", "_len", "_num", "_radix")

    def __init__(self, n: int, radix: int = 10, itype: IntType | None = None):
        radix = _check_radix(radix, itype)
        n = as_int(n, "n")
        if n < 0:
            raise PreconditionError("Integer must be non-negative.")
        check(itype, n, "n")

        length = 1 if n == 0 else ilog(n, radix) + 1
        self._num = n
        self._radix = radix
        self._len = length
        # weight of the most significant remaining digit
        self._front_weight = radix ** (length - 1)

    @property
    def radix(self) -> int:
        return self._radix

    def __iter__(self) -> DigitsIter:
        return self

    def __next__(self) -> int:
        if self._len == 0:
            raise StopIteration
        digit, self._num = divmod(self._num, self._front_weight)
        self._front_weight //= self._radix
        self._len -= 1
        return digit

    def next_back(self, default=_MISSING):
        """
        Pop the least significant remaining digit. Like next(), raise
        StopIteration when exhausted unless a default is given.
        """
        if self._len == 0:
            if default is _MISSING:
                raise StopIteration
            return default
        self._num, digit = divmod(self._num, self._radix)
        self._front_weight //= self._radix
        self._len -= 1
        return digit

    def __reversed__(self) -> Iterator[int]:
        while self._len:
            yield self.next_back()

    def __len__(self) -> int:
        return self._len

    def __length_hint__(self) -> int:
        return self._len

    def __repr__(self) -> str:
        return f"DigitsIter(remaining={self._num}, radix={self._radix}, len={self._len})"


def digits(n: int, radix: int = 10, itype: IntType | None = None) -> DigitsIter:
    return DigitsIter(n, radix, itype)


def from_digits(
    digit_seq: Iterable[int],
    radix: int = 10,
    itype: IntType | None = None,
    *,
    lsd_first: bool = False,
) -> int:
    """
    Compose digits back into an integer (Horner's method).

    Digits are read most significant first, the order DigitsIter yields them;
    pass lsd_first=True for least-significant-first input.
    """
    radix = _check_radix(radix, itype)

    result = 0
    if lsd_first:
        weight = 1
        for d in digit_seq:
            result += _check_digit(d, radix) * weight
            weight *= radix
    else:
        for d in digit_seq:
            result = result * radix + _check_digit(d, radix)
    return check(itype, result, "composed value")


def _check_digit(d: int, radix: int) -> int:
    d = as_int(d, "digit")
    if d < 0:
        raise PreconditionError("Digits must be non-negative.")
    if d >= radix:
        raise PreconditionError(f"Digit {d} is not less than the radix {radix}.")
    return d


def is_palindrome(n: int, radix: int = 10) -> bool:
    it = DigitsIter(n, radix)
    while len(it) > 1:
        if next(it) != it.next_back():
            return False
    return True


class DigitHistogram:
    """
    Reusable digit-count buffer for is_permutation(); sized to one radix.
    Hold one per caller and pass it in to avoid reallocating on hot loops.
    """

    __slots__ = ("counts", "radix")

    def __init__(self, radix: int = 10):
        self.radix = _check_radix(radix, None)
        self.counts = [0] * self.radix

    def clear(self) -> None:
        counts = self.counts
        for i in range(len(counts)):
            counts[i] = 0


def is_permutation(n: int, m: int, radix: int = 10, scratch: DigitHistogram | None = None) -> bool:
    """
    True if n and m have the same multiset of digits in base radix.
    Both operands share one radix; a scratch histogram of another radix is
    rejected.
    """
    hist = scratch if scratch is not None else DigitHistogram(radix)
    if hist.radix != radix:
        raise PreconditionError(
            f"Scratch histogram is sized for radix {hist.radix}, not {radix}."
        )
    a = DigitsIter(n, radix)
    b = DigitsIter(m, radix)
    if len(a) != len(b):
        return False

    hist.clear()
    counts = hist.counts
    for d in a:
        counts[d] += 1
    for d in b:
        counts[d] -= 1
    return not any(counts)


def reverse(n: int, radix: int = 10) -> int:
    """Digit reversal; trailing zeros vanish (120 -> 21)."""
    return from_digits(reversed(DigitsIter(n, radix)), radix)


def digit_sum(n: int, radix: int = 10) -> int:
    return sum(DigitsIter(n, radix))


@cache
def digit_factorials(radix: int = 10) -> tuple[int, ...]:
    """d! for every digit d of the radix, built once per radix."""
    radix = _check_radix(radix, None)
    return tuple(factorial_0_to_n(radix - 1))
