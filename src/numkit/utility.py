# -----------------------------------------------------------------------------
#  Utility functions
# -----------------------------------------------------------------------------

from __future__ import annotations

import operator
from math import isqrt, log
from typing import Any

_LN2 = log(2)


class PreconditionError(ValueError):
    """Raised when a caller violates a documented precondition (programmer error)."""


class IntTypeOverflowError(PreconditionError, OverflowError):
    """A value does not fit in the integer type the caller asked for."""


class SieveTooLargeError(PreconditionError, MemoryError):
    """The requested sieve index space exceeds what the host can address."""


class UserInputError(Exception):
    pass


def as_int(x: Any, label: str = "value") -> int:
    """
    Coerce integer-like values (int, bool excluded, gmpy2.mpz, numpy ints)
    to a plain int, raising PreconditionError for anything else.
    """
    if isinstance(x, bool):
        raise PreconditionError(f"{label} must be an integer, not bool.")
    try:
        return operator.index(x)
    except TypeError:
        raise PreconditionError(f"{label} must be an integer, got {type(x).__name__}.") from None


def ilog(n: int, base: int) -> int:
    """
    Exact floor(log_base(n)) for n >= 1 and base >= 2, without str() and
    without floating point drift.
    """
    if base < 2:  # noqa: PLR2004
        raise PreconditionError("Logarithm base must be at least 2.")
    if n < 1:
        raise PreconditionError("Logarithm argument must be positive.")
    if base & (base - 1) == 0:
        # power of two: bit_length is exact
        return (n.bit_length() - 1) // (base.bit_length() - 1)

    # estimate via bit length, then walk into the right power window
    est = int((n.bit_length() - 1) * _LN2 / log(base))
    p = base ** est
    while p > n:
        est -= 1
        p //= base
    p *= base
    while p <= n:
        est += 1
        p *= base
    return est


def dec_digits(n: int) -> int:
    """Exact decimal digit count without str(); handles n >= 0."""
    n = abs(n)
    if n == 0:
        return 1
    return ilog(n, 10) + 1


def is_square(x: int) -> bool:
    if x < 0:
        return False
    r = isqrt(x)
    return r * r == x
