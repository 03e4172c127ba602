# -----------------------------------------------------------------------------
#  contfrac.py
#  Simple continued fractions, convergents and Pell's equation
# -----------------------------------------------------------------------------
"""
Simple continued fractions ``[a0; a1, a2, ...]`` with an optional periodic
tail, written ``[a0; a1, (a2, a3)]`` when ``(a2, a3)`` repeats forever.

Convergents are exact ``gmpy2.mpq`` values produced by the two-term
recurrence, so they never overflow however fast the surd grows.

    >>> cf = SimpleContinuedFraction.from_sqrt(2)
    >>> cf.non_periodic, cf.periodic
    ((1,), (2,))
    >>> [str(c) for c in islice(cf.convergents(), 4)]
    ['1', '3/2', '7/5', '17/12']
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from itertools import chain, cycle, islice
from math import isqrt

import gmpy2

from numkit.log import get_logger
from numkit.utility import PreconditionError, as_int, dec_digits

logger = get_logger(__name__)


class SimpleContinuedFraction:
    """Immutable ``[non_periodic; (periodic)]`` coefficient expansion."""

    __slots__ = ("_non_periodic", "_periodic")

    def __init__(self, non_periodic: Iterable[int], periodic: Iterable[int] | None = None):
        head = tuple(as_int(a, "coefficient") for a in non_periodic)
        tail = None if periodic is None else tuple(as_int(a, "coefficient") for a in periodic)
        if tail is not None and not tail:
            raise PreconditionError("Periodic part must not be empty.")
        if not head and tail is None:
            raise PreconditionError("Continued fraction needs at least one coefficient.")
        # only a0 may be zero or negative; periodic terms recur past a0
        if any(a < 1 for a in chain(head[1:], tail or ())):
            raise PreconditionError("Coefficients after the first must be positive.")
        self._non_periodic = head
        self._periodic = tail

    @classmethod
    def from_sqrt(cls, n: int) -> SimpleContinuedFraction:
        """
        Expansion of √n. A perfect square gives the one-term fraction [√n];
        otherwise the (m, d) states of (√n + m) / d are tracked and the first
        repeated state closes the period.
        """
        n = as_int(n, "n")
        if n < 0:
            raise PreconditionError("Cannot expand the square root of a negative number.")
        a0 = isqrt(n)
        if a0 * a0 == n:
            return cls((a0,))

        seen: dict[tuple[int, int], int] = {}
        coeffs: list[int] = []
        m, d, a = 0, 1, a0
        while True:
            m = d * a - m
            d = (n - m * m) // d
            a = (a0 + m) // d
            if (m, d) in seen:
                break
            seen[(m, d)] = len(coeffs)
            coeffs.append(a)

        start = seen[(m, d)]
        logger.debug("√%d: period %d after %d leading terms", n, len(coeffs) - start, start + 1)
        return cls((a0, *coeffs[:start]), coeffs[start:])

    # --- structure ---

    @property
    def non_periodic(self) -> tuple[int, ...]:
        return self._non_periodic

    @property
    def periodic(self) -> tuple[int, ...] | None:
        return self._periodic

    @property
    def is_periodic(self) -> bool:
        return self._periodic is not None

    @property
    def period_length(self) -> int:
        return 0 if self._periodic is None else len(self._periodic)

    def coefficients(self) -> Iterator[int]:
        """a0, a1, ...; infinite when periodic."""
        if self._periodic is None:
            return iter(self._non_periodic)
        return chain(self._non_periodic, cycle(self._periodic))

    # --- convergents ---

    def _pq(self) -> Iterator[tuple[gmpy2.mpz, gmpy2.mpz]]:
        p_prev, p = gmpy2.mpz(0), gmpy2.mpz(1)
        q_prev, q = gmpy2.mpz(1), gmpy2.mpz(0)
        for a in self.coefficients():
            p_prev, p = p, a * p + p_prev
            q_prev, q = q, a * q + q_prev
            yield p, q

    def convergents(self) -> Iterator[gmpy2.mpq]:
        """p_k / q_k in order; ends with the fraction itself when finite."""
        for p, q in self._pq():
            yield gmpy2.mpq(p, q)

    def convergent_n(self, k: int) -> gmpy2.mpq | None:
        """The k-th convergent (0-based), or None past the end of a finite fraction."""
        k = as_int(k, "k")
        if k < 0:
            raise PreconditionError("Convergent index must be non-negative.")
        return next(islice(self.convergents(), k, None), None)

    def value(self) -> gmpy2.mpq:
        """Exact value of a finite fraction."""
        if self.is_periodic:
            raise PreconditionError("A periodic continued fraction has an irrational value.")
        *_, last = self.convergents()
        return last

    # --- decimal precision ---

    def approximation(self, m: int) -> gmpy2.mpq:
        """
        First convergent p_k/q_k with q_k·q_{k+1} >= 10^m, hence within 10^-m
        of the value. A finite fraction that runs out first gives its exact
        value.
        """
        m = as_int(m, "m")
        if m < 0:
            raise PreconditionError("Precision must be non-negative.")
        bound = 10**m
        prev = None
        for p, q in self._pq():
            if prev is not None and prev[1] * q >= bound:
                return gmpy2.mpq(*prev)
            prev = (p, q)
        return gmpy2.mpq(*prev)

    def decimal_digits(self, m: int) -> str:
        """
        First m decimal digits of the value, integer part included, so
        √2 gives '14142...'. A value below 1 contributes its leading '0'.
        Digits are truncated, not rounded.

        The value lies between any two consecutive convergents, so once two
        neighbours truncate to the same digits those digits are exact.
        """
        m = as_int(m, "m")
        if m < 0:
            raise PreconditionError("Digit count must be non-negative.")
        if m == 0:
            return ""
        a0 = next(self.coefficients())
        if a0 < 0:
            raise PreconditionError("Decimal digits need a non-negative value.")

        int_len = dec_digits(a0)
        frac_len = max(m - int_len, 0)
        scale = 10**frac_len
        scaled = None
        for p, q in self._pq():
            truncated = p * scale // q
            if truncated == scaled:
                break
            scaled = truncated
        # a finite fraction that runs out leaves the exact value's digits
        return str(scaled).zfill(int_len + frac_len)[:m]

    # --- dunder ---

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SimpleContinuedFraction):
            return NotImplemented
        return (self._non_periodic, self._periodic) == (other._non_periodic, other._periodic)

    def __hash__(self) -> int:
        return hash((self._non_periodic, self._periodic))

    def __repr__(self) -> str:
        return f"SimpleContinuedFraction({list(self._non_periodic)!r}, {self._periodic and list(self._periodic)!r})"

    def __str__(self) -> str:
        from numkit.fmt import format_continued_fraction

        return format_continued_fraction(self._non_periodic, self._periodic)


# --- Pell's equation ---


def _pell_fraction(d: int) -> SimpleContinuedFraction:
    d = as_int(d, "d")
    if d <= 0:
        raise PreconditionError("Pell's equation needs a positive D.")
    cf = SimpleContinuedFraction.from_sqrt(d)
    if not cf.is_periodic:
        raise PreconditionError(f"{d} is a perfect square; Pell's equation has no non-trivial solution.")
    return cf


def solve_pell(d: int, negative: bool = False) -> tuple[int, int] | None:
    """
    Minimal positive (x, y) with x² − d·y² = 1, or = −1 when negative=True.

    The answer is the first convergent of √d that satisfies the equation.
    The −1 form is solvable exactly when the period of √d is odd; for an
    even period None is returned without searching.
    """
    d = as_int(d, "d")
    cf = _pell_fraction(d)
    target = -1 if negative else 1
    if negative and cf.period_length % 2 == 0:
        logger.debug("x² − %dy² = −1 has no solution (period %d)", d, cf.period_length)
        return None

    k, (p, q) = next(
        (k, (p, q)) for k, (p, q) in enumerate(cf._pq()) if p * p - d * q * q == target
    )
    logger.debug("Pell d=%d solved at convergent %d", d, k)
    return int(p), int(q)


def pell_solutions(d: int) -> Iterator[tuple[int, int]]:
    """
    Every positive solution of x² − d·y² = 1 in increasing order, from
    (x1 + y1√d)^k for the fundamental solution (x1, y1).
    """
    d = as_int(d, "d")
    x1, y1 = solve_pell(d)
    x, y = x1, y1
    while True:
        yield x, y
        x, y = x1 * x + d * y1 * y, x1 * y + y1 * x


def sqrt_digits(n: int, m: int) -> str:
    """First m decimal digits of √n, integer part included."""
    return SimpleContinuedFraction.from_sqrt(n).decimal_digits(m)
