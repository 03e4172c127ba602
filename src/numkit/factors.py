# -----------------------------------------------------------------------------
#  factors.py
#  Prime factorization, divisors and multiplicative functions
# -----------------------------------------------------------------------------

from __future__ import annotations

from itertools import groupby
from math import isqrt, prod

import gmpy2

from numkit.context import FactorCtx
from numkit.inttypes import IntType, check
from numkit.log import get_logger
from numkit.primes import sieve_of_eratosthenes
from numkit.utility import PreconditionError, as_int

logger = get_logger(__name__)


def _non_negative(n: int, itype: IntType | None, what: str) -> int:
    n = as_int(n, "n")
    if n < 0:
        raise PreconditionError(f"Cannot find {what} of negative numbers.")
    return check(itype, n, "n")


# --- Streaming factorization ---


class PrimeFactors:
    """
    Prime factors of n in ascending order, with repeats, produced lazily.

    A prime table up to ⌊√n⌋ is sieved once; when it runs out (or the next
    prime squared exceeds what is left) the remaining cofactor is prime.
    Yields nothing for 0 and 1.
    """

    __slots__ = ("_factor", "_n", "_table")

    def __init__(self, n: int, itype: IntType | None = None):
        n = _non_negative(n, itype, "prime factors")
        self._table = iter(sieve_of_eratosthenes(isqrt(n)))
        self._factor = next(self._table, 2)
        self._n = n

    def __iter__(self) -> PrimeFactors:
        return self

    def __next__(self) -> int:
        while self._n >= self._factor:
            if self._n % self._factor == 0:
                self._n //= self._factor
                return self._factor
            nxt = next(self._table, None)
            if nxt is not None and nxt * nxt <= self._n:
                self._factor = nxt
            elif self._n != 1:
                # nothing up to √(cofactor) divides it: the cofactor is prime
                self._factor = self._n
            else:
                break
        raise StopIteration


class DistinctPrimeFactors:
    """(prime, multiplicity) pairs, primes ascending."""

    __slots__ = ("_groups",)

    def __init__(self, n: int, itype: IntType | None = None):
        self._groups = groupby(PrimeFactors(n, itype))

    def __iter__(self) -> DistinctPrimeFactors:
        return self

    def __next__(self) -> tuple[int, int]:
        p, run = next(self._groups)
        return p, sum(1 for _ in run)


def prime_factors(n: int, itype: IntType | None = None) -> PrimeFactors:
    return PrimeFactors(n, itype)


def distinct_prime_factors(n: int, itype: IntType | None = None) -> DistinctPrimeFactors:
    return DistinctPrimeFactors(n, itype)


# --- Multiplicative functions ---


def _tau_from_fac(fac: list[tuple[int, int]]) -> int:
    return prod(e + 1 for _, e in fac)


def _sigma_from_fac(fac: list[tuple[int, int]]) -> int:
    """σ(n) = ∏ (p^(a+1) − 1)/(p − 1) using gmpy2 bigints."""
    acc = gmpy2.mpz(1)
    for p, a in fac:
        pz = gmpy2.mpz(p)
        acc *= (pz ** (a + 1) - 1) // (pz - 1)
    return int(acc)


def _phi_from_fac(n: int, fac: list[tuple[int, int]]) -> int:
    acc = n
    for p, _ in fac:
        acc -= acc // p
    return acc


def divisor_count(n: int, itype: IntType | None = None) -> int:
    """τ(n); τ(0) = 0."""
    n = _non_negative(n, itype, "divisors")
    if n == 0:
        return 0
    return _tau_from_fac(list(DistinctPrimeFactors(n)))


def divisor_sum(n: int, itype: IntType | None = None) -> int:
    """σ(n); σ(0) = 0."""
    n = _non_negative(n, itype, "divisors")
    if n == 0:
        return 0
    return check(itype, _sigma_from_fac(list(DistinctPrimeFactors(n))), "σ(n)")


def totient(n: int, itype: IntType | None = None) -> int:
    """Euler's φ(n) in exact integer arithmetic; φ(0) = 0, φ(1) = 1."""
    n = _non_negative(n, itype, "the totient")
    return _phi_from_fac(n, list(DistinctPrimeFactors(n)))


def build_ctx(n: int) -> FactorCtx:
    """Factor n once and precompute the usual multiplicative values."""
    n = _non_negative(n, None, "prime factors")
    fac = tuple(DistinctPrimeFactors(n))
    if n == 0:
        return FactorCtx(n=0, fac=(), tau=None, sigma=None, phi=None)
    logger.debug("factored %d into %d distinct primes", n, len(fac))
    return FactorCtx(
        n=n,
        fac=fac,
        tau=_tau_from_fac(list(fac)),
        sigma=_sigma_from_fac(list(fac)),
        phi=_phi_from_fac(n, list(fac)),
    )


# --- Divisor enumeration ---


class Divisors:
    """
    Every positive divisor of n, generated from the factorization by an
    odometer over exponents (so not in sorted order; n itself comes last).

    len() is exact and .sum() returns the sum of the divisors not yet
    produced in O(1). n = 0 has no divisors.
    """

    __slots__ = ("_count", "_exps", "_fac", "_itype", "_produced", "_produced_sum", "_total", "_value")

    def __init__(self, n: int, itype: IntType | None = None):
        n = _non_negative(n, itype, "divisors")
        self._fac = list(DistinctPrimeFactors(n))
        self._itype = itype
        self._exps = [0] * len(self._fac)
        self._value = 1
        self._count = _tau_from_fac(self._fac) if n else 0
        self._total = _sigma_from_fac(self._fac) if n else 0
        self._produced = 0
        self._produced_sum = 0

    def __iter__(self) -> Divisors:
        return self

    def __next__(self) -> int:
        if self._produced == self._count:
            raise StopIteration
        value = self._value
        self._produced += 1
        self._produced_sum += value

        for i in range(len(self._fac) - 1, -1, -1):
            p, e = self._fac[i]
            if self._exps[i] < e:
                self._exps[i] += 1
                self._value *= p
                break
            self._value //= p ** self._exps[i]
            self._exps[i] = 0
        return value

    def __len__(self) -> int:
        return self._count - self._produced

    def _remaining(self) -> int:
        return self._total - self._produced_sum

    def sum(self) -> int:
        return check(self._itype, self._remaining(), "divisor sum")


class ProperDivisors:
    """Divisors of n except n itself (1 has none, neither has 0)."""

    __slots__ = ("_divisors", "_itype", "_n")

    def __init__(self, n: int, itype: IntType | None = None):
        self._divisors = Divisors(n, itype)
        self._n = as_int(n, "n")
        self._itype = itype

    def __iter__(self) -> ProperDivisors:
        return self

    def __next__(self) -> int:
        # n is always the last divisor produced
        if len(self._divisors) <= 1:
            raise StopIteration
        return next(self._divisors)

    def __len__(self) -> int:
        return max(len(self._divisors) - 1, 0)

    def sum(self) -> int:
        if len(self._divisors) == 0:
            return 0
        return check(self._itype, self._divisors._remaining() - self._n, "proper divisor sum")


def divisors(n: int, itype: IntType | None = None) -> Divisors:
    return Divisors(n, itype)


def proper_divisors(n: int, itype: IntType | None = None) -> ProperDivisors:
    return ProperDivisors(n, itype)


# --- Whole-range tables (harmonic double loop, O(n log n)) ---


def divisor_count_0_to_n(n: int, itype: IntType | None = None) -> list[int]:
    n = _non_negative(n, itype, "divisors")
    counts = [1] * (n + 1)
    counts[0] = 0
    for i in range(2, n + 1):
        for j in range(i, n + 1, i):
            counts[j] += 1
    return counts


def proper_divisor_count_0_to_n(n: int, itype: IntType | None = None) -> list[int]:
    n = _non_negative(n, itype, "proper divisors")
    counts = [0] * (n + 1)
    for i in range(2, n + 1):
        for j in range(i, n + 1, i):
            counts[j] += 1
    return counts


def divisor_sum_0_to_n(n: int, itype: IntType | None = None) -> list[int]:
    n = _non_negative(n, itype, "divisors")
    sums = [0] * (n + 1)
    for i in range(1, n + 1):
        for j in range(i, n + 1, i):
            sums[j] += i
    if itype is not None:
        for v in sums:
            itype.check(v, "σ")
    return sums


def proper_divisor_sum_0_to_n(n: int, itype: IntType | None = None) -> list[int]:
    n = _non_negative(n, itype, "proper divisors")
    sums = [0] * (n + 1)
    for i in range(1, n // 2 + 1):
        for j in range(2 * i, n + 1, i):
            sums[j] += i
    if itype is not None:
        for v in sums:
            itype.check(v, "s(n)")
    return sums


def totient_0_to_n(n: int, itype: IntType | None = None) -> list[int]:
    n = _non_negative(n, itype, "the totient")
    phi = list(range(n + 1))
    for i in range(2, n + 1):
        if phi[i] == i:  # untouched, so i is prime
            for j in range(i, n + 1, i):
                phi[j] -= phi[j] // i
    return phi
