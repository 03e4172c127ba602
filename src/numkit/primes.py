# -----------------------------------------------------------------------------
#  primes.py
#  Prime generation, primality and prime counting
# -----------------------------------------------------------------------------

from __future__ import annotations

import sys
from math import isqrt, log

from numkit.arith import gcd, newtons_method
from numkit.inttypes import IntType, check
from numkit.log import get_logger
from numkit.runtime import CFG
from numkit.utility import PreconditionError, SieveTooLargeError, as_int

logger = get_logger(__name__)


# --- Sieve ---


def _max_sieve_index() -> int:
    limit = int(CFG("SIEVE.MAX_INDEX", 0) or 0)
    return limit if limit > 0 else sys.maxsize


def sieve_of_eratosthenes(n: int, itype: IntType | None = None) -> list[int]:
    """
    All primes <= n, ascending.

    Only odd candidates are stored: index i stands for 3 + 2i. Marking for a
    prime p starts at p² and steps by 2p in value space, which is p in index
    space.
    """
    n = as_int(n, "n")
    check(itype, n, "sieve bound")
    if n < 2:  # noqa: PLR2004
        return []
    if n == 2:  # noqa: PLR2004
        return [2]

    size = (n - 1) // 2
    if size > _max_sieve_index():
        raise SieveTooLargeError(
            f"Sieve up to {n} needs {size} slots; limit is {_max_sieve_index()}."
        )
    logger.debug("sieve up to %d (%d odd slots)", n, size)

    sieve = bytearray(b"\x01") * size
    for i in range((isqrt(n) - 1) // 2):
        if sieve[i]:
            p = 2 * i + 3
            start = (p * p - 3) // 2
            sieve[start::p] = bytes(len(range(start, size, p)))

    primes = [2]
    primes.extend(2 * i + 3 for i, flag in enumerate(sieve) if flag)
    return primes


# --- Primality ---


def is_prime(n: int) -> tuple[bool, int]:
    """
    Trial division on the 6k±1 wheel.

    Returns (True, 1) for primes and (False, d) for composites, where d is
    the smallest non-trivial divisor. n must be at least 2.
    """
    n = as_int(n, "n")
    if n < 2:  # noqa: PLR2004
        raise PreconditionError("n must be greater than or equal to 2.")
    if n in (2, 3):
        return True, 1
    if n % 2 == 0:
        return False, 2
    if n % 3 == 0:
        return False, 3

    bound = isqrt(n)
    i = 5
    while i <= bound:
        if n % i == 0:
            return False, i
        if n % (i + 2) == 0:
            return False, i + 2
        i += 6
    return True, 1


def coprime(a: int, b: int) -> bool:
    return gcd(a, b) == 1


# --- Prime counting ---

_PCF_EXACT = ((2, 0.0), (3, 1.0), (5, 2.0), (7, 3.0), (11, 4.0))


def pcf(x: float) -> float:
    """
    Prime-counting estimate π(x) ≈ x / ln x.
    Exact below 11; an underestimate from 11 on.
    """
    x = float(x)
    for bound, value in _PCF_EXACT:
        if x < bound:
            return value
    return x / log(x)


def apcf(n: float) -> float:
    """
    Inverse of pcf(): the x with x / ln x ≈ n, via Newton's method.
    Exact for n < 4 (0, 2, 3, 5); an overestimate of the n-th prime bound
    from there on, which makes it a safe sieve size.
    """
    n = float(n)
    if n < 0:
        raise PreconditionError("n must be non-negative.")
    if n < 4:  # noqa: PLR2004
        return (0.0, 2.0, 3.0, 5.0)[int(n)]
    root = newtons_method(
        n + 1.0,
        1e-10,
        lambda x: n * log(x) - x,
        lambda x: n / x - 1.0,
    )
    if root is None:
        raise PreconditionError(f"Newton's method stalled while inverting pcf({n}).")
    return root


# --- Prime partitions ---


def partition_prime_0_to_n(n: int) -> list[int]:
    """Number of ways to write 0..n as a sum of primes (order ignored)."""
    n = as_int(n, "n")
    if n < 0:
        return []
    ways = [0] * (n + 1)
    ways[0] = 1
    for p in sieve_of_eratosthenes(n):
        for i in range(p, n + 1):
            ways[i] += ways[i - p]
    return ways


def partition_prime(n: int) -> int:
    n = as_int(n, "n")
    if n < 0:
        return 0
    return partition_prime_0_to_n(n)[-1]
