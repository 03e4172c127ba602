# -----------------------------------------------------------------------------
#  arith.py
#  Supporting integer arithmetic
# -----------------------------------------------------------------------------

from __future__ import annotations

import math
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from numkit.inttypes import IntType, check
from numkit.utility import PreconditionError, as_int


# --- gcd / lcm ---


def gcd(a: int, b: int) -> int:
    a, b = as_int(a, "a"), as_int(b, "b")
    if a < 0 or b < 0:
        raise PreconditionError("Cannot calculate GCD of negative numbers.")
    return math.gcd(a, b)


def _at_least_two(nums: Iterable[int], what: str) -> list[int]:
    vals = [as_int(x) for x in nums]
    if len(vals) < 2:  # noqa: PLR2004
        raise PreconditionError(f"{what} needs at least 2 numbers, got {len(vals)}.")
    return vals


def gcd_multiple(nums: Iterable[int]) -> int:
    vals = _at_least_two(nums, "GCD")
    result = gcd(vals[0], vals[1])
    for v in vals[2:]:
        result = gcd(result, v)
    return result


def gcd_extended(a: int, b: int) -> tuple[int, int, int]:
    """
    Extended Euclid: return (g, s, t) with a*s + b*t == g == gcd(a, b).
    """
    a, b = as_int(a, "a"), as_int(b, "b")
    if a < 0 or b < 0:
        raise PreconditionError("Cannot calculate GCD of negative numbers.")
    r0, r1 = a, b
    s0, s1 = 1, 0
    t0, t1 = 0, 1
    while r1:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    return r0, s0, t0


def lcm(a: int, b: int) -> int:
    g = gcd(a, b)
    if g == 0:
        return 0
    return (a // g) * b


def lcm_multiple(nums: Iterable[int]) -> int:
    vals = _at_least_two(nums, "LCM")
    result = lcm(vals[0], vals[1])
    for v in vals[2:]:
        result = lcm(result, v)
    return result


# --- roots, factorials, orders ---


def isqrt(n: int) -> int:
    n = as_int(n, "n")
    if n < 0:
        raise PreconditionError("Cannot calculate square root of a negative integer.")
    return math.isqrt(n)


def factorial(n: int, itype: IntType | None = None) -> int:
    n = as_int(n, "n")
    if n < 0:
        raise PreconditionError("Factorial of a negative integer is undefined.")
    return check(itype, math.factorial(n), f"{n}!")


def factorial_0_to_n(n: int, itype: IntType | None = None) -> list[int]:
    """[0!, 1!, ..., n!]; index is the argument."""
    n = as_int(n, "n")
    if n < 0:
        raise PreconditionError("Factorial of a negative integer is undefined.")
    out = [1] * (n + 1)
    for i in range(2, n + 1):
        out[i] = check(itype, out[i - 1] * i, f"{i}!")
    return out


def multiplicative_order(a: int, n: int) -> int:
    """
    Smallest k >= 1 with a^k ≡ 1 (mod n). a and n must both be >= 2 and
    coprime; otherwise no order exists and this fails fast.
    """
    a, n = as_int(a, "a"), as_int(n, "n")
    if a < 2 or n < 2:  # noqa: PLR2004
        raise PreconditionError("a and n must be greater than or equal to 2.")
    if math.gcd(a, n) != 1:
        raise PreconditionError(f"{a} and {n} are not coprime; no multiplicative order.")
    result = 1
    for k in range(1, n):
        result = (result * a) % n
        if result == 1:
            return k
    # unreachable for coprime inputs (Euler: a^phi(n) ≡ 1)
    raise PreconditionError(f"No multiplicative order found for {a} mod {n}.")


# --- partitions ---


def partition_p_0_to_n(n: int) -> list[int]:
    """
    p(0..n) by Euler's pentagonal number recurrence:
    p(m) = Σ_k (-1)^(k+1) [p(m - k(3k-1)/2) + p(m - k(3k+1)/2)]
    """
    n = as_int(n, "n")
    if n < 0:
        return []
    parts = [1] * (n + 1)
    for m in range(1, n + 1):
        total = 0
        k = 1
        while True:
            g1 = k * (3 * k - 1) // 2
            if g1 > m:
                break
            g2 = k * (3 * k + 1) // 2
            term = parts[m - g1] + (parts[m - g2] if g2 <= m else 0)
            total += term if k % 2 else -term
            k += 1
        parts[m] = total
    return parts


def partition_p(n: int) -> int:
    """Number of ways to write n as a sum of positive integers (0 for n < 0)."""
    n = as_int(n, "n")
    if n < 0:
        return 0
    return partition_p_0_to_n(n)[-1]


# --- Newton ---


def newtons_method(
    x0: float,
    precision: float,
    function: Callable[[float], float],
    derivative: Callable[[float], float],
) -> float | None:
    """
    Root of `function` starting from x0; stops once successive iterates
    differ by at most `precision`. Returns None if the derivative vanishes.
    Does not terminate if the iteration diverges.
    """
    x = float(x0)
    prev = -math.inf
    while abs(x - prev) > precision:
        prev = x
        d = derivative(prev)
        if d == 0:
            return None
        x = prev - function(prev) / d
    return x


# --- linear congruences ---


@dataclass(frozen=True, slots=True)
class CongruenceRelation:
    """x ≡ a (mod n), with a stored reduced into [0, n)."""
    a: int
    n: int

    def __post_init__(self) -> None:
        n = as_int(self.n, "modulus")
        if n <= 0:
            raise PreconditionError("Modulus must be positive.")
        object.__setattr__(self, "n", n)
        object.__setattr__(self, "a", as_int(self.a, "residue") % n)


def system_of_linear_congruences(congruences: Iterable[CongruenceRelation]) -> int | None:
    """
    Smallest non-negative x satisfying every congruence (generalized CRT;
    moduli need not be coprime). None if the system is empty or inconsistent.
    """
    it = iter(congruences)
    first = next(it, None)
    if first is None:
        return None
    a, n = first.a, first.n
    for rel in it:
        g, p, _ = gcd_extended(n, rel.n)
        diff = rel.a - a
        if diff % g:
            return None
        step = rel.n // g
        new_n = n * step
        a = (a + n * ((diff // g) * p % step)) % new_n
        n = new_n
    return a
