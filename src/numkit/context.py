# -----------------------------------------------------------------------------
#  context.py
#  Immutable factorization record shared by the divisor functions
# -----------------------------------------------------------------------------

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class FactorCtx:
    # --- non-default fields (no "= ...") FIRST ---
    n: int
    fac: tuple[tuple[int, int], ...]  # (prime, multiplicity), primes ascending
    tau: int | None                   # None for n == 0
    sigma: int | None                 # None for n == 0
    phi: int | None                   # None for n == 0

    @property
    def omega(self) -> int:
        """Number of distinct prime factors."""
        return len(self.fac)

    @property
    def big_omega(self) -> int:
        """Number of prime factors counted with multiplicity."""
        return sum(e for _, e in self.fac)

    @property
    def is_prime(self) -> bool:
        return len(self.fac) == 1 and self.fac[0][1] == 1

    def as_dict(self) -> dict[int, int]:
        return dict(self.fac)
