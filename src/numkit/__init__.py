from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("numkit")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .config import load_settings
from .contfrac import SimpleContinuedFraction, pell_solutions, solve_pell, sqrt_digits
from .digits import DigitsIter, digits, from_digits, is_palindrome, is_permutation
from .factors import (
    DistinctPrimeFactors,
    Divisors,
    PrimeFactors,
    ProperDivisors,
    build_ctx,
    distinct_prime_factors,
    divisor_count,
    divisor_sum,
    prime_factors,
    totient,
)
from .log import configure_logging
from .primes import is_prime, sieve_of_eratosthenes
from .runtime import APPLY, CFG
from .statistics import Sample
from .utility import IntTypeOverflowError, PreconditionError, SieveTooLargeError

__all__ = [
    "APPLY",
    "CFG",
    "DigitsIter",
    "DistinctPrimeFactors",
    "Divisors",
    "IntTypeOverflowError",
    "PreconditionError",
    "PrimeFactors",
    "ProperDivisors",
    "Sample",
    "SieveTooLargeError",
    "SimpleContinuedFraction",
    "__version__",
    "build_ctx",
    "configure_logging",
    "digits",
    "distinct_prime_factors",
    "divisor_count",
    "divisor_sum",
    "from_digits",
    "is_palindrome",
    "is_permutation",
    "is_prime",
    "load_settings",
    "pell_solutions",
    "prime_factors",
    "sieve_of_eratosthenes",
    "solve_pell",
    "sqrt_digits",
    "totient",
]
