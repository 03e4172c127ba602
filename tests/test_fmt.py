# tests/test_fmt.py
"""
Display helpers: abbreviated big ints, factorizations, continued fractions
and mean ± stddev strings.
"""

from __future__ import annotations

import pytest

from numkit.factors import build_ctx, distinct_prime_factors
from numkit.fmt import (
    abbr_int_fast,
    format_continued_fraction,
    format_factorization,
    format_mean_stddev,
    superscript,
)
from numkit.runtime import override
from numkit.statistics import Sample

# ---------- abbr_int_fast -----------------------------------------------------


@pytest.mark.parametrize("n", [2**200, -(3**150), 10**60 + 7])
def test_abbr_int_fast_matches_string_slicing(n):
    s = str(abs(n))
    sign = "-" if n < 0 else ""
    assert abbr_int_fast(n) == f"{sign}{s[:10]}…{s[-10:]}"


@pytest.mark.parametrize("n", [0, 7, -42, 10**34, 10**35 - 1])
def test_abbr_int_fast_leaves_short_numbers_alone(n):
    assert abbr_int_fast(n) == str(n)


def test_abbr_int_fast_keeps_leading_zeros_of_tail():
    assert abbr_int_fast(10**40 + 5, head=3, tail=4, threshold=10) == "100…0005"


def test_abbr_int_fast_explicit_ellipsis_and_overlap():
    assert abbr_int_fast(123456789, head=2, tail=2, threshold=3, ellipsis="...") == "12...89"
    # head + tail covers every digit
    assert abbr_int_fast(123456, head=3, tail=3, threshold=3) == "123456"


def test_abbr_int_fast_reads_formatting_settings():
    n = 2**100  # 31 digits
    with override({"FORMATTING.NUM_ABBR_THRESHOLD": 20, "FORMATTING.NUM_ABBR_HEAD": 4,
                   "FORMATTING.NUM_ABBR_TAIL": 3, "FORMATTING.ELLIPSIS": "~"}):
        s = str(n)
        assert abbr_int_fast(n) == f"{s[:4]}~{s[-3:]}"
    assert abbr_int_fast(n) == str(n)


def test_abbr_int_fast_passes_through_non_ints():
    assert abbr_int_fast(1.5) == "1.5"


# ---------- factorizations ----------------------------------------------------

FACTORIZATION_CASES = [
    ({}, "1", "1"),
    ({7: 1}, "7", "7"),
    ({2: 3, 3: 1}, "2^3 × 3", "2³ × 3"),
    ({5: 2, 2: 10, 3: 1}, "2^10 × 3 × 5^2", "2¹⁰ × 3 × 5²"),
]


@pytest.mark.parametrize("fac,plain,pretty", FACTORIZATION_CASES, ids=["empty", "prime", "360ish", "unsorted"])
def test_format_factorization(fac, plain, pretty):
    assert format_factorization(fac) == plain
    assert format_factorization(fac, pretty=True) == pretty
    assert format_factorization(list(fac.items())) == plain


def test_format_factorization_from_factor_streams():
    assert format_factorization(distinct_prime_factors(360)) == "2^3 × 3^2 × 5"
    assert format_factorization(build_ctx(1).fac) == "1"


def test_superscript():
    assert superscript(0) == "⁰"
    assert superscript(1234567890) == "¹²³⁴⁵⁶⁷⁸⁹⁰"


# ---------- continued fractions -----------------------------------------------


@pytest.mark.parametrize(
    "head,tail,expected",
    [
        ([1], [2], "[1; (2)]"),
        ([3], None, "[3]"),
        ([3, 7, 15, 1], None, "[3; 7, 15, 1]"),
        ([4], [1, 3, 1, 8], "[4; (1, 3, 1, 8)]"),
        ([], None, "[]"),
    ],
    ids=["sqrt2", "single", "pi-ish", "sqrt23", "empty"],
)
def test_format_continued_fraction(head, tail, expected):
    assert format_continued_fraction(head, tail) == expected


# ---------- mean ± stddev -----------------------------------------------------


def test_format_mean_stddev():
    assert format_mean_stddev(None, None) == "—"
    assert format_mean_stddev(12.3456, 0.6789, "ms") == "12.346 ± 0.679 ms"
    assert format_mean_stddev(2.0, None, digits=1) == "2.0"


def test_format_mean_stddev_of_sample():
    s = Sample([2, 4, 4, 4, 5, 5, 7, 9])
    assert format_mean_stddev(s.mean(), s.population_stddev(), digits=2) == "5.00 ± 2.00"
    assert format_mean_stddev(Sample().mean(), Sample().sample_stddev()) == "—"
