# tests/test_contfrac.py
"""
Continued fractions of square roots, convergents, Pell's equation and
decimal digit extraction.
"""

from __future__ import annotations

from itertools import islice

import gmpy2
import pytest

from numkit.contfrac import (
    SimpleContinuedFraction,
    pell_solutions,
    solve_pell,
    sqrt_digits,
)
from numkit.utility import PreconditionError, is_square

# ---------- expansion of square roots ----------------------------------------

SQRT_CASES = [
    (0, (0,), None),
    (1, (1,), None),
    (2, (1,), (2,)),
    (3, (1,), (1, 2)),
    (7, (2,), (1, 1, 1, 4)),
    (13, (3,), (1, 1, 1, 1, 6)),
    (23, (4,), (1, 3, 1, 8)),
    (25, (5,), None),
    (61, (7,), (1, 4, 3, 1, 2, 2, 1, 3, 4, 1, 14)),
]


@pytest.mark.parametrize("n,head,tail", SQRT_CASES, ids=[str(n) for n, _, _ in SQRT_CASES])
def test_from_sqrt(n, head, tail):
    cf = SimpleContinuedFraction.from_sqrt(n)
    assert cf.non_periodic == head
    assert cf.periodic == tail
    assert cf.is_periodic is (tail is not None)


def test_odd_periods_below_ten_thousand():
    odd = sum(
        1
        for n in range(2, 10_001)
        if not is_square(n) and SimpleContinuedFraction.from_sqrt(n).period_length % 2
    )
    assert odd == 1322


def test_negative_radicand_is_rejected():
    with pytest.raises(PreconditionError):
        SimpleContinuedFraction.from_sqrt(-2)


def test_empty_periodic_part_is_rejected():
    with pytest.raises(PreconditionError):
        SimpleContinuedFraction([1], [])
    with pytest.raises(PreconditionError):
        SimpleContinuedFraction([])


@pytest.mark.parametrize(
    "head,tail",
    [([1, 0, 2], None), ([3, -1], None), ([2], [1, 0]), ([], [0, 1])],
    ids=["zero-inside", "negative-inside", "zero-in-period", "zero-leading-period"],
)
def test_non_positive_later_coefficients_are_rejected(head, tail):
    with pytest.raises(PreconditionError):
        SimpleContinuedFraction(head, tail)


def test_leading_coefficient_may_be_zero_or_negative():
    assert SimpleContinuedFraction([0, 2, 3]).value() == gmpy2.mpq(3, 7)
    assert SimpleContinuedFraction([-2, 2]).value() == gmpy2.mpq(-3, 2)


def test_equality_and_str():
    cf = SimpleContinuedFraction.from_sqrt(7)
    assert cf == SimpleContinuedFraction([2], [1, 1, 1, 4])
    assert hash(cf) == hash(SimpleContinuedFraction((2,), (1, 1, 1, 4)))
    assert str(cf) == "[2; (1, 1, 1, 4)]"
    assert str(SimpleContinuedFraction([3, 7, 15, 1])) == "[3; 7, 15, 1]"
    assert str(SimpleContinuedFraction.from_sqrt(9)) == "[3]"


def test_coefficients_repeat_the_period():
    cf = SimpleContinuedFraction.from_sqrt(3)
    assert list(islice(cf.coefficients(), 7)) == [1, 1, 2, 1, 2, 1, 2]
    assert list(SimpleContinuedFraction([1, 2]).coefficients()) == [1, 2]


# ---------- convergents -------------------------------------------------------


def test_convergents_of_sqrt2():
    cf = SimpleContinuedFraction.from_sqrt(2)
    got = [(int(c.numerator), int(c.denominator)) for c in islice(cf.convergents(), 6)]
    assert got == [(1, 1), (3, 2), (7, 5), (17, 12), (41, 29), (99, 70)]


def test_convergents_of_finite_fraction():
    # 415/93 = [4; 2, 6, 7]
    cf = SimpleContinuedFraction([4, 2, 6, 7])
    assert [str(c) for c in cf.convergents()] == ["4", "9/2", "58/13", "415/93"]
    assert cf.value() == gmpy2.mpq(415, 93)
    assert cf.convergent_n(3) == gmpy2.mpq(415, 93)
    assert cf.convergent_n(4) is None


def test_convergents_improve_monotonically_for_sqrt2():
    with gmpy2.context(precision=2000):
        root2 = gmpy2.sqrt(2)
        errors = [abs(gmpy2.mpfr(c) - root2) for c in islice(SimpleContinuedFraction.from_sqrt(2).convergents(), 60)]
    assert all(b < a for a, b in zip(errors, errors[1:]))


def test_convergents_are_in_lowest_terms():
    for c in islice(SimpleContinuedFraction.from_sqrt(61).convergents(), 40):
        assert gmpy2.gcd(c.numerator, c.denominator) == 1


def test_convergents_never_overflow():
    # the 1000th convergent of √2 has hundreds of digits
    c = SimpleContinuedFraction.from_sqrt(2).convergent_n(1000)
    assert c.numerator**2 - 2 * c.denominator**2 in (1, -1)
    assert len(str(c.denominator)) > 300


def test_value_of_periodic_fraction_is_rejected():
    with pytest.raises(PreconditionError):
        SimpleContinuedFraction.from_sqrt(2).value()


# ---------- Pell's equation --------------------------------------------------

PELL_CASES = [
    (2, (3, 2)),
    (3, (2, 1)),
    (5, (9, 4)),
    (6, (5, 2)),
    (7, (8, 3)),
    (13, (649, 180)),
    (61, (1766319049, 226153980)),
    (109, (158070671986249, 15140424455100)),
]


@pytest.mark.parametrize("d,expected", PELL_CASES, ids=[str(d) for d, _ in PELL_CASES])
def test_solve_pell_minimal(d, expected):
    assert solve_pell(d) == expected


def test_solve_pell_minimality_against_brute_force():
    for d in range(2, 60):
        if is_square(d):
            continue
        x, y = solve_pell(d)
        assert x * x - d * y * y == 1
        for yy in range(1, y):
            xx2 = 1 + d * yy * yy
            assert not is_square(xx2), (d, yy)


def test_negative_pell():
    assert solve_pell(2, negative=True) == (1, 1)
    assert solve_pell(13, negative=True) == (18, 5)
    assert solve_pell(61, negative=True) == (29718, 3805)
    # √3 has period 2, so x² − 3y² = −1 has no solution
    assert solve_pell(3, negative=True) is None


@pytest.mark.parametrize("d", [-3, 0, 1, 4, 49])
def test_pell_rejects_non_positive_and_square(d):
    with pytest.raises(PreconditionError):
        solve_pell(d)


def test_pell_solutions_stream():
    sols = list(islice(pell_solutions(2), 5))
    assert sols == [(3, 2), (17, 12), (99, 70), (577, 408), (3363, 2378)]
    for x, y in islice(pell_solutions(7), 10):
        assert x * x - 7 * y * y == 1


def test_problem_66_largest_minimal_x():
    best = max(
        (d for d in range(2, 1_001) if not is_square(d)),
        key=lambda d: solve_pell(d)[0],
    )
    assert best == 661


# ---------- digits ------------------------------------------------------------


def test_approximation_precision_bound():
    cf = SimpleContinuedFraction.from_sqrt(2)
    with gmpy2.context(precision=1000):
        root2 = gmpy2.sqrt(2)
        for m in (1, 5, 20, 50):
            approx = cf.approximation(m)
            assert abs(gmpy2.mpfr(approx) - root2) < gmpy2.mpfr(10) ** -m


def test_approximation_of_finite_fraction_is_exact_value():
    assert SimpleContinuedFraction([4, 2, 6, 7]).approximation(100) == gmpy2.mpq(415, 93)


def test_sqrt_digits():
    assert sqrt_digits(2, 10) == "1414213562"
    assert sqrt_digits(4, 5) == "20000"
    assert sqrt_digits(99, 6) == "994987"
    assert sqrt_digits(2, 0) == ""


def test_decimal_digits_of_value_below_one():
    # 3/7 = [0; 2, 3]
    assert SimpleContinuedFraction([0, 2, 3]).decimal_digits(7) == "0428571"


def test_problem_80_digit_sum():
    total = sum(
        sum(int(ch) for ch in sqrt_digits(n, 100))
        for n in range(1, 101)
        if not is_square(n)
    )
    assert total == 40886


@pytest.mark.parametrize(
    "n,m,expected",
    [
        (10**20 - 1, 10, "9999999999"),
        (10**24 - 1, 13, "9999999999999"),
        (10**20 + 1, 12, "100000000000"),
    ],
    ids=["below-1e10", "below-1e12", "above-1e10"],
)
def test_sqrt_digits_just_off_a_power_of_ten(n, m, expected):
    assert sqrt_digits(n, m) == expected


def test_decimal_digits_of_finite_fraction_agree_with_exact_value():
    cf = SimpleContinuedFraction([4, 2, 6, 7])
    assert cf.decimal_digits(12) == str(415 * 10**11 // 93)
