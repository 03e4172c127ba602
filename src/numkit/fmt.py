# src/numkit/fmt.py
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence

from numkit.digits import DigitsIter
from numkit.runtime import CFG
from numkit.utility import dec_digits

_SUPERSCRIPTS = "⁰¹²³⁴⁵⁶⁷⁸⁹"


def abbr_int_fast(
    n: int,
    head: int | None = None,
    tail: int | None = None,
    threshold: int | None = None,
    ellipsis: str | None = None,
) -> str:
    """
    Abbreviate very large ints as first<head>…last<tail> without str(n).
    Unset knobs come from FORMATTING.NUM_ABBR_* and FORMATTING.ELLIPSIS.
    """
    if not isinstance(n, int):
        return str(n)
    if head is None:
        head = int(CFG("FORMATTING.NUM_ABBR_HEAD", 10))
    if tail is None:
        tail = int(CFG("FORMATTING.NUM_ABBR_TAIL", 10))
    if threshold is None:
        threshold = int(CFG("FORMATTING.NUM_ABBR_THRESHOLD", 35))
    if ellipsis is None:
        ellipsis = str(CFG("FORMATTING.ELLIPSIS", "…"))

    sign = "-" if n < 0 else ""
    a = -n if n < 0 else n

    d = dec_digits(a)
    if d <= threshold or head + tail >= d:
        return sign + str(a)

    first = a // 10 ** (d - head)
    last = a % 10**tail
    return f"{sign}{first}{ellipsis}{last:0{tail}d}"


def superscript(n: int) -> str:
    """12 -> '¹²'"""
    return "".join(_SUPERSCRIPTS[d] for d in DigitsIter(n))


def format_factorization(
    fac: Mapping[int, int] | Iterable[tuple[int, int]],
    *,
    pretty: bool = False,
) -> str:
    """
    Turn {p: e, ...} or [(p, e), ...] into '2^3 × 3 × 5^2'
    (or '2³ × 3 × 5²' with pretty=True). The empty product is '1'.
    """
    pairs = fac.items() if isinstance(fac, Mapping) else fac
    parts: list[str] = []
    for p, e in sorted(pairs):
        if e == 1:
            parts.append(f"{p}")
        elif pretty:
            parts.append(f"{p}{superscript(e)}")
        else:
            parts.append(f"{p}^{e}")
    return " × ".join(parts) if parts else "1"


def format_continued_fraction(non_periodic: Sequence[int], periodic: Sequence[int] | None = None) -> str:
    """
    [a0; a1, a2] for finite expansions, with the repeating block in
    parentheses: √2 -> '[1; (2)]', √7 -> '[2; (1, 1, 1, 4)]'.
    """
    terms = [str(a) for a in non_periodic]
    if periodic:
        terms.append("(" + ", ".join(str(a) for a in periodic) + ")")
    if not terms:
        return "[]"
    head, *rest = terms
    return f"[{head}; {', '.join(rest)}]" if rest else f"[{head}]"


def format_mean_stddev(mean: float | None, stddev: float | None, unit: str = "", digits: int = 3) -> str:
    """'12.345 ± 0.678 ms'; '—' when there is no mean."""
    if mean is None:
        return "—"
    suffix = f" {unit}" if unit else ""
    if stddev is None:
        return f"{mean:.{digits}f}{suffix}"
    return f"{mean:.{digits}f} ± {stddev:.{digits}f}{suffix}"
