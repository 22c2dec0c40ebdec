"""Locale-aware currency amount canonicalization.

Canonical form is a plain decimal string with ``.`` as the decimal point,
no thousands separators and at most two fraction digits (``12345``,
``12345.5``, ``-80.25``). Magnitude is never rescaled.
"""

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from billparse.extraction.fields import Language

_CURRENCY_RE = re.compile(r"ft\.?|huf|eur|usd|gbp|forint|[$€£]", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")
_NUMERIC_RE = re.compile(r"-?[\d.,]*\d[\d.,]*")

THOUSANDS_SEPARATOR: dict[Language, str] = {Language.HU: ".", Language.EN: ","}

_CENT = Decimal("0.01")


def normalize_amount(raw: str, language: Language) -> str:
    """Return the canonical decimal form of *raw*, or *raw* unchanged if unparsable."""
    cleaned = _WHITESPACE_RE.sub("", _CURRENCY_RE.sub("", raw))
    cleaned = cleaned.rstrip(".,-")
    if not _NUMERIC_RE.fullmatch(cleaned):
        return raw

    sign = "-" if cleaned.startswith("-") else ""
    body = cleaned.lstrip("-")

    split = _split_separators(body, THOUSANDS_SEPARATOR[language])
    if split is None:
        return raw
    integer, fraction = split

    try:
        value = Decimal(f"{sign}{integer or '0'}.{fraction}" if fraction else f"{sign}{integer}")
    except InvalidOperation:
        return raw
    if len(fraction) > 2:
        value = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    return format(value, "f")


def _split_separators(body: str, locale_thousands: str) -> tuple[str, str] | None:
    """Split *body* into (integer digits, fraction digits), or None if inconsistent."""
    dots, commas = body.count("."), body.count(",")

    if dots and commas:
        decimal_sep = "." if body.rfind(".") > body.rfind(",") else ","
        thousands_sep = "," if decimal_sep == "." else "."
        integer, _, fraction = body.rpartition(decimal_sep)
        if decimal_sep in integer or thousands_sep in fraction:
            return None
        digits = _ungroup(integer, thousands_sep)
        return (digits, fraction) if digits is not None else None

    if not dots and not commas:
        return body, ""

    sep = "." if dots else ","
    if body.count(sep) > 1:
        digits = _ungroup(body, sep)
        return (digits, "") if digits is not None else None

    integer, _, fraction = body.partition(sep)
    if len(fraction) == 3 and sep == locale_thousands and integer:
        return integer + fraction, ""
    return integer, fraction


def _ungroup(integer: str, sep: str) -> str | None:
    """Drop thousands separators, checking every group after the first has three digits."""
    groups = integer.split(sep)
    if not groups[0] or len(groups[0]) > 3 or any(len(g) != 3 for g in groups[1:]):
        return None
    return "".join(groups)
