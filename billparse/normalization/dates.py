"""Date canonicalization to ``YYYY-MM-DD``.

Ambiguous or unparsable input is returned unchanged; nothing is guessed.
Numeric year-first dates are read directly. Everything else goes through
``dateparser`` with the document language and a strict day/month/year
requirement.
"""

import re
from datetime import date

import dateparser

from billparse.extraction.fields import Language

_SEPARATOR_SPACING_RE = re.compile(r"\s*([./\-])\s*")
_YEAR_FIRST_RE = re.compile(r"(\d{4})[./\-](\d{1,2})[./\-](\d{1,2})")
_SLASH_DATE_RE = re.compile(r"(\d{1,2})/(\d{1,2})/(?:\d{2}|\d{4})")
_LEADING_YEAR_RE = re.compile(r"\d{4}\b")
# Hungarian case suffixes glued to the day: "15-ig", "15-én", "1-jén"
_HU_DAY_SUFFIX_RE = re.compile(r"(\d{1,2})\.?-[a-záéíóöőúüű]+$", re.IGNORECASE)

_DATE_ORDER: dict[Language, str] = {
    Language.HU: "DMY",
    Language.EN: "DMY",
}


def normalize_date(raw: str, language: Language) -> str:
    """Return *raw* as ``YYYY-MM-DD``, or unchanged when ambiguous or invalid."""
    text = raw.strip().rstrip(".").strip()
    if not text:
        return raw
    if language is Language.HU:
        text = _HU_DAY_SUFFIX_RE.sub(r"\1", text)
    compact = _SEPARATOR_SPACING_RE.sub(r"\1", text)

    found = _YEAR_FIRST_RE.fullmatch(compact)
    if found is not None:
        try:
            year, month, day = (int(part) for part in found.groups())
            return date(year, month, day).isoformat()
        except ValueError:
            return raw

    date_order = _date_order(compact, language)
    if date_order is None:
        return raw

    parsed = dateparser.parse(
        text,
        languages=[language.value],
        settings={"DATE_ORDER": date_order, "STRICT_PARSING": True},
    )
    if parsed is None:
        return raw
    return parsed.date().isoformat()


def _date_order(compact: str, language: Language) -> str | None:
    if _LEADING_YEAR_RE.match(compact):
        return "YMD"

    found = _SLASH_DATE_RE.fullmatch(compact)
    if language is Language.EN and found is not None:
        # US-style slash dates are only read when one side cannot be a month
        first, second = int(found.group(1)), int(found.group(2))
        if first > 12 >= second:
            return "DMY"
        if second > 12 >= first or first == second:
            return "MDY"
        return None
    return _DATE_ORDER[language]
