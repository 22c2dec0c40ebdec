"""Heuristic confidence for extracted fields.

Every non-empty field starts at 0.5 and is raised when its value has the
well-formed shape of its kind. The overall score is the mean, lifted by 0.2
(capped at 0.95) when at least three core fields are present: amount, a
date, an account identifier and the vendor.
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation

from billparse.extraction.fields import FieldId, FieldType
from billparse.mapping.models import ResolvedField
from billparse.normalization.categories import Category

BASE_SCORE = 0.5
CORE_SCORE = 0.9
IDENTIFIER_SCORE = 0.8
TEXT_SCORE = 0.7
CORE_BOOST = 0.2
BOOST_CAP = 0.95
CORE_FIELDS_FOR_BOOST = 3

_CANONICAL_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")
_ACCOUNT_RE = re.compile(r"[A-Z0-9][A-Z0-9\- /]{3,}", re.IGNORECASE)
_IDENTIFIER_RE = re.compile(r"[A-Z0-9][A-Z0-9\-/]{2,}", re.IGNORECASE)
_HAS_LETTER_RE = re.compile(r"[^\W\d_]")
_HAS_DIGIT_RE = re.compile(r"\d")

_CORE_GROUPS: dict[FieldId, str] = {
    FieldId.AMOUNT: "amount",
    FieldId.INVOICE_DATE: "date",
    FieldId.DUE_DATE: "date",
    FieldId.ACCOUNT_NUMBER: "account",
    FieldId.VENDOR: "vendor",
}


@dataclass(frozen=True)
class Confidence:
    fields: dict[str, float] = field(default_factory=dict)
    overall: float = 0.0
    scored_fields: int = 0


class ConfidenceScorer:
    def __init__(self, max_amount: float = 1_000_000_000) -> None:
        self._max_amount = Decimal(str(max_amount))

    def score(self, resolved: Iterable[ResolvedField]) -> Confidence:
        scores: dict[str, float] = {}
        core_groups: set[str] = set()
        for item in resolved:
            if not item.value:
                continue
            scores[item.name] = self.score_field(item)
            group = _CORE_GROUPS.get(item.field_id)
            if group is not None:
                core_groups.add(group)

        if not scores:
            return Confidence()

        overall = sum(scores.values()) / len(scores)
        if len(core_groups) >= CORE_FIELDS_FOR_BOOST:
            overall = min(overall + CORE_BOOST, BOOST_CAP)
        return Confidence(fields=scores, overall=round(overall, 4), scored_fields=len(scores))

    def score_field(self, item: ResolvedField) -> float:
        value = item.value or ""
        if item.field_id is FieldId.AMOUNT or item.field_type is FieldType.CURRENCY:
            return CORE_SCORE if self._is_bounded_amount(value) else BASE_SCORE
        if item.field_type is FieldType.DATE:
            return CORE_SCORE if _is_canonical_date(value) else BASE_SCORE
        match item.field_id:
            case FieldId.ACCOUNT_NUMBER:
                well_formed = bool(_ACCOUNT_RE.fullmatch(value) and _HAS_DIGIT_RE.search(value))
                return CORE_SCORE if well_formed else BASE_SCORE
            case FieldId.VENDOR:
                well_formed = len(value.strip()) >= 3 and bool(_HAS_LETTER_RE.search(value))
                return CORE_SCORE if well_formed else BASE_SCORE
            case FieldId.INVOICE_NUMBER:
                well_formed = bool(_IDENTIFIER_RE.fullmatch(value) and _HAS_DIGIT_RE.search(value))
                return IDENTIFIER_SCORE if well_formed else BASE_SCORE
            case FieldId.CATEGORY:
                known = value in {c.value for c in Category} and value != Category.OTHER
                return TEXT_SCORE if known else BASE_SCORE
        return TEXT_SCORE if len(value.strip()) >= 3 else BASE_SCORE

    def _is_bounded_amount(self, value: str) -> bool:
        try:
            amount = Decimal(value)
        except InvalidOperation:
            return False
        return amount.is_finite() and Decimal(0) < amount < self._max_amount


def _is_canonical_date(value: str) -> bool:
    if not _CANONICAL_DATE_RE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True
