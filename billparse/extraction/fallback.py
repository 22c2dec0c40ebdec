"""Line-level recovery of fields the pattern cascade missed.

For each missing field, the reconstructed lines are scanned for field
keywords (accent-insensitive). On a hit, the field's value shape is applied
to the text after the keyword, then to the whole line, then to the next
line, which covers label-above-value layouts.

Bills are split into top/middle/bottom zones by line index. The customer
address is only searched in the top zone and the payment method only in
the bottom zone. Known vendor names in the top zone are the last resort
for the vendor field.
"""

import math
import re
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

from billparse.extraction.fields import FieldId, Language
from billparse.extraction.folding import TextFolder
from billparse.extraction.patterns import ACCOUNT_SHAPE, AMOUNT_SHAPES, DATE_SHAPES, ID_SHAPE
from billparse.layout.models import Line, Page
from billparse.logging.logger import Log

Shape = Callable[[str, Language], str | None]

_LEADING_NOISE_RE = re.compile(r"^[\s:;.#\-–]+")
_HAS_LETTER_RE = re.compile(r"[^\W\d_]")


@dataclass(frozen=True, slots=True)
class ZoneLayout:
    """Fractions of a document's lines that form the top and bottom zones."""

    top_fraction: float = 1 / 3
    bottom_fraction: float = 1 / 3

    def __post_init__(self) -> None:
        for name in ("top_fraction", "bottom_fraction"):
            value = getattr(self, name)
            if not 0 < value < 1:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")
        if self.top_fraction + self.bottom_fraction > 1:
            raise ValueError("top_fraction + bottom_fraction must not exceed 1")

    def split(self, lines: Sequence[Line]) -> tuple[list[Line], list[Line], list[Line]]:
        total = len(lines)
        top_count = min(total, math.ceil(total * self.top_fraction))
        bottom_count = min(total - top_count, math.ceil(total * self.bottom_fraction))
        top = list(lines[:top_count])
        middle = list(lines[top_count : total - bottom_count])
        bottom = list(lines[total - bottom_count :])
        return top, middle, bottom


def _amount_shape(text: str, language: Language) -> str | None:
    # dates on the same line would otherwise read as amounts
    cleaned = DATE_SHAPES[language].sub(" ", text)
    found = AMOUNT_SHAPES[language].search(cleaned)
    return found.group(1) if found else None


def _date_shape(text: str, language: Language) -> str | None:
    found = DATE_SHAPES[language].search(text)
    return found.group(1).strip() if found else None


def _account_shape(text: str, language: Language) -> str | None:
    found = ACCOUNT_SHAPE.search(text)
    return found.group(0) if found else None


def _id_shape(text: str, language: Language) -> str | None:
    for found in ID_SHAPE.finditer(text):
        if len(found.group(0)) >= 3 and not DATE_SHAPES[language].fullmatch(found.group(0)):
            return found.group(0)
    return None


def _text_shape(min_length: int) -> Shape:
    def shape(text: str, language: Language) -> str | None:
        value = _LEADING_NOISE_RE.sub("", text).strip()
        if len(value) >= min_length and _HAS_LETTER_RE.search(value):
            return value
        return None

    return shape


_SHAPES: dict[FieldId, Shape] = {
    FieldId.AMOUNT: _amount_shape,
    FieldId.DUE_DATE: _date_shape,
    FieldId.INVOICE_DATE: _date_shape,
    FieldId.ACCOUNT_NUMBER: _account_shape,
    FieldId.INVOICE_NUMBER: _id_shape,
    FieldId.VENDOR: _text_shape(3),
    FieldId.CUSTOMER_ADDRESS: _text_shape(5),
    FieldId.PAYMENT_METHOD: _text_shape(3),
}

# Labels are written folded (lowercase ASCII), most specific first.
_KEYWORDS: dict[tuple[Language, FieldId], tuple[str, ...]] = {
    (Language.HU, FieldId.AMOUNT): ("fizetendo", "vegosszeg", "osszesen", "osszeg"),
    (Language.HU, FieldId.DUE_DATE): ("fizetesi hatarido", "hatarido", "esedekesseg", "fizetesi"),
    (Language.HU, FieldId.INVOICE_DATE): ("szamla kelte", "kiallitas", "kelte", "kelt"),
    (Language.HU, FieldId.INVOICE_NUMBER): ("szamla sorszama", "szamlaszam", "sorszam", "bizonylat"),
    (Language.HU, FieldId.ACCOUNT_NUMBER): (
        "ugyfelazonosito", "ugyfel azonosito", "felhasznalo azonosito",
        "ugyfel", "azonosito", "fogyaszto", "vevokod", "szerzodes",
    ),
    (Language.HU, FieldId.VENDOR): ("szolgaltato", "elado", "kibocsato"),
    (Language.HU, FieldId.CUSTOMER_ADDRESS): ("felhasznalo cime", "vevo cime", "cime", "cim"),
    (Language.HU, FieldId.PAYMENT_METHOD): ("fizetesi mod", "fizetes modja"),
    (Language.EN, FieldId.AMOUNT): ("total", "amount", "due", "pay"),
    (Language.EN, FieldId.DUE_DATE): ("due", "payment", "deadline"),
    (Language.EN, FieldId.INVOICE_DATE): ("invoice date", "issued", "date"),
    (Language.EN, FieldId.INVOICE_NUMBER): ("invoice", "bill no", "bill #", "reference"),
    (Language.EN, FieldId.ACCOUNT_NUMBER): ("account", "customer", "reference"),
    (Language.EN, FieldId.VENDOR): ("from", "vendor", "seller", "billed by"),
    (Language.EN, FieldId.CUSTOMER_ADDRESS): ("billing address", "service address", "address"),
    (Language.EN, FieldId.PAYMENT_METHOD): ("payment method", "paid by", "payment type"),
}

# Method names that identify the payment method on their own.
_PAYMENT_TERMS: dict[Language, tuple[str, ...]] = {
    Language.HU: ("csoportos beszedes", "atutalas", "csekk", "bankkartya", "keszpenz"),
    Language.EN: ("direct debit", "bank transfer", "credit card", "debit card", "cheque", "check", "paypal"),
}

KNOWN_VENDORS: tuple[str, ...] = (
    "MVM", "E.ON", "ELMŰ", "ÉMÁSZ", "Főgáz", "NKM", "Tigáz", "Díjbeszedő",
    "Fővárosi Vízművek", "FCSM", "FKF", "NHKV", "FŐTÁV", "Vodafone", "Telekom",
    "Yettel", "Telenor", "DIGI", "British Gas", "EDF", "Octopus Energy",
    "Thames Water", "Verizon", "Comcast", "AT&T",
)

# Fields searched only inside one zone.
_ZONED_FIELDS: dict[FieldId, str] = {
    FieldId.CUSTOMER_ADDRESS: "top",
    FieldId.PAYMENT_METHOD: "bottom",
}


class PositionalFallbackExtractor:
    """Keyword and zone heuristics over reconstructed lines."""

    def __init__(self, zones: ZoneLayout | None = None, folder: TextFolder | None = None) -> None:
        self._zones = zones or ZoneLayout()
        self._folder = folder or TextFolder()
        self._folded_vendors = [(self._folder.fold(name), name) for name in KNOWN_VENDORS]

    def extract(self, pages: Sequence[Page], field_id: FieldId, language: Language) -> str | None:
        lines = [line for page in pages for line in page.lines]
        if not lines or field_id is FieldId.CATEGORY:
            return None

        top, _middle, bottom = self._zones.split(lines)
        scope = {"top": top, "bottom": bottom}.get(_ZONED_FIELDS.get(field_id, ""), lines)

        value = self._scan_keywords(scope, field_id, language)
        if value is None and field_id is FieldId.PAYMENT_METHOD:
            value = self._scan_terms(scope, _PAYMENT_TERMS[language])
        if value is None and field_id is FieldId.VENDOR:
            value = self._match_known_vendor(top)
        if value is not None:
            Log.debug(f"Fallback recovered {field_id}: '{value}'")
        return value

    def extract_missing(
        self,
        pages: Sequence[Page],
        field_ids: Iterable[FieldId],
        language: Language,
    ) -> dict[FieldId, str]:
        recovered: dict[FieldId, str] = {}
        for field_id in field_ids:
            value = self.extract(pages, field_id, language)
            if value is not None:
                recovered[field_id] = value
        return recovered

    def _scan_keywords(
        self,
        lines: list[Line],
        field_id: FieldId,
        language: Language,
    ) -> str | None:
        keywords = _KEYWORDS.get((language, field_id), ())
        shape = _SHAPES[field_id]
        numeric = field_id not in (FieldId.VENDOR, FieldId.CUSTOMER_ADDRESS, FieldId.PAYMENT_METHOD)
        folded_lines = [self._folder.fold_with_mapping(line.text) for line in lines]

        for keyword in keywords:
            for index, line in enumerate(lines):
                folded, mapping = folded_lines[index]
                end = self._find_word(folded, keyword)
                if end is None:
                    continue
                after = line.text[TextFolder.to_original(mapping, end, len(line.text)) :]
                candidates = [after]
                if numeric:
                    candidates.append(line.text)
                if index + 1 < len(lines):
                    candidates.append(lines[index + 1].text)
                for candidate in candidates:
                    value = shape(candidate, language)
                    if value:
                        return value
        return None

    def _scan_terms(self, lines: list[Line], terms: tuple[str, ...]) -> str | None:
        for term in terms:
            for line in lines:
                folded, mapping = self._folder.fold_with_mapping(line.text)
                end = self._find_word(folded, term)
                if end is None:
                    continue
                start = TextFolder.to_original(mapping, end - len(term), len(line.text))
                stop = TextFolder.to_original(mapping, end, len(line.text))
                return line.text[start:stop]
        return None

    def _match_known_vendor(self, lines: list[Line]) -> str | None:
        for line in lines:
            folded = self._folder.fold(line.text)
            for folded_name, name in self._folded_vendors:
                if self._find_word(folded, folded_name) is not None:
                    return name
        return None

    @staticmethod
    def _find_word(folded: str, keyword: str) -> int | None:
        """Exclusive end of *keyword* in *folded*, or None.

        The keyword must start a word. Keywords longer than four characters
        may carry a suffix (``hatarido`` in ``hataridoig``); short ones must
        end the word.
        """
        start = folded.find(keyword)
        while start != -1:
            end = start + len(keyword)
            before_ok = start == 0 or not folded[start - 1].isalnum()
            after_ok = end == len(folded) or len(keyword) > 4 or not folded[end].isalnum()
            if before_ok and after_ok:
                return end
            start = folded.find(keyword, start + 1)
        return None
