"""Per-language recognizer rules for bill fields.

Rules are ordered: specific phrasings come before generic ones, and every
rule captures the raw value in its first non-empty group. English and
Hungarian share field identifiers only, never rules.
"""

import re

from billparse.extraction.fields import FieldId, Language

_FLAGS = re.IGNORECASE | re.MULTILINE

# Label-to-value gap: punctuation, currency words, parentheses; never digits or newlines.
_GAP = r"[^\n\d]{0,40}?"

_HU_AMOUNT = r"(\d{1,3}(?:[ .\u00a0]\d{3}(?!\d))+(?:,\d{1,2})?|\d+(?:[.,]\d{1,2})?)"
_EN_AMOUNT = r"(\d{1,3}(?:,\d{3}(?!\d))+(?:\.\d{1,2})?|\d+(?:\.\d{1,2})?)"

_NUMERIC_DATE = (
    r"\d{4}\s?[./\-]\s?\d{1,2}\s?[./\-]\s?\d{1,2}\.?"
    r"|\d{1,2}\s?[./\-]\s?\d{1,2}\s?[./\-]\s?\d{2,4}"
)
_HU_MONTH = r"(?:jan|febr?|márc|ápr|máj|jún|júl|aug|szept?|okt|nov|dec)[a-záéíóöőúüű]*\.?"
_EN_MONTH = r"(?:jan|feb|mar|apr|may|jun|jul|aug|sept?|oct|nov|dec)[a-z]*\.?"

_HU_DATE = rf"({_NUMERIC_DATE}|\d{{4}}\.?\s+{_HU_MONTH}\s+\d{{1,2}}\.?)"
_EN_DATE = (
    rf"({_NUMERIC_DATE}"
    rf"|{_EN_MONTH}\s+\d{{1,2}}(?:st|nd|rd|th)?,?\s+\d{{4}}"
    rf"|\d{{1,2}}(?:st|nd|rd|th)?\s+{_EN_MONTH},?\s+\d{{4}})"
)

# Identifiers must contain at least one digit.
_ID = r"([A-Z0-9][A-Z0-9\-/]*\d[A-Z0-9\-/]*|\d)"
_TEXT = r"([^\n\r,<]{2,80})"
_ADDRESS = r"([^\n\r]{5,120})"
_SHORT_TEXT = r"([^\n\r]{3,60})"


def _rules(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, _FLAGS) for p in patterns)


_HU_RULES: dict[FieldId, tuple[re.Pattern[str], ...]] = {
    FieldId.AMOUNT: _rules(
        rf"\bfizetendő\s+összeg(?:e)?{_GAP}{_HU_AMOUNT}",
        rf"\bfizetendő\s+(?:összesen|végösszeg){_GAP}{_HU_AMOUNT}",
        rf"\bszámla\s+(?:végösszege|összege){_GAP}{_HU_AMOUNT}",
        rf"\bbruttó\s+számlaérték{_GAP}{_HU_AMOUNT}",
        rf"\bvégösszeg{_GAP}{_HU_AMOUNT}",
        rf"\bösszesen\s+fizetendő{_GAP}{_HU_AMOUNT}",
        rf"\bfizetendő{_GAP}{_HU_AMOUNT}",
        rf"\bösszesen{_GAP}{_HU_AMOUNT}\s*(?:Ft|HUF|EUR)",
    ),
    FieldId.DUE_DATE: _rules(
        rf"\bfizetési\s+határid[őoö]{_GAP}{_HU_DATE}",
        rf"\bbefizetési\s+határid[őoö]{_GAP}{_HU_DATE}",
        rf"\besedékesség(?:\s+(?:dátuma|napja|ideje))?{_GAP}{_HU_DATE}",
        rf"\bbefizetés\s+(?:dátuma|napja|ideje){_GAP}{_HU_DATE}",
        rf"\bhatárid[őoö]{_GAP}{_HU_DATE}",
    ),
    FieldId.INVOICE_DATE: _rules(
        rf"\bszámla\s+kelte{_GAP}{_HU_DATE}",
        rf"\bkiállítás\s+(?:dátuma|kelte|napja){_GAP}{_HU_DATE}",
        rf"\bszámla\s+kiállításának\s+dátuma{_GAP}{_HU_DATE}",
        rf"\bszámla\s+dátuma{_GAP}{_HU_DATE}",
        rf"^\s*kelte?\b{_GAP}{_HU_DATE}",
    ),
    FieldId.INVOICE_NUMBER: _rules(
        rf"\bszámla\s+sorszáma{_GAP}{_ID}",
        rf"\bszámla\s*száma{_GAP}{_ID}",
        rf"\bszámlaszám{_GAP}{_ID}",
        rf"\bbizonylat\s*szám(?:a)?{_GAP}{_ID}",
        rf"\bsorszám{_GAP}{_ID}",
    ),
    FieldId.ACCOUNT_NUMBER: _rules(
        rf"\bfelhasználó\s*azonosító(?:\s*száma|ja)?{_GAP}{_ID}",
        rf"\bvevő\s*\(\s*fizető\s*\)\s*azonosító{_GAP}{_ID}",
        rf"\bügyfél\s*-?\s*azonosító(?:ja)?{_GAP}{_ID}",
        rf"\bügyfélszám{_GAP}{_ID}",
        rf"\bfogyasztási\s+hely\s+azonosító{_GAP}{_ID}",
        rf"\bfogyasztó\s*azonosító{_GAP}{_ID}",
        rf"\bbefizető\s*azonosító{_GAP}{_ID}",
        rf"\bszerződés\s*(?:szám|azonosító){_GAP}{_ID}",
        rf"\bszerződéses\s+folyószámla{_GAP}{_ID}",
        rf"\bvevőkód{_GAP}{_ID}",
    ),
    FieldId.VENDOR: _rules(
        rf"\beladó\s+neve\s*:\s*{_TEXT}",
        rf"\bszolgáltató\s+neve\s*:\s*{_TEXT}",
        rf"\bszámlakibocsátó(?:\s+neve)?\s*:\s*{_TEXT}",
        rf"\b(?:köz)?szolgáltató\s*:\s*{_TEXT}",
        rf"\beladó\s*:\s*{_TEXT}",
        rf"\bkibocsátó\s*:\s*{_TEXT}",
    ),
    FieldId.CUSTOMER_ADDRESS: _rules(
        rf"\bfelhasználó\s+címe\s*:\s*{_ADDRESS}",
        rf"\bfogyasztási\s+hely\s+címe\s*:\s*{_ADDRESS}",
        rf"\bvevő\s+címe\s*:\s*{_ADDRESS}",
        rf"\bszámlázási\s+cím\s*:\s*{_ADDRESS}",
        rf"^\s*cím\s*:\s*{_ADDRESS}",
    ),
    FieldId.PAYMENT_METHOD: _rules(
        rf"\bfizetési\s+mód(?:ja)?\s*:\s*{_SHORT_TEXT}",
        rf"\bfizetés\s+módja\s*:\s*{_SHORT_TEXT}",
    ),
}

_EN_RULES: dict[FieldId, tuple[re.Pattern[str], ...]] = {
    FieldId.AMOUNT: _rules(
        rf"\btotal\s+amount\s+due{_GAP}{_EN_AMOUNT}",
        rf"\bamount\s+due{_GAP}{_EN_AMOUNT}",
        rf"\b(?:total|balance)\s+due{_GAP}{_EN_AMOUNT}",
        rf"\bplease\s+pay{_GAP}{_EN_AMOUNT}",
        rf"\btotal\s+amount{_GAP}{_EN_AMOUNT}",
        rf"\bgrand\s+total{_GAP}{_EN_AMOUNT}",
        rf"\bamount\s+payable{_GAP}{_EN_AMOUNT}",
        rf"\btotal\b{_GAP}{_EN_AMOUNT}",
    ),
    FieldId.DUE_DATE: _rules(
        rf"\bdue\s+date{_GAP}{_EN_DATE}",
        rf"\bpayment\s+due(?:\s+date)?{_GAP}{_EN_DATE}",
        rf"\b(?:pay|due)\s+(?:by|on|before){_GAP}{_EN_DATE}",
        rf"\bdue\s*:{_GAP}{_EN_DATE}",
        rf"\bdeadline{_GAP}{_EN_DATE}",
    ),
    FieldId.INVOICE_DATE: _rules(
        rf"\binvoice\s+date{_GAP}{_EN_DATE}",
        rf"\b(?:date\s+of\s+issue|issue\s+date|issued\s+on){_GAP}{_EN_DATE}",
        rf"\b(?:bill|statement)\s+date{_GAP}{_EN_DATE}",
        rf"^\s*date\s*:{_GAP}{_EN_DATE}",
    ),
    FieldId.INVOICE_NUMBER: _rules(
        rf"\binvoice\s*(?:number|num\.?|no\.?|#)(?![a-z]){_GAP}{_ID}",
        rf"\bbill\s*(?:number|no\.?|#)(?![a-z]){_GAP}{_ID}",
        rf"\binvoice\s*:\s*{_ID}",
        rf"\b(?:statement|document)\s*(?:number|no\.?|#)(?![a-z]){_GAP}{_ID}",
    ),
    FieldId.ACCOUNT_NUMBER: _rules(
        rf"\baccount\s*(?:number|no\.?|#|id)(?![a-z]){_GAP}{_ID}",
        rf"\bcustomer\s*(?:number|no\.?|#|id|account)(?![a-z]){_GAP}{_ID}",
        rf"\breference\s*(?:number|no\.?|#)(?![a-z]){_GAP}{_ID}",
        rf"\bclient\s*(?:number|no\.?|id)(?![a-z]){_GAP}{_ID}",
        rf"\baccount\s*:\s*{_ID}",
    ),
    FieldId.VENDOR: _rules(
        rf"\b(?:vendor|seller|supplier|merchant)\s*:\s*{_TEXT}",
        rf"\b(?:billed|issued)\s+by\s*:?\s*{_TEXT}",
        rf"^\s*from\s*:\s*{_TEXT}",
        rf"\bcompany\s*:\s*{_TEXT}",
    ),
    FieldId.CUSTOMER_ADDRESS: _rules(
        rf"\b(?:billing|service)\s+address\s*:\s*{_ADDRESS}",
        rf"\bshipping\s+address\s*:\s*{_ADDRESS}",
        rf"^\s*address\s*:\s*{_ADDRESS}",
    ),
    FieldId.PAYMENT_METHOD: _rules(
        rf"\bpayment\s+(?:method|type)\s*:\s*{_SHORT_TEXT}",
        rf"\bpaid\s+(?:by|via|with)\s*:?\s*{_SHORT_TEXT}",
    ),
}


# Bare value shapes, used on single lines once a field keyword was found.
AMOUNT_SHAPES: dict[Language, re.Pattern[str]] = {
    Language.HU: re.compile(rf"(?<![\d.,]){_HU_AMOUNT}(?![\d])"),
    Language.EN: re.compile(rf"(?<![\d.,]){_EN_AMOUNT}(?![\d])"),
}
DATE_SHAPES: dict[Language, re.Pattern[str]] = {
    Language.HU: re.compile(_HU_DATE, _FLAGS),
    Language.EN: re.compile(_EN_DATE, _FLAGS),
}
ACCOUNT_SHAPE = re.compile(r"(?<![\w])[A-Z]{0,4}-?\d{5,}(?:-\d+)*(?![\w])", _FLAGS)
ID_SHAPE = re.compile(r"(?<![\w\-/])[A-Z0-9][A-Z0-9\-/]*\d[A-Z0-9\-/]*", _FLAGS)


def rules_for(language: Language, field_id: FieldId) -> tuple[re.Pattern[str], ...]:
    """Ordered recognizer rules for one (language, field) pair.

    Category has no recognizer; it is inferred from the whole text later.
    """
    match (language, field_id):
        case (_, FieldId.CATEGORY):
            return ()
        case (Language.HU, _):
            return _HU_RULES.get(field_id, ())
        case (Language.EN, _):
            return _EN_RULES.get(field_id, ())
    return ()
