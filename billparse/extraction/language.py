"""Keyword-ratio language detection for bills (Hungarian vs English)."""

from billparse.extraction.fields import Language

HU_KEYWORDS: tuple[str, ...] = (
    "számla", "fizetendő", "összeg", "forint", "végösszeg",
    "áfa", "határidő", "teljesítés", "kelte", "dátum",
    "fizetési", "szolgáltató", "vevő", "eladó", "megrendelő",
    "köszönjük", "bankszámla", "adószám",
)

EN_KEYWORDS: tuple[str, ...] = (
    "invoice", "bill", "amount", "total", "due", "payment",
    "date", "account", "subtotal", "tax", "customer",
    "thank you", "balance", "statement", "receipt",
)


def keyword_ratio(text: str, keywords: tuple[str, ...]) -> float:
    lowered = text.lower()
    hits = sum(1 for keyword in keywords if keyword in lowered)
    return hits / len(keywords)


def detect_language(
    text: str,
    threshold: float = 0.15,
    default: Language = Language.EN,
) -> Language:
    """Pick Hungarian when its keyword ratio reaches *threshold* and beats English."""
    if not text:
        return default
    hu_ratio = keyword_ratio(text, HU_KEYWORDS)
    en_ratio = keyword_ratio(text, EN_KEYWORDS)
    if hu_ratio >= threshold and hu_ratio > en_ratio:
        return Language.HU
    if en_ratio >= threshold and en_ratio > hu_ratio:
        return Language.EN
    return default
