import re
from enum import StrEnum

from billparse.extraction.fields import Language


class Category(StrEnum):
    ELECTRICITY = "electricity"
    GAS = "gas"
    WATER = "water"
    HEATING = "heating"
    WASTE = "waste"
    TELECOMMUNICATIONS = "telecommunications"
    OTHER = "other"


# Scanned in this order; the first category with a keyword hit wins.
CATEGORY_KEYWORDS: dict[Language, tuple[tuple[Category, tuple[str, ...]], ...]] = {
    Language.HU: (
        (Category.ELECTRICITY, ("áram", "villany", "villamos energia", "mvm", "elmű", "émász", "e.on")),
        (Category.GAS, ("gáz", "földgáz", "főgáz", "tigáz", "nkm")),
        (Category.WATER, ("víz", "vízmű", "csatorna", "szennyvíz")),
        (Category.HEATING, ("távhő", "fűtés", "főtáv", "melegvíz")),
        (Category.WASTE, ("hulladék", "szemét", "fkf", "nhkv", "kommunális")),
        (Category.TELECOMMUNICATIONS, (
            "telefon", "internet", "mobil", "távközlés", "előfizetés", "kábeltévé",
            "vodafone", "telekom", "yettel", "telenor", "digi",
        )),
    ),
    Language.EN: (
        (Category.ELECTRICITY, ("electricity", "electric", "power", "kwh")),
        (Category.GAS, ("gas", "natural gas")),
        (Category.WATER, ("water", "sewer", "sewage")),
        (Category.HEATING, ("heating", "district heat", "heat")),
        (Category.WASTE, ("waste", "garbage", "trash", "refuse", "recycling")),
        (Category.TELECOMMUNICATIONS, (
            "telecom", "phone", "mobile", "internet", "broadband", "cable", "wireless",
        )),
    ),
}


def _keyword_pattern(keyword: str) -> re.Pattern[str]:
    # short ASCII keywords (brand acronyms, "gas") must be whole words
    tail = r"\b" if len(keyword) <= 3 and keyword.isascii() else ""
    return re.compile(rf"(?<!\w){re.escape(keyword)}{tail}", re.IGNORECASE)


_COMPILED: dict[Language, list[tuple[Category, list[re.Pattern[str]]]]] = {
    language: [(category, [_keyword_pattern(k) for k in keywords]) for category, keywords in groups]
    for language, groups in CATEGORY_KEYWORDS.items()
}


def infer_category(text: str, language: Language) -> Category:
    for category, patterns in _COMPILED[language]:
        if any(pattern.search(text) for pattern in patterns):
            return category
    return Category.OTHER
