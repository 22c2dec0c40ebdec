import pytest

from billparse.extraction.fields import Language
from billparse.normalization.categories import Category, infer_category


class TestInferCategory:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Electricity usage 420 kWh", Category.ELECTRICITY),
            ("Natural gas supply", Category.GAS),
            ("Water and sewer charges", Category.WATER),
            ("District heating", Category.HEATING),
            ("Garbage collection", Category.WASTE),
            ("Your broadband bill", Category.TELECOMMUNICATIONS),
        ],
    )
    def test_english(self, text: str, expected: Category) -> None:
        assert infer_category(text, Language.EN) == expected

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("MVM Next Energiakereskedelmi Zrt.", Category.ELECTRICITY),
            ("Földgáz elszámolás", Category.GAS),
            ("Vízdíj", Category.WATER),
            ("Távhő szolgáltatás", Category.HEATING),
            ("Hulladékszállítás", Category.WASTE),
            ("Mobil előfizetés", Category.TELECOMMUNICATIONS),
        ],
    )
    def test_hungarian(self, text: str, expected: Category) -> None:
        assert infer_category(text, Language.HU) == expected

    def test_priority_order(self) -> None:
        assert infer_category("electricity and water", Language.EN) == Category.ELECTRICITY

    def test_short_keyword_must_be_whole_word(self) -> None:
        assert infer_category("Gasoline receipt", Language.EN) == Category.OTHER

    def test_no_keyword(self) -> None:
        assert infer_category("Thank you for your order", Language.EN) == Category.OTHER

    def test_languages_do_not_mix(self) -> None:
        assert infer_category("Electricity", Language.HU) == Category.OTHER
