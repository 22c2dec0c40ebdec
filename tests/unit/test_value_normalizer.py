from unittest.mock import patch

import pytest

from billparse.extraction.fields import FieldDefinition, FieldId, FieldType, Language
from billparse.mapping.models import ResolvedField
from billparse.normalization.normalizer import ValueNormalizer
from billparse.processor.exceptions import FieldExtractionFailure

AMOUNT = FieldDefinition(FieldId.AMOUNT, "total_amount", FieldType.CURRENCY)
DUE = FieldDefinition(FieldId.DUE_DATE, "due_date", FieldType.DATE)
VENDOR = FieldDefinition(FieldId.VENDOR, "issuer_name", FieldType.TEXT)
CATEGORY = FieldDefinition(FieldId.CATEGORY, "bill_category", FieldType.TEXT)


class TestNormalizeValue:
    def test_currency(self) -> None:
        field = ResolvedField(AMOUNT, "12.345")
        assert ValueNormalizer().normalize_value(field, "", Language.HU) == "12345"

    def test_date(self) -> None:
        field = ResolvedField(DUE, "2024.03.15.")
        assert ValueNormalizer().normalize_value(field, "", Language.HU) == "2024-03-15"

    def test_ambiguous_date_kept_raw(self) -> None:
        field = ResolvedField(DUE, "03/04/2024")
        assert ValueNormalizer().normalize_value(field, "", Language.EN) == "03/04/2024"

    def test_text_is_cleaned(self) -> None:
        field = ResolvedField(VENDOR, "  ACME \t Power   Ltd ;")
        assert ValueNormalizer().normalize_value(field, "", Language.EN) == "ACME Power Ltd"

    def test_category_inferred_from_text(self) -> None:
        field = ResolvedField(CATEGORY, None)
        value = ValueNormalizer().normalize_value(field, "Electricity usage 420 kWh", Language.EN)
        assert value == "electricity"

    def test_missing_value_stays_missing(self) -> None:
        assert ValueNormalizer().normalize_value(ResolvedField(AMOUNT, None), "", Language.EN) is None

    @patch("billparse.normalization.normalizer.normalize_amount")
    def test_failure_is_wrapped(self, mock_normalize) -> None:  # type: ignore[no-untyped-def]
        mock_normalize.side_effect = RuntimeError("boom")
        with pytest.raises(FieldExtractionFailure, match="total_amount") as exc_info:
            ValueNormalizer().normalize_value(ResolvedField(AMOUNT, "1"), "", Language.EN)
        assert exc_info.value.field_name == "total_amount"
        assert exc_info.value.fatal is False


class TestNormalize:
    def test_returns_new_list_in_order(self) -> None:
        resolved = [ResolvedField(VENDOR, "MVM"), ResolvedField(AMOUNT, "12 345 Ft")]
        result = ValueNormalizer().normalize(resolved, "", Language.HU)
        assert result is not resolved
        assert [(f.name, f.value) for f in result] == [("issuer_name", "MVM"), ("total_amount", "12345")]
        assert resolved[1].value == "12 345 Ft"

    @patch("billparse.normalization.normalizer.normalize_amount")
    def test_failed_field_is_omitted_others_kept(self, mock_normalize) -> None:  # type: ignore[no-untyped-def]
        mock_normalize.side_effect = RuntimeError("boom")
        resolved = [ResolvedField(AMOUNT, "12.345"), ResolvedField(VENDOR, "MVM")]
        result = ValueNormalizer().normalize(resolved, "", Language.HU)
        assert result[0].value is None
        assert result[1].value == "MVM"


class TestCleanText:
    def test_blank_becomes_none(self) -> None:
        assert ValueNormalizer.clean_text(" : ; ") is None
