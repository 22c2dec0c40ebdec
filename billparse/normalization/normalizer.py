import re

from billparse.extraction.fields import FieldId, FieldType, Language
from billparse.logging.logger import Log
from billparse.mapping.models import ResolvedField
from billparse.normalization.amounts import normalize_amount
from billparse.normalization.categories import infer_category
from billparse.normalization.dates import normalize_date
from billparse.processor.exceptions import FieldExtractionFailure

_INNER_WHITESPACE_RE = re.compile(r"\s+")
_TRAILING_PUNCTUATION = " \t:;,|"


class ValueNormalizer:
    """Canonicalizes resolved values according to their declared field type."""

    def normalize(
        self,
        resolved: list[ResolvedField],
        text: str,
        language: Language,
    ) -> list[ResolvedField]:
        """Return a new list; fields that fail to normalize lose their value."""
        normalized: list[ResolvedField] = []
        for field in resolved:
            try:
                value = self.normalize_value(field, text, language)
            except FieldExtractionFailure as exc:
                Log.warning(str(exc))
                value = None
            normalized.append(ResolvedField(field.definition, value))
        return normalized

    def normalize_value(
        self,
        field: ResolvedField,
        text: str,
        language: Language,
    ) -> str | None:
        """Raises FieldExtractionFailure when the value cannot be processed."""
        if field.field_id is FieldId.CATEGORY:
            return infer_category(text, language).value
        if field.value is None:
            return None
        try:
            match field.field_type:
                case FieldType.CURRENCY:
                    return normalize_amount(field.value, language)
                case FieldType.DATE:
                    return normalize_date(field.value, language)
                case FieldType.TEXT:
                    return self.clean_text(field.value)
        except Exception as exc:
            raise FieldExtractionFailure(field.name, str(exc)) from exc
        raise FieldExtractionFailure(field.name, f"unsupported field type {field.field_type!r}")

    @staticmethod
    def clean_text(value: str) -> str | None:
        cleaned = _INNER_WHITESPACE_RE.sub(" ", value).strip(_TRAILING_PUNCTUATION)
        return cleaned or None
