from collections.abc import Iterable, Mapping

from billparse.extraction.fields import FieldDefinition, FieldId, FieldType
from billparse.logging.logger import Log
from billparse.mapping.models import ResolvedField

DEFAULT_FIELD_DEFINITIONS: tuple[FieldDefinition, ...] = (
    FieldDefinition(FieldId.VENDOR, "issuer_name", FieldType.TEXT, True, 1, "Vendor"),
    FieldDefinition(FieldId.INVOICE_NUMBER, "invoice_number", FieldType.TEXT, True, 2, "Invoice number"),
    FieldDefinition(FieldId.INVOICE_DATE, "invoice_date", FieldType.DATE, True, 3, "Invoice date"),
    FieldDefinition(FieldId.DUE_DATE, "due_date", FieldType.DATE, True, 4, "Due date"),
    FieldDefinition(FieldId.AMOUNT, "total_amount", FieldType.CURRENCY, True, 5, "Amount"),
)


def enabled_definitions(
    definitions: Iterable[FieldDefinition] | None,
) -> list[FieldDefinition]:
    """Enabled definitions in display order, or the defaults when none are enabled."""
    enabled = [d for d in definitions or () if d.enabled]
    if not enabled:
        Log.debug("No enabled field definitions supplied, using defaults")
        enabled = list(DEFAULT_FIELD_DEFINITIONS)
    # stable sort keeps caller order for equal display_order
    return sorted(enabled, key=lambda d: d.display_order)


class FieldMappingResolver:
    """Binds recognized raw values to caller-defined output fields."""

    def resolve(
        self,
        raw_values: Mapping[FieldId, str],
        definitions: Iterable[FieldDefinition] | None = None,
    ) -> list[ResolvedField]:
        resolved: list[ResolvedField] = []
        seen_names: set[str] = set()
        for definition in enabled_definitions(definitions):
            if definition.name in seen_names:
                Log.warning(f"Duplicate output field '{definition.name}' ignored")
                continue
            seen_names.add(definition.name)
            resolved.append(ResolvedField(definition, raw_values.get(definition.field_id)))
        return resolved

    @staticmethod
    def as_field_map(resolved: Iterable[ResolvedField]) -> dict[str, str]:
        """Output name to value for non-empty values, in display order."""
        return {field.name: field.value for field in resolved if field.value}
