from dataclasses import dataclass

from billparse.extraction.fields import FieldDefinition, FieldId, FieldType


@dataclass(frozen=True, slots=True)
class ResolvedField:
    """A raw value bound to the output definition that asked for it."""

    definition: FieldDefinition
    value: str | None

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def field_id(self) -> FieldId:
        return self.definition.field_id

    @property
    def field_type(self) -> FieldType:
        return self.definition.field_type
