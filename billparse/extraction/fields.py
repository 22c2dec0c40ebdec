from dataclasses import dataclass
from enum import StrEnum


class Language(StrEnum):
    EN = "en"
    HU = "hu"

    @classmethod
    def parse(cls, value: "str | Language") -> "Language":
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"Unsupported language '{value}'. Choose from: {[m.value for m in cls]}"
            ) from None


class FieldId(StrEnum):
    VENDOR = "vendor"
    INVOICE_NUMBER = "invoice_number"
    INVOICE_DATE = "invoice_date"
    DUE_DATE = "due_date"
    AMOUNT = "amount"
    ACCOUNT_NUMBER = "account_number"
    CUSTOMER_ADDRESS = "customer_address"
    PAYMENT_METHOD = "payment_method"
    CATEGORY = "category"


class FieldType(StrEnum):
    TEXT = "text"
    CURRENCY = "currency"
    DATE = "date"


@dataclass(frozen=True, slots=True)
class FieldDefinition:
    """Maps an internal field onto a caller-chosen output name and type."""

    field_id: FieldId
    name: str
    field_type: FieldType = FieldType.TEXT
    enabled: bool = True
    display_order: int = 0
    display_name: str = ""
