from typing import Any

from psycopg.rows import dict_row

from billparse.database.connection import get_connection
from billparse.extraction.fields import FieldDefinition, FieldId, FieldType
from billparse.logging.logger import Log

# Store column names that identify each internal field.
FIELD_NAME_ALIASES: dict[FieldId, tuple[str, ...]] = {
    FieldId.VENDOR: ("issuer_name", "company_name", "provider", "vendor", "merchant"),
    FieldId.AMOUNT: ("total_amount", "bill_amount", "price", "amount", "sum", "cost"),
    FieldId.INVOICE_DATE: ("invoice_date", "issue_date", "bill_date", "date"),
    FieldId.DUE_DATE: ("due_date", "payment_date", "deadline", "due_by"),
    FieldId.ACCOUNT_NUMBER: ("account_number", "account_id", "customer_id", "client_number"),
    FieldId.INVOICE_NUMBER: ("invoice_number", "reference_number", "bill_id", "invoice_id"),
    FieldId.CATEGORY: ("bill_category", "bill_type", "expense_category", "category"),
    FieldId.CUSTOMER_ADDRESS: ("customer_address", "billing_address", "service_address", "address"),
    FieldId.PAYMENT_METHOD: ("payment_method", "payment_type"),
}

_ALIAS_LOOKUP: dict[str, FieldId] = {
    alias: field_id for field_id, aliases in FIELD_NAME_ALIASES.items() for alias in aliases
}


def field_id_for(name: str) -> FieldId | None:
    return _ALIAS_LOOKUP.get(name.strip().lower())


def field_type_for(raw: str | None, field_id: FieldId) -> FieldType:
    try:
        return FieldType((raw or "").strip().lower())
    except ValueError:
        if field_id is FieldId.AMOUNT:
            return FieldType.CURRENCY
        if field_id in (FieldId.INVOICE_DATE, FieldId.DUE_DATE):
            return FieldType.DATE
        return FieldType.TEXT


class FieldDefinitionsRepository:
    """Read-only access to the field_mapping_view."""

    def find_enabled(self, user_id: str) -> list[FieldDefinition]:
        """Fetch a user's enabled field definitions ordered by display order.

        Rows whose name maps to no known field are skipped.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT name, display_name, field_type, column_mapping,
                           display_order, is_enabled
                    FROM field_mapping_view
                    WHERE user_id = %s AND is_enabled = true
                    ORDER BY display_order
                    """,
                    (user_id,),
                )
                rows = cur.fetchall()

        definitions: list[FieldDefinition] = []
        for row in rows:
            definition = self._to_definition(row)
            if definition is None:
                Log.debug(f"Skipping unmapped field definition '{row['name']}' for user {user_id}")
                continue
            definitions.append(definition)
        return definitions

    @staticmethod
    def _to_definition(row: dict[str, Any]) -> FieldDefinition | None:
        field_id = field_id_for(row["name"])
        if field_id is None:
            return None
        return FieldDefinition(
            field_id=field_id,
            name=row["name"],
            field_type=field_type_for(row.get("field_type"), field_id),
            enabled=bool(row.get("is_enabled", True)),
            display_order=int(row.get("display_order") or 0),
            display_name=row.get("display_name") or row["name"],
        )
