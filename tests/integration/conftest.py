import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from billparse.config.settings import Settings
from billparse.database.connection import close_pool, get_connection, init_pool

FIELD_MAPPING_ROWS = [
    ("user-integration", "total_amount", "Amount", "currency", "total_amount", 1, True),
    ("user-integration", "due_date", "Due date", "date", "due_date", 2, True),
    ("user-integration", "favourite_colour", "Colour", "text", "colour", 3, True),
    ("user-integration", "issuer_name", "Vendor", "text", "issuer_name", 4, False),
]


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "billparse_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute("SELECT 1")
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run these tests")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def seed_field_mappings(db_conn: psycopg.Connection[Any]) -> Generator[str, None, None]:
    """Create a throwaway field_mapping_view table with one user's rows."""
    with db_conn.cursor() as cur:
        cur.execute("SELECT to_regclass('field_mapping_view')")
        row = cur.fetchone()
    if row is not None and row[0] is not None:
        pytest.skip("field_mapping_view already exists in the test DB; not overwriting it")

    with db_conn.cursor() as cur:
        cur.execute(
            """
            CREATE TABLE field_mapping_view (
                user_id text NOT NULL,
                name text NOT NULL,
                display_name text,
                field_type text,
                column_mapping text,
                display_order integer,
                is_enabled boolean NOT NULL DEFAULT true
            )
            """
        )
        cur.executemany(
            """
            INSERT INTO field_mapping_view
            (user_id, name, display_name, field_type, column_mapping, display_order, is_enabled)
            VALUES (%s, %s, %s, %s, %s, %s, %s)
            """,
            FIELD_MAPPING_ROWS,
        )
    db_conn.commit()
    try:
        yield "user-integration"
    finally:
        with db_conn.cursor() as cur:
            cur.execute("DROP TABLE IF EXISTS field_mapping_view")
        db_conn.commit()
