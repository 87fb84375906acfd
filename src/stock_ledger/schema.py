"""
Create or drop the ledger tables.

Production databases are expected to carry the schema already; this is for
development databases and the test suite.
"""

from __future__ import annotations

from django.db import DEFAULT_DB_ALIAS, connections

from .models import BorrowingRecord, Product, ReturningRecord

# Dependency order: parents before children.
MODELS = (Product, BorrowingRecord, ReturningRecord)


def create_tables(using: str = DEFAULT_DB_ALIAS) -> list[str]:
    """Create the tables that do not exist yet and return their names."""
    connection = connections[using]
    existing = set(connection.introspection.table_names())
    created = []

    with connection.schema_editor() as editor:
        for model in MODELS:
            if model._meta.db_table not in existing:
                editor.create_model(model)
                created.append(model._meta.db_table)

    return created


def drop_tables(using: str = DEFAULT_DB_ALIAS) -> None:
    connection = connections[using]
    existing = set(connection.introspection.table_names())

    with connection.schema_editor() as editor:
        for model in reversed(MODELS):
            if model._meta.db_table in existing:
                editor.delete_model(model)
