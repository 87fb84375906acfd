"""
Test configuration.

Django is configured at import time, before any test module imports the
models. By default the suite runs against an in-memory SQLite database.
Set TEST_DATABASE_URL to a PostgreSQL URL to run it against a real server;
this also enables the row-lock concurrency tests. The ledger tables are
created for the session and dropped afterwards, so point it at a scratch
database.
"""

import os
from urllib.parse import urlparse

import pytest

from stock_ledger import conf


def _test_database_url() -> str:
    url = os.environ.get("TEST_DATABASE_URL")
    if url and urlparse(url).scheme in {"postgres", "postgresql"}:
        return url
    return "sqlite:///:memory:"


TEST_DATABASE_URL = _test_database_url()
USING_POSTGRES = urlparse(TEST_DATABASE_URL).scheme != "sqlite"

conf.configure(env={"DATABASE_URL": TEST_DATABASE_URL, "LOG_LEVEL": "DEBUG"})


@pytest.fixture(scope="session")
def tables():
    from stock_ledger.schema import create_tables, drop_tables

    create_tables()
    yield
    drop_tables()


@pytest.fixture
def db(tables):
    """Empty ledger tables for one test."""
    from stock_ledger.models import BorrowingRecord, Product, ReturningRecord

    yield
    ReturningRecord.objects.all().delete()
    BorrowingRecord.objects.all().delete()
    Product.objects.all().delete()


@pytest.fixture
def make_product(db):
    from stock_ledger.models import Product

    def make(name: str = "Drill", stock: int = 5):
        return Product.objects.create(product_name=name, current_stock=stock)

    return make


@pytest.fixture
def postgres_only():
    if not USING_POSTGRES:
        pytest.skip("TEST_DATABASE_URL is not a PostgreSQL URL; skipping row-lock tests.")
