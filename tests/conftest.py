"""
Pytest configuration and shared fixtures for the schema-model test suite.
"""

import shutil
import tempfile
from pathlib import Path

import pytest

from apigen_schema.gen_logging import get_logger
from apigen_schema.model import SqlColumn, SqlForeignKey, SqlSchema, SqlTable


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture(scope="session")
def fixtures_dir(project_root):
    """Return the directory of OpenAPI and conventions fixture files."""
    return project_root / "tests" / "fixtures"


@pytest.fixture
def temp_output_dir():
    """Create a temporary directory for files written by a test."""
    temp_dir = tempfile.mkdtemp(prefix="apigen_schema_test_")
    yield Path(temp_dir)
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def propagate_schema_logs():
    """Let caplog see records from the apigen.schema hierarchy."""
    root = get_logger()
    previous = root.propagate
    root.propagate = True
    yield
    root.propagate = previous


# ------------------------------------------------------------------------------
# Model factories

@pytest.fixture
def make_table():
    """
    Build a table with an ``id`` primary key unless ``pk`` says otherwise.

    make_table("orders", fks=[("customer_id", "customers")], extra=["total"])
    """

    def _make(name, fks=(), extra=(), pk=("id",), unique=(), **kwargs):
        columns = [SqlColumn(c, "BIGINT", nullable=False, primary_key=True) for c in pk]
        for column_name, _ in fks:
            if column_name not in pk:
                columns.append(
                    SqlColumn(column_name, "BIGINT", unique=column_name in unique)
                )
        for column_name in extra:
            columns.append(SqlColumn(column_name, "VARCHAR(100)"))
        foreign_keys = [SqlForeignKey(c, t) for c, t in fks]
        return SqlTable(
            name=name,
            columns=columns,
            foreign_keys=foreign_keys,
            primary_key_columns=pk,
            **kwargs,
        )

    return _make


@pytest.fixture
def shop_schema(make_table):
    """
    customers <- orders <- order_items -> products, products <-> tags through
    product_tags, plus a self-referencing categories table and an audit table.
    """
    tables = [
        make_table("customers", extra=["email", "created_at"]),
        make_table("orders", fks=[("customer_id", "customers")], extra=["status"]),
        make_table(
            "order_items",
            fks=[("order_id", "orders"), ("product_id", "products")],
        ),
        make_table("products", fks=[("category_id", "categories")], extra=["name"]),
        make_table("categories", fks=[("parent_id", "categories")], extra=["name"]),
        make_table("tags", extra=["label"]),
        make_table(
            "product_tags",
            fks=[("product_id", "products"), ("tag_id", "tags")],
            pk=("product_id", "tag_id"),
        ),
        make_table("orders_aud", pk=("id", "rev")),
    ]
    return SqlSchema(tables=tables, name="shop")
