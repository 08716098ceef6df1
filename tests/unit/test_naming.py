"""
Unit tests for table, entity and field naming helpers.
"""

import pytest

from apigen_schema.naming import (
    camel_to_snake,
    entity_name_for,
    snake_to_camel,
    snake_to_pascal,
    to_plural,
    to_singular,
)


class TestSingular:
    """Test plural table names reduced to singular entity names."""

    @pytest.mark.parametrize(
        "plural, singular",
        [
            ("users", "user"),
            ("categories", "category"),
            ("addresses", "address"),
            ("boxes", "box"),
            ("branches", "branch"),
            ("wishes", "wish"),
            ("statuses", "status"),
            ("address", "address"),
            ("data", "data"),
            ("", ""),
        ],
    )
    def test_to_singular(self, plural, singular):
        assert to_singular(plural) == singular


class TestPlural:
    """Test singular names pluralized into table names."""

    @pytest.mark.parametrize(
        "singular, plural",
        [
            ("user", "users"),
            ("category", "categories"),
            ("day", "days"),
            ("box", "boxes"),
            ("branch", "branches"),
            ("status", "statuses"),
            ("", ""),
        ],
    )
    def test_to_plural(self, singular, plural):
        assert to_plural(singular) == plural


class TestCaseConversion:
    """Test snake/camel/pascal conversions."""

    def test_snake_to_pascal(self):
        assert snake_to_pascal("order_items") == "OrderItems"

    def test_snake_to_pascal_collapses_underscores(self):
        assert snake_to_pascal("user__roles") == "UserRoles"

    def test_snake_to_pascal_upper_case_input(self):
        assert snake_to_pascal("ORDER_ITEMS") == "OrderItems"

    def test_snake_to_camel(self):
        assert snake_to_camel("created_by_id") == "createdById"

    def test_camel_to_snake(self):
        assert camel_to_snake("OrderItem") == "order_item"
        assert camel_to_snake("firstName") == "first_name"

    def test_empty_strings(self):
        assert snake_to_pascal("") == ""
        assert snake_to_camel("") == ""
        assert camel_to_snake("") == ""


class TestEntityName:
    """Test entity names derived from table names."""

    def test_plural_snake_case(self):
        assert entity_name_for("order_items") == "OrderItem"

    def test_case_insensitive(self):
        assert entity_name_for("ORDER_ITEMS") == entity_name_for("order_items")

    def test_singular_table_name(self):
        assert entity_name_for("user") == "User"
