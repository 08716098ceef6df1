"""
Unit tests for per-table classification and lookups.
"""

from apigen_schema.conventions import SchemaConventions
from apigen_schema.model import SqlColumn, SqlForeignKey, SqlIndex, SqlTable


class TestJunctionDetection:
    """Test junction tables: two foreign keys forming the whole primary key."""

    def test_classic_junction(self, make_table):
        table = make_table(
            "user_roles",
            fks=[("user_id", "users"), ("role_id", "roles")],
            pk=("user_id", "role_id"),
        )
        assert table.is_junction_table()

    def test_pk_comparison_is_case_insensitive(self, make_table):
        table = make_table(
            "user_roles",
            fks=[("USER_ID", "users"), ("role_id", "roles")],
            pk=("user_id", "ROLE_ID"),
        )
        assert table.is_junction_table()

    def test_surrogate_key_is_not_junction(self, make_table):
        table = make_table("enrollments", fks=[("student_id", "students"), ("course_id", "courses")])
        assert not table.is_junction_table()

    def test_junction_with_payload_column_still_junction(self, make_table):
        table = make_table(
            "user_roles",
            fks=[("user_id", "users"), ("role_id", "roles")],
            pk=("user_id", "role_id"),
            extra=["granted_at"],
        )
        assert table.is_junction_table()

    def test_three_foreign_keys(self, make_table):
        table = make_table(
            "assignments",
            fks=[("a_id", "as"), ("b_id", "bs"), ("c_id", "cs")],
            pk=("a_id", "b_id"),
        )
        assert not table.is_junction_table()

    def test_pk_not_matching_fk_columns(self, make_table):
        table = make_table(
            "links",
            fks=[("source_id", "nodes"), ("target_id", "nodes")],
            pk=("source_id", "position"),
        )
        assert not table.is_junction_table()


class TestPrimaryKey:
    """Test primary-key column derivation."""

    def test_derived_from_flagged_columns(self):
        table = SqlTable("users", columns=[SqlColumn("id", "BIGINT", primary_key=True), SqlColumn("name", "TEXT")])
        assert table.primary_key_columns == ("id",)

    def test_explicit_list_wins(self):
        table = SqlTable(
            "users",
            columns=[SqlColumn("id", "BIGINT", primary_key=True), SqlColumn("code", "TEXT")],
            primary_key_columns=["code"],
        )
        assert table.primary_key_columns == ("code",)

    def test_no_primary_key(self):
        assert SqlTable("logs", columns=[SqlColumn("line", "TEXT")]).primary_key_columns == ()


class TestDerivedNames:
    """Test entity, variable and module names."""

    def test_entity_name(self, make_table):
        assert make_table("order_items").entity_name == "OrderItem"

    def test_entity_variable_name(self, make_table):
        assert make_table("order_items").entity_variable_name == "orderItem"

    def test_module_name(self, make_table):
        assert make_table("Order_Items").module_name == "orderitems"


class TestLookups:
    """Test column and foreign key lookups."""

    def test_get_column_case_insensitive(self, make_table):
        table = make_table("users", extra=["email"])
        assert table.get_column("EMAIL").name == "email"

    def test_get_column_missing(self, make_table):
        assert make_table("users").get_column("nope") is None

    def test_foreign_key_for(self, make_table):
        table = make_table("orders", fks=[("customer_id", "customers")])
        assert table.foreign_key_for("Customer_Id").referenced_table == "customers"
        assert table.foreign_key_for("id") is None


class TestUniqueColumns:
    """Test one-to-one detection support."""

    def test_flagged_unique(self, make_table):
        table = make_table("profiles", fks=[("user_id", "users")], unique=("user_id",))
        assert table.is_unique_column("user_id")

    def test_sole_primary_key(self, make_table):
        assert make_table("users").is_unique_column("id")

    def test_part_of_composite_key(self, make_table):
        table = make_table("user_roles", fks=[("user_id", "users"), ("role_id", "roles")], pk=("user_id", "role_id"))
        assert not table.is_unique_column("user_id")

    def test_single_column_unique_constraint(self, make_table):
        table = make_table("profiles", fks=[("user_id", "users")], unique_constraints=["user_id"])
        assert table.unique_constraints == (("user_id",),)
        assert table.is_unique_column("user_id")

    def test_composite_unique_constraint(self, make_table):
        table = make_table("profiles", fks=[("user_id", "users")], unique_constraints=[("user_id", "kind")])
        assert not table.is_unique_column("user_id")

    def test_unique_index(self, make_table):
        index = SqlIndex("ux_profiles_user", "profiles", ["user_id"], unique=True)
        table = make_table("profiles", fks=[("user_id", "users")], indexes=[index])
        assert table.is_unique_column("user_id")

    def test_plain_fk_column(self, make_table):
        table = make_table("orders", fks=[("customer_id", "customers")])
        assert not table.is_unique_column("customer_id")


class TestBaseColumns:
    """Test base-entity detection and business columns."""

    def test_extends_base(self, make_table):
        assert make_table("users", extra=["created_at"]).extends_base()
        assert make_table("users", extra=["estado"]).extends_base()
        assert not make_table("users", extra=["name"]).extends_base()

    def test_business_columns(self):
        table = SqlTable(
            "orders",
            columns=[
                SqlColumn("id", "BIGINT", primary_key=True),
                SqlColumn("customer_id", "BIGINT"),
                SqlColumn("total", "DECIMAL(10,2)"),
                SqlColumn("created_at", "TIMESTAMP"),
                SqlColumn("Updated_By", "VARCHAR(50)"),
            ],
            foreign_keys=[SqlForeignKey("customer_id", "customers")],
        )
        assert [c.name for c in table.business_columns()] == ["total"]

    def test_custom_conventions(self, make_table):
        conventions = SchemaConventions(base_columns=("tenant_id",), base_marker_columns=("tenant_id",))
        table = make_table("users", extra=["tenant_id", "created_at"])
        assert table.extends_base(conventions)
        assert [c.name for c in table.business_columns(conventions)] == ["created_at"]
