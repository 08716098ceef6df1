"""Table model and per-table classification."""

from dataclasses import dataclass
from typing import List, Optional, Tuple

from apigen_schema.conventions import DEFAULT_CONVENTIONS, SchemaConventions
from apigen_schema.model.column import SqlColumn
from apigen_schema.model.foreign_key import SqlForeignKey
from apigen_schema.model.index import SqlIndex
from apigen_schema.naming import entity_name_for, lower_first


@dataclass(frozen=True)
class SqlTable:
    """
    A parsed table.

    ``primary_key_columns`` falls back to the columns flagged ``primary_key``
    when it is not given explicitly. ``unique_constraints`` holds one tuple of
    column names per UNIQUE constraint; a bare string is a single-column one.
    """

    name: str
    columns: Tuple[SqlColumn, ...] = ()
    foreign_keys: Tuple[SqlForeignKey, ...] = ()
    primary_key_columns: Tuple[str, ...] = ()
    indexes: Tuple[SqlIndex, ...] = ()
    unique_constraints: Tuple[Tuple[str, ...], ...] = ()
    check_constraints: Tuple[str, ...] = ()
    schema: Optional[str] = None
    comment: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "foreign_keys", tuple(self.foreign_keys))
        object.__setattr__(self, "indexes", tuple(self.indexes))
        object.__setattr__(self, "check_constraints", tuple(self.check_constraints))
        object.__setattr__(
            self,
            "unique_constraints",
            tuple(
                (uc,) if isinstance(uc, str) else tuple(uc)
                for uc in self.unique_constraints
            ),
        )

        pk_columns = tuple(self.primary_key_columns)
        if not pk_columns:
            pk_columns = tuple(c.name for c in self.columns if c.primary_key)
        object.__setattr__(self, "primary_key_columns", pk_columns)

    # ------------------------------------------------------------------------------
    # Classification

    def is_junction_table(self) -> bool:
        """
        A junction table has exactly two foreign keys whose columns together
        make up its whole (two-column) primary key.
        """
        if len(self.foreign_keys) != 2 or len(self.primary_key_columns) != 2:
            return False

        fk_columns = {fk.column_name.lower() for fk in self.foreign_keys}
        pk_columns = {c.lower() for c in self.primary_key_columns}
        return fk_columns == pk_columns

    def extends_base(self, conventions: SchemaConventions = DEFAULT_CONVENTIONS) -> bool:
        """True when the table carries the standard base-entity columns."""
        return any(conventions.is_base_marker(c.name) for c in self.columns)

    # ------------------------------------------------------------------------------
    # Derived names

    @property
    def entity_name(self) -> str:
        return entity_name_for(self.name)

    @property
    def entity_variable_name(self) -> str:
        return lower_first(self.entity_name)

    @property
    def module_name(self) -> str:
        return self.name.lower().replace("_", "")

    # ------------------------------------------------------------------------------
    # Lookups

    def get_column(self, column_name: str) -> Optional[SqlColumn]:
        lower = column_name.lower()
        for column in self.columns:
            if column.name.lower() == lower:
                return column
        return None

    def foreign_key_for(self, column_name: str) -> Optional[SqlForeignKey]:
        lower = column_name.lower()
        for fk in self.foreign_keys:
            if fk.column_name.lower() == lower:
                return fk
        return None

    def is_primary_key_column(self, column_name: str) -> bool:
        lower = column_name.lower()
        return any(pk.lower() == lower for pk in self.primary_key_columns)

    def is_unique_column(self, column_name: str) -> bool:
        """
        True when no two rows can share a value in this column: the column is
        flagged unique, is the sole primary-key column, or is covered by a
        single-column unique constraint or unique index.
        """
        column = self.get_column(column_name)
        if column is not None and column.unique:
            return True

        lower = column_name.lower()
        if len(self.primary_key_columns) == 1 and self.primary_key_columns[0].lower() == lower:
            return True

        for constraint in self.unique_constraints:
            if len(constraint) == 1 and constraint[0].lower() == lower:
                return True

        return any(index.unique and index.covers_only(column_name) for index in self.indexes)

    def business_columns(self, conventions: SchemaConventions = DEFAULT_CONVENTIONS) -> List[SqlColumn]:
        """Columns that become plain entity fields: not PK, not FK, not inherited base columns."""
        fk_columns = {fk.column_name.lower() for fk in self.foreign_keys}
        return [
            c for c in self.columns
            if not c.primary_key
            and not self.is_primary_key_column(c.name)
            and c.name.lower() not in fk_columns
            and not conventions.is_base_column(c.name)
        ]
