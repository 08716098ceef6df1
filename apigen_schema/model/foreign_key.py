"""Foreign key model."""

from dataclasses import dataclass
from typing import Optional

from apigen_schema.model.relation_type import ForeignKeyAction
from apigen_schema.naming import entity_name_for, snake_to_camel


@dataclass(frozen=True)
class SqlForeignKey:
    """A single-column foreign key from ``column_name`` to ``referenced_table.referenced_column``."""

    column_name: str
    referenced_table: str
    referenced_column: str = "id"
    name: Optional[str] = None
    on_delete: ForeignKeyAction = ForeignKeyAction.NO_ACTION
    on_update: ForeignKeyAction = ForeignKeyAction.NO_ACTION

    def __post_init__(self):
        object.__setattr__(self, "on_delete", ForeignKeyAction.parse(self.on_delete))
        object.__setattr__(self, "on_update", ForeignKeyAction.parse(self.on_update))

    @property
    def referenced_entity_name(self) -> str:
        return entity_name_for(self.referenced_table)

    @property
    def field_name(self) -> str:
        """Association field name: ``parent_category_id`` -> ``parentCategory``."""
        column = self.column_name
        if column.lower().endswith("_id") and len(column) > 3:
            column = column[:-3]
        return snake_to_camel(column)
