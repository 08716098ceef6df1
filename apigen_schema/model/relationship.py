"""Inferred associations between tables."""

from dataclasses import dataclass
from typing import Optional

from apigen_schema.model.foreign_key import SqlForeignKey
from apigen_schema.model.relation_type import RelationType
from apigen_schema.model.table import SqlTable


@dataclass(frozen=True)
class TableRelationship:
    """
    A directed association derived from one foreign key.

    ``source_table`` is the side the relationship is read from; for the
    forward side of a foreign key it is the table that owns the key.
    """

    source_table: SqlTable
    target_table: SqlTable
    foreign_key: SqlForeignKey
    relation_type: RelationType

    @property
    def is_self_reference(self) -> bool:
        return self.source_table.name.lower() == self.target_table.name.lower()

    def inverse(self, relation_type: Optional[RelationType] = None) -> "TableRelationship":
        """The same foreign key read from the other table."""
        return TableRelationship(
            source_table=self.target_table,
            target_table=self.source_table,
            foreign_key=self.foreign_key,
            relation_type=relation_type or self.relation_type.inverse,
        )


@dataclass(frozen=True)
class ManyToManyRelation:
    """
    One side of a many-to-many association through a junction table.

    ``join_column`` references the owning table, ``inverse_join_column``
    references ``target_table``.
    """

    junction_table: SqlTable
    join_column: str
    inverse_join_column: str
    target_table: SqlTable

    @property
    def relation_type(self) -> RelationType:
        return RelationType.MANY_TO_MANY
