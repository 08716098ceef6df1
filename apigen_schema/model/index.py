"""Index model."""

from dataclasses import dataclass
from typing import Optional, Tuple

from apigen_schema.model.relation_type import IndexType


@dataclass(frozen=True)
class SqlIndex:
    name: Optional[str]
    table_name: str
    columns: Tuple[str, ...] = ()
    unique: bool = False
    type: IndexType = IndexType.BTREE

    def __post_init__(self):
        object.__setattr__(self, "columns", tuple(self.columns))
        object.__setattr__(self, "type", IndexType(self.type))

    def covers_only(self, column_name: str) -> bool:
        """True when the index is on exactly this one column."""
        return len(self.columns) == 1 and self.columns[0].lower() == column_name.lower()
