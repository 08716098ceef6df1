"""Stored function / procedure model."""

from dataclasses import dataclass
from typing import Optional, Tuple

from apigen_schema.model.relation_type import FunctionType
from apigen_schema.types import map_sql_type


@dataclass(frozen=True)
class SqlParameter:
    name: str
    sql_type: str
    mode: str = "IN"

    @property
    def semantic_type(self) -> str:
        return map_sql_type(self.sql_type)


@dataclass(frozen=True)
class SqlFunction:
    name: str
    type: FunctionType = FunctionType.FUNCTION
    parameters: Tuple[SqlParameter, ...] = ()
    return_type: Optional[str] = None
    language: str = "sql"
    body: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "parameters", tuple(self.parameters))
        object.__setattr__(self, "type", FunctionType(self.type))
