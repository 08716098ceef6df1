"""
Schema model: tables, columns, keys and the relationships inferred from them.
"""

from apigen_schema.model.column import SqlColumn
from apigen_schema.model.foreign_key import SqlForeignKey
from apigen_schema.model.function import SqlFunction, SqlParameter
from apigen_schema.model.index import SqlIndex
from apigen_schema.model.relation_type import (
    ForeignKeyAction,
    FunctionType,
    IndexType,
    RelationType,
)
from apigen_schema.model.relationship import ManyToManyRelation, TableRelationship
from apigen_schema.model.schema import GLOBAL_FUNCTIONS_KEY, SqlSchema
from apigen_schema.model.table import SqlTable

__all__ = [
    "SqlColumn",
    "SqlForeignKey",
    "SqlFunction",
    "SqlParameter",
    "SqlIndex",
    "SqlTable",
    "SqlSchema",
    "TableRelationship",
    "ManyToManyRelation",
    "RelationType",
    "ForeignKeyAction",
    "IndexType",
    "FunctionType",
    "GLOBAL_FUNCTIONS_KEY",
]
