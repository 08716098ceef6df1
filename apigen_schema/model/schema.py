"""
Parsed schema: the root of the model.

An SqlSchema is what the generators consume. It classifies its tables into
entity, junction and audit tables, infers the forward (many-to-one) side of
every foreign key and reports consistency problems without raising. The
inverse and many-to-many sides live in apigen_schema.graph.
"""

from collections import OrderedDict
from dataclasses import dataclass
from functools import cached_property
from typing import Dict, List, Optional, Tuple

from apigen_schema.conventions import DEFAULT_CONVENTIONS, SchemaConventions
from apigen_schema.gen_logging import get_logger
from apigen_schema.model.function import SqlFunction
from apigen_schema.model.index import SqlIndex
from apigen_schema.model.relation_type import RelationType
from apigen_schema.model.relationship import TableRelationship
from apigen_schema.model.table import SqlTable
from apigen_schema.naming import to_singular

logger = get_logger(__name__)

GLOBAL_FUNCTIONS_KEY = "_global"


@dataclass(frozen=True)
class SqlSchema:
    tables: Tuple[SqlTable, ...] = ()
    name: Optional[str] = None
    source_file: Optional[str] = None
    functions: Tuple[SqlFunction, ...] = ()
    standalone_indexes: Tuple[SqlIndex, ...] = ()
    extensions: Tuple[str, ...] = ()
    parse_errors: Tuple[str, ...] = ()
    conventions: SchemaConventions = DEFAULT_CONVENTIONS

    def __post_init__(self):
        object.__setattr__(self, "tables", tuple(self.tables))
        object.__setattr__(self, "functions", tuple(self.functions))
        object.__setattr__(self, "standalone_indexes", tuple(self.standalone_indexes))
        object.__setattr__(self, "extensions", tuple(self.extensions))
        object.__setattr__(self, "parse_errors", tuple(self.parse_errors))
        if self.conventions is None:
            object.__setattr__(self, "conventions", DEFAULT_CONVENTIONS)

    @cached_property
    def _tables_by_name(self) -> Dict[str, SqlTable]:
        index = {}
        for table in self.tables:
            # First declaration wins on duplicate names
            index.setdefault(table.name.lower(), table)
        return index

    # ------------------------------------------------------------------------------
    # Table lookup and classification

    def get_table(self, name: str) -> Optional[SqlTable]:
        if name is None:
            return None
        return self._tables_by_name.get(name.lower())

    def is_audit_table(self, table) -> bool:
        """Accepts a table or a table name."""
        name = table.name if isinstance(table, SqlTable) else table
        return self.conventions.is_audit_table_name(name)

    def get_entity_tables(self) -> List[SqlTable]:
        """Tables that become full entities: not junction, not audit."""
        return [
            t for t in self.tables
            if not t.is_junction_table() and not self.is_audit_table(t)
        ]

    def get_junction_tables(self) -> List[SqlTable]:
        return [t for t in self.tables if t.is_junction_table()]

    def get_audit_tables(self) -> List[SqlTable]:
        return [t for t in self.tables if self.is_audit_table(t)]

    # ------------------------------------------------------------------------------
    # Relationships

    def get_all_relationships(self) -> List[TableRelationship]:
        """
        Forward side of every foreign key held by a non-junction table.

        Each resolvable key yields one MANY_TO_ONE relationship from the owning
        table to the referenced table. Keys whose referenced table is not in
        the schema are skipped; validate() reports them.
        """
        relationships = []
        for table in self.tables:
            if table.is_junction_table():
                continue
            for fk in table.foreign_keys:
                target = self.get_table(fk.referenced_table)
                if target is None:
                    logger.debug(
                        f"Skipping foreign key {table.name}.{fk.column_name}: "
                        f"table '{fk.referenced_table}' not found"
                    )
                    continue
                relationships.append(
                    TableRelationship(
                        source_table=table,
                        target_table=target,
                        foreign_key=fk,
                        relation_type=RelationType.MANY_TO_ONE,
                    )
                )
        return relationships

    # ------------------------------------------------------------------------------
    # Grouping

    def get_tables_by_module(self) -> Dict[str, List[SqlTable]]:
        modules = OrderedDict()
        for table in self.get_entity_tables():
            modules.setdefault(table.module_name, []).append(table)
        return dict(modules)

    def get_functions_by_table(self) -> Dict[str, List[SqlFunction]]:
        """
        Group functions by the table they appear to operate on.

        ``get_user_by_id`` lands under ``users``; functions that name no table
        are grouped under "_global".
        """
        grouped = OrderedDict()
        for function in self.functions:
            grouped.setdefault(self._table_for_function(function.name), []).append(function)
        return dict(grouped)

    def _table_for_function(self, function_name: str) -> str:
        lower = function_name.lower()
        for table in self.tables:
            table_name = table.name.lower()
            if to_singular(table_name) in lower:
                return table_name
        return GLOBAL_FUNCTIONS_KEY

    # ------------------------------------------------------------------------------
    # Validation

    def validate(self) -> List[str]:
        """Human-readable consistency issues; empty when the schema is clean."""
        from apigen_schema.validation import validate_schema

        return validate_schema(self)
