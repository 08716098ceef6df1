"""
Relationship graph for the schema model using NetworkX.

Nodes are tables, edges are foreign keys (one edge per key, hence a
MultiDiGraph). An edge points from the table that owns the key to the table
it references, so a table depends on everything it can reach.

On top of the forward relationships inferred by SqlSchema, the graph answers
the questions a generator asks while emitting one entity:
- which collections point back at it (inverse side of many-to-one keys)
- which many-to-many associations it takes part in through junction tables
- in which order tables can be created
"""

import re
from typing import Dict, List, Optional

import networkx as nx

from apigen_schema.errors import SchemaCycleError
from apigen_schema.gen_logging import get_logger
from apigen_schema.model import (
    ManyToManyRelation,
    RelationType,
    SqlSchema,
    SqlTable,
    TableRelationship,
)

logger = get_logger(__name__)


class RelationshipGraph:
    """
    Foreign-key graph over one schema.
    Provides inverse and many-to-many lookups, cycle detection and ordering.
    """

    def __init__(self, schema: SqlSchema):
        self.schema = schema
        self.graph = nx.MultiDiGraph()
        self._relationships = schema.get_all_relationships()
        self._build_graph()

    def _build_graph(self):
        """Add every table as a node and every resolvable foreign key as an edge."""
        for table in self.schema.tables:
            canonical = self.schema.get_table(table.name)
            if canonical.name in self.graph:
                continue
            self.graph.add_node(
                canonical.name,
                table=canonical,
                junction=canonical.is_junction_table(),
                audit=self.schema.is_audit_table(canonical),
            )

        for table in self.schema.tables:
            owner = self.schema.get_table(table.name)
            for fk in table.foreign_keys:
                target = self.schema.get_table(fk.referenced_table)
                if target is None:
                    continue
                self.graph.add_edge(
                    owner.name,
                    target.name,
                    key=fk.column_name.lower(),
                    fk=fk,
                )

    def _resolve(self, table) -> Optional[SqlTable]:
        name = table.name if isinstance(table, SqlTable) else table
        return self.schema.get_table(name)

    # ------------------------------------------------------------------------------
    # Relationship lookups

    def relationships_from(self, table) -> List[TableRelationship]:
        """Forward (many-to-one) relationships owned by the table."""
        resolved = self._resolve(table)
        if resolved is None:
            return []
        return self.relationships_by_table().get(resolved.name, [])

    def relationships_by_table(self) -> Dict[str, List[TableRelationship]]:
        grouped = {}
        for rel in self._relationships:
            grouped.setdefault(rel.source_table.name, []).append(rel)
        return grouped

    def inverse_relationships(self, table) -> List[TableRelationship]:
        """
        The other side of every relationship pointing at the table.

        Junction tables are excluded as sources; they surface through
        many_to_many_relations() instead. The inverse is ONE_TO_ONE when the
        key column is unique in its owning table, ONE_TO_MANY otherwise.
        """
        resolved = self._resolve(table)
        if resolved is None:
            return []

        inverses = []
        for rel in self._relationships:
            if rel.target_table.name.lower() != resolved.name.lower():
                continue
            if rel.source_table.is_junction_table():
                continue
            if rel.source_table.is_unique_column(rel.foreign_key.column_name):
                relation_type = RelationType.ONE_TO_ONE
            else:
                relation_type = RelationType.ONE_TO_MANY
            inverses.append(rel.inverse(relation_type))
        return inverses

    def many_to_many_relations(self, table) -> List[ManyToManyRelation]:
        """
        Many-to-many associations of the table, one per junction table that
        references it. Junctions whose other side is missing are skipped.
        """
        resolved = self._resolve(table)
        if resolved is None:
            return []

        lower = resolved.name.lower()
        relations = []
        for junction in self.schema.get_junction_tables():
            first, second = junction.foreign_keys
            if first.referenced_table.lower() == lower:
                this_fk, other_fk = first, second
            elif second.referenced_table.lower() == lower:
                this_fk, other_fk = second, first
            else:
                continue

            other_table = self.schema.get_table(other_fk.referenced_table)
            if other_table is None:
                logger.debug(
                    f"Skipping junction '{junction.name}': table "
                    f"'{other_fk.referenced_table}' not found"
                )
                continue

            relations.append(
                ManyToManyRelation(
                    junction_table=junction,
                    join_column=this_fk.column_name,
                    inverse_join_column=other_fk.column_name,
                    target_table=other_table,
                )
            )
        return relations

    # ------------------------------------------------------------------------------
    # Ordering

    def _dependency_digraph(self) -> nx.DiGraph:
        """Simple digraph of the foreign keys with self-references removed."""
        simple = nx.DiGraph(self.graph)
        simple.remove_edges_from(list(nx.selfloop_edges(simple)))
        return simple

    def detect_cycles(self) -> List[List[str]]:
        """
        Detect foreign-key cycles between distinct tables.

        Self-references (``categories.parent_id -> categories``) are not
        cycles. Each cycle starts at its alphabetically first table.

        Returns:
            List of cycles, each a list of table names. Empty if acyclic.
        """
        cycles = []
        for cycle in nx.simple_cycles(self._dependency_digraph()):
            start = cycle.index(min(cycle, key=str.lower))
            cycles.append(cycle[start:] + cycle[:start])
        return sorted(cycles, key=lambda c: [n.lower() for n in c])

    def creation_order(self) -> List[str]:
        """
        Table names ordered so every referenced table precedes the tables
        referencing it. Ties are broken alphabetically.

        Raises:
            SchemaCycleError: if foreign keys form a cycle between tables
        """
        # Reverse so edges run referenced -> referencing
        dependencies = self._dependency_digraph().reverse(copy=True)
        try:
            return list(
                nx.lexicographical_topological_sort(dependencies, key=str.lower)
            )
        except nx.NetworkXUnfeasible as exc:
            raise SchemaCycleError(self.detect_cycles()) from exc

    # ------------------------------------------------------------------------------
    # Export

    def export_mermaid(self, fenced: bool = False) -> str:
        """
        Generate a Mermaid entity-relationship diagram.

        Entity and junction tables are drawn with their columns; audit tables
        are left out. Many-to-many associations appear as the two many-to-one
        keys of their junction table.
        """
        lines = []
        if fenced:
            lines.append("```mermaid")
        lines.append("erDiagram")

        drawn = [
            t for t in self.schema.tables
            if not self.schema.is_audit_table(t) and self.schema.get_table(t.name) is t
        ]

        for table in drawn:
            lines.append(f"    {table.name} {{")
            for column in table.columns:
                markers = []
                if table.is_primary_key_column(column.name):
                    markers.append("PK")
                if table.foreign_key_for(column.name) is not None:
                    markers.append("FK")
                if column.unique and "PK" not in markers:
                    markers.append("UK")
                suffix = f" {','.join(markers)}" if markers else ""
                lines.append(f"        {_mermaid_type(column)} {column.name}{suffix}")
            lines.append("    }")

        drawn_names = {t.name for t in drawn}
        for source, target, data in self.graph.edges(data=True):
            if source not in drawn_names or target not in drawn_names:
                continue
            fk = data["fk"]
            owner = self.graph.nodes[source]["table"]
            if owner.is_unique_column(fk.column_name) and not owner.is_junction_table():
                connector = "|o--||"
            else:
                connector = "}o--||"
            lines.append(f'    {source} {connector} {target} : "{fk.column_name}"')

        if fenced:
            lines.append("```")
        return "\n".join(lines)


def _mermaid_type(column) -> str:
    """Attribute types must be a single word in Mermaid: ``list<string>`` -> ``list_string``."""
    return re.sub(r"[^A-Za-z0-9_]+", "_", column.semantic_type).strip("_") or "object"


def build_relationship_graph(schema: SqlSchema) -> RelationshipGraph:
    """
    Factory function to build the relationship graph of a schema.

    Args:
        schema: The parsed schema

    Returns:
        RelationshipGraph instance. Cycles between tables are logged as
        warnings; they only become errors when a creation order is requested.
    """
    graph = RelationshipGraph(schema)

    cycles = graph.detect_cycles()
    if cycles:
        logger.warning("Circular foreign key dependencies detected:")
        for cycle in cycles:
            logger.warning(f"  - {' -> '.join(cycle)} -> {cycle[0]}")

    logger.debug(
        f"Relationship graph: {graph.graph.number_of_nodes()} tables, "
        f"{graph.graph.number_of_edges()} foreign keys"
    )
    return graph
