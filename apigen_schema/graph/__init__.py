"""Relationship graph built over the schema model."""

from apigen_schema.graph.relationship_graph import (
    RelationshipGraph,
    build_relationship_graph,
)

__all__ = [
    "RelationshipGraph",
    "build_relationship_graph",
]
