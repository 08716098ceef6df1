"""
APiGen schema model.

The parsed-schema core shared by every APiGen code generator: tables and
their columns and keys, classification into entity/junction/audit tables,
relationship inference, validation, and an OpenAPI importer.
"""

from apigen_schema.conventions import DEFAULT_CONVENTIONS, SchemaConventions, load_conventions
from apigen_schema.errors import (
    ConventionsError,
    OpenApiParseError,
    SchemaCycleError,
    SchemaError,
    SchemaValidationError,
)
from apigen_schema.graph import RelationshipGraph, build_relationship_graph
from apigen_schema.model import (
    ForeignKeyAction,
    FunctionType,
    IndexType,
    ManyToManyRelation,
    RelationType,
    SqlColumn,
    SqlForeignKey,
    SqlFunction,
    SqlIndex,
    SqlParameter,
    SqlSchema,
    SqlTable,
    TableRelationship,
)
from apigen_schema.transformers import load_openapi_schema, openapi_to_schema
from apigen_schema.validation import validate_schema, verify_schema

__version__ = "0.1.0"
