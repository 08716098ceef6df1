"""
OpenAPI 3.x to schema-model transformer.

Builds an SqlSchema from the component schemas of an OpenAPI document, for
projects that start from an API contract instead of a database.

Key mappings:
- components.schemas.<Name> -> table to_plural(camel_to_snake(Name))
- property "id"             -> primary key (UUID for format uuid, BIGSERIAL otherwise)
- property $ref to a schema -> <prop>_id BIGINT + foreign key to <table>.id
- arrays of $ref both ways  -> junction table <a>_<b> with a composite key
- required                  -> NOT NULL

Helper schemas (errors, paging, *Request, *Response, ...) are skipped; the
list comes from SchemaConventions.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from apigen_schema.conventions import DEFAULT_CONVENTIONS, SchemaConventions
from apigen_schema.errors import OpenApiParseError
from apigen_schema.gen_logging import get_logger
from apigen_schema.model import SqlColumn, SqlForeignKey, SqlSchema, SqlTable
from apigen_schema.naming import camel_to_snake, to_plural

logger = get_logger(__name__)

DEFAULT_SCHEMA_NAME = "OpenAPI Schema"


def to_table_name(schema_name: str) -> str:
    """``OrderItem`` -> ``order_items``."""
    if not schema_name:
        return schema_name
    return to_plural(camel_to_snake(schema_name).lower())


def to_column_name(property_name: str) -> str:
    """``firstName`` -> ``first_name``."""
    if not property_name:
        return property_name
    return camel_to_snake(property_name).lower()


def ref_schema_name(ref: Optional[str]) -> Optional[str]:
    """``#/components/schemas/Customer`` -> ``Customer``."""
    if ref is None:
        return None
    return ref.rsplit("/", 1)[-1]


# ------------------------------------------------------------------------------
# Document access

class OpenAPIParser:
    """Read access to an OpenAPI document and its $ref pointers."""

    def __init__(self, spec: Dict[str, Any]):
        self.spec = spec
        self._ref_cache: Dict[str, Any] = {}

    def resolve_ref(self, ref: str) -> Dict[str, Any]:
        """Resolve a local $ref pointer to its target."""
        if ref in self._ref_cache:
            return self._ref_cache[ref]

        if not ref.startswith("#/"):
            raise ValueError(f"External refs not supported: {ref}")

        result = self.spec
        for part in ref[2:].split("/"):
            result = result.get(part, {}) if isinstance(result, dict) else {}

        self._ref_cache[ref] = result
        return result

    def get_schemas(self) -> Dict[str, Dict[str, Any]]:
        """
        Component schemas in document order.

        Raises:
            OpenApiParseError: if components or components.schemas is not a mapping
        """
        components = self.spec.get("components") or {}
        if not isinstance(components, dict):
            raise OpenApiParseError("components must be a mapping")
        schemas = components.get("schemas") or {}
        if not isinstance(schemas, dict):
            raise OpenApiParseError("components.schemas must be a mapping")
        return schemas

    def get_info(self) -> Dict[str, Any]:
        return self.spec.get("info") or {}

    def get_title(self) -> str:
        return self.get_info().get("title") or DEFAULT_SCHEMA_NAME


# ------------------------------------------------------------------------------
# Types

def to_sql_type(prop: Optional[Dict[str, Any]]) -> str:
    """SQL column type for an OpenAPI property schema."""
    if not prop:
        return "VARCHAR(255)"

    prop_type = prop.get("type")
    fmt = prop.get("format")

    if prop_type is None:
        # Unresolvable $ref: keep the key, drop the association
        return "BIGINT" if "$ref" in prop else "VARCHAR(255)"

    if prop_type == "string":
        return _string_sql_type(prop, fmt)
    if prop_type == "integer":
        return "BIGINT" if fmt == "int64" else "INTEGER"
    if prop_type == "number":
        return {"float": "REAL", "double": "DOUBLE PRECISION"}.get(fmt, "DECIMAL(19,4)")
    if prop_type == "boolean":
        return "BOOLEAN"
    if prop_type in ("array", "object"):
        return "JSONB"
    return "VARCHAR(255)"


def _string_sql_type(prop: Dict[str, Any], fmt: Optional[str]) -> str:
    if fmt is None:
        max_length = prop.get("maxLength")
        if isinstance(max_length, int) and max_length > 0:
            return "TEXT" if max_length > 65535 else f"VARCHAR({max_length})"
        return "VARCHAR(255)"

    return {
        "date": "DATE",
        "date-time": "TIMESTAMP",
        "time": "TIME",
        "uuid": "UUID",
        "email": "VARCHAR(320)",
        "uri": "VARCHAR(2048)",
        "url": "VARCHAR(2048)",
        "byte": "BYTEA",
        "binary": "BYTEA",
    }.get(fmt, "VARCHAR(255)")


# ------------------------------------------------------------------------------
# Conversion

class SchemaConverter:
    """Converts OpenAPI component schemas to tables."""

    def __init__(self, parser: OpenAPIParser):
        self.parser = parser
        self.schemas = parser.get_schemas()

    def _known_ref(self, prop: Dict[str, Any]) -> Optional[str]:
        name = ref_schema_name(prop.get("$ref"))
        return name if name in self.schemas else None

    def convert_schema(self, schema_name: str, schema: Dict[str, Any]) -> SqlTable:
        """Convert one component schema to a table."""
        required = set(schema.get("required") or [])
        columns: List[SqlColumn] = []
        foreign_keys: List[SqlForeignKey] = []
        primary_key: List[str] = []

        for prop_name, prop in schema["properties"].items():
            if prop_name.lower() == "id":
                id_column = self.convert_id(prop_name, prop)
                columns.append(id_column)
                primary_key.append(id_column.name)
                continue

            target = self._known_ref(prop)
            if target is not None:
                column_name = f"{to_column_name(prop_name)}_id"
                columns.append(
                    SqlColumn(
                        name=column_name,
                        sql_type="BIGINT",
                        nullable=True,
                        comment=f"Foreign key to {target}",
                    )
                )
                foreign_keys.append(
                    SqlForeignKey(
                        column_name=column_name,
                        referenced_table=to_table_name(target),
                        referenced_column="id",
                    )
                )
                continue

            items = prop.get("items")
            if prop.get("type") == "array" and isinstance(items, dict) and "$ref" in items:
                # Collections of entities are junction tables, not columns
                continue

            columns.append(self.convert_property(prop_name, prop, prop_name in required))

        if not primary_key:
            columns.insert(
                0,
                SqlColumn(
                    name="id",
                    sql_type="BIGSERIAL",
                    nullable=False,
                    primary_key=True,
                    auto_increment=True,
                ),
            )
            primary_key.append("id")

        return SqlTable(
            name=to_table_name(schema_name),
            columns=columns,
            foreign_keys=foreign_keys,
            primary_key_columns=primary_key,
            comment=schema.get("description"),
        )

    def convert_id(self, prop_name: str, prop: Dict[str, Any]) -> SqlColumn:
        is_uuid = prop.get("format") == "uuid"
        return SqlColumn(
            name=to_column_name(prop_name),
            sql_type="UUID" if is_uuid else "BIGSERIAL",
            nullable=False,
            primary_key=True,
            auto_increment=not is_uuid,
        )

    def convert_property(self, prop_name: str, prop: Dict[str, Any], required: bool) -> SqlColumn:
        enum_values = prop.get("enum")
        default = prop.get("default")
        return SqlColumn(
            name=to_column_name(prop_name),
            sql_type=to_sql_type(prop),
            nullable=not required,
            unique=bool(prop.get("uniqueItems", False)),
            enum_values=tuple(str(v) for v in enum_values) if enum_values else (),
            default_value=str(default) if default is not None else None,
            comment=prop.get("description"),
        )

    # ------------------------------------------------------------------------------
    # Many-to-many

    def _array_refs(self, schema: Dict[str, Any]) -> List[str]:
        refs = []
        for prop in (schema.get("properties") or {}).values():
            if not isinstance(prop, dict):
                continue
            items = prop.get("items")
            if prop.get("type") == "array" and isinstance(items, dict) and "$ref" in items:
                refs.append(ref_schema_name(items["$ref"]))
        return refs

    def detect_junction_tables(self, converted) -> List[SqlTable]:
        """
        One junction table per pair of schemas holding arrays of each other.

        Only schemas named in ``converted`` take part, so every junction
        references tables that exist in the resulting schema.
        """
        converted = set(converted)
        junctions: Dict[str, SqlTable] = {}
        for schema_name, schema in self.schemas.items():
            if schema_name not in converted:
                continue
            for other_name in self._array_refs(schema):
                if other_name not in converted:
                    continue
                if schema_name not in self._array_refs(self.schemas[other_name]):
                    continue
                junction = self.create_junction_table(schema_name, other_name)
                if junction.name not in junctions:
                    junctions[junction.name] = junction
                    logger.debug(
                        f"Created junction table '{junction.name}' for many-to-many "
                        f"between '{schema_name}' and '{other_name}'"
                    )
        return list(junctions.values())

    def create_junction_table(self, first: str, second: str) -> SqlTable:
        first, second = sorted((first, second))
        first_column = f"{to_column_name(first)}_id"
        second_column = f"{to_column_name(second)}_id"
        return SqlTable(
            name=f"{to_column_name(first)}_{to_column_name(second)}",
            columns=[
                SqlColumn(first_column, "BIGINT", nullable=False, primary_key=True),
                SqlColumn(second_column, "BIGINT", nullable=False, primary_key=True),
            ],
            foreign_keys=[
                SqlForeignKey(first_column, to_table_name(first)),
                SqlForeignKey(second_column, to_table_name(second)),
            ],
            primary_key_columns=[first_column, second_column],
        )


# ------------------------------------------------------------------------------
# Entry points

def _should_skip(schema_name: str, schema: Any, conventions: SchemaConventions) -> bool:
    if conventions.is_excluded_openapi_schema(schema_name):
        return True
    return not isinstance(schema, dict) or not schema.get("properties")


def _parse_text(text: str) -> Dict[str, Any]:
    if text is None or not text.strip():
        raise OpenApiParseError("OpenAPI specification cannot be empty")
    try:
        # YAML is a superset of JSON
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise OpenApiParseError(f"Failed to parse OpenAPI specification: {exc}") from exc


def openapi_to_schema(
    spec,
    conventions: Optional[SchemaConventions] = None,
    source_file: Optional[str] = None,
) -> SqlSchema:
    """
    Transform an OpenAPI document into a schema model.

    Args:
        spec: The document, as a parsed mapping or as YAML/JSON text
        conventions: Naming conventions (defaults apply when None)
        source_file: Recorded on the resulting schema

    Returns:
        SqlSchema named after info.title. Components that fail to convert
        are listed in its parse_errors.

    Raises:
        OpenApiParseError: if the document is empty, cannot be parsed, or its
            components.schemas is not a mapping
    """
    conventions = conventions or DEFAULT_CONVENTIONS
    if isinstance(spec, str):
        spec = _parse_text(spec)
    if not isinstance(spec, dict) or not spec:
        raise OpenApiParseError("OpenAPI specification must be a non-empty mapping")

    parser = OpenAPIParser(spec)
    converter = SchemaConverter(parser)

    tables: List[SqlTable] = []
    converted: List[str] = []
    parse_errors: List[str] = []

    for schema_name, schema in converter.schemas.items():
        if _should_skip(schema_name, schema, conventions):
            logger.debug(f"Skipping schema: {schema_name}")
            continue
        try:
            table = converter.convert_schema(schema_name, schema)
        except (AttributeError, KeyError, TypeError, ValueError) as exc:
            error = f"Failed to convert schema '{schema_name}': {exc}"
            parse_errors.append(error)
            logger.warning(error)
            continue
        tables.append(table)
        converted.append(schema_name)
        logger.debug(f"Converted schema '{schema_name}' to table '{table.name}'")

    tables.extend(converter.detect_junction_tables(converted))

    logger.info(f"Imported {len(tables)} table(s) from OpenAPI document")
    return SqlSchema(
        tables=tables,
        name=parser.get_title(),
        source_file=source_file,
        parse_errors=parse_errors,
        conventions=conventions,
    )


def load_openapi_spec(path: Path) -> Dict[str, Any]:
    """Load an OpenAPI document from a YAML or JSON file."""
    try:
        content = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise OpenApiParseError(f"OpenAPI specification {path} is not valid UTF-8: {exc}") from exc
    if not content.strip():
        raise OpenApiParseError(f"OpenAPI specification {path} is empty")

    try:
        if path.suffix == ".json":
            return json.loads(content)
        return yaml.safe_load(content)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise OpenApiParseError(f"Failed to parse OpenAPI specification from {path}: {exc}") from exc


def load_openapi_schema(path, conventions: Optional[SchemaConventions] = None) -> SqlSchema:
    """
    Read an OpenAPI file and transform it into a schema model.

    Raises:
        OpenApiParseError: if the file is missing, empty or unparsable
    """
    path = Path(path)
    if not path.is_file():
        raise OpenApiParseError(f"OpenAPI specification not found: {path}")

    spec = load_openapi_spec(path)
    return openapi_to_schema(spec, conventions=conventions, source_file=str(path))
