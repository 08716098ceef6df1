"""
Naming conventions used to classify tables and columns.

Every heuristic the schema model applies by name (audit tables, inherited
base columns, OpenAPI helper schemas) lives here so a project can override it
from a YAML file:

    audit_table_suffixes: [_aud, _audit, _history]
    base_columns: [created_at, updated_at, version]

Keys that are omitted keep their defaults.
"""

from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Tuple

import yaml

from apigen_schema.errors import ConventionsError
from apigen_schema.gen_logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SchemaConventions:
    """Immutable set of naming heuristics. All comparisons are case-insensitive."""

    audit_table_suffixes: Tuple[str, ...] = ("_aud", "_audit")
    audit_table_names: Tuple[str, ...] = ("revision_info",)
    base_columns: Tuple[str, ...] = (
        "estado",
        "fecha_creacion",
        "fecha_actualizacion",
        "fecha_eliminacion",
        "creado_por",
        "modificado_por",
        "eliminado_por",
        "version",
        "created_at",
        "updated_at",
        "deleted_at",
        "created_by",
        "updated_by",
        "deleted_by",
    )
    base_marker_columns: Tuple[str, ...] = ("estado", "created_at")
    excluded_openapi_schemas: Tuple[str, ...] = (
        "Error",
        "ErrorResponse",
        "ValidationError",
        "ApiResponse",
        "PageRequest",
        "PageResponse",
        "Pageable",
        "Sort",
        "Link",
        "Links",
    )
    excluded_openapi_suffixes: Tuple[str, ...] = (
        "request",
        "response",
        "dto",
        "input",
        "output",
        "payload",
    )

    def is_audit_table_name(self, table_name: str) -> bool:
        lower = table_name.lower()
        if lower in (n.lower() for n in self.audit_table_names):
            return True
        return lower.endswith(tuple(s.lower() for s in self.audit_table_suffixes))

    def is_base_column(self, column_name: str) -> bool:
        return column_name.lower() in (c.lower() for c in self.base_columns)

    def is_base_marker(self, column_name: str) -> bool:
        return column_name.lower() in (c.lower() for c in self.base_marker_columns)

    def is_excluded_openapi_schema(self, schema_name: str) -> bool:
        if schema_name in self.excluded_openapi_schemas:
            return True
        lower = schema_name.lower()
        return lower.endswith(tuple(s.lower() for s in self.excluded_openapi_suffixes))


DEFAULT_CONVENTIONS = SchemaConventions()


def conventions_from_dict(data) -> SchemaConventions:
    """
    Build conventions from a mapping, keeping defaults for omitted keys.

    Raises:
        ConventionsError: unknown key, or a value that is not a list of strings
    """
    if data is None:
        return DEFAULT_CONVENTIONS
    if not isinstance(data, dict):
        raise ConventionsError(
            f"Conventions must be a mapping, got {type(data).__name__}"
        )

    known = {f.name for f in fields(SchemaConventions)}
    overrides = {}
    for key, value in data.items():
        if key not in known:
            raise ConventionsError(
                f"Unknown conventions key '{key}'. Expected one of: {', '.join(sorted(known))}"
            )
        if isinstance(value, str) or not isinstance(value, (list, tuple)):
            raise ConventionsError(f"Conventions key '{key}' must be a list of strings")
        if not all(isinstance(item, str) for item in value):
            raise ConventionsError(f"Conventions key '{key}' must be a list of strings")
        overrides[key] = tuple(value)

    return replace(DEFAULT_CONVENTIONS, **overrides)


def load_conventions(path) -> SchemaConventions:
    """
    Load conventions from a YAML file.

    Raises:
        ConventionsError: missing or undecodable file, invalid YAML, or bad keys
    """
    path = Path(path)
    if not path.is_file():
        raise ConventionsError(f"Conventions file not found: {path}")

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except UnicodeDecodeError as exc:
        raise ConventionsError(f"Conventions file {path} is not valid UTF-8: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConventionsError(f"Invalid YAML in conventions file {path}: {exc}") from exc

    conventions = conventions_from_dict(data)
    logger.debug(f"Loaded naming conventions from {path}")
    return conventions
