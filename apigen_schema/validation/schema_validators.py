"""
Schema-level validation.

Three independent scans over the tables, each producing human-readable
issues. Nothing here is fatal by itself: validate_schema() returns the issues
for the caller to report, verify_schema() raises when there are any.
"""

from collections import OrderedDict
from typing import List

from apigen_schema.errors import SchemaValidationError
from apigen_schema.gen_logging import get_logger

logger = get_logger(__name__)


# ------------------------------------------------------------------------------
# Individual checks

def _check_primary_keys(schema) -> List[str]:
    return [
        f"Table '{table.name}' has no primary key"
        for table in schema.tables
        if not table.primary_key_columns
    ]


def _check_foreign_key_targets(schema) -> List[str]:
    issues = []
    for table in schema.tables:
        for fk in table.foreign_keys:
            if schema.get_table(fk.referenced_table) is None:
                issues.append(
                    f"Foreign key in '{table.name}' references non-existent table "
                    f"'{fk.referenced_table}'"
                )
    return issues


def _check_entity_name_collisions(schema) -> List[str]:
    """Tables whose names singularize to the same entity (``user``/``users``/``USERS``)."""
    groups = OrderedDict()
    for table in schema.tables:
        groups.setdefault(table.entity_name.lower(), []).append(table)

    issues = []
    for tables in groups.values():
        if len(tables) > 1:
            names = ", ".join(t.name for t in tables)
            issues.append(
                f"Multiple tables would generate entity name '{tables[0].entity_name}': {names}"
            )
    return issues


# ------------------------------------------------------------------------------
# Entry points

def validate_schema(schema) -> List[str]:
    """
    Collect every consistency issue in the schema.

    Returns:
        List of messages in check order: missing primary keys, dangling
        foreign keys, entity-name collisions. Empty when the schema is clean.
    """
    issues = []
    issues.extend(_check_primary_keys(schema))
    issues.extend(_check_foreign_key_targets(schema))
    issues.extend(_check_entity_name_collisions(schema))

    if issues:
        logger.info(f"Schema validation found {len(issues)} issue(s)")
    else:
        logger.debug("Schema validation passed")
    return issues


def verify_schema(schema) -> None:
    """
    Raise when the schema has any consistency issue.

    Raises:
        SchemaValidationError: carrying the full issue list
    """
    issues = validate_schema(schema)
    if issues:
        raise SchemaValidationError(issues)
