"""
Validation for the schema model.

- schema_validators: primary keys, foreign key targets, entity-name collisions
"""

from apigen_schema.validation.schema_validators import (
    validate_schema,
    verify_schema,
)

__all__ = [
    "validate_schema",
    "verify_schema",
]
