"""Exceptions raised by the schema model, its loaders and its validators."""


class SchemaError(Exception):
    """Base class for every schema-model error."""


class SchemaValidationError(SchemaError):
    """Raised by verify_schema() when a schema has consistency problems."""

    def __init__(self, issues):
        self.issues = list(issues)
        lines = "\n".join(f"  - {issue}" for issue in self.issues)
        super().__init__(f"Schema has {len(self.issues)} issue(s):\n{lines}")


class SchemaCycleError(SchemaError):
    """Raised when foreign keys form a cycle that prevents table ordering."""

    def __init__(self, cycles):
        self.cycles = [list(cycle) for cycle in cycles]
        rendered = "; ".join(
            " -> ".join(cycle + [cycle[0]]) for cycle in self.cycles
        )
        super().__init__(f"Circular foreign key dependencies: {rendered}")


class ConventionsError(SchemaError):
    """Raised when a naming-conventions file is malformed."""


class OpenApiParseError(SchemaError):
    """Raised when an OpenAPI document cannot be read or is empty."""
