"""Column model."""

from dataclasses import dataclass
from typing import Optional, Tuple

from apigen_schema.naming import snake_to_camel
from apigen_schema.types import extract_length, extract_precision_scale, map_sql_type


@dataclass(frozen=True)
class SqlColumn:
    """
    A table column.

    ``semantic_type`` is derived from ``sql_type`` when omitted, and so are
    ``length`` (VARCHAR(n)) and ``precision``/``scale`` (DECIMAL(p,s)).
    """

    name: str
    sql_type: Optional[str] = None
    semantic_type: Optional[str] = None
    nullable: bool = True
    primary_key: bool = False
    unique: bool = False
    auto_increment: bool = False
    default_value: Optional[str] = None
    length: Optional[int] = None
    precision: Optional[int] = None
    scale: Optional[int] = None
    check_constraint: Optional[str] = None
    comment: Optional[str] = None
    enum_values: Tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "enum_values", tuple(self.enum_values or ()))

        if self.semantic_type is None:
            object.__setattr__(self, "semantic_type", map_sql_type(self.sql_type))

        if self.length is None:
            object.__setattr__(self, "length", extract_length(self.sql_type))

        if self.precision is None and self.scale is None:
            precision_scale = extract_precision_scale(self.sql_type)
            if precision_scale:
                object.__setattr__(self, "precision", precision_scale[0])
                object.__setattr__(self, "scale", precision_scale[1])

    @property
    def field_name(self) -> str:
        """camelCase field name: ``first_name`` -> ``firstName``."""
        return snake_to_camel(self.name)
