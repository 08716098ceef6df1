"""Enumerations shared by the schema model."""

from enum import Enum


class RelationType(str, Enum):
    """Cardinality of an inferred association, read from the source side."""

    ONE_TO_ONE = "ONE_TO_ONE"
    ONE_TO_MANY = "ONE_TO_MANY"
    MANY_TO_ONE = "MANY_TO_ONE"
    MANY_TO_MANY = "MANY_TO_MANY"

    @property
    def inverse(self) -> "RelationType":
        """Cardinality of the same association read from the target side."""
        if self is RelationType.ONE_TO_MANY:
            return RelationType.MANY_TO_ONE
        if self is RelationType.MANY_TO_ONE:
            return RelationType.ONE_TO_MANY
        return self


class ForeignKeyAction(str, Enum):
    """Referential action of an ON DELETE / ON UPDATE clause."""

    NO_ACTION = "NO ACTION"
    CASCADE = "CASCADE"
    SET_NULL = "SET NULL"
    SET_DEFAULT = "SET DEFAULT"
    RESTRICT = "RESTRICT"

    @classmethod
    def parse(cls, text) -> "ForeignKeyAction":
        """Accepts "set null", "SET_NULL", "Cascade", ...; anything else is NO_ACTION."""
        if isinstance(text, cls):
            return text
        if not text:
            return cls.NO_ACTION
        normalized = " ".join(str(text).replace("_", " ").upper().split())
        for action in cls:
            if action.value == normalized:
                return action
        return cls.NO_ACTION


class IndexType(str, Enum):
    BTREE = "BTREE"
    HASH = "HASH"
    GIN = "GIN"
    GIST = "GIST"
    BRIN = "BRIN"


class FunctionType(str, Enum):
    FUNCTION = "FUNCTION"
    PROCEDURE = "PROCEDURE"
    TRIGGER = "TRIGGER"
