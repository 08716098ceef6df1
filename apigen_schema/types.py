"""Type mapping from SQL column types to language-neutral semantic types."""

import re

_TYPE_ARGS = re.compile(r"\s*\(.*\)\s*")
_VARCHAR_LENGTH = re.compile(r"^\s*(?:VARCHAR|CHARACTER VARYING|NVARCHAR|CHAR|CHARACTER|NCHAR)\s*\(\s*(\d+)\s*\)", re.IGNORECASE)
_DECIMAL_ARGS = re.compile(r"^\s*(?:DECIMAL|NUMERIC|NUMBER)\s*\(\s*(\d+)\s*(?:,\s*(\d+)\s*)?\)", re.IGNORECASE)

SEMANTIC_TYPES = {
    "INTEGER": "integer",
    "INT": "integer",
    "INT4": "integer",
    "SERIAL": "integer",
    "SERIAL4": "integer",
    "BIGINT": "long",
    "INT8": "long",
    "BIGSERIAL": "long",
    "SERIAL8": "long",
    "SMALLINT": "short",
    "INT2": "short",
    "SMALLSERIAL": "short",
    "SERIAL2": "short",
    "TINYINT": "byte",
    "DECIMAL": "decimal",
    "NUMERIC": "decimal",
    "NUMBER": "decimal",
    "MONEY": "decimal",
    "REAL": "float",
    "FLOAT4": "float",
    "DOUBLE": "double",
    "FLOAT8": "double",
    "DOUBLE PRECISION": "double",
    "FLOAT": "double",
    "BOOLEAN": "boolean",
    "BOOL": "boolean",
    "BIT": "boolean",
    "VARCHAR": "string",
    "CHARACTER VARYING": "string",
    "NVARCHAR": "string",
    "TEXT": "string",
    "CHAR": "string",
    "CHARACTER": "string",
    "NCHAR": "string",
    "CLOB": "string",
    "NCLOB": "string",
    "ENUM": "string",
    "INET": "string",
    "CIDR": "string",
    "MACADDR": "string",
    "POINT": "string",
    "LINE": "string",
    "LSEG": "string",
    "BOX": "string",
    "PATH": "string",
    "POLYGON": "string",
    "CIRCLE": "string",
    "DATE": "date",
    "TIME": "time",
    "TIMETZ": "time",
    "TIME WITH TIME ZONE": "time",
    "TIMESTAMP": "datetime",
    "TIMESTAMPTZ": "datetime",
    "TIMESTAMP WITH TIME ZONE": "datetime",
    "DATETIME": "datetime",
    "UUID": "uuid",
    "JSON": "json",
    "JSONB": "json",
    "BYTEA": "binary",
    "BLOB": "binary",
    "BINARY": "binary",
    "VARBINARY": "binary",
    "LONGVARBINARY": "binary",
    "INTERVAL": "duration",
    "ARRAY": "list<object>",
}


def map_sql_type(sql_type):
    """
    Map a raw SQL type to its semantic type.

    Type arguments are ignored (``VARCHAR(100)`` -> ``string``), ``T[]`` maps
    to ``list<semantic(T)>`` and anything unknown maps to ``object``.
    """
    if not sql_type:
        return "object"

    clean = _TYPE_ARGS.sub(" ", sql_type).strip().upper()
    clean = " ".join(clean.split())

    if clean.endswith("[]"):
        return f"list<{map_sql_type(clean[:-2])}>"

    return SEMANTIC_TYPES.get(clean, "object")


def extract_length(sql_type):
    """Return N for ``VARCHAR(N)``-style types, else None."""
    if not sql_type:
        return None
    match = _VARCHAR_LENGTH.match(sql_type)
    return int(match.group(1)) if match else None


def extract_precision_scale(sql_type):
    """Return (precision, scale) for ``DECIMAL(p[,s])``-style types, else None."""
    if not sql_type:
        return None
    match = _DECIMAL_ARGS.match(sql_type)
    if not match:
        return None
    precision = int(match.group(1))
    scale = int(match.group(2)) if match.group(2) is not None else 0
    return precision, scale
