"""
Data type classification tables.

Maps engine-specific SQL type names (Postgres, Oracle, MySQL, MSSQL, DB2)
onto a small set of comparable data classes.
"""

from enum import Enum


class TypeCategory(str, Enum):
    """Canonical data class of a column."""
    BOOLEAN = "boolean"
    NUMERIC = "numeric"
    CHARACTER = "char"
    TIMESTAMP = "timestamp"
    BINARY = "binary"
    UNSUPPORTED = "unsupported"


BOOLEAN_TYPES = frozenset({"bool", "boolean"})

CHAR_TYPES = frozenset({
    "bpchar", "char", "character", "clob", "json", "jsonb", "nchar", "nclob",
    "ntext", "nvarchar", "nvarchar2", "text", "varchar", "varchar2", "xml",
})

NUMERIC_TYPES = frozenset({
    "bigint", "bigserial", "binary_double", "binary_float", "dec", "decimal",
    "double", "double precision", "fixed", "float", "float4", "float8", "int",
    "integer", "int2", "int4", "int8", "money", "number", "numeric", "real",
    "serial", "smallint", "smallmoney", "smallserial", "tinyint",
})

TIMESTAMP_TYPES = frozenset({
    "date", "datetime", "datetimeoffset", "datetime2", "smalldatetime", "time",
    "timestamp", "timestamptz", "timestamp(0)", "timestamp(1) with time zone",
    "timestamp(3)", "timestamp(3) with time zone", "timestamp(6)",
    "timestamp(6) with time zone", "timestamp(9)", "timestamp(9) with time zone",
    "year",
})

BINARY_TYPES = frozenset({"bytea", "binary", "blob", "raw", "varbinary"})

UNSUPPORTED_TYPES = frozenset({
    "bfile", "bit", "cursor", "enum", "hierarchyid", "image", "rowid",
    "rowversion", "set", "sql_variant", "uniqueidentifier", "long", "long raw",
})

# Used when deciding whether an identifier must be quoted
RESERVED_WORDS = frozenset({
    "add", "all", "alter", "and", "any", "as", "asc", "at", "authid", "between",
    "by", "character", "check", "cluster", "column", "comment", "connect",
    "constraint", "continue", "create", "cross", "current", "current_user",
    "cursor", "database", "date", "default", "delete", "desc", "distinct",
    "double", "else", "end", "except", "exception", "exists", "external",
    "fetch", "for", "from", "grant", "group", "having", "identified", "if", "in",
    "index", "insert", "integer", "intersect", "into", "is", "join", "like",
    "lock", "long", "loop", "modify", "natural", "no", "not", "null", "on",
    "open", "option", "or", "order", "outer", "package", "prior", "privileges",
    "procedure", "public", "rename", "replace", "rowid", "rownum", "schema",
    "select", "session", "set", "sql", "start", "statement", "sys", "table",
    "then", "to", "trigger", "union", "unique", "update", "user", "values",
    "varchar", "varchar2", "view", "when", "where", "with", "xor",
})


def get_data_class(data_type: str) -> TypeCategory:
    """
    Return the data class of a database column type.

    Boolean and numeric types keep their own class. Timestamps are compared
    as text downstream, so they fold into CHARACTER along with every type
    that matches no table.

    Args:
        data_type: Raw type name as reported by the catalog (any case)

    Returns:
        TypeCategory.BOOLEAN, TypeCategory.NUMERIC or TypeCategory.CHARACTER
    """
    dt = (data_type or "").lower()

    if dt in BOOLEAN_TYPES:
        return TypeCategory.BOOLEAN
    if dt in NUMERIC_TYPES:
        return TypeCategory.NUMERIC
    if dt in TIMESTAMP_TYPES:
        return TypeCategory.CHARACTER

    return TypeCategory.CHARACTER


def is_supported(data_type: str) -> bool:
    """Check whether values of a data type can be compared at all."""
    return (data_type or "").lower() not in UNSUPPORTED_TYPES


def type_family(data_type: str) -> TypeCategory:
    """
    Return the unfolded family of a data type.

    Unlike get_data_class, timestamps, binaries and unsupported types keep
    their own category. Value expression builders use this to pick a cast.
    """
    dt = (data_type or "").lower()

    if dt in UNSUPPORTED_TYPES:
        return TypeCategory.UNSUPPORTED
    if dt in BOOLEAN_TYPES:
        return TypeCategory.BOOLEAN
    if dt in NUMERIC_TYPES:
        return TypeCategory.NUMERIC
    if dt in TIMESTAMP_TYPES:
        return TypeCategory.TIMESTAMP
    if dt in BINARY_TYPES:
        return TypeCategory.BINARY

    return TypeCategory.CHARACTER
