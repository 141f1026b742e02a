"""
Engine dialects.

Bundles everything the column fetcher needs to know about one database
engine: native identifier case, catalog query and the value expression
builder.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Optional

from colmeta.config import Config
from colmeta.core.column import ColumnDescriptor
from colmeta.db import db2, mssql, mysql, oracle, postgres
from colmeta.exceptions import UnknownEngineError

logger = logging.getLogger(__name__)

# Supported database types
DatabaseType = Literal['postgres', 'oracle', 'mysql', 'mssql', 'db2']

DEFAULT_DATABASE_TYPE = 'postgres'

_ALIASES = {
    'postgresql': 'postgres',
    'sqlserver': 'mssql',
}


@dataclass(frozen=True)
class Dialect:
    """Engine-specific behavior selected by destination role."""
    name: str
    native_case: str
    columns_sql: str
    value_expression: Callable[[ColumnDescriptor], str]


DIALECTS = {
    'postgres': Dialect(
        name='postgres',
        native_case=postgres.NATIVE_CASE,
        columns_sql=postgres.SELECT_COLUMNS_SQL,
        value_expression=postgres.column_value_map,
    ),
    'oracle': Dialect(
        name='oracle',
        native_case=oracle.NATIVE_CASE,
        columns_sql=oracle.SELECT_COLUMNS_SQL,
        value_expression=oracle.column_value_map,
    ),
    'mysql': Dialect(
        name='mysql',
        native_case=mysql.NATIVE_CASE,
        columns_sql=mysql.SELECT_COLUMNS_SQL,
        value_expression=mysql.column_value_map,
    ),
    'mssql': Dialect(
        name='mssql',
        native_case=mssql.NATIVE_CASE,
        columns_sql=mssql.SELECT_COLUMNS_SQL,
        value_expression=mssql.column_value_map,
    ),
    'db2': Dialect(
        name='db2',
        native_case=db2.NATIVE_CASE,
        columns_sql=db2.SELECT_COLUMNS_SQL,
        value_expression=db2.column_value_map,
    ),
}


def normalize_database_type(database_type: str) -> str:
    """
    Normalize database type string to a standard form.

    Args:
        database_type: Input database type string

    Returns:
        Normalized database type ('postgres', 'oracle', 'mysql', 'mssql', 'db2')

    Raises:
        UnknownEngineError: If database type is not supported
    """
    db_type = (database_type or '').strip().lower()
    db_type = _ALIASES.get(db_type, db_type)

    if db_type not in DIALECTS:
        raise UnknownEngineError(f"Unsupported database type: {database_type}")

    return db_type


def resolve_dialect(database_type: Optional[str], strict: Optional[bool] = None) -> Dialect:
    """
    Resolve the dialect for a database type.

    Unrecognized types fall back to postgres unless strict resolution is
    enabled (argument or Config.STRICT_DATABASE_TYPE).

    Args:
        database_type: Database type string (may be None)
        strict: Raise instead of falling back

    Returns:
        Dialect bundle

    Raises:
        UnknownEngineError: If strict and the type is not supported
    """
    if strict is None:
        strict = Config.STRICT_DATABASE_TYPE

    try:
        return DIALECTS[normalize_database_type(database_type)]
    except UnknownEngineError:
        if strict:
            raise
        logger.debug(f"Unrecognized database type '{database_type}', using {DEFAULT_DATABASE_TYPE}")
        return DIALECTS[DEFAULT_DATABASE_TYPE]


def resolve_role_dialect(role: str, strict: Optional[bool] = None) -> Dialect:
    """Resolve the dialect configured for a role ('source' or 'target')."""
    return resolve_dialect(Config.get_database_type(role), strict=strict)
