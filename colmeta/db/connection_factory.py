"""
Database connection factory for multi-database support.
Provides a unified interface for getting connections to different database types.
"""

import logging

from colmeta.config import Config
from colmeta.db.db2 import get_db2_connection
from colmeta.db.dialects import DatabaseType, normalize_database_type, resolve_dialect
from colmeta.db.mssql import get_mssql_connection
from colmeta.db.mysql import get_mysql_connection
from colmeta.db.oracle import get_oracle_connection
from colmeta.db.postgres import get_postgres_connection

logger = logging.getLogger(__name__)

_CONNECTORS = {
    'postgres': get_postgres_connection,
    'oracle': get_oracle_connection,
    'mysql': get_mysql_connection,
    'mssql': get_mssql_connection,
    'db2': get_db2_connection,
}


def get_connection(database_type: DatabaseType):
    """
    Get a database connection for the specified database type.

    Args:
        database_type: Type of database ('postgres', 'oracle', 'mysql', 'mssql', 'db2')

    Returns:
        Database connection object

    Raises:
        UnknownEngineError: If database type is not supported
        DatabaseConnectionError: If connection fails
    """
    db_type = normalize_database_type(database_type)
    logger.debug(f"Opening {db_type} connection")
    return _CONNECTORS[db_type]()


def get_role_connection(role: str):
    """
    Get a database connection for a configured role.

    Uses the same fallback as the column fetcher, so an unrecognized type
    connects to postgres unless strict resolution is enabled.

    Args:
        role: Role name ('source' or 'target')

    Returns:
        Database connection object
    """
    dialect = resolve_dialect(Config.get_database_type(role))
    return get_connection(dialect.name)


def get_schema(database_type: DatabaseType) -> str:
    """
    Get the configured default schema for the specified database type.

    For MySQL the schema is the configured database.

    Args:
        database_type: Type of database

    Returns:
        Schema name
    """
    db_type = normalize_database_type(database_type)
    schemas = {
        'postgres': Config.POSTGRES_SCHEMA,
        'oracle': Config.ORACLE_SCHEMA,
        'mysql': Config.MYSQL_DATABASE,
        'mssql': Config.MSSQL_SCHEMA,
        'db2': Config.DB2_SCHEMA,
    }
    return schemas[db_type]


def get_role_schema(role: str) -> str:
    """Get the default schema of the database type configured for a role."""
    return get_schema(resolve_dialect(Config.get_database_type(role)).name)
