"""
PostgreSQL database connection, catalog query and value expressions.
"""

import logging

import psycopg2
from psycopg2 import OperationalError

from colmeta.config import Config
from colmeta.core.column import ColumnDescriptor
from colmeta.core.identifiers import quote_identifier
from colmeta.core.types import TypeCategory, type_family
from colmeta.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

NATIVE_CASE = 'lower'
QUOTE_CHARS = ('"', '"')

SELECT_COLUMNS_SQL = """
    SELECT
        c.table_schema AS owner,
        c.table_name,
        c.column_name,
        c.udt_name AS data_type,
        coalesce(c.character_maximum_length, c.numeric_precision, 0) AS data_length,
        coalesce(c.numeric_precision, 0) AS data_precision,
        coalesce(c.numeric_scale, 0) AS data_scale,
        CASE WHEN c.is_nullable = 'YES' THEN 'Y' ELSE 'N' END AS nullable,
        CASE WHEN pk.column_name IS NULL THEN 'N' ELSE 'Y' END AS pk
    FROM information_schema.columns c
    LEFT JOIN (
        SELECT kcu.table_schema, kcu.table_name, kcu.column_name
        FROM information_schema.table_constraints tc
        JOIN information_schema.key_column_usage kcu
            ON tc.constraint_name = kcu.constraint_name
            AND tc.table_schema = kcu.table_schema
            AND tc.table_name = kcu.table_name
        WHERE tc.constraint_type = 'PRIMARY KEY'
    ) pk
        ON pk.table_schema = c.table_schema
        AND pk.table_name = c.table_name
        AND pk.column_name = c.column_name
    WHERE lower(c.table_schema) = lower(%s)
        AND lower(c.table_name) = lower(%s)
    ORDER BY c.ordinal_position
"""

STANDARD_NUMBER_FORMAT = '0000000000000000000000.0000000000000000000000'


def get_postgres_connection():
    """
    Create and return a PostgreSQL connection with error handling.

    Returns:
        psycopg2.connection: Database connection object

    Raises:
        DatabaseConnectionError: If connection fails
    """
    try:
        conn = psycopg2.connect(
            host=Config.POSTGRES_HOST,
            port=Config.POSTGRES_PORT,
            database=Config.POSTGRES_DATABASE,
            user=Config.POSTGRES_USER,
            password=Config.POSTGRES_PASSWORD,
            connect_timeout=10
        )
        logger.debug("PostgreSQL connection established")
        return conn
    except OperationalError as e:
        logger.error(f"Failed to connect to PostgreSQL: {e}")
        raise DatabaseConnectionError(f"PostgreSQL connection failed: {e}")


def column_value_map(column: ColumnDescriptor) -> str:
    """
    Build the PostgreSQL expression used to read a column's value as text.

    Args:
        column: Column descriptor (value_expression not yet set)

    Returns:
        SQL fragment
    """
    name = quote_identifier(column.column_name, QUOTE_CHARS, column.preserve_case)
    data_type = column.data_type.lower()
    family = type_family(data_type)

    if family == TypeCategory.NUMERIC:
        if Config.NUMBER_CAST == 'standard':
            return f"coalesce(trim(to_char({name}::numeric,'{STANDARD_NUMBER_FORMAT}')),' ')"
        return f"coalesce(trim(to_char(trim_scale({name}::numeric),'0.9999999999EEEE')),' ')"

    if family == TypeCategory.BOOLEAN:
        return f"case when coalesce({name}::text,'0') in ('true','1') then '1' else '0' end"

    if family == TypeCategory.TIMESTAMP:
        if data_type == 'time':
            return f"coalesce(to_char({name},'HH24MISS'),' ')"
        if data_type.endswith('tz') or 'time zone' in data_type:
            return f"coalesce(to_char({name} at time zone 'UTC','MMDDYYYYHH24MISS'),' ')"
        return f"coalesce(to_char({name},'MMDDYYYYHH24MISS'),' ')"

    if family == TypeCategory.BINARY:
        return f"coalesce(md5({name}),' ')"

    if family == TypeCategory.CHARACTER:
        return f"coalesce(nullif({name}::text,''),' ')"

    return f"coalesce({name}::text,' ')"
