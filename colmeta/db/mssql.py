"""
Microsoft SQL Server database connection, catalog query and value expressions.
"""

import logging

import pymssql

from colmeta.config import Config
from colmeta.core.column import ColumnDescriptor
from colmeta.core.identifiers import quote_identifier
from colmeta.core.types import TypeCategory, type_family
from colmeta.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

NATIVE_CASE = 'lower'
QUOTE_CHARS = ('[', ']')

SELECT_COLUMNS_SQL = """
    SELECT
        c.TABLE_SCHEMA AS owner,
        c.TABLE_NAME AS table_name,
        c.COLUMN_NAME AS column_name,
        lower(c.DATA_TYPE) AS data_type,
        coalesce(c.CHARACTER_MAXIMUM_LENGTH, c.NUMERIC_PRECISION, 0) AS data_length,
        coalesce(c.NUMERIC_PRECISION, 0) AS data_precision,
        coalesce(c.NUMERIC_SCALE, 0) AS data_scale,
        CASE WHEN c.IS_NULLABLE = 'YES' THEN 'Y' ELSE 'N' END AS nullable,
        CASE WHEN pk.COLUMN_NAME IS NULL THEN 'N' ELSE 'Y' END AS pk
    FROM INFORMATION_SCHEMA.COLUMNS c
    LEFT JOIN (
        SELECT kcu.TABLE_SCHEMA, kcu.TABLE_NAME, kcu.COLUMN_NAME
        FROM INFORMATION_SCHEMA.TABLE_CONSTRAINTS tc
        JOIN INFORMATION_SCHEMA.KEY_COLUMN_USAGE kcu
            ON tc.CONSTRAINT_NAME = kcu.CONSTRAINT_NAME
            AND tc.TABLE_SCHEMA = kcu.TABLE_SCHEMA
            AND tc.TABLE_NAME = kcu.TABLE_NAME
        WHERE tc.CONSTRAINT_TYPE = 'PRIMARY KEY'
    ) pk
        ON pk.TABLE_SCHEMA = c.TABLE_SCHEMA
        AND pk.TABLE_NAME = c.TABLE_NAME
        AND pk.COLUMN_NAME = c.COLUMN_NAME
    WHERE lower(c.TABLE_SCHEMA) = lower(%s)
        AND lower(c.TABLE_NAME) = lower(%s)
    ORDER BY c.ORDINAL_POSITION
"""

STANDARD_NUMBER_FORMAT = '0000000000000000000000.0000000000000000000000'


def get_mssql_connection():
    """
    Create and return a MSSQL connection with error handling.

    Returns:
        pymssql.Connection: Database connection object

    Raises:
        DatabaseConnectionError: If connection fails
    """
    try:
        conn = pymssql.connect(
            server=Config.MSSQL_HOST,
            port=Config.MSSQL_PORT,
            database=Config.MSSQL_DATABASE,
            user=Config.MSSQL_USER,
            password=Config.MSSQL_PASSWORD,
            login_timeout=10
        )
        logger.debug("MSSQL connection established")
        return conn
    except pymssql.Error as e:
        logger.error(f"Failed to connect to MSSQL: {e}")
        raise DatabaseConnectionError(f"MSSQL connection failed: {e}")


def column_value_map(column: ColumnDescriptor) -> str:
    """Build the MSSQL expression used to read a column's value as text."""
    name = quote_identifier(column.column_name, QUOTE_CHARS, column.preserve_case)
    data_type = column.data_type.lower()
    family = type_family(data_type)

    if family == TypeCategory.NUMERIC:
        if Config.NUMBER_CAST == 'standard':
            return f"coalesce(format({name},'{STANDARD_NUMBER_FORMAT}'),' ')"
        return f"coalesce(lower(format({name},'0.0000000000E+00')),' ')"

    if family == TypeCategory.BOOLEAN:
        return f"case when coalesce(cast({name} as varchar(5)),'0') in ('1','true') then '1' else '0' end"

    if family == TypeCategory.TIMESTAMP:
        if data_type == 'time':
            return f"coalesce(format(cast({name} as datetime2),'HHmmss'),' ')"
        if data_type == 'datetimeoffset':
            return f"coalesce(format(switchoffset({name},'+00:00'),'MMddyyyyHHmmss'),' ')"
        return f"coalesce(format({name},'MMddyyyyHHmmss'),' ')"

    if family == TypeCategory.BINARY:
        return f"coalesce(lower(convert(varchar(32),hashbytes('MD5',{name}),2)),' ')"

    if family == TypeCategory.CHARACTER:
        return f"coalesce(nullif(cast({name} as nvarchar(max)),''),' ')"

    return f"coalesce(cast({name} as nvarchar(max)),' ')"
