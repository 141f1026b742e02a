"""
Oracle database connection, catalog query and value expressions.
"""

import logging

import oracledb

from colmeta.config import Config
from colmeta.core.column import ColumnDescriptor
from colmeta.core.identifiers import quote_identifier
from colmeta.core.types import TypeCategory, type_family
from colmeta.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

NATIVE_CASE = 'upper'
QUOTE_CHARS = ('"', '"')

SELECT_COLUMNS_SQL = """
    SELECT
        c.owner,
        c.table_name,
        c.column_name,
        lower(c.data_type) AS data_type,
        nvl(c.data_length, 0) AS data_length,
        nvl(c.data_precision, 0) AS data_precision,
        nvl(c.data_scale, 0) AS data_scale,
        c.nullable,
        CASE WHEN pkc.column_name IS NULL THEN 'N' ELSE 'Y' END AS pk
    FROM all_tab_columns c
    LEFT JOIN (
        SELECT acc.owner, acc.table_name, acc.column_name
        FROM all_cons_columns acc
        JOIN all_constraints ac
            ON ac.owner = acc.owner
            AND ac.constraint_name = acc.constraint_name
        WHERE ac.constraint_type = 'P'
    ) pkc
        ON pkc.owner = c.owner
        AND pkc.table_name = c.table_name
        AND pkc.column_name = c.column_name
    WHERE lower(c.owner) = lower(:1)
        AND lower(c.table_name) = lower(:2)
    ORDER BY c.column_id
"""

STANDARD_NUMBER_FORMAT = '0000000000000000000000.0000000000000000000000'

# dbms_crypto.hash algorithm id
_HASH_MD5 = 2


def get_oracle_connection():
    """
    Create and return an Oracle connection with error handling.

    Returns:
        oracledb.Connection: Database connection object

    Raises:
        DatabaseConnectionError: If connection fails
    """
    try:
        # Use thin mode by default (doesn't require Instant Client)
        params = oracledb.ConnectParams(
            host=Config.ORACLE_HOST,
            port=Config.ORACLE_PORT,
            service_name=Config.ORACLE_SERVICE_NAME
        )

        conn = oracledb.connect(
            user=Config.ORACLE_USER,
            password=Config.ORACLE_PASSWORD,
            params=params
        )
        logger.debug("Oracle connection established")
        return conn
    except oracledb.Error as e:
        logger.error(f"Failed to connect to Oracle: {e}")
        raise DatabaseConnectionError(f"Oracle connection failed: {e}")


def column_value_map(column: ColumnDescriptor) -> str:
    """
    Build the Oracle expression used to read a column's value as text.

    Oracle treats empty strings as NULL, so nvl alone maps both to a space.
    """
    name = quote_identifier(column.column_name, QUOTE_CHARS, column.preserve_case)
    data_type = column.data_type.lower()
    family = type_family(data_type)

    if family == TypeCategory.NUMERIC:
        if Config.NUMBER_CAST == 'standard':
            return f"nvl(trim(to_char({name},'{STANDARD_NUMBER_FORMAT}')),' ')"
        return f"lower(nvl(trim(to_char({name},'0.9999999999EEEE')),' '))"

    if family == TypeCategory.BOOLEAN:
        return f"case when nvl(to_char({name}),'0') in ('1','TRUE','Y') then '1' else '0' end"

    if family == TypeCategory.TIMESTAMP:
        if 'time zone' in data_type:
            return f"nvl(to_char(sys_extract_utc({name}),'MMDDYYYYHH24MISS'),' ')"
        return f"nvl(to_char({name},'MMDDYYYYHH24MISS'),' ')"

    if family == TypeCategory.BINARY:
        return f"nvl(lower(dbms_crypto.hash({name},{_HASH_MD5})),' ')"

    if family == TypeCategory.CHARACTER:
        if data_type in ('clob', 'nclob'):
            return f"nvl(dbms_lob.substr({name},4000,1),' ')"
        if data_type in ('char', 'nchar', 'character'):
            return f"nvl(rtrim({name}),' ')"
        return f"nvl({name},' ')"

    return f"nvl(to_char({name}),' ')"
