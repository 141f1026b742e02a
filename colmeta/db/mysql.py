"""
MySQL database connection, catalog query and value expressions.
"""

import logging

import mysql.connector
from mysql.connector import Error

from colmeta.config import Config
from colmeta.core.column import ColumnDescriptor
from colmeta.core.identifiers import quote_identifier
from colmeta.core.types import TypeCategory, type_family
from colmeta.exceptions import DatabaseConnectionError

logger = logging.getLogger(__name__)

NATIVE_CASE = 'lower'
QUOTE_CHARS = ('`', '`')

# For MySQL, schema is synonymous with database
SELECT_COLUMNS_SQL = """
    SELECT
        c.table_schema AS owner,
        c.table_name,
        c.column_name,
        lower(c.data_type) AS data_type,
        coalesce(c.character_maximum_length, c.numeric_precision, 0) AS data_length,
        coalesce(c.numeric_precision, 0) AS data_precision,
        coalesce(c.numeric_scale, 0) AS data_scale,
        CASE WHEN c.is_nullable = 'YES' THEN 'Y' ELSE 'N' END AS nullable,
        CASE WHEN c.column_key = 'PRI' THEN 'Y' ELSE 'N' END AS pk
    FROM information_schema.columns c
    WHERE lower(c.table_schema) = lower(%s)
        AND lower(c.table_name) = lower(%s)
    ORDER BY c.ordinal_position
"""

STANDARD_INTEGER_DIGITS = 22


def get_mysql_connection(database=None):
    """
    Create and return a MySQL connection with error handling.

    Args:
        database: Optional database name to connect to (overrides config)

    Returns:
        mysql.connector.connection: Database connection object

    Raises:
        DatabaseConnectionError: If connection fails
    """
    try:
        target_db = database if database else Config.MYSQL_DATABASE

        conn = mysql.connector.connect(
            host=Config.MYSQL_HOST,
            port=Config.MYSQL_PORT,
            database=target_db,
            user=Config.MYSQL_USER,
            password=Config.MYSQL_PASSWORD,
            connection_timeout=10
        )
        logger.debug(f"MySQL connection established (DB: {target_db})")
        return conn
    except Error as e:
        logger.error(f"Failed to connect to MySQL: {e}")
        raise DatabaseConnectionError(f"MySQL connection failed: {e}")


def column_value_map(column: ColumnDescriptor) -> str:
    """
    Build the MySQL expression used to read a column's value as text.

    MySQL has no picture-format to_char, so notation output is assembled
    from the mantissa and exponent, and standard output zero pads the
    integer part of a decimal(44,22) cast.
    """
    name = quote_identifier(column.column_name, QUOTE_CHARS, column.preserve_case)
    data_type = column.data_type.lower()
    family = type_family(data_type)

    if family == TypeCategory.NUMERIC:
        if Config.NUMBER_CAST == 'standard':
            fixed = f"cast(cast(abs({name}) as decimal(44,22)) as char)"
            return (
                f"coalesce(concat(if({name}<0,'-',''),"
                f"lpad(substring_index({fixed},'.',1),{STANDARD_INTEGER_DIGITS},'0'),"
                f"'.',substring_index({fixed},'.',-1)),' ')"
            )
        exponent = f"floor(log10(abs({name})))"
        return (
            f"coalesce(if({name}=0,'0.0000000000e+00',"
            f"concat(if({name}<0,'-',''),"
            f"format(abs({name})/pow(10,{exponent}),10,'en_US'),"
            f"'e',if({exponent}>=0,'+','-'),"
            f"lpad(abs({exponent}),2,'0'))),' ')"
        )

    if family == TypeCategory.BOOLEAN:
        return f"case when coalesce(cast({name} as char),'0') in ('1','true') then '1' else '0' end"

    if family == TypeCategory.TIMESTAMP:
        if data_type == 'year':
            return f"coalesce(cast({name} as char),' ')"
        if data_type == 'time':
            return f"coalesce(time_format({name},'%H%i%s'),' ')"
        if data_type == 'timestamp':
            return f"coalesce(date_format(convert_tz({name},@@session.time_zone,'+00:00'),'%m%d%Y%H%i%s'),' ')"
        return f"coalesce(date_format({name},'%m%d%Y%H%i%s'),' ')"

    if family == TypeCategory.BINARY:
        return f"coalesce(md5({name}),' ')"

    if family == TypeCategory.CHARACTER:
        if data_type == 'json':
            return f"coalesce(cast({name} as char),' ')"
        return f"coalesce(nullif({name},''),' ')"

    return f"coalesce(cast({name} as char),' ')"
