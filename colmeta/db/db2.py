"""
IBM DB2 database connection, catalog query and value expressions.
"""

import logging

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
        trim(c.tabschema) AS owner,
        c.tabname AS table_name,
        c.colname AS column_name,
        lower(trim(c.typename)) AS data_type,
        coalesce(c.length, 0) AS data_length,
        coalesce(c.length, 0) AS data_precision,
        coalesce(c.scale, 0) AS data_scale,
        c.nulls AS nullable,
        CASE WHEN c.keyseq IS NULL THEN 'N' ELSE 'Y' END AS pk
    FROM syscat.columns c
    WHERE lower(trim(c.tabschema)) = lower(?)
        AND lower(c.tabname) = lower(?)
    ORDER BY c.colno
"""

STANDARD_NUMBER_FORMAT = '0000000000000000000000.0000000000000000000000'
NOTATION_MANTISSA_FORMAT = '0.0000000000'


def get_db2_connection():
    """
    Create and return a DB2 connection with error handling.

    Requires the optional ``db2`` extra (ibm_db).

    Returns:
        ibm_db_dbi.Connection: Database connection object

    Raises:
        DatabaseConnectionError: If connection fails
    """
    import ibm_db_dbi

    dsn = (
        f"DATABASE={Config.DB2_DATABASE};HOSTNAME={Config.DB2_HOST};"
        f"PORT={Config.DB2_PORT};PROTOCOL=TCPIP;"
        f"UID={Config.DB2_USER};PWD={Config.DB2_PASSWORD};"
    )
    try:
        conn = ibm_db_dbi.connect(dsn, "", "")
        logger.debug("DB2 connection established")
        return conn
    except ibm_db_dbi.Error as e:
        logger.error(f"Failed to connect to DB2: {e}")
        raise DatabaseConnectionError(f"DB2 connection failed: {e}")


def column_value_map(column: ColumnDescriptor) -> str:
    """
    Build the DB2 expression used to read a column's value as text.

    varchar_format has no scientific picture, so notation output is
    assembled from the mantissa and exponent.
    """
    name = quote_identifier(column.column_name, QUOTE_CHARS, column.preserve_case)
    data_type = column.data_type.lower()
    family = type_family(data_type)

    if family == TypeCategory.NUMERIC:
        if Config.NUMBER_CAST == 'standard':
            return f"coalesce(trim(varchar_format({name},'{STANDARD_NUMBER_FORMAT}')),' ')"
        exponent = f"floor(log10(abs({name})))"
        return (
            f"coalesce(case when {name}=0 then '0.0000000000e+00' else "
            f"(case when {name}<0 then '-' else '' end)"
            f" || trim(varchar_format(abs({name})/power(10,{exponent}),'{NOTATION_MANTISSA_FORMAT}'))"
            f" || 'e' || (case when {exponent}>=0 then '+' else '-' end)"
            f" || lpad(cast(abs(int({exponent})) as varchar(5)),2,'0') end,' ')"
        )

    if family == TypeCategory.BOOLEAN:
        return f"case when coalesce(cast({name} as varchar(5)),'0') in ('1','true','TRUE') then '1' else '0' end"

    if family == TypeCategory.TIMESTAMP:
        if data_type == 'time':
            return f"coalesce(replace(char({name},iso),'.',''),' ')"
        return f"coalesce(varchar_format({name},'MMDDYYYYHH24MISS'),' ')"

    if family == TypeCategory.BINARY:
        return f"coalesce(lower(hex(hash_md5({name}))),' ')"

    if family == TypeCategory.CHARACTER:
        return f"coalesce(nullif(rtrim(cast({name} as varchar(32672))),''),' ')"

    return f"coalesce(cast({name} as varchar(32672)),' ')"
