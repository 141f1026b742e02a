"""
Column metadata fetcher.

Reads a table's columns from an engine catalog and turns each row into a
ColumnDescriptor annotated with data class, supportedness, identifier case
and the destination engine's value expression.
"""

import logging
from dataclasses import dataclass, field
from typing import Optional

from colmeta.core.column import ColumnDescriptor
from colmeta.core.identifiers import preserve_case
from colmeta.core.types import get_data_class, is_supported
from colmeta.db.dialects import Dialect, resolve_role_dialect
from colmeta.exceptions import RetrievalError

logger = logging.getLogger(__name__)


@dataclass
class ColumnFetchResult:
    """Columns read for one table, plus the error that cut the read short (if any)."""
    schema: str
    table: str
    columns: list[ColumnDescriptor] = field(default_factory=list)
    error: Optional[RetrievalError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def raise_for_error(self) -> None:
        if self.error is not None:
            raise self.error

    def to_dicts(self) -> list[dict]:
        return [c.to_dict() for c in self.columns]


def _decode(value):
    # mysql-connector may return bytes for information_schema columns
    return value.decode('utf-8') if isinstance(value, (bytes, bytearray)) else value


def _as_int(value) -> int:
    value = _decode(value)
    return int(value) if value is not None else 0


def _as_flag(value) -> bool:
    value = _decode(value)
    return value is not None and str(value).strip().upper() == 'Y'


def build_column(row: dict, dialect: Dialect) -> ColumnDescriptor:
    """
    Build a descriptor from one catalog row.

    Args:
        row: Catalog row keyed by lowercase column name
        dialect: Destination dialect

    Returns:
        Fully populated ColumnDescriptor
    """
    column_name = _decode(row['column_name'])
    data_type = _decode(row['data_type'])
    supported = is_supported(data_type)

    if not supported:
        logger.warning(f"Unsupported data type ({data_type}) for column ({column_name})")

    column = ColumnDescriptor(
        column_name=column_name,
        data_type=data_type,
        data_length=_as_int(row.get('data_length')),
        data_precision=_as_int(row.get('data_precision')),
        data_scale=_as_int(row.get('data_scale')),
        nullable=_as_flag(row.get('nullable')),
        primary_key=_as_flag(row.get('pk')),
        supported=supported,
        data_class=get_data_class(data_type),
        preserve_case=preserve_case(dialect.native_case, column_name),
    )
    column.value_expression = dialect.value_expression(column)

    return column


def fetch_columns(conn, schema: str, table: str, dest_role: str) -> ColumnFetchResult:
    """
    Retrieve column metadata for a table.

    The catalog query and value expressions follow the database type
    configured for dest_role, which need not be the engine behind conn.
    A failing query is logged and reported on the result together with the
    columns read before the failure; it is never raised from here.

    Args:
        conn: Open DB-API connection (owned by the caller, left open)
        schema: Schema name of the table
        table: Table name
        dest_role: Role of the database ('source' or 'target')

    Returns:
        ColumnFetchResult with one descriptor per catalog row, in catalog order

    Raises:
        UnknownEngineError: If the role's database type is unknown and strict
            resolution is enabled
    """
    dialect = resolve_role_dialect(dest_role)
    result = ColumnFetchResult(schema=schema, table=table)

    cursor = None
    try:
        cursor = conn.cursor()
        cursor.execute(dialect.columns_sql, (schema, table))
        names = [_decode(d[0]).lower() for d in cursor.description]

        for row in cursor:
            result.columns.append(build_column(dict(zip(names, row)), dialect))

        logger.debug(f"Found {len(result.columns)} columns in table '{schema}.{table}' ({dialect.name})")
    except Exception as e:
        logger.error(f"Error retrieving columns for table {schema}.{table}:  {e}")
        result.error = RetrievalError(schema, table, e)
    finally:
        if cursor is not None:
            try:
                cursor.close()
            except Exception as e:
                logger.debug(f"Error closing cursor: {e}")

    return result


def get_columns(conn, schema: str, table: str, dest_role: str) -> list[ColumnDescriptor]:
    """
    Retrieve column metadata for a table as a plain list.

    Retrieval errors are logged by fetch_columns and yield the (possibly
    empty) list of columns read before the failure.
    """
    return fetch_columns(conn, schema, table, dest_role).columns
