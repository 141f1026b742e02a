"""
Unit tests for the column metadata fetcher.
"""

import logging
import unittest
from unittest.mock import MagicMock, patch

import pytest

from colmeta.config import Config
from colmeta.core.columns import ColumnFetchResult, fetch_columns, get_columns
from colmeta.core.types import UNSUPPORTED_TYPES, TypeCategory
from colmeta.db import mssql, oracle, postgres
from colmeta.exceptions import RetrievalError, UnknownEngineError

LOGGER = 'colmeta.core.columns'

CATALOG_COLUMNS = [
    'owner', 'table_name', 'column_name', 'data_type', 'data_length',
    'data_precision', 'data_scale', 'nullable', 'pk',
]


def _make_conn(rows, names=CATALOG_COLUMNS):
    """Build a mock DB-API connection whose cursor yields rows."""
    mock_conn = MagicMock()
    mock_cursor = MagicMock()
    mock_cursor.description = [(name, None, None, None, None, None, None) for name in names]
    mock_cursor.__iter__.return_value = iter(rows)
    mock_conn.cursor.return_value = mock_cursor
    return mock_conn, mock_cursor


def _warnings(cm):
    return [r for r in cm.records if r.levelno == logging.WARNING]


def _errors(cm):
    return [r for r in cm.records if r.levelno == logging.ERROR]


class TestFetchColumns(unittest.TestCase):
    """Test cases for fetch_columns."""

    def setUp(self):
        self.patchers = [
            patch.object(Config, 'SOURCE_TYPE', 'oracle'),
            patch.object(Config, 'TARGET_TYPE', 'postgres'),
            patch.object(Config, 'STRICT_DATABASE_TYPE', False),
        ]
        for p in self.patchers:
            p.start()

    def tearDown(self):
        for p in self.patchers:
            p.stop()

    def test_two_columns_in_catalog_order(self):
        """Test that descriptors follow catalog order with correct classes."""
        mock_conn, mock_cursor = _make_conn([
            ('public', 'users', 'id', 'int', 0, 32, 0, 'N', 'Y'),
            ('public', 'users', 'name', 'varchar', 100, 0, 0, 'Y', 'N'),
        ])

        with self.assertLogs(LOGGER, level='DEBUG') as cm:
            result = fetch_columns(mock_conn, 'public', 'users', 'target')

        self.assertTrue(result.ok)
        self.assertEqual([c.column_name for c in result.columns], ['id', 'name'])
        self.assertEqual(result.columns[0].data_class, TypeCategory.NUMERIC)
        self.assertEqual(result.columns[1].data_class, TypeCategory.CHARACTER)
        self.assertTrue(all(c.supported for c in result.columns))
        self.assertTrue(all(c.value_expression for c in result.columns))
        self.assertEqual(_warnings(cm), [])

        first = result.columns[0]
        self.assertFalse(first.nullable)
        self.assertTrue(first.primary_key)
        self.assertEqual(first.data_precision, 32)
        self.assertEqual(result.columns[1].data_length, 100)
        self.assertTrue(result.columns[1].nullable)
        self.assertFalse(result.columns[1].primary_key)

    def test_query_parameters(self):
        """Test that schema and table are bound as positional parameters."""
        mock_conn, mock_cursor = _make_conn([])

        fetch_columns(mock_conn, 'public', 'users', 'target')

        mock_cursor.execute.assert_called_once_with(postgres.SELECT_COLUMNS_SQL, ('public', 'users'))

    def test_cursor_closed_connection_left_open(self):
        mock_conn, mock_cursor = _make_conn([])

        fetch_columns(mock_conn, 'public', 'users', 'target')

        mock_cursor.close.assert_called_once()
        mock_conn.close.assert_not_called()

    def test_empty_table_returns_empty_result(self):
        mock_conn, _ = _make_conn([])

        result = fetch_columns(mock_conn, 'public', 'empty_table', 'target')

        self.assertEqual(result.columns, [])
        self.assertTrue(result.ok)

    def test_unsupported_type_is_kept_and_warned(self):
        """Test that an unsupported column is included with one warning."""
        mock_conn, _ = _make_conn([
            ('dbo', 'org', 'id', 'int', 0, 10, 0, 'N', 'Y'),
            ('dbo', 'org', 'node', 'hierarchyid', 892, 0, 0, 'Y', 'N'),
        ])

        with patch.object(Config, 'TARGET_TYPE', 'mssql'):
            with self.assertLogs(LOGGER, level='WARNING') as cm:
                result = fetch_columns(mock_conn, 'dbo', 'org', 'target')

        self.assertEqual(len(result.columns), 2)
        node = result.columns[1]
        self.assertFalse(node.supported)
        self.assertEqual(node.data_class, TypeCategory.CHARACTER)
        self.assertTrue(node.value_expression)

        warnings = _warnings(cm)
        self.assertEqual(len(warnings), 1)
        self.assertIn('hierarchyid', warnings[0].getMessage())
        self.assertIn('node', warnings[0].getMessage())

    def test_one_warning_per_unsupported_column(self):
        mock_conn, _ = _make_conn([
            ('HR', 'T', 'A', 'long', 0, 0, 0, 'Y', 'N'),
            ('HR', 'T', 'B', 'rowid', 0, 0, 0, 'Y', 'N'),
            ('HR', 'T', 'C', 'bfile', 0, 0, 0, 'Y', 'N'),
        ])

        with self.assertLogs(LOGGER, level='WARNING') as cm:
            result = fetch_columns(mock_conn, 'HR', 'T', 'source')

        self.assertEqual(len(_warnings(cm)), 3)
        self.assertEqual([c.supported for c in result.columns], [False, False, False])

    def test_source_role_uses_oracle(self):
        """Test that the role selects the oracle query and upper native case."""
        mock_conn, mock_cursor = _make_conn(
            [('HR', 'EMP', 'EMP_ID', 'number', 22, 10, 0, 'N', 'Y'),
             ('HR', 'EMP', 'lastName', 'varchar2', 50, 0, 0, 'Y', 'N')],
            names=[n.upper() for n in CATALOG_COLUMNS],
        )

        result = fetch_columns(mock_conn, 'HR', 'EMP', 'source')

        mock_cursor.execute.assert_called_once_with(oracle.SELECT_COLUMNS_SQL, ('HR', 'EMP'))
        self.assertFalse(result.columns[0].preserve_case)
        self.assertTrue(result.columns[1].preserve_case)
        self.assertIn('"lastName"', result.columns[1].value_expression)

    def test_unknown_role_falls_back_to_postgres(self):
        mock_conn, mock_cursor = _make_conn([
            ('public', 'users', 'Id', 'int4', 0, 32, 0, 'N', 'Y'),
        ])

        result = fetch_columns(mock_conn, 'public', 'users', 'replica')

        mock_cursor.execute.assert_called_once_with(postgres.SELECT_COLUMNS_SQL, ('public', 'users'))
        self.assertTrue(result.columns[0].preserve_case)
        self.assertEqual(result.columns[0].value_expression,
                         postgres.column_value_map(result.columns[0]))

    def test_unknown_type_falls_back_to_postgres(self):
        mock_conn, mock_cursor = _make_conn([])

        with patch.object(Config, 'TARGET_TYPE', 'sybase'):
            fetch_columns(mock_conn, 'public', 'users', 'target')

        mock_cursor.execute.assert_called_once_with(postgres.SELECT_COLUMNS_SQL, ('public', 'users'))

    def test_unknown_type_strict_raises(self):
        mock_conn, mock_cursor = _make_conn([])

        with patch.object(Config, 'TARGET_TYPE', 'sybase'), \
                patch.object(Config, 'STRICT_DATABASE_TYPE', True):
            with self.assertRaises(UnknownEngineError):
                fetch_columns(mock_conn, 'public', 'users', 'target')

        mock_cursor.execute.assert_not_called()

    def test_failure_after_two_rows_returns_prefix(self):
        """Test that a failing iteration keeps the rows read so far."""
        def rows():
            yield ('public', 'users', 'id', 'int', 0, 32, 0, 'N', 'Y')
            yield ('public', 'users', 'name', 'varchar', 100, 0, 0, 'Y', 'N')
            raise RuntimeError("connection reset")

        mock_conn, mock_cursor = _make_conn([])
        mock_cursor.__iter__.return_value = rows()

        with self.assertLogs(LOGGER, level='ERROR') as cm:
            result = fetch_columns(mock_conn, 'public', 'users', 'target')

        self.assertEqual([c.column_name for c in result.columns], ['id', 'name'])
        self.assertFalse(result.ok)
        self.assertIsInstance(result.error, RetrievalError)
        self.assertIsInstance(result.error.cause, RuntimeError)

        errors = _errors(cm)
        self.assertEqual(len(errors), 1)
        self.assertIn('public.users', errors[0].getMessage())
        self.assertIn('connection reset', errors[0].getMessage())
        mock_cursor.close.assert_called_once()

    def test_execute_failure_returns_empty(self):
        mock_conn, mock_cursor = _make_conn([])
        mock_cursor.execute.side_effect = RuntimeError("relation does not exist")

        with self.assertLogs(LOGGER, level='ERROR'):
            result = fetch_columns(mock_conn, 'public', 'missing', 'target')

        self.assertEqual(result.columns, [])
        with self.assertRaises(RetrievalError) as context:
            result.raise_for_error()
        self.assertIn('public.missing', str(context.exception))

    def test_cursor_failure_is_logged(self):
        mock_conn = MagicMock()
        mock_conn.cursor.side_effect = RuntimeError("connection closed")

        with self.assertLogs(LOGGER, level='ERROR'):
            result = fetch_columns(mock_conn, 'public', 'users', 'target')

        self.assertEqual(result.columns, [])
        self.assertFalse(result.ok)

    def test_byte_values_are_decoded(self):
        """Test that mysql-connector byte strings are decoded."""
        mock_conn, _ = _make_conn(
            [(b'shop', b'orders', b'id', b'int', None, 10, 0, b'N', b'Y')],
            names=CATALOG_COLUMNS,
        )

        with patch.object(Config, 'TARGET_TYPE', 'mysql'):
            result = fetch_columns(mock_conn, 'shop', 'orders', 'target')

        column = result.columns[0]
        self.assertEqual(column.column_name, 'id')
        self.assertEqual(column.data_type, 'int')
        self.assertEqual(column.data_length, 0)
        self.assertTrue(column.primary_key)
        self.assertFalse(column.nullable)

    def test_null_sizes_default_to_zero(self):
        mock_conn, _ = _make_conn([
            ('dbo', 't', 'notes', 'ntext', None, None, None, 'Y', 'N'),
        ])

        with patch.object(Config, 'TARGET_TYPE', 'mssql'):
            result = fetch_columns(mock_conn, 'dbo', 't', 'target')

        column = result.columns[0]
        self.assertEqual((column.data_length, column.data_precision, column.data_scale), (0, 0, 0))
        self.assertEqual(column.value_expression, mssql.column_value_map(column))


class TestUnsupportedTypes:
    """Every unsupported type is kept, flagged and warned about once."""

    @pytest.fixture(autouse=True)
    def _target_postgres(self):
        with patch.object(Config, 'TARGET_TYPE', 'postgres'), \
                patch.object(Config, 'STRICT_DATABASE_TYPE', False):
            yield

    @pytest.mark.parametrize("data_type", sorted(UNSUPPORTED_TYPES))
    def test_unsupported_type(self, data_type, caplog):
        mock_conn, _ = _make_conn([
            ('public', 't', 'col', data_type, 0, 0, 0, 'Y', 'N'),
        ])

        with caplog.at_level(logging.WARNING, logger=LOGGER):
            result = fetch_columns(mock_conn, 'public', 't', 'target')

        assert len(result.columns) == 1
        column = result.columns[0]
        assert column.supported is False
        assert column.data_class == TypeCategory.CHARACTER
        assert column.value_expression

        warnings = [r for r in caplog.records if r.levelno == logging.WARNING]
        assert len(warnings) == 1
        assert data_type in warnings[0].getMessage()


class TestGetColumns(unittest.TestCase):
    """Test cases for the list-returning wrapper."""

    @patch.object(Config, 'TARGET_TYPE', 'postgres')
    def test_returns_list(self):
        mock_conn, _ = _make_conn([
            ('public', 'users', 'active', 'bool', 0, 0, 0, 'Y', 'N'),
        ])

        columns = get_columns(mock_conn, 'public', 'users', 'target')

        self.assertEqual(len(columns), 1)
        self.assertEqual(columns[0].data_class, TypeCategory.BOOLEAN)

    @patch.object(Config, 'TARGET_TYPE', 'postgres')
    def test_does_not_raise_on_failure(self):
        mock_conn, mock_cursor = _make_conn([])
        mock_cursor.execute.side_effect = RuntimeError("boom")

        with self.assertLogs(LOGGER, level='ERROR'):
            columns = get_columns(mock_conn, 'public', 'users', 'target')

        self.assertEqual(columns, [])


class TestColumnSerialization(unittest.TestCase):
    """Test cases for descriptor serialization."""

    @patch.object(Config, 'TARGET_TYPE', 'postgres')
    def test_to_dict_keys(self):
        mock_conn, _ = _make_conn([
            ('public', 'users', 'id', 'int', 0, 32, 0, 'N', 'Y'),
        ])

        result = fetch_columns(mock_conn, 'public', 'users', 'target')
        data = result.to_dicts()[0]

        self.assertEqual(set(data), {
            'supported', 'columnName', 'dataType', 'dataLength', 'dataPrecision',
            'dataScale', 'nullable', 'primaryKey', 'dataClass', 'preserveCase',
            'valueExpression',
        })
        self.assertEqual(data['dataClass'], 'numeric')
        self.assertEqual(data['columnName'], 'id')
        self.assertIs(data['primaryKey'], True)

    def test_result_defaults(self):
        result = ColumnFetchResult(schema='s', table='t')
        self.assertTrue(result.ok)
        self.assertEqual(result.columns, [])
        result.raise_for_error()


if __name__ == '__main__':
    unittest.main()
