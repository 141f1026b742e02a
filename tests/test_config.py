"""
Unit tests for the Config class.
"""

import os
import unittest
from unittest.mock import patch

from colmeta.config import Config, _env_flag


class TestConfig(unittest.TestCase):
    """Test cases for Config class."""

    def test_default_postgres_port(self):
        """Test default PostgreSQL port is integer."""
        self.assertIsInstance(Config.POSTGRES_PORT, int)

    def test_engine_ports_are_integers(self):
        for key in ('ORACLE_PORT', 'MSSQL_PORT', 'MYSQL_PORT', 'DB2_PORT'):
            self.assertIsInstance(getattr(Config, key), int)

    def test_validate_returns_true(self):
        """Test that validate always returns True (with warnings for missing)."""
        self.assertTrue(Config.validate())

    def test_database_type_for_roles(self):
        with patch.object(Config, 'SOURCE_TYPE', 'oracle'), patch.object(Config, 'TARGET_TYPE', 'db2'):
            self.assertEqual(Config.get_database_type('source'), 'oracle')
            self.assertEqual(Config.get_database_type('TARGET'), 'db2')

    def test_database_type_unknown_role(self):
        self.assertIsNone(Config.get_database_type('replica'))
        self.assertIsNone(Config.get_database_type(''))

    def test_engine_config_dicts(self):
        self.assertIn('service_name', Config.get_oracle_config())
        self.assertIn('server', Config.get_mssql_config())
        for getter in (Config.get_postgres_config, Config.get_mysql_config, Config.get_db2_config):
            config = getter()
            self.assertIn('host', config)
            self.assertIn('password', config)

    @patch.dict(os.environ, {'STRICT_DATABASE_TYPE': 'true', 'OTHER_FLAG': 'no'})
    def test_env_flag(self):
        self.assertTrue(_env_flag('STRICT_DATABASE_TYPE'))
        self.assertFalse(_env_flag('OTHER_FLAG'))
        self.assertTrue(_env_flag('COLMETA_MISSING_FLAG', default=True))


if __name__ == '__main__':
    unittest.main()
