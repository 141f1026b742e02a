"""
Centralized configuration management.
Loads configuration from environment variables.
"""

import os
import logging
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

logger = logging.getLogger(__name__)


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'y', 'on')


class Config:
    """Centralized configuration management."""

    # Database type per role (source/target)
    SOURCE_TYPE = os.getenv('SOURCE_TYPE', 'postgres')
    TARGET_TYPE = os.getenv('TARGET_TYPE', 'postgres')

    # Numeric value expressions: 'notation' (scientific) or 'standard' (fixed width)
    NUMBER_CAST = os.getenv('NUMBER_CAST', 'notation')

    # Raise on unrecognized database types instead of falling back to postgres
    STRICT_DATABASE_TYPE = _env_flag('STRICT_DATABASE_TYPE')

    # PostgreSQL Configuration
    POSTGRES_HOST = os.getenv('POSTGRES_HOST', 'localhost')
    POSTGRES_PORT = int(os.getenv('POSTGRES_PORT', 5432))
    POSTGRES_DATABASE = os.getenv('POSTGRES_DATABASE', 'postgres')
    POSTGRES_USER = os.getenv('POSTGRES_USER', 'postgres')
    POSTGRES_PASSWORD = os.getenv('POSTGRES_PASSWORD', '')
    POSTGRES_SCHEMA = os.getenv('POSTGRES_SCHEMA', 'public')

    # Oracle Configuration
    ORACLE_HOST = os.getenv('ORACLE_HOST', 'localhost')
    ORACLE_PORT = int(os.getenv('ORACLE_PORT', 1521))
    ORACLE_SERVICE_NAME = os.getenv('ORACLE_SERVICE_NAME', 'FREEPDB1')
    ORACLE_USER = os.getenv('ORACLE_USER', 'system')
    ORACLE_PASSWORD = os.getenv('ORACLE_PASSWORD', '')
    ORACLE_SCHEMA = os.getenv('ORACLE_SCHEMA', ORACLE_USER.upper())

    # Microsoft SQL Server Configuration
    MSSQL_HOST = os.getenv('MSSQL_HOST', 'localhost')
    MSSQL_PORT = int(os.getenv('MSSQL_PORT', 1433))
    MSSQL_DATABASE = os.getenv('MSSQL_DATABASE', 'master')
    MSSQL_USER = os.getenv('MSSQL_USER', 'sa')
    MSSQL_PASSWORD = os.getenv('MSSQL_PASSWORD', '')
    MSSQL_SCHEMA = os.getenv('MSSQL_SCHEMA', 'dbo')

    # MySQL Configuration
    MYSQL_HOST = os.getenv('MYSQL_HOST', 'localhost')
    MYSQL_PORT = int(os.getenv('MYSQL_PORT', 3306))
    MYSQL_DATABASE = os.getenv('MYSQL_DATABASE', 'mysql')
    MYSQL_USER = os.getenv('MYSQL_USER', 'root')
    MYSQL_PASSWORD = os.getenv('MYSQL_PASSWORD', '')

    # DB2 Configuration
    DB2_HOST = os.getenv('DB2_HOST', 'localhost')
    DB2_PORT = int(os.getenv('DB2_PORT', 50000))
    DB2_DATABASE = os.getenv('DB2_DATABASE', 'testdb')
    DB2_USER = os.getenv('DB2_USER', 'db2inst1')
    DB2_PASSWORD = os.getenv('DB2_PASSWORD', '')
    DB2_SCHEMA = os.getenv('DB2_SCHEMA', DB2_USER.upper())

    @classmethod
    def validate(cls) -> bool:
        """
        Validate required configuration.

        Returns:
            bool: True if configuration is valid
        """
        if cls.NUMBER_CAST not in ('notation', 'standard'):
            logger.warning(f"Unknown NUMBER_CAST '{cls.NUMBER_CAST}', using 'notation'")

        for role in ('source', 'target'):
            db_type = cls.get_database_type(role)
            password_key = f"{(db_type or 'postgres').upper()}_PASSWORD"
            if not getattr(cls, password_key, ''):
                logger.warning(f"Missing recommended config: {password_key} ({role})")

        return True

    @classmethod
    def get_database_type(cls, role: str) -> Optional[str]:
        """
        Get the configured database type for a role.

        Args:
            role: Role name ('source' or 'target')

        Returns:
            Database type string, or None if the role is not configured
        """
        if not role:
            return None
        return getattr(cls, f"{role.upper()}_TYPE", None)

    @classmethod
    def get_postgres_config(cls) -> dict:
        """Get PostgreSQL configuration as dictionary."""
        return {
            'host': cls.POSTGRES_HOST,
            'port': cls.POSTGRES_PORT,
            'database': cls.POSTGRES_DATABASE,
            'user': cls.POSTGRES_USER,
            'password': cls.POSTGRES_PASSWORD,
        }

    @classmethod
    def get_oracle_config(cls) -> dict:
        """Get Oracle configuration as dictionary."""
        return {
            'host': cls.ORACLE_HOST,
            'port': cls.ORACLE_PORT,
            'service_name': cls.ORACLE_SERVICE_NAME,
            'user': cls.ORACLE_USER,
            'password': cls.ORACLE_PASSWORD,
        }

    @classmethod
    def get_mssql_config(cls) -> dict:
        """Get MSSQL configuration as dictionary."""
        return {
            'server': cls.MSSQL_HOST,
            'port': cls.MSSQL_PORT,
            'database': cls.MSSQL_DATABASE,
            'user': cls.MSSQL_USER,
            'password': cls.MSSQL_PASSWORD,
        }

    @classmethod
    def get_mysql_config(cls) -> dict:
        """Get MySQL configuration as dictionary."""
        return {
            'host': cls.MYSQL_HOST,
            'port': cls.MYSQL_PORT,
            'database': cls.MYSQL_DATABASE,
            'user': cls.MYSQL_USER,
            'password': cls.MYSQL_PASSWORD,
        }

    @classmethod
    def get_db2_config(cls) -> dict:
        """Get DB2 configuration as dictionary."""
        return {
            'host': cls.DB2_HOST,
            'port': cls.DB2_PORT,
            'database': cls.DB2_DATABASE,
            'user': cls.DB2_USER,
            'password': cls.DB2_PASSWORD,
        }
