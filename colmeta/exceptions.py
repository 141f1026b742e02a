"""
Custom exceptions for colmeta.
"""

from typing import Optional


class ColmetaError(Exception):
    """Base exception for colmeta."""
    pass


class DatabaseConnectionError(ColmetaError):
    """Exception raised when database connection fails."""
    pass


class UnknownEngineError(ColmetaError, ValueError):
    """Exception raised when a database type cannot be resolved."""
    pass


class RetrievalError(ColmetaError):
    """Exception raised when a catalog query fails."""

    def __init__(self, schema: str, table: str, cause: Optional[BaseException] = None):
        self.schema = schema
        self.table = table
        self.cause = cause
        super().__init__(f"Error retrieving columns for table {schema}.{table}: {cause}")
