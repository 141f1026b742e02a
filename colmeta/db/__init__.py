"""
Database engine modules.
"""

from colmeta.db.dialects import Dialect, resolve_dialect, normalize_database_type
from colmeta.db.connection_factory import get_connection, get_role_connection

__all__ = [
    "Dialect",
    "resolve_dialect",
    "normalize_database_type",
    "get_connection",
    "get_role_connection",
]
