"""
colmeta - Cross-engine column metadata normalization
"""

__version__ = "1.0.0"
__author__ = "colmeta Team"

from colmeta.core.columns import fetch_columns, get_columns
from colmeta.core.types import TypeCategory, get_data_class
from colmeta.config import Config

__all__ = ["fetch_columns", "get_columns", "get_data_class", "TypeCategory", "Config"]
