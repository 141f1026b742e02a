"""
Core classification and metadata modules.
"""

from colmeta.core.types import TypeCategory, get_data_class
from colmeta.core.column import ColumnDescriptor

__all__ = ["TypeCategory", "get_data_class", "ColumnDescriptor"]
