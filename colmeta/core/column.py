"""
Column descriptor produced by the metadata fetcher.
"""

from dataclasses import dataclass

from colmeta.core.types import TypeCategory


@dataclass
class ColumnDescriptor:
    """Normalized metadata for a single table column."""
    column_name: str
    data_type: str
    data_length: int = 0
    data_precision: int = 0
    data_scale: int = 0
    nullable: bool = True
    primary_key: bool = False
    supported: bool = True
    data_class: TypeCategory = TypeCategory.CHARACTER
    preserve_case: bool = False
    value_expression: str = ""

    def to_dict(self) -> dict:
        return {
            'supported': self.supported,
            'columnName': self.column_name,
            'dataType': self.data_type,
            'dataLength': self.data_length,
            'dataPrecision': self.data_precision,
            'dataScale': self.data_scale,
            'nullable': self.nullable,
            'primaryKey': self.primary_key,
            'dataClass': self.data_class.value,
            'preserveCase': self.preserve_case,
            'valueExpression': self.value_expression,
        }
