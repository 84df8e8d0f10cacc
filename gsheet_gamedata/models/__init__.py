"""
Shared model definitions for gsheet-gamedata
"""

from .dataset import Dataset, FieldValue, Record, Scalar
from .sheet_source import SheetSource
from .table_schema import ColumnSchema, ColumnSpec, DeclaredType, FieldSpec

__all__ = [
    # sources
    "SheetSource",
    # schema
    "DeclaredType",
    "ColumnSpec",
    "FieldSpec",
    "ColumnSchema",
    # records
    "Dataset",
    "Record",
    "FieldValue",
    "Scalar",
]
