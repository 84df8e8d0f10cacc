"""
Table schema models

A sheet table carries two header rows: display names and declared types.
Column 0 is the key column; the remaining columns are value columns, and
value columns sharing a display name fold into one array field.
"""

from __future__ import annotations

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class DeclaredType(str, Enum):
    """Type token from the second header row"""

    INT = "int"
    LONG = "long"
    DOUBLE = "double"
    FLOAT = "float"
    STRING = "string"
    BOOL = "bool"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, token: str | None) -> "DeclaredType":
        normalized = (token or "").strip().lower()
        for member in cls:
            if member is not cls.UNKNOWN and member.value == normalized:
                return member
        return cls.UNKNOWN

    @property
    def is_integer(self) -> bool:
        return self in (DeclaredType.INT, DeclaredType.LONG)

    @property
    def is_floating(self) -> bool:
        return self in (DeclaredType.DOUBLE, DeclaredType.FLOAT)

    @property
    def is_numeric(self) -> bool:
        return self.is_integer or self.is_floating


class ColumnSpec(BaseModel):
    """One physical value column (key column excluded)"""

    name: str = Field(..., description="Trimmed display name, may be empty")
    declared_type: DeclaredType = Field(..., description="Parsed type token")
    raw_type: str = Field(default="", description="Type token as written in the sheet")
    index: int = Field(..., ge=0, description="Position among value columns")


class FieldSpec(BaseModel):
    """Value columns grouped under one display name"""

    name: str
    declared_type: DeclaredType = Field(..., description="Type of the first column in the group")
    indices: List[int] = Field(default_factory=list)

    @property
    def is_array(self) -> bool:
        return len(self.indices) > 1


class ColumnSchema(BaseModel):
    """Schema of one sheet table"""

    key_column: str
    key_type: DeclaredType = DeclaredType.UNKNOWN
    columns: List[ColumnSpec] = Field(default_factory=list)
    fields: List[FieldSpec] = Field(default_factory=list)

    @property
    def first_property(self) -> str:
        """Field the generated lookup map is keyed by"""
        return self.fields[0].name if self.fields else "id"

    @property
    def field_names(self) -> List[str]:
        return [f.name for f in self.fields]

    def column_type(self, index: int) -> DeclaredType:
        return self.columns[index].declared_type
