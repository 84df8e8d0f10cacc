"""
Dataset model: the records parsed from one sheet table
"""

from __future__ import annotations

import json
from typing import Any, Dict, List, Union

from pydantic import BaseModel, Field

from .table_schema import ColumnSchema

Scalar = Union[int, float, str]
FieldValue = Union[Scalar, List[Scalar]]
Record = Dict[str, FieldValue]


class Dataset(BaseModel):
    """Ordered records sharing one schema"""

    sheet_name: str = ""
    table_schema: ColumnSchema
    records: List[Record] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.records)

    def to_payload(self) -> Dict[str, Any]:
        return {"Datas": self.records}

    def to_json(self) -> str:
        """``{"Datas": [...]}`` with 2-space indent; non-ASCII kept as-is"""
        return json.dumps(self.to_payload(), indent=2, ensure_ascii=False)
