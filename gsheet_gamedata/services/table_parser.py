"""
Sheet table parser.

Turns the CSV export of a game-data sheet into a ColumnSchema and a Dataset.

Table layout:
- row 0: display names (column 0 is the key column)
- row 1: declared types
- row 2: free-form separator/comment row, ignored
- row 3+: data rows

Value columns sharing a display name fold into one array field. Data rows
sharing a key merge into one record, in first-seen order.
"""

from __future__ import annotations

import csv
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from gsheet_gamedata.exceptions import MalformedTableError
from gsheet_gamedata.models import (
    ColumnSchema,
    ColumnSpec,
    Dataset,
    DeclaredType,
    FieldSpec,
    FieldValue,
    Record,
    Scalar,
)
from gsheet_gamedata.services.value_coercer import coerce_value

logger = logging.getLogger(__name__)

HEADER_ROW = 0
TYPE_ROW = 1
FIRST_DATA_ROW = 3
MIN_TABLE_LINES = 4


@dataclass(frozen=True)
class TableParseOptions:
    """Options for TableParser."""

    delimiter: str = ","


class TableParser:
    """Parser for two-row-header sheet tables."""

    def __init__(self, options: Optional[TableParseOptions] = None):
        self.options = options or TableParseOptions()

    def split_lines(self, text: str) -> List[str]:
        return text.replace("\r", "").split("\n")

    def split_cells(self, line: str) -> List[str]:
        # Google quotes cells containing the delimiter; csv handles that per line
        return next(csv.reader([line], delimiter=self.options.delimiter), [])

    def parse_schema(self, text: str) -> ColumnSchema:
        """Build the schema from the two header rows only."""
        lines = self.split_lines(text)
        if len(lines) < 2:
            raise MalformedTableError("header and type rows are required", {"lines": len(lines)})
        return self._build_schema(self.split_cells(lines[HEADER_ROW]), self.split_cells(lines[TYPE_ROW]))

    def parse(self, text: str, sheet_name: str = "") -> Dataset:
        lines = self.split_lines(text)
        if len(lines) < MIN_TABLE_LINES:
            raise MalformedTableError(
                f"expected at least {MIN_TABLE_LINES} lines, got {len(lines)}",
                {"lines": len(lines), "sheet": sheet_name},
            )

        schema = self._build_schema(self.split_cells(lines[HEADER_ROW]), self.split_cells(lines[TYPE_ROW]))
        records: Dict[str, Record] = {}
        merged_rows = 0

        for line in lines[FIRST_DATA_ROW:]:
            cells = self.split_cells(line)
            if not cells or not cells[0]:
                continue

            key = cells[0].strip()
            record = records.get(key)
            if record is None:
                records[key] = self._new_record(schema, key, cells)
            else:
                self._merge_row(schema, record, cells)
                merged_rows += 1

        logger.info(
            f"Parsed sheet '{sheet_name}': {len(records)} records, "
            f"{len(schema.fields)} fields, {merged_rows} merged rows"
        )
        return Dataset(sheet_name=sheet_name, table_schema=schema, records=list(records.values()))

    def _build_schema(self, header: List[str], types: List[str]) -> ColumnSchema:
        if not header or not header[0].strip():
            raise MalformedTableError("key column name is empty")

        columns: List[ColumnSpec] = []
        groups: Dict[str, List[int]] = {}
        for index, raw_name in enumerate(header[1:]):
            name = raw_name.strip()
            type_position = index + 1
            if name and type_position >= len(types):
                raise MalformedTableError(
                    f"column '{name}' has no declared type",
                    {"column": name, "header_cells": len(header), "type_cells": len(types)},
                )
            raw_type = types[type_position].strip() if type_position < len(types) else ""
            columns.append(
                ColumnSpec(name=name, declared_type=DeclaredType.parse(raw_type), raw_type=raw_type, index=index)
            )
            if name:
                groups.setdefault(name, []).append(index)

        fields = [
            FieldSpec(name=name, declared_type=columns[indices[0]].declared_type, indices=indices)
            for name, indices in groups.items()
        ]
        return ColumnSchema(
            key_column=header[0].strip(),
            key_type=DeclaredType.parse(types[0] if types else ""),
            columns=columns,
            fields=fields,
        )

    @staticmethod
    def _cell_values(schema: ColumnSchema, field: FieldSpec, cells: List[str]) -> List[Scalar]:
        values = []
        for index in field.indices:
            position = index + 1
            raw = cells[position] if position < len(cells) else ""
            values.append(coerce_value(schema.column_type(index), raw))
        return values

    def _new_record(self, schema: ColumnSchema, key: str, cells: List[str]) -> Record:
        record: Record = {schema.key_column: key}
        for field in schema.fields:
            values = self._cell_values(schema, field, cells)
            record[field.name] = values if field.is_array else values[0]
        return record

    def _merge_row(self, schema: ColumnSchema, record: Record, cells: List[str]) -> None:
        for field in schema.fields:
            values = self._cell_values(schema, field, cells)
            existing: FieldValue = record[field.name]
            if isinstance(existing, list):
                existing.extend(values)
            else:
                record[field.name] = [existing, *values]


def parse_table_to_json(text: str, sheet_name: str = "", delimiter: str = ",") -> str:
    """Parse table text and serialize it as ``{"Datas": [...]}``."""
    return TableParser(TableParseOptions(delimiter=delimiter)).parse(text, sheet_name).to_json()
