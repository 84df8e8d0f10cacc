"""
Cell value coercion by declared column type.

Lenient on purpose: spreadsheet exports are hand-edited, so a malformed
number reads as 0 instead of failing the whole sheet.
"""

from __future__ import annotations

import math
import re
from typing import Union

from gsheet_gamedata.models import DeclaredType, Scalar

# Leading numeric prefix, the way a spreadsheet user reads "12.5kg" or "3 hp"
_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_int_prefix(text: str) -> int:
    match = _INT_PREFIX.match(text)
    return int(match.group(1)) if match else 0


def parse_float_prefix(text: str) -> Union[int, float]:
    """Leading float literal; whole numbers come back as int so "1" serializes as 1"""
    match = _FLOAT_PREFIX.match(text)
    if not match:
        return 0
    value = float(match.group(1))
    if math.isnan(value) or math.isinf(value):
        return 0
    return int(value) if value.is_integer() else value


def coerce_value(declared_type: Union[DeclaredType, str], raw: str) -> Scalar:
    """
    Convert one cell to its typed value.

    int/long -> leading integer (0 when empty or unparsable)
    double/float -> leading float literal (0 when empty or unparsable)
    anything else -> the text itself ("" when empty)
    """
    if not isinstance(declared_type, DeclaredType):
        declared_type = DeclaredType.parse(declared_type)

    if not raw:
        return 0 if declared_type.is_numeric else ""

    if declared_type.is_integer:
        return parse_int_prefix(raw)
    if declared_type.is_floating:
        return parse_float_prefix(raw)
    return raw
