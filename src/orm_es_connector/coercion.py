"""Identifier and field value coercion."""

from __future__ import annotations

import math
from decimal import Decimal
from typing import Any

from .schema import FieldType


def coerce_id(value: Any) -> Any:
    """Return the string form of a document id.

    Never raises: a value that cannot be stringified (``None`` included) is
    returned unchanged, and callers decide whether it is usable.
    """
    if value is None or isinstance(value, str):
        return value
    try:
        return str(value)
    except Exception:  # noqa: BLE001
        return value


def is_present(value: Any) -> bool:
    """Whether a source value counts as set.

    ``None``, ``False``, ``""``, zero and NaN are absent; empty containers
    are present.
    """
    if value is None or value is False or value == "":
        return False
    if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
        return not (value == 0 or math.isnan(value))
    return True


def string_form(value: Any) -> str:
    """Stringify a value the way the datasource JSON renders it.

    Sequences are joined with commas, booleans are lower-case and integral
    floats drop their fraction (``5.0`` gives ``"5"``).
    """
    if isinstance(value, (list, tuple)):
        return ",".join("" if v is None else string_form(v) for v in value)
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if math.isnan(value):
            return "NaN"
        if math.isinf(value):
            return "Infinity" if value > 0 else "-Infinity"
        if value.is_integer():
            return str(int(value))
    return str(value)


def to_number(value: Any) -> int | float | Decimal:
    """Parse *value* as a number; unparseable input yields ``math.nan``."""
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float, Decimal)):
        return value
    if not isinstance(value, str):
        return math.nan
    text = value.strip()
    if not text:
        return 0
    # Digit-group underscores are not part of the number syntax.
    if "_" in text:
        return math.nan
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return float(text)
    except ValueError:
        return math.nan


def coerce_field(declared: FieldType, value: Any) -> Any:
    """Convert a raw source value to the property's declared type.

    Array properties wrap the string form of the whole value in a
    single-element list; elements are not mapped one by one.
    """
    if declared is FieldType.ARRAY:
        if value is None or (hasattr(value, "__len__") and len(value) == 0):
            return []
        return [string_form(value)]
    if declared is FieldType.STRING:
        return string_form(value)
    if declared is FieldType.NUMBER:
        return to_number(value)
    return value
