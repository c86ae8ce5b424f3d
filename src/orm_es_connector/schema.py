"""Property schemas: field name -> declared type tag."""

from __future__ import annotations

import types
from collections.abc import Mapping
from decimal import Decimal
from enum import Enum
from typing import Any, Union, get_args, get_origin

from pydantic import BaseModel

from .exceptions import UnknownModelError


class FieldType(str, Enum):
    """Declared type of a model property."""

    STRING = "string"
    NUMBER = "number"
    ARRAY = "array"
    OTHER = "other"


PropertySchema = Mapping[str, FieldType]

_NUMBER_TYPES = (int, float, Decimal)
_ARRAY_TYPES = (list, tuple, set, frozenset)


def _strip_optional(annotation: Any) -> Any:
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return annotation


def field_type_of(declared: Any) -> FieldType:
    """Resolve a declared property type to a :class:`FieldType`.

    Accepts a ``FieldType``, a type name (``"string"``), a Python type or
    annotation (``str``, ``list[str]``, ``int | None``), or a one-element
    list such as ``[str]`` for array properties.
    """
    if isinstance(declared, FieldType):
        return declared
    if isinstance(declared, str):
        try:
            return FieldType(declared.lower())
        except ValueError:
            return FieldType.OTHER
    if isinstance(declared, list):
        return FieldType.ARRAY
    declared = _strip_optional(declared)
    origin = get_origin(declared) or declared
    if not isinstance(origin, type):
        return FieldType.OTHER
    if issubclass(origin, _ARRAY_TYPES):
        return FieldType.ARRAY
    if issubclass(origin, str):
        return FieldType.STRING
    # bool is an int subclass but is not a numeric property
    if issubclass(origin, bool):
        return FieldType.OTHER
    if issubclass(origin, _NUMBER_TYPES):
        return FieldType.NUMBER
    return FieldType.OTHER


def schema_from_model(model_cls: type[BaseModel]) -> dict[str, FieldType]:
    """Derive a property schema from a pydantic model's field annotations."""
    return {
        name: field_type_of(info.annotation)
        for name, info in model_cls.model_fields.items()
    }


def build_schema(
    properties: Mapping[str, Any] | type[BaseModel],
) -> dict[str, FieldType]:
    """Build a property schema from a mapping of declarations or a model class."""
    if isinstance(properties, type) and issubclass(properties, BaseModel):
        return schema_from_model(properties)
    schema: dict[str, FieldType] = {}
    for name, declared in properties.items():
        # {"type": ...} property definitions, as found in model JSON files
        if isinstance(declared, Mapping):
            declared = declared.get("type")
        schema[name] = field_type_of(declared)
    return schema


class ModelRegistry:
    """Property schemas of the models defined on one connector."""

    def __init__(self) -> None:
        self._schemas: dict[str, dict[str, FieldType]] = {}

    def define(
        self, model: str, properties: Mapping[str, Any] | type[BaseModel]
    ) -> dict[str, FieldType]:
        """Register (or replace) the schema of *model*; returns the schema."""
        schema = build_schema(properties)
        self._schemas[model] = schema
        return schema

    def schema_for(self, model: str) -> dict[str, FieldType]:
        try:
            return self._schemas[model]
        except KeyError:
            raise UnknownModelError(model) from None

    def __contains__(self, model: object) -> bool:
        return model in self._schemas

    def models(self) -> list[str]:
        return list(self._schemas)
