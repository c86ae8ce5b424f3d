"""Mapping between raw Elasticsearch documents and model records."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from .coercion import coerce_field, is_present

if TYPE_CHECKING:
    from .schema import ModelRegistry, PropertySchema

logger = logging.getLogger(__name__)


def to_record(
    schema: PropertySchema, source: Mapping[str, Any] | None
) -> dict[str, Any] | None:
    """Build a record holding the declared fields that are present in *source*.

    Returns ``None`` when *source* is ``None`` or cannot be read; a ``None``
    record means "no record", never "empty record".
    """
    if source is None:
        return None
    try:
        record: dict[str, Any] = {}
        for name, declared in schema.items():
            value = source.get(name)
            if is_present(value):
                record[name] = coerce_field(declared, value)
        return record
    except Exception:  # noqa: BLE001
        logger.warning("Unreadable source document %r", source, exc_info=True)
        return None


class ModelMapper:
    """
    Model-aware document mapper.

    Resolves schemas through a :class:`ModelRegistry`; an undefined model
    degrades to a ``None`` record like any other unreadable document.
    """

    def __init__(self, registry: ModelRegistry) -> None:
        self._registry = registry

    def to_record(
        self, model: str, source: Mapping[str, Any] | None
    ) -> dict[str, Any] | None:
        if source is None:
            return None
        try:
            schema = self._registry.schema_for(model)
        except Exception:  # noqa: BLE001
            logger.warning("Cannot map document to model %r", model, exc_info=True)
            return None
        return to_record(schema, source)

    def from_response(
        self, model: str, response: Mapping[str, Any] | None
    ) -> dict[str, Any] | None:
        """Map a get-by-id response or a search hit (``{"_source": ...}``)."""
        if not response or response.get("found") is False:
            return None
        return self.to_record(model, response.get("_source"))

    def from_hits(
        self, model: str, response: Mapping[str, Any]
    ) -> list[dict[str, Any] | None]:
        """Map every hit of a search response, in hit order."""
        hits = response.get("hits", {}).get("hits", [])
        return [self.from_response(model, hit) for hit in hits]
