"""Search criteria accepted by the connector."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class Criteria:
    """
    Immutable query description.

    Attributes:
        where: Field -> expected value, read as an AND of equality matches.
        native: Query DSL body sent to the backend as-is. Takes precedence
            over ``where``.
        limit: Requested page size.
        offset: Number of hits to skip.
    """

    where: Mapping[str, Any] | None = None
    native: Mapping[str, Any] | None = None
    limit: int | None = None
    offset: int | None = None

    @classmethod
    def from_filter(cls, data: Criteria | Mapping[str, Any] | None) -> Criteria | None:
        """Build criteria from a filter mapping.

        Recognised keys are ``where``, ``native``, ``limit`` and ``skip``
        (or ``offset``). Anything else (``order``, ``fields``...) is ignored.
        """
        if data is None or isinstance(data, Criteria):
            return data
        offset = data.get("skip")
        if offset is None:
            offset = data.get("offset")
        return cls(
            where=data.get("where"),
            native=data.get("native"),
            limit=data.get("limit"),
            offset=offset,
        )
