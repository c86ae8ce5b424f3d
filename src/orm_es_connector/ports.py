"""IConnector — data-access protocol the model layer calls into."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from pydantic import BaseModel

    from .criteria import Criteria

Record = dict[str, Any]


@runtime_checkable
class IConnector(Protocol):
    """
    Generic CRUD/query surface of a datasource connector.

    Records are plain mappings of field name to value. Criteria are either a
    :class:`~orm_es_connector.criteria.Criteria` or a filter mapping with
    ``where``/``native``/``limit``/``skip`` keys::

        await connector.all("Book", {"where": {"author": "Tolkien"}, "limit": 5})
    """

    async def connect(self) -> None: ...

    async def disconnect(self) -> None: ...

    def define(
        self, model: str, properties: Mapping[str, Any] | type[BaseModel]
    ) -> None: ...

    async def all(
        self, model: str, criteria: Criteria | Mapping[str, Any] | None = None
    ) -> list[Record]: ...

    async def find(self, model: str, entity_id: Any) -> Record | None: ...

    async def exists(self, model: str, entity_id: Any) -> bool: ...

    async def count(
        self, model: str, criteria: Criteria | Mapping[str, Any] | None = None
    ) -> int: ...

    async def create(self, model: str, data: Mapping[str, Any]) -> str: ...

    async def save(self, model: str, data: Mapping[str, Any]) -> Any: ...

    async def update_or_create(self, model: str, data: Mapping[str, Any]) -> Any: ...

    async def update_attributes(
        self, model: str, entity_id: Any, data: Mapping[str, Any]
    ) -> Any: ...

    async def destroy(self, model: str, entity_id: Any) -> Any: ...

    async def destroy_all(
        self, model: str, criteria: Criteria | Mapping[str, Any] | None = None
    ) -> Any: ...
