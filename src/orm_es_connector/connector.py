"""ElasticsearchConnector — CRUD and query operations over one datasource."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from elastic_transport import TransportError
from elasticsearch import ApiError, NotFoundError

from .coercion import coerce_id
from .connection import ElasticsearchConnectionManager
from .criteria import Criteria
from .exceptions import (
    ElasticsearchQueryError,
    MissingIdentifierError,
    UnsupportedOperationError,
)
from .model_mapper import ModelMapper
from .ports import IConnector
from .query_builder import (
    COUNT_BODY_FIELDS,
    DELETE_BY_QUERY_BODY_FIELDS,
    FilterTranslator,
)
from .schema import ModelRegistry
from .settings import ElasticsearchSettings

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from elasticsearch import AsyncElasticsearch
    from pydantic import BaseModel

    from .ports import Record

logger = logging.getLogger(__name__)

CONNECTOR_NAME = "elasticsearch"


def _body(response: Any) -> Any:
    """Plain body of a client response (mocks may return the body itself)."""
    return getattr(response, "body", response)


class ElasticsearchConnector(IConnector):
    """Datasource connector storing model records as Elasticsearch documents.

    Each model is addressed by its name: documents live in the shared
    ``settings.index`` when one is configured, else in an index named after
    the model.
    """

    name = CONNECTOR_NAME

    def __init__(
        self,
        settings: ElasticsearchSettings | Mapping[str, Any] | None = None,
        *,
        connection: ElasticsearchConnectionManager | None = None,
        id_field: str = "id",
    ) -> None:
        if not isinstance(settings, ElasticsearchSettings):
            settings = ElasticsearchSettings.from_mapping(settings)
        self.settings = settings
        self.id_field = id_field
        self._connection = connection or ElasticsearchConnectionManager(settings)
        self._translator = FilterTranslator(
            index=settings.index, default_size=settings.default_size
        )
        self._registry = ModelRegistry()
        self._mapper = ModelMapper(self._registry)

    @property
    def connection(self) -> ElasticsearchConnectionManager:
        return self._connection

    @property
    def translator(self) -> FilterTranslator:
        return self._translator

    @property
    def mapper(self) -> ModelMapper:
        return self._mapper

    # -- lifecycle ----------------------------------------------------------

    async def connect(self) -> None:
        await self._connection.connect()

    async def disconnect(self) -> None:
        await self._connection.close()

    async def ping(self) -> bool:
        return await self._connection.health_check()

    def get_types(self) -> list[str]:
        return [self.name]

    def define(
        self, model: str, properties: Mapping[str, Any] | type[BaseModel]
    ) -> None:
        """Register the property schema used to map documents of *model*."""
        schema = self._registry.define(model, properties)
        logger.debug("define model=%s schema=%s", model, schema)

    # -- helpers ------------------------------------------------------------

    def _db(self) -> AsyncElasticsearch:
        return self._connection.client

    def _index(self, model: str) -> str:
        return self._translator.index_for(model)

    def _document_id(self, operation: str, model: str, value: Any) -> str:
        document_id = coerce_id(value)
        if document_id is None or document_id == "":
            raise MissingIdentifierError(operation, model)
        return document_id

    async def _request(
        self, operation: str, call: Callable[..., Awaitable[Any]], **kwargs: Any
    ) -> Any:
        logger.debug("%s request=%s", operation, kwargs)
        try:
            response = await call(**kwargs)
        except (ApiError, TransportError, TypeError, ValueError) as e:
            logger.error("%s failed: %s", operation, e)
            raise ElasticsearchQueryError(f"{operation} failed: {e}") from e
        return _body(response)

    def _mapped_document(
        self, operation: str, model: str, data: Mapping[str, Any]
    ) -> Record:
        document = self._mapper.to_record(model, data)
        if document is None:
            raise ElasticsearchQueryError(
                f"{operation}: data cannot be mapped to model {model!r}"
            )
        return document

    # -- queries ------------------------------------------------------------

    async def all(
        self, model: str, criteria: Criteria | Mapping[str, Any] | None = None
    ) -> list[Record]:
        """Search *model*; unreadable hits are skipped."""
        criteria = Criteria.from_filter(criteria)
        size = (criteria.limit if criteria else None) or 0
        offset = (criteria.offset if criteria else None) or 0
        request = self._translator.translate(model, criteria, size, offset)
        body = await self._request(
            "all", self._db().search, **request.client_kwargs()
        )
        mapped = self._mapper.from_hits(model, body)
        records = [r for r in mapped if r is not None]
        logger.debug(
            "all model=%s hits=%d dropped=%d",
            model,
            len(records),
            len(mapped) - len(records),
        )
        return records

    async def find(self, model: str, entity_id: Any) -> Record | None:
        """Load one record by id; ``None`` when the document does not exist."""
        document_id = self._document_id("find", model, entity_id)
        logger.debug("find model=%s id=%s", model, document_id)
        try:
            response = await self._db().get(index=self._index(model), id=document_id)
        except NotFoundError:
            return None
        except (ApiError, TransportError) as e:
            logger.error("find failed: %s", e)
            raise ElasticsearchQueryError(f"find failed: {e}") from e
        return self._mapper.from_response(model, _body(response))

    async def exists(self, model: str, entity_id: Any) -> bool:
        document_id = self._document_id("exists", model, entity_id)
        result = await self._request(
            "exists", self._db().exists, index=self._index(model), id=document_id
        )
        return bool(result)

    async def count(
        self, model: str, criteria: Criteria | Mapping[str, Any] | None = None
    ) -> int:
        request = self._translator.translate(model, criteria)
        body = await self._request(
            "count",
            self._db().count,
            **request.client_kwargs(paginate=False, body_fields=COUNT_BODY_FIELDS),
        )
        return int(body["count"])

    # -- writes -------------------------------------------------------------

    async def create(self, model: str, data: Mapping[str, Any]) -> str:
        """Index a new document; returns the id the backend stored it under."""
        document = dict(data)
        id_value = coerce_id(document.get(self.id_field))
        index = self._index(model)
        if id_value is None or id_value == "":
            body = await self._request(
                "create",
                self._db().index,
                index=index,
                document=document,
                op_type="create",
            )
        else:
            body = await self._request(
                "create",
                self._db().create,
                index=index,
                id=id_value,
                document=document,
            )
        return str(body["_id"])

    async def save(self, model: str, data: Mapping[str, Any]) -> Any:
        """Update an existing document with the model's declared fields."""
        document_id = self._document_id("save", model, data.get(self.id_field))
        document = self._mapped_document("save", model, data)
        return await self._request(
            "save",
            self._db().update,
            index=self._index(model),
            id=document_id,
            doc=document,
        )

    async def update_or_create(self, model: str, data: Mapping[str, Any]) -> Any:
        """Update the document, creating it when it does not exist yet."""
        document_id = self._document_id(
            "update_or_create", model, data.get(self.id_field)
        )
        document = self._mapped_document("update_or_create", model, data)
        return await self._request(
            "update_or_create",
            self._db().update,
            index=self._index(model),
            id=document_id,
            doc=document,
            doc_as_upsert=True,
        )

    async def update_attributes(
        self,
        model: str,  # noqa: ARG002
        entity_id: Any,  # noqa: ARG002
        data: Mapping[str, Any],  # noqa: ARG002
    ) -> Any:
        # Merge vs. replace semantics are undefined.
        raise UnsupportedOperationError(
            f"update_attributes is not supported by the {self.name} connector"
        )

    async def destroy(self, model: str, entity_id: Any) -> Any:
        document_id = self._document_id("destroy", model, entity_id)
        return await self._request(
            "destroy", self._db().delete, index=self._index(model), id=document_id
        )

    async def destroy_all(
        self, model: str, criteria: Criteria | Mapping[str, Any] | None = None
    ) -> Any:
        """Delete every document matching *criteria* (all of them when omitted)."""
        request = self._translator.translate(model, criteria)
        kwargs = request.client_kwargs(
            paginate=False, body_fields=DELETE_BY_QUERY_BODY_FIELDS
        )
        kwargs.setdefault("body", {}).setdefault("query", {"match_all": {}})
        return await self._request("destroy_all", self._db().delete_by_query, **kwargs)
