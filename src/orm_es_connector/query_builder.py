"""Translation of criteria into Elasticsearch search requests."""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from .criteria import Criteria

if TYPE_CHECKING:
    from collections.abc import Collection, Mapping

logger = logging.getLogger(__name__)

# Body keys accepted by the count and delete-by-query APIs.
COUNT_BODY_FIELDS = frozenset({"query"})
DELETE_BY_QUERY_BODY_FIELDS = frozenset({"query", "max_docs", "slice"})


@dataclass(frozen=True)
class QueryRequest:
    """Backend request produced by :class:`FilterTranslator`."""

    type: str
    index: str | None = None
    size: int | None = None
    from_: int | None = None
    body: dict[str, Any] | None = None

    @property
    def target_index(self) -> str:
        """Index the request is sent to: the shared index or the model's own."""
        return self.index or self.type.lower()

    def to_dict(self) -> dict[str, Any]:
        """Request in its documented shape; absent fields are left out."""
        result: dict[str, Any] = {}
        if self.index:
            result["index"] = self.index
        result["type"] = self.type
        if self.size is not None:
            result["size"] = self.size
        if self.from_ is not None:
            result["from"] = self.from_
        if self.body is not None:
            result["body"] = self.body
        return result

    def client_kwargs(
        self,
        *,
        paginate: bool = True,
        body_fields: Collection[str] | None = None,
    ) -> dict[str, Any]:
        """Keyword arguments for the client's search-style APIs.

        The body is sent whole as ``body=``, so keys the client does not
        declare still reach the server. ``size``/``from`` are added to it
        unless the body already carries them. ``paginate=False`` leaves them
        out, and ``body_fields`` keeps only the keys an API accepts.
        """
        body: dict[str, Any] = dict(self.body) if self.body else {}
        if body_fields is not None:
            body = {key: value for key, value in body.items() if key in body_fields}
        if paginate:
            if self.size is not None:
                body.setdefault("size", self.size)
            if self.from_ is not None:
                body.setdefault("from", self.from_)
        kwargs: dict[str, Any] = {"index": self.target_index}
        if body:
            kwargs["body"] = body
        return kwargs


def build_where_query(where: Mapping[str, Any]) -> dict[str, Any]:
    """AND of ``match`` clauses, one per key, in the mapping's order."""
    must = [{"match": {key: value}} for key, value in where.items()]
    return {"query": {"bool": {"must": must}}}


class FilterTranslator:
    """Builds :class:`QueryRequest` objects for one datasource.

    Only equality conjunctions (``where``) are translated. Any other query
    shape must be supplied through ``native``.
    """

    def __init__(
        self, *, index: str | None = None, default_size: int | None = None
    ) -> None:
        self._index = index or None
        self._default_size = default_size or None

    def index_for(self, model: str) -> str:
        """Shared index, or the lower-cased model name when none is configured."""
        return self._index or model.lower()

    def defaults(self, model: str) -> dict[str, Any]:
        """Index/type selectors shared by every request on *model*."""
        selectors: dict[str, Any] = {}
        if self._index:
            selectors["index"] = self._index
        selectors["type"] = model
        return selectors

    def _page_size(self, size: int | None) -> int | None:
        if size is None:
            return None
        if size < 1:
            return self._default_size
        return size

    def translate(
        self,
        model: str,
        criteria: Criteria | Mapping[str, Any] | None,
        size: int | None = None,
        offset: int | None = None,
    ) -> QueryRequest:
        criteria = Criteria.from_filter(criteria)
        body: dict[str, Any] | None = None
        if criteria is not None:
            if criteria.native is not None:
                body = copy.deepcopy(dict(criteria.native))
            elif criteria.where is not None:
                body = build_where_query(criteria.where)

        request = QueryRequest(
            type=model,
            index=self._index,
            size=self._page_size(size),
            from_=offset if offset is not None and offset > 0 else None,
            body=body,
        )
        logger.debug("translate model=%s request=%s", model, request.to_dict())
        return request
