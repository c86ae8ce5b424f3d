"""Datasource settings for the Elasticsearch connector.

Keys follow snake_case; the camelCase spellings found in datasource JSON files
(``defaultSize``, ``requestTimeout``, ``rejectUnauthorized``) are accepted as
aliases so an existing datasource definition can be validated unchanged.
``requestTimeout`` is given in milliseconds there and is converted to the
seconds used by ``request_timeout``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

HostSpec = str | dict[str, Any]

DEFAULT_HOST = "http://127.0.0.1:9200"
DEFAULT_PAGE_SIZE = 10


class SslSettings(BaseModel):
    """TLS trust material for the transport."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ca: str | None = None
    reject_unauthorized: bool = Field(default=True, alias="rejectUnauthorized")


class MappingSettings(BaseModel):
    """Field mapping installed for one model when the connector connects."""

    model_config = ConfigDict(frozen=True)

    name: str
    properties: dict[str, Any] = Field(default_factory=dict)


class ElasticsearchSettings(BaseModel):
    """
    Immutable connector settings.

    Attributes:
        hosts: One host or a list of hosts. Each host is a URL string or a
            ``{"host": ..., "port": ..., "scheme": ...}`` mapping.
        index: Shared search index. When unset, each model name selects
            its own index.
        default_size: Page size used when a caller asks for a size below 1.
            ``None`` or ``0`` disables the fallback.
        request_timeout: Per-request timeout in seconds.
        log: Level name applied to the client's transport loggers.
        ssl: TLS settings; ``None`` keeps the client defaults.
        basic_auth: ``(username, password)`` for HTTP basic auth.
        api_key: API key credential.
        mappings: Mappings installed on connect, one per model.
        debug: Lower this package's loggers to DEBUG.

    The camelCase ``requestTimeout`` key is read as milliseconds.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    hosts: HostSpec | list[HostSpec] = DEFAULT_HOST
    index: str | None = None
    default_size: int | None = Field(
        default=DEFAULT_PAGE_SIZE, ge=0, alias="defaultSize"
    )
    request_timeout: float | None = Field(default=None, ge=0, alias="requestTimeout")
    log: str = "error"
    ssl: SslSettings | None = None
    basic_auth: tuple[str, str] | None = Field(default=None, alias="basicAuth")
    api_key: str | None = Field(default=None, alias="apiKey")
    mappings: list[MappingSettings] = Field(default_factory=list)
    debug: bool = False

    @model_validator(mode="before")
    @classmethod
    def _timeout_from_milliseconds(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("requestTimeout") is not None:
            data = dict(data)
            data["requestTimeout"] = float(data["requestTimeout"]) / 1000
        return data

    @classmethod
    def from_mapping(cls, data: dict[str, Any] | None) -> ElasticsearchSettings:
        """Validate a plain datasource mapping; ``None`` yields the defaults."""
        return cls.model_validate(data or {})
