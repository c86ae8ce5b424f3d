"""ElasticsearchConnectionManager — client lifecycle, mappings, health check."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from elasticsearch import AsyncElasticsearch

from .config import build_client_config
from .exceptions import ElasticsearchConnectionError
from .mappings import install_mappings
from .settings import ElasticsearchSettings

if TYPE_CHECKING:
    from collections.abc import Callable

    from .config import ClientConfig

logger = logging.getLogger(__name__)

_TRANSPORT_LOGGERS = ("elasticsearch", "elastic_transport")


class ElasticsearchConnectionManager:
    """Own one ``AsyncElasticsearch`` client and its one-time setup."""

    def __init__(
        self,
        settings: ElasticsearchSettings | None = None,
        *,
        client_factory: Callable[..., AsyncElasticsearch] = AsyncElasticsearch,
    ) -> None:
        self._settings = settings or ElasticsearchSettings()
        self._client_factory = client_factory
        self._client: AsyncElasticsearch | None = None
        self._setup_lock = asyncio.Lock()
        if self._settings.debug:
            logging.getLogger(__package__).setLevel(logging.DEBUG)
            logger.debug("Settings: %s", self._settings.model_dump_json())

    @property
    def settings(self) -> ElasticsearchSettings:
        return self._settings

    def client_config(self) -> ClientConfig:
        """Build a fresh client configuration from the settings."""
        return build_client_config(self._settings)

    async def connect(self) -> AsyncElasticsearch:
        """Create the client and install mappings once. Idempotent."""
        if self._client is not None:
            return self._client
        async with self._setup_lock:
            if self._client is not None:
                return self._client
            config = self.client_config()
            for name in _TRANSPORT_LOGGERS:
                logging.getLogger(name).setLevel(config.log_level)
            try:
                client = self._client_factory(**config.client_kwargs())
            except Exception as e:
                raise ElasticsearchConnectionError(str(e)) from e
            if self._settings.mappings:
                try:
                    await install_mappings(client, self._settings)
                except ElasticsearchConnectionError:
                    await client.close()
                    raise
            self._client = client
            return client

    @property
    def client(self) -> AsyncElasticsearch:
        """Return the client; raises if not connected."""
        if self._client is None:
            raise ElasticsearchConnectionError("Not connected; call connect() first")
        return self._client

    @property
    def connected(self) -> bool:
        return self._client is not None

    async def close(self) -> None:
        """Close the client's transport. Idempotent."""
        if self._client is not None:
            client, self._client = self._client, None
            await client.close()

    async def health_check(self) -> bool:
        """Ping the cluster; return True if reachable."""
        if self._client is None:
            return False
        try:
            result: Any = await self._client.ping()
        except Exception:  # noqa: BLE001
            logger.debug("Could not ping Elasticsearch", exc_info=True)
            return False
        logger.debug("Pinged Elasticsearch: %s", bool(result))
        return bool(result)
