"""Index mapping installation."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from elastic_transport import TransportError
from elasticsearch import ApiError

from .exceptions import ElasticsearchConnectionError

if TYPE_CHECKING:
    from elasticsearch import AsyncElasticsearch

    from .settings import ElasticsearchSettings, MappingSettings

logger = logging.getLogger(__name__)


async def put_mapping(
    client: AsyncElasticsearch,
    index: str,
    mapping: MappingSettings,
) -> None:
    """Create *index* if missing, then apply the mapping's properties."""
    if not await client.indices.exists(index=index):
        await client.indices.create(index=index)
    response = await client.indices.put_mapping(
        index=index, properties=mapping.properties
    )
    logger.debug("put_mapping %s on %s: %s", mapping.name, index, response)


async def install_mappings(
    client: AsyncElasticsearch, settings: ElasticsearchSettings
) -> None:
    """Install every configured mapping, one at a time, in declaration order.

    The target index is the shared ``settings.index`` or the lower-cased
    mapping name.
    """
    for mapping in settings.mappings:
        index = settings.index or mapping.name.lower()
        try:
            await put_mapping(client, index, mapping)
        except (ApiError, TransportError) as e:
            logger.error("Installing mapping %s failed: %s", mapping.name, e)
            raise ElasticsearchConnectionError(
                f"Installing mapping {mapping.name!r} failed: {e}"
            ) from e
    logger.debug("All %d mappings installed", len(settings.mappings))
