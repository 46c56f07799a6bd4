"""Creation and removal of the question index."""
from __future__ import annotations

import logging

from ..clients import ElasticsearchClient, SearchEngineError
from ..config import AppConfig
from .mapping import MAPPING

LOGGER = logging.getLogger(__name__)


async def create_index(client: ElasticsearchClient, config: AppConfig) -> bool:
    """Create the configured index. Engine errors are logged, not raised."""

    try:
        await client.create_index(config.search.index, {"mappings": MAPPING})
    except SearchEngineError as exc:
        LOGGER.error("Unable to create index %s: %s", config.search.index, exc)
        return False
    LOGGER.info("Created index %s", config.search.index)
    return True


async def delete_index(client: ElasticsearchClient, config: AppConfig) -> bool:
    """Delete the configured index; the local file cache is left alone."""

    try:
        await client.delete_index(config.search.index)
    except SearchEngineError as exc:
        LOGGER.error("Unable to delete index %s: %s", config.search.index, exc)
        return False
    LOGGER.info("Deleted index %s", config.search.index)
    return True


__all__ = ["create_index", "delete_index"]
