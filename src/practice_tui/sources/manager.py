from __future__ import annotations

import logging
from typing import Any, Dict, Type

from ..cache import Cache
from ..config import CACHE_DIR, CACHE_TTL
from .base import Source
from .http import HTTPSource
from .local import LocalSource

logger = logging.getLogger("practice")

AVAILABLE_SOURCES: Dict[str, Type[Source]] = {
    "local": LocalSource,
    "http": HTTPSource,
}


def get_cache(config: Dict[str, Any]) -> Cache:
    """The on-disk cache used by the http source."""
    source_config = config.get("sources", {}).get("http", {})
    return Cache(
        cache_dir=source_config.get("cache_dir", CACHE_DIR),
        ttl=config.get("cache_ttl", CACHE_TTL),
    )


def get_source(config: Dict[str, Any]) -> Source:
    """Build the dataset source selected by the ``source`` config key."""
    source_name = config.get("source", "local")
    source_class = AVAILABLE_SOURCES.get(source_name)
    if not source_class:
        raise ValueError(f"Unknown source: {source_name}")

    source_config = config.get("sources", {}).get(source_name, {})
    logger.info("Using %s question source", source_name)
    if source_class is HTTPSource:
        return HTTPSource(source_config, cache=get_cache(config))
    return source_class(source_config)
