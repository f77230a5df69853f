from __future__ import annotations

import hashlib
import json
import logging
import os
import time
from typing import Any, Optional

logger = logging.getLogger("practice")


class Cache:
    """
    JSON documents fetched over HTTP, one file per URL, valid for ``ttl`` seconds.
    """

    def __init__(self, cache_dir: str, ttl: int):
        self.cache_dir = os.path.expanduser(cache_dir)
        self.ttl = ttl

    def _path_for(self, url: str) -> str:
        digest = hashlib.sha256(url.encode()).hexdigest()[:32]
        return os.path.join(self.cache_dir, f"{digest}.json")

    def get(self, url: str) -> Optional[Any]:
        path = self._path_for(url)
        if not os.path.exists(path):
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                entry = json.load(f)
        except (IOError, json.JSONDecodeError) as e:
            logger.warning("Ignoring unreadable cache file %s: %s", path, e)
            return None

        if entry.get("url") != url:
            return None
        if time.time() - entry.get("fetched_at", 0) > self.ttl:
            logger.debug("Cached copy of %s is stale", url)
            return None
        logger.debug("Using cached copy of %s", url)
        return entry.get("document")

    def set(self, url: str, document: Any) -> None:
        entry = {"url": url, "fetched_at": time.time(), "document": document}
        try:
            os.makedirs(self.cache_dir, exist_ok=True)
            with open(self._path_for(url), "w", encoding="utf-8") as f:
                json.dump(entry, f)
        except IOError as e:
            logger.warning("Failed to cache %s: %s", url, e)

    def clear(self) -> None:
        """Remove every cached document."""
        if not os.path.isdir(self.cache_dir):
            return
        for filename in os.listdir(self.cache_dir):
            if filename.endswith(".json"):
                os.unlink(os.path.join(self.cache_dir, filename))
        logger.info("Cache cleared.")
