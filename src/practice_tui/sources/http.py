from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..cache import Cache
from ..config import HTTP_TIMEOUT, REQUEST_HEADERS, DatasetInfo
from ..errors import LoadError
from .base import Source

logger = logging.getLogger("practice")


class HTTPSource(Source):
    """Fetches dataset files from a static file host."""

    def __init__(self, config: Dict[str, Any], cache: Optional[Cache] = None):
        super().__init__(config)
        base_url = self.config.get("base_url")
        if not base_url:
            raise ValueError("The http source needs a 'base_url' setting")
        self.base_url = base_url.rstrip("/")
        self.timeout = self.config.get("timeout", HTTP_TIMEOUT)
        self.cache = cache
        self.session = self._create_session()

    def _create_session(self) -> requests.Session:
        s = requests.Session()
        s.headers.update(REQUEST_HEADERS)
        retries = Retry(
            total=3, backoff_factor=0.3, status_forcelist=[429, 500, 502, 503, 504]
        )
        adapter = HTTPAdapter(max_retries=retries)
        s.mount("https://", adapter)
        s.mount("http://", adapter)
        return s

    def url_for(self, dataset: DatasetInfo) -> str:
        return f"{self.base_url}/{dataset.data_file}"

    def fetch_records(self, dataset: DatasetInfo) -> Any:
        url = self.url_for(dataset)
        if self.cache is not None:
            cached = self.cache.get(url)
            if cached is not None:
                return cached

        try:
            logger.debug("Fetching %s", url)
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
            records = resp.json()
        except requests.RequestException as e:
            logger.warning("Fetching %s failed: %s", url, e)
            raise LoadError(f"failed to fetch {url}: {e}", dataset.id) from e
        except ValueError as e:
            raise LoadError(f"{url} did not return JSON: {e}", dataset.id) from e

        if self.cache is not None:
            self.cache.set(url, records)
        return records
