from __future__ import annotations

import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import Dict, List, Optional

from .config import DatasetCatalog
from .datamodels import Question
from .errors import LoadError
from .sources.base import Source

logger = logging.getLogger("practice")


class Fetcher:
    def __init__(self, source: Source, catalog: DatasetCatalog):
        self.source = source
        self.catalog = catalog

    def load(self, dataset_id: str) -> List[Question]:
        dataset = self.catalog.get(dataset_id)
        if dataset is None:
            raise LoadError("unknown dataset", dataset_id)
        return self.source.get_questions(dataset)

    def load_all(self) -> Dict[str, List[Question]]:
        """
        Load every dataset. Results come back in catalog order; if any
        dataset fails the whole call fails.
        """
        ids = self.catalog.ids
        if not ids:
            return {}
        with ThreadPoolExecutor(max_workers=len(ids)) as executor:
            futures = [executor.submit(self.load, dataset_id) for dataset_id in ids]
            results: Dict[str, List[Question]] = {}
            for dataset_id, future in zip(ids, futures):
                try:
                    results[dataset_id] = future.result()
                except LoadError:
                    logger.error("Failed to load dataset %s", dataset_id)
                    raise
        return results


class RequestSequencer:
    """
    Tickets for asynchronous requests, so a completion that arrives after a
    newer request was issued can be recognised and dropped.
    """

    def __init__(self) -> None:
        self._counter = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            self._latest = next(self._counter)
            return self._latest

    def is_current(self, ticket: int) -> bool:
        with self._lock:
            return ticket == self._latest

    @staticmethod
    def worker_name(group: str, ticket: int) -> str:
        """Name a worker so its ticket survives to every state change, errors included."""
        return f"{group}#{ticket}"

    @staticmethod
    def ticket_of(worker_name: Optional[str], group: str) -> Optional[int]:
        """The ticket in a name from ``worker_name``, or None for another group's worker."""
        prefix = f"{group}#"
        if not worker_name or not worker_name.startswith(prefix):
            return None
        return int(worker_name[len(prefix):])
