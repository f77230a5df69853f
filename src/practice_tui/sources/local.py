from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict

from ..config import BUNDLED_DATA_DIR, DatasetInfo
from ..errors import LoadError
from .base import Source

logger = logging.getLogger("practice")


class LocalSource(Source):
    """Reads dataset files from a directory, the bundled data by default."""

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.data_dir = os.path.expanduser(self.config.get("data_dir") or str(BUNDLED_DATA_DIR))

    def fetch_records(self, dataset: DatasetInfo) -> Any:
        path = os.path.join(self.data_dir, dataset.data_file)
        logger.debug("Reading %s", path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise LoadError(f"failed to read {path}: {e}", dataset.id) from e
