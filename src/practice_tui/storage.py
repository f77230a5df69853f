from __future__ import annotations

import logging
import os
from abc import ABC, abstractmethod
from typing import Optional

logger = logging.getLogger("practice")


class ProgressStorage(ABC):
    """Persistence port holding the serialized progress document."""

    @abstractmethod
    def read(self) -> Optional[str]:
        """Return the stored document, or None if nothing was saved yet."""
        pass

    @abstractmethod
    def write(self, data: str) -> None:
        """Replace the stored document. Failures propagate to the caller."""
        pass


class JsonFileStorage(ProgressStorage):
    def __init__(self, path: str):
        self.path = path

    def read(self) -> Optional[str]:
        if not os.path.exists(self.path):
            return None
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Failed to read progress file %s: %s", self.path, e)
            return None

    def write(self, data: str) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        tmp_path = f"{self.path}.tmp"
        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(data)
        os.replace(tmp_path, self.path)
        logger.debug("Saved progress to %s", self.path)


class MemoryStorage(ProgressStorage):
    def __init__(self, data: Optional[str] = None):
        self.data = data
        self.writes = 0

    def read(self) -> Optional[str]:
        return self.data

    def write(self, data: str) -> None:
        self.data = data
        self.writes += 1
