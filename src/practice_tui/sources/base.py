from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from ..config import DatasetInfo
from ..datamodels import Question
from ..errors import LoadError

logger = logging.getLogger("practice")


class Source(ABC):
    """Abstract base class for a question dataset source."""

    def __init__(self, config: Dict[str, Any]):
        self.config = config

    @abstractmethod
    def fetch_records(self, dataset: DatasetInfo) -> Any:
        """Return the decoded JSON document of a dataset file."""
        pass

    def get_questions(self, dataset: DatasetInfo) -> List[Question]:
        """Return the questions of a dataset, or raise LoadError."""
        records = self.fetch_records(dataset)
        return parse_questions(records, dataset.id)


def parse_questions(records: Any, dataset_id: str) -> List[Question]:
    if not isinstance(records, list):
        raise LoadError("dataset file must contain a JSON array", dataset_id)
    questions = []
    for index, record in enumerate(records):
        try:
            questions.append(Question.from_dict(record))
        except ValueError as e:
            raise LoadError(f"bad question at index {index}: {e}", dataset_id) from e
    logger.debug("Parsed %d questions for %s", len(questions), dataset_id)
    return questions
