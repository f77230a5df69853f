from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict, Iterable, List, Optional

from .config import DatasetCatalog
from .datamodels import FilterSpec, Question, TaggedQuestion
from .filtering import matches

if TYPE_CHECKING:
    from .fetcher import Fetcher
    from .progress import ProgressStore

logger = logging.getLogger("practice")


class GlobalSearch:
    """Run one query across every dataset at once."""

    def __init__(
        self,
        fetcher: Fetcher,
        catalog: DatasetCatalog,
        progress: Optional[ProgressStore] = None,
    ):
        self.fetcher = fetcher
        self.catalog = catalog
        self.progress = progress

    def merge(self, datasets: Dict[str, List[Question]]) -> List[TaggedQuestion]:
        """Tag every question with its dataset, keeping catalog order."""
        merged: List[TaggedQuestion] = []
        for info in self.catalog:
            for question in datasets.get(info.id, []):
                merged.append(TaggedQuestion.tag(question, info.id, info.label))
        return merged

    def query(
        self,
        term: str,
        difficulty: str = "",
        category: str = "",
        bookmarked: bool = False,
    ) -> List[TaggedQuestion]:
        if not term.strip() and not difficulty and not category and not bookmarked:
            return []

        spec = FilterSpec(search=term, difficulty=difficulty, category=category, bookmarked=bookmarked)
        check = None
        if bookmarked:
            if self.progress is None:
                raise ValueError("Filtering by bookmark needs a progress store")
            progress = self.progress

            def check(question: TaggedQuestion) -> bool:
                return progress.is_bookmarked(question.source, question.id)

        merged = self.merge(self.fetcher.load_all())
        results = [q for q in merged if matches(q, spec, check)]
        logger.debug("Global search %r matched %d of %d questions", term, len(results), len(merged))
        return results

    @staticmethod
    def display_categories(datasets: Iterable[Iterable[Question]]) -> List[str]:
        return sorted({q.category for questions in datasets for q in questions if q.category})
