from __future__ import annotations

from dataclasses import fields
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

from .datamodels import DIFFICULTY_RANK, FilterSpec, Question

if TYPE_CHECKING:
    from .progress import ProgressStore

FILTER_AXES = tuple(f.name for f in fields(FilterSpec))
SORT_KEYS = ("default", "difficulty", "title", "category")


def matches(
    question: Question,
    spec: FilterSpec,
    is_bookmarked: Optional[Callable[[Question], bool]] = None,
) -> bool:
    """Return True if the question satisfies every active axis of the spec."""
    if spec.search:
        term = spec.search.lower()
        found = (
            term in question.title.lower()
            or term in question.description.lower()
            or any(term in tag.lower() for tag in question.tags)
            or any(term in company.lower() for company in question.companies)
            or term in question.category.lower()
        )
        if not found:
            return False

    if spec.difficulty and question.difficulty != spec.difficulty:
        return False

    if spec.category and question.category != spec.category:
        return False

    if spec.bookmarked and is_bookmarked is not None and not is_bookmarked(question):
        return False

    return True


def sort_questions(questions: List[Question], key: str) -> List[Question]:
    """Sort in place by difficulty rank, title or display category."""
    if key == "difficulty":
        questions.sort(key=lambda q: DIFFICULTY_RANK.get(q.difficulty, 0))
    elif key == "title":
        questions.sort(key=lambda q: (q.title.casefold(), q.title))
    elif key == "category":
        questions.sort(key=lambda q: q.category)
    return questions


class QuestionFilter:
    """
    A fixed list of questions and a filtered view of it.

    Every filter change rescans the full base list, so the result depends
    only on the current filter settings and never on the order filters were applied.
    """

    def __init__(self, progress: Optional[ProgressStore] = None):
        self.progress = progress
        self.all_questions: List[Question] = []
        self.filtered_questions: List[Question] = []
        self.filters = FilterSpec()

    def set_questions(self, questions: Sequence[Question]) -> None:
        self.all_questions = list(questions)
        self.filtered_questions = list(questions)

    def _bookmark_check(self, dataset: Optional[str]) -> Callable[[Question], bool]:
        if self.progress is None:
            raise ValueError("Filtering by bookmark needs a progress store")
        progress = self.progress

        def check(question: Question) -> bool:
            source = getattr(question, "source", "") or dataset
            if not source:
                raise ValueError(
                    f"No dataset to look up the bookmark of question {question.id!r}"
                )
            return progress.is_bookmarked(source, question.id)

        return check

    def apply_filters(self, dataset: Optional[str] = None) -> List[Question]:
        check = self._bookmark_check(dataset) if self.filters.bookmarked else None
        self.filtered_questions = [
            q for q in self.all_questions if matches(q, self.filters, check)
        ]
        return self.filtered_questions

    def update_filter(self, axis: str, value, dataset: Optional[str] = None) -> List[Question]:
        if axis not in FILTER_AXES:
            raise ValueError(f"Unknown filter {axis!r}; expected one of {FILTER_AXES}")
        setattr(self.filters, axis, value)
        return self.apply_filters(dataset)

    def reset_filters(self, dataset: Optional[str] = None) -> List[Question]:
        self.filters = FilterSpec()
        return self.apply_filters(dataset)

    def sort(self, key: str) -> List[Question]:
        return sort_questions(self.filtered_questions, key)
