from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional

DIFFICULTIES = ("Easy", "Medium", "Hard")
DIFFICULTY_RANK = {"Easy": 1, "Medium": 2, "Hard": 3}

UNSOLVED = "unsolved"
ATTEMPTED = "attempted"
SOLVED = "solved"
STATUSES = (UNSOLVED, ATTEMPTED, SOLVED)

STATUS_CYCLE = {UNSOLVED: ATTEMPTED, ATTEMPTED: SOLVED, SOLVED: UNSOLVED}

PRACTICE_SITES = ("leetcode", "gfg", "hackerrank", "codechef")
PRACTICE_SITE_NAMES = {
    "leetcode": "LeetCode",
    "gfg": "GeeksforGeeks",
    "hackerrank": "HackerRank",
    "codechef": "CodeChef",
}


def next_status(status: str) -> str:
    """Return the status that follows ``status`` in the solve cycle."""
    return STATUS_CYCLE[status]


def _text(data: Dict[str, Any], key: str) -> str:
    """A string field of a question record; a missing or null value reads as ''."""
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"'{key}' must be a string, got {type(value).__name__}")
    return value


def _text_list(data: Dict[str, Any], key: str) -> List[str]:
    value = data.get(key)
    if value is None:
        return []
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        raise ValueError(f"'{key}' must be a list of strings")
    return list(value)


# --- Data models ---
@dataclass(frozen=True)
class Question:
    id: str
    title: str
    description: str = ""
    difficulty: str = "Easy"
    category: str = ""
    tags: List[str] = field(default_factory=list)
    companies: List[str] = field(default_factory=list)
    hints: List[str] = field(default_factory=list)
    time_complexity: str = ""
    space_complexity: str = ""
    practice_links: Dict[str, Optional[str]] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Question:
        """Build a question from one record of a dataset file."""
        if not isinstance(data, dict):
            raise ValueError(f"Question record must be an object, got {type(data).__name__}")
        if data.get("id") in (None, "") or not data.get("title"):
            raise ValueError("Question record is missing 'id' or 'title'")
        if isinstance(data["id"], bool) or not isinstance(data["id"], (str, int)):
            raise ValueError(f"'id' must be a string or integer, got {type(data['id']).__name__}")

        difficulty = data.get("difficulty", "Easy")
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty {difficulty!r} for question {data['id']!r}")

        links = data.get("practiceLinks") or {}
        if not isinstance(links, dict):
            raise ValueError(f"'practiceLinks' of question {data['id']!r} must be an object")
        return cls(
            id=str(data["id"]),
            title=_text(data, "title"),
            description=_text(data, "description"),
            difficulty=difficulty,
            category=_text(data, "category"),
            tags=_text_list(data, "tags"),
            companies=_text_list(data, "companies"),
            hints=_text_list(data, "hints"),
            time_complexity=_text(data, "timeComplexity"),
            space_complexity=_text(data, "spaceComplexity"),
            practice_links={site: _text(links, site) for site in PRACTICE_SITES if links.get(site)},
        )


@dataclass(frozen=True)
class TaggedQuestion(Question):
    """A question merged into a cross-dataset collection."""

    source: str = ""
    source_name: str = ""

    @classmethod
    def tag(cls, question: Question, source: str, source_name: str) -> TaggedQuestion:
        if isinstance(question, TaggedQuestion):
            return replace(question, source=source, source_name=source_name)
        return cls(**question.__dict__, source=source, source_name=source_name)


@dataclass
class ProgressEntry:
    status: str = UNSOLVED
    bookmarked: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {"status": self.status, "bookmarked": self.bookmarked}


@dataclass
class FilterSpec:
    search: str = ""
    difficulty: str = ""
    category: str = ""
    bookmarked: bool = False


@dataclass(frozen=True)
class CategoryStats:
    solved: int
    attempted: int
    total: int

    @property
    def percent(self) -> float:
        if not self.total:
            return 0.0
        return self.solved / self.total * 100
