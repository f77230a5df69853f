from __future__ import annotations

import pytest

from practice_tui.config import DATASET_FILES, DATASET_LABELS, DATASET_TOTALS, DatasetCatalog
from practice_tui.datamodels import Question
from practice_tui.progress import ProgressStore
from practice_tui.storage import MemoryStorage


@pytest.fixture
def catalog():
    return DatasetCatalog(DATASET_LABELS, DATASET_FILES, DATASET_TOTALS)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage, catalog):
    return ProgressStore(storage, catalog)


def _question(qid, difficulty="Easy", **kwargs):
    kwargs.setdefault("title", f"Question {qid}")
    kwargs.setdefault("description", "")
    kwargs.setdefault("category", "Arrays")
    return Question(id=str(qid), difficulty=difficulty, **kwargs)


@pytest.fixture
def make_question():
    return _question


@pytest.fixture
def questions():
    return [
        _question(1, "Easy", title="Two Sum", tags=["hashing"], companies=["Amazon"]),
        _question(2, "Hard", title="Word Ladder", category="Graphs", description="Shortest transformation"),
        _question(3, "Medium", title="Coin Change", category="Dynamic Programming"),
        _question(4, "Hard", title="N-Queens", category="Backtracking", companies=["Zoho"]),
        _question(5, "Easy", title="Reverse String", category="Strings"),
    ]
