from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from practice_tui.errors import LoadError
from practice_tui.search import GlobalSearch


@pytest.fixture
def datasets(make_question):
    return {
        "zoho-dsa": [
            make_question("dsa1", "Easy", title="Two Sum", category="Arrays"),
            make_question("dsa2", "Hard", title="Word Ladder", category="Graphs"),
        ],
        "c-programming": [
            make_question("c1", "Easy", title="Reverse a String", category="Arrays & Strings"),
        ],
        "lld": [
            make_question("lld1", "Medium", title="Parking Lot", category="System Design"),
        ],
    }


@pytest.fixture
def fetcher(datasets):
    fetcher = MagicMock()
    fetcher.load_all.return_value = datasets
    return fetcher


@pytest.fixture
def search(fetcher, catalog, store):
    return GlobalSearch(fetcher, catalog, store)


def test_merge_tags_and_keeps_catalog_order(search, datasets):
    merged = search.merge(datasets)
    assert [q.id for q in merged] == ["c1", "dsa1", "dsa2", "lld1"]
    assert [(q.source, q.source_name) for q in merged][:2] == [
        ("c-programming", "C Programming"),
        ("zoho-dsa", "Zoho DSA"),
    ]
    assert merged[1].title == "Two Sum"


def test_query_by_term(search):
    results = search.query("string")
    assert [q.id for q in results] == ["c1"]
    assert results[0].source == "c-programming"


def test_query_by_difficulty_and_category(search):
    assert [q.id for q in search.query("", difficulty="Easy")] == ["c1", "dsa1"]
    assert [q.id for q in search.query("", category="Arrays")] == ["dsa1"]


def test_query_matches_display_category(search):
    assert [q.id for q in search.query("system design")] == ["lld1"]


def test_empty_query_loads_nothing(search, fetcher):
    assert search.query("   ") == []
    fetcher.load_all.assert_not_called()


def test_load_failure_fails_whole_query(search, fetcher):
    fetcher.load_all.side_effect = LoadError("boom", "lld")
    with pytest.raises(LoadError):
        search.query("two")


def test_bookmarks_across_datasets(search, store):
    store.toggle_bookmark("zoho-dsa", "dsa2")
    store.toggle_bookmark("lld", "lld1")
    results = search.query("", bookmarked=True)
    assert [(q.source, q.id) for q in results] == [("zoho-dsa", "dsa2"), ("lld", "lld1")]


def test_display_categories(search, datasets):
    assert search.display_categories(datasets.values()) == [
        "Arrays",
        "Arrays & Strings",
        "Graphs",
        "System Design",
    ]
