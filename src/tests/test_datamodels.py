from __future__ import annotations

import pytest

from practice_tui.datamodels import (
    CategoryStats,
    Question,
    TaggedQuestion,
    next_status,
)


def test_status_cycle():
    assert next_status("unsolved") == "attempted"
    assert next_status("attempted") == "solved"
    assert next_status("solved") == "unsolved"


def test_from_dict_normalises_ids_and_links():
    q = Question.from_dict(
        {
            "id": 7,
            "title": "Spiral Matrix",
            "difficulty": "Medium",
            "practiceLinks": {"leetcode": None, "gfg": "https://gfg.example/spiral", "other": "x"},
        }
    )
    assert q.id == "7"
    assert q.practice_links == {"gfg": "https://gfg.example/spiral"}
    assert q.tags == [] and q.hints == []


def test_from_dict_rejects_unknown_difficulty():
    with pytest.raises(ValueError):
        Question.from_dict({"id": "1", "title": "x", "difficulty": "Trivial"})


def test_tagging_keeps_fields():
    q = Question(id="1", title="Two Sum", tags=["hashing"])
    tagged = TaggedQuestion.tag(q, "zoho-dsa", "Zoho DSA")
    assert tagged.title == "Two Sum"
    assert tagged.tags == ["hashing"]
    assert (tagged.source, tagged.source_name) == ("zoho-dsa", "Zoho DSA")
    retagged = TaggedQuestion.tag(tagged, "lld", "Low Level Design")
    assert retagged.source == "lld"


def test_stats_percent():
    assert CategoryStats(solved=9, attempted=0, total=18).percent == 50.0
    assert CategoryStats(solved=0, attempted=0, total=0).percent == 0.0
