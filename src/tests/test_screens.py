from __future__ import annotations

from practice_tui.datamodels import ProgressEntry, Question
from practice_tui.screens import first_practice_link, question_markdown


def test_question_markdown_sections():
    q = Question(
        id="dsa1",
        title="Two Sum",
        description="Find two numbers.",
        difficulty="Easy",
        category="Arrays",
        tags=["hashing"],
        companies=["Zoho", "Amazon"],
        hints=["Use a map."],
        time_complexity="O(n)",
        space_complexity="O(n)",
        practice_links={"leetcode": "https://leetcode.com/problems/two-sum/"},
    )
    text = question_markdown(q, ProgressEntry("solved", True))
    assert text.startswith("# Two Sum")
    assert "● Solved" in text and "Bookmarked" in text
    assert "- Use a map." in text
    assert "**Time:** O(n)" in text
    assert "[LeetCode](https://leetcode.com/problems/two-sum/)" in text
    assert "Zoho, Amazon" in text
    assert "`#hashing`" in text


def test_question_markdown_skips_empty_sections():
    text = question_markdown(Question(id="1", title="Bare"), ProgressEntry())
    assert "Hints" not in text
    assert "Practice Links" not in text
    assert "Bookmarked" not in text


def test_first_practice_link_prefers_site_order():
    q = Question(id="1", title="x", practice_links={"codechef": "c", "gfg": "g"})
    assert first_practice_link(q) == "g"
    assert first_practice_link(Question(id="2", title="y")) is None
