from __future__ import annotations

from unittest.mock import patch

from practice_tui.cache import Cache

URL = "https://example.org/data/lld-questions.json"


def test_round_trip(tmp_path):
    cache = Cache(str(tmp_path / "cache"), ttl=60)
    assert cache.get(URL) is None
    cache.set(URL, [{"id": "lld1"}])
    assert cache.get(URL) == [{"id": "lld1"}]


def test_expired_entries_are_ignored(tmp_path):
    cache = Cache(str(tmp_path), ttl=60)
    with patch("practice_tui.cache.time.time", return_value=1000.0):
        cache.set(URL, [1])
    with patch("practice_tui.cache.time.time", return_value=1061.0):
        assert cache.get(URL) is None
    with patch("practice_tui.cache.time.time", return_value=1059.0):
        assert cache.get(URL) == [1]


def test_unreadable_file_is_a_miss(tmp_path):
    cache = Cache(str(tmp_path), ttl=60)
    cache.set(URL, [1])
    path = cache._path_for(URL)
    with open(path, "w") as f:
        f.write("{broken")
    assert cache.get(URL) is None


def test_clear(tmp_path):
    cache = Cache(str(tmp_path), ttl=60)
    cache.set(URL, [1])
    cache.clear()
    assert cache.get(URL) is None
