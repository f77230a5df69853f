from __future__ import annotations

from practice_tui.storage import JsonFileStorage, MemoryStorage


def test_missing_file_reads_none(tmp_path):
    assert JsonFileStorage(str(tmp_path / "progress.json")).read() is None


def test_write_creates_directories(tmp_path):
    path = tmp_path / "nested" / "progress.json"
    storage = JsonFileStorage(str(path))
    storage.write('{"lld": {}}')
    assert path.read_text() == '{"lld": {}}'
    assert storage.read() == '{"lld": {}}'
    assert not (tmp_path / "nested" / "progress.json.tmp").exists()


def test_memory_storage_counts_writes():
    storage = MemoryStorage("{}")
    storage.write("[]")
    assert storage.read() == "[]"
    assert storage.writes == 1


def test_undecodable_file_reads_none(tmp_path):
    path = tmp_path / "progress.json"
    path.write_bytes(b'{"lld": "\xff"}')
    assert JsonFileStorage(str(path)).read() is None
