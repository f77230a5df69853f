from __future__ import annotations

from unittest.mock import patch

import pytest

from practice_tui import config
from practice_tui.config import DatasetCatalog, build_catalog


def test_builtin_catalog():
    catalog = build_catalog()
    assert catalog.ids == ["c-programming", "zoho-dsa", "lld", "zoho-docs", "logical-coding"]
    assert catalog.total("lld") == 18
    assert catalog.label("zoho-docs") == "Zoho-Docs Questions"
    assert catalog.get("lld").data_file == "lld-questions.json"


def test_unknown_dataset_lookups():
    catalog = build_catalog()
    assert catalog.get("nope") is None
    assert catalog.label("nope") == "nope"
    assert catalog.total("nope") == 0
    assert "nope" not in catalog


def test_catalog_requires_matching_keys():
    with pytest.raises(ValueError):
        DatasetCatalog({"a": "A", "b": "B"}, {"a": "a.json", "b": "b.json"}, {"a": 1})
    with pytest.raises(ValueError):
        DatasetCatalog({"a": "A"}, {"a": "a.json", "b": "b.json"}, {"a": 1})


@pytest.mark.parametrize("total", [-1, "10", True, 2.5])
def test_catalog_rejects_bad_totals(total):
    with pytest.raises(ValueError):
        DatasetCatalog({"a": "A"}, {"a": "a.json"}, {"a": total})


def test_config_overrides_and_additions():
    catalog = build_catalog(
        {
            "datasets": {
                "lld": {"total": 20},
                "sql": {"label": "SQL", "file": "sql.json", "total": 12},
            }
        }
    )
    assert catalog.total("lld") == 20
    assert catalog.ids[-1] == "sql"
    assert catalog.label("sql") == "SQL"


def test_incomplete_added_dataset_is_rejected():
    with pytest.raises(ValueError):
        build_catalog({"datasets": {"sql": {"label": "SQL"}}})


def test_load_config_missing(tmp_path):
    with patch.object(config, "CONFIG_PATH", str(tmp_path / "config.json")):
        assert config.load_config() == {}


def test_save_then_load_config(tmp_path):
    with patch.object(config, "CONFIG_PATH", str(tmp_path / "practice" / "config.json")):
        config.save_config({"theme": "practice-light"})
        assert config.load_config() == {"theme": "practice-light"}


def test_load_config_corrupt(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{nope")
    with patch.object(config, "CONFIG_PATH", str(path)):
        assert config.load_config() == {}
