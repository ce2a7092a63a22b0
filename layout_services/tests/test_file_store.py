from __future__ import annotations

import json

import pytest

from layout_services.errors import PersistenceFailure
from layout_services.file_store import JsonLayoutFile


def test_missing_file_loads_empty(tmp_path):
    assert JsonLayoutFile(tmp_path / "layout.json").load_layout() == []


def test_save_then_load(tmp_path):
    path = tmp_path / "nested" / "layout.json"
    store = JsonLayoutFile(path)
    records = [{"x": 1, "y": 2, "width": 3, "height": 1, "widget_id": "w", "plugin_id": "p"}]
    store.save_layout(records)
    assert json.loads(path.read_text(encoding="utf-8")) == records
    assert not path.with_suffix(".json.tmp").exists()
    assert store.load_layout() == records


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(PersistenceFailure):
        JsonLayoutFile(path).load_layout()


def test_non_list_payload_raises(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps({"x": 1}), encoding="utf-8")
    with pytest.raises(PersistenceFailure):
        JsonLayoutFile(path).load_layout()


def test_non_mapping_entries_are_dropped(tmp_path):
    path = tmp_path / "layout.json"
    path.write_text(json.dumps([{"x": 1}, 3, "text"]), encoding="utf-8")
    assert JsonLayoutFile(path).load_layout() == [{"x": 1}]
