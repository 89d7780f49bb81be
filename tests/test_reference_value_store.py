"""
Tests for the file backed reference value store.
"""
from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor

import pytest

from reference_values_api.app.core.exceptions import DecodeError, NotFoundError, StorageError
from reference_values_api.app.schemas.reference_value import ReferenceValue, ReferenceValueUpdate
from reference_values_api.app.services.reference_value_store import ReferenceValueStore

from conftest import GOLD, SILVER


def _break_writes(path):
    """Replace the data file with a directory so the next write fails."""
    path.unlink()
    path.mkdir()


@pytest.fixture()
def store(data_file):
    s = ReferenceValueStore(data_file)
    s.load()
    return s


def test_load_keeps_file_order(store):
    assert [v.id for v in store.list()] == ["g1", "s1"]
    assert store.list()[0] == ReferenceValue(**GOLD)
    assert len(store) == 2


def test_load_missing_file_raises_storage_error(tmp_path):
    s = ReferenceValueStore(tmp_path / "missing.json")
    with pytest.raises(StorageError):
        s.load()


@pytest.mark.parametrize("content", ["not json", "", '{"id": "x"}', '[{"reference": "lots"}]'])
def test_load_invalid_content_raises_decode_error(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content, encoding="utf-8")
    s = ReferenceValueStore(path)
    with pytest.raises(DecodeError):
        s.load()
    assert s.list() == []


def test_load_fills_missing_fields_with_zero_values(tmp_path):
    path = tmp_path / "partial.json"
    path.write_text('[{"id": "p1", "name": "Partial", "extra": true}]', encoding="utf-8")
    s = ReferenceValueStore(path)
    s.load()
    assert s.find_by_id("p1") == ReferenceValue(id="p1", name="Partial", reference=0.0, description="", image_url="")


def test_find_by_id_returns_first_match(store):
    store.append(ReferenceValue(id="g1", name="Gold duplicate"))
    found = store.find_by_id("g1")
    assert found is not None
    assert found.name == "Gold"
    assert len(store) == 3


def test_find_by_id_unknown_returns_none(store):
    assert store.find_by_id("does-not-exist") is None


def test_append_persists_whole_collection(store, data_file):
    new = ReferenceValue(id="x1", name="Copper", reference=4.2, description="lb", image_url="u")
    assert store.append(new) == new
    on_disk = json.loads(data_file.read_text(encoding="utf-8"))
    assert [item["id"] for item in on_disk] == ["g1", "s1", "x1"]
    assert on_disk[2] == new.model_dump()


def test_replace_fields_keeps_id_and_order(store):
    fields = ReferenceValueUpdate(id="ignored", name="Gold2", reference=1950.0, description="d2", image_url="u2")
    updated = store.replace_fields("g1", fields)
    assert updated == ReferenceValue(id="g1", name="Gold2", reference=1950.0, description="d2", image_url="u2")
    assert [v.id for v in store.list()] == ["g1", "s1"]
    assert store.find_by_id("s1") == ReferenceValue(**SILVER)


def test_replace_fields_unknown_id_leaves_collection_alone(store, data_file):
    before = store.list()
    raw_before = data_file.read_bytes()
    with pytest.raises(NotFoundError) as excinfo:
        store.replace_fields("nope", ReferenceValueUpdate(name="x"))
    assert excinfo.value.value_id == "nope"
    assert store.list() == before
    assert data_file.read_bytes() == raw_before


def test_append_failure_is_not_visible(store, data_file):
    _break_writes(data_file)
    with pytest.raises(StorageError):
        store.append(ReferenceValue(id="x1"))
    assert store.find_by_id("x1") is None
    assert len(store) == 2
    assert not data_file.with_name(data_file.name + ".tmp").exists()


def test_replace_failure_keeps_previous_values(store, data_file):
    _break_writes(data_file)
    with pytest.raises(StorageError):
        store.replace_fields("g1", ReferenceValueUpdate(name="Changed"))
    assert store.find_by_id("g1").name == "Gold"


def test_reload_round_trip_preserves_records_and_order(tmp_path):
    path = tmp_path / "values.json"
    path.write_text("[]", encoding="utf-8")
    first = ReferenceValueStore(path)
    first.load()
    records = [ReferenceValue(id=f"v{i}", name=f"Value {i}", reference=i * 1.5) for i in range(5)]
    for record in records:
        first.append(record)

    second = ReferenceValueStore(path)
    second.load()
    assert second.list() == records


def test_persist_rewrites_file_from_memory(store, data_file):
    data_file.write_text("[]", encoding="utf-8")
    store.persist()
    assert [item["id"] for item in json.loads(data_file.read_text(encoding="utf-8"))] == ["g1", "s1"]


def test_concurrent_appends_are_all_kept(store, data_file):
    records = [ReferenceValue(id=f"c{i}") for i in range(40)]
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(store.append, records))
    assert len(store) == 42
    reloaded = ReferenceValueStore(data_file)
    reloaded.load()
    assert sorted(v.id for v in reloaded.list()) == sorted(v.id for v in store.list())


@pytest.mark.parametrize("reference", ['"1900.5"', "true"])
def test_load_rejects_non_numeric_reference(tmp_path, reference):
    path = tmp_path / "typed.json"
    path.write_text(f'[{{"id": "t1", "reference": {reference}}}]', encoding="utf-8")
    with pytest.raises(DecodeError):
        ReferenceValueStore(path).load()
