from __future__ import annotations

import json
from pathlib import Path

import pytest

from hiringstudy import __version__
from hiringstudy.schemas import ParticipantData
from hiringstudy.storage import InMemoryStore, JsonFileStore, RecordStore, build_record


def test_json_file_store_writes_document(tmp_path: Path):
    store = JsonFileStore(tmp_path / "nested" / "records")

    store.put("abc123", {"participant": {"gender": "female"}})

    path = tmp_path / "nested" / "records" / "abc123.json"
    assert path.exists()
    assert json.loads(path.read_text(encoding="utf-8")) == {"participant": {"gender": "female"}}


@pytest.mark.parametrize("key", ["", "../escape", "a/b", ".."])
def test_json_file_store_rejects_unsafe_keys(tmp_path: Path, key: str):
    store = JsonFileStore(tmp_path)

    with pytest.raises(ValueError):
        store.put(key, {})


def test_in_memory_store_keeps_detached_copies():
    store = InMemoryStore()
    document = {"participant": {"decisions": []}}

    store.put("s1", document)
    document["participant"]["decisions"].append("late")

    assert store.get("s1") == {"participant": {"decisions": []}}
    assert store.get("missing") is None


def test_stores_satisfy_protocol(tmp_path: Path):
    assert isinstance(InMemoryStore(), RecordStore)
    assert isinstance(JsonFileStore(tmp_path), RecordStore)


def test_build_record_metadata():
    participant = ParticipantData(gender="male", age="18-24", start_time=123)

    record = build_record(participant, session_id="S-9", total_candidates=12, total_hires=4)

    assert record["metadata"]["session_id"] == "S-9"
    assert record["metadata"]["app_version"] == __version__
    assert record["metadata"]["total_hires"] == 4
    assert record["metadata"]["saved_at"]
    assert record["participant"] == {
        "gender": "male",
        "age": "18-24",
        "startTime": 123,
        "decisions": [],
    }


def test_json_file_store_failed_write_keeps_previous_record(tmp_path: Path, monkeypatch):
    store = JsonFileStore(tmp_path)
    store.put("s1", {"version": 1})

    def broken_replace(self, target):
        raise OSError("device lost")

    monkeypatch.setattr(Path, "replace", broken_replace)

    with pytest.raises(OSError):
        store.put("s1", {"version": 2})

    assert json.loads((tmp_path / "s1.json").read_text(encoding="utf-8")) == {"version": 1}
    assert sorted(p.name for p in tmp_path.iterdir()) == ["s1.json"]
