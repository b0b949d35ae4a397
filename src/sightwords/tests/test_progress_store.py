"""Tests for the progress store."""
import json

import pytest

from sightwords.data.words import WORDS
from sightwords.models.progress_models import ProgressState, WordProgress
from sightwords.services.progress_store import ProgressStore, SqlBlobStore

KEY = "felicity-sight-words-progress"


def _played_state() -> ProgressState:
    state = ProgressState.fresh(w.id for w in WORDS)
    state.progress[2] = WordProgress(
        word_id=2,
        box=2,
        times_seen=2,
        times_correct=2,
        consecutive_correct=2,
        sessions_seen_in=[1, 2],
        response_times=[1200, 900],
    )
    state.session_number = 3
    return state


def test_load_without_saved_state_is_first_run(store: ProgressStore):
    state = store.load()
    assert state.session_number == 1
    assert sorted(state.progress) == [w.id for w in WORDS]
    assert all(p == WordProgress.fresh(p.word_id) for p in state.progress.values())


def test_save_and_load(blob_store: SqlBlobStore, store: ProgressStore):
    store.save(_played_state())

    restored = ProgressStore(blob_store).load()
    assert restored.session_number == 3
    assert restored.progress[2].box == 2
    assert restored.progress[2].sessions_seen_in == [1, 2]
    assert restored.progress[2].response_times == [1200, 900]


def test_saved_document_layout(blob_store: SqlBlobStore, store: ProgressStore):
    store.save(_played_state())

    document = json.loads(blob_store.get(KEY))
    assert set(document) == {"progress", "sessionNumber", "lastSavedAt"}
    assert document["sessionNumber"] == 3
    assert document["progress"]["2"]["box"] == 2


@pytest.mark.parametrize(
    "raw",
    [
        "not json at all",
        "[]",
        json.dumps({"sessionNumber": 2}),
        json.dumps({"progress": {}, "sessionNumber": 2}),
        json.dumps({"progress": {}, "sessionNumber": "two"}),
    ],
)
def test_malformed_state_falls_back_to_first_run(blob_store: SqlBlobStore, store: ProgressStore, raw):
    blob_store.put(KEY, raw)
    state = store.load()
    assert state.session_number == 1
    assert len(state.progress) == len(WORDS)


def test_partial_word_list_is_not_merged(blob_store: SqlBlobStore, store: ProgressStore):
    store.save(_played_state())
    document = json.loads(blob_store.get(KEY))
    del document["progress"]["50"]
    blob_store.put(KEY, json.dumps(document))

    state = store.load()
    assert state.session_number == 1
    assert state.progress[2].box == 0


def test_invalid_record_falls_back_to_first_run(blob_store: SqlBlobStore, store: ProgressStore):
    store.save(_played_state())
    document = json.loads(blob_store.get(KEY))
    document["progress"]["2"]["box"] = 9
    blob_store.put(KEY, json.dumps(document))

    assert store.load().progress[2].box == 0


def test_set_state_notifies_subscribers(store: ProgressStore):
    seen = []
    unsubscribe = store.subscribe(seen.append)

    state = _played_state()
    store.set_state(state)
    assert seen == [state]
    assert store.state is state

    unsubscribe()
    store.set_state(ProgressState.fresh(w.id for w in WORDS))
    assert seen == [state]


def test_subscribing_twice_notifies_once(store: ProgressStore):
    seen = []
    store.subscribe(seen.append)
    store.subscribe(seen.append)

    state = _played_state()
    store.set_state(state)
    assert seen == [state]


def test_reset_all_clears_persisted_state(blob_store: SqlBlobStore, store: ProgressStore):
    store.save(_played_state())
    store.set_state(_played_state())

    state = store.reset_all()
    assert blob_store.get(KEY) is None
    assert state.session_number == 1
    assert store.state.progress[2].box == 0


def test_reset_all_is_idempotent(store: ProgressStore):
    store.set_state(_played_state())
    once = store.reset_all()
    twice = store.reset_all()
    assert once == twice
    assert store.load() == twice


def test_get_progress_unknown_word(store: ProgressStore):
    with pytest.raises(ValueError):
        store.get_progress(999)


def test_blob_store_overwrites_and_deletes(blob_store: SqlBlobStore):
    assert blob_store.get("k") is None
    blob_store.put("k", "one")
    blob_store.put("k", "two")
    assert blob_store.get("k") == "two"
    blob_store.delete("k")
    assert blob_store.get("k") is None
    blob_store.delete("k")
