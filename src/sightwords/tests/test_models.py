"""Tests for data models."""
from datetime import datetime, UTC

import pytest
from faker import Faker
from sqlalchemy.orm import sessionmaker

from sightwords.models.models import StoredBlob
from sightwords.models.progress_models import ProgressState, WordProgress

fake = Faker()


@pytest.fixture
def progress() -> WordProgress:
    """Create a progress record with some history."""
    return WordProgress(
        word_id=7,
        box=3,
        times_seen=4,
        times_correct=3,
        times_incorrect=1,
        consecutive_correct=2,
        sessions_seen_in=[1, 2, 4],
        last_seen_at=datetime(2026, 1, 4, 16, 30, tzinfo=UTC),
        response_times=[2100, 1800, 950, 1200],
    )


def test_fresh_progress():
    p = WordProgress.fresh(3)
    assert p.word_id == 3
    assert p.box == 0
    assert p.times_seen == 0
    assert p.sessions_seen_in == []
    assert p.response_times == []
    assert p.mastered is False
    assert p.reward_id is None
    assert p.last_session == 0
    assert p.average_response_time is None
    assert not p.is_started


def test_derived_properties(progress: WordProgress):
    assert progress.last_session == 4
    assert progress.average_response_time == pytest.approx(1512.5)
    assert progress.is_started


def test_copy_does_not_share_lists(progress: WordProgress):
    clone = progress.copy()
    clone.response_times.append(10)
    clone.sessions_seen_in.append(5)
    assert progress.response_times == [2100, 1800, 950, 1200]
    assert progress.sessions_seen_in == [1, 2, 4]


def test_progress_data_round_trip(progress: WordProgress):
    progress.box = 4
    progress.mastered = True
    progress.mastered_at = datetime(2026, 1, 4, 16, 31, tzinfo=UTC)
    progress.reward_id = "fox"
    progress.reward_variant = "#f97316"

    restored = WordProgress.from_data(progress.to_data())
    assert restored == progress


@pytest.mark.parametrize(
    "field, value, error",
    [
        ("box", 5, ValueError),
        ("box", -1, ValueError),
        ("box", "2", TypeError),
        ("mastered", "yes", TypeError),
        ("sessions_seen_in", [1, 1], ValueError),
        ("sessions_seen_in", [1, 2.0], TypeError),
        ("response_times", [1500.9], TypeError),
        ("response_times", ["1500"], TypeError),
        ("response_times", [True], TypeError),
        ("response_times", [-20], ValueError),
        ("consecutive_correct", 9, ValueError),
        ("last_seen_at", "yesterday", ValueError),
    ],
)
def test_from_data_rejects_malformed_records(progress: WordProgress, field, value, error):
    data = progress.to_data()
    data[field] = value
    with pytest.raises(error):
        WordProgress.from_data(data)


def test_from_data_rejects_mastered_outside_top_box(progress: WordProgress):
    data = progress.to_data()
    data["mastered"] = True
    with pytest.raises(ValueError):
        WordProgress.from_data(data)


def test_from_data_requires_all_fields(progress: WordProgress):
    data = progress.to_data()
    del data["response_times"]
    with pytest.raises(KeyError):
        WordProgress.from_data(data)


def test_fresh_state():
    state = ProgressState.fresh([1, 2, 3])
    assert state.session_number == 1
    assert list(state.progress) == [1, 2, 3]
    assert all(p.box == 0 for p in state.progress.values())


def test_with_progress_leaves_original_state(progress: WordProgress):
    state = ProgressState.fresh([7, 8])
    updated = state.with_progress(progress)
    assert updated.progress[7] is progress
    assert state.progress[7].box == 0
    assert updated.session_number == state.session_number


def test_stored_blob_creation(session_factory: sessionmaker):
    """Test stored blob creation."""
    value = fake.json()
    db = session_factory()
    try:
        db.add(StoredBlob(key="progress", value=value))
        db.commit()
        blob = db.get(StoredBlob, "progress")
        assert blob.value == value
        assert blob.created_at is not None
        assert blob.updated_at is not None
    finally:
        db.close()
