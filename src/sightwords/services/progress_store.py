"""Durable store for per-word progress and the session counter."""
import json
import logging
from datetime import datetime, UTC
from typing import Callable, List, Optional, Protocol, Sequence

from sqlalchemy.orm import Session, sessionmaker

from sightwords import monitoring
from sightwords.config import settings
from sightwords.data.words import WORDS
from sightwords.models.base import SessionLocal
from sightwords.models.models import StoredBlob
from sightwords.models.progress_models import ProgressState, WordProgress
from sightwords.models.word_models import WordDefinition

logger = logging.getLogger(__name__)

StateListener = Callable[[ProgressState], None]


class BlobStore(Protocol):
    """Opaque key-value storage for serialized documents."""

    def get(self, key: str) -> Optional[str]: ...

    def put(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class SqlBlobStore:
    """Blob store backed by the stored_blobs table."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        """Initialize the store with a session factory."""
        self.session_factory = session_factory or SessionLocal

    def get(self, key: str) -> Optional[str]:
        db: Session = self.session_factory()
        try:
            blob = db.get(StoredBlob, key)
            return blob.value if blob else None
        finally:
            db.close()

    def put(self, key: str, value: str) -> None:
        db: Session = self.session_factory()
        try:
            blob = db.get(StoredBlob, key)
            if blob is None:
                db.add(StoredBlob(key=key, value=value))
            else:
                blob.value = value
            db.commit()
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def delete(self, key: str) -> None:
        db: Session = self.session_factory()
        try:
            db.query(StoredBlob).filter(StoredBlob.key == key).delete()
            db.commit()
        finally:
            db.close()


class ProgressStore:
    """Single source of truth for word progress.

    Holds the current ProgressState in memory, notifies subscribers when it is
    replaced and round-trips it through a BlobStore. A missing or malformed
    blob is treated exactly like a first run.
    """

    def __init__(
        self,
        blob_store: BlobStore,
        words: Sequence[WordDefinition] = WORDS,
        key: Optional[str] = None,
    ):
        self.blob_store = blob_store
        self.words = list(words)
        self.key = key or settings.storage.progress_key
        self._word_ids = [word.id for word in self.words]
        self._state = ProgressState.fresh(self._word_ids)
        self._listeners: List[StateListener] = []

    @property
    def state(self) -> ProgressState:
        return self._state

    def subscribe(self, listener: StateListener) -> Callable[[], None]:
        """Register a listener called with every new state. Returns an unsubscribe callable.

        Registering the same listener again is a no-op, so it is still called once per change.
        """
        if listener not in self._listeners:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_state(self, state: ProgressState) -> None:
        """Replace the current state and notify subscribers."""
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def get_progress(self, word_id: int) -> WordProgress:
        """Get the progress record of a word."""
        progress = self._state.progress.get(word_id)
        if progress is None:
            raise ValueError(f"Word {word_id} not found")
        return progress

    def load(self) -> ProgressState:
        """Restore state from the blob store, falling back to a fresh state."""
        raw = self.blob_store.get(self.key)
        if raw is None:
            logger.info("No saved progress found, starting fresh")
            state = ProgressState.fresh(self._word_ids)
        else:
            try:
                state = self._parse(raw)
                logger.info(
                    f"Loaded progress for {len(state.progress)} words, session {state.session_number}"
                )
            except (ValueError, TypeError, KeyError, AttributeError) as e:
                logger.warning(f"Saved progress is unusable, starting fresh: {e}")
                monitoring.state_load_fallbacks.labels(reason=type(e).__name__).inc()
                state = ProgressState.fresh(self._word_ids)
        self._state = state
        return state

    def save(self, state: Optional[ProgressState] = None) -> None:
        """Write the full state plus a save timestamp."""
        if state is None:
            state = self._state
        document = {
            "progress": {str(word_id): p.to_data() for word_id, p in state.progress.items()},
            "sessionNumber": state.session_number,
            "lastSavedAt": datetime.now(UTC).isoformat(),
        }
        self.blob_store.put(self.key, json.dumps(document))
        logger.debug(f"Saved progress for session {state.session_number}")

    def reset_all(self) -> ProgressState:
        """Recreate every record at its initial state and clear persisted state.

        Subscribers are not notified, so nothing is written back until the
        next mutation.
        """
        self.blob_store.delete(self.key)
        logger.info("All progress reset")
        self._state = ProgressState.fresh(self._word_ids)
        return self._state

    def _parse(self, raw: str) -> ProgressState:
        document = json.loads(raw)
        if not isinstance(document, dict):
            raise TypeError("Progress document must be an object")

        session_number = document["sessionNumber"]
        if isinstance(session_number, bool) or not isinstance(session_number, int):
            raise TypeError(f"sessionNumber must be an integer, got {session_number!r}")
        if session_number < 1:
            raise ValueError(f"sessionNumber must be positive, got {session_number}")

        progress = {}
        for key, data in document["progress"].items():
            record = WordProgress.from_data(data)
            if str(record.word_id) != key:
                raise ValueError(f"Record for word {record.word_id} stored under key {key}")
            progress[record.word_id] = record

        if set(progress) != set(self._word_ids):
            raise ValueError("Saved progress does not match the word list")

        return ProgressState(
            progress={word_id: progress[word_id] for word_id in self._word_ids},
            session_number=session_number,
        )
