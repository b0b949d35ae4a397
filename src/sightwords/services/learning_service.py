"""Learning service tying together progress, selection, sessions and stats."""
import logging
import random
from datetime import datetime, UTC
from typing import Callable, List, Optional, Tuple

from sightwords import monitoring
from sightwords.config import settings
from sightwords.models.progress_models import ProgressState, WordProgress
from sightwords.models.session_models import (
    OverallStats,
    PendingReward,
    SessionStatsSnapshot,
    WordCandidate,
)
from sightwords.models.word_models import WordDefinition
from sightwords.services import answer_recorder
from sightwords.services.answer_recorder import AnswerOutcome
from sightwords.services.progress_store import ProgressStore
from sightwords.services.selection_service import select_session_words
from sightwords.services.session_sequencer import RewardPendingError, SessionSequencer
from sightwords.services.stats_service import SessionStatsAggregator, compute_overall_stats

logger = logging.getLogger(__name__)


class LearningService:
    """Service for running practice sessions against a progress store.

    The store is the single source of truth; this service replaces its state
    after every answer and at the end of every session, and the store's
    subscribers (by default, the store's own save) take care of persistence.
    """

    def __init__(
        self,
        store: ProgressStore,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
        autosave: bool = True,
    ):
        """Initialize the service with a progress store."""
        self.store = store
        self.words: List[WordDefinition] = store.words
        self.rng = rng or random.Random()
        self.clock = clock or (lambda: datetime.now(UTC))
        self.stats = SessionStatsAggregator()
        self.active_session: Optional[SessionSequencer] = None
        if autosave:
            store.subscribe(store.save)

    @property
    def session_number(self) -> int:
        return self.store.state.session_number

    def load_progress(self) -> ProgressState:
        """Load persisted progress into the store."""
        return self.store.load()

    def save_progress(self) -> None:
        """Persist the current state."""
        self.store.save(self.store.state)

    def get_word(self, word_id: int) -> Tuple[WordDefinition, WordProgress]:
        """Get a word definition together with its progress."""
        progress = self.store.get_progress(word_id)
        word = next(w for w in self.words if w.id == word_id)
        return word, progress

    def select_session_words(
        self, max_new: Optional[int] = None, max_total: Optional[int] = None
    ) -> List[WordCandidate]:
        """Choose the candidate words for the next session."""
        if max_new is None:
            max_new = settings.session.max_new_words
        if max_total is None:
            max_total = settings.session.max_session_words
        return select_session_words(self.store.state, self.words, max_new, max_total, self.rng)

    def start_session(self) -> None:
        """Reset session counters."""
        self.stats.reset(self.clock())
        monitoring.sessions_started.inc()
        logger.info(f"Session {self.session_number} started")

    def end_session(self, reason: str = "exhausted") -> SessionStatsSnapshot:
        """Close the session, bump the session counter and return its stats."""
        snapshot = self.stats.snapshot(self.session_number, self.clock())
        state = self.store.state
        self.store.set_state(
            ProgressState(progress=state.progress, session_number=state.session_number + 1)
        )
        monitoring.sessions_completed.labels(reason=reason).inc()
        if snapshot.duration_seconds is not None:
            monitoring.session_duration.observe(snapshot.duration_seconds)
        logger.info(
            f"Session {snapshot.session_number} ended ({reason}): {snapshot.words_reviewed} reviewed, "
            f"{snapshot.correct} correct, {len(snapshot.words_mastered)} mastered"
        )
        return snapshot

    def record_answer(self, word_id: int, correct: bool, response_time_ms: int) -> AnswerOutcome:
        """Apply an answer to a word, update session stats and persist."""
        if self.active_session and self.active_session.pending_reward is not None:
            raise RewardPendingError("Acknowledge the pending reward before answering")

        progress = self.store.get_progress(word_id)
        outcome = answer_recorder.record_answer(
            progress,
            correct,
            response_time_ms,
            self.session_number,
            now=self.clock(),
            rng=self.rng,
        )
        self.store.set_state(self.store.state.with_progress(outcome.progress))
        self.stats.record(
            correct,
            was_new=outcome.was_new,
            mastered_word_id=word_id if outcome.newly_mastered else None,
        )

        monitoring.answers_recorded.labels(result="correct" if correct else "incorrect").inc()
        if outcome.newly_mastered:
            monitoring.words_mastered.inc()
        logger.debug(
            f"Word {word_id} answered {'correctly' if correct else 'incorrectly'} "
            f"in {response_time_ms}ms, now in box {outcome.progress.box}"
        )
        return outcome

    def get_overall_stats(self) -> OverallStats:
        """Summarize progress across all words."""
        return compute_overall_stats(self.store.state, self.words)

    def reset_all_progress(self) -> ProgressState:
        """Forget all progress and start again from session 1."""
        if self.active_session is not None:
            self.active_session.finish()
            self.active_session = None
        self.stats = SessionStatsAggregator()
        return self.store.reset_all()

    def begin_practice(
        self, max_new: Optional[int] = None, max_total: Optional[int] = None
    ) -> Optional[SessionSequencer]:
        """Select words and open a sequenced session.

        Returns None when there is nothing to practice.
        """
        if self.active_session is not None:
            raise RuntimeError("A practice session is already open")

        candidates = self.select_session_words(max_new, max_total)
        if not candidates:
            logger.info("Nothing to practice")
            return None

        self.start_session()
        self.active_session = SessionSequencer(
            candidates, started_at=self.stats.stats.started_at, clock=self.clock
        )
        return self.active_session

    def answer_current(self, correct: bool, response_time_ms: int) -> AnswerOutcome:
        """Answer the current word of the open session and move the cursor.

        If the answer made the word mastered, the cursor stays put until
        acknowledge_reward() is called.
        """
        session = self._require_session()
        if session.check_timeout():
            raise RuntimeError("The practice session has timed out")
        current = session.current_word
        if current is None:
            raise RuntimeError("The practice session is complete")

        outcome = self.record_answer(current.word_id, correct, response_time_ms)

        # Read the record back from the store: the reward decision follows the
        # stored post-answer state, not the snapshot taken at selection time.
        stored = self.store.get_progress(current.word_id)
        if outcome.newly_mastered and stored.mastered:
            session.hold_reward(
                PendingReward(
                    word_id=stored.word_id,
                    word=current.word.text,
                    reward_id=stored.reward_id,
                    reward_variant=stored.reward_variant,
                )
            )
        else:
            session.advance()
        session.check_timeout()
        return outcome

    def acknowledge_reward(self) -> bool:
        """Dismiss the pending reward and move to the next word."""
        return self._require_session().acknowledge_reward()

    def finish_practice(self) -> SessionStatsSnapshot:
        """Close the open session and return its stats."""
        session = self._require_session()
        if session.timed_out:
            reason = "timeout"
        elif session.is_complete:
            reason = "exhausted"
        else:
            reason = "exited"
        session.finish()
        self.active_session = None
        return self.end_session(reason)

    def _require_session(self) -> SessionSequencer:
        if self.active_session is None:
            raise RuntimeError("No practice session is open")
        return self.active_session
