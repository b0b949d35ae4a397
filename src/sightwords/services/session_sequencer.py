"""Ordering of session words into phases and the live session cursor."""
import asyncio
import logging
from datetime import datetime, timedelta, UTC
from typing import Callable, List, Optional, Sequence

from sightwords.config import COOLDOWN_SIZE, WARMUP_SIZE, settings
from sightwords.models.session_models import (
    PendingReward,
    SessionPhase,
    SessionWord,
    WordCandidate,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class RewardPendingError(RuntimeError):
    """Raised when the session is asked to move on before a reward is acknowledged."""


def _utcnow() -> datetime:
    return datetime.now(UTC)


def interleave(first: Sequence[WordCandidate], second: Sequence[WordCandidate]) -> List[WordCandidate]:
    """Round-robin merge, starting with the first list."""
    merged = []
    for i in range(max(len(first), len(second))):
        if i < len(first):
            merged.append(first[i])
        if i < len(second):
            merged.append(second[i])
    return merged


def build_session_sequence(candidates: Sequence[WordCandidate]) -> List[SessionWord]:
    """Arrange candidates as warm-up, main and cool-down.

    Warm-up and cool-down use maintenance words so every session opens and
    closes on known words; the main phase alternates learning and new words.
    """
    maintenance = [c for c in candidates if c.is_maintenance]
    learning = [c for c in candidates if not c.is_maintenance and not c.is_new]
    new_words = [c for c in candidates if c.is_new]

    warmup = maintenance[:WARMUP_SIZE]
    cooldown = maintenance[WARMUP_SIZE:WARMUP_SIZE + COOLDOWN_SIZE]
    main = interleave(learning, new_words)

    return (
        [SessionWord(c, SessionPhase.WARMUP) for c in warmup]
        + [SessionWord(c, SessionPhase.MAIN) for c in main]
        + [SessionWord(c, SessionPhase.COOLDOWN) for c in cooldown]
    )


class SessionSequencer:
    """Cursor through one practice session.

    The cursor only moves through advance(). While a reward is pending the
    cursor is frozen until acknowledge_reward() is called.
    """

    def __init__(
        self,
        candidates: Sequence[WordCandidate],
        started_at: Optional[datetime] = None,
        timeout: Optional[timedelta] = None,
        clock: Optional[Clock] = None,
    ):
        self.clock = clock or _utcnow
        self.words = build_session_sequence(candidates)
        self.started_at = started_at or self.clock()
        self.timeout = timeout or timedelta(minutes=settings.session.timeout_minutes)
        self.current_index = 0
        self.pending_reward: Optional[PendingReward] = None
        self.timed_out = False
        self._complete = not self.words

    @property
    def is_complete(self) -> bool:
        return self._complete

    @property
    def current_word(self) -> Optional[SessionWord]:
        if self._complete:
            return None
        return self.words[self.current_index]

    @property
    def phase(self) -> SessionPhase:
        word = self.current_word
        return word.phase if word else SessionPhase.COMPLETE

    @property
    def progress_fraction(self) -> float:
        """Share of the sequence already answered, for progress bars."""
        if not self.words:
            return 1.0
        if self._complete:
            return 1.0
        return self.current_index / len(self.words)

    @property
    def elapsed(self) -> timedelta:
        return self.clock() - self.started_at

    @property
    def remaining(self) -> timedelta:
        return max(self.timeout - self.elapsed, timedelta(0))

    def advance(self) -> bool:
        """Move to the next word. Returns False once the session is complete."""
        if self.pending_reward is not None:
            raise RewardPendingError(
                f"Reward for word {self.pending_reward.word_id} has not been acknowledged"
            )
        if self._complete:
            return False
        if self.current_index < len(self.words) - 1:
            self.current_index += 1
            return True
        self._complete = True
        logger.info("Session sequence exhausted")
        return False

    def hold_reward(self, reward: PendingReward) -> None:
        """Freeze the cursor until the reward is acknowledged."""
        if self.pending_reward is not None:
            raise RewardPendingError(
                f"Reward for word {self.pending_reward.word_id} is already pending"
            )
        self.pending_reward = reward
        logger.debug(f"Holding reward {reward.reward_id} for word {reward.word_id}")

    def acknowledge_reward(self) -> bool:
        """Clear the pending reward and advance."""
        if self.pending_reward is None:
            raise RuntimeError("No reward is pending")
        self.pending_reward = None
        return self.advance()

    def check_timeout(self, now: Optional[datetime] = None) -> bool:
        """Force completion once the session has run past its time limit."""
        if self._complete:
            return self.timed_out
        now = now or self.clock()
        if now - self.started_at >= self.timeout:
            self._complete = True
            self.timed_out = True
            logger.info(f"Session timed out after {now - self.started_at}")
        return self.timed_out

    def finish(self) -> None:
        """End the session early."""
        self._complete = True
        self.pending_reward = None


class SessionTimeoutWatcher:
    """Background task checking the session time limit at a coarse interval."""

    def __init__(
        self,
        sequencer: SessionSequencer,
        interval: Optional[float] = None,
        on_timeout: Optional[Callable[[], None]] = None,
    ):
        self.sequencer = sequencer
        self.interval = interval if interval is not None else settings.session.timeout_check_seconds
        self.on_timeout = on_timeout
        self.task: Optional[asyncio.Task] = None
        self.running = False

    def start(self) -> None:
        """Start watching. Must be called from a running event loop."""
        if self.running:
            return
        self.running = True
        self.task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop watching."""
        if not self.running:
            return
        self.running = False
        if self.task is not None:
            self.task.cancel()
            await asyncio.gather(self.task, return_exceptions=True)
            self.task = None

    async def _run(self) -> None:
        while self.running:
            await asyncio.sleep(self.interval)
            if self.sequencer.is_complete:
                self.running = False
                break
            if self.sequencer.check_timeout():
                self.running = False
                if self.on_timeout:
                    self.on_timeout()
                break
