"""Models for session-related data structures."""
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sightwords.models.progress_models import WordProgress
from sightwords.models.word_models import WordDefinition


class SessionPhase(Enum):
    """Stages of a practice session."""
    WARMUP = "warmup"  # Mastered words, easy wins
    MAIN = "main"  # Learning words interleaved with new words
    COOLDOWN = "cooldown"  # Mastered words, positive ending
    COMPLETE = "complete"


@dataclass
class WordCandidate:
    """A word chosen for a session, with the progress it had when chosen."""
    word: WordDefinition
    progress: WordProgress
    is_new: bool = False
    is_review: bool = False
    is_maintenance: bool = False

    @property
    def word_id(self) -> int:
        return self.word.id


@dataclass
class SessionWord:
    """A candidate placed into a session phase."""
    candidate: WordCandidate
    phase: SessionPhase

    @property
    def word_id(self) -> int:
        return self.candidate.word.id

    @property
    def word(self) -> WordDefinition:
        return self.candidate.word


@dataclass(frozen=True)
class PendingReward:
    """A creature waiting to be shown before the session moves on."""
    word_id: int
    word: str
    reward_id: str
    reward_variant: str


@dataclass
class SessionStats:
    """Counters for the session in progress."""
    words_reviewed: int = 0
    correct: int = 0
    incorrect: int = 0
    new_words_introduced: int = 0
    words_mastered: List[int] = field(default_factory=list)
    started_at: Optional[datetime] = None


@dataclass(frozen=True)
class SessionStatsSnapshot:
    """Finalized stats of an ended session."""
    session_number: int
    words_reviewed: int
    correct: int
    incorrect: int
    new_words_introduced: int
    words_mastered: List[int]
    started_at: Optional[datetime]
    ended_at: datetime

    @property
    def duration_seconds(self) -> Optional[float]:
        if self.started_at is None:
            return None
        return (self.ended_at - self.started_at).total_seconds()

    @property
    def accuracy(self) -> Optional[float]:
        if not self.words_reviewed:
            return None
        return self.correct / self.words_reviewed


@dataclass(frozen=True)
class RewardSummary:
    """A hatched creature shown in the garden."""
    word_id: int
    word: str
    reward_id: str
    reward_variant: Optional[str]
    mastered_at: Optional[datetime]


@dataclass(frozen=True)
class OverallStats:
    """Progress across the whole word list."""
    total_words: int
    words_started: int
    words_mastered: int
    words_in_progress: int
    rewards: List[RewardSummary]
