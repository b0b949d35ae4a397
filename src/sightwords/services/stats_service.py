"""Session and overall statistics."""
from datetime import datetime, UTC
from typing import Dict, Optional, Sequence

from sightwords.models.progress_models import ProgressState
from sightwords.models.session_models import (
    OverallStats,
    RewardSummary,
    SessionStats,
    SessionStatsSnapshot,
)
from sightwords.models.word_models import WordDefinition


class SessionStatsAggregator:
    """Accumulates counters for the session in progress."""

    def __init__(self):
        self.stats = SessionStats()

    def reset(self, now: Optional[datetime] = None) -> None:
        self.stats = SessionStats(started_at=now or datetime.now(UTC))

    def record(self, correct: bool, was_new: bool = False, mastered_word_id: Optional[int] = None) -> None:
        self.stats.words_reviewed += 1
        if correct:
            self.stats.correct += 1
        else:
            self.stats.incorrect += 1
        if was_new:
            self.stats.new_words_introduced += 1
        if mastered_word_id is not None:
            self.stats.words_mastered.append(mastered_word_id)

    def snapshot(self, session_number: int, now: Optional[datetime] = None) -> SessionStatsSnapshot:
        return SessionStatsSnapshot(
            session_number=session_number,
            words_reviewed=self.stats.words_reviewed,
            correct=self.stats.correct,
            incorrect=self.stats.incorrect,
            new_words_introduced=self.stats.new_words_introduced,
            words_mastered=list(self.stats.words_mastered),
            started_at=self.stats.started_at,
            ended_at=now or datetime.now(UTC),
        )


def compute_overall_stats(state: ProgressState, words: Sequence[WordDefinition]) -> OverallStats:
    """Summarize progress across the whole word list."""
    words_by_id: Dict[int, WordDefinition] = {word.id: word for word in words}
    records = [state.progress[word_id] for word_id in sorted(state.progress)]
    rewards = [
        RewardSummary(
            word_id=p.word_id,
            word=words_by_id[p.word_id].text,
            reward_id=p.reward_id,
            reward_variant=p.reward_variant,
            mastered_at=p.mastered_at,
        )
        for p in records
        if p.reward_id
    ]
    return OverallStats(
        total_words=len(words),
        words_started=sum(1 for p in records if p.is_started),
        words_mastered=sum(1 for p in records if p.mastered),
        words_in_progress=sum(1 for p in records if p.is_started and not p.mastered),
        rewards=rewards,
    )
