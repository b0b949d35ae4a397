"""Per-word state transition applied on every answer."""
import logging
import random
from dataclasses import dataclass
from datetime import datetime, UTC
from typing import Optional, Sequence, Tuple

from sightwords.config import (
    MASTERY_CONSECUTIVE_CORRECT,
    MASTERY_MAX_AVG_RESPONSE_MS,
    MASTERY_MIN_SESSIONS,
    MAX_BOX,
)
from sightwords.data.words import CREATURES
from sightwords.models.progress_models import WordProgress
from sightwords.models.word_models import Creature

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnswerOutcome:
    """Result of recording one answer."""
    progress: WordProgress
    correct: bool
    was_new: bool  # the word was untouched before this answer
    newly_mastered: bool


def draw_reward(
    rng: Optional[random.Random] = None,
    catalog: Sequence[Creature] = CREATURES,
) -> Tuple[str, str]:
    """Pick a creature and one of its variants uniformly at random."""
    rng = rng or random.Random()
    creature = rng.choice(catalog)
    return creature.id, rng.choice(creature.variants)


def meets_mastery(progress: WordProgress) -> bool:
    """Mastery predicate, evaluated on the post-answer record."""
    average = progress.average_response_time
    return (
        progress.consecutive_correct >= MASTERY_CONSECUTIVE_CORRECT
        and len(set(progress.sessions_seen_in)) >= MASTERY_MIN_SESSIONS
        and average is not None
        and average < MASTERY_MAX_AVG_RESPONSE_MS
    )


def record_answer(
    progress: WordProgress,
    correct: bool,
    response_time_ms: int,
    session_number: int,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> AnswerOutcome:
    """Apply one answer to a word's progress and return the new record.

    The input record is left untouched. A correct answer moves the word up a
    box; an incorrect one sends it back to box 1. Mastery is absorbing: once
    set, the word stays in the top box with its reward.
    """
    if not isinstance(correct, bool):
        raise TypeError(f"correct must be a boolean, got {correct!r}")
    if isinstance(response_time_ms, bool) or not isinstance(response_time_ms, int):
        raise TypeError(f"response_time_ms must be an integer, got {response_time_ms!r}")
    if response_time_ms < 0:
        raise ValueError(f"response_time_ms cannot be negative, got {response_time_ms}")

    now = now or datetime.now(UTC)
    was_new = progress.box == 0
    p = progress.copy()

    p.times_seen += 1
    p.last_seen_at = now
    p.response_times.append(response_time_ms)
    if session_number not in p.sessions_seen_in:
        p.sessions_seen_in.append(session_number)

    newly_mastered = False
    if correct:
        p.times_correct += 1
        p.consecutive_correct += 1
        p.box = min(p.box + 1, MAX_BOX)

        if not p.mastered and meets_mastery(p):
            p.mastered = True
            p.mastered_at = now
            p.box = MAX_BOX
            p.reward_id, p.reward_variant = draw_reward(rng)
            newly_mastered = True
            logger.info(f"Word {p.word_id} mastered, hatched {p.reward_id} ({p.reward_variant})")
    else:
        p.times_incorrect += 1
        p.consecutive_correct = 0
        if not p.mastered:
            p.box = 1

    return AnswerOutcome(progress=p, correct=correct, was_new=was_new, newly_mastered=newly_mastered)
