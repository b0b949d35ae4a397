"""Selection of the words to practice in a new session."""
import logging
import random
from typing import Dict, List, Optional, Sequence

from sightwords.config import BOX_INTERVALS, MAINTENANCE_SAMPLE_SIZE
from sightwords.models.progress_models import ProgressState, WordProgress
from sightwords.models.session_models import WordCandidate
from sightwords.models.word_models import WordDefinition

logger = logging.getLogger(__name__)


def review_interval(box: int) -> int:
    """Number of sessions that must pass before a word in this box is due."""
    if box not in BOX_INTERVALS:
        raise ValueError(f"Box {box} has no review interval")
    return BOX_INTERVALS[box]


def is_due(progress: WordProgress, session_number: int) -> bool:
    """Check whether an active, unmastered word is due for review."""
    if progress.mastered or progress.box not in BOX_INTERVALS:
        return False
    return session_number - progress.last_session >= review_interval(progress.box)


def select_session_words(
    state: ProgressState,
    words: Sequence[WordDefinition],
    max_new: int,
    max_total: int,
    rng: Optional[random.Random] = None,
) -> List[WordCandidate]:
    """Choose the candidate words for a new session.

    Every due review word is included, a random sample of mastered words is
    added for maintenance, and untouched words are introduced in id order
    while both max_new and max_total allow. The result is shuffled; the
    sequencer imposes the final order.
    """
    if max_new < 0 or max_total < 0:
        raise ValueError("max_new and max_total cannot be negative")
    rng = rng or random.Random()
    words_by_id: Dict[int, WordDefinition] = {word.id: word for word in words}
    ordered = [state.progress[word_id] for word_id in sorted(state.progress)]

    review = [
        WordCandidate(words_by_id[p.word_id], p.copy(), is_review=True)
        for p in ordered
        if is_due(p, state.session_number)
    ]

    mastered = [p for p in ordered if p.mastered]
    maintenance = [
        WordCandidate(words_by_id[p.word_id], p.copy(), is_review=True, is_maintenance=True)
        for p in rng.sample(mastered, min(MAINTENANCE_SAMPLE_SIZE, len(mastered)))
    ]

    candidates = review + maintenance
    new_count = 0
    for p in ordered:
        if new_count >= max_new or len(candidates) >= max_total:
            break
        if p.box == 0:
            candidates.append(WordCandidate(words_by_id[p.word_id], p.copy(), is_new=True))
            new_count += 1

    rng.shuffle(candidates)
    logger.info(
        f"Selected {len(candidates)} words for session {state.session_number}: "
        f"{len(review)} review, {len(maintenance)} maintenance, {new_count} new"
    )
    return candidates
