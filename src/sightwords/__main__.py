"""Console practice session."""
import argparse
import logging
import sys
import time
from typing import Optional, Sequence

from sightwords.config import ensure_directories, settings
from sightwords.data.words import get_creature
from sightwords.logging_config import setup_logging
from sightwords.models.base import init_db
from sightwords.models.session_models import SessionPhase
from sightwords.models.word_models import WordDefinition
from sightwords.monitoring import start_monitoring
from sightwords.services.learning_service import LearningService
from sightwords.services.progress_store import ProgressStore, SqlBlobStore
from sightwords.services.word_service import WordService

logger = logging.getLogger(__name__)

PHASE_LABELS = {
    SessionPhase.WARMUP: "Warm-up",
    SessionPhase.MAIN: "Learning",
    SessionPhase.COOLDOWN: "Cool-down",
}


def render_word(word: WordDefinition) -> str:
    """Show the word with its heart (irregular) parts marked."""
    parts = [
        f"[{segment}]" if i in word.irregular_segment_indices else segment
        for i, segment in enumerate(word.segments)
    ]
    return "".join(parts)


def print_stats(service: LearningService) -> None:
    stats = service.get_overall_stats()
    print(f"Words: {stats.total_words}  started: {stats.words_started}  "
          f"in progress: {stats.words_in_progress}  mastered: {stats.words_mastered}")
    for reward in stats.rewards:
        creature = get_creature(reward.reward_id)
        name = f"{creature.emoji} {creature.name}" if creature else reward.reward_id
        print(f"  {reward.word:<6} {name} ({reward.reward_variant})")


def run_practice(service: LearningService, words: WordService) -> None:
    session = service.begin_practice()
    if session is None:
        print("Nothing to practice right now. Come back next session!")
        return

    print(f"Session {service.session_number}: {len(session.words)} words. Answer y/n, q to stop.")
    while not session.check_timeout() and not session.is_complete:
        current = session.current_word
        shown_at = time.monotonic()
        answer = input(f"[{PHASE_LABELS[current.phase]}] {render_word(current.word)} > ").strip().lower()
        if answer == "q" or session.check_timeout():
            break
        if answer not in ("y", "n"):
            print("Please answer y or n.")
            continue

        response_time_ms = int((time.monotonic() - shown_at) * 1000)
        correct = answer == "y"
        service.answer_current(correct, response_time_ms)
        print(words.praise() if correct else words.encouragement())

        reward = session.pending_reward
        if reward is not None:
            creature = get_creature(reward.reward_id)
            print(f"*** '{reward.word}' hatched a {creature.name} {creature.emoji}! ***")
            input("Press Enter to continue...")
            service.acknowledge_reward()

    if session.timed_out:
        print("Time's up! Great practice today.")
    summary = service.finish_practice()
    print(f"Reviewed {summary.words_reviewed}: {summary.correct} correct, "
          f"{summary.incorrect} to practice again, {len(summary.words_mastered)} mastered.")


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(prog="sightwords", description="Sight-word practice")
    parser.add_argument("--stats", action="store_true", help="show overall progress and exit")
    parser.add_argument("--reset", action="store_true", help="reset all progress and exit")
    args = parser.parse_args(argv)

    ensure_directories()
    setup_logging("Starting sightwords ...")
    init_db()
    if settings.monitoring.metrics_port:
        start_monitoring(settings.monitoring.metrics_port)

    store = ProgressStore(SqlBlobStore())
    service = LearningService(store)
    service.load_progress()

    if args.reset:
        service.reset_all_progress()
        print("All progress reset.")
    elif args.stats:
        print_stats(service)
    else:
        try:
            run_practice(service, WordService())
        except (KeyboardInterrupt, EOFError):
            logger.info("Interrupted, closing session")
            if service.active_session is not None:
                service.finish_practice()
    return 0


if __name__ == "__main__":
    sys.exit(main())
