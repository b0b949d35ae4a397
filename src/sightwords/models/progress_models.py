"""Models for per-word progress data."""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional

from sightwords.config import MAX_BOX


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    return datetime.fromisoformat(value)


def _require_int(data: Dict[str, Any], name: str) -> int:
    value = data[name]
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{name} cannot be negative, got {value}")
    return value


def _require_int_list(data: Dict[str, Any], name: str) -> List[int]:
    values = list(data[name])
    for value in values:
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"{name} must hold integers, got {value!r}")
        if value < 0:
            raise ValueError(f"{name} cannot hold negative values, got {value}")
    return values


@dataclass
class WordProgress:
    """Mastery state of a single word."""
    word_id: int
    box: int = 0  # 0 = not started, 1-4 = Leitner boxes
    times_seen: int = 0
    times_correct: int = 0
    times_incorrect: int = 0
    consecutive_correct: int = 0
    sessions_seen_in: List[int] = field(default_factory=list)
    last_seen_at: Optional[datetime] = None
    response_times: List[int] = field(default_factory=list)  # milliseconds
    mastered: bool = False
    mastered_at: Optional[datetime] = None
    reward_id: Optional[str] = None
    reward_variant: Optional[str] = None

    @classmethod
    def fresh(cls, word_id: int) -> "WordProgress":
        """Create the initial record for a word."""
        return cls(word_id=word_id)

    @property
    def is_started(self) -> bool:
        return self.box >= 1

    @property
    def last_session(self) -> int:
        """Last session the word was answered in, or 0 if never."""
        return self.sessions_seen_in[-1] if self.sessions_seen_in else 0

    @property
    def average_response_time(self) -> Optional[float]:
        if not self.response_times:
            return None
        return sum(self.response_times) / len(self.response_times)

    def copy(self) -> "WordProgress":
        """Return an independent copy (lists are not shared)."""
        return WordProgress(
            word_id=self.word_id,
            box=self.box,
            times_seen=self.times_seen,
            times_correct=self.times_correct,
            times_incorrect=self.times_incorrect,
            consecutive_correct=self.consecutive_correct,
            sessions_seen_in=list(self.sessions_seen_in),
            last_seen_at=self.last_seen_at,
            response_times=list(self.response_times),
            mastered=self.mastered,
            mastered_at=self.mastered_at,
            reward_id=self.reward_id,
            reward_variant=self.reward_variant,
        )

    def to_data(self) -> Dict[str, Any]:
        """Convert to serializable data for storage."""
        return {
            "word_id": self.word_id,
            "box": self.box,
            "times_seen": self.times_seen,
            "times_correct": self.times_correct,
            "times_incorrect": self.times_incorrect,
            "consecutive_correct": self.consecutive_correct,
            "sessions_seen_in": list(self.sessions_seen_in),
            "last_seen_at": self.last_seen_at.isoformat() if self.last_seen_at else None,
            "response_times": list(self.response_times),
            "mastered": self.mastered,
            "mastered_at": self.mastered_at.isoformat() if self.mastered_at else None,
            "reward_id": self.reward_id,
            "reward_variant": self.reward_variant,
        }

    @classmethod
    def from_data(cls, data: Dict[str, Any]) -> "WordProgress":
        """Create a WordProgress instance from stored data.

        Raises ValueError, TypeError or KeyError when the data is malformed.
        """
        box = _require_int(data, "box")
        if box > MAX_BOX:
            raise ValueError(f"box must be between 0 and {MAX_BOX}, got {box}")

        mastered = data["mastered"]
        if not isinstance(mastered, bool):
            raise TypeError(f"mastered must be a boolean, got {mastered!r}")
        if mastered and box != MAX_BOX:
            raise ValueError(f"mastered word must be in box {MAX_BOX}, got {box}")

        sessions = _require_int_list(data, "sessions_seen_in")
        if len(set(sessions)) != len(sessions):
            raise ValueError(f"sessions_seen_in has duplicates: {sessions}")

        progress = cls(
            word_id=_require_int(data, "word_id"),
            box=box,
            times_seen=_require_int(data, "times_seen"),
            times_correct=_require_int(data, "times_correct"),
            times_incorrect=_require_int(data, "times_incorrect"),
            consecutive_correct=_require_int(data, "consecutive_correct"),
            sessions_seen_in=sessions,
            last_seen_at=_parse_timestamp(data["last_seen_at"]),
            response_times=_require_int_list(data, "response_times"),
            mastered=mastered,
            mastered_at=_parse_timestamp(data["mastered_at"]),
            reward_id=data["reward_id"],
            reward_variant=data["reward_variant"],
        )
        if progress.consecutive_correct > progress.times_correct:
            raise ValueError("consecutive_correct cannot exceed times_correct")
        return progress


@dataclass
class ProgressState:
    """Everything the store persists: per-word progress and the session counter."""
    progress: Dict[int, WordProgress]
    session_number: int = 1

    @classmethod
    def fresh(cls, word_ids: Iterable[int]) -> "ProgressState":
        """First-run state: one untouched record per word, session 1."""
        return cls(
            progress={word_id: WordProgress.fresh(word_id) for word_id in word_ids},
            session_number=1,
        )

    def with_progress(self, progress: WordProgress) -> "ProgressState":
        """Return a new state with one record replaced."""
        updated = dict(self.progress)
        updated[progress.word_id] = progress
        return ProgressState(progress=updated, session_number=self.session_number)
