"""Models for the static word list and reward catalog."""
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class WordType(Enum):
    """Phonics treatment of a word."""
    HEART = "heart"  # Has an irregular part that must be memorized
    FLASH = "flash"  # Fully decodable


@dataclass(frozen=True)
class WordDefinition:
    """A sight word and its grapheme breakdown."""
    id: int
    text: str
    type: WordType
    segments: Tuple[str, ...]
    irregular_segment_indices: Tuple[int, ...] = ()
    phonemes: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.segments:
            raise ValueError(f"Word {self.text!r} has no segments")
        for index in self.irregular_segment_indices:
            if not 0 <= index < len(self.segments):
                raise ValueError(
                    f"Irregular segment index {index} out of range for word {self.text!r}"
                )
        if self.type is WordType.HEART and not self.irregular_segment_indices:
            raise ValueError(f"Heart word {self.text!r} needs at least one irregular segment")
        if self.type is WordType.FLASH and self.irregular_segment_indices:
            raise ValueError(f"Flash word {self.text!r} cannot have irregular segments")

    @property
    def is_heart_word(self) -> bool:
        return self.type is WordType.HEART

    @property
    def irregular_segments(self) -> Tuple[str, ...]:
        return tuple(self.segments[i] for i in self.irregular_segment_indices)


@dataclass(frozen=True)
class Creature:
    """A reward hatched when a word is mastered."""
    id: str
    name: str
    emoji: str
    variants: Tuple[str, ...]  # colours
