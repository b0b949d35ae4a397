"""Fry first 50 high-frequency words and the creature reward catalog."""
from typing import Dict, Optional, Sequence

from sightwords.models.word_models import Creature, WordDefinition, WordType


def _word(
    word_id: int,
    text: str,
    phonemes: Sequence[str],
    graphemes: Sequence[str],
    heart_parts: Sequence[int] = (),
) -> WordDefinition:
    return WordDefinition(
        id=word_id,
        text=text,
        type=WordType.HEART if heart_parts else WordType.FLASH,
        segments=tuple(graphemes),
        irregular_segment_indices=tuple(heart_parts),
        phonemes=tuple(phonemes),
    )


WORDS = [
    # Words 1-10
    _word(1, "the", ["th", "ə"], ["th", "e"], [1]),
    _word(2, "of", ["ə", "v"], ["o", "f"], [0, 1]),
    _word(3, "and", ["a", "n", "d"], ["a", "n", "d"]),
    _word(4, "a", ["ə"], ["a"], [0]),
    _word(5, "to", ["t", "oo"], ["t", "o"], [1]),
    _word(6, "in", ["i", "n"], ["i", "n"]),
    _word(7, "is", ["i", "z"], ["i", "s"], [1]),
    _word(8, "you", ["y", "oo"], ["y", "ou"], [1]),
    _word(9, "that", ["th", "a", "t"], ["th", "a", "t"]),
    _word(10, "it", ["i", "t"], ["i", "t"]),
    # Words 11-20
    _word(11, "he", ["h", "ee"], ["h", "e"], [1]),
    _word(12, "was", ["w", "u", "z"], ["w", "a", "s"], [1, 2]),
    _word(13, "for", ["f", "or"], ["f", "or"]),
    _word(14, "on", ["o", "n"], ["o", "n"]),
    _word(15, "are", ["ar"], ["are"], [0]),
    _word(16, "as", ["a", "z"], ["a", "s"], [1]),
    _word(17, "with", ["w", "i", "th"], ["w", "i", "th"]),
    _word(18, "his", ["h", "i", "z"], ["h", "i", "s"], [2]),
    _word(19, "they", ["th", "ay"], ["th", "ey"], [1]),
    _word(20, "I", ["eye"], ["I"], [0]),
    # Words 21-30
    _word(21, "at", ["a", "t"], ["a", "t"]),
    _word(22, "be", ["b", "ee"], ["b", "e"], [1]),
    _word(23, "this", ["th", "i", "s"], ["th", "i", "s"]),
    _word(24, "have", ["h", "a", "v"], ["h", "a", "ve"], [1]),
    _word(25, "from", ["f", "r", "o", "m"], ["f", "r", "o", "m"]),
    _word(26, "or", ["or"], ["or"]),
    _word(27, "one", ["w", "u", "n"], ["o", "n", "e"], [0, 2]),
    _word(28, "had", ["h", "a", "d"], ["h", "a", "d"]),
    _word(29, "by", ["b", "eye"], ["b", "y"], [1]),
    _word(30, "words", ["w", "er", "d", "z"], ["w", "or", "d", "s"]),
    # Words 31-40
    _word(31, "but", ["b", "u", "t"], ["b", "u", "t"]),
    _word(32, "not", ["n", "o", "t"], ["n", "o", "t"]),
    _word(33, "what", ["w", "u", "t"], ["wh", "a", "t"], [0, 1]),
    _word(34, "all", ["aw", "l"], ["a", "ll"], [0]),
    _word(35, "were", ["w", "er"], ["w", "ere"], [1]),
    _word(36, "we", ["w", "ee"], ["w", "e"], [1]),
    _word(37, "when", ["w", "e", "n"], ["wh", "e", "n"]),
    _word(38, "your", ["y", "or"], ["y", "our"], [1]),
    _word(39, "can", ["k", "a", "n"], ["c", "a", "n"]),
    _word(40, "said", ["s", "e", "d"], ["s", "ai", "d"], [1]),
    # Words 41-50
    _word(41, "there", ["th", "air"], ["th", "ere"], [1]),
    _word(42, "use", ["y", "oo", "z"], ["u", "s", "e"], [0, 1]),
    _word(43, "an", ["a", "n"], ["a", "n"]),
    _word(44, "each", ["ee", "ch"], ["ea", "ch"]),
    _word(45, "which", ["w", "i", "ch"], ["wh", "i", "ch"]),
    _word(46, "she", ["sh", "ee"], ["sh", "e"], [1]),
    _word(47, "do", ["d", "oo"], ["d", "o"], [1]),
    _word(48, "how", ["h", "ow"], ["h", "ow"]),
    _word(49, "their", ["th", "air"], ["th", "eir"], [1]),
    _word(50, "if", ["i", "f"], ["i", "f"]),
]

WORDS_BY_ID: Dict[int, WordDefinition] = {word.id: word for word in WORDS}

# Creature types for rewards
CREATURES = [
    Creature("trex", "T-Rex", "🦖", ("#84cc16", "#22c55e", "#16a34a")),
    Creature("tric", "Triceratops", "🦕", ("#3b82f6", "#6366f1", "#8b5cf6")),
    Creature("fox", "Fox", "🦊", ("#f97316", "#fb923c", "#fdba74")),
    Creature("owl", "Owl", "🦉", ("#a855f7", "#c084fc", "#d8b4fe")),
    Creature("bunny", "Bunny", "🐰", ("#ec4899", "#f472b6", "#f9a8d4")),
    Creature("turtle", "Turtle", "🐢", ("#14b8a6", "#2dd4bf", "#5eead4")),
    Creature("lion", "Lion", "🦁", ("#eab308", "#facc15", "#fde047")),
    Creature("elephant", "Elephant", "🐘", ("#6b7280", "#9ca3af", "#d1d5db")),
    Creature("dragon", "Dragon", "🐉", ("#dc2626", "#ef4444", "#f87171")),
    Creature("unicorn", "Unicorn", "🦄", ("#d946ef", "#e879f9", "#f0abfc")),
]

# Praise phrases for correct answers
PRAISE_PHRASES = [
    "Great job! 🌟",
    "You got it! ⭐",
    "Amazing! 🎉",
    "Super reading! 📚",
    "Awesome! 🦖",
    "Perfect! ✨",
    "Wonderful! 🌈",
    "Yes! You're a star! 💫",
    "Fantastic! 🎊",
    "Way to go! 🏆",
]

# Encouragement for incorrect answers
ENCOURAGEMENT_PHRASES = [
    "Almost! Let's try again.",
    "Oops! This one's tricky.",
    "Good try! Watch carefully.",
    "That's a tough one!",
    "Keep going, you've got this!",
]


def get_word_definition(word_id: int) -> WordDefinition:
    """Get a word by its ID, raising ValueError for unknown IDs."""
    word = WORDS_BY_ID.get(word_id)
    if word is None:
        raise ValueError(f"Word {word_id} not found")
    return word


def get_creature(creature_id: str) -> Optional[Creature]:
    """Get a creature by its ID."""
    return next((c for c in CREATURES if c.id == creature_id), None)
