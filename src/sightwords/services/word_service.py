"""Service for word lookups and flashcard helpers."""
import random
from typing import List, Optional, Sequence

from sightwords.data.words import ENCOURAGEMENT_PHRASES, PRAISE_PHRASES, WORDS
from sightwords.models.word_models import WordDefinition


class WordService:
    """Service for looking up words and building answer choices."""

    def __init__(self, words: Sequence[WordDefinition] = WORDS, rng: Optional[random.Random] = None):
        """Initialize the service with the word list."""
        self.words = list(words)
        self.rng = rng or random.Random()

    def get_word(self, word_id: int) -> WordDefinition:
        """Get a word by its ID."""
        word = next((w for w in self.words if w.id == word_id), None)
        if word is None:
            raise ValueError(f"Word {word_id} not found")
        return word

    def get_word_by_text(self, text: str) -> Optional[WordDefinition]:
        """Get a word by its text (case-sensitive, "I" is a word)."""
        return next((w for w in self.words if w.text == text), None)

    def word_choices(self, word_id: int, count: int = 4) -> List[str]:
        """Return the word plus random distractors, shuffled."""
        if count < 1:
            raise ValueError("count must be positive")
        word = self.get_word(word_id)
        others = [w.text for w in self.words if w.id != word.id]
        choices = [word.text] + self.rng.sample(others, min(count - 1, len(others)))
        self.rng.shuffle(choices)
        return choices

    def praise(self) -> str:
        """Pick a phrase for a correct answer."""
        return self.rng.choice(PRAISE_PHRASES)

    def encouragement(self) -> str:
        """Pick a phrase for an incorrect answer."""
        return self.rng.choice(ENCOURAGEMENT_PHRASES)
