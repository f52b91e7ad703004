"""
Word Dictionary

The accepted word list: membership checks for guesses and uniform random
selection of secret words.
"""

import random
from typing import Iterable, Optional, Tuple

from ..config.game_settings import WORD_LENGTH, load_word_list, validate_word_list_integrity


class Dictionary:
    """A finite set of valid words of a single length."""

    def __init__(self, words: Iterable[str], word_length: int = WORD_LENGTH,
                 rng: Optional[random.Random] = None):
        normalized = []
        for word in words:
            word = word.strip().upper()
            if len(word) != word_length or not word.isalpha():
                raise ValueError(f"Word '{word}' is not a {word_length}-letter alphabetic word")
            normalized.append(word)

        if not normalized:
            raise ValueError("Word list cannot be empty")

        self.word_length = word_length
        # Sorted, de-duplicated list keeps random selection uniform
        self._words = sorted(set(normalized))
        self._lookup = frozenset(self._words)
        self._rng = rng or random.Random()

    @classmethod
    def from_json(cls, path: Optional[str] = None, word_length: int = WORD_LENGTH,
                  rng: Optional[random.Random] = None) -> "Dictionary":
        """
        Load a dictionary from a JSON array of words (the bundled list by default).

        Raises:
            ValueError: If the file fails the word list integrity check
        """
        words = load_word_list(path, word_length)
        validate_word_list_integrity(words, word_length)
        return cls(words, word_length, rng)

    @property
    def words(self) -> Tuple[str, ...]:
        return tuple(self._words)

    def contains(self, word: str) -> bool:
        return isinstance(word, str) and word.upper() in self._lookup

    def random_word(self) -> str:
        return self._rng.choice(self._words)

    def __contains__(self, word) -> bool:
        return self.contains(word)

    def __len__(self) -> int:
        return len(self._words)
