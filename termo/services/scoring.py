"""
Guess Scoring

Implements the letter evaluation algorithm, including the duplicate-letter policy.
"""

from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from ..models.game import GuessRecord, LetterStatus

# Keyboard hint priority: a letter never goes back to a weaker state
_HINT_PRIORITY = {
    LetterStatus.ABSENT: 1,
    LetterStatus.PRESENT: 2,
    LetterStatus.CORRECT: 3,
}


def classify(secret: Sequence[str], guess: Sequence[str]) -> List[LetterStatus]:
    """
    Classify every letter of ``guess`` against ``secret``.

    Exact-position matches are resolved first and consume their letter, so a
    duplicated letter is only marked PRESENT while unmatched copies remain in
    the secret word.

    Raises:
        ValueError: If the two words differ in length
    """
    if len(secret) != len(guess):
        raise ValueError(f"Cannot score a {len(guess)}-letter guess against a {len(secret)}-letter word")

    remaining = Counter(secret)
    result: List[Optional[LetterStatus]] = [None] * len(guess)

    # First pass: exact matches
    for i, letter in enumerate(guess):
        if letter == secret[i]:
            result[i] = LetterStatus.CORRECT
            remaining[letter] -= 1

    # Second pass: present letters and misses
    for i, letter in enumerate(guess):
        if result[i] is not None:
            continue
        if remaining[letter] > 0:
            result[i] = LetterStatus.PRESENT
            remaining[letter] -= 1
        else:
            result[i] = LetterStatus.ABSENT

    return result  # type: ignore[return-value]


def merge_letter_hints(hints: Dict[str, LetterStatus], word: str,
                       result: Sequence[LetterStatus]) -> Dict[str, LetterStatus]:
    """Upgrade keyboard hints in place with one scored word."""
    for letter, new_status in zip(word, result):
        current = hints.get(letter)
        if current is None or _HINT_PRIORITY[new_status] > _HINT_PRIORITY[current]:
            hints[letter] = new_status
    return hints


def letter_hints(history: Iterable[GuessRecord]) -> Dict[str, LetterStatus]:
    """Best known status of every letter used so far."""
    hints: Dict[str, LetterStatus] = {}
    for record in history:
        merge_letter_hints(hints, record.word, record.result)
    return hints
