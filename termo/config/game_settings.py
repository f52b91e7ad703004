"""
Game Configuration Constants Module

This module defines the game rules for Termo. All game parameters are
centralized here to enable easy modification.
"""

import json
import os
from typing import List, Final, Optional

# Core Game Configuration Constants
WORD_LENGTH: Final[int] = 6
"""
Number of letters in every secret word and every guess.
Type: Final[int] - Immutable to prevent accidental modification
"""

MAX_ATTEMPTS: Final[int] = 6
"""
Maximum number of guess attempts allowed per game.
"""

# Win messages indexed by attempt number (1-based)
WIN_MESSAGES: Final[List[str]] = [
    "Gênio!",
    "Magnífico!",
    "Impressionante!",
    "Esplêndido!",
    "Muito bom!",
    "Ufa!",
]

FALLBACK_WIN_MESSAGE: Final[str] = "Parabéns!"

DEFAULT_WORDS_FILE: Final[str] = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), 'palavras.json'
)


def load_word_list(json_file_path: Optional[str] = None, word_length: int = WORD_LENGTH) -> List[str]:
    """
    Load the word list from a JSON file.

    Args:
        json_file_path: Path to a JSON array of words (defaults to palavras.json)
        word_length: Required length of every word

    Returns:
        List[str]: List of uppercase words

    Raises:
        FileNotFoundError: If the word file is not found
        ValueError: If the JSON is malformed, the list is empty or contains invalid words
    """
    json_file_path = json_file_path or DEFAULT_WORDS_FILE

    try:
        with open(json_file_path, 'r', encoding='utf-8') as f:
            word_list = json.load(f)
    except FileNotFoundError:
        raise FileNotFoundError(f"Word list file not found: {json_file_path}")
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {json_file_path}: {e}")

    if not isinstance(word_list, list):
        raise ValueError("JSON file must contain an array of words")

    if not word_list:
        raise ValueError("Word list cannot be empty")

    uppercase_words = []
    for word in word_list:
        if not isinstance(word, str):
            raise ValueError(f"Word '{word}' is not a string")
        word = word.strip().upper()
        if len(word) != word_length:
            raise ValueError(f"Word '{word}' is not {word_length} characters long")
        if not word.isalpha():
            raise ValueError(f"Word '{word}' contains non-alphabetic characters")
        uppercase_words.append(word)

    return uppercase_words


def validate_word_list_integrity(word_list: List[str],
                                 word_length: int = WORD_LENGTH) -> bool:
    """
    Validates the integrity and consistency of the word database.

    This function performs validation to ensure:
    1. Length validation: All words must be exactly word_length characters
    2. Character validation: Only alphabetic characters allowed
    3. Uniqueness validation: No duplicate entries
    4. Format validation: Consistent uppercase formatting

    Returns:
        bool: True if word list passes all validation checks

    Raises:
        ValueError: If any validation check fails with detailed error message
    """
    words = list(word_list)

    if not words:
        raise ValueError("Word list cannot be empty")

    for index, word in enumerate(words):
        if len(word) != word_length:
            raise ValueError(f"Word at index {index} '{word}' is not {word_length} characters long")

        if not word.isalpha():
            raise ValueError(f"Word at index {index} '{word}' contains non-alphabetic characters")

        if not word.isupper():
            raise ValueError(f"Word at index {index} '{word}' is not in uppercase format")

    if len(words) != len(set(words)):
        duplicates = sorted({word for word in words if words.count(word) > 1})
        raise ValueError(f"Duplicate words found in word list: {duplicates}")

    return True


def get_word_statistics(word_list: List[str]) -> dict:
    """
    Analyzes the word list and returns statistical information for game balancing.

    Returns:
        dict: total_words, avg_vowel_count, letter_frequency and most_common_letters
    """
    words = list(word_list)
    if not words:
        return {"error": "Word list is empty"}

    vowels = set('AEIOU')
    total_vowels = sum(len([char for char in word if char in vowels]) for word in words)

    letter_frequency = {}
    for word in words:
        for char in word:
            letter_frequency[char] = letter_frequency.get(char, 0) + 1

    return {
        "total_words": len(words),
        "avg_vowel_count": round(total_vowels / len(words), 2),
        "letter_frequency": letter_frequency,
        "most_common_letters": sorted(letter_frequency.items(), key=lambda x: x[1], reverse=True)[:5]
    }

