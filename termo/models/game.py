"""
Game Data Models

Contains all game-related data structures and enums.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..config.game_settings import WORD_LENGTH, MAX_ATTEMPTS
from .errors import SnapshotError


class LetterStatus(Enum):
    """Per-letter verdict of a guess relative to the secret word."""
    CORRECT = "correct"
    PRESENT = "present"
    ABSENT = "absent"


class GameStatus(Enum):
    """Session lifecycle state. WON and LOST are terminal."""
    IN_PROGRESS = "in_progress"
    WON = "won"
    LOST = "lost"

    @property
    def is_terminal(self) -> bool:
        return self is not GameStatus.IN_PROGRESS


@dataclass(frozen=True)
class GuessRecord:
    """A submitted, validated guess paired with its classification."""
    word: str
    result: Tuple[LetterStatus, ...]

    def to_pairs(self) -> List[Tuple[str, str]]:
        """Letter/status pairs as plain strings for JSON serialization."""
        return [(letter, status.value) for letter, status in zip(self.word, self.result)]


@dataclass(frozen=True)
class GuessOutcome:
    """Result of a successful submission, handed back to the caller for rendering."""
    record: GuessRecord
    status: GameStatus
    attempt: int
    message: Optional[str] = None  # Win message, only when WON
    answer: Optional[str] = None  # Secret word, only when the game is over


def _is_word(value: Any, word_length: int) -> bool:
    return (isinstance(value, str) and len(value) == word_length
            and value.isalpha() and value.isupper())


@dataclass
class SessionState:
    """
    Complete state of one game session.

    Invariants (checked by from_dict):
    - len(history) <= max_attempts
    - status is WON iff the last guess equals the secret word
    - status is LOST iff history is full and the game was not won
    - buffer is empty whenever the game is over
    """
    secret_word: str
    history: List[GuessRecord] = field(default_factory=list)
    buffer: List[str] = field(default_factory=list)
    status: GameStatus = GameStatus.IN_PROGRESS

    @property
    def guesses(self) -> List[str]:
        return [record.word for record in self.history]

    def to_dict(self) -> Dict[str, Any]:
        """Serializable snapshot. Classifications are derived data and are not stored."""
        return {
            "word_length": len(self.secret_word),
            "secret_word": self.secret_word,
            "guesses": self.guesses,
            "buffer": list(self.buffer),
            "status": self.status.value,
        }

    @classmethod
    def from_dict(cls, data: Any, word_length: int = WORD_LENGTH,
                  max_attempts: int = MAX_ATTEMPTS) -> "SessionState":
        """
        Rebuild a session from a snapshot, recomputing every classification.

        Raises:
            SnapshotError: If the snapshot cannot be parsed or violates an invariant
        """
        from ..services.scoring import classify

        if not isinstance(data, dict):
            raise SnapshotError("Session snapshot must be a mapping")

        stored_length = data.get("word_length", word_length)
        if stored_length != word_length:
            raise SnapshotError(f"Snapshot word length {stored_length!r} does not match {word_length}")

        secret = data.get("secret_word")
        if not _is_word(secret, word_length):
            raise SnapshotError(f"Invalid secret word: {secret!r}")

        guesses = data.get("guesses", [])
        if not isinstance(guesses, list) or len(guesses) > max_attempts:
            raise SnapshotError("Guess history must be a list of at most %d words" % max_attempts)
        for guess in guesses:
            if not _is_word(guess, word_length):
                raise SnapshotError(f"Invalid guess in history: {guess!r}")

        buffer = data.get("buffer", [])
        if not isinstance(buffer, list) or len(buffer) > word_length:
            raise SnapshotError("Buffer must be a list of at most %d letters" % word_length)
        for letter in buffer:
            if not _is_word(letter, 1):
                raise SnapshotError(f"Invalid letter in buffer: {letter!r}")

        try:
            status = GameStatus(data.get("status"))
        except ValueError:
            raise SnapshotError(f"Unknown status: {data.get('status')!r}")

        # Status must agree with history
        if secret in guesses[:-1]:
            raise SnapshotError("Secret word guessed before the last attempt")
        won = bool(guesses) and guesses[-1] == secret
        if won:
            expected = GameStatus.WON
        elif len(guesses) == max_attempts:
            expected = GameStatus.LOST
        else:
            expected = GameStatus.IN_PROGRESS
        if status is not expected:
            raise SnapshotError(f"Status {status.value} inconsistent with history (expected {expected.value})")
        if status.is_terminal and buffer:
            raise SnapshotError("Buffer must be empty once the game is over")

        history = [GuessRecord(guess, tuple(classify(secret, guess))) for guess in guesses]
        return cls(secret_word=secret, history=history, buffer=list(buffer), status=status)


@dataclass
class Statistics:
    """Aggregate counters across sessions. Never reset implicitly."""
    games_played: int = 0
    games_won: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    distribution: List[int] = field(default_factory=lambda: [0] * MAX_ATTEMPTS)

    def record(self, won: bool, attempts: int) -> None:
        """Apply the end-of-game transition for one finished session."""
        self.games_played += 1
        if won:
            self.games_won += 1
            self.current_streak += 1
            self.longest_streak = max(self.longest_streak, self.current_streak)
            # index 0 = won on the first attempt
            self.distribution[attempts - 1] += 1
        else:
            self.current_streak = 0

    @property
    def win_percentage(self) -> int:
        if self.games_played == 0:
            return 0
        return round(self.games_won / self.games_played * 100)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "games_played": self.games_played,
            "games_won": self.games_won,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "distribution": list(self.distribution),
        }

    @classmethod
    def from_dict(cls, data: Any, max_attempts: int = MAX_ATTEMPTS) -> "Statistics":
        """
        Raises:
            SnapshotError: If any counter is missing, negative or inconsistent
        """
        if not isinstance(data, dict):
            raise SnapshotError("Statistics snapshot must be a mapping")

        counters = {}
        for name in ("games_played", "games_won", "current_streak", "longest_streak"):
            value = data.get(name, 0)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise SnapshotError(f"Invalid statistics counter {name}: {value!r}")
            counters[name] = value

        distribution = data.get("distribution", [0] * max_attempts)
        if (not isinstance(distribution, list) or len(distribution) != max_attempts
                or any(not isinstance(v, int) or isinstance(v, bool) or v < 0 for v in distribution)):
            raise SnapshotError(f"Invalid win distribution: {distribution!r}")

        if counters["games_won"] > counters["games_played"]:
            raise SnapshotError("More games won than played")
        if sum(distribution) != counters["games_won"]:
            raise SnapshotError("Win distribution does not add up to games won")

        return cls(distribution=list(distribution), **counters)


@dataclass
class GameState:
    """Client-facing game state representation (the answer is hidden until the game ends)."""
    game_id: str
    status: str
    word_length: int
    max_attempts: int
    attempts_used: int
    game_over: bool
    won: bool
    guesses: List[str]
    guess_results: List[List[Tuple[str, str]]]  # Letter status as string for JSON serialization
    buffer: List[str]
    letter_status: Dict[str, str]
    answer: Optional[str] = None  # Only included when game is over
    message: Optional[str] = None  # Only included when game is won
