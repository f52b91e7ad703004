"""
Game Session

The turn protocol of a single Termo game: the letter buffer, guess
submission, win/loss detection, statistics and persistence ordering.
"""

import logging
from typing import Dict, List, Optional

from ..config.game_settings import WORD_LENGTH, MAX_ATTEMPTS, WIN_MESSAGES, FALLBACK_WIN_MESSAGE
from ..models.errors import GameOver, IncompleteGuess, NotInDictionary, SnapshotError
from ..models.game import GameStatus, GuessOutcome, GuessRecord, LetterStatus, SessionState, Statistics
from .dictionary import Dictionary
from .persistence import PersistencePort
from .scoring import classify, letter_hints

logger = logging.getLogger(__name__)

SHARE_SQUARES = {
    LetterStatus.CORRECT: '🟩',
    LetterStatus.PRESENT: '🟨',
    LetterStatus.ABSENT: '⬛',
}


def win_message(attempts: int) -> str:
    """Message for a win on the given (1-based) attempt."""
    if 1 <= attempts <= len(WIN_MESSAGES):
        return WIN_MESSAGES[attempts - 1]
    return FALLBACK_WIN_MESSAGE


class GameSession:
    """
    One player's game.

    The session owns its SessionState and Statistics. Every successful
    mutation is persisted immediately; when a game ends the session snapshot
    is saved before the statistics.
    """

    def __init__(self, dictionary: Dictionary, persistence: PersistencePort,
                 word_length: int = WORD_LENGTH, max_attempts: int = MAX_ATTEMPTS):
        if dictionary.word_length != word_length:
            raise ValueError(
                f"Dictionary holds {dictionary.word_length}-letter words, game needs {word_length}"
            )
        self.dictionary = dictionary
        self.persistence = persistence
        self.word_length = word_length
        self.max_attempts = max_attempts
        self.statistics = Statistics(distribution=[0] * max_attempts)
        self._state: Optional[SessionState] = None

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def state(self) -> SessionState:
        if self._state is None:
            raise RuntimeError("No game loaded; call load() or start_new_game() first")
        return self._state

    def load(self) -> bool:
        """
        Restore statistics and the saved game from persistence.

        Returns:
            bool: True if a saved game was resumed, False if a new game was started
        """
        raw_stats = self.persistence.load_statistics()
        if raw_stats is not None:
            try:
                self.statistics = Statistics.from_dict(raw_stats, self.max_attempts)
            except SnapshotError as e:
                logger.warning(f"Discarding malformed statistics: {e}")

        snapshot = self.persistence.load_session_state()
        if snapshot is None:
            self.start_new_game()
            return False
        return self.restore_from_snapshot(snapshot)

    def start_new_game(self) -> None:
        """Pick a new secret word and reset history and buffer. Statistics are kept."""
        self._state = SessionState(secret_word=self.dictionary.random_word())
        self._save_state()
        logger.debug("New game started")

    def restore_from_snapshot(self, snapshot) -> bool:
        """
        Replace the current state with a saved snapshot.

        Statistics are never touched here, even when the snapshot is a finished
        game. A malformed snapshot is treated as no saved game at all.

        Returns:
            bool: True if the snapshot was restored, False if a new game was started instead
        """
        try:
            self._state = SessionState.from_dict(snapshot, self.word_length, self.max_attempts)
        except SnapshotError as e:
            logger.warning(f"Discarding malformed session snapshot: {e}")
            self.start_new_game()
            return False
        return True

    def snapshot(self) -> Dict:
        return self.state.to_dict()

    # ------------------------------------------------------------------
    # Turn protocol
    # ------------------------------------------------------------------

    @property
    def status(self) -> GameStatus:
        return self.state.status

    @property
    def history(self) -> List[GuessRecord]:
        return list(self.state.history)

    @property
    def buffer(self) -> List[str]:
        return list(self.state.buffer)

    def append_letter(self, letter) -> bool:
        """
        Add one letter to the buffer.

        Returns:
            bool: False (and no change) if the game is over, the buffer is full
            or ``letter`` is not a single alphabetic character
        """
        state = self.state
        if state.status.is_terminal or len(state.buffer) >= self.word_length:
            return False
        if not isinstance(letter, str) or len(letter) != 1 or not letter.isalpha():
            return False

        state.buffer.append(letter.upper())
        self._save_state()
        return True

    def remove_letter(self) -> bool:
        """Drop the last buffered letter. False if there was nothing to remove."""
        state = self.state
        if state.status.is_terminal or not state.buffer:
            return False

        state.buffer.pop()
        self._save_state()
        return True

    def submit_guess(self) -> GuessOutcome:
        """
        Score the buffered word and advance the game.

        Raises:
            GameOver: If the game already ended
            IncompleteGuess: If the buffer does not hold exactly word_length letters
            NotInDictionary: If the buffered word is not an accepted word

        On any error the session is left unchanged.
        """
        state = self.state
        if state.status.is_terminal:
            raise GameOver()
        if len(state.buffer) != self.word_length:
            raise IncompleteGuess()

        word = ''.join(state.buffer)
        if not self.dictionary.contains(word):
            raise NotInDictionary()

        record = GuessRecord(word, tuple(classify(state.secret_word, word)))
        state.history.append(record)
        state.buffer.clear()

        if word == state.secret_word:
            state.status = GameStatus.WON
        elif len(state.history) >= self.max_attempts:
            state.status = GameStatus.LOST

        self._save_state()

        attempt = len(state.history)
        if state.status.is_terminal:
            won = state.status is GameStatus.WON
            self.statistics.record(won, attempt)
            self._save_statistics()
            logger.info(f"Game {'won' if won else 'lost'} after {attempt} attempt(s)")

        return GuessOutcome(
            record=record,
            status=state.status,
            attempt=attempt,
            message=win_message(attempt) if state.status is GameStatus.WON else None,
            answer=state.secret_word if state.status.is_terminal else None,
        )

    # ------------------------------------------------------------------
    # Projections
    # ------------------------------------------------------------------

    def letter_hints(self) -> Dict[str, LetterStatus]:
        return letter_hints(self.state.history)

    def share_text(self, title: str = "Termo Clone") -> str:
        """Spoiler-free summary: the title line and one emoji row per guess."""
        state = self.state
        score = str(len(state.history)) if state.status is GameStatus.WON else 'X'
        rows = [''.join(SHARE_SQUARES[status] for status in record.result) for record in state.history]
        return f"{title} {score}/{self.max_attempts}\n\n" + '\n'.join(rows)

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _save_state(self) -> None:
        self.persistence.save_session_state(self.state.to_dict())

    def _save_statistics(self) -> None:
        self.persistence.save_statistics(self.statistics.to_dict())
