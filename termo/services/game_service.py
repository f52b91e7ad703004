"""
Game Service

Manages the Termo game sessions served by the application, one per game id.
"""

import uuid
from typing import Dict, Optional

from ..config.game_settings import WORD_LENGTH, MAX_ATTEMPTS
from ..models.game import GameState, GameStatus
from .dictionary import Dictionary
from .persistence import PersistenceFactory, InMemoryPersistence, validate_key
from .session import GameSession, win_message

UNUSED = "unused"
ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"


class GameService:
    """
    Core game service managing multiple game sessions.

    This class handles:
    - Session management with unique game IDs
    - Binding each session to its own persistence port
    - Building client-facing state without exposing the answer mid-game
    """

    def __init__(self, dictionary: Dictionary,
                 persistence_factory: Optional[PersistenceFactory] = None,
                 word_length: int = WORD_LENGTH, max_attempts: int = MAX_ATTEMPTS):
        self.games: Dict[str, GameSession] = {}  # Active sessions by game_id
        self.dictionary = dictionary
        self.persistence_factory = persistence_factory or (lambda key: InMemoryPersistence())
        self.word_length = word_length
        self.max_attempts = max_attempts

    def create_new_game(self, game_id: Optional[str] = None) -> str:
        """
        Opens a session, resuming the saved game for ``game_id`` if there is one.

        Args:
            game_id: Existing game identifier to resume; a new one is generated if omitted

        Returns:
            str: Game ID for this session

        Raises:
            ValueError: If the supplied game_id contains unsupported characters
        """
        if game_id is None:
            game_id = str(uuid.uuid4())
        validate_key(game_id)

        if game_id not in self.games:
            session = GameSession(
                self.dictionary,
                self.persistence_factory(game_id),
                word_length=self.word_length,
                max_attempts=self.max_attempts,
            )
            session.load()
            self.games[game_id] = session

        return game_id

    def get_session(self, game_id: str) -> Optional[GameSession]:
        return self.games.get(game_id)

    def new_round(self, game_id: str) -> Optional[GameSession]:
        """Starts a fresh game in an existing session, keeping its statistics."""
        session = self.games.get(game_id)
        if session is None:
            return None
        session.start_new_game()
        return session

    def get_game_state(self, game_id: str) -> Optional[GameState]:
        """
        Returns the current game state for a session (without revealing the answer).

        Args:
            game_id: Unique game identifier

        Returns:
            GameState object or None if game not found
        """
        session = self.games.get(game_id)
        if session is None:
            return None

        state = session.state
        status = state.status
        hints = session.letter_hints()

        return GameState(
            game_id=game_id,
            status=status.value,
            word_length=self.word_length,
            max_attempts=self.max_attempts,
            attempts_used=len(state.history),
            game_over=status.is_terminal,
            won=status is GameStatus.WON,
            guesses=state.guesses,
            guess_results=[record.to_pairs() for record in state.history],
            buffer=list(state.buffer),
            letter_status={letter: hints[letter].value if letter in hints else UNUSED for letter in ALPHABET},
            answer=state.secret_word if status.is_terminal else None,
            message=win_message(len(state.history)) if status is GameStatus.WON else None,
        )

    def delete_game(self, game_id: str) -> bool:
        """
        Removes a session from memory and forgets its saved data.

        Returns:
            bool: True if game was deleted, False if not found
        """
        session = self.games.pop(game_id, None)
        if session is None:
            return False
        session.persistence.clear()
        return True


# Global service instance
_game_service = None


def get_game_service() -> Optional[GameService]:
    """Get the global game service instance."""
    return _game_service


def initialize_game_service(dictionary: Dictionary,
                            persistence_factory: Optional[PersistenceFactory] = None,
                            word_length: int = WORD_LENGTH,
                            max_attempts: int = MAX_ATTEMPTS) -> GameService:
    """Initialize the global game service instance."""
    global _game_service
    _game_service = GameService(dictionary, persistence_factory, word_length, max_attempts)
    return _game_service
