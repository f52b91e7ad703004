"""
Game Errors

Exceptions raised by the game core. All of them are local and recoverable:
the session state is left exactly as it was before the failing call.
"""


class GameError(Exception):
    """Base class for rejected game operations."""
    code = "game_error"
    message = "Jogada inválida"

    def __init__(self, message=None):
        super().__init__(message or self.message)


class IncompleteGuess(GameError):
    """Guess submitted with fewer (or more) letters than the word length."""
    code = "incomplete_guess"
    message = "Palavra incompleta"


class NotInDictionary(GameError):
    """Guess is not a member of the accepted word list."""
    code = "not_in_dictionary"
    message = "Palavra não existe"


class GameOver(GameError):
    """Operation attempted on a session that already ended."""
    code = "game_over"
    message = "O jogo já terminou"


class SnapshotError(ValueError):
    """Persisted session or statistics snapshot is malformed or inconsistent."""
