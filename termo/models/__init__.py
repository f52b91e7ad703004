"""
Data Models Package

Contains all data models and schemas used throughout the application.
"""

from .errors import GameError, IncompleteGuess, NotInDictionary, GameOver, SnapshotError
from .game import (
    GameState, GameStatus, GuessOutcome, GuessRecord, LetterStatus, SessionState, Statistics
)

__all__ = [
    'GameError', 'IncompleteGuess', 'NotInDictionary', 'GameOver', 'SnapshotError',
    'GameState', 'GameStatus', 'GuessOutcome', 'GuessRecord', 'LetterStatus',
    'SessionState', 'Statistics'
]
