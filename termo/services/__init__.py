"""
Services Package

Contains the game core and the services built around it.
"""

from .scoring import classify, letter_hints, merge_letter_hints
from .dictionary import Dictionary
from .persistence import (
    PersistencePort, InMemoryPersistence, JsonFilePersistence, MongoPersistence,
    create_persistence_factory
)
from .session import GameSession, win_message
from .game_service import GameService, get_game_service, initialize_game_service

__all__ = [
    'classify', 'letter_hints', 'merge_letter_hints',
    'Dictionary',
    'PersistencePort', 'InMemoryPersistence', 'JsonFilePersistence', 'MongoPersistence',
    'create_persistence_factory',
    'GameSession', 'win_message',
    'GameService', 'get_game_service', 'initialize_game_service'
]
