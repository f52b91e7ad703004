"""
Utilities Package

Contains utility functions, decorators, and helper modules.
"""

from .decorators import require_game
from .helpers import is_valid_letter, normalize_key, get_user_ip
from .game_logger import game_logger
