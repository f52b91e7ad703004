"""
Helper Functions

Contains utility functions used throughout the application.
"""

import re
from typing import Optional, Tuple

_LETTER = re.compile(r'[A-Z]')

ENTER = 'ENTER'
BACKSPACE = 'BACKSPACE'


def is_valid_letter(value) -> bool:
    """True for exactly one letter A-Z (case-insensitive)."""
    return isinstance(value, str) and bool(_LETTER.fullmatch(value.upper()))


def normalize_key(key) -> Optional[Tuple[str, Optional[str]]]:
    """
    Map a raw key press to a game command.

    Returns:
        ('submit', None), ('remove', None), ('append', letter), or None for keys
        the game ignores
    """
    if not isinstance(key, str):
        return None

    key = key.strip().upper()
    if key == '⌫':
        key = BACKSPACE

    if key == ENTER:
        return 'submit', None
    if key == BACKSPACE:
        return 'remove', None
    if _LETTER.fullmatch(key):
        return 'append', key
    return None


def get_user_ip(request_obj) -> str:
    """Extract the caller's IP address from a request."""
    return getattr(request_obj, 'remote_addr', None) or 'unknown'
