"""
Request Decorators

Contains decorators shared by the HTTP endpoints.
"""

from functools import wraps
from flask import jsonify


def require_game(f):
    """
    Decorator resolving the ``game_id`` URL argument to its GameSession.

    Answers 500 when the game service is not running and 404 for unknown
    games; otherwise calls the view with ``session`` as an extra keyword.
    """
    @wraps(f)
    def decorated_function(game_id, *args, **kwargs):
        from ..services.game_service import get_game_service

        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        session = game_service.get_session(game_id)
        if session is None:
            return jsonify({
                'success': False,
                'error': 'Game not found'
            }), 404

        return f(game_id, *args, session=session, **kwargs)

    return decorated_function
