"""
WebSocket Event Handlers

Real-time keyboard channel: the client forwards raw key presses and the
server answers with state updates and scored guesses.
"""

from dataclasses import asdict
from flask import request
from flask_socketio import emit
from ..models.errors import GameError
from ..models.game import GameStatus
from ..services.game_service import get_game_service
from ..utils.game_logger import game_logger
from ..utils.helpers import normalize_key


def _resolve_session(data):
    """Return (game_id, session) or emit an error and return (game_id, None)."""
    game_service = get_game_service()
    if not game_service:
        emit('error', {'error': 'Game service unavailable', 'error_code': 'unavailable'})
        return None, None

    game_id = data.get('game_id') if isinstance(data, dict) else None
    if not game_id:
        emit('error', {'error': 'Game ID is required', 'error_code': 'missing_game_id'})
        return None, None

    session = game_service.get_session(game_id)
    if session is None:
        emit('error', {'error': 'Game not found', 'error_code': 'not_found', 'game_id': game_id})
    return game_id, session


def _emit_state(game_id):
    state = get_game_service().get_game_state(game_id)
    emit('state_update', {'game_id': game_id, 'state': asdict(state)})


def register_websocket_handlers(socketio):
    """Register all WebSocket event handlers."""

    @socketio.on('join_game')
    def handle_join_game(data):
        """Send the current state of a game to the caller."""
        game_id, session = _resolve_session(data)
        if session is None:
            return

        game_logger.log_user_action(request, 'join_game', game_id)
        _emit_state(game_id)

    @socketio.on('key')
    def handle_key(data):
        """Apply one key press: ENTER submits, BACKSPACE removes, A-Z appends."""
        game_id, session = _resolve_session(data)
        if session is None:
            return

        command = normalize_key(data.get('key'))
        if command is None:
            return

        action, letter = command
        game_logger.log_user_action(request, 'key', game_id, key=data.get('key'))

        if action == 'append':
            if session.append_letter(letter):
                _emit_state(game_id)
            return

        if action == 'remove':
            if session.remove_letter():
                _emit_state(game_id)
            return

        try:
            outcome = session.submit_guess()
        except GameError as e:
            emit('error', {'game_id': game_id, 'error': str(e), 'error_code': e.code})
            return

        emit('guess_result', {
            'game_id': game_id,
            'guess': {
                'word': outcome.record.word,
                'result': [status.value for status in outcome.record.result]
            },
            'status': outcome.status.value,
            'attempt': outcome.attempt,
            'message': outcome.message,
            'answer': outcome.answer
        })
        _emit_state(game_id)

        if outcome.status.is_terminal:
            event = 'game_won' if outcome.status is GameStatus.WON else 'game_lost'
            game_logger.log_game_event(
                game_id, event, request.remote_addr,
                attempts_used=outcome.attempt, target_word=outcome.answer
            )
