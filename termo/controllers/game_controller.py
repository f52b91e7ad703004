"""
Game Controller

Handles all game-related HTTP endpoints.
"""

from dataclasses import asdict
from flask import Blueprint, request, jsonify
from ..models.errors import GameError, IncompleteGuess
from ..models.game import GameStatus
from ..services.game_service import get_game_service
from ..utils.decorators import require_game
from ..utils.game_logger import game_logger
from ..config.game_settings import get_word_statistics
from ..utils.helpers import is_valid_letter

game_bp = Blueprint('game', __name__)


def _state_payload(game_id):
    return asdict(get_game_service().get_game_state(game_id))


def _fill_buffer(session, letters):
    """Replace the buffer letter by letter through the session's own operations."""
    while session.remove_letter():
        pass
    for letter in letters:
        session.append_letter(letter)


def _error_response(action, error, game_id, status_code=400):
    error_response = {
        'success': False,
        'error': str(error),
        'error_code': getattr(error, 'code', 'error')
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), status_code


def _invalid_letter_response(action, game_id):
    error_response = {
        'success': False,
        'error': 'Letter must be a single character A-Z',
        'error_code': 'invalid_letter'
    }
    game_logger.log_server_response(request, action, False, error_response, game_id)
    return jsonify(error_response), 400


@game_bp.route('/new_game', methods=['POST'])
def new_game():
    """Create a game session, or resume one when a game_id is supplied."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        data = request.get_json(silent=True) or {}
        requested_id = data.get('game_id')

        game_logger.log_user_action(request, 'new_game', requested_id)

        try:
            game_id = game_service.create_new_game(requested_id)
        except ValueError as e:
            return _error_response('new_game', e, requested_id)

        response_data = {
            'success': True,
            'game_id': game_id,
            'state': _state_payload(game_id)
        }

        game_logger.log_server_response(request, 'new_game', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'new_game')
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/restart', methods=['POST'])
@require_game
def restart_game(game_id, session):
    """Start a new round in an existing session; statistics carry over."""
    try:
        game_logger.log_user_action(request, 'restart_game', game_id)

        get_game_service().new_round(game_id)
        response_data = {
            'success': True,
            'state': _state_payload(game_id)
        }

        game_logger.log_server_response(request, 'restart_game', True, response_data, game_id)
        game_logger.log_game_event(game_id, 'game_started', request.remote_addr)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'restart_game', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/state', methods=['GET'])
@require_game
def get_state(game_id, session):
    """Get current game state."""
    try:
        game_logger.log_user_action(request, 'get_state', game_id)

        response_data = {
            'success': True,
            'state': _state_payload(game_id)
        }

        game_logger.log_server_response(request, 'get_state', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'get_state', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/letter', methods=['POST'])
@require_game
def append_letter(game_id, session):
    """Add one letter to the guess being composed."""
    try:
        data = request.get_json(silent=True) or {}
        letter = data.get('letter')

        game_logger.log_user_action(request, 'append_letter', game_id, letter=letter)

        if not is_valid_letter(letter):
            return _invalid_letter_response('append_letter', game_id)

        accepted = session.append_letter(letter)
        response_data = {
            'success': True,
            'accepted': accepted,
            'state': _state_payload(game_id)
        }

        game_logger.log_server_response(request, 'append_letter', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'append_letter', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/letter', methods=['DELETE'])
@require_game
def remove_letter(game_id, session):
    """Remove the last letter of the guess being composed."""
    try:
        game_logger.log_user_action(request, 'remove_letter', game_id)

        removed = session.remove_letter()
        response_data = {
            'success': True,
            'removed': removed,
            'state': _state_payload(game_id)
        }

        game_logger.log_server_response(request, 'remove_letter', True, response_data, game_id)
        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'remove_letter', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/guess', methods=['POST'])
@require_game
def make_guess(game_id, session):
    """
    Submit the buffered guess.

    An optional ``guess`` in the body replaces the buffer first; if the
    submission is rejected the previous buffer is put back.
    """
    try:
        data = request.get_json(silent=True) or {}
        guess = data.get('guess')

        game_logger.log_user_action(request, 'submit_guess', game_id, guess=guess)

        if guess is not None:
            if not isinstance(guess, str) or not all(is_valid_letter(letter) for letter in guess.strip()):
                return _invalid_letter_response('submit_guess', game_id)
            guess = guess.strip().upper()
            if len(guess) != session.word_length:
                return _error_response('submit_guess', IncompleteGuess(), game_id)

        previous_buffer = session.buffer
        if guess is not None:
            _fill_buffer(session, guess)

        try:
            outcome = session.submit_guess()
        except GameError as e:
            if guess is not None:
                _fill_buffer(session, previous_buffer)
            return _error_response('submit_guess', e, game_id)

        response_data = {
            'success': True,
            'guess': {
                'word': outcome.record.word,
                'result': [status.value for status in outcome.record.result]
            },
            'status': outcome.status.value,
            'attempt': outcome.attempt,
            'message': outcome.message,
            'answer': outcome.answer,
            'state': _state_payload(game_id)
        }

        game_logger.log_server_response(
            request, 'submit_guess', True, response_data, game_id,
            guess=outcome.record.word, attempt=outcome.attempt, status=outcome.status.value
        )

        if outcome.status is GameStatus.WON:
            game_logger.log_game_event(
                game_id, 'game_won', request.remote_addr,
                attempts_used=outcome.attempt, target_word=outcome.answer
            )
        elif outcome.status is GameStatus.LOST:
            game_logger.log_game_event(
                game_id, 'game_lost', request.remote_addr,
                attempts_used=outcome.attempt, target_word=outcome.answer
            )

        return jsonify(response_data)

    except Exception as e:
        game_logger.log_error(request, e, 'submit_guess', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/game/<game_id>/stats', methods=['GET'])
@require_game
def get_stats(game_id, session):
    """Statistics across all games played in this session."""
    game_logger.log_user_action(request, 'get_stats', game_id)

    stats = session.statistics
    response_data = {
        'success': True,
        'statistics': {**stats.to_dict(), 'win_percentage': stats.win_percentage}
    }

    game_logger.log_server_response(request, 'get_stats', True, response_data, game_id)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>/share', methods=['GET'])
@require_game
def share_result(game_id, session):
    """Spoiler-free result text, available once the game is over."""
    game_logger.log_user_action(request, 'share', game_id)

    if not session.status.is_terminal:
        error_response = {
            'success': False,
            'error': 'Game is still in progress',
            'error_code': 'game_in_progress'
        }
        game_logger.log_server_response(request, 'share', False, error_response, game_id)
        return jsonify(error_response), 400

    response_data = {
        'success': True,
        'text': session.share_text()
    }
    game_logger.log_server_response(request, 'share', True, response_data, game_id)
    return jsonify(response_data)


@game_bp.route('/game/<game_id>', methods=['DELETE'])
def delete_game(game_id):
    """Delete a game session and its saved data."""
    try:
        game_service = get_game_service()
        if not game_service:
            return jsonify({
                'success': False,
                'error': 'Game service unavailable'
            }), 500

        game_logger.log_user_action(request, 'delete_game', game_id)

        success = game_service.delete_game(game_id)
        response_data = {
            'success': success
        }

        game_logger.log_server_response(request, 'delete_game', success, response_data, game_id)

        if success:
            game_logger.log_game_event(game_id, 'game_deleted', request.remote_addr)
            return jsonify(response_data)
        return jsonify(response_data), 404

    except Exception as e:
        game_logger.log_error(request, e, 'delete_game', game_id)
        return jsonify({'success': False, 'error': str(e)}), 500


@game_bp.route('/health', methods=['GET'])
def health_check():
    """Health check endpoint."""
    game_service = get_game_service()

    response_data = {
        'status': 'healthy' if game_service else 'degraded',
        'active_games': len(game_service.games) if game_service else 0,
        'dictionary_size': len(game_service.dictionary) if game_service else 0,
        'word_statistics': get_word_statistics(game_service.dictionary.words) if game_service else {},
        'log_stats': game_logger.get_log_stats()
    }

    game_logger.log_server_response(request, 'health_check', True, response_data)
    return jsonify(response_data)
