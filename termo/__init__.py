"""
Termo Game Server Application Package

A Portuguese Wordle clone: a pure game core (scoring and the session state
machine) served over HTTP and WebSocket.
"""

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from .config import Config


def create_app(config_class=Config):
    """
    Application factory pattern for creating Flask app instances.

    Args:
        config_class: Configuration class to use

    Returns:
        Flask application instance and its SocketIO server
    """
    from .services.dictionary import Dictionary
    from .services.game_service import initialize_game_service
    from .services.persistence import create_persistence_factory
    from .utils.game_logger import game_logger

    app = Flask(__name__)
    app.config.from_object(config_class)

    game_logger.configure(app.config['LOG_DIR'], app.config['LOG_LEVEL'])

    # Initialize extensions
    CORS(app)
    socketio = SocketIO(app, cors_allowed_origins="*", logger=False, engineio_logger=False)

    # Initialize the game service
    dictionary = Dictionary.from_json(app.config['WORDS_FILE'], app.config['WORD_LENGTH'])
    initialize_game_service(
        dictionary,
        create_persistence_factory(config_class),
        word_length=app.config['WORD_LENGTH'],
        max_attempts=app.config['MAX_ATTEMPTS'],
    )

    # Register blueprints
    from .controllers.game_controller import game_bp

    app.register_blueprint(game_bp, url_prefix='/api')

    # Register WebSocket handlers
    from .websocket.handlers import register_websocket_handlers
    register_websocket_handlers(socketio)

    # Store socketio instance for use in other modules
    app.socketio = socketio

    return app, socketio
