import random

import pytest

from termo import create_app
from termo.config import TestingConfig
from termo.services.dictionary import Dictionary
from termo.services.game_service import initialize_game_service
from termo.services.persistence import InMemoryPersistence
from termo.services.session import GameSession

WORDS = [
    "GARDEN", "PLANET", "SILVER", "BRIDGE", "CANDLE",
    "FOREST", "ORANGE", "PURPLE", "ABACAB", "AABBCC",
]


def new_snapshot(secret, guesses=(), buffer=(), status="in_progress"):
    return {
        "word_length": len(secret),
        "secret_word": secret,
        "guesses": list(guesses),
        "buffer": list(buffer),
        "status": status,
    }


def type_word(session, word):
    for letter in word:
        session.append_letter(letter)


def play(session, word):
    type_word(session, word)
    return session.submit_guess()


@pytest.fixture
def dictionary():
    return Dictionary(WORDS, rng=random.Random(1234))


@pytest.fixture
def persistence():
    return InMemoryPersistence()


@pytest.fixture
def session(dictionary, persistence):
    """A session whose secret word is GARDEN."""
    game = GameSession(dictionary, persistence)
    game.restore_from_snapshot(new_snapshot("GARDEN"))
    return game


@pytest.fixture
def app(tmp_path, dictionary):
    class Config(TestingConfig):
        LOG_DIR = str(tmp_path / "logs")

    app, socketio = create_app(Config)
    initialize_game_service(dictionary)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def socket_client(app):
    return app.socketio.test_client(app)
