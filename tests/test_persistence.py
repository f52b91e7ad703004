"""
Testing the persistence adapters.
"""

import pytest

from termo.config import TestingConfig
from termo.models.game import GameStatus
from termo.services.persistence import (
    InMemoryPersistence, JsonFilePersistence, MongoPersistence, create_persistence_factory
)
from termo.services.session import GameSession

from conftest import new_snapshot, play

STATS = {
    "games_played": 1, "games_won": 1, "current_streak": 1,
    "longest_streak": 1, "distribution": [0, 0, 1, 0, 0, 0],
}


class FakeCollection:
    """The subset of a pymongo collection the adapter uses."""

    def __init__(self):
        self.documents = {}

    def find_one(self, query, projection=None):
        document = self.documents.get(query["_id"])
        if document is None:
            return None
        if projection:
            return {"_id": document["_id"], **{k: document[k] for k in projection if k in document}}
        return dict(document)

    def update_one(self, query, update, upsert=False):
        document = self.documents.get(query["_id"])
        if document is None:
            assert upsert
            document = self.documents[query["_id"]] = {"_id": query["_id"]}
        document.update(update["$set"])

    def delete_one(self, query):
        self.documents.pop(query["_id"], None)


@pytest.fixture(params=["memory", "json", "mongo"])
def port(request, tmp_path):
    if request.param == "memory":
        return InMemoryPersistence()
    if request.param == "json":
        return JsonFilePersistence(str(tmp_path), "player-1")
    return MongoPersistence(FakeCollection(), "player-1")


def test_empty_port_returns_none(port):
    assert port.load_session_state() is None
    assert port.load_statistics() is None


def test_port_round_trips_snapshots(port):
    snapshot = new_snapshot("GARDEN", ["PLANET"], ["G"])
    port.save_session_state(snapshot)
    port.save_statistics(STATS)

    assert port.load_session_state() == snapshot
    assert port.load_statistics() == STATS


def test_port_clear(port):
    port.save_session_state(new_snapshot("GARDEN"))
    port.save_statistics(STATS)

    port.clear()

    assert port.load_session_state() is None
    assert port.load_statistics() is None


def test_in_memory_port_returns_copies():
    port = InMemoryPersistence()
    snapshot = new_snapshot("GARDEN")
    port.save_session_state(snapshot)

    port.load_session_state()["guesses"].append("PLANET")

    assert port.load_session_state() == snapshot


def test_session_survives_restart_through_json_files(tmp_path, dictionary):
    first = GameSession(dictionary, JsonFilePersistence(str(tmp_path), "abc"))
    first.restore_from_snapshot(new_snapshot("GARDEN"))
    play(first, "PLANET")
    play(first, "GARDEN")

    second = GameSession(dictionary, JsonFilePersistence(str(tmp_path), "abc"))
    assert second.load() is True
    assert second.status is GameStatus.WON
    assert second.statistics.distribution == [0, 1, 0, 0, 0, 0]


def test_corrupt_json_file_counts_as_no_saved_game(tmp_path, dictionary):
    port = JsonFilePersistence(str(tmp_path), "abc")
    port.session_path.write_text("{not json", encoding="utf-8")

    assert port.load_session_state() is None

    game = GameSession(dictionary, port)
    assert game.load() is False
    assert game.status is GameStatus.IN_PROGRESS


@pytest.mark.parametrize("key", ["", "../escape", "a/b", "x" * 65, None])
def test_invalid_keys_are_rejected(tmp_path, key):
    with pytest.raises(ValueError):
        JsonFilePersistence(str(tmp_path), key)


def test_factory_backends(tmp_path):
    class MemoryConfig(TestingConfig):
        PERSISTENCE_BACKEND = "memory"

    class JsonConfig(TestingConfig):
        PERSISTENCE_BACKEND = "json"
        STATE_DIR = str(tmp_path / "state")

    assert isinstance(create_persistence_factory(MemoryConfig)("g1"), InMemoryPersistence)

    port = create_persistence_factory(JsonConfig)("g1")
    assert isinstance(port, JsonFilePersistence)
    assert port.session_path.parent == tmp_path / "state"


def test_factory_rejects_unknown_backend():
    class BadConfig(TestingConfig):
        PERSISTENCE_BACKEND = "redis"

    with pytest.raises(ValueError):
        create_persistence_factory(BadConfig)


def test_mongo_backend_requires_uri():
    class MongoConfig(TestingConfig):
        PERSISTENCE_BACKEND = "mongo"
        MONGO_URI = None

    with pytest.raises(ValueError):
        create_persistence_factory(MongoConfig)
