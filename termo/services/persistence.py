"""
Persistence Adapters

The game core decides when to save; these adapters decide how. Session
snapshots and statistics cross the port as plain JSON-compatible dicts.
"""

import json
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable, Dict, Optional

logger = logging.getLogger(__name__)

_KEY_PATTERN = re.compile(r'^[A-Za-z0-9_-]{1,64}$')


def validate_key(key: str) -> str:
    """Storage keys double as file names, so only a safe alphabet is accepted."""
    if not isinstance(key, str) or not _KEY_PATTERN.match(key):
        raise ValueError(f"Invalid storage key: {key!r}")
    return key


class PersistencePort(ABC):
    """Storage for one player's session snapshot and statistics."""

    @abstractmethod
    def load_session_state(self) -> Optional[Dict[str, Any]]:
        """Return the saved session snapshot, or None if there is none."""

    @abstractmethod
    def save_session_state(self, state: Dict[str, Any]) -> None:
        """Replace the saved session snapshot."""

    @abstractmethod
    def load_statistics(self) -> Optional[Dict[str, Any]]:
        """Return the saved statistics, or None if there are none."""

    @abstractmethod
    def save_statistics(self, stats: Dict[str, Any]) -> None:
        """Replace the saved statistics."""

    def clear(self) -> None:
        """Forget everything stored for this player."""


class InMemoryPersistence(PersistencePort):
    """Keeps snapshots in process memory. Values are deep-copied through JSON."""

    def __init__(self):
        self._session: Optional[str] = None
        self._statistics: Optional[str] = None

    def load_session_state(self):
        return json.loads(self._session) if self._session is not None else None

    def save_session_state(self, state):
        self._session = json.dumps(state)

    def load_statistics(self):
        return json.loads(self._statistics) if self._statistics is not None else None

    def save_statistics(self, stats):
        self._statistics = json.dumps(stats)

    def clear(self):
        self._session = None
        self._statistics = None


class JsonFilePersistence(PersistencePort):
    """
    Stores ``<key>.session.json`` and ``<key>.stats.json`` under a directory.

    Files that cannot be read or parsed are logged and treated as absent.
    """

    def __init__(self, directory: str, key: str):
        self.directory = Path(directory)
        self.directory.mkdir(parents=True, exist_ok=True)
        self.key = validate_key(key)

    @property
    def session_path(self) -> Path:
        return self.directory / f"{self.key}.session.json"

    @property
    def statistics_path(self) -> Path:
        return self.directory / f"{self.key}.stats.json"

    def _read(self, path: Path) -> Optional[Dict[str, Any]]:
        if not path.exists():
            return None
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable snapshot {path}: {e}")
            return None

    def _write(self, path: Path, data: Dict[str, Any]) -> None:
        # Write then rename so a crash never leaves a half-written file
        tmp_path = path.with_suffix(path.suffix + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False)
        os.replace(tmp_path, path)

    def load_session_state(self):
        return self._read(self.session_path)

    def save_session_state(self, state):
        self._write(self.session_path, state)

    def load_statistics(self):
        return self._read(self.statistics_path)

    def save_statistics(self, stats):
        self._write(self.statistics_path, stats)

    def clear(self):
        for path in (self.session_path, self.statistics_path):
            if path.exists():
                path.unlink()


class MongoPersistence(PersistencePort):
    """
    One MongoDB document per player key::

        {"_id": key, "session": {...}, "statistics": {...}}
    """

    def __init__(self, collection, key: str):
        self.collection = collection
        self.key = validate_key(key)

    def _load_field(self, name: str) -> Optional[Dict[str, Any]]:
        document = self.collection.find_one({"_id": self.key}, {name: 1})
        if not document:
            return None
        return document.get(name)

    def _save_field(self, name: str, value: Dict[str, Any]) -> None:
        self.collection.update_one({"_id": self.key}, {"$set": {name: value}}, upsert=True)

    def load_session_state(self):
        return self._load_field("session")

    def save_session_state(self, state):
        self._save_field("session", state)

    def load_statistics(self):
        return self._load_field("statistics")

    def save_statistics(self, stats):
        self._save_field("statistics", stats)

    def clear(self):
        self.collection.delete_one({"_id": self.key})


PersistenceFactory = Callable[[str], PersistencePort]


def create_persistence_factory(config) -> PersistenceFactory:
    """
    Build a factory returning one persistence port per game id, according to
    ``config.PERSISTENCE_BACKEND``.
    """
    backend = getattr(config, 'PERSISTENCE_BACKEND', 'memory')

    if backend == 'memory':
        return lambda key: InMemoryPersistence()

    if backend == 'json':
        state_dir = getattr(config, 'STATE_DIR', 'state')
        return lambda key: JsonFilePersistence(state_dir, key)

    if backend == 'mongo':
        if not config.MONGO_URI:
            raise ValueError("MONGO_URI must be set for the mongo persistence backend")

        from pymongo.mongo_client import MongoClient
        from pymongo.server_api import ServerApi

        client = MongoClient(config.MONGO_URI, server_api=ServerApi('1'))
        collection = client[config.MONGO_DB].sessions
        return lambda key: MongoPersistence(collection, key)

    raise ValueError(f"Unknown persistence backend: {backend!r}")
