"""
Pytest configuration and shared fixtures.

Firestore is replaced by a small in-memory fake that supports the
surface the code uses: collection(name).document(id).get()/set().
Spotify HTTP calls are replaced with Mock responses per test.
"""

import copy
import threading
from unittest.mock import Mock

import pytest

import mixtape.services.spotify_token_service as token_service
import mixtape.services.submission_service as submission_service
import mixtape.services.token_store as token_store


# =============================================================================
# Fake Firestore
# =============================================================================

class FakeSnapshot:
    def __init__(self, doc_id, data):
        self.id = doc_id
        self._data = copy.deepcopy(data)

    @property
    def exists(self):
        return self._data is not None

    def to_dict(self):
        return copy.deepcopy(self._data)


class FakeDocument:
    def __init__(self, db, collection, doc_id):
        self._db = db
        self._key = (collection, doc_id)
        self.id = doc_id

    def get(self):
        with self._db.lock:
            return FakeSnapshot(self.id, self._db.docs.get(self._key))

    def set(self, data):
        if self._db.fail_writes_to == self._key[0]:
            raise RuntimeError("Firestore unavailable")
        with self._db.lock:
            self._db.docs[self._key] = copy.deepcopy(data)
            self._db.writes.append(self._key)


class FakeCollection:
    def __init__(self, db, name):
        self._db = db
        self._name = name

    def document(self, doc_id):
        return FakeDocument(self._db, self._name, doc_id)


class FakeFirestore:
    def __init__(self):
        self.docs = {}
        self.writes = []
        self.fail_writes_to = None
        self.lock = threading.Lock()

    def collection(self, name):
        return FakeCollection(self, name)

    def collection_docs(self, name):
        return {doc_id: data for (coll, doc_id), data in self.docs.items() if coll == name}


@pytest.fixture
def fake_db(monkeypatch):
    db = FakeFirestore()
    monkeypatch.setattr(token_store, "get_db", lambda: db)
    monkeypatch.setattr(submission_service, "get_db", lambda: db)
    return db


@pytest.fixture(autouse=True)
def spotify_credentials(monkeypatch):
    monkeypatch.setattr(token_service, "CLIENT_ID", "test_client_id")
    monkeypatch.setattr(token_service, "CLIENT_SECRET", "test_client_secret")


# =============================================================================
# HTTP helpers
# =============================================================================

def make_response(status_code=200, json_data=None, text=None):
    """A Mock shaped like requests.Response."""
    response = Mock()
    response.status_code = status_code
    response.json.return_value = json_data
    if text is None:
        text = "" if json_data is None else str(json_data)
    response.text = text
    return response


@pytest.fixture
def seeded_server_token(fake_db):
    fake_db.docs[("spotify", "serverAccessToken")] = {
        "accessToken": "server_access_1",
        "refreshToken": "server_refresh_1",
        "updatedAt": None,
    }
    return fake_db
