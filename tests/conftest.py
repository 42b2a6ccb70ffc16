"""Shared test fixtures: in-memory mock Firestore and the offline media host."""
import os

os.environ["USE_MOCK_DB"] = "true"
os.environ["MOCK_DB_PATH"] = ""
os.environ["MEDIA_PROVIDER"] = "mock"

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.config.mock_firestore import MockFirestore  # noqa: E402
from app.main import app  # noqa: E402


class UnreachableFirestore:
    """Client whose every call fails the way a dead connection would."""

    def collection(self, name):
        raise ConnectionError("store unreachable")

    def collections(self, **kwargs):
        raise ConnectionError("store unreachable")


@pytest.fixture
def mock_db():
    db = MockFirestore()
    app.state.db = db
    yield db
    app.state.db = None


@pytest.fixture
def client(mock_db):
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def unreachable_db():
    return UnreachableFirestore()


@pytest.fixture
def unreachable_client(unreachable_db):
    app.state.db = unreachable_db
    yield TestClient(app)
    app.state.db = None
