from unittest.mock import AsyncMock, MagicMock

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from splitbook.core.auth import get_current_user
from splitbook.main import app
from splitbook.models.user import User

COLLECTIONS = ("users", "groups", "expenses", "settlements")


def set_find_result(collection: MagicMock, docs: list) -> None:
    """Make collection.find(...).to_list(...) return `docs`."""
    cursor = MagicMock()
    cursor.to_list = AsyncMock(return_value=docs)
    collection.find.return_value = cursor


@pytest.fixture
def mock_db():
    """Motor-shaped database whose collections return nothing by default."""
    db = MagicMock()
    for name in COLLECTIONS:
        collection = MagicMock()
        collection.find_one = AsyncMock(return_value=None)
        collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
        set_find_result(collection, [])
        setattr(db, name, collection)
    return db


@pytest.fixture
def find_result():
    return set_find_result


@pytest.fixture
def current_user():
    return User(id=str(ObjectId()), name="Alice", email="alice@example.com")


@pytest.fixture
def test_client(current_user):
    """TestClient authenticated as `current_user`; no database lifespan."""
    app.dependency_overrides[get_current_user] = lambda: current_user
    client = TestClient(app)
    yield client
    app.dependency_overrides.clear()
