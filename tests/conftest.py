"""
Idea Canvas Backend — Test Configuration (conftest.py)
=======================================================

What:  Shared pytest fixtures for the entire test suite.
How:   No MongoDB is needed: collections are MagicMocks whose driver
       coroutines are AsyncMocks, and `find()`/`aggregate()` return fake
       cursors supporting the chained sort/skip/limit/to_list calls.

Fixtures:
    mock_db:      database mock; mock_db["blogs"] is the blogs collection
    make_cursor:  factory for fake Motor cursors over a list of documents
    test_client:  HTTPX AsyncClient bound to a fresh app using mock_db
"""

import os
from collections import defaultdict
from unittest.mock import AsyncMock, MagicMock

# Settings are read at import time; override before importing the app
os.environ["MONGODB_URI"] = "mongodb://localhost:27017"
os.environ["MONGODB_DATABASE"] = "idea-canvas-test"
os.environ["LOG_LEVEL"] = "WARNING"

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient


def _fake_cursor(documents):
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=list(documents))
    return cursor


def _fake_collection():
    collection = MagicMock()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock()
    collection.update_one = AsyncMock()
    collection.update_many = AsyncMock()
    collection.delete_one = AsyncMock()
    collection.count_documents = AsyncMock(return_value=0)
    collection.create_index = AsyncMock()
    collection.find.return_value = _fake_cursor([])
    collection.aggregate.return_value = _fake_cursor([])
    return collection


@pytest.fixture
def make_cursor():
    """
    Usage:
        mock_db["blogs"].find.return_value = make_cursor([blog_a, blog_b])
    """
    return _fake_cursor


@pytest.fixture
def mock_db():
    """A database mock handing out one fake collection per name."""
    collections = defaultdict(_fake_collection)
    db = MagicMock()
    db.__getitem__.side_effect = lambda name: collections[name]
    db.command = AsyncMock(return_value={"ok": 1.0})
    return db


@pytest_asyncio.fixture
async def test_client(mock_db):
    """
    HTTP client for endpoint tests.

    A new app per test keeps rate-limit state from leaking between tests.
    ASGITransport does not run the lifespan, so no MongoDB connection is
    attempted.
    """
    from ideacanvas.database import get_database
    from ideacanvas.main import create_app

    app = create_app()
    app.dependency_overrides[get_database] = lambda: mock_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
