import asyncio

import pytest
from fastapi.testclient import TestClient

from exam_admin.config import Settings
from exam_admin.database import get_today
from exam_admin.main import create_app
from exam_admin.stores import MemoryDocumentStore, MemoryKeyTreeStore

TODAY = "2024-05-01"


@pytest.fixture
def settings():
    return Settings(store_backend="memory", _env_file=None)


@pytest.fixture
def document_store():
    return MemoryDocumentStore()


@pytest.fixture
def key_tree_store():
    return MemoryKeyTreeStore()


@pytest.fixture
def run():
    """Run a coroutine to completion from a sync test."""
    return asyncio.run


@pytest.fixture
def app(settings, document_store, key_tree_store):
    application = create_app(settings, document_store, key_tree_store)
    application.dependency_overrides[get_today] = lambda: TODAY
    return application


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
