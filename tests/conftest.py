"""
Shared fixtures - in-memory SQLite with the real ORM, photo cache in tmp_path
"""

import pytest
from fastapi.testclient import TestClient

from tests.database_test_config import (
    test_engine,
    TestSessionLocal,
    create_test_database,
)
from tests.in_memory_repository import InMemoryItemRepository

from inventory_service.adapters.primary.api.inventory_router import get_blob_store
from inventory_service.adapters.secondary.database.config import get_db
from inventory_service.adapters.secondary.database.sql_repository import SqlItemRepository
from inventory_service.adapters.secondary.storage.filesystem_blob_store import FilesystemBlobStore
from inventory_service.application.services import ItemService
from inventory_service.main import app


# ============================================================================
# DATABASE FIXTURES - in-memory SQLite
# ============================================================================

@pytest.fixture(scope="session", autouse=True)
def setup_test_database():
    """Creates the schema once per test session"""
    create_test_database()
    yield
    # No drop: in-memory SQLite goes away with the connection


@pytest.fixture(scope="function")
def test_db():
    """
    Clean DB session for each test
    Wrapped in an outer transaction that is rolled back afterwards
    """
    connection = test_engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture
def repository(test_db):
    return SqlItemRepository(test_db)


# ============================================================================
# STORAGE FIXTURES
# ============================================================================

@pytest.fixture
def cache_dir(tmp_path):
    return tmp_path / "cache"


@pytest.fixture
def blob_store(cache_dir):
    store = FilesystemBlobStore(cache_dir)
    store.ensure_directory()
    return store


@pytest.fixture
def memory_service(blob_store):
    """ItemService over the in-memory repository"""
    return ItemService(InMemoryItemRepository(), blob_store)


# ============================================================================
# API FIXTURES
# ============================================================================

@pytest.fixture
def client(test_db, blob_store):
    """
    TestClient with the test session and tmp cache directory injected.
    Not used as a context manager, so the lifespan (logging, production DB) never runs.
    """
    def override_get_db():
        yield test_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_blob_store] = lambda: blob_store

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def photo_bytes():
    return b"\xff\xd8\xff\xe0fake-jpeg-payload"
