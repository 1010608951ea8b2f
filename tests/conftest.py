"""Pytest configuration and fixtures."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.storage.contracts import ObjectStorage
from app.storage.memory_impl import InMemoryStorage


@pytest.fixture
def settings():
    """Settings isolated from the process environment and .env files."""
    return Settings(_env_file=None, STORAGE_BACKEND="memory", S3_BUCKET="ipfs", STREAM_CHUNK_SIZE=4)


@pytest.fixture
def memory_storage(settings):
    storage = InMemoryStorage(chunk_size=settings.STREAM_CHUNK_SIZE)
    storage.ensure_bucket(settings.S3_BUCKET)
    return storage


@pytest.fixture
def client(memory_storage, settings):
    """TestClient over an app sharing ``memory_storage``."""
    app = create_app(storage=memory_storage, settings=settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture
def mock_storage():
    """Create a mock storage client."""
    return MagicMock(spec=ObjectStorage)


@pytest.fixture
def mock_client(mock_storage, settings):
    """TestClient over an app whose storage is ``mock_storage``."""
    app = create_app(storage=mock_storage, settings=settings)
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client
