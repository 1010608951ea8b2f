"""Tests for application startup."""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.core.config import Settings
from app.main import create_app
from app.storage.contracts import StorageError
from app.storage.memory_impl import InMemoryStorage


def test_startup_builds_configured_storage():
    settings = Settings(_env_file=None, STORAGE_BACKEND="memory", S3_BUCKET="ipfs")
    app = create_app(settings=settings)

    with TestClient(app) as client:
        assert isinstance(app.state.storage, InMemoryStorage)
        assert app.state.storage.bucket_exists("ipfs")
        assert client.get("/health/ready").status_code == 200


def test_startup_fails_when_bucket_unavailable(monkeypatch):
    client = MagicMock()
    client.bucket_exists.side_effect = RuntimeError("connection refused")
    monkeypatch.setattr("app.storage.factory.Minio", lambda **kwargs: client)
    app = create_app(settings=Settings(_env_file=None, STORAGE_BACKEND="minio"))

    with pytest.raises(StorageError):
        with TestClient(app):
            pass


def test_injected_storage_is_shared_across_requests():
    storage = InMemoryStorage()
    storage.ensure_bucket("ipfs")
    app = create_app(storage=storage, settings=Settings(_env_file=None, STORAGE_BACKEND="memory"))

    with TestClient(app) as client:
        cid = client.post("/upload", files={"file": ("a.txt", b"abc", "text/plain")}).json()["cid"]
        assert client.get(f"/ipfs/{cid}").content == b"abc"

    assert app.state.storage is storage
