"""Factory for building storage instances from configuration."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

from minio import Minio

from app.core.config import Settings
from app.storage.contracts import ObjectStorage
from app.storage.memory_impl import InMemoryStorage
from app.storage.minio_impl import MinioStorage

logger = logging.getLogger(__name__)


def _normalize_endpoint(endpoint: str) -> tuple[str, bool]:
    """Extract host:port from endpoint URL and determine if secure (https).

    Bare ``host:port`` values (no scheme) are accepted as well.

    Returns:
        Tuple of (host:port, secure_flag)
    """
    if "://" not in endpoint:
        endpoint = f"http://{endpoint}"
    parsed = urlparse(endpoint)
    secure = parsed.scheme == "https"
    host = parsed.netloc or parsed.path.rstrip("/")
    return host, secure


def build_storage(settings: Settings) -> ObjectStorage:
    """Build the configured storage backend and ensure its bucket exists.

    Raises:
        StorageError: the bucket could not be checked or created.
        ValueError: unknown STORAGE_BACKEND.
    """
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "memory":
        storage: ObjectStorage = InMemoryStorage(chunk_size=settings.STREAM_CHUNK_SIZE)
    elif backend == "minio":
        host, secure = _normalize_endpoint(settings.S3_ENDPOINT)
        client = Minio(
            endpoint=host,
            access_key=settings.S3_ACCESS_KEY,
            secret_key=settings.S3_SECRET_KEY,
            secure=secure or settings.S3_USE_SSL,
            region=settings.S3_REGION,
        )
        storage = MinioStorage(client, chunk_size=settings.STREAM_CHUNK_SIZE)
    else:
        raise ValueError(f"unknown storage backend {settings.STORAGE_BACKEND!r}")

    if storage.ensure_bucket(settings.S3_BUCKET):
        logger.info("created bucket %r", settings.S3_BUCKET)
    return storage


__all__ = ["build_storage"]
