"""Storage package: object storage abstraction."""

from app.storage.contracts import ObjectStorage, StorageError, StoredObject, is_not_found, is_transient
from app.storage.memory_impl import InMemoryStorage
from app.storage.minio_impl import MinioStorage

__all__ = [
    "InMemoryStorage",
    "MinioStorage",
    "ObjectStorage",
    "StorageError",
    "StoredObject",
    "is_not_found",
    "is_transient",
]
