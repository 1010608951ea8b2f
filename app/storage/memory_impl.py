"""In-process storage backend for tests and local runs."""

from __future__ import annotations

import threading
from dataclasses import dataclass

from app.storage.contracts import ObjectStorage, StorageError, StoredObject


@dataclass(frozen=True)
class _Entry:
    data: bytes
    content_type: str | None


class InMemoryStorage(ObjectStorage):
    """Dict-backed object storage, safe to share between request threads."""

    def __init__(self, chunk_size: int = 64 * 1024):
        self._buckets: dict[str, dict[str, _Entry]] = {}
        self._lock = threading.Lock()
        self._chunk_size = chunk_size

    def _bucket(self, op: str, bucket: str, key: str | None) -> dict[str, _Entry]:
        try:
            return self._buckets[bucket]
        except KeyError:
            raise StorageError(op, bucket, key, "bucket does not exist", code="NoSuchBucket") from None

    def put_bytes(
        self,
        bucket: str,
        key: str,
        data: bytes,
        *,
        content_type: str | None = None,
    ) -> str:
        with self._lock:
            self._bucket("put", bucket, key)[key] = _Entry(bytes(data), content_type)
        return f"{bucket}/{key}"

    def get_object(self, bucket: str, key: str) -> StoredObject:
        with self._lock:
            entry = self._bucket("get", bucket, key).get(key)
        if entry is None:
            raise StorageError("get", bucket, key, "object does not exist", code="NoSuchKey")

        size = self._chunk_size
        chunks = (entry.data[i:i + size] for i in range(0, len(entry.data), size))
        return StoredObject(key=key, size=len(entry.data), content_type=entry.content_type, chunks=chunks)

    def bucket_exists(self, name: str) -> bool:
        with self._lock:
            return name in self._buckets

    def make_bucket(self, name: str) -> None:
        with self._lock:
            if name in self._buckets:
                raise StorageError("make_bucket", name, None, "bucket already exists", code="BucketAlreadyOwnedByYou")
            self._buckets[name] = {}

    def ensure_bucket(self, name: str) -> bool:
        with self._lock:
            if name in self._buckets:
                return False
            self._buckets[name] = {}
            return True

    def keys(self, bucket: str) -> list[str]:
        with self._lock:
            return sorted(self._bucket("list", bucket, None))


__all__ = ["InMemoryStorage"]
