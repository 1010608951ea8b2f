"""MinIO-backed implementation of the storage interfaces."""

from __future__ import annotations

import io

from minio import Minio
from minio.error import S3Error

from app.storage.contracts import ObjectStorage, StorageError, StoredObject

DEFAULT_CHUNK_SIZE = 64 * 1024


def _wrap_error(op: str, bucket: str | None, key: str | None, exc: Exception) -> StorageError:
    if isinstance(exc, S3Error):
        return StorageError(op=op, bucket=bucket, key=key, message=exc.message or str(exc), code=exc.code)
    return StorageError(op=op, bucket=bucket, key=key, message=str(exc))


class MinioStorage(ObjectStorage):
    """Object storage abstraction backed by MinIO SDK."""

    def __init__(self, client: Minio, chunk_size: int = DEFAULT_CHUNK_SIZE):
        self._client = client
        self._chunk_size = chunk_size

    def put_bytes(
        self,
        bucket: str,
        key: str,
        data: bytes,
        *,
        content_type: str | None = None,
    ) -> str:
        try:
            # MinIO requires a file-like object with read() method
            self._client.put_object(
                bucket_name=bucket,
                object_name=key,
                data=io.BytesIO(data),
                length=len(data),
                content_type=content_type or "application/octet-stream",
            )
            return f"{bucket}/{key}"
        except Exception as exc:
            raise _wrap_error("put", bucket, key, exc) from exc

    def get_object(self, bucket: str, key: str) -> StoredObject:
        try:
            response = self._client.get_object(bucket_name=bucket, object_name=key)
        except Exception as exc:
            raise _wrap_error("get", bucket, key, exc) from exc

        def release() -> None:
            response.close()
            response.release_conn()

        try:
            headers = response.headers or {}
            length = headers.get("Content-Length")
            content_type = headers.get("Content-Type")
            if length is None:
                info = self._client.stat_object(bucket_name=bucket, object_name=key)
                length, content_type = info.size, info.content_type
            size = int(length)
        except Exception as exc:
            release()
            raise _wrap_error("stat", bucket, key, exc) from exc

        return StoredObject(
            key=key,
            size=size,
            content_type=content_type,
            chunks=response.stream(self._chunk_size),
            release=release,
        )

    def bucket_exists(self, name: str) -> bool:
        try:
            return self._client.bucket_exists(bucket_name=name)
        except Exception as exc:
            raise _wrap_error("bucket_exists", name, None, exc) from exc

    def make_bucket(self, name: str) -> None:
        try:
            self._client.make_bucket(bucket_name=name)
        except Exception as exc:
            raise _wrap_error("make_bucket", name, None, exc) from exc

    def ensure_bucket(self, name: str) -> bool:
        """Create ``name`` if missing; return True when it was created."""
        if self.bucket_exists(name):
            return False
        self.make_bucket(name)
        return True


__all__ = ["MinioStorage"]
