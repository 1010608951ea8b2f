"""Storage interfaces and error types."""

from __future__ import annotations

from typing import Iterator, Protocol, runtime_checkable

# Backend codes meaning "no object is stored under this key". A missing bucket is
# a misconfigured backend, not an absent object.
NOT_FOUND_CODES = frozenset({"NoSuchKey", "NoSuchObject"})

# Codes worth retrying at the caller's discretion; the gateway never retries itself.
TRANSIENT_CODES = frozenset(
    {"SlowDown", "RequestTimeout", "InternalError", "ServiceUnavailable", "ConnectionError"}
)


class StorageError(Exception):
    """Wraps underlying storage exceptions with operation context."""

    def __init__(
        self,
        op: str,
        bucket: str | None,
        key: str | None,
        message: str,
        code: str | None = None,
    ):
        self.op = op
        self.bucket = bucket
        self.key = key
        self.message = message
        self.code = code
        super().__init__(self.__str__())

    def __str__(self) -> str:  # pragma: no cover - trivial string formatting
        bucket_repr = self.bucket or "<unknown>"
        key_repr = self.key or "<unknown>"
        code_repr = f" [{self.code}]" if self.code else ""
        return f"{self.op} failed for bucket={bucket_repr} key={key_repr}{code_repr}: {self.message}"

    @property
    def is_not_found(self) -> bool:
        return self.code in NOT_FOUND_CODES

    @property
    def is_transient(self) -> bool:
        return self.code is None or self.code in TRANSIENT_CODES


def is_not_found(exc: BaseException) -> bool:
    return isinstance(exc, StorageError) and exc.is_not_found


def is_transient(exc: BaseException) -> bool:
    return isinstance(exc, StorageError) and exc.is_transient


class StoredObject:
    """An open object body plus the metadata needed to serve it.

    ``close`` may be called any number of times; the body is released once.
    """

    def __init__(
        self,
        key: str,
        size: int,
        content_type: str | None,
        chunks: Iterator[bytes],
        release=None,
    ):
        self.key = key
        self.size = size
        self.content_type = content_type or None
        self._chunks = chunks
        self._release = release
        self.closed = False

    def __iter__(self) -> Iterator[bytes]:
        return self.iter_chunks()

    def iter_chunks(self) -> Iterator[bytes]:
        try:
            for chunk in self._chunks:
                if chunk:
                    yield chunk
        finally:
            self.close()

    def read(self) -> bytes:
        return b"".join(self.iter_chunks())

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._release is not None:
            self._release()

    def __enter__(self) -> "StoredObject":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


@runtime_checkable
class ObjectStorage(Protocol):
    """Contract for object storage implementations."""

    def put_bytes(
        self,
        bucket: str,
        key: str,
        data: bytes,
        *,
        content_type: str | None = None,
    ) -> str:
        ...

    def get_object(self, bucket: str, key: str) -> StoredObject:
        ...

    def bucket_exists(self, name: str) -> bool:
        ...

    def make_bucket(self, name: str) -> None:
        ...

    def ensure_bucket(self, name: str) -> bool:
        ...


__all__ = [
    "NOT_FOUND_CODES",
    "ObjectStorage",
    "StorageError",
    "StoredObject",
    "TRANSIENT_CODES",
    "is_not_found",
    "is_transient",
]
