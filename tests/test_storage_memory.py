"""Tests for the in-memory storage backend."""

import threading

import pytest

from app.storage.contracts import ObjectStorage, StorageError
from app.storage.memory_impl import InMemoryStorage


@pytest.fixture
def storage():
    storage = InMemoryStorage(chunk_size=2)
    storage.ensure_bucket("ipfs")
    return storage


def test_satisfies_protocol(storage):
    assert isinstance(storage, ObjectStorage)


def test_put_then_get(storage):
    storage.put_bytes("ipfs", "k", b"hello", content_type="text/plain")

    with storage.get_object("ipfs", "k") as obj:
        assert obj.size == 5
        assert obj.content_type == "text/plain"
        assert list(obj) == [b"he", b"ll", b"o"]


def test_overwrite_same_key(storage):
    storage.put_bytes("ipfs", "k", b"one")
    storage.put_bytes("ipfs", "k", b"one")

    assert storage.keys("ipfs") == ["k"]
    assert storage.get_object("ipfs", "k").read() == b"one"


def test_missing_key_is_not_found(storage):
    with pytest.raises(StorageError) as excinfo:
        storage.get_object("ipfs", "absent")

    assert excinfo.value.is_not_found
    assert excinfo.value.code == "NoSuchKey"


def test_missing_bucket(storage):
    with pytest.raises(StorageError) as excinfo:
        storage.put_bytes("other", "k", b"x")

    assert excinfo.value.code == "NoSuchBucket"
    assert not excinfo.value.is_not_found


def test_ensure_bucket_reports_creation():
    storage = InMemoryStorage()

    assert storage.ensure_bucket("ipfs") is True
    assert storage.ensure_bucket("ipfs") is False
    assert storage.bucket_exists("ipfs")


def test_make_bucket_twice_fails():
    storage = InMemoryStorage()
    storage.make_bucket("ipfs")

    with pytest.raises(StorageError):
        storage.make_bucket("ipfs")


def test_concurrent_writes_of_same_content(storage):
    def write():
        for _ in range(50):
            storage.put_bytes("ipfs", "same", b"payload")

    threads = [threading.Thread(target=write) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert storage.keys("ipfs") == ["same"]
    assert storage.get_object("ipfs", "same").read() == b"payload"
