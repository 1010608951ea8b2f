"""Content identifiers: CIDv1, raw codec, SHA2-256, base32 multibase.

Only one identifier shape is produced or accepted by the gateway. This is
the shape ``ipfs add --cid-version=1 --raw-leaves`` yields for content that
fits in a single chunk, so identifiers computed here are byte-compatible
with any other IPFS implementation for that content.

Binary layout (36 bytes)::

    0x01        CID version 1
    0x55        multicodec "raw"
    0x12        multihash function code sha2-256
    0x20        multihash digest length (32)
    <digest>    32-byte SHA2-256 digest

The canonical string is the multibase prefix ``b`` followed by the lowercase,
unpadded RFC 4648 base32 encoding of those bytes.
"""

from __future__ import annotations

import base64
import binascii
import hashlib
from dataclasses import dataclass

CID_VERSION = 1
RAW_CODEC = 0x55
SHA2_256 = 0x12
SHA2_256_LENGTH = 32

MULTIBASE_BASE32 = "b"
MAX_CID_LENGTH = 128

_BASE32_ALPHABET = frozenset("abcdefghijklmnopqrstuvwxyz234567")
_PREFIX = bytes([CID_VERSION, RAW_CODEC, SHA2_256, SHA2_256_LENGTH])


class InvalidCIDError(ValueError):
    """Raised when a string is not a CID this gateway accepts."""

    def __init__(self, text: str, reason: str):
        self.text = text
        self.reason = reason
        super().__init__(f"invalid CID {text!r}: {reason}")


class CIDEncodingError(RuntimeError):
    """Unexpected failure while deriving an identifier from content."""


@dataclass(frozen=True)
class ContentId:
    """A CIDv1/raw/sha2-256 content identifier."""

    digest: bytes

    def __post_init__(self) -> None:
        if not isinstance(self.digest, bytes) or len(self.digest) != SHA2_256_LENGTH:
            raise CIDEncodingError("sha2-256 digest must be exactly 32 bytes")

    @property
    def version(self) -> int:
        return CID_VERSION

    @property
    def codec(self) -> int:
        return RAW_CODEC

    @property
    def hash_code(self) -> int:
        return SHA2_256

    @property
    def multihash(self) -> bytes:
        return _PREFIX[2:] + self.digest

    @property
    def path(self) -> str:
        return f"/ipfs/{self}"

    def to_bytes(self) -> bytes:
        return _PREFIX + self.digest

    def encode(self) -> str:
        body = base64.b32encode(self.to_bytes()).decode("ascii")
        return MULTIBASE_BASE32 + body.rstrip("=").lower()

    def __str__(self) -> str:
        return self.encode()


def compute_cid(data: bytes) -> ContentId:
    """Derive the identifier of ``data`` (the whole buffer is hashed)."""
    try:
        return ContentId(hashlib.sha256(data).digest())
    except CIDEncodingError:
        raise
    except Exception as exc:
        raise CIDEncodingError(f"failed to compute CID: {exc}") from exc


def _decode_base32(text: str, body: str) -> bytes:
    if not body:
        raise InvalidCIDError(text, "empty multibase payload")
    if any(ch not in _BASE32_ALPHABET for ch in body):
        raise InvalidCIDError(text, "not lowercase base32")
    padded = body.upper() + "=" * (-len(body) % 8)
    try:
        return base64.b32decode(padded)
    except (binascii.Error, ValueError) as exc:
        raise InvalidCIDError(text, "malformed base32") from exc


def parse_cid(text: str) -> ContentId:
    """Parse the canonical string form, rejecting every other CID shape.

    Identifiers that are valid under other CID versions, codecs or hash
    functions are rejected too; the gateway never stores them.
    """
    if not isinstance(text, str) or not text:
        raise InvalidCIDError(str(text), "empty")
    if len(text) > MAX_CID_LENGTH:
        raise InvalidCIDError(text[:MAX_CID_LENGTH], "too long")
    if text.startswith("Qm") and len(text) == 46:
        raise InvalidCIDError(text, "CIDv0 is not supported")
    if text[0] != MULTIBASE_BASE32:
        raise InvalidCIDError(text, "unsupported multibase")

    raw = _decode_base32(text, text[1:])

    if raw[:1] != _PREFIX[:1]:
        raise InvalidCIDError(text, "unsupported CID version")
    if raw[1:2] != _PREFIX[1:2]:
        raise InvalidCIDError(text, "unsupported codec")
    if raw[2:3] != _PREFIX[2:3]:
        raise InvalidCIDError(text, "unsupported hash function")
    if raw[3:4] != _PREFIX[3:4] or len(raw) != len(_PREFIX) + SHA2_256_LENGTH:
        raise InvalidCIDError(text, "bad digest length")

    cid = ContentId(raw[len(_PREFIX):])
    # Non-zero trailing bits decode to the same bytes; only one spelling is valid.
    if cid.encode() != text:
        raise InvalidCIDError(text, "non-canonical encoding")
    return cid


def is_valid_cid(text: str) -> bool:
    try:
        parse_cid(text)
    except InvalidCIDError:
        return False
    return True


__all__ = [
    "CIDEncodingError",
    "ContentId",
    "InvalidCIDError",
    "compute_cid",
    "is_valid_cid",
    "parse_cid",
]
