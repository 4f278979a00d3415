"""HOTP (RFC 4226): counter encoding, dynamic truncation and code rendering."""

from __future__ import annotations

from twofa.backend import SHA1_DIGEST_SIZE, CryptoBackend, resolve_backend
from twofa.errors import CryptoBackendError

DEFAULT_DIGITS = 6
MAX_COUNTER = 2**64 - 1


def encode_counter(counter: int) -> bytes:
    """Encode a 64-bit unsigned counter as 8 big-endian bytes."""
    if counter < 0 or counter > MAX_COUNTER:
        raise ValueError(f"counter out of range for u64: {counter}")
    return counter.to_bytes(8, "big")


def dynamic_truncate(digest: bytes) -> int:
    """RFC 4226 section 5.3 truncation to a positive 31-bit integer."""
    offset = digest[-1] & 0x0F
    return (
        (digest[offset] & 0x7F) << 24
        | digest[offset + 1] << 16
        | digest[offset + 2] << 8
        | digest[offset + 3]
    )


def format_code(value: int, digits: int = DEFAULT_DIGITS) -> str:
    """Reduce ``value`` modulo 10**digits and left-pad with zeros."""
    if not 1 <= digits <= 10:
        raise ValueError("digits must be between 1 and 10")
    return str(value % 10**digits).zfill(digits)


def hotp(
    key: bytes,
    counter: int,
    digits: int = DEFAULT_DIGITS,
    backend: CryptoBackend | None = None,
) -> str:
    """Compute the HOTP code for a raw key and counter."""
    digest = resolve_backend(backend).hmac_sha1(key, encode_counter(counter))
    if len(digest) != SHA1_DIGEST_SIZE:
        raise CryptoBackendError(
            f"HMAC-SHA1 returned {len(digest)} bytes, expected {SHA1_DIGEST_SIZE}"
        )
    return format_code(dynamic_truncate(digest), digits)
