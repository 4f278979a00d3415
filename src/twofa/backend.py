"""Crypto capability interface: secure random bytes and HMAC-SHA1.

The OTP algorithms only ever talk to a ``CryptoBackend``; tests inject a
deterministic one, production uses ``SystemBackend``.
"""

from __future__ import annotations

import logging
import os
from typing import Protocol, runtime_checkable

from cryptography.exceptions import UnsupportedAlgorithm
from cryptography.hazmat.primitives import hashes, hmac

from twofa.errors import CryptoBackendError

logger = logging.getLogger(__name__)

SHA1_DIGEST_SIZE = 20


@runtime_checkable
class CryptoBackend(Protocol):
    """Source of secure random bytes and HMAC-SHA1 digests."""

    def random_bytes(self, n: int) -> bytes: ...

    def hmac_sha1(self, key: bytes, message: bytes) -> bytes: ...


class SystemBackend:
    """OS randomness plus the ``cryptography`` HMAC implementation."""

    def random_bytes(self, n: int) -> bytes:
        if n < 0:
            raise ValueError("n must be non-negative")
        try:
            return os.urandom(n)
        except NotImplementedError as e:
            logger.error("No secure random source available")
            raise CryptoBackendError("secure random source unavailable") from e

    def hmac_sha1(self, key: bytes, message: bytes) -> bytes:
        try:
            h = hmac.HMAC(bytes(key), hashes.SHA1())
        except UnsupportedAlgorithm as e:
            logger.error("HMAC-SHA1 not supported by the crypto provider")
            raise CryptoBackendError("HMAC-SHA1 unavailable") from e
        h.update(bytes(message))
        return h.finalize()


_system_backend = SystemBackend()


def resolve_backend(backend: CryptoBackend | None = None) -> CryptoBackend:
    """Return ``backend`` or the shared stateless system backend."""
    return backend if backend is not None else _system_backend
