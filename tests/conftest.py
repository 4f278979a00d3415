"""Shared fixtures: deterministic crypto backends and isolated settings."""

from __future__ import annotations

import pytest

from twofa.backend import SystemBackend
from twofa.config import Settings


class FixedBackend:
    """Serves queued byte chunks (then ``fill`` bytes) as "randomness".

    HMAC is the real implementation; every key it sees is recorded.
    """

    def __init__(self, chunks: list[bytes] | None = None, fill: int = 0) -> None:
        self.chunks = list(chunks or [])
        self.fill = fill
        self.hmac_keys: list[bytes] = []
        self._real = SystemBackend()

    def random_bytes(self, n: int) -> bytes:
        if self.chunks:
            chunk = self.chunks.pop(0)
            assert len(chunk) == n, f"queued chunk is {len(chunk)} bytes, asked for {n}"
            return chunk
        return bytes([self.fill]) * n

    def hmac_sha1(self, key: bytes, message: bytes) -> bytes:
        self.hmac_keys.append(key)
        return self._real.hmac_sha1(key, message)


@pytest.fixture
def fixed_backend() -> FixedBackend:
    return FixedBackend()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None)


@pytest.fixture
def backend_factory():
    """The ``FixedBackend`` class, for tests that queue specific bytes."""
    return FixedBackend
