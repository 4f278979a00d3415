"""Tests for the crypto capability backend."""

from __future__ import annotations

import pytest
from cryptography.exceptions import UnsupportedAlgorithm

from twofa.backend import CryptoBackend, SystemBackend, resolve_backend
from twofa.errors import CryptoBackendError


def test_hmac_sha1_rfc2202_case_1():
    digest = SystemBackend().hmac_sha1(b"\x0b" * 20, b"Hi There")
    assert digest.hex() == "b617318655057264e28bc0b6fb378c8ef146be00"


def test_hmac_sha1_rfc2202_case_2_short_key():
    digest = SystemBackend().hmac_sha1(b"Jefe", b"what do ya want for nothing?")
    assert digest.hex() == "effcdf6ae5eb2fa2d27416d5f184df9c259a7c79"


def test_hmac_sha1_is_deterministic():
    b = SystemBackend()
    assert b.hmac_sha1(b"k", b"m") == b.hmac_sha1(b"k", b"m")
    assert len(b.hmac_sha1(b"k", b"m")) == 20


def test_random_bytes_length_and_variety():
    b = SystemBackend()
    assert len(b.random_bytes(20)) == 20
    assert b.random_bytes(0) == b""
    assert b.random_bytes(16) != b.random_bytes(16)


def test_random_bytes_rejects_negative():
    with pytest.raises(ValueError):
        SystemBackend().random_bytes(-1)


def test_missing_random_source_raises(monkeypatch):
    def _no_urandom(n):
        raise NotImplementedError

    monkeypatch.setattr("twofa.backend.os.urandom", _no_urandom)
    with pytest.raises(CryptoBackendError, match="random source"):
        SystemBackend().random_bytes(20)


def test_missing_hmac_provider_raises(monkeypatch):
    def _unsupported(*args, **kwargs):
        raise UnsupportedAlgorithm("sha1 disabled")

    monkeypatch.setattr("twofa.backend.hmac.HMAC", _unsupported)
    with pytest.raises(CryptoBackendError, match="HMAC-SHA1"):
        SystemBackend().hmac_sha1(b"key", b"msg")


def test_system_backend_satisfies_protocol():
    assert isinstance(SystemBackend(), CryptoBackend)


def test_resolve_backend(fixed_backend):
    assert resolve_backend(fixed_backend) is fixed_backend
    assert isinstance(resolve_backend(None), SystemBackend)
