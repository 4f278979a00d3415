"""AES-256-GCM sealing of TOTP secrets and recovery codes for storage at rest."""

from __future__ import annotations

import base64
import binascii
import json
import os

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from twofa.config import settings
from twofa.errors import SealingError

_NONCE_SIZE = 12  # 96-bit nonce for AES-GCM


def _get_key(master_key: str | None = None) -> bytes:
    raw = settings.twofa_master_key if master_key is None else master_key
    if not raw:
        raise SealingError("TWOFA_MASTER_KEY not set")
    try:
        key = base64.b64decode(raw, validate=True)
    except binascii.Error as e:
        raise SealingError("TWOFA_MASTER_KEY is not valid base64") from e
    if len(key) != 32:
        raise SealingError("TWOFA_MASTER_KEY must be 32 bytes (base64-encoded)")
    return key


def seal(plaintext: str, master_key: str | None = None) -> str:
    """Encrypt a string. Returns base64(nonce + ciphertext)."""
    key = _get_key(master_key)
    nonce = os.urandom(_NONCE_SIZE)
    ct = AESGCM(key).encrypt(nonce, plaintext.encode(), None)
    return base64.b64encode(nonce + ct).decode()


def unseal(token: str, master_key: str | None = None) -> str:
    """Decrypt a base64(nonce + ciphertext) token back to plaintext."""
    key = _get_key(master_key)
    try:
        raw = base64.b64decode(token, validate=True)
    except binascii.Error as e:
        raise SealingError("sealed value is not valid base64") from e
    nonce, ct = raw[:_NONCE_SIZE], raw[_NONCE_SIZE:]
    try:
        return AESGCM(key).decrypt(nonce, ct, None).decode()
    except InvalidTag as e:
        raise SealingError("sealed value failed authentication") from e


def seal_codes(codes: list[str], master_key: str | None = None) -> str:
    return seal(json.dumps(codes), master_key)


def unseal_codes(token: str, master_key: str | None = None) -> list[str]:
    return json.loads(unseal(token, master_key))
