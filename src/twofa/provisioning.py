"""Secret minting and otpauth:// provisioning URIs for authenticator apps.

See https://github.com/google/google-authenticator/wiki/Key-Uri-Format
"""

from __future__ import annotations

from urllib.parse import quote

from twofa import base32
from twofa.backend import CryptoBackend, resolve_backend
from twofa.hotp import DEFAULT_DIGITS
from twofa.totp import DEFAULT_PERIOD

SECRET_BYTES = 20
MIN_SECRET_BYTES = 16  # RFC 4226 section 4, R6: at least 128 bits
DEFAULT_ISSUER = "BI Platform"
ALGORITHM = "SHA1"

# characters encodeURIComponent leaves alone besides the RFC 3986 unreserved set
_URI_COMPONENT_SAFE = "!*'()"


def generate_secret(num_bytes: int = SECRET_BYTES, backend: CryptoBackend | None = None) -> str:
    """Mint a new shared secret as unpadded Base32 (32 chars for 20 bytes)."""
    if num_bytes < MIN_SECRET_BYTES:
        raise ValueError(f"Secrets should be at least {MIN_SECRET_BYTES * 8} bits")
    return base32.encode(resolve_backend(backend).random_bytes(num_bytes))


def encode_component(text: str) -> str:
    return quote(text, safe=_URI_COMPONENT_SAFE)


def build_provisioning_uri(secret: str, email: str, issuer: str = DEFAULT_ISSUER) -> str:
    """Build the otpauth URI that a QR renderer turns into an enrollment code.

    The secret goes in unescaped: Base32 output needs no percent-encoding.
    """
    enc_issuer = encode_component(issuer)
    enc_email = encode_component(email)
    return (
        f"otpauth://totp/{enc_issuer}:{enc_email}"
        f"?secret={secret}&issuer={enc_issuer}"
        f"&algorithm={ALGORITHM}&digits={DEFAULT_DIGITS}&period={DEFAULT_PERIOD}"
    )
