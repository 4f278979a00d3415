"""TOTP (RFC 6238) generation and drift-tolerant verification.

Codes are SHA1, 6 digits, 30 second steps unless overridden. Verification
accepts codes from ``window`` steps either side of "now" and performs no
replay bookkeeping; callers that need it track the counter returned by
``match_totp``.
"""

from __future__ import annotations

import hmac
import time

from twofa import base32
from twofa.backend import CryptoBackend
from twofa.hotp import DEFAULT_DIGITS, hotp

DEFAULT_PERIOD = 30
DEFAULT_WINDOW = 1


def now() -> int:
    """Current unix time in whole seconds."""
    return int(time.time())


def timecode(timestamp: int, period: int = DEFAULT_PERIOD) -> int:
    """Map a unix timestamp to its TOTP counter."""
    if period <= 0:
        raise ValueError("period must be positive")
    return int(timestamp) // period


def generate_totp(
    secret: str,
    timestamp: int | None = None,
    *,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    backend: CryptoBackend | None = None,
) -> str:
    """Generate the code for ``secret`` at ``timestamp`` (default: now)."""
    t = now() if timestamp is None else timestamp
    key = base32.decode(secret)
    return hotp(key, timecode(t, period), digits=digits, backend=backend)


def match_totp(
    secret: str,
    code: str,
    window: int = DEFAULT_WINDOW,
    *,
    for_time: int | None = None,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    backend: CryptoBackend | None = None,
) -> int | None:
    """Return the counter whose code equals ``code``, or None.

    Offsets are tried from ``-window`` to ``+window`` and the first match
    wins.
    """
    if window < 0:
        raise ValueError("window must be non-negative")

    current = now() if for_time is None else for_time
    submitted = str(code).encode("utf-8")

    for i in range(-window, window + 1):
        candidate = current + i * period
        if candidate < 0:
            continue
        expected = generate_totp(secret, candidate, digits=digits, period=period, backend=backend)
        if hmac.compare_digest(submitted, expected.encode("ascii")):
            return timecode(candidate, period)

    return None


def verify_totp(
    secret: str,
    code: str,
    window: int = DEFAULT_WINDOW,
    *,
    for_time: int | None = None,
    digits: int = DEFAULT_DIGITS,
    period: int = DEFAULT_PERIOD,
    backend: CryptoBackend | None = None,
) -> bool:
    """True if ``code`` is valid for ``secret`` within the drift window."""
    counter = match_totp(
        secret,
        code,
        window,
        for_time=for_time,
        digits=digits,
        period=period,
        backend=backend,
    )
    return counter is not None
