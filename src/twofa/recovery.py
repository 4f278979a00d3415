"""Single-use recovery codes issued alongside TOTP enrollment."""

from __future__ import annotations

import re

from twofa.backend import CryptoBackend, resolve_backend

DEFAULT_COUNT = 10
CODE_BYTES = 5
GROUP_SIZE = 5

_NON_ALNUM = re.compile(r"[^A-Z0-9]")


def format_recovery_code(raw: bytes) -> str:
    """Render random bytes as uppercase hex split in two dash-separated halves."""
    hexed = raw.hex().upper()
    half = len(hexed) // 2
    return f"{hexed[:half]}-{hexed[half:]}"


def generate_recovery_codes(
    count: int = DEFAULT_COUNT,
    backend: CryptoBackend | None = None,
) -> list[str]:
    """Mint ``count`` recovery codes shaped like ``A1B2C-3D4E5``.

    Uniqueness within a batch is left to the 40 bits of entropy per code.
    """
    if count < 0:
        raise ValueError("count must be non-negative")
    source = resolve_backend(backend)
    return [format_recovery_code(source.random_bytes(CODE_BYTES)) for _ in range(count)]


def normalize_recovery_code(text: str) -> str:
    """Canonicalize user input: uppercase, drop separators, re-insert the dash.

    ``" a1b2c 3d4e5 "`` and ``"a1b2c-3d4e5"`` both become ``"A1B2C-3D4E5"``.
    """
    compact = _NON_ALNUM.sub("", text.upper())
    return f"{compact[:GROUP_SIZE]}-{compact[GROUP_SIZE:]}"


def consume_recovery_code(codes: list[str], submitted: str) -> list[str] | None:
    """Return ``codes`` without the submitted one, or None if it is not there.

    The input list is not modified.
    """
    target = normalize_recovery_code(submitted)
    if target not in codes:
        return None
    remaining = list(codes)
    remaining.remove(target)
    return remaining
