"""RFC 4648 Base32 codec used for TOTP secrets.

Encoding never emits ``=`` padding (the otpauth scheme does not use it) and
decoding tolerates its presence or absence.
"""

from __future__ import annotations

ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567"

_LOOKUP: dict[str, int] = {char: index for index, char in enumerate(ALPHABET)}


def encode(data: bytes) -> str:
    """Encode bytes as unpadded uppercase Base32."""
    chars: list[str] = []
    value = 0
    bits = 0

    for byte in data:
        value = (value << 8) | byte
        bits += 8
        while bits >= 5:
            chars.append(ALPHABET[(value >> (bits - 5)) & 0x1F])
            bits -= 5
        # keep only the bits not yet emitted
        value &= (1 << bits) - 1

    if bits > 0:
        chars.append(ALPHABET[(value << (5 - bits)) & 0x1F])

    return "".join(chars)


def decode(text: str) -> bytes:
    """Decode Base32 text into bytes.

    Trailing padding is stripped and input is upper-cased first. Characters
    outside the alphabet are skipped rather than rejected, and a trailing
    fragment of fewer than 8 bits is dropped.
    """
    cleaned = text.rstrip("=").upper()
    out = bytearray()
    value = 0
    bits = 0

    for char in cleaned:
        index = _LOOKUP.get(char)
        if index is None:
            continue
        value = (value << 5) | index
        bits += 5
        if bits >= 8:
            out.append((value >> (bits - 8)) & 0xFF)
            bits -= 8
            value &= (1 << bits) - 1

    return bytes(out)
