"""Steam Guard code derivation.

Same construction as RFC 4226 HOTP over a 30-second time counter, except the
truncated value is rendered as 5 symbols of a 26-character alphabet instead of
decimal digits.
"""

from __future__ import annotations

import hashlib
import hmac
import struct

from steamauth.errors import InvalidSecret, InvalidTimestamp

INTERVAL_PERIOD_MS = 30_000
DIGITS = 5
ALPHABET = "23456789BCDFGHJKMNPQRTVWXY"

_UINT32 = 2**32


def time_interval(timestamp_ms: int) -> int:
    """Index of the 30-second window containing ``timestamp_ms``."""
    if timestamp_ms < 0:
        raise InvalidTimestamp(f"Timestamp must be non-negative, got {timestamp_ms}")
    return int(timestamp_ms) // INTERVAL_PERIOD_MS


def calculate_code(secret: bytes, timestamp_ms: int) -> str:
    """Derive the 5-character code for ``secret`` at ``timestamp_ms``."""
    if not secret:
        raise InvalidSecret("Secret must not be empty")

    interval = time_interval(timestamp_ms)
    counter = struct.pack(">II", interval // _UINT32, interval % _UINT32)
    mac = hmac.new(secret, counter, hashlib.sha1).digest()

    # dynamic truncation
    start = mac[19] & 0x0F
    value = struct.unpack(">I", mac[start : start + 4])[0] & 0x7FFFFFFF

    chars = []
    for _ in range(DIGITS):
        value, index = divmod(value, len(ALPHABET))
        chars.append(ALPHABET[index])
    return "".join(chars)
