"""Secret decoding: hex, Base32 (RFC 4648) or Base64, guessed when not given.

Decoded secrets are key material; nothing in here logs them.
"""

from __future__ import annotations

import base64
import binascii
import re
from enum import StrEnum

import pyotp

from steamauth.errors import DecodeError, UnknownEncoding

_HEX_RE = re.compile(r"^([A-F0-9]{2})+$", re.IGNORECASE)
_BASE32_RE = re.compile(r"^[A-Z2-7]+$")


class SecretEncoding(StrEnum):
    HEX = "hex"
    BASE32 = "base32"
    BASE64 = "base64"


def resolve_encoding(value: SecretEncoding | str | None) -> SecretEncoding | None:
    """Normalise an encoding hint, rejecting anything we can't decode."""
    if value is None:
        return None
    if isinstance(value, SecretEncoding):
        return value
    try:
        return SecretEncoding(value)
    except ValueError:
        raise UnknownEncoding(value) from None


def guess_encoding(secret: str) -> SecretEncoding:
    """Classify a secret string: hex first, then Base32, else Base64."""
    if _HEX_RE.fullmatch(secret):
        return SecretEncoding.HEX
    if _BASE32_RE.fullmatch(secret):
        return SecretEncoding.BASE32
    return SecretEncoding.BASE64


def decode_secret(
    secret: bytes | bytearray | str,
    encoding: SecretEncoding | str | None = None,
) -> bytes:
    """Decode a shared secret to raw bytes.

    Byte buffers are returned as-is. Strings are decoded with ``encoding``,
    or with the encoding picked by :func:`guess_encoding` when no hint is
    given. Raises UnknownEncoding for a bad hint and DecodeError (chained to
    the decoder's own error) for malformed input.
    """
    if isinstance(secret, (bytes, bytearray, memoryview)):
        return bytes(secret)

    resolved = resolve_encoding(encoding) or guess_encoding(secret)
    try:
        if resolved is SecretEncoding.HEX:
            return bytes.fromhex(secret)
        if resolved is SecretEncoding.BASE32:
            return pyotp.OTP(secret).byte_secret()
        padded = secret + "=" * (-len(secret) % 4)
        return base64.b64decode(padded, validate=True)
    except (binascii.Error, ValueError) as e:
        raise DecodeError(f"Secret is not valid {resolved}") from e
