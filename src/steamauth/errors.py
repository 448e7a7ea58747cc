"""Exceptions raised while decoding secrets, deriving codes and syncing time."""

from __future__ import annotations


class SteamAuthError(Exception):
    """Base class for every steamauth failure."""


# UnknownEncoding is not a ValueError so pydantic lets it through unwrapped.
class UnknownEncoding(SteamAuthError):
    def __init__(self, encoding: object) -> None:
        self.encoding = encoding
        super().__init__(f"Unknown encoding {encoding!r}")


class DecodeError(SteamAuthError, ValueError):
    """Secret string is not valid for the chosen encoding."""


class InvalidSecret(SteamAuthError, ValueError):
    """Secret is missing or decodes to zero bytes."""


class InvalidTimestamp(SteamAuthError, ValueError):
    """Timestamp is negative."""


class SyncError(SteamAuthError):
    """Time sync with Steam failed."""


class SyncTransportError(SyncError):
    """Connection-level failure talking to the time endpoint."""


class SyncTimeout(SyncError):
    """Time endpoint did not answer within the configured timeout."""


class InvalidTimeResponse(SyncError):
    """JSON response did not carry response.server_time."""


class InvalidResponseBody(SyncError):
    """Response body was not JSON."""

    def __init__(self, body: str) -> None:
        self.body = body
        super().__init__(f"Invalid response: {body}")
