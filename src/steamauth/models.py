"""Pydantic models for options passed to SteamAuth."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from steamauth.encoding import SecretEncoding, resolve_encoding

__all__ = ["AuthOptions", "SecretEncoding"]


class AuthOptions(BaseModel):
    """Options accepted when constructing SteamAuth or calculating a code.

    ``time`` pins the timestamp (ms) and disables sync. ``sync=False``
    disables sync, ``sync=True`` forces a fresh round trip, ``None`` uses
    any cached offset.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    secret: bytes | str | None = Field(default=None, repr=False)
    encoding: SecretEncoding | None = None
    time: int | None = Field(default=None, ge=0)
    sync: bool | None = None

    @field_validator("encoding", mode="before")
    @classmethod
    def _check_encoding(cls, value: Any) -> SecretEncoding | None:
        return resolve_encoding(value)

    @property
    def should_sync(self) -> bool:
        return self.time is None and self.sync is not False

    @property
    def force_sync(self) -> bool:
        return self.sync is True

    @classmethod
    def coerce(cls, value: AuthOptions | Mapping[str, Any] | bytes | str | None) -> AuthOptions:
        """Build options from a secret, a mapping, or existing options."""
        if value is None:
            return cls()
        if isinstance(value, AuthOptions):
            return value
        if isinstance(value, (str, bytes, bytearray)):
            return cls(secret=bytes(value) if isinstance(value, bytearray) else value)
        return cls.model_validate(dict(value))
