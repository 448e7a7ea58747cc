"""SteamAuth — generates Steam Guard authenticator codes.

Usage:
    auth = await SteamAuth.create({"secret": "STK7746GVMCHMNH5FBIAQXGPV3I7ZHRG"})
    code = auth.calculate_code()

    # one-shot, syncs first unless a time is given
    code = await SteamAuth.generate_code("STK7746GVMCHMNH5FBIAQXGPV3I7ZHRG")
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from steamauth import codegen
from steamauth.clock import ClockSync, default_clock
from steamauth.encoding import decode_secret
from steamauth.errors import InvalidSecret, SyncError
from steamauth.models import AuthOptions

logger = logging.getLogger(__name__)

OptionsLike = AuthOptions | Mapping[str, Any] | bytes | str | None


class SteamAuth:
    """Code generator bound to a clock, optionally holding a secret."""

    def __init__(self, options: OptionsLike = None, *, clock: ClockSync | None = None) -> None:
        self.options = AuthOptions.coerce(options)
        self.clock = clock or default_clock
        self._secret: bytes | None = None
        if self.options.secret is not None:
            self._secret = decode_secret(self.options.secret, self.options.encoding)
        self.offset: int | None = None
        self.ready = False

    async def initialize(self) -> int | None:
        """Sync with Steam as the options ask. Returns the offset, or None if skipped."""
        if not self.options.should_sync:
            self.ready = True
            return None

        try:
            self.offset = await self.clock.synchronize(force_refresh=self.options.force_sync)
        except SyncError as e:
            logger.warning("SteamAuth time sync failed: %s", e)
            raise
        self.ready = True
        return self.offset

    @classmethod
    async def create(cls, options: OptionsLike = None, *, clock: ClockSync | None = None) -> SteamAuth:
        """Construct and wait until ready."""
        auth = cls(options, clock=clock)
        await auth.initialize()
        return auth

    def calculate_code(self, secret_or_options: OptionsLike = None, time_ms: int | None = None) -> str:
        """Calculate the code for the current or supplied time.

        The secret comes from ``secret_or_options`` or from construction.
        The timestamp is ``time_ms``, else an options ``time``, else the
        clock's corrected time. A supplied time must already include any
        drift from Steam's clock.
        """
        options = AuthOptions.coerce(secret_or_options)

        if options.secret is not None:
            secret = decode_secret(options.secret, options.encoding)
        elif self._secret is not None:
            secret = self._secret
        else:
            raise InvalidSecret("No secret supplied")

        if time_ms is None:
            time_ms = options.time
        if time_ms is None:
            time_ms = self.options.time
        if time_ms is None:
            time_ms = self.clock.now()

        return codegen.calculate_code(secret, time_ms)

    @classmethod
    async def generate_code(
        cls,
        secret_or_options: OptionsLike,
        time_ms: int | None = None,
        *,
        clock: ClockSync | None = None,
    ) -> str:
        """One-shot: sync as the options ask (never with a time given) and return the code."""
        options = AuthOptions.coerce(secret_or_options)
        if time_ms is not None:
            options = options.model_copy(update={"time": time_ms})
        auth = await cls.create({"time": options.time, "sync": options.sync}, clock=clock)
        return auth.calculate_code(options)

    @classmethod
    async def synchronize(cls, force_refresh: bool = False, *, clock: ClockSync | None = None) -> int:
        """Sync the given (or process-wide) clock without an instance."""
        return await (clock or default_clock).synchronize(force_refresh=force_refresh)
