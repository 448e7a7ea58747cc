"""Clock offset between this host and Steam's servers.

Steam Guard codes depend on the 30-second window, so a drifting local clock
produces codes Steam rejects. ClockSync asks Steam for its time once and keeps
the offset for every later code.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from typing import Any

import httpx

from steamauth.config import settings
from steamauth.errors import (
    InvalidResponseBody,
    InvalidTimeResponse,
    SyncTimeout,
    SyncTransportError,
)

logger = logging.getLogger(__name__)

SYNC_HEADERS: dict[str, str] = {
    "Accept": "*/*",
    "Content-Type": "application/json",
    "Content-Length": "0",
}


def local_time_ms() -> int:
    return int(time.time() * 1000)


def _server_time(data: Any) -> int:
    """Pull response.server_time (whole seconds) out of the QueryTime payload."""
    response = data.get("response") if isinstance(data, dict) else None
    server_time = response.get("server_time") if isinstance(response, dict) else None
    if server_time is None or isinstance(server_time, bool):
        raise InvalidTimeResponse("Invalid time response from Steam: response lacked server_time")
    try:
        return int(server_time)
    except (TypeError, ValueError, OverflowError):
        raise InvalidTimeResponse(
            f"Invalid time response from Steam: server_time {server_time!r} is not an integer"
        ) from None


class ClockSync:
    """Owns the offset (local - Steam, in ms) used for code timestamps.

    Sync calls are serialized by a lock. Concurrent plain calls share one
    round trip; every forced call makes its own, and the last to finish wins.
    """

    def __init__(
        self,
        url: str | None = None,
        timeout: float | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        now_ms: Callable[[], int] = local_time_ms,
    ) -> None:
        self.url = url or settings.sync_url
        self.timeout = timeout if timeout is not None else settings.sync_timeout
        self._transport = transport
        self._now_ms = now_ms
        self._offset = 0
        self._synchronized = False
        self._lock: asyncio.Lock | None = None
        self._lock_loop: asyncio.AbstractEventLoop | None = None

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def synchronized(self) -> bool:
        return self._synchronized

    def now(self) -> int:
        """Local time in ms adjusted by the stored offset."""
        return self._now_ms() + self._offset

    def reset(self) -> None:
        self._offset = 0
        self._synchronized = False

    def _loop_lock(self) -> asyncio.Lock:
        # asyncio locks stay bound to the first loop that waits on them
        loop = asyncio.get_running_loop()
        if self._lock is None or self._lock_loop is not loop:
            self._lock = asyncio.Lock()
            self._lock_loop = loop
        return self._lock

    async def synchronize(self, force_refresh: bool = False) -> int:
        """Fetch Steam's time and store the offset. Returns the offset.

        Without ``force_refresh`` a previous successful sync is reused and no
        request is made. Failures raise a SyncError subclass and leave the
        stored offset as it was.
        """
        async with self._loop_lock():
            if self._synchronized and not force_refresh:
                return self._offset

            server_time = await self._query_server_time()
            offset = self._now_ms() - server_time * 1000
            self._offset = offset
            self._synchronized = True
            logger.info("Synced with Steam time (offset=%dms)", offset)
            return offset

    async def _query_server_time(self) -> int:
        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                resp = await client.post(self.url, headers=SYNC_HEADERS, content=b"")
            except httpx.TimeoutException as e:
                logger.warning("Steam time sync timed out after %.1fs", self.timeout)
                raise SyncTimeout(f"Time sync timed out after {self.timeout}s") from e
            except httpx.RequestError as e:
                logger.warning("Steam time sync failed: %s", e)
                raise SyncTransportError(f"Time sync request failed: {e}") from e

        body = resp.text
        try:
            data = resp.json()
        except ValueError:
            logger.warning("Steam time sync returned a non-JSON body (status=%d)", resp.status_code)
            raise InvalidResponseBody(body) from None
        return _server_time(data)


default_clock = ClockSync()
