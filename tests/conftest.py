"""Shared fixtures: a fake Steam time endpoint and a fixed local clock."""

from __future__ import annotations

import json

import httpx
import pytest

from steamauth.clock import ClockSync

LOCAL_NOW_MS = 1_700_000_005_000
SERVER_TIME_S = 1_699_999_990


class FakeSteam:
    """Records requests and answers with a canned body."""

    def __init__(self, body: str | None = None, exc: Exception | None = None) -> None:
        self.body = body if body is not None else json.dumps(
            {"response": {"server_time": str(SERVER_TIME_S), "skew_tolerance_seconds": "60"}}
        )
        self.exc = exc
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        return httpx.Response(200, text=self.body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def steam() -> FakeSteam:
    return FakeSteam()


@pytest.fixture
def clock(steam: FakeSteam) -> ClockSync:
    return ClockSync(transport=steam.transport, now_ms=lambda: LOCAL_NOW_MS)
