"""Tests for the SteamAuth facade."""

from __future__ import annotations

import asyncio

import httpx
import pytest

from steamauth.auth import SteamAuth
from steamauth.clock import ClockSync
from steamauth.errors import InvalidSecret, SyncTransportError, UnknownEncoding
from steamauth.models import AuthOptions

from conftest import LOCAL_NOW_MS, FakeSteam

SECRET = "STK7746GVMCHMNH5FBIAQXGPV3I7ZHRG"
HEX_SECRET = "94d5fff3c6ab047634fd2850085ccfaed1fc9e26"


def test_calculate_code_with_explicit_time(clock):
    auth = SteamAuth({"sync": False}, clock=clock)
    assert auth.calculate_code(SECRET, 0) == "CRFP3"
    assert auth.calculate_code({"secret": HEX_SECRET, "encoding": "hex", "time": 30_000}) == "H8RK3"


def test_time_zero_is_not_treated_as_missing(clock):
    auth = SteamAuth({"secret": SECRET, "sync": False}, clock=clock)
    assert auth.calculate_code(time_ms=0) == "CRFP3"
    assert auth.calculate_code({"time": 0}) == "CRFP3"


def test_secret_from_construction(clock):
    auth = SteamAuth(AuthOptions(secret=HEX_SECRET, sync=False), clock=clock)
    assert auth.calculate_code(time_ms=1_700_000_000_000) == "C33NF"


def test_argument_secret_overrides_construction(clock):
    auth = SteamAuth({"secret": b"\x00", "sync": False}, clock=clock)
    assert auth.calculate_code(time_ms=0) == "RYH4D"
    assert auth.calculate_code(SECRET, 0) == "CRFP3"


def test_no_secret(clock):
    auth = SteamAuth({"sync": False}, clock=clock)
    with pytest.raises(InvalidSecret):
        auth.calculate_code(time_ms=0)


def test_empty_secret(clock):
    auth = SteamAuth({"sync": False}, clock=clock)
    with pytest.raises(InvalidSecret):
        auth.calculate_code(b"", 0)


def test_unknown_encoding_rejected_at_construction(clock):
    with pytest.raises(UnknownEncoding, match="rot13"):
        SteamAuth({"secret": SECRET, "encoding": "rot13"}, clock=clock)


def test_initialize_syncs(clock, steam):
    auth = SteamAuth({"secret": SECRET}, clock=clock)
    assert auth.ready is False
    offset = asyncio.run(auth.initialize())
    assert offset == 15_000
    assert auth.ready is True
    assert auth.offset == 15_000
    # same window as LOCAL_NOW_MS + 15s
    assert auth.calculate_code() == "6BCNK"
    assert len(steam.requests) == 1


def test_initialize_skipped_with_time(clock, steam):
    auth = SteamAuth({"secret": SECRET, "time": 0}, clock=clock)
    assert asyncio.run(auth.initialize()) is None
    assert auth.ready is True
    assert auth.calculate_code() == "CRFP3"
    assert steam.requests == []


def test_initialize_skipped_with_sync_false(clock, steam):
    auth = asyncio.run(SteamAuth.create({"secret": SECRET, "sync": False}, clock=clock))
    assert auth.ready is True
    assert auth.calculate_code() == "C33NF"  # unsynced local time, same window as 1_700_000_000_000
    assert steam.requests == []


def test_sync_true_forces_round_trip(clock, steam):
    asyncio.run(SteamAuth.create(clock=clock))
    asyncio.run(SteamAuth.create({"sync": True}, clock=clock))
    asyncio.run(SteamAuth.create(clock=clock))
    assert len(steam.requests) == 2


def test_initialize_failure_propagates():
    clock_steam = FakeSteam(exc=httpx.ConnectError("down"))
    clock = ClockSync(transport=clock_steam.transport, now_ms=lambda: LOCAL_NOW_MS)
    auth = SteamAuth({"secret": SECRET}, clock=clock)
    with pytest.raises(SyncTransportError):
        asyncio.run(auth.initialize())
    assert auth.ready is False
    # falls back to a zero offset
    assert auth.calculate_code() == "C33NF"


def test_generate_code_with_time(clock, steam):
    assert asyncio.run(SteamAuth.generate_code(SECRET, 0, clock=clock)) == "CRFP3"
    assert asyncio.run(SteamAuth.generate_code({"secret": SECRET, "time": 30_000}, clock=clock)) == "H8RK3"
    assert steam.requests == []


def test_generate_code_syncs_without_time(clock, steam):
    assert asyncio.run(SteamAuth.generate_code(SECRET, clock=clock)) == "6BCNK"
    assert asyncio.run(SteamAuth.generate_code(SECRET, clock=clock)) == "6BCNK"
    assert len(steam.requests) == 1


def test_class_synchronize(clock, steam):
    assert asyncio.run(SteamAuth.synchronize(clock=clock)) == 15_000
    assert asyncio.run(SteamAuth.synchronize(clock=clock)) == 15_000
    assert asyncio.run(SteamAuth.synchronize(True, clock=clock)) == 15_000
    assert len(steam.requests) == 2


def test_generate_code_honours_sync_false(clock, steam):
    code = asyncio.run(SteamAuth.generate_code({"secret": SECRET, "sync": False}, clock=clock))
    assert code == "C33NF"
    assert steam.requests == []


def test_generate_code_sync_true_forces_round_trip(clock, steam):
    asyncio.run(SteamAuth.synchronize(clock=clock))
    asyncio.run(SteamAuth.generate_code({"secret": SECRET, "sync": True}, clock=clock))
    assert len(steam.requests) == 2
