"""steamauth — Steam Guard authenticator codes with server clock sync."""

__version__ = "0.1.0"

from steamauth.auth import SteamAuth
from steamauth.clock import ClockSync, default_clock
from steamauth.codegen import calculate_code
from steamauth.encoding import decode_secret
from steamauth.models import AuthOptions, SecretEncoding

__all__ = [
    "AuthOptions",
    "ClockSync",
    "SecretEncoding",
    "SteamAuth",
    "calculate_code",
    "decode_secret",
    "default_clock",
]
