"""CLI entry point for steamauth."""

from __future__ import annotations

import asyncio
import logging

import click
from rich.console import Console
from rich.markup import escape

from steamauth.encoding import SecretEncoding

console = Console()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Log sync activity.")
def main(verbose: bool) -> None:
    """steamauth — Steam Guard authenticator codes."""
    from steamauth.config import settings

    logging.basicConfig(
        level=logging.INFO if verbose else settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
    )


@main.command()
@click.argument("secret")
@click.option(
    "--encoding",
    type=click.Choice([e.value for e in SecretEncoding]),
    help="Secret encoding (guessed when omitted).",
)
@click.option("--time", "time_ms", type=click.IntRange(min=0), help="Timestamp in ms; skips sync.")
@click.option("--no-sync", is_flag=True, help="Use the local clock without syncing.")
def code(secret: str, encoding: str | None, time_ms: int | None, no_sync: bool) -> None:
    """Print the current code for SECRET."""
    from steamauth.auth import SteamAuth
    from steamauth.errors import SteamAuthError

    async def _code() -> str:
        auth = await SteamAuth.create(
            {"secret": secret, "encoding": encoding, "time": time_ms, "sync": False if no_sync else None}
        )
        return auth.calculate_code(time_ms=time_ms)

    try:
        console.print(asyncio.run(_code()))
    except SteamAuthError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise SystemExit(1) from e


@main.command()
@click.option("--force", is_flag=True, help="Ignore any cached offset.")
def sync(force: bool) -> None:
    """Sync with Steam and print the clock offset."""
    from steamauth.auth import SteamAuth
    from steamauth.errors import SyncError

    try:
        offset = asyncio.run(SteamAuth.synchronize(force_refresh=force))
    except SyncError as e:
        console.print(f"[red]Sync failed: {escape(str(e))}[/red]")
        raise SystemExit(1) from e
    console.print(f"Offset: {offset} ms")


@main.command()
def status() -> None:
    """Show effective settings."""
    from steamauth.config import settings

    console.print("[bold]steamauth settings[/bold]")
    console.print(f"  Sync URL: {settings.sync_url}")
    console.print(f"  Sync timeout: {settings.sync_timeout}s")
    console.print(f"  Log level: {settings.log_level}")


if __name__ == "__main__":
    main()
