"""CLI handling for clipwatch.

This module provides the command-line interface for clipwatch, handling
argument parsing via click, logging configuration, and dispatching to the
individual commands.

Usage:
    clipwatch watch [PEER] [--interval MS]
    clipwatch send|recv|peek [PEER]
    clipwatch copy [TEXT...]
    clipwatch paste
    clipwatch clear
    clipwatch history [--limit N] [--peer] [--json]
    clipwatch doctor
"""

from __future__ import annotations

import asyncio
import sys
from collections.abc import Coroutine
from typing import Any

import click

from clipwatch.config import Config, PeerConfig, load_config, resolve_peer
from clipwatch.errors import ClipwatchError
from clipwatch.main_logging import configure_logging


def _run(coro: Coroutine[Any, Any, Any]) -> Any:
    """Run a coroutine, turning clipwatch errors into exit status 1."""
    try:
        return asyncio.run(coro)
    except ClipwatchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _load(ctx: click.Context) -> Config:
    try:
        return load_config(ctx.obj.get("config_path"))
    except ClipwatchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def _resolve(ctx: click.Context, peer: str | None) -> tuple[Config, str, PeerConfig]:
    config = _load(ctx)
    try:
        return config, *resolve_peer(config, peer)
    except ClipwatchError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    envvar="CLIPWATCH_CONFIG",
    help="Config file (default: ~/.config/clipwatch/config.yaml)",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Enable DEBUG-level logging",
)
@click.pass_context
def main(ctx: click.Context, config_path: str | None, verbose: bool) -> None:
    """Share a clipboard with another machine over ssh."""
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command()
@click.argument("peer", required=False)
@click.option(
    "--interval",
    type=int,
    default=None,
    metavar="MS",
    help="Poll interval in milliseconds (default 500, minimum 100)",
)
@click.pass_context
def watch(ctx: click.Context, peer: str | None, interval: int | None) -> None:
    """Keep the clipboard in sync with PEER until interrupted."""
    from clipwatch.sync_state import interval_from_ms
    from clipwatch.watch import run_watch

    config, peer_name, peer_config = _resolve(ctx, peer)
    interval_ms = interval if interval is not None else config.watch_interval_ms
    _run(run_watch(peer_name, peer_config, interval_from_ms(interval_ms)))


@main.command()
@click.argument("peer", required=False)
@click.pass_context
def send(ctx: click.Context, peer: str | None) -> None:
    """Send the local clipboard to PEER."""
    from clipwatch.clipboard_io import LocalClipboard
    from clipwatch.remote import RemoteClipboard
    from clipwatch.transfer import send_to_peer

    _, peer_name, peer_config = _resolve(ctx, peer)
    remote = RemoteClipboard(peer_config, show_errors=True)
    click.echo(_run(send_to_peer(LocalClipboard(), remote, peer_name, peer_config.ssh)))


@main.command()
@click.argument("peer", required=False)
@click.pass_context
def recv(ctx: click.Context, peer: str | None) -> None:
    """Replace the local clipboard with PEER's clipboard."""
    from clipwatch.clipboard_io import LocalClipboard
    from clipwatch.remote import RemoteClipboard
    from clipwatch.transfer import receive_from_peer

    _, peer_name, peer_config = _resolve(ctx, peer)
    remote = RemoteClipboard(peer_config, show_errors=True)
    click.echo(_run(receive_from_peer(LocalClipboard(), remote, peer_name, peer_config.ssh)))


@main.command()
@click.argument("peer", required=False)
@click.pass_context
def peek(ctx: click.Context, peer: str | None) -> None:
    """Print PEER's clipboard without changing the local one."""
    from clipwatch.remote import RemoteClipboard
    from clipwatch.transfer import peek_peer

    _, peer_name, peer_config = _resolve(ctx, peer)
    remote = RemoteClipboard(peer_config, show_errors=True)
    data = _run(peek_peer(remote, peer_name, peer_config.ssh))
    click.get_binary_stream("stdout").write(data)


@main.command()
@click.argument("text", nargs=-1)
def copy(text: tuple[str, ...]) -> None:
    """Copy TEXT, or stdin when no TEXT is given, to the local clipboard."""
    from clipwatch.clipboard_io import LocalClipboard

    if text:
        data = " ".join(text).encode()
    else:
        data = click.get_binary_stream("stdin").read()
    _run(LocalClipboard().write(data))


@main.command()
def paste() -> None:
    """Write the local clipboard to stdout."""
    from clipwatch.clipboard_io import LocalClipboard

    data = _run(LocalClipboard().read())
    click.get_binary_stream("stdout").write(data)


@main.command()
def clear() -> None:
    """Empty the local clipboard."""
    from clipwatch.clipboard_io import LocalClipboard

    _run(LocalClipboard().clear())


@main.command()
@click.option("--limit", type=click.IntRange(min=1), default=20, show_default=True,
              help="Number of entries to show")
@click.option("--peer", "peer_only", is_flag=True, help="Only show transfers with peers")
@click.option("--json", "as_json", is_flag=True, help="Print entries as a JSON array")
def history(limit: int, peer_only: bool, as_json: bool) -> None:
    """Show recent transfers, newest last."""
    import json
    from dataclasses import asdict

    from clipwatch.formatting import format_size
    from clipwatch.history import filter_history, load_history

    loaded = load_history()
    entries = filter_history(loaded, peer_only=peer_only)[-limit:]
    if as_json:
        click.echo(json.dumps([asdict(e) for e in entries], indent=2))
        return
    if not loaded:
        click.echo("No history yet.")
        return
    if not entries:
        click.echo("No matching history entries.")
        return
    for entry in entries:
        click.echo(f"{entry.timestamp}  {entry.command:<11} {entry.target:<16} {format_size(entry.size)}")


@main.command()
def doctor() -> None:
    """Show the detected local clipboard backend."""
    from clipwatch.clipboard_backend import get_backend, install_hint

    backend = get_backend()
    click.echo("clipwatch doctor")
    click.echo("----------------")
    click.echo(f"OS:         {sys.platform}")
    click.echo(f"Backend:    {backend.kind.value}")
    if backend.env_source:
        click.echo(f"Env:        {backend.env_source}")
    click.echo(f"Copy cmd:   {' '.join(backend.copy_cmd)}")
    click.echo(f"Paste cmd:  {' '.join(backend.paste_cmd)}")
    if backend.clear_cmd:
        click.echo(f"Clear cmd:  {' '.join(backend.clear_cmd)}")
    if backend.usable:
        click.echo("\nStatus:     OK")
        return
    click.echo("\nStatus:     WARNING")
    if backend.missing:
        click.echo(f"Missing:    {', '.join(backend.missing)}")
    if backend.notes:
        click.echo(f"Notes:      {backend.notes}")
    click.echo(f"Hint:       {install_hint(backend.kind)}")
