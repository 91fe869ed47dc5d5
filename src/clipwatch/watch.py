#!/usr/bin/env python3
"""Watch mode implementation for clipwatch.

This module provides the entry point for `clipwatch watch`, which keeps
the local clipboard and one peer's clipboard in sync until interrupted.
The peer is reached by running its remote command over ssh.

See sync_loop.py for the polling loop itself.
"""

from __future__ import annotations

import asyncio
import signal
from collections.abc import Callable
from types import FrameType

import click

from clipwatch.clipboard_io import LocalClipboard
from clipwatch.config import PeerConfig
from clipwatch.remote import RemoteClipboard
from clipwatch.sync import WatchState, run_sync_loop


def print_startup_message(peer_name: str, peer: PeerConfig) -> None:
    """Print the watch banner to stdout.

    Args:
        peer_name: Configured name of the peer.
        peer: The peer being watched.
    """
    click.echo(f'Watching clipboard with peer "{peer_name}" ({peer.ssh})')
    click.echo("Press Ctrl+C to stop")
    click.echo()


def install_signal_handlers(
    loop: asyncio.AbstractEventLoop, shutdown_requested: asyncio.Event
) -> Callable[[], None]:
    """Make SIGINT and SIGTERM request a graceful shutdown.

    Uses the event loop's signal support where it exists. Loops without it
    (the Windows proactor loop) get plain signal.signal handlers that hand
    the event over to the loop thread.

    Returns:
        A callable that restores the previous handlers.
    """
    signals = (signal.SIGINT, signal.SIGTERM)
    try:
        for sig in signals:
            loop.add_signal_handler(sig, shutdown_requested.set)
    except NotImplementedError:
        return _install_fallback_handlers(loop, shutdown_requested, signals)

    def remove_loop_handlers() -> None:
        for sig in signals:
            loop.remove_signal_handler(sig)

    return remove_loop_handlers


def _install_fallback_handlers(
    loop: asyncio.AbstractEventLoop,
    shutdown_requested: asyncio.Event,
    signals: tuple[signal.Signals, ...],
) -> Callable[[], None]:
    def request_shutdown(signum: int, frame: FrameType | None) -> None:
        loop.call_soon_threadsafe(shutdown_requested.set)

    previous = {sig: signal.signal(sig, request_shutdown) for sig in signals}

    def restore_handlers() -> None:
        for sig, handler in previous.items():
            signal.signal(sig, handler)

    return restore_handlers


async def run_watch(peer_name: str, peer: PeerConfig, interval: float) -> None:
    """Watch the local clipboard and a peer's clipboard until interrupted.

    Builds the session state (validating the interval), registers
    SIGINT/SIGTERM handlers that request shutdown, and runs the loop.

    Args:
        peer_name: Configured name of the peer.
        peer: The peer to sync with.
        interval: Seconds between ticks.

    Raises:
        ConfigurationError: If interval is below the minimum.
    """
    state = WatchState(
        peer_name=peer_name,
        local=LocalClipboard(),
        remote=RemoteClipboard(peer),
        interval=interval,
    )
    print_startup_message(peer_name, peer)

    shutdown_requested = asyncio.Event()
    restore_signals = install_signal_handlers(asyncio.get_running_loop(), shutdown_requested)
    try:
        await run_sync_loop(state, shutdown_requested)
    finally:
        restore_signals()

    click.echo("\nStopping watch...")
