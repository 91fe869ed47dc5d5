#!/usr/bin/env python3
"""Watch session state.

This module provides the WatchState dataclass that groups everything a
watch session needs: the two clipboards, the peer name used in output and
history, the poll interval, and the hash state used for echo suppression.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

import click

from clipwatch.errors import ConfigurationError
from clipwatch.hashing import HashState
from clipwatch.history import record_history

# Poll interval in seconds.
DEFAULT_INTERVAL: float = 0.5

# Shorter intervals would hammer the peer with ssh sessions.
MIN_INTERVAL: float = 0.1


class ClipboardAccess(Protocol):
    """Read/write capability of one side of a session."""

    async def read(self) -> bytes: ...

    async def write(self, data: bytes) -> None: ...


def _echo_err(message: str) -> None:
    click.echo(message, err=True)


@dataclass
class WatchState:
    """State for one watch session with one peer.

    Not shared between sessions; two sessions for two peers each own their
    own WatchState.

    Attributes:
        peer_name: Configured name of the peer, used in output and history.
        local: This machine's clipboard.
        remote: The peer's clipboard.
        interval: Seconds between ticks, at least MIN_INTERVAL.
        hash_state: Hash tracking for echo suppression.
        history: Called with (kind, peer_name, size) after a propagation.
        echo: Writes one line of operator output.
        echo_err: Writes one line to the error stream.
    """

    peer_name: str
    local: ClipboardAccess
    remote: ClipboardAccess
    interval: float = DEFAULT_INTERVAL
    hash_state: HashState = field(default_factory=HashState)
    history: Callable[[str, str, int], None] = record_history
    echo: Callable[[str], None] = field(default=click.echo)
    echo_err: Callable[[str], None] = field(default=_echo_err)

    def __post_init__(self) -> None:
        if self.interval < MIN_INTERVAL:
            raise ConfigurationError(
                f"watch interval must be at least {int(MIN_INTERVAL * 1000)} ms, "
                f"got {int(self.interval * 1000)} ms"
            )


def interval_from_ms(interval_ms: int | None) -> float:
    """Convert a millisecond interval to seconds, defaulting when None."""
    if interval_ms is None:
        return DEFAULT_INTERVAL
    return interval_ms / 1000
