#!/usr/bin/env python3
"""Clipboard propagation handlers.

This module provides the two propagation steps of a tick:
- handle_local_change: push new local content to the peer
- handle_remote_change: pull new peer content into the local clipboard

Write failures are reported to the operator and swallowed; the session
keeps running and the change is detected again on a later tick.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clipwatch.errors import TransientWriteError
from clipwatch.formatting import format_size

if TYPE_CHECKING:
    from clipwatch.sync_state import WatchState

logger = logging.getLogger(__name__)

HISTORY_SEND: str = "watch:send"
HISTORY_RECV: str = "watch:recv"


def _report(state: WatchState, message: str, err: bool = False) -> None:
    emit = state.echo_err if err else state.echo
    try:
        emit(message)
    except OSError as e:
        # stdout closed or a broken pipe; the session keeps syncing
        logger.debug("Could not write operator output: %s", e)


def _record(state: WatchState, kind: str, size: int) -> None:
    try:
        state.history(kind, state.peer_name, size)
    except Exception:
        logger.debug("History recording failed for %s", kind, exc_info=True)


async def handle_local_change(
    state: WatchState, content: bytes, local_hash: str
) -> bool:
    """Send changed local content to the peer.

    On success both tracked hashes are pinned to local_hash, so the peer's
    copy of the content is not mistaken for a remote change next tick.

    Args:
        state: The watch session state.
        content: Local clipboard bytes read this tick.
        local_hash: SHA-256 hex digest of content.

    Returns:
        True if the peer accepted the content.
    """
    try:
        await state.remote.write(content)
    except TransientWriteError as e:
        _report(state, f"watch: failed to send: {e}", err=True)
        return False

    _report(state, f"→ sent {format_size(len(content))} to {state.peer_name}")
    state.hash_state.record_sent(local_hash)
    _record(state, HISTORY_SEND, len(content))
    return True


async def handle_remote_change(
    state: WatchState, content: bytes, remote_hash: str
) -> bool:
    """Write changed peer content to the local clipboard.

    Args:
        state: The watch session state.
        content: Remote clipboard bytes read this tick.
        remote_hash: SHA-256 hex digest of content.

    Returns:
        True if the local clipboard was updated.
    """
    try:
        await state.local.write(content)
    except TransientWriteError as e:
        _report(state, f"watch: failed to receive: {e}", err=True)
        return False

    _report(state, f"← received {format_size(len(content))} from {state.peer_name}")
    state.hash_state.record_received(remote_hash)
    _record(state, HISTORY_RECV, len(content))
    return True
