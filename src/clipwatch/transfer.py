#!/usr/bin/env python3
"""One-shot clipboard transfers.

These back the `send`, `recv` and `peek` commands. Unlike the watch
loop, failures here propagate to the caller, keeping their error type.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from clipwatch.errors import TransientReadError, TransientWriteError
from clipwatch.formatting import format_size
from clipwatch.history import record_history

if TYPE_CHECKING:
    from clipwatch.sync_state import ClipboardAccess


async def send_to_peer(
    local: ClipboardAccess, remote: ClipboardAccess, peer_name: str, target: str
) -> str:
    """Push the local clipboard to a peer.

    Args:
        local: This machine's clipboard.
        remote: The peer's clipboard.
        peer_name: Configured name of the peer.
        target: ssh destination, used in the message.

    Returns:
        A one-line summary for the operator.

    Raises:
        TransientReadError: If the local clipboard cannot be read.
        TransientWriteError: If the peer rejects the content.
    """
    data = await local.read()
    try:
        await remote.write(data)
    except TransientWriteError as e:
        raise type(e)(f"failed to send to peer {peer_name!r} ({target}): {e}") from e
    record_history("send", peer_name, len(data))
    return f"sent {format_size(len(data))} to peer {peer_name!r} ({target})"


async def receive_from_peer(
    local: ClipboardAccess, remote: ClipboardAccess, peer_name: str, target: str
) -> str:
    """Pull a peer's clipboard into the local clipboard.

    Returns:
        A one-line summary for the operator.

    Raises:
        TransientReadError: If the peer's clipboard cannot be read.
        TransientWriteError: If the local clipboard cannot be written.
    """
    try:
        data = await remote.read()
    except TransientReadError as e:
        raise type(e)(f"failed to receive from peer {peer_name!r} ({target}): {e}") from e
    await local.write(data)
    record_history("recv", peer_name, len(data))
    return f"received {format_size(len(data))} from peer {peer_name!r} ({target})"


async def peek_peer(remote: ClipboardAccess, peer_name: str, target: str) -> bytes:
    """Return a peer's clipboard without touching the local one."""
    try:
        data = await remote.read()
    except TransientReadError as e:
        raise type(e)(f"failed to peek from peer {peer_name!r} ({target}): {e}") from e
    record_history("peek", peer_name, len(data))
    return data
