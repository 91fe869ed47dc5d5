#!/usr/bin/env python3
"""Main watch event loop.

This module provides run_sync_loop, which polls both clipboards on a
fixed interval until the shutdown event is set. Ticks never overlap: a
tick runs to completion before the next deadline is considered, and
deadlines missed while a slow tick was running are dropped rather than
run back to back.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import suppress
from typing import TYPE_CHECKING

from clipwatch.errors import TransientReadError
from clipwatch.hashing import compute_hash
from clipwatch.sync_loop_inner import run_tick

if TYPE_CHECKING:
    from clipwatch.sync_state import WatchState

logger = logging.getLogger(__name__)


async def initialize_hashes(state: WatchState) -> None:
    """Seed the hash state from one best-effort read of each side.

    A side that cannot be read keeps the empty-content hash; if it actually
    holds content, the first tick propagates it.

    Args:
        state: The watch session state.
    """
    try:
        state.hash_state.last_local_hash = compute_hash(await state.local.read())
    except TransientReadError as e:
        logger.debug("Initial local read failed: %s", e)

    try:
        state.hash_state.last_remote_hash = compute_hash(await state.remote.read())
    except TransientReadError as e:
        logger.debug("Initial remote read failed: %s", e)


async def wait_for_tick(deadline: float, shutdown_requested: asyncio.Event) -> bool:
    """Sleep until deadline unless shutdown is requested first.

    Args:
        deadline: Event loop time of the next tick.
        shutdown_requested: Set when the session should stop.

    Returns:
        True if the tick should run, False on shutdown.
    """
    if shutdown_requested.is_set():
        return False

    loop = asyncio.get_running_loop()
    timer_task = asyncio.create_task(asyncio.sleep(max(0.0, deadline - loop.time())))
    shutdown_task = asyncio.create_task(shutdown_requested.wait())
    try:
        await asyncio.wait(
            {timer_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED
        )
    finally:
        for task in (timer_task, shutdown_task):
            task.cancel()
            with suppress(asyncio.CancelledError):
                await task

    # Shutdown wins if both became ready during the same wakeup
    return not shutdown_requested.is_set()


async def run_sync_loop(state: WatchState, shutdown_requested: asyncio.Event) -> None:
    """Run the watch loop until shutdown_requested is set.

    Args:
        state: The watch session state.
        shutdown_requested: Cancellation signal, typically set by a
            SIGINT/SIGTERM handler. A tick in progress when it is set
            completes; no further tick starts.
    """
    await initialize_hashes(state)
    if shutdown_requested.is_set():
        return

    loop = asyncio.get_running_loop()
    deadline = loop.time() + state.interval
    while await wait_for_tick(deadline, shutdown_requested):
        await run_tick(state)

        deadline += state.interval
        now = loop.time()
        if deadline <= now:
            skipped = int((now - deadline) // state.interval) + 1
            logger.debug("Tick overran interval, dropping %d tick(s)", skipped)
            deadline += skipped * state.interval

    logger.debug("Watch loop for %s stopped", state.peer_name)
