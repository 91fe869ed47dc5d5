#!/usr/bin/env python3
"""Tests for the watch loop: initialization, ticking and shutdown."""
import asyncio

import pytest

from clipwatch.errors import ConfigurationError
from clipwatch.hashing import EMPTY_HASH, compute_hash
from clipwatch.sync_loop import initialize_hashes, run_sync_loop, wait_for_tick
from clipwatch.sync_state import DEFAULT_INTERVAL, WatchState, interval_from_ms


async def trigger_shutdown_after_delay(shutdown_event: asyncio.Event, delay: float) -> None:
    """Trigger shutdown event after a delay."""
    await asyncio.sleep(delay)
    shutdown_event.set()


@pytest.mark.asyncio
async def test_initialize_hashes_reads_both_sides(
    watch_state, local_clipboard, remote_clipboard
) -> None:
    """Test initialization seeds both hashes from the current content."""
    local_clipboard.content = b"local"
    remote_clipboard.content = b"remote"

    await initialize_hashes(watch_state)

    assert watch_state.hash_state.last_local_hash == compute_hash(b"local")
    assert watch_state.hash_state.last_remote_hash == compute_hash(b"remote")


@pytest.mark.asyncio
async def test_initialize_hashes_tolerates_failures(
    watch_state, local_clipboard, remote_clipboard
) -> None:
    """Test a failed initial read leaves the empty-content hash."""
    local_clipboard.content = b"local"
    remote_clipboard.content = b"remote"
    local_clipboard.fail_reads = 1
    remote_clipboard.fail_reads = 1

    await initialize_hashes(watch_state)

    assert watch_state.hash_state.last_local_hash == EMPTY_HASH
    assert watch_state.hash_state.last_remote_hash == EMPTY_HASH


@pytest.mark.asyncio
async def test_loop_returns_immediately_when_already_cancelled(
    watch_state, local_clipboard
) -> None:
    """Test no tick runs when shutdown is requested before the first tick."""
    shutdown_requested = asyncio.Event()
    shutdown_requested.set()

    await asyncio.wait_for(run_sync_loop(watch_state, shutdown_requested), timeout=1.0)

    # Only the initial read happened
    assert local_clipboard.reads == 1


@pytest.mark.asyncio
async def test_loop_returns_cleanly_on_shutdown(watch_state, local_clipboard) -> None:
    """Test the loop ticks on its interval and returns when cancelled."""
    shutdown_requested = asyncio.Event()
    task = asyncio.create_task(run_sync_loop(watch_state, shutdown_requested))

    await trigger_shutdown_after_delay(shutdown_requested, 0.35)
    await asyncio.wait_for(task, timeout=1.0)

    ticks = local_clipboard.reads - 1
    assert 1 <= ticks <= 4


@pytest.mark.asyncio
async def test_loop_propagates_changes(
    watch_state, local_clipboard, remote_clipboard, output
) -> None:
    """Test a change made while the loop runs reaches the peer."""
    local_clipboard.content = b"hello"
    remote_clipboard.content = b"hello"
    shutdown_requested = asyncio.Event()
    task = asyncio.create_task(run_sync_loop(watch_state, shutdown_requested))

    await asyncio.sleep(0.05)
    local_clipboard.content = b"world"
    await trigger_shutdown_after_delay(shutdown_requested, 0.3)
    await asyncio.wait_for(task, timeout=1.0)

    assert remote_clipboard.writes == [b"world"]
    assert output["out"] == ["→ sent 5 B to dev"]


@pytest.mark.asyncio
async def test_shutdown_during_tick_lets_tick_finish(
    watch_state, local_clipboard, remote_clipboard
) -> None:
    """Test cancellation mid-tick completes that tick and starts no other."""
    local_clipboard.content = b"hello"
    remote_clipboard.content = b"hello"
    shutdown_requested = asyncio.Event()

    def change_and_cancel_on_first_tick() -> None:
        # Read 1 is initialization, read 2 is the first tick
        if local_clipboard.reads == 2:
            local_clipboard.content = b"world"
            shutdown_requested.set()

    local_clipboard.on_read = change_and_cancel_on_first_tick

    await asyncio.wait_for(run_sync_loop(watch_state, shutdown_requested), timeout=1.0)

    assert local_clipboard.reads == 2
    assert remote_clipboard.writes == [b"world"]


@pytest.mark.asyncio
async def test_wait_for_tick_returns_false_on_shutdown() -> None:
    """Test shutdown wakes the wait before a far deadline."""
    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()
    loop.call_later(0.01, shutdown_requested.set)

    result = await asyncio.wait_for(
        wait_for_tick(loop.time() + 10, shutdown_requested), timeout=1.0
    )

    assert result is False


@pytest.mark.asyncio
async def test_wait_for_tick_returns_true_at_deadline() -> None:
    """Test the wait returns True once the deadline passes."""
    shutdown_requested = asyncio.Event()
    loop = asyncio.get_running_loop()

    assert await wait_for_tick(loop.time() + 0.01, shutdown_requested) is True


def test_watch_state_rejects_short_interval(local_clipboard, remote_clipboard) -> None:
    """Test intervals under 100 ms are refused at construction."""
    with pytest.raises(ConfigurationError, match="at least 100 ms"):
        WatchState(peer_name="dev", local=local_clipboard, remote=remote_clipboard, interval=0.05)


def test_watch_state_accepts_minimum_interval(local_clipboard, remote_clipboard) -> None:
    """Test the minimum interval itself is allowed."""
    state = WatchState(peer_name="dev", local=local_clipboard, remote=remote_clipboard, interval=0.1)
    assert state.interval == 0.1


def test_interval_from_ms() -> None:
    """Test millisecond conversion and the default."""
    assert interval_from_ms(None) == DEFAULT_INTERVAL == 0.5
    assert interval_from_ms(250) == 0.25
