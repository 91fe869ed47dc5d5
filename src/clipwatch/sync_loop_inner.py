#!/usr/bin/env python3
"""Single tick of the watch loop.

The order of checks within a tick is what keeps content from echoing
between the two machines, so it is kept exactly as follows:

1. Read local. On failure the tick ends.
2. If local differs from both tracked hashes, push it and end the tick,
   whether or not the push succeeded.
3. Otherwise read remote. On failure the tick ends.
4. If remote differs from both tracked hashes, pull it.
5. Reset both tracked hashes to the values read in steps 1 and 3.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from clipwatch.errors import TransientReadError
from clipwatch.hashing import compute_hash
from clipwatch.sync_handlers import handle_local_change, handle_remote_change

if TYPE_CHECKING:
    from clipwatch.sync_state import WatchState

logger = logging.getLogger(__name__)


async def run_tick(state: WatchState) -> None:
    """Poll both clipboards once and propagate at most one change.

    Read failures are absorbed silently (logged at DEBUG only) so an
    offline peer or an empty clipboard produces no output.

    Args:
        state: The watch session state.
    """
    hash_state = state.hash_state

    try:
        local_data = await state.local.read()
    except TransientReadError as e:
        logger.debug("Local read failed, skipping tick: %s", e)
        return
    local_hash = compute_hash(local_data)

    if hash_state.local_changed(local_hash):
        await handle_local_change(state, local_data, local_hash)
        return

    try:
        remote_data = await state.remote.read()
    except TransientReadError as e:
        logger.debug("Remote read failed, skipping tick: %s", e)
        return
    remote_hash = compute_hash(remote_data)

    if hash_state.remote_changed(remote_hash):
        await handle_remote_change(state, remote_data, remote_hash)

    # Unconditional, even after a pull: local_hash is the pre-write value,
    # and the next read of the pulled content matches last_remote_hash.
    hash_state.record_observed(local_hash, remote_hash)
