#!/usr/bin/env python3
"""Clipboard watch coordination.

This module re-exports watch components from submodules for convenient
imports. The actual implementations are in:
- sync_state: WatchState dataclass
- sync_handlers: handle_local_change, handle_remote_change
- sync_loop_inner: run_tick
- sync_loop: run_sync_loop
"""

from clipwatch.sync_handlers import handle_local_change, handle_remote_change
from clipwatch.sync_loop import run_sync_loop
from clipwatch.sync_loop_inner import run_tick
from clipwatch.sync_state import WatchState

__all__ = [
    "WatchState",
    "handle_local_change",
    "handle_remote_change",
    "run_sync_loop",
    "run_tick",
]
