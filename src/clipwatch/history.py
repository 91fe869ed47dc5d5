#!/usr/bin/env python3
"""Transfer history log.

Every successful send, receive or peek appends an entry to a JSON file
(at $CLIPWATCH_HISTORY, or history.json in the config directory). Only
the most recent MAX_HISTORY_ENTRIES are kept.

Recording is fire-and-forget: a history failure is logged at DEBUG level
and never reaches the caller.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path

from clipwatch.config import config_dir

logger = logging.getLogger(__name__)

MAX_HISTORY_ENTRIES: int = 50


@dataclass
class HistoryEntry:
    """One recorded transfer.

    Attributes:
        timestamp: ISO 8601 UTC time of the event.
        command: Event kind, e.g. "send" or "watch:recv".
        target: Peer name.
        size: Payload size in bytes.
    """

    timestamp: str
    command: str
    target: str
    size: int = 0


def history_path() -> Path:
    """Return the history file path, honoring CLIPWATCH_HISTORY."""
    override = os.environ.get("CLIPWATCH_HISTORY")
    if override:
        return Path(override)
    return config_dir() / "history.json"


def load_history(path: Path | None = None) -> list[HistoryEntry]:
    """Load recorded entries, oldest first.

    A missing or corrupt file yields an empty list.
    """
    path = path or history_path()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return []
    if not isinstance(raw, list):
        return []
    entries = []
    for item in raw:
        try:
            entries.append(
                HistoryEntry(
                    timestamp=str(item["timestamp"]),
                    command=str(item["command"]),
                    target=str(item["target"]),
                    size=int(item.get("size", 0)),
                )
            )
        except (KeyError, TypeError, ValueError, AttributeError):
            continue
    return entries


def record_history(command: str, target: str, size: int, path: Path | None = None) -> None:
    """Append one entry to the history file.

    Args:
        command: Event kind.
        target: Peer name.
        size: Payload size in bytes.
        path: History file; defaults to history_path().
    """
    path = path or history_path()
    entries = load_history(path)
    entries.append(
        HistoryEntry(
            timestamp=datetime.now(timezone.utc).isoformat(),
            command=command,
            target=target,
            size=size,
        )
    )
    entries = entries[-MAX_HISTORY_ENTRIES:]

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps([asdict(e) for e in entries], indent=2), encoding="utf-8")
        os.chmod(path, 0o600)
    except OSError as e:
        logger.debug("Failed to record history in %s: %s", path, e)


PEER_COMMANDS: frozenset[str] = frozenset({"send", "recv", "peek", "watch:send", "watch:recv"})


def is_peer_command(command: str) -> bool:
    """Return True for entries recorded by a transfer with a peer."""
    return command in PEER_COMMANDS


def filter_history(entries: list[HistoryEntry], peer_only: bool = False) -> list[HistoryEntry]:
    """Select entries for display.

    Args:
        entries: Entries as returned by load_history().
        peer_only: Keep only peer transfers (send, recv, peek, watch).
    """
    if not peer_only:
        return list(entries)
    return [e for e in entries if is_peer_command(e.command)]
