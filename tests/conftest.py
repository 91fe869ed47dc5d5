#!/usr/bin/env python3
"""Pytest fixtures for clipwatch tests.

Provides in-memory clipboard fakes that can be scripted tick by tick,
a watch state wired to them, and an isolated config/history directory.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path

import pytest

from clipwatch.errors import ClipboardReadError, ClipboardWriteError
from clipwatch.sync_state import WatchState


class FakeClipboard:
    """In-memory clipboard with scriptable failures.

    Attributes:
        content: Current clipboard bytes.
        writes: Every payload successfully written, in order.
        reads: Number of read() calls, including failed ones.
        fail_reads: Number of upcoming reads that raise.
        fail_writes: Number of upcoming writes that raise.
        on_read: Optional callback run at the start of every read.
    """

    def __init__(
        self,
        content: bytes = b"",
        read_error: type[Exception] = ClipboardReadError,
        write_error: type[Exception] = ClipboardWriteError,
    ) -> None:
        self.content = content
        self.writes: list[bytes] = []
        self.reads = 0
        self.fail_reads = 0
        self.fail_writes = 0
        self.on_read = None
        self.read_error = read_error
        self.write_error = write_error

    async def read(self) -> bytes:
        self.reads += 1
        if self.on_read is not None:
            self.on_read()
        if self.fail_reads:
            self.fail_reads -= 1
            raise self.read_error("read failed")
        return self.content

    async def write(self, data: bytes) -> None:
        if self.fail_writes:
            self.fail_writes -= 1
            raise self.write_error("write failed")
        self.writes.append(data)
        self.content = data


@pytest.fixture
def local_clipboard() -> FakeClipboard:
    """Fake local clipboard."""
    return FakeClipboard()


@pytest.fixture
def remote_clipboard() -> FakeClipboard:
    """Fake peer clipboard raising the remote error types."""
    from clipwatch.errors import RemoteReadError, RemoteWriteError

    return FakeClipboard(read_error=RemoteReadError, write_error=RemoteWriteError)


@pytest.fixture
def output() -> dict[str, list]:
    """Collected operator output, error output and history calls."""
    return {"out": [], "err": [], "history": []}


@pytest.fixture
def watch_state(
    local_clipboard: FakeClipboard,
    remote_clipboard: FakeClipboard,
    output: dict[str, list],
) -> WatchState:
    """WatchState wired to the fakes, capturing all side effects."""
    return WatchState(
        peer_name="dev",
        local=local_clipboard,
        remote=remote_clipboard,
        interval=0.1,
        history=lambda kind, peer, size: output["history"].append((kind, peer, size)),
        echo=output["out"].append,
        echo_err=output["err"].append,
    )


@pytest.fixture
def config_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Generator[Path, None, None]:
    """Point XDG_CONFIG_HOME at a temporary directory."""
    monkeypatch.delenv("CLIPWATCH_CONFIG", raising=False)
    monkeypatch.delenv("CLIPWATCH_HISTORY", raising=False)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    yield tmp_path / "clipwatch"


def write_config(config_home: Path, text: str) -> Path:
    """Write a config.yaml under config_home and return its path."""
    config_home.mkdir(parents=True, exist_ok=True)
    path = config_home / "config.yaml"
    path.write_text(text)
    return path
