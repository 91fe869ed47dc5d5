#!/usr/bin/env python3
"""Async subprocess helper shared by local and remote clipboard access."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of a finished command.

    Attributes:
        returncode: Process exit status.
        stdout: Captured standard output, or b"" when not captured.
        stderr: Captured standard error, or b"" when not captured.
    """

    returncode: int
    stdout: bytes = b""
    stderr: bytes = b""

    @property
    def ok(self) -> bool:
        """True if the process exited with status 0."""
        return self.returncode == 0


async def run_command(
    argv: list[str],
    input_data: bytes | None = None,
    capture_stdout: bool = True,
    capture_stderr: bool = False,
) -> CommandResult:
    """Run a command to completion without blocking the event loop.

    No timeout is applied; the call lasts as long as the process does.

    Args:
        argv: Program and arguments.
        input_data: Bytes written to the process's stdin, which is then
            closed. When None, stdin is connected to /dev/null.
        capture_stdout: Capture stdout instead of discarding it.
        capture_stderr: Capture stderr instead of discarding it.

    Returns:
        The exit status and any captured output.

    Raises:
        OSError: If the program cannot be started (e.g. not installed).
    """
    logger.debug("Running %s", argv)
    proc = await asyncio.create_subprocess_exec(
        *argv,
        stdin=asyncio.subprocess.PIPE if input_data is not None else asyncio.subprocess.DEVNULL,
        stdout=asyncio.subprocess.PIPE if capture_stdout else asyncio.subprocess.DEVNULL,
        stderr=asyncio.subprocess.PIPE if capture_stderr else asyncio.subprocess.DEVNULL,
    )
    stdout, stderr = await proc.communicate(input_data)
    return CommandResult(
        returncode=proc.returncode if proc.returncode is not None else -1,
        stdout=stdout or b"",
        stderr=stderr or b"",
    )
