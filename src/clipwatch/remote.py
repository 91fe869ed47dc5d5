#!/usr/bin/env python3
"""Remote clipboard access over ssh.

A request is a single ssh session that runs the peer's remote command
with one verb:

- paste: no input; clipboard bytes on stdout; exit status signals failure.
- copy: clipboard bytes on stdin; exit status signals failure.

There is no framing, header or version beyond that. Nothing here retries
or times out; while watching, the next tick is the retry.
"""

from __future__ import annotations

import logging

from clipwatch.config import PeerConfig
from clipwatch.errors import RemoteReadError, RemoteWriteError
from clipwatch.process_utils import run_command

logger = logging.getLogger(__name__)

SSH_COMMAND: str = "ssh"


class RemoteClipboard:
    """Read and write a peer's clipboard through its remote command."""

    def __init__(
        self,
        peer: PeerConfig,
        ssh_command: str = SSH_COMMAND,
        show_errors: bool = False,
    ) -> None:
        """Initialize for one peer.

        Args:
            peer: The peer to talk to.
            ssh_command: ssh executable to run.
            show_errors: Include the remote stderr in error messages. Off
                while polling so an offline peer does not spam the output.
        """
        self.peer = peer
        self.ssh_command = ssh_command
        self.show_errors = show_errors

    def _argv(self, verb: str) -> list[str]:
        return [self.ssh_command, self.peer.ssh, self.peer.remote_cmd, verb]

    def _describe(self, action: str, returncode: int, stderr: bytes) -> str:
        msg = f"{action} {self.peer.ssh}: exit status {returncode}"
        detail = stderr.decode(errors="replace").strip()
        if self.show_errors and detail:
            msg += f": {detail}"
        return msg

    async def read(self) -> bytes:
        """Return the peer's clipboard content.

        Raises:
            RemoteReadError: On any ssh, transport or remote failure.
        """
        try:
            result = await run_command(self._argv("paste"), capture_stderr=self.show_errors)
        except OSError as e:
            raise RemoteReadError(f"reading from {self.peer.ssh}: {e}") from e
        if not result.ok:
            raise RemoteReadError(self._describe("reading from", result.returncode, result.stderr))
        return result.stdout

    async def write(self, data: bytes) -> None:
        """Replace the peer's clipboard content with data.

        Raises:
            RemoteWriteError: On any ssh, transport or remote failure.
        """
        try:
            result = await run_command(
                self._argv("copy"),
                input_data=data,
                capture_stdout=False,
                capture_stderr=self.show_errors,
            )
        except OSError as e:
            raise RemoteWriteError(f"writing to {self.peer.ssh}: {e}") from e
        if not result.ok:
            raise RemoteWriteError(self._describe("writing to", result.returncode, result.stderr))
        logger.debug("Wrote %d bytes to %s", len(data), self.peer.ssh)
