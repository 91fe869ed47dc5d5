#!/usr/bin/env python3
"""Local clipboard read and write.

LocalClipboard wraps the paste/copy commands of the detected backend.
Every failure surfaces as ClipboardReadError or ClipboardWriteError:
the watch loop treats them as transient, one-shot commands report them.
"""

from __future__ import annotations

import logging

from clipwatch.clipboard_backend import Backend, get_backend, missing_tools_message
from clipwatch.errors import ClipboardReadError, ClipboardWriteError
from clipwatch.process_utils import run_command

logger = logging.getLogger(__name__)


class LocalClipboard:
    """Read and write this machine's clipboard through platform tools."""

    def __init__(self, backend: Backend | None = None) -> None:
        """Initialize with an explicit backend, or detect one lazily.

        Args:
            backend: Backend to use. When None, get_backend() is consulted
                on first access.
        """
        self._backend = backend

    @property
    def backend(self) -> Backend:
        """The backend in use."""
        if self._backend is None:
            self._backend = get_backend()
        return self._backend

    def _check_usable(self, command: list[str], error_type: type[Exception]) -> None:
        backend = self.backend
        if backend.missing:
            raise error_type(missing_tools_message(backend))
        if not command:
            raise error_type(f"no clipboard command available for backend {backend.kind.value}")

    async def read(self) -> bytes:
        """Return the current clipboard content.

        Raises:
            ClipboardReadError: If the tool is missing, cannot be started,
                or exits with a non-zero status (e.g. empty clipboard).
        """
        command = self.backend.paste_cmd
        self._check_usable(command, ClipboardReadError)
        try:
            result = await run_command(command, capture_stderr=True)
        except OSError as e:
            raise ClipboardReadError(f"reading clipboard: {e}") from e
        if not result.ok:
            detail = result.stderr.decode(errors="replace").strip()
            raise ClipboardReadError(
                f"reading clipboard: {command[0]} exited with status {result.returncode}"
                + (f": {detail}" if detail else "")
            )
        return result.stdout

    async def write(self, data: bytes) -> None:
        """Replace the clipboard content with data.

        Args:
            data: Raw bytes to place on the clipboard.

        Raises:
            ClipboardWriteError: If the tool is missing, cannot be started,
                or exits with a non-zero status.
        """
        command = self.backend.copy_cmd
        self._check_usable(command, ClipboardWriteError)
        try:
            result = await run_command(command, input_data=data, capture_stdout=False)
        except OSError as e:
            raise ClipboardWriteError(f"writing clipboard: {e}") from e
        if not result.ok:
            raise ClipboardWriteError(
                f"writing clipboard: {command[0]} exited with status {result.returncode}"
            )
        logger.debug("Wrote %d bytes to local clipboard", len(data))

    async def clear(self) -> None:
        """Empty the clipboard.

        Uses the backend's dedicated clear command where it has one, and
        otherwise copies empty content.

        Raises:
            ClipboardWriteError: If the clipboard cannot be cleared.
        """
        command = self.backend.clear_cmd
        if not command:
            await self.write(b"")
            return
        self._check_usable(command, ClipboardWriteError)
        try:
            result = await run_command(command, capture_stdout=False)
        except OSError as e:
            raise ClipboardWriteError(f"clearing clipboard: {e}") from e
        if not result.ok:
            raise ClipboardWriteError(
                f"clearing clipboard: {command[0]} exited with status {result.returncode}"
            )
