#!/usr/bin/env python3
"""Exception types for clipwatch.

Read and write failures on either clipboard are expected during normal
polling (empty clipboard, peer offline, tool not installed) and are never
fatal once a watch session is running. ConfigurationError is raised before
the session starts and ends the command.
"""


class ClipwatchError(Exception):
    """Base class for all clipwatch errors."""

    pass


class TransientReadError(ClipwatchError):
    """Reading a clipboard failed; the next tick reads again."""

    pass


class TransientWriteError(ClipwatchError):
    """Writing a clipboard failed; reported, then retried on a later tick."""

    pass


class ClipboardReadError(TransientReadError):
    """Reading the local clipboard failed."""

    pass


class ClipboardWriteError(TransientWriteError):
    """Writing the local clipboard failed."""

    pass


class RemoteReadError(TransientReadError):
    """Reading the peer's clipboard over ssh failed."""

    pass


class RemoteWriteError(TransientWriteError):
    """Writing the peer's clipboard over ssh failed."""

    pass


class ConfigurationError(ClipwatchError):
    """
    Configuration is missing, invalid, or names an unknown peer.

    Raised at startup, before any clipboard is touched.
    """

    pass
