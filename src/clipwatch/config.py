#!/usr/bin/env python3
"""Peer configuration loading.

The configuration file is YAML, looked up in this order:
- $CLIPWATCH_CONFIG
- $XDG_CONFIG_HOME/clipwatch/config.yaml
- ~/.config/clipwatch/config.yaml

Example:

    defaults:
      peer: dev
    peers:
      dev:
        ssh: devbox
        remote_cmd: clipwatch
    watch:
      interval_ms: 500
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from clipwatch.errors import ConfigurationError

logger = logging.getLogger(__name__)

APP_NAME: str = "clipwatch"

# Command run on the peer when a peer entry does not name one.
DEFAULT_REMOTE_CMD: str = "clipwatch"


@dataclass(frozen=True)
class PeerConfig:
    """One remote endpoint, immutable for the lifetime of a session.

    Attributes:
        ssh: ssh destination (host alias or user@host).
        remote_cmd: Program on the peer that understands `copy` and `paste`.
    """

    ssh: str
    remote_cmd: str = DEFAULT_REMOTE_CMD


@dataclass
class Config:
    """Parsed configuration file.

    Attributes:
        peers: Peer entries by name.
        default_peer: Peer used when a command names none.
        watch_interval_ms: Poll interval for `watch`, if configured.
    """

    peers: dict[str, PeerConfig] = field(default_factory=dict)
    default_peer: str | None = None
    watch_interval_ms: int | None = None

    def get_peer(self, name: str) -> PeerConfig:
        """Look up a peer by name.

        Raises:
            ConfigurationError: If no peers are configured or name is unknown.
        """
        if not self.peers:
            raise ConfigurationError("no peers configured (add a 'peers' section to the config)")
        try:
            return self.peers[name]
        except KeyError:
            known = ", ".join(sorted(self.peers))
            raise ConfigurationError(f"unknown peer {name!r} (configured peers: {known})") from None

    def get_default_peer(self) -> str:
        """Return the name of the default peer.

        Raises:
            ConfigurationError: If defaults.peer is not set.
        """
        if not self.default_peer:
            raise ConfigurationError("no peer specified and no defaults.peer configured")
        return self.default_peer


def config_dir() -> Path:
    """Return the clipwatch directory under XDG_CONFIG_HOME or ~/.config."""
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base) / APP_NAME
    return Path.home() / ".config" / APP_NAME


def config_path() -> Path:
    """Return the configuration file path, honoring CLIPWATCH_CONFIG."""
    override = os.environ.get("CLIPWATCH_CONFIG")
    if override:
        return Path(override)
    return config_dir() / "config.yaml"


def _section(raw: dict[str, Any], key: str) -> dict[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"'{key}' must be a mapping")
    return value


def _parse_peer(name: str, raw: Any) -> PeerConfig:
    if not isinstance(raw, dict):
        raise ConfigurationError(f"peer {name!r} must be a mapping")
    ssh = raw.get("ssh")
    if not ssh or not isinstance(ssh, str):
        raise ConfigurationError(f"peer {name!r} is missing 'ssh'")
    remote_cmd = raw.get("remote_cmd") or DEFAULT_REMOTE_CMD
    return PeerConfig(ssh=ssh, remote_cmd=str(remote_cmd))


def parse_config(raw: Any) -> Config:
    """Build a Config from the object produced by yaml.safe_load.

    Raises:
        ConfigurationError: If the structure is not what is expected.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError("config must be a mapping")

    peers = {
        str(name): _parse_peer(str(name), entry)
        for name, entry in _section(raw, "peers").items()
    }
    default_peer = _section(raw, "defaults").get("peer")

    interval = _section(raw, "watch").get("interval_ms")
    if interval is not None and (isinstance(interval, bool) or not isinstance(interval, int)):
        raise ConfigurationError("watch.interval_ms must be an integer")

    return Config(
        peers=peers,
        default_peer=str(default_peer) if default_peer else None,
        watch_interval_ms=interval,
    )


def load_config(path: Path | str | None = None) -> Config:
    """Read and parse the configuration file.

    Args:
        path: File to read; defaults to config_path().

    Returns:
        The parsed Config.

    Raises:
        ConfigurationError: If the file is missing, unreadable, not valid
            YAML, or structurally invalid.
    """
    path = Path(path) if path is not None else config_path()
    logger.debug("Loading config from %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigurationError(
            f"config file not found: {path}\n\n"
            "Peers are not configured. Create a config file with a 'peers' section."
        ) from None
    except OSError as e:
        raise ConfigurationError(f"reading config: {e}") from e

    try:
        raw = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"parsing config: {e}") from e
    return parse_config(raw)


def resolve_peer(config: Config, name: str | None) -> tuple[str, PeerConfig]:
    """Resolve an optional peer name to (name, PeerConfig).

    Args:
        config: Loaded configuration.
        name: Peer name from the command line, or None for the default.

    Raises:
        ConfigurationError: If no name is given and no default exists, or
            the peer is unknown.
    """
    if name is None:
        name = config.get_default_peer()
    return name, config.get_peer(name)
