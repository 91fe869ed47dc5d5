#!/usr/bin/env python3
"""
Hash state management for echo suppression.

The hash state tracks two values:
- last_local_hash: local content as last observed or propagated
- last_remote_hash: remote content as last observed or propagated

A side counts as changed only when its hash differs from BOTH values. The
second comparison recognizes "this new content is exactly what we just
exchanged with the peer" and suppresses the echo.
"""
import hashlib
from dataclasses import dataclass

# SHA-256 of b"". A failed initial read leaves tracked state here, which is
# indistinguishable from an empty clipboard. Computed here rather than via
# hashing.compute_hash because hashing imports this module.
EMPTY_HASH: str = hashlib.sha256(b"").hexdigest()


@dataclass
class HashState:
    """
    Track the last known hash of each side of the session.

    Attributes:
        last_local_hash: SHA-256 hex digest of last known local content.
        last_remote_hash: SHA-256 hex digest of last known remote content.
    """

    last_local_hash: str = EMPTY_HASH
    last_remote_hash: str = EMPTY_HASH

    def _is_new(self, current_hash: str) -> bool:
        return current_hash != self.last_local_hash and current_hash != self.last_remote_hash

    def local_changed(self, current_hash: str) -> bool:
        """
        Check if freshly read local content should be pushed to the peer.

        Args:
            current_hash: SHA-256 hex digest of current local content.

        Returns:
            True if the hash matches neither tracked hash.
        """
        return self._is_new(current_hash)

    def remote_changed(self, current_hash: str) -> bool:
        """
        Check if freshly read remote content should be pulled locally.

        Args:
            current_hash: SHA-256 hex digest of current remote content.

        Returns:
            True if the hash matches neither tracked hash.
        """
        return self._is_new(current_hash)

    def record_sent(self, hash_value: str) -> None:
        """
        Record hash of content successfully written to the peer.

        Both sides now hold the same content, so both fields are pinned.
        Pinning the remote side prevents the next remote read from looking
        like a change made on the peer.

        Args:
            hash_value: SHA-256 hex digest of sent content.
        """
        self.last_local_hash = hash_value
        self.last_remote_hash = hash_value

    def record_received(self, hash_value: str) -> None:
        """
        Record hash of content successfully written to the local clipboard.

        Args:
            hash_value: SHA-256 hex digest of received content.
        """
        self.last_remote_hash = hash_value
        self.last_local_hash = hash_value

    def record_observed(self, local_hash: str, remote_hash: str) -> None:
        """
        Reset both fields to what a tick actually read.

        Called at the end of every tick that got as far as reading the
        remote side, even right after record_received(). The local field
        then lags the clipboard by one tick; the following read finds the
        received content equal to last_remote_hash and does not echo it.

        Args:
            local_hash: Hash of the local content read this tick.
            remote_hash: Hash of the remote content read this tick.
        """
        self.last_local_hash = local_hash
        self.last_remote_hash = remote_hash
