#!/usr/bin/env python3
"""
SHA-256 fingerprints and hash state for echo suppression.

Polling both clipboards gives no hint about who wrote the content. After
content is pushed to the peer, the next tick reads the same bytes on both
sides; after content is pulled from the peer, the next local read returns
what was just received. Without tracking, either case would bounce the
content back to where it came from, forever.

This module provides:
- compute_hash(): SHA-256 hex digest of clipboard content
- EMPTY_HASH: digest of empty content, the zero value of tracked state
- HashState: dataclass tracking last_local_hash and last_remote_hash
"""
import hashlib

from clipwatch.hash_state import EMPTY_HASH, HashState

__all__ = ["compute_hash", "EMPTY_HASH", "HashState"]


def compute_hash(data: bytes) -> str:
    """
    Compute SHA-256 hash of clipboard content.

    Args:
        data: Raw clipboard content bytes to hash.

    Returns:
        Hexadecimal string representation of the SHA-256 digest.
    """
    return hashlib.sha256(data).hexdigest()
