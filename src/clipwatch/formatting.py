#!/usr/bin/env python3
"""Human-readable formatting for operator output."""

_UNIT: int = 1024
_PREFIXES: str = "KMG"


def format_size(size: int) -> str:
    """Format a byte count using binary units.

    Args:
        size: Number of bytes.

    Returns:
        "N B" below 1024 bytes, otherwise one decimal with KiB, MiB or GiB,
        e.g. 1536 -> "1.5 KiB".
    """
    if size < _UNIT:
        return f"{size} B"
    div, exp = _UNIT, 0
    n = size // _UNIT
    while n >= _UNIT and exp < len(_PREFIXES) - 1:
        div *= _UNIT
        exp += 1
        n //= _UNIT
    return f"{size / div:.1f} {_PREFIXES[exp]}iB"
