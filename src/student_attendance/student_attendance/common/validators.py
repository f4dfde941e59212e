from __future__ import annotations

from typing import Optional


def exceeds_max_length(value: Optional[str], max_len: int) -> bool:
    return value is not None and len(value) > max_len


def is_partial_pair(first: Optional[int], second: Optional[int]) -> bool:
    """True when exactly one half of an hour/minute pair was entered."""
    return (first is None) != (second is None)
