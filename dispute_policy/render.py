from __future__ import annotations

from typing import Optional


def truncate(value: Optional[str], max_length: int) -> Optional[str]:
    """Cut ``value`` to at most ``max_length`` code points; short or empty input is returned as is."""
    if not value or len(value) <= max_length:
        return value
    return value[:max_length]
