"""Shared argument helpers for GetBlock MCP tools."""

from __future__ import annotations

from typing import Any, Optional


def parse_count(value: Any, *, default: int) -> Optional[int]:
    """Parse a block count; None means the value is not a whole number."""
    if value is None:
        return default
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def clamp_limit(value: int, *, max_value: int) -> int:
    """Clamp a count to ``0..max_value``."""
    if value < 0:
        return 0
    return min(value, max_value)
