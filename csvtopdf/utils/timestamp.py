"""Timestamp helpers."""

from datetime import datetime


def now() -> str:
    """Second-resolution timestamp safe for directory names (e.g. 20251114_123456)."""
    return datetime.now().strftime("%Y%m%d_%H%M%S")
