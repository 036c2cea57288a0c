"""
Consolidation context logger.

Provides logging interface for consolidation context with automatic [merge] prefix.
"""

from loguru import logger

CONTEXT_PREFIX = "[merge]"


def _log_info(message: str) -> None:
    """Log info message with [merge] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [merge] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [merge] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")
