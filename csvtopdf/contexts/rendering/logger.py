"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from loguru directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[render]"


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def log_render_start(row_num: int, input_path, output_path, timeout: float) -> None:
    """Log the start of one row's renderer invocation."""
    _log_debug(f"Row {row_num}: rendering (timeout {timeout:g}s)")
    _log_debug(f"  Source: {input_path}")
    _log_debug(f"  Target: {output_path}")


def log_render_result(status, elapsed_time: float) -> None:
    """
    Log the terminal status of one row.

    Args:
        status: RowSuccess or RowFailure
        elapsed_time: Seconds spent in the renderer
    """
    if status.ok:
        _log_debug(f"Row {status.row_num}: rendered in {elapsed_time:.2f}s -> {status.output_path}")
    else:
        _log_warning(f"Row {status.row_num}: failed after {elapsed_time:.2f}s: {status.error}")
