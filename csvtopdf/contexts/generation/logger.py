"""
Generation context logger.

Provides logging interface for the pipeline coordinator with automatic [pipeline] prefix.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from csvtopdf.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[pipeline]"


def setup_generation_logger(log_dir: Path, renderer: str, verbose: bool = False) -> Path:
    """
    Setup logger for a generation run.

    Args:
        log_dir: Directory for this run's log
        renderer: Renderer binary, recorded in the provenance header
        verbose: Echo DEBUG messages (per-row progress) to the console

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="generate",
        log_dir=log_dir,
        extra_provenance={"Renderer": renderer},
        console_level="DEBUG" if verbose else "INFO",
    )


def _log_info(message: str) -> None:
    """Log info message with [pipeline] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [pipeline] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [pipeline] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [pipeline] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [pipeline] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


def _log_traceback(message: str, error: BaseException) -> None:
    """Log debug message with [pipeline] prefix and the error's traceback (file sink only by default)."""
    logger.opt(exception=error).debug(f"{CONTEXT_PREFIX} {message}")


def log_run_start(row_count: int, consolidate: bool, workers: Optional[int], timeout: float) -> None:
    """Log start of a run with its parameters."""
    _log_info(f"Generating {row_count} PDFs")
    _log_debug(f"  Workers: {workers}")
    _log_debug(f"  Timeout per row: {timeout:g}s")
    _log_debug(f"  Consolidate: {consolidate}")


def log_row_result(status, received: int, total: int) -> None:
    """
    Log a row's terminal status as it arrives (completion order).

    Args:
        status: RowSuccess or RowFailure
        received: Statuses received so far, including this one
        total: Rows in the run
    """
    if status.ok:
        _log_info(f"[{received}/{total}] Row {status.row_num} succeeded")
    else:
        _log_error(f"[{received}/{total}] Error processing row {status.row_num}: {status.error}")


def log_run_summary(result, elapsed_time: float) -> None:
    """
    Log the outcome of a run.

    Args:
        result: RunResult
        elapsed_time: Wall-clock seconds for the run
    """
    summary = (
        f"{result.success_count} succeeded, {result.failure_count} failed "
        f"of {result.row_count} rows ({elapsed_time:.2f}s)"
    )
    if result.failure_count == 0:
        _log_success(summary)
    else:
        _log_warning(summary)
        _log_warning(f"Failed rows: {result.failed_rows()}")

    if result.merged_path:
        _log_info(f"Merged PDF: {result.merged_path} ({result.merged_page_count} pages)")
    if result.merge_error:
        _log_error(f"Merge failed: {result.merge_error}")
