"""
Run log setup shared by the csvtopdf entry points.

One run writes one log file. Rows log from worker threads, so the file
records the thread name of every line; the console only shows the level
asked for. Each context adds its own prefixed wrappers in
contexts/{context}/logger.py.
"""

import sys
from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from csvtopdf import __version__

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {thread.name: <22} | {message}"
CONSOLE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict] = None,
    level_colors: Optional[Dict[str, str]] = None,
    console_level: str = "INFO",
) -> Path:
    """
    Route loguru output for one run to `log_dir/<context_name>.log` and stdout.

    Replaces any sinks configured earlier (including loguru's default stderr sink)
    and writes a provenance header before returning.

    Args:
        context_name: Log file stem (e.g., "generate")
        log_dir: Directory for this run's logs, created if missing
        extra_provenance: Run parameters to record in the header (renderer, worker count, ...)
        level_colors: Console colour overrides per level name
        console_level: Minimum level echoed to stdout; the file always gets DEBUG

    Returns:
        Path to log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()

    for level_name, color in {**LEVEL_COLORS, **(level_colors or {})}.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stdout, format=CONSOLE_FORMAT, level=console_level, colorize=True)

    log_provenance(extra_provenance)

    return log_file


def log_provenance(extra_context: Optional[Dict] = None) -> None:
    """Write the invocation, interpreter and csvtopdf version as a banner, then extra_context."""
    logger.info("=" * 80)
    logger.info(f"csvtopdf {__version__}")
    logger.info(f"Command: {' '.join(sys.argv)}")
    logger.info(f"Working directory: {Path.cwd()}")
    logger.info(f"Python: {sys.version.split()[0]}")

    for key, value in (extra_context or {}).items():
        logger.info(f"{key}: {value}")

    logger.info("=" * 80)
