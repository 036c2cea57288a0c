"""
Row rendering via an external HTML-to-PDF engine.

Handles one row end to end: stage the rendered HTML, run the engine under a
timeout, and report the row's terminal status. Failures are returned as
RowFailure values, never raised, so one bad row cannot disturb its siblings.
"""

import os
import signal
import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from omegaconf import DictConfig

from csvtopdf.contexts.rendering.logger import (
    _log_warning,
    log_render_result,
    log_render_start,
)
from csvtopdf.exceptions import RenderProcessError, RenderTimeoutError, StagingWriteError
from csvtopdf.results import RowFailure, RowStatus, RowSuccess
from csvtopdf.utils.config import CHROME_ARGS, DEFAULT_SETTINGS, RENDERER_BINARY

RENDER_TIMEOUT_S = DEFAULT_SETTINGS["renderer"]["timeout_s"]


@dataclass(frozen=True)
class RenderCommand:
    """
    Command line of the external renderer.

    `{input}` and `{output}` inside args are replaced with the staged HTML path
    and the target PDF path.

    Attributes:
        binary: Renderer executable (e.g. "chromium", "/opt/chrome/chrome")
        args: Argument template
    """

    binary: str
    args: Tuple[str, ...] = tuple(CHROME_ARGS)

    @classmethod
    def from_settings(cls, renderer_settings: DictConfig) -> "RenderCommand":
        """Build from the `renderer` section of the run settings."""
        return cls(
            binary=str(renderer_settings.binary),
            args=tuple(str(arg) for arg in renderer_settings.args),
        )

    def build(self, input_path: Path, output_path: Path) -> List[str]:
        """Concrete argv for one row."""
        return [self.binary] + [
            arg.replace("{input}", str(input_path)).replace("{output}", str(output_path))
            for arg in self.args
        ]


DEFAULT_RENDER_COMMAND = RenderCommand(binary=RENDERER_BINARY)


def staging_file_name(row_num: int) -> str:
    return f"injected-template-{row_num}.html"


def output_file_name(row_num: int) -> str:
    return f"{row_num}.pdf"


def render_row(
    rendered_text: str,
    row_num: int,
    staging_dir: Union[str, Path],
    output_dir: Union[str, Path],
    consolidating: bool,
    timeout: float = RENDER_TIMEOUT_S,
    command: Optional[RenderCommand] = None,
) -> RowStatus:
    """
    Render one row's HTML to PDF.

    The HTML is written to staging_dir. The PDF goes to staging_dir when the
    run consolidates (per-row PDFs are intermediates), otherwise to output_dir.
    File names derive from row_num, so concurrent rows never collide.

    Exactly one renderer invocation is made; there is no retry.

    Args:
        rendered_text: Template with this row's values injected
        row_num: Zero-based row index
        staging_dir: Directory for staged HTML (must exist)
        output_dir: Directory for final per-row PDFs (must exist)
        consolidating: Whether per-row PDFs will be merged afterwards
        timeout: Seconds before the renderer is killed
        command: Renderer command line (default: headless Chrome)

    Returns:
        RowSuccess with the PDF path, or RowFailure carrying
        StagingWriteError, RenderTimeoutError or RenderProcessError
    """
    command = command or DEFAULT_RENDER_COMMAND
    staging_dir = Path(staging_dir)
    output_dir = Path(output_dir)

    input_path = staging_dir / staging_file_name(row_num)
    output_path = (staging_dir if consolidating else output_dir) / output_file_name(row_num)

    try:
        # Replace rather than write through whatever already sits at this name
        input_path.unlink(missing_ok=True)
        input_path.write_text(rendered_text, encoding="utf-8")
        # A PDF left over from an earlier run must not pass for this run's output
        output_path.unlink(missing_ok=True)
    except OSError as e:
        return RowFailure(row_num, StagingWriteError(row_num, input_path, e))

    argv = command.build(input_path, output_path)
    log_render_start(row_num, input_path, output_path, timeout)

    start_time = time.monotonic()
    status = _run_renderer(argv, row_num, output_path, timeout)
    log_render_result(status, time.monotonic() - start_time)

    return status


def _run_renderer(argv: List[str], row_num: int, output_path: Path, timeout: float) -> RowStatus:
    """Invoke the renderer once and classify the outcome."""
    try:
        # stdout/stderr are inherited so renderer diagnostics stay visible.
        # A new session lets a timeout take down helpers the renderer spawned.
        process = subprocess.Popen(argv, stdin=subprocess.DEVNULL, start_new_session=True)
    except OSError as e:
        return RowFailure(
            row_num, RenderProcessError(f"could not start renderer: {e}", row_num, command=argv)
        )

    with process:
        try:
            returncode = process.wait(timeout=timeout)
        except subprocess.TimeoutExpired:
            _kill_process_group(process)
            process.wait()
            _discard_partial_output(output_path)
            return RowFailure(row_num, RenderTimeoutError(row_num, timeout, argv))

    if returncode != 0:
        _discard_partial_output(output_path)
        return RowFailure(
            row_num,
            RenderProcessError(
                f"renderer exited with status {returncode}",
                row_num,
                returncode=returncode,
                command=argv,
            ),
        )

    if not output_path.is_file():
        return RowFailure(
            row_num,
            RenderProcessError(
                f"renderer exited cleanly but produced no output at {output_path}",
                row_num,
                returncode=0,
                command=argv,
            ),
        )

    return RowSuccess(row_num, output_path)


def _kill_process_group(process: subprocess.Popen) -> None:
    """Kill the renderer and everything it started."""
    if os.name == "posix":
        try:
            os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            pass
    else:
        process.kill()


def _discard_partial_output(output_path: Path) -> None:
    try:
        output_path.unlink(missing_ok=True)
    except OSError as e:
        _log_warning(f"Could not remove partial output {output_path}: {e}")
