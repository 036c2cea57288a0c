"""
Pipeline coordination: fan rows out to renderer workers and collect their statuses.

Rows are processed independently on a thread pool. Statuses come back in
completion order; each is filed under its row number, and the successful PDFs
are merged in row order once every row has reported.

    rows ──> [inject + render_row] x N (pool) ──> as_completed ──> RunResult
                                                                      │
                                          ordered_outputs() ──> consolidate
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Optional, Sequence, Union

from omegaconf import DictConfig

from csvtopdf.contexts.consolidation import consolidate as consolidate_pdfs
from csvtopdf.contexts.generation.logger import (
    _log_debug,
    _log_traceback,
    _log_warning,
    log_row_result,
    log_run_start,
    log_run_summary,
)
from csvtopdf.contexts.rendering import RENDER_TIMEOUT_S, RenderCommand, render_row, staging_area
from csvtopdf.contexts.templating import find_placeholders, inject, placeholder_token
from csvtopdf.exceptions import InjectionError, MergeError, StagingError
from csvtopdf.results import RowFailure, RowStatus, RunResult
from csvtopdf.utils.config import DEFAULT_SETTINGS, load_settings
from csvtopdf.utils.pdf_processing import page_count

DEFAULT_MAX_WORKERS = DEFAULT_SETTINGS["pipeline"]["max_workers"]
MERGED_FILENAME = DEFAULT_SETTINGS["pipeline"]["merged_filename"]


def _process_row(
    template: str,
    fields: Sequence[str],
    row_num: int,
    staging_dir: Path,
    output_dir: Path,
    consolidating: bool,
    timeout: float,
    command: Optional[RenderCommand],
) -> RowStatus:
    """Worker task: inject one row and render it."""
    try:
        rendered_text = inject(template, fields)
    except InjectionError as e:
        return RowFailure(row_num, e)

    _log_debug(f"Row {row_num}: rendering")
    return render_row(
        rendered_text,
        row_num,
        staging_dir,
        output_dir,
        consolidating,
        timeout=timeout,
        command=command,
    )


def _warn_unfilled_placeholders(template: str, rows: Sequence[Sequence[str]]) -> None:
    """Unfilled tokens stay verbatim in the output; make that visible once per run."""
    indices = find_placeholders(template)
    if not indices or not rows:
        return
    shortest = min(len(fields) for fields in rows)
    unfilled = [i for i in indices if i >= shortest]
    if unfilled:
        tokens = ", ".join(placeholder_token(i) for i in unfilled)
        _log_warning(f"Some rows have only {shortest} fields; {tokens} will be left as-is")


def run(
    rows: Sequence[Sequence[str]],
    template: str,
    output_dir: Union[str, Path],
    staging_dir: Union[str, Path],
    consolidate: bool = True,
    timeout: float = RENDER_TIMEOUT_S,
    command: Optional[RenderCommand] = None,
    max_workers: Optional[int] = DEFAULT_MAX_WORKERS,
    merged_filename: str = MERGED_FILENAME,
) -> RunResult:
    """
    Generate one PDF per row and optionally merge them.

    Every row is submitted at once; at most max_workers render concurrently.
    A failing or slow row never blocks or cancels the others. The call returns
    only after every row has reported a terminal status.

    Args:
        rows: Row records, row number = position
        template: HTML template with <!--=i--> placeholders
        output_dir: Directory for per-row PDFs (when not consolidating) and the merged PDF
        staging_dir: Directory for staged HTML and intermediate PDFs
        consolidate: Merge successful PDFs into output_dir / merged_filename
        timeout: Seconds allowed per renderer invocation
        command: Renderer command line (default: headless Chrome)
        max_workers: Concurrency cap; None runs every row at once
        merged_filename: Name of the merged PDF

    Returns:
        RunResult covering every row exactly once

    Raises:
        ValueError: If max_workers is less than 1
    """
    if max_workers is not None and max_workers < 1:
        raise ValueError(f"max_workers must be at least 1, got {max_workers}")

    output_dir = Path(output_dir)
    staging_dir = Path(staging_dir)
    result = RunResult(row_count=len(rows))
    workers = max_workers or len(rows)

    log_run_start(len(rows), consolidate, workers, timeout)
    _warn_unfilled_placeholders(template, rows)
    start_time = time.monotonic()

    if rows:
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="csvtopdf-row") as executor:
            futures = {}
            for row_num, fields in enumerate(rows):
                future = executor.submit(
                    _process_row,
                    template,
                    fields,
                    row_num,
                    staging_dir,
                    output_dir,
                    consolidate,
                    timeout,
                    command,
                )
                futures[future] = row_num
                _log_debug(f"Row {row_num}: dispatched")

            for future in as_completed(futures):
                row_num = futures[future]
                try:
                    status = future.result()
                except Exception as e:
                    # Unexpected worker error still ends the row, as a failure
                    _log_traceback(f"Row {row_num}: worker raised", e)
                    status = RowFailure(row_num, e)
                result.record(status)
                log_row_result(status, result.success_count + result.failure_count, len(rows))

    if consolidate:
        try:
            result.merged_path = consolidate_pdfs(
                result.ordered_outputs(), output_dir / merged_filename
            )
        except MergeError as e:
            result.merge_error = e
        if result.merged_path is not None:
            result.merged_page_count = page_count(result.merged_path)

    log_run_summary(result, time.monotonic() - start_time)
    return result


def generate_pdfs(
    rows: Sequence[Sequence[str]],
    template: str,
    output_dir: Union[str, Path],
    consolidate: bool = True,
    dependencies: Sequence[Union[str, Path]] = (),
    settings: Optional[DictConfig] = None,
) -> RunResult:
    """
    Run a full batch inside a scoped staging directory.

    Creates output_dir, stages template dependencies, runs the pipeline, and
    removes the staging directory afterwards (unless settings.staging.keep).
    When consolidating, the per-row PDFs in the result live in the staging
    directory and are therefore gone once this returns; only the merged PDF remains.

    Args:
        rows: Row records
        template: HTML template text
        output_dir: Destination directory
        consolidate: Merge successful PDFs into one
        dependencies: Files the template references (CSS, images, ...)
        settings: Run settings (default: load_settings())

    Returns:
        RunResult

    Raises:
        StagingError: If the output or staging directory cannot be created, or a
            dependency cannot be staged
    """
    settings = settings if settings is not None else load_settings()

    output_dir = Path(output_dir).resolve()
    try:
        output_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StagingError(f"Could not create output directory {output_dir}: {e}") from e

    with staging_area(
        settings.staging.dir, dependencies=dependencies, keep=settings.staging.keep
    ) as staging_dir:
        return run(
            rows,
            template,
            output_dir,
            staging_dir,
            consolidate=consolidate,
            timeout=float(settings.renderer.timeout_s),
            command=RenderCommand.from_settings(settings.renderer),
            max_workers=settings.pipeline.max_workers,
            merged_filename=settings.pipeline.merged_filename,
        )
