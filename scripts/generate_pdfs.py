#!/usr/bin/env python3
"""
Batch PDF Generation CLI

Fills an HTML template with each row of a CSV file and renders one PDF per row,
optionally merging them into a single PDF in row order.

Placeholders in the template are HTML comments naming a zero-based column:
<!--=0-->, <!--=1-->, ...

Examples:\n

    generate_pdfs.py --template letter.html --input people.csv

    generate_pdfs.py -t letter.html -i people.csv --no-merge-output -o letters

    generate_pdfs.py -t letter.html -i people.csv --template-dependencies "style.css,logo.png"

    generate_pdfs.py -t letter.html -i people.csv --config configs/csvtopdf.yaml --verbose
"""

import os
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from csvtopdf.contexts.generation import generate_pdfs
from csvtopdf.contexts.generation.logger import setup_generation_logger
from csvtopdf.contexts.intake import load_template, read_rows
from csvtopdf.exceptions import ParseError, StagingError
from csvtopdf.utils.config import load_settings
from csvtopdf.utils.timestamp import now

load_dotenv()
LOGS_PATH = Path(os.getenv("LOGS_PATH", "outs/logs"))


def display_path(path: Path) -> str:
    """Return path relative to the working directory for cleaner display."""
    try:
        return str(Path(path).resolve().relative_to(Path.cwd()))
    except ValueError:
        return str(path)


def split_dependencies(value: Optional[str]) -> list:
    """Split a comma separated dependency list, ignoring blanks."""
    if not value:
        return []
    return [part.strip() for part in value.split(",") if part.strip()]


app = typer.Typer(
    help="Generate one PDF per CSV row from an HTML template",
    add_completion=False,
)


@app.command()
def main(
    template: Annotated[
        Path,
        typer.Option("--template", "-t", help="Path to the HTML template file"),
    ],
    input_csv: Annotated[
        Path,
        typer.Option("--input", "-i", help="Path to the input CSV file"),
    ],
    exclude_first: Annotated[
        bool,
        typer.Option(
            "--exclude-first/--include-first",
            help="Exclude the first row in the CSV, commonly used for labels",
        ),
    ] = True,
    merge_output: Annotated[
        bool,
        typer.Option(
            "--merge-output/--no-merge-output",
            help="Merge all output PDFs into one PDF with multiple pages",
        ),
    ] = True,
    output_dir: Annotated[
        Path,
        typer.Option("--output-dir", "-o", help="Directory to put output PDF files into"),
    ] = Path("output"),
    template_dependencies: Annotated[
        Optional[str],
        typer.Option(
            "--template-dependencies",
            "-d",
            help="Comma separated list of files the template references (CSS, images, ...)",
        ),
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", "-w", help="Maximum concurrent renders", min=1),
    ] = None,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Seconds allowed per row before the renderer is killed", min=0.1),
    ] = None,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="YAML settings file"),
    ] = None,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Directory for the run log (default: LOGS_PATH/generate_<timestamp>)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Show per-row progress and renderer details"),
    ] = False,
):
    """
    Generate PDFs from a template and a CSV file.

    Exits 0 when every row rendered (and the merge, if requested, succeeded), 1 otherwise.
    """
    try:
        settings = load_settings(
            config_path=config,
            overrides={"pipeline.max_workers": workers, "renderer.timeout_s": timeout},
        )
    except (FileNotFoundError, ValueError) as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    log_dir = log_dir or LOGS_PATH / f"generate_{now()}"
    log_file = setup_generation_logger(log_dir, renderer=settings.renderer.binary, verbose=verbose)

    try:
        rows = read_rows(input_csv, exclude_first=exclude_first)
        template_text = load_template(template)
    except ParseError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.secho(f"\nGenerating {len(rows)} PDFs from {template.name}", fg=typer.colors.BLUE, bold=True)
    typer.echo("")

    try:
        result = generate_pdfs(
            rows,
            template_text,
            output_dir,
            consolidate=merge_output,
            dependencies=split_dependencies(template_dependencies),
            settings=settings,
        )
    except StagingError as e:
        typer.secho(f"Error: {e}\n", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    typer.echo("")
    if result.failure_count == 0:
        typer.secho(f"✓ All {result.row_count} rows rendered", fg=typer.colors.GREEN, bold=True)
    else:
        typer.secho(
            f"✗ {result.failure_count} of {result.row_count} rows failed",
            fg=typer.colors.RED,
            bold=True,
        )
        for row_num in result.failed_rows()[:10]:
            typer.secho(f"  - Row {row_num}: {result.failed[row_num]}", fg=typer.colors.RED)
        if result.failure_count > 10:
            typer.echo(f"  ... and {result.failure_count - 10} more")

    if merge_output:
        if result.merged_path:
            typer.echo(f"  Merged PDF: {display_path(result.merged_path)}")
        elif result.merge_error:
            typer.secho(f"  Merge failed: {result.merge_error}", fg=typer.colors.RED)
    else:
        typer.echo(f"  Output: {display_path(Path(output_dir))}")

    typer.echo(f"  Log: {display_path(log_file)}")
    typer.echo("")

    raise typer.Exit(code=0 if result.all_succeeded else 1)


if __name__ == "__main__":
    app()
