"""
Scoped staging directory for rendered HTML and intermediate PDFs.

Template dependencies (stylesheets, images, fonts) are copied next to the
staged HTML so relative references in the template resolve. Copies, not
links: rows write into the staging directory and must never reach the
user's original files.
"""

import re
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Sequence, Union

from csvtopdf.contexts.rendering.logger import _log_debug, _log_info
from csvtopdf.exceptions import StagingError

# Names the renderer writes per row (injected-template-N.html, N.pdf)
ROW_FILE_PATTERN = re.compile(r"^(injected-template-\d+\.html|\d+\.pdf)$")


def stage_dependencies(dependencies: Sequence[Union[str, Path]], staging_dir: Path) -> None:
    """
    Copy each dependency into staging_dir under its base name.

    Raises:
        StagingError: If a dependency does not exist, collides with another
            dependency or a per-row file name, or cannot be copied
    """
    for dependency in dependencies:
        source = Path(dependency).expanduser()
        if not source.is_file():
            raise StagingError(f"Template dependency not found: {source}")

        if ROW_FILE_PATTERN.match(source.name):
            raise StagingError(
                f"Template dependency {source} uses a name reserved for per-row files"
            )

        target = staging_dir / source.name
        if target.exists():
            raise StagingError(
                f"Template dependency {source} has the same name as another dependency: {source.name}"
            )

        try:
            shutil.copy2(source, target)
        except OSError as e:
            raise StagingError(f"Could not stage dependency {source}: {e}") from e
        _log_debug(f"Staged dependency {source} -> {target}")


@contextmanager
def staging_area(
    parent_dir: Optional[Union[str, Path]] = None,
    dependencies: Sequence[Union[str, Path]] = (),
    keep: bool = False,
) -> Iterator[Path]:
    """
    Create a fresh staging directory and remove it when the block exits.

    Removal happens on every exit path, including exceptions raised inside the block.

    Args:
        parent_dir: Where to create the directory (None = system temp dir)
        dependencies: Files to stage alongside rendered templates
        keep: Leave the directory in place (for debugging)

    Yields:
        Absolute path of the staging directory

    Raises:
        StagingError: If the directory cannot be created or a dependency cannot be staged

    Example:
        with staging_area(dependencies=["style.css"]) as staging_dir:
            result = run(rows, template, output_dir, staging_dir)
    """
    try:
        if parent_dir is not None:
            parent_dir = Path(parent_dir)
            parent_dir.mkdir(parents=True, exist_ok=True)
        staging_dir = Path(tempfile.mkdtemp(prefix="csvtopdf_", dir=parent_dir)).resolve()
    except OSError as e:
        raise StagingError(f"Could not create staging directory under {parent_dir}: {e}") from e
    _log_debug(f"Created staging directory {staging_dir}")

    try:
        stage_dependencies(dependencies, staging_dir)
        yield staging_dir
    finally:
        if keep:
            _log_info(f"Keeping staging directory: {staging_dir}")
        else:
            shutil.rmtree(staging_dir, ignore_errors=True)
            _log_debug(f"Removed staging directory {staging_dir}")
