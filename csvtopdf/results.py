"""
Per-row and per-run results.

A row ends in exactly one RowStatus: RowSuccess or RowFailure. The run
aggregates them into a RunResult, partitioning row numbers between
`succeeded` and `failed`.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Union

from csvtopdf.exceptions import MergeError


@dataclass(frozen=True)
class RowSuccess:
    """
    Row rendered to a PDF.

    Attributes:
        row_num: Zero-based row index
        output_path: Generated PDF
    """

    row_num: int
    output_path: Path

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class RowFailure:
    """
    Row that could not be rendered.

    Attributes:
        row_num: Zero-based row index
        error: Cause (StagingWriteError, RenderTimeoutError, RenderProcessError, ...)
    """

    row_num: int
    error: Exception

    @property
    def ok(self) -> bool:
        return False


RowStatus = Union[RowSuccess, RowFailure]


@dataclass
class RunResult:
    """
    Outcome of a batch run.

    Attributes:
        row_count: Number of input rows
        succeeded: Row number -> output PDF
        failed: Row number -> error
        merged_path: Combined PDF (None if consolidation was skipped or failed)
        merged_page_count: Pages in the combined PDF (None if not available)
        merge_error: Consolidation failure (does not affect per-row results)
    """

    row_count: int
    succeeded: Dict[int, Path] = field(default_factory=dict)
    failed: Dict[int, Exception] = field(default_factory=dict)
    merged_path: Optional[Path] = None
    merged_page_count: Optional[int] = None
    merge_error: Optional[MergeError] = None

    def record(self, status: RowStatus) -> None:
        """
        Store one row's terminal status.

        Raises:
            ValueError: If the row number is out of range or already reported
        """
        if not 0 <= status.row_num < self.row_count:
            raise ValueError(f"Row {status.row_num} outside 0..{self.row_count - 1}")
        if status.row_num in self.succeeded or status.row_num in self.failed:
            raise ValueError(f"Row {status.row_num} reported twice")

        if isinstance(status, RowSuccess):
            self.succeeded[status.row_num] = status.output_path
        else:
            self.failed[status.row_num] = status.error

    @property
    def success_count(self) -> int:
        return len(self.succeeded)

    @property
    def failure_count(self) -> int:
        return len(self.failed)

    @property
    def is_complete(self) -> bool:
        """Every row has reported."""
        return self.success_count + self.failure_count == self.row_count

    @property
    def all_succeeded(self) -> bool:
        """No row failed and no merge error occurred."""
        return self.failure_count == 0 and self.merge_error is None

    def ordered_outputs(self) -> List[Path]:
        """Successful PDFs in input row order."""
        return [self.succeeded[row_num] for row_num in sorted(self.succeeded)]

    def failed_rows(self) -> List[int]:
        return sorted(self.failed)
