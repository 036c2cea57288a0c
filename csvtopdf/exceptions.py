"""Custom exceptions for batch PDF generation, carrying row and file references."""

from pathlib import Path
from typing import Optional


class CsvToPdfError(Exception):
    """Base class for all csvtopdf errors."""

    pass


class ParseError(CsvToPdfError):
    """
    Exception raised when the CSV input or the template cannot be read.

    Attributes:
        message: Error description
        source_path: File that failed to parse
        line_number: 1-based line of the offending record (None if not applicable)
    """

    def __init__(
        self,
        message: str,
        source_path: Optional[Path] = None,
        line_number: Optional[int] = None,
    ):
        self.message = message
        self.source_path = source_path
        self.line_number = line_number

        parts = [message]
        if source_path is not None:
            location = f"{source_path}:{line_number}" if line_number else str(source_path)
            parts.append(f"Source: {location}")

        super().__init__("\n".join(parts))


class InjectionError(CsvToPdfError):
    """
    Exception raised when a row cannot be injected into the template.

    Substitution itself cannot fail; this only signals values that are not strings.
    """

    def __init__(self, message: str, field_index: Optional[int] = None):
        self.message = message
        self.field_index = field_index
        if field_index is not None:
            message = f"{message} (field {field_index})"
        super().__init__(message)


class StagingError(CsvToPdfError):
    """Exception raised when the staging area cannot be prepared."""

    pass


class StagingWriteError(StagingError):
    """
    Exception raised when a row's rendered document cannot be written to staging.

    Attributes:
        row_num: Zero-based row index
        path: Staging file that could not be written
        original_error: The underlying OSError
    """

    def __init__(self, row_num: int, path: Path, original_error: Optional[Exception] = None):
        self.row_num = row_num
        self.path = path
        self.original_error = original_error

        message = f"Row {row_num}: could not write staging file {path}"
        if original_error:
            message += f"\nOriginal error: {original_error}"
        super().__init__(message)


class RenderError(CsvToPdfError):
    """Base class for failures of the external rendering engine."""

    def __init__(self, message: str, row_num: int, command: Optional[list] = None):
        self.message = message
        self.row_num = row_num
        self.command = command
        super().__init__(f"Row {row_num}: {message}")


class RenderTimeoutError(RenderError):
    """
    Exception raised when the renderer exceeds its time budget and is killed.

    Attributes:
        timeout: Allotted seconds
    """

    def __init__(self, row_num: int, timeout: float, command: Optional[list] = None):
        self.timeout = timeout
        super().__init__(f"renderer timed out after {timeout:g}s", row_num, command)


class RenderProcessError(RenderError):
    """
    Exception raised when the renderer fails to start, exits non-zero, or produces no output.

    Attributes:
        returncode: Process exit code (None if the process never ran)
    """

    def __init__(
        self,
        message: str,
        row_num: int,
        returncode: Optional[int] = None,
        command: Optional[list] = None,
    ):
        self.returncode = returncode
        super().__init__(message, row_num, command)


class MergeError(CsvToPdfError):
    """
    Exception raised when per-row PDFs cannot be consolidated.

    Attributes:
        message: Error description
        destination: Combined PDF path
        source_path: Input PDF being read when the failure occurred (if known)
        original_error: The underlying exception
    """

    def __init__(
        self,
        message: str,
        destination: Optional[Path] = None,
        source_path: Optional[Path] = None,
        original_error: Optional[Exception] = None,
    ):
        self.message = message
        self.destination = destination
        self.source_path = source_path
        self.original_error = original_error

        parts = [message]
        if source_path is not None:
            parts.append(f"Input: {source_path}")
        if destination is not None:
            parts.append(f"Destination: {destination}")
        if original_error:
            parts.append(f"Original error: {original_error}")

        super().__init__("\n".join(parts))
