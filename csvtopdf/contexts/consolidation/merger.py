"""
Merge per-row PDFs into one multi-page PDF.

Pages are appended in exactly the order the inputs are given; callers are
responsible for passing them in row order.
"""

from pathlib import Path
from typing import Optional, Sequence

from PyPDF2 import PdfReader, PdfWriter
from PyPDF2.errors import PyPdfError

from csvtopdf.contexts.consolidation.logger import _log_debug, _log_info, _log_success
from csvtopdf.exceptions import MergeError


def merge_pdfs(pdf_paths: Sequence[Path], destination: Path) -> Path:
    """
    Concatenate every page of each input PDF into destination.

    The destination is written only once all inputs have been read, so a
    failed merge never leaves a truncated combined file behind.

    Args:
        pdf_paths: Input PDFs, in page order
        destination: Combined PDF to create (parent directory is created if needed)

    Returns:
        destination

    Raises:
        MergeError: If there are no inputs, an input cannot be read, or the output cannot be written
    """
    destination = Path(destination)
    if not pdf_paths:
        raise MergeError("No PDFs to merge", destination=destination)

    writer = PdfWriter()
    for pdf_path in pdf_paths:
        try:
            reader = PdfReader(str(pdf_path))
            if reader.is_encrypted:
                reader.decrypt("")
            for page in reader.pages:
                writer.add_page(page)
        except (PyPdfError, OSError, ValueError) as e:
            raise MergeError(
                "Could not read PDF", destination=destination, source_path=Path(pdf_path), original_error=e
            ) from e
        _log_debug(f"Appended {pdf_path}")

    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        with destination.open("wb") as handle:
            writer.write(handle)
    except (PyPdfError, OSError) as e:
        raise MergeError("Could not write merged PDF", destination=destination, original_error=e) from e

    return destination


def consolidate(
    ordered_pdf_paths: Sequence[Path],
    destination: Path,
    enabled: bool = True,
) -> Optional[Path]:
    """
    Produce the combined PDF for a run, if there is anything to combine.

    Args:
        ordered_pdf_paths: Successful per-row PDFs in row order
        destination: Combined PDF path
        enabled: Whether consolidation was requested

    Returns:
        destination, or None when skipped (disabled or no inputs)

    Raises:
        MergeError: If the merge fails
    """
    if not enabled:
        _log_debug("Consolidation disabled")
        return None
    if not ordered_pdf_paths:
        _log_info("No rendered PDFs to consolidate")
        return None

    _log_info(f"Merging {len(ordered_pdf_paths)} PDFs into {destination}")
    merge_pdfs(ordered_pdf_paths, destination)
    _log_success(f"Merged PDF saved to: {destination}")
    return destination
