"""
CSV and template intake.

Reads the tabular input into an ordered list of rows (each a list of strings)
and loads the HTML template text. Row numbers used throughout the pipeline are
positions in the returned list, i.e. counted after the header row is dropped.
"""

import csv
from pathlib import Path
from typing import List, Union

from csvtopdf.contexts.intake.logger import _log_debug, _log_info
from csvtopdf.exceptions import ParseError


def read_rows(csv_path: Union[str, Path], exclude_first: bool = True) -> List[List[str]]:
    """
    Read every record of a CSV file.

    Every record must have the same number of fields as the first one;
    a ragged file is treated as malformed rather than silently padded.

    Args:
        csv_path: Path to the CSV file
        exclude_first: Drop the first record (commonly column labels)

    Returns:
        Ordered list of records

    Raises:
        ParseError: If the file cannot be read or is malformed
    """
    csv_path = Path(csv_path)

    try:
        with open(csv_path, newline="", encoding="utf-8-sig") as f:
            reader = csv.reader(f, strict=True)
            records = []
            expected_fields = None
            for record in reader:
                # Blank lines carry no record
                if not record:
                    continue
                if expected_fields is None:
                    expected_fields = len(record)
                elif len(record) != expected_fields:
                    raise ParseError(
                        f"Wrong number of fields: expected {expected_fields}, got {len(record)}",
                        source_path=csv_path,
                        line_number=reader.line_num,
                    )
                records.append(record)
    except csv.Error as e:
        raise ParseError(f"Malformed CSV: {e}", source_path=csv_path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Error reading input file: {e}", source_path=csv_path) from e

    if exclude_first and records:
        _log_debug(f"Excluding header row: {records[0]}")
        records = records[1:]

    _log_info(f"Read {len(records)} rows from {csv_path.name}")
    return records


def load_template(template_path: Union[str, Path]) -> str:
    """
    Read the HTML template text.

    Raises:
        ParseError: If the template cannot be read
    """
    template_path = Path(template_path)
    try:
        template = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ParseError(f"Error reading template: {e}", source_path=template_path) from e

    _log_debug(f"Loaded template {template_path} ({len(template)} chars)")
    return template
