"""
Intake Context

Responsibilities:
- Reads CSV input into ordered rows of string fields
- Loads the HTML template

Owns: Input parsing
Never: Interprets field values or placeholders
"""

from csvtopdf.contexts.intake.csv_reader import load_template, read_rows

__all__ = ["read_rows", "load_template"]
