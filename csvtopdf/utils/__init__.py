"""
Shared utilities for csvtopdf.

Common functionality used across contexts:
- Logger setup with provenance
- Run settings (defaults, YAML, overrides)
- PDF inspection
- Timestamps
"""

from csvtopdf.utils.config import load_settings
from csvtopdf.utils.pdf_processing import page_count
from csvtopdf.utils.timestamp import now

__all__ = ["load_settings", "page_count", "now"]
