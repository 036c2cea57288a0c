"""
csvtopdf - mail-merge batch PDF generation

Fills an HTML template with each row of a CSV file, renders every filled
document to PDF with an external headless renderer, and optionally merges the
results into one multi-page PDF in row order.

Architecture:
- Intake Context: CSV and template reading
- Templating Context: Positional placeholder injection
- Rendering Context: Staging and per-row renderer invocation
- Generation Context: Concurrent fan-out/fan-in and run results
- Consolidation Context: Ordered PDF merging
"""

__version__ = "0.1.0"
