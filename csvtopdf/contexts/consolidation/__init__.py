"""
Consolidation Context

Responsibilities:
- Merges successful per-row PDFs into one PDF in row order

Owns: Combined output file
Never: Decides which rows succeeded
"""

from csvtopdf.contexts.consolidation.merger import consolidate, merge_pdfs

__all__ = ["consolidate", "merge_pdfs"]
