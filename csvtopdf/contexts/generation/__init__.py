"""
Generation Context

Responsibilities:
- Fans rows out to concurrent render tasks on a bounded pool
- Collects every row's status and partitions succeeded/failed
- Hands successful PDFs to consolidation in row order

Owns: RunResult aggregation, run-level staging scope
Never: Retries or aborts on a row failure
"""

from csvtopdf.contexts.generation.coordinator import generate_pdfs, run

__all__ = ["run", "generate_pdfs"]
