"""
Rendering Context

Responsibilities:
- Stages rendered HTML and template dependencies in a scoped directory
- Runs the external HTML-to-PDF engine per row under a timeout
- Reports each row as RowSuccess or RowFailure

Owns: Renderer invocation, staging directory lifecycle
Never: Modifies template content
"""

from csvtopdf.contexts.rendering.renderer import (
    DEFAULT_RENDER_COMMAND,
    RENDER_TIMEOUT_S,
    RenderCommand,
    render_row,
)
from csvtopdf.contexts.rendering.staging import stage_dependencies, staging_area

__all__ = [
    "render_row",
    "RenderCommand",
    "DEFAULT_RENDER_COMMAND",
    "RENDER_TIMEOUT_S",
    "staging_area",
    "stage_dependencies",
]
