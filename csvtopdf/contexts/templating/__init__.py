"""
Templating Context

Responsibilities:
- Substitutes escaped row values into positional <!--=i--> placeholders

Owns: Placeholder syntax, value escaping
Never: Touches the filesystem or the renderer
"""

from csvtopdf.contexts.templating.injector import (
    find_placeholders,
    inject,
    placeholder_token,
)

__all__ = ["inject", "find_placeholders", "placeholder_token"]
