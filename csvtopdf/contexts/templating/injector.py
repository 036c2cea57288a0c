"""
Positional placeholder injection.

Templates mark field slots with HTML comment sentinels, so an unrendered
template is still a valid HTML document:

    <p>Dear <!--=0-->, your balance is <!--=2-->.</p>

Token <!--=i--> is replaced by the HTML-escaped value of field i of the row.
"""

import re
from typing import Dict, List, Sequence

from markupsafe import escape

from csvtopdf.exceptions import InjectionError

# Digits are matched as text, so <!--=01--> is a distinct (never filled) token
PLACEHOLDER_PATTERN = re.compile(r"<!--=(\d+)-->")


def placeholder_token(index: int) -> str:
    """Token that is replaced by field `index`."""
    return f"<!--={index}-->"


def find_placeholders(template: str) -> List[int]:
    """Sorted, distinct field indices referenced by the template."""
    return sorted({int(m.group(1)) for m in PLACEHOLDER_PATTERN.finditer(template)})


def inject(template: str, fields: Sequence[str]) -> str:
    """
    Substitute row values into the template.

    Replacement is a single literal pass over the template: substituted values
    are never rescanned, so a value that itself looks like a token is inserted
    as text. Tokens whose index has no field (index >= len(fields)) are left
    untouched, which lets one template serve inputs with fewer columns.

    Args:
        template: Template text containing <!--=i--> tokens
        fields: Row values, field i fills token i

    Returns:
        Rendered document text

    Raises:
        InjectionError: If a field value is not a string
    """
    replacements: Dict[str, str] = {}
    for i, value in enumerate(fields):
        if not isinstance(value, str):
            raise InjectionError(f"Field value must be str, got {type(value).__name__}", i)
        replacements[str(i)] = str(escape(value))

    return PLACEHOLDER_PATTERN.sub(
        lambda m: replacements.get(m.group(1), m.group(0)),
        template,
    )
