"""
Text normalization - first pipeline stage
"""

import re
from typing import Optional

from core.errors import EmptyInputError

_WHITESPACE = re.compile(r'\s+')


def normalize_text(text: Optional[str]) -> str:
    """
    Remove every whitespace character and line break.

    PDF text extraction breaks the roster grid at arbitrary points; the token
    grammar only works on the flattened stream.
    """
    if not text:
        raise EmptyInputError("Input text is empty or undefined")

    flattened = _WHITESPACE.sub('', text)
    if not flattened:
        raise EmptyInputError("Input text contains only whitespace")
    return flattened
