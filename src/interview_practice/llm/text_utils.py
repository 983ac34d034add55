"""
Text processing utilities for the LLM layer.

Cleans model output before it is parsed as JSON.
"""

import re

_LEADING_FENCE = re.compile(r"^\s*```(?:json)?\s*", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"```\s*$")


def strip_code_fences(text: str) -> str:
    """
    Remove markdown code-fence markers around a JSON document.

    Strips an opening marker (```` ```json ```` or bare ```` ``` ````) at the
    very start and a closing marker at the very end, then trims whitespace.
    Fence characters anywhere else (inside JSON strings) are left alone.

    Examples:
        >>> strip_code_fences('```json\\n{"a": 1}\\n```')
        '{"a": 1}'
        >>> strip_code_fences('{"a": "use ``` here"}')
        '{"a": "use ``` here"}'
    """
    cleaned = _LEADING_FENCE.sub("", text, count=1)
    cleaned = _TRAILING_FENCE.sub("", cleaned, count=1)
    return cleaned.strip()
