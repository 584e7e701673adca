"""JSON string escaping for search and replace literals."""
from __future__ import annotations

import json

DEL = "\x7f"


def _encode(text: str) -> str:
    encoded = json.dumps(text, ensure_ascii=True)
    # "/" never occurs inside an escape sequence json.dumps emits
    return encoded[1:-1].replace("/", "\\/")


def encode_fragment(literal: str) -> str:
    """
    Return ``literal`` as it appears inside a JSON-encoded string.

    Matches the CMS encoder: quotes, backslashes and control characters are
    escaped, non-ASCII characters become ``\\uXXXX`` escapes, and forward
    slashes become ``\\/``. DEL (0x7f) is left raw. The surrounding quotes
    are stripped.

    Example:
        >>> encode_fragment("http://example.com")
        'http:\\\\/\\\\/example.com'
    """
    return DEL.join(_encode(part) for part in literal.split(DEL))
