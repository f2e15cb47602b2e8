"""Boundary extraction for model responses.

Hosted LLMs often wrap JSON in prose or markdown fences, and truncated
responses never reach their closing brace. These helpers pick out the
substring most likely to be the intended object.
"""

from __future__ import annotations

import re

_CODE_FENCE_RE = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\r?\n?")


def strip_code_fences(text: str) -> str:
    """Remove markdown code-fence markers (with an optional json tag)."""
    return _CODE_FENCE_RE.sub("", text)


def extract_candidate(text: str) -> str:
    """Return the substring between the first '{' and the last '}'.

    If there is a '{' but no later '}', the response was cut off before its
    final brace, so everything from the first '{' is kept for repair. If no
    '{' exists the text is returned unchanged.
    """
    if not text:
        return ""

    text = strip_code_fences(text)
    start = text.find("{")
    if start < 0:
        return text

    end = text.rfind("}")
    if end > start:
        return text[start : end + 1]

    return text[start:].rstrip()
