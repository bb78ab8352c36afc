"""Pull plain text out of an OpenAI Responses API payload.

The payload shape has changed across API versions, so nothing here binds to
a fixed schema. Every function is pure and returns None instead of raising.
"""

from typing import Any, Optional

# Checked in order on each content item; the first non-blank string wins.
CONTENT_TEXT_FIELDS = ("text", "value", "content")

FRAGMENT_SEPARATOR = "\n\n"


def _clean(value: Any) -> Optional[str]:
    """Return the trimmed string, or None if value is not a non-blank string."""
    if isinstance(value, str):
        stripped = value.strip()
        if stripped:
            return stripped
    return None


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _content_item_text(item: Any) -> Optional[str]:
    if not isinstance(item, dict):
        return None
    for field in CONTENT_TEXT_FIELDS:
        text = _clean(item.get(field))
        if text is not None:
            return text
    return None


def extract_response_text(data: Any) -> Optional[str]:
    """
    Recover the best available answer from a completion payload.

    Prefers the top-level ``output_text`` convenience field, then falls back
    to walking ``output[*].content[*]``. Returns None when nothing usable is
    found, for any input including None, lists and scalars.
    """
    if not isinstance(data, dict):
        return None

    output_text = _clean(data.get("output_text"))
    if output_text is not None:
        return output_text

    parts = []
    for output in _as_list(data.get("output")):
        if not isinstance(output, dict):
            continue
        for item in _as_list(output.get("content")):
            text = _content_item_text(item)
            if text is not None:
                parts.append(text)

    joined = FRAGMENT_SEPARATOR.join(parts).strip()
    return joined or None
