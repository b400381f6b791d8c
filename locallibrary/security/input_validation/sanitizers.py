import html
from typing import Optional

import bleach


def strip_markup(value: str) -> str:
    """
    Remove every HTML tag from a plain-text value.

    Entities produced by bleach are decoded again: the stored value is plain
    text and escaping happens once, when a template renders it.

    Args:
        value: Raw input string

    Returns:
        The text content without markup
    """
    return html.unescape(bleach.clean(value, tags=set(), attributes={}, strip=True))


def sanitize_text(value: Optional[str]) -> str:
    """
    Trim surrounding whitespace and strip markup from a form field.

    Args:
        value: Raw form value (None is treated as empty)

    Returns:
        Cleaned text
    """
    if value is None:
        return ""
    return strip_markup(str(value)).strip()
