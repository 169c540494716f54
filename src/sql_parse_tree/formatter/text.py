"""Text helpers shared by the HTML and Markdown formatters."""

from typing import Any, Optional


def first_line(text: str) -> Optional[str]:
    """Return the first non-empty line of ``text``, or None if every line is empty."""
    return next((line for line in text.splitlines() if line), None)


def type_placeholder(value: Any) -> str:
    """Name shown in place of a property value of an unsupported kind."""
    return type(value).__name__
