"""
Logging utilities.

User text (queries, scraped pages, model answers) reaches log records only
through these helpers so previews stay short and single-line.

Dependencies: none
System role: Logging helper functions
"""

from typing import Any


def safe_log_value(value: Any, max_length: int = 100) -> str:
    """
    Render ``value`` as a short single-line preview.

    Strings are cut to ``max_length`` characters with newlines flattened;
    containers are summarised by size.
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    text = value if isinstance(value, str) else repr(value)
    text = text.replace("\r", " ").replace("\n", " ")
    if len(text) > max_length:
        return f"{text[:max_length]}... ({len(text)} chars)"
    return text
