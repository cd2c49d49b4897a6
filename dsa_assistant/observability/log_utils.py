"""
Helpers for putting user-supplied values into log lines.

Dependencies: logging (stdlib)
System role: Keeps questions and payloads short and single-line in logs
"""

from typing import Any


def safe_log_value(value: Any, max_length: int = 500) -> str:
    """
    Render a value for a log line.

    Collections are summarized by size, strings are flattened to one line
    and cut at max_length with the original length noted.

    Args:
        value: Anything, typically a user question
        max_length: Characters kept before truncating

    Returns:
        str: Log-safe representation
    """
    if value is None:
        return "None"
    if isinstance(value, (list, tuple)):
        return f"{type(value).__name__}({len(value)} items)"
    if isinstance(value, dict):
        return f"dict({len(value)} keys)"

    text = value if isinstance(value, str) else repr(value)
    text = text.replace("\r", "\\r").replace("\n", "\\n")
    if len(text) <= max_length:
        return text
    return f"{text[:max_length]}... (truncated, {len(text)} total)"
