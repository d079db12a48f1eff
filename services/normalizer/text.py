"""
Text Helpers

Small, pure string utilities shared by the normalizer and the aggregator
cache key builder.

Key Concepts:
- Whitespace normalization: "Data  Engineer" -> "Data Engineer"
- Case folding for comparisons: "Remote" -> "remote"
- Never raise on None or non-string input
"""

import re
from typing import Any, Optional


def normalize_whitespace(text: Optional[str]) -> str:
    """
    Collapse runs of whitespace into single spaces and strip the ends.

    Examples:
        >>> normalize_whitespace("  Data   Engineer  ")
        'Data Engineer'
        >>> normalize_whitespace(None)
        ''
    """
    if not text:
        return ""

    return re.sub(r"\s+", " ", str(text).strip())


def fold(text: Optional[str]) -> str:
    """Whitespace-normalized, lower-cased form used for keyword matching."""
    return normalize_whitespace(text).lower()


def safe_string(value: Any) -> Optional[str]:
    """
    Convert a value to a stripped string, or None when empty/missing.

    Args:
        value: Value to convert

    Returns:
        String value or None if empty/None
    """
    if value is None:
        return None

    if isinstance(value, str):
        stripped = value.strip()
        return stripped if stripped else None

    return str(value)


def parse_numeric(value: Any) -> Optional[float]:
    """Parse a salary-like number, returning None for anything unusable."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        return float(value)

    if isinstance(value, str):
        try:
            return float(value.replace(",", "").replace("$", "").strip())
        except ValueError:
            return None

    return None
