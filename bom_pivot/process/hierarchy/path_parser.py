# Path: bom_pivot/process/hierarchy/path_parser.py
"""
Path Parser - splits delimited dimension paths into segments.

Dimension tables store the position of a member as one string, e.g.
'EMEA//DE//DE01'. Parsing never raises on bad data: anything that is
not a usable string yields an empty list and the caller skips the record.
"""

from typing import Any


def parse_path(raw: Any, separator: str) -> list[str]:
    """
    Split a delimited path into trimmed, non-empty segments.

    Args:
        raw: Path value from a dimension record (usually a string)
        separator: Non-empty segment separator (e.g. '//')

    Returns:
        Ordered segments; empty when the value is missing or malformed

    Raises:
        ValueError: If separator is empty

    Example:
        >>> parse_path(' NA // US //CA', '//')
        ['NA', 'US', 'CA']
        >>> parse_path('////', '//')
        []
    """
    if not separator:
        raise ValueError("Path separator must be a non-empty string")

    if not isinstance(raw, str):
        return []

    return [segment.strip() for segment in raw.split(separator) if segment.strip()]


def has_separator(raw: Any, separator: str) -> bool:
    """Check whether a path value contains the separator at all."""
    return isinstance(raw, str) and bool(separator) and separator in raw


__all__ = [
    'parse_path',
    'has_separator',
]
