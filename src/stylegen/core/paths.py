"""
Dotted path helpers shared by the stylesheet resolver and the binder.

Layout field names and CSS selector/property names meet at a normalized
key: lowercase, with ``-`` and ``_`` removed. ``text_color``,
``text-color`` and ``textColor`` all normalize to ``textcolor``.
"""

from __future__ import annotations

from collections.abc import Iterable


def normalize_segment(segment: str) -> str:
    """Normalize one path segment."""
    return "".join(ch.lower() for ch in segment if ch not in "-_")


def combine_path(prefix: str, segment: str) -> str:
    """Append a normalized segment to a dotted path."""
    segment = normalize_segment(segment)
    if not prefix:
        return segment
    return f"{prefix}.{segment}"


def join_path(segments: Iterable[str]) -> str:
    """Join segments into a normalized dotted path."""
    path = ""
    for segment in segments:
        path = combine_path(path, segment)
    return path


def to_pascal_case(name: str) -> str:
    """Convert a field name like ``split_input`` or ``tab-bar`` to ``SplitInput``."""
    parts = [p for p in name.replace("-", "_").split("_") if p]
    return "".join(p[0].upper() + p[1:] for p in parts)
