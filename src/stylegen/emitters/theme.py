"""
Resolved theme serialization.

c2theme layout::

    @meta
    author=someone
    iconset=light
    @colors
    tabs.divider=#ff112233
"""

from __future__ import annotations

import json
from collections.abc import Iterable

from ..core.ir.stylesheet import ColorValue, ResolvedTheme
from .base import CodeWriter


def _select(theme: ResolvedTheme, paths: Iterable[str] | None) -> list[tuple[str, ColorValue]]:
    if paths is None:
        items = list(theme.colors.items())
    else:
        items = [(path, theme.colors[path]) for path in paths]
    return sorted(items)


def generate_c2theme(theme: ResolvedTheme, paths: Iterable[str] | None = None) -> str:
    """
    Serialize a resolved theme as a c2theme file.

    Args:
        theme: Resolved theme
        paths: Restrict output to these paths (e.g. the leaves of a layout)

    Returns:
        File contents
    """
    writer = CodeWriter()
    writer.line("@meta")
    if theme.meta is not None:
        if theme.meta.author is not None:
            writer.line(f"author={theme.meta.author}")
        if theme.meta.icon_set is not None:
            writer.line(f"iconset={theme.meta.icon_set}")
    writer.line("@colors")
    for path, color in _select(theme, paths):
        writer.line(f"{path}={color.to_argb_hex()}")
    return writer.getvalue()


def generate_json(theme: ResolvedTheme, paths: Iterable[str] | None = None) -> str:
    """Serialize a resolved theme as JSON (``#rrggbb[aa]`` values)."""
    data: dict[str, object] = {}
    if theme.meta is not None:
        data["meta"] = theme.meta.model_dump(exclude_none=True)
    data["colors"] = {path: color.to_hex() for path, color in _select(theme, paths)}
    return json.dumps(data, indent=2) + "\n"
