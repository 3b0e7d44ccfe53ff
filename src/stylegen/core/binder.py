"""
Binder: matches every color leaf of a resolved layout to a color.

Theme mode (no default theme) requires the stylesheet to cover every leaf.
Code mode falls back to the default theme for leaves the stylesheet
doesn't cover; a leaf neither of them covers is still an error.
"""

from __future__ import annotations

import logging

from .errors import IncompleteTheme, MissingDefault
from .ir.bound import BindingSource, BoundField, BoundTree
from .ir.layout import ResolvedLayout
from .ir.stylesheet import ResolvedTheme

logger = logging.getLogger(__name__)


def bind(
    resolved_layout: ResolvedLayout,
    resolved_theme: ResolvedTheme,
    default_theme: ResolvedTheme | None = None,
) -> BoundTree:
    """
    Bind layout leaves to colors.

    Args:
        resolved_layout: Output of the layout resolver
        resolved_theme: Colors to bind
        default_theme: Fallback colors; passing one selects code mode

    Returns:
        BoundTree with one BoundField per leaf, in slot order

    Raises:
        IncompleteTheme: Theme mode, some leaves have no color
        MissingDefault: Code mode, some leaves have no color in either theme
    """
    fields: list[BoundField] = []
    unresolved: list[str] = []
    referenced: set[str] = set()

    for slot, (path, members) in enumerate(resolved_layout.walk_leaves()):
        referenced.add(path)
        value = resolved_theme.get(path)
        source = BindingSource.THEME
        if value is None and default_theme is not None:
            value = default_theme.get(path)
            source = BindingSource.DEFAULT
        if value is None:
            unresolved.append(path)
            continue
        fields.append(
            BoundField(path=path, members=members, slot=slot, value=value, source=source)
        )

    if unresolved:
        if default_theme is None:
            raise IncompleteTheme(unresolved)
        raise MissingDefault(unresolved)

    unused = [path for path in resolved_theme.colors if path not in referenced]
    warnings = [f"'{path}' is defined in the stylesheet but not used by the layout" for path in unused]
    for warning in warnings:
        logger.warning(warning)

    logger.debug(
        f"Bound {len(fields)} field(s), "
        f"{sum(1 for f in fields if f.source == BindingSource.DEFAULT)} from the default theme"
    )
    return BoundTree(
        layout=resolved_layout,
        fields=fields,
        unused_paths=unused,
        warnings=warnings,
    )
