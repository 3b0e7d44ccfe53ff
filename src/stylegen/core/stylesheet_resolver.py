"""
Stylesheet resolver.

Turns a parsed Stylesheet into a ResolvedTheme:

1. collect root-scope variables (plain colors only)
2. expand nesting directives into flat (path, declarations) pairs
3. substitute var() references
4. flatten ``path + property`` into normalized dotted keys, last write wins
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path

from .css_parser import StylesheetSettings, parse_stylesheet
from .errors import (
    CyclicNesting,
    InvalidVariableValue,
    StylegenIOError,
    UndefinedVariable,
    make_context,
)
from .ir.stylesheet import ColorValue, Declaration, ResolvedTheme, Rule, Stylesheet, VarRef
from .paths import combine_path, join_path

logger = logging.getLogger(__name__)


def load_stylesheet(
    path: Path | str, settings: StylesheetSettings | None = None
) -> ResolvedTheme:
    """Read and resolve a stylesheet file."""
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise StylegenIOError(f"Failed to read stylesheet {path}: {e}") from e
    return resolve_stylesheet(text, settings, source=path)


def resolve_stylesheet(
    source_text: str | Stylesheet,
    settings: StylesheetSettings | None = None,
    *,
    source: Path | str | None = None,
) -> ResolvedTheme:
    """
    Resolve stylesheet text (or an already parsed Stylesheet).

    Args:
        source_text: CSS source, or a Stylesheet
        settings: Reserved names of the dialect
        source: Source file path for error messages

    Returns:
        ResolvedTheme mapping normalized dotted paths to colors

    Raises:
        StyleError: ParseError, InvalidColorLiteral, InvalidVariableValue,
            UndefinedVariable or CyclicNesting
    """
    text = source_text if isinstance(source_text, str) else None
    if isinstance(source_text, Stylesheet):
        stylesheet = source_text
    else:
        stylesheet = parse_stylesheet(source_text, settings, source)

    variables = collect_variables(stylesheet, source=source, text=text)

    colors: dict[str, ColorValue] = {}
    for path, declarations in expand_rules(stylesheet.rules):
        prefix = join_path(path)
        for declaration in declarations:
            key = combine_path(prefix, declaration.property)
            value = substitute(declaration, variables, source=source, text=text)
            if key in colors:
                logger.debug(f"'{key}' declared more than once, later declaration wins")
                # Re-insert so iteration order follows the winning declaration
                del colors[key]
            colors[key] = value

    logger.debug(f"Resolved {len(colors)} color path(s) and {len(variables)} variable(s)")
    return ResolvedTheme(meta=stylesheet.meta, colors=colors, variables=variables)


def collect_variables(
    stylesheet: Stylesheet,
    *,
    source: Path | str | None = None,
    text: str | None = None,
) -> dict[str, ColorValue]:
    """Build the variable table from root-scope custom properties."""
    variables: dict[str, ColorValue] = {}
    for declaration in stylesheet.variables:
        if not isinstance(declaration.value, ColorValue):
            raise InvalidVariableValue(
                declaration.property,
                make_context(source, declaration.line, declaration.column, text),
            )
        variables[declaration.property] = declaration.value
    return variables


def expand_rules(rules: list[Rule]) -> Iterator[tuple[list[str], list[Declaration]]]:
    """
    Flatten rules and their nesting directives, preserving source order.

    A rule yields its own declarations first, then each directive's
    expansion with the directive path appended to the rule path.

    Raises:
        CyclicNesting: If a directive is reached again from inside itself
    """
    for rule in rules:
        yield from _expand(rule, [], [])


def _expand(
    rule: Rule, prefix: list[str], active: list[int]
) -> Iterator[tuple[list[str], list[Declaration]]]:
    path = [*prefix, *rule.path]
    if id(rule) in active:
        raise CyclicNesting(path)

    active.append(id(rule))
    try:
        if rule.declarations:
            yield path, list(rule.declarations)
        for directive in rule.nested:
            yield from _expand(directive, path, active)
    finally:
        active.pop()


def substitute(
    declaration: Declaration,
    variables: dict[str, ColorValue],
    *,
    source: Path | str | None = None,
    text: str | None = None,
) -> ColorValue:
    """Return the declaration's color, looking up var() references."""
    value = declaration.value
    if isinstance(value, VarRef):
        if value.name not in variables:
            raise UndefinedVariable(
                value.name, make_context(source, value.line, value.column, text)
            )
        return variables[value.name]
    return value
