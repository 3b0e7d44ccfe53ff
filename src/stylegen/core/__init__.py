"""Core stylegen functionality: IR, layout resolution, stylesheet resolution, binding."""

from . import ir
from .binder import bind
from .config import StylegenConfig, load_config
from .css_parser import StylesheetSettings, parse_stylesheet
from .errors import (
    BindError,
    ConfigError,
    ErrorContext,
    LayoutError,
    ParseError,
    StyleError,
    StylegenError,
    StylegenIOError,
)
from .layout_loader import load_layout, parse_layout
from .layout_resolver import resolve_layout, resolve_schema
from .stylesheet_resolver import load_stylesheet, resolve_stylesheet

__all__ = [
    "ir",
    "StylegenError",
    "LayoutError",
    "StyleError",
    "ParseError",
    "BindError",
    "ConfigError",
    "StylegenIOError",
    "ErrorContext",
    "StylegenConfig",
    "StylesheetSettings",
    "load_config",
    "load_layout",
    "parse_layout",
    "resolve_layout",
    "resolve_schema",
    "parse_stylesheet",
    "load_stylesheet",
    "resolve_stylesheet",
    "bind",
]
