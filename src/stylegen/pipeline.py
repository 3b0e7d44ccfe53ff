"""
File-level orchestration of the resolution stages.

Each entry point reads its inputs, runs the pure core stages and writes the
generated files, returning a GeneratorResult listing what was written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path

from .core.binder import bind
from .core.config import StylegenConfig
from .core.errors import StylegenIOError
from .core.ir.bound import BoundTree
from .core.ir.layout import ResolvedLayout
from .core.ir.stylesheet import ResolvedTheme
from .core.layout_loader import load_layout
from .core.layout_resolver import resolve_schema
from .core.stylesheet_resolver import load_stylesheet
from .emitters.base import GeneratorResult
from .emitters.header import generate_header
from .emitters.impl import generate_impl
from .emitters.theme import generate_c2theme, generate_json

logger = logging.getLogger(__name__)


class ThemeFormat(StrEnum):
    """Resolved theme output formats."""

    C2THEME = "c2theme"
    JSON = "json"


@dataclass
class CheckReport:
    """Outcome of checking one stylesheet against a layout."""

    stylesheet: Path
    leaf_count: int
    unused_paths: list[str] = field(default_factory=list)


def load_resolved_layout(layout_path: Path | str, config: StylegenConfig | None = None) -> ResolvedLayout:
    """Load and resolve a layout file."""
    config = config or StylegenConfig()
    schema = load_layout(layout_path)
    return resolve_schema(schema, root_name=config.code.class_name)


def generate_code(
    layout_path: Path | str,
    default_style_path: Path | str,
    output_dir: Path | str,
    *,
    timestamp: bool = False,
    config: StylegenConfig | None = None,
) -> GeneratorResult:
    """
    Generate the C++ theme class.

    Every layout leaf takes its initial color from the default style; colors
    the layout never uses are reported as warnings.

    Args:
        layout_path: Layout YAML
        default_style_path: Stylesheet providing default colors
        output_dir: Directory for ``<class>.hpp``/``<class>.cpp``
        timestamp: Also write an empty ``<class>.timestamp`` marker
        config: Settings (dialect, namespace, class name)

    Returns:
        GeneratorResult with the written files and binder warnings

    Raises:
        StylegenError: On any load, resolve, bind or write failure
    """
    config = config or StylegenConfig()
    layout = load_resolved_layout(layout_path, config)
    default_theme = load_stylesheet(default_style_path, config.stylesheet)
    bound = bind(layout, default_theme, default_theme=ResolvedTheme())
    return write_code(bound, output_dir, timestamp=timestamp, config=config)


def write_code(
    bound: BoundTree,
    output_dir: Path | str,
    *,
    timestamp: bool = False,
    config: StylegenConfig | None = None,
) -> GeneratorResult:
    """Write header and source for an already bound layout."""
    config = config or StylegenConfig()
    output_dir = Path(output_dir)
    name = config.code.class_name

    result = GeneratorResult(warnings=list(bound.warnings))
    result.add_file(_write(output_dir / f"{name}.hpp", generate_header(bound.layout, config.code)))
    result.add_file(_write(output_dir / f"{name}.cpp", generate_impl(bound, config.code)))
    if timestamp:
        result.add_file(_write(output_dir / f"{name}.timestamp", ""))
    return result


def generate_theme(
    input_path: Path | str,
    output_dir: Path | str,
    *,
    layout_path: Path | str | None = None,
    timestamp: bool = False,
    fmt: ThemeFormat = ThemeFormat.C2THEME,
    config: StylegenConfig | None = None,
) -> GeneratorResult:
    """
    Resolve a stylesheet into a theme file.

    Args:
        input_path: Stylesheet to resolve
        output_dir: Directory for ``<stem>.c2theme`` (or ``.json``)
        layout_path: When given, every layout leaf must be covered and only
            layout paths are written
        timestamp: Also write an empty ``<stem>.timestamp`` marker
        fmt: Output format
        config: Settings (dialect, root struct name)

    Returns:
        GeneratorResult with the written files and warnings

    Raises:
        StylegenError: On any load, resolve, bind or write failure
    """
    config = config or StylegenConfig()
    input_path = Path(input_path)
    output_dir = Path(output_dir)
    theme = load_stylesheet(input_path, config.stylesheet)

    result = GeneratorResult()
    paths = None
    if layout_path is not None:
        bound = bind(load_resolved_layout(layout_path, config), theme)
        paths = [f.path for f in bound.fields]
        for warning in bound.warnings:
            result.add_warning(warning)

    stem = input_path.stem or "Theme"
    fmt = ThemeFormat(fmt)
    if fmt == ThemeFormat.JSON:
        content = generate_json(theme, paths)
    else:
        content = generate_c2theme(theme, paths)
    result.add_file(_write(output_dir / f"{stem}.{fmt.value}", content))
    if timestamp:
        result.add_file(_write(output_dir / f"{stem}.timestamp", ""))
    return result


def check_stylesheets(
    layout_path: Path | str,
    stylesheets: list[Path],
    config: StylegenConfig | None = None,
) -> list[CheckReport]:
    """
    Bind each stylesheet against a layout in theme mode without writing files.

    Raises:
        StylegenError: On the first stylesheet that fails to resolve or bind
    """
    config = config or StylegenConfig()
    layout = load_resolved_layout(layout_path, config)
    reports = []
    for path in stylesheets:
        bound = bind(layout, load_stylesheet(path, config.stylesheet))
        reports.append(
            CheckReport(stylesheet=Path(path), leaf_count=len(bound.fields), unused_paths=bound.unused_paths)
        )
    return reports


def _write(path: Path, content: str) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise StylegenIOError(f"Failed to write {path}: {e}") from e
    logger.info(f"Wrote {path}")
    return path
