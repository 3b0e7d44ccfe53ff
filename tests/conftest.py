"""Shared pytest fixtures for stylegen tests."""

from pathlib import Path

import pytest

LAYOUT_YAML = """\
definitions:
  Tab:
    fields: [background, text]
layout:
  tabs:
    fields:
      regular: { ref: Tab }
      selected: { ref: Tab }
      divider:
  window:
    fields: [background]
"""

STYLESHEET_CSS = """\
@meta {
    author: "Jane Doe";
    icon-set: light;
}

:root {
    --bg: #202020;
    --fg: #ffffff;
}

.tabs {
    divider: #333;
    @nest regular {
        background: var(--bg);
        text: var(--fg);
    }
    @nest selected {
        background: #1e90ff;
        text: var(--fg);
    }
}

.window {
    background: var(--bg);
}
"""


@pytest.fixture
def layout_yaml() -> str:
    """Return a layout with a shared definition, a nested struct and a leaf list."""
    return LAYOUT_YAML


@pytest.fixture
def stylesheet_css() -> str:
    """Return a stylesheet covering every leaf of ``layout_yaml``."""
    return STYLESHEET_CSS


@pytest.fixture
def layout_file(tmp_path: Path, layout_yaml: str) -> Path:
    path = tmp_path / "layout.yml"
    path.write_text(layout_yaml)
    return path


@pytest.fixture
def stylesheet_file(tmp_path: Path, stylesheet_css: str) -> Path:
    path = tmp_path / "Dark.css"
    path.write_text(stylesheet_css)
    return path


@pytest.fixture
def resolved_layout(layout_yaml: str):
    """Return ``layout_yaml`` loaded and resolved."""
    from stylegen.core.layout_loader import parse_layout
    from stylegen.core.layout_resolver import resolve_schema

    return resolve_schema(parse_layout(layout_yaml))


@pytest.fixture
def resolved_theme(stylesheet_css: str):
    """Return ``stylesheet_css`` resolved."""
    from stylegen.core.stylesheet_resolver import resolve_stylesheet

    return resolve_stylesheet(stylesheet_css)
