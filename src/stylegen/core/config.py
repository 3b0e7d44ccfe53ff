"""
stylegen configuration.

Settings come from (first match wins):

1. an explicit ``--config`` path
2. ``stylegen.toml`` in the working directory
3. a ``[tool.stylegen]`` table in ``pyproject.toml``

    # stylegen.toml
    layout = "theme/layout.yml"
    output_dir = "src/generated"
    timestamp = true

    [stylesheet]
    root_selector = ":root"
    nest_keyword = "nest"
    meta_keyword = "meta"

    [code]
    namespace = "app::theme"
    class_name = "GeneratedTheme"
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from .css_parser import StylesheetSettings
from .errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = "stylegen.toml"


@dataclass
class CodeConfig:
    """Generated C++ settings."""

    namespace: str = "chatterino::theme"
    class_name: str = "GeneratedTheme"
    include_qt_headers: bool = True


@dataclass
class StylegenConfig:
    """Top-level stylegen configuration."""

    layout: str = "layout.yml"
    output_dir: str = "."
    timestamp: bool = False
    stylesheet: StylesheetSettings = field(default_factory=StylesheetSettings)
    code: CodeConfig = field(default_factory=CodeConfig)
    source: Path | None = None  # File the config was read from


def find_config(cwd: Path) -> tuple[Path, dict[str, Any]] | None:
    """Locate configuration data in *cwd*."""
    candidate = cwd / CONFIG_FILE
    if candidate.exists():
        return candidate, _read_toml(candidate)

    pyproject = cwd / "pyproject.toml"
    if pyproject.exists():
        tool = _read_toml(pyproject).get("tool", {})
        if "stylegen" in tool:
            return pyproject, tool["stylegen"]
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> StylegenConfig:
    """
    Load configuration.

    Args:
        path: Explicit config file (``stylegen.toml`` layout)
        cwd: Directory to search when no path is given

    Returns:
        StylegenConfig, with defaults when nothing is found

    Raises:
        ConfigError: If the file is missing, isn't valid TOML or has bad values
    """
    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        return parse_config(_read_toml(path), source=path)

    found = find_config(cwd or Path.cwd())
    if found is None:
        logger.debug("No stylegen configuration found, using defaults")
        return StylegenConfig()
    source, data = found
    logger.debug(f"Using configuration from {source}")
    return parse_config(data, source=source)


def parse_config(data: dict[str, Any], source: Path | None = None) -> StylegenConfig:
    """Build a StylegenConfig from parsed TOML data."""
    stylesheet_data = _table(data, "stylesheet")
    code_data = _table(data, "code")

    stylesheet = StylesheetSettings(
        root_selector=_string(stylesheet_data, "root_selector", ":root"),
        nest_keyword=_string(stylesheet_data, "nest_keyword", "nest"),
        meta_keyword=_string(stylesheet_data, "meta_keyword", "meta"),
    )
    code = CodeConfig(
        namespace=_string(code_data, "namespace", "chatterino::theme"),
        class_name=_string(code_data, "class_name", "GeneratedTheme"),
        include_qt_headers=_bool(code_data, "include_qt_headers", True),
    )

    if not code.class_name.isidentifier():
        raise ConfigError(f"code.class_name must be a C++ identifier, got '{code.class_name}'")

    return StylegenConfig(
        layout=_string(data, "layout", "layout.yml"),
        output_dir=_string(data, "output_dir", "."),
        timestamp=_bool(data, "timestamp", False),
        stylesheet=stylesheet,
        code=code,
        source=source,
    )


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e


def _table(data: dict[str, Any], key: str) -> dict[str, Any]:
    value = data.get(key, {})
    if not isinstance(value, dict):
        raise ConfigError(f"'{key}' must be a table")
    return value


def _string(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key, default)
    if not isinstance(value, str) or not value:
        raise ConfigError(f"'{key}' must be a non-empty string")
    return value


def _bool(data: dict[str, Any], key: str, default: bool) -> bool:
    value = data.get(key, default)
    if not isinstance(value, bool):
        raise ConfigError(f"'{key}' must be true or false")
    return value
