"""
stylegen CLI package.

- generate.py: code, theme and check commands
- utils.py: version output, logging setup and error reporting
"""

from pathlib import Path

import typer

from stylegen._version import get_version
from stylegen.core.config import load_config
from stylegen.core.errors import StylegenError

from .generate import check_command, code_command, theme_command
from .utils import configure_logging, report_error, version_callback

# =============================================================================
# Main Application
# =============================================================================

app = typer.Typer(
    help="""stylegen: theme code generation from a YAML layout and CSS stylesheets

Commands:
  • code: generate the C++ theme class from a layout and a default style
  • theme: resolve a stylesheet into a .c2theme (or JSON) file
  • check: verify stylesheets against a layout
""",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and environment information",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-V", help="Enable debug logging"),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Config file (defaults to stylegen.toml or pyproject.toml)"
    ),
) -> None:
    """stylegen CLI main callback for global options."""
    configure_logging(verbose)
    try:
        ctx.obj = load_config(config)
    except StylegenError as e:
        report_error(e)
        raise typer.Exit(code=1)


app.command(name="code")(code_command)
app.command(name="theme")(theme_command)
app.command(name="check")(check_command)


def main() -> None:
    app(standalone_mode=True)


__all__ = ["app", "main", "get_version"]
