"""
stylegen CLI utilities.

Shared helpers used across CLI modules.
"""

import logging
import platform
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from stylegen._version import get_version
from stylegen.core.config import StylegenConfig, load_config
from stylegen.core.errors import StylegenError

console = Console(soft_wrap=True)
err_console = Console(stderr=True, soft_wrap=True)


def version_callback(value: bool) -> None:
    """Display version and environment information."""
    if value:
        typer.echo(f"stylegen version {get_version()}")
        typer.echo("")
        typer.echo("Environment:")
        typer.echo(f"  Python:        {platform.python_implementation()} {platform.python_version()}")
        typer.echo(f"  Platform:      {platform.system()} {platform.release()}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    logging.getLogger("stylegen").setLevel(logging.DEBUG if verbose else logging.WARNING)


def get_config(ctx: typer.Context) -> StylegenConfig:
    """Config loaded by the main callback, or loaded from the working directory."""
    if isinstance(ctx.obj, StylegenConfig):
        return ctx.obj
    return load_config()


def report_error(e: StylegenError) -> None:
    """Print a stylegen error (with source snippet where available)."""
    if e.context is not None:
        err_console.print(e.context.format(), highlight=False, markup=False)
    err_console.print(f"[red]Error:[/red] {escape(e.message)}", highlight=False)


def print_written(files: list[Path]) -> None:
    for path in files:
        console.print(f"[green]✓[/green] {escape(str(path))}", highlight=False)
