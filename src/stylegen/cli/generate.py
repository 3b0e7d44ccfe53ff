"""
Generation commands: code, theme and check.
"""

from pathlib import Path

import typer
from rich.markup import escape

from stylegen.core.errors import StylegenError
from stylegen.pipeline import ThemeFormat, check_stylesheets, generate_code, generate_theme

from .utils import console, get_config, print_written, report_error


def code_command(
    ctx: typer.Context,
    default_style: Path = typer.Argument(..., help="Stylesheet providing the default colors"),
    layout: Path | None = typer.Option(
        None, "--layout", "-l", help="Layout YAML (defaults to the configured layout)"
    ),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    timestamp: bool = typer.Option(
        False, "--timestamp", "-t", help="Also write a .timestamp marker file"
    ),
) -> None:
    """
    Generate the C++ theme class (header and source) from a layout and a default style.
    """
    config = get_config(ctx)
    try:
        result = generate_code(
            layout or Path(config.layout),
            default_style,
            output_dir or Path(config.output_dir),
            timestamp=timestamp or config.timestamp,
            config=config,
        )
    except StylegenError as e:
        report_error(e)
        raise typer.Exit(code=1)

    print_written(result.files_created)


def theme_command(
    ctx: typer.Context,
    input: Path = typer.Argument(..., help="Stylesheet to resolve"),
    output_dir: Path | None = typer.Option(None, "--output-dir", "-o", help="Output directory"),
    timestamp: bool = typer.Option(
        False, "--timestamp", "-t", help="Also write a .timestamp marker file"
    ),
    layout: Path | None = typer.Option(
        None, "--layout", "-l", help="Validate against this layout and only write its paths"
    ),
    format: ThemeFormat = typer.Option(ThemeFormat.C2THEME, "--format", "-f", help="Output format"),
) -> None:
    """
    Resolve a stylesheet into a theme file.
    """
    config = get_config(ctx)
    try:
        result = generate_theme(
            input,
            output_dir or Path(config.output_dir),
            layout_path=layout,
            timestamp=timestamp or config.timestamp,
            fmt=format,
            config=config,
        )
    except StylegenError as e:
        report_error(e)
        raise typer.Exit(code=1)

    print_written(result.files_created)


def check_command(
    ctx: typer.Context,
    stylesheets: list[Path] = typer.Argument(..., help="Stylesheets to check"),
    layout: Path | None = typer.Option(
        None, "--layout", "-l", help="Layout YAML (defaults to the configured layout)"
    ),
) -> None:
    """
    Check that stylesheets cover every layout field, without writing files.
    """
    config = get_config(ctx)
    try:
        reports = check_stylesheets(layout or Path(config.layout), stylesheets, config)
    except StylegenError as e:
        report_error(e)
        raise typer.Exit(code=1)

    for report in reports:
        console.print(
            f"[green]OK[/green] {report.stylesheet}: {report.leaf_count} field(s) bound",
            highlight=False,
        )
        for path in report.unused_paths:
            console.print(f"  unused: {escape(path)}", highlight=False)
