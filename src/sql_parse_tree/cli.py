"""Command-line interface for sql-parse-tree.

This module provides a CLI that reads SQL from redirected standard input,
captures its parse tree and renders it as JSON, YAML, HTML or Markdown.
"""

import io
import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.markup import escape
from typing_extensions import Annotated

from sql_parse_tree.config import LogDestination, OutputFormat, Settings
from sql_parse_tree.errors import SqlParseTreeError, SqlSyntaxError
from sql_parse_tree.formatter import render
from sql_parse_tree.parse_tree.builder import capture
from sql_parse_tree.parser import parse_sql

app = typer.Typer(
    name="sql-parse-tree",
    help="Render the parse tree of SQL read from standard input",
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

PACKAGE_LOGGER = "sql_parse_tree"
_installed_handler: Optional[logging.Handler] = None


def get_settings(
    output_format: Optional[OutputFormat] = None,
    dialect: Optional[str] = None,
    log_destination: Optional[LogDestination] = None,
) -> Settings:
    """Get settings from the environment, overridden by CLI options.

    Args:
        output_format: Override the output format from the environment
        dialect: Override the sqlglot dialect from the environment
        log_destination: Override the log destination from the environment

    Returns:
        Settings instance
    """
    settings = Settings()

    if output_format:
        settings.output_format = output_format
    if dialect:
        settings.dialect = dialect
    if log_destination:
        settings.log_destination = log_destination

    return settings


def configure_logging(destination: LogDestination) -> Optional[io.StringIO]:
    """Route the package logger to ``destination``.

    Returns:
        The buffer collecting the log when it is appended to the output
    """
    global _installed_handler

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if _installed_handler is not None:
        package_logger.removeHandler(_installed_handler)
        _installed_handler = None

    if destination is LogDestination.NONE:
        return None

    buffer = None
    if destination is LogDestination.OUTPUT:
        buffer = io.StringIO()
        handler: logging.Handler = logging.StreamHandler(buffer)
        handler.setFormatter(logging.Formatter("%(message)s"))
    elif destination is LogDestination.STDERR:
        handler = RichHandler(console=err_console, show_path=False)
    else:
        handler = RichHandler(console=console, show_path=False)

    package_logger.addHandler(handler)
    package_logger.setLevel(logging.INFO)
    _installed_handler = handler
    return buffer


def _input_is_redirected() -> bool:
    return not sys.stdin.isatty()


@app.command()
def parse(
    output_format: Annotated[
        Optional[OutputFormat],
        typer.Option("--format", "-f", help="Output format, defaults to json"),
    ] = None,
    to_file: Annotated[
        bool, typer.Option("--to-file", "-t", help="Write the output to a file")
    ] = False,
    output_path: Annotated[
        Optional[Path],
        typer.Option(
            "--output-path",
            "-o",
            help="File to write, defaults to the console without --to-file and out.<format> with it",
        ),
    ] = None,
    log_destination: Annotated[
        Optional[LogDestination],
        typer.Option("--log-destination", "-l", help="Where to send the timing log"),
    ] = None,
    dialect: Annotated[
        Optional[str], typer.Option("--dialect", "-d", help="sqlglot dialect to parse with")
    ] = None,
) -> None:
    """Parse SQL from standard input and render its parse tree.

    Example:
        sql-parse-tree --format html --to-file < query.sql

        cat query.sql | sql-parse-tree -f md -d tsql
    """
    settings = get_settings(output_format, dialect, log_destination)
    log_buffer = configure_logging(settings.log_destination)

    if not _input_is_redirected():
        err_console.print("[red]Error:[/red] Input is not redirected")
        raise typer.Exit(1)

    try:
        root = parse_sql(sys.stdin.read(), settings.dialect)
    except SqlSyntaxError as e:
        for error in e.errors:
            err_console.print(error, markup=False, highlight=False)
        raise typer.Exit(2)

    try:
        data = capture(root, dialect=settings.dialect, pretty=settings.pretty_text)
        output = render(data, settings.output_format, settings)
    except SqlParseTreeError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    if to_file or output_path:
        path = output_path or Path(f"out.{settings.output_format.value}")
        if log_buffer is not None:
            output += log_buffer.getvalue()
        path.write_text(output, encoding="utf-8")
        typer.echo(str(path.resolve()))
        return

    if settings.output_format is OutputFormat.MD:
        console.print(Markdown(output))
    else:
        typer.echo(output)

    if log_buffer is not None:
        typer.echo(log_buffer.getvalue())


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
