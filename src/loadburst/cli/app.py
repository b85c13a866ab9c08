"""Main Typer application — entry point for the ``loadburst`` CLI."""

from __future__ import annotations

import logging

import typer
from rich.console import Console

from loadburst import __version__
from loadburst._internal.config import RunConfig, load_settings
from loadburst._internal.errors import ConfigError, LoadBurstError
from loadburst._internal.logging import get_logger, setup_logging
from loadburst.cli.report import render_banner, render_report, report_to_json
from loadburst.engine.driver import LoadDriver

console = Console()
err_console = Console(stderr=True)
logger = get_logger("cli")

_FORMATS = ("text", "json")

app = typer.Typer(
    name="loadburst",
    help="Fire a fixed number of GET requests at a URL and summarise the responses.",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"loadburst {__version__}")
        raise typer.Exit


def _fatal(message: str) -> typer.Exit:
    logger.critical(message)
    err_console.print(f"[red]Error:[/red] {message}")
    return typer.Exit(code=1)


@app.command()
def main(
    url: str = typer.Option(
        ...,
        "--url",
        "-u",
        help="URL of the service under test.",
    ),
    requests: int = typer.Option(
        ...,
        "--requests",
        "-n",
        help="Total number of requests to send.",
    ),
    concurrency: int | None = typer.Option(
        None,
        "--concurrency",
        "-c",
        help="Number of concurrent workers (default: LOADBURST_CONCURRENCY or 1).",
    ),
    fmt: str = typer.Option(
        "text",
        "--format",
        "-f",
        help="Output format: text or json.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose (DEBUG) logging.",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """Run a load test and print the status code distribution."""
    try:
        settings = load_settings()
    except ConfigError as exc:
        setup_logging()
        raise _fatal(str(exc)) from exc

    setup_logging(
        logging.DEBUG if verbose else settings.log_level,
        json_format=settings.log_json,
    )

    if fmt not in _FORMATS:
        msg = f"Unknown format: {fmt}. Choose from: {', '.join(_FORMATS)}"
        raise typer.BadParameter(msg)

    config = RunConfig(
        url=url,
        total_requests=requests,
        concurrency=concurrency if concurrency is not None else settings.default_concurrency,
    )

    try:
        driver = LoadDriver(config)
    except ConfigError as exc:
        raise _fatal(str(exc)) from exc

    if fmt == "text":
        render_banner(console, config)

    try:
        report = driver.run()
    except LoadBurstError as exc:
        raise _fatal(f"Load test failed: {exc}") from exc

    if fmt == "json":
        typer.echo(report_to_json(report))
    else:
        render_report(console, report)
