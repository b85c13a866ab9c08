"""Terminal and JSON rendering of a finished load test."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

from rich.panel import Panel
from rich.table import Table

from loadburst.metrics.status_codes import describe_status, group_status_codes

if TYPE_CHECKING:
    from rich.console import Console

    from loadburst._internal.config import RunConfig
    from loadburst.metrics.models import Report


def render_banner(console: Console, config: RunConfig) -> None:
    """Print the startup banner.

    Args:
        console: Console to print to.
        config: The run about to start.
    """
    console.print(
        Panel(
            f"[bold]URL:[/bold]         {config.url}\n"
            f"[bold]Requests:[/bold]    {config.total_requests}\n"
            f"[bold]Concurrency:[/bold] {config.concurrency}",
            title="loadburst",
            border_style="cyan",
        )
    )


def _make_summary_table(report: Report) -> Table:
    table = Table(title="Test Results", show_header=True, header_style="bold green", expand=True)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Total Time", f"{report.total_time:.3f}s")
    table.add_row("Total Requests", str(report.total_requests))
    table.add_row("Requests/sec", f"{report.requests_per_second:.1f}")
    return table


def _make_distribution_table(report: Report) -> Table:
    table = Table(
        title="Status Code Distribution",
        show_header=True,
        header_style="bold cyan",
        expand=True,
    )
    table.add_column("Category", style="bold")
    table.add_column("Code", justify="right")
    table.add_column("Description")
    table.add_column("Requests", justify="right")

    for category, codes in group_status_codes(report.status_codes):
        for index, (code, count) in enumerate(codes):
            table.add_row(
                category if index == 0 else "",
                f"HTTP {code}",
                describe_status(code),
                str(count),
            )
    return table


def render_report(console: Console, report: Report) -> None:
    """Print the summary, the grouped status distribution and any failures.

    The failure line is only printed when at least one request failed.

    Args:
        console: Console to print to.
        report: The finished report.
    """
    console.print(_make_summary_table(report))
    console.print(_make_distribution_table(report))

    if report.errors > 0:
        console.print(f"[red]Failed requests:[/red] {report.errors}")


def report_to_json(report: Report) -> str:
    """Serialise a report to an indented JSON object."""
    return json.dumps(report.to_dict(), indent=2)
