"""Run a load test from Python instead of the CLI.

    python examples/library_usage.py http://localhost:8080/health
"""

from __future__ import annotations

import sys

from rich.console import Console

from loadburst import run_load_test
from loadburst.cli.report import render_report


def main() -> None:
    url = sys.argv[1] if len(sys.argv) > 1 else "http://localhost:8080/"
    report = run_load_test(url, total_requests=50, concurrency=5)
    render_report(Console(), report)


if __name__ == "__main__":
    main()
