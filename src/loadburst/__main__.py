"""Allow ``python -m loadburst``."""

from __future__ import annotations

from loadburst.cli.app import app

app()
