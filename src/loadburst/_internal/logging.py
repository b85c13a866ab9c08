"""Logging setup for loadburst.

Engine modules attach run context to their records through ``extra=``
(for example ``extra={"url": url, "worker_id": 3}``). The JSON formatter
lifts those keys into the emitted object; the text formatter ignores them.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import IO

# Keys copied from ``extra=`` into JSON log lines, in output order.
CONTEXT_FIELDS = (
    "url",
    "worker_id",
    "requests",
    "concurrency",
    "workers",
    "completed",
    "errors",
    "duration",
    "error",
)

_TEXT_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_TEXT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class JsonFormatter(logging.Formatter):
    """Formats each record as a single JSON object.

    Every line carries ``timestamp``, ``level``, ``logger`` and ``message``,
    plus whichever ``CONTEXT_FIELDS`` the record was given.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, object] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for key in CONTEXT_FIELDS:
            if key in record.__dict__:
                entry[key] = record.__dict__[key]
        if record.exc_info and record.exc_info[1] is not None:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


def _make_formatter(json_format: bool) -> logging.Formatter:
    if json_format:
        return JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT, datefmt=_TEXT_DATEFMT)


def setup_logging(
    level: int = logging.INFO,
    *,
    json_format: bool = False,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure and return the ``loadburst`` logger.

    The first call installs one handler writing to ``stream`` (stderr by
    default, so the report on stdout stays clean). Later calls update the
    level and formatter of that handler instead of adding another.

    Args:
        level: Logging level (e.g., ``logging.DEBUG``). Defaults to INFO.
        json_format: Emit one JSON object per line instead of plain text.
        stream: Destination for the first call's handler.

    Returns:
        The configured ``loadburst`` logger.
    """
    logger = logging.getLogger("loadburst")
    logger.setLevel(level)
    formatter = _make_formatter(json_format)

    if logger.handlers:
        for handler in logger.handlers:
            handler.setLevel(level)
            handler.setFormatter(formatter)
        return logger

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False

    return logger


def get_logger(name: str) -> logging.Logger:
    """Return a child logger, e.g. ``get_logger("engine.driver")``."""
    return logging.getLogger(f"loadburst.{name}")
