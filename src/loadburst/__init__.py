"""loadburst — fire a fixed batch of GET requests and summarise the responses."""

from __future__ import annotations

from loadburst._internal.config import RunConfig
from loadburst._internal.errors import ConfigError, EngineError, LoadBurstError
from loadburst.engine.driver import LoadDriver, plan_workers, run_load_test
from loadburst.engine.executor import execute_request
from loadburst.metrics.models import Report, Result

__version__ = "0.1.0"

__all__ = [
    "ConfigError",
    "EngineError",
    "LoadBurstError",
    "LoadDriver",
    "Report",
    "Result",
    "RunConfig",
    "execute_request",
    "plan_workers",
    "run_load_test",
]
