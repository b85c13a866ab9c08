"""Custom exception hierarchy for loadburst."""

from __future__ import annotations


class LoadBurstError(Exception):
    """Base exception for all loadburst errors.

    Per-request transport failures are never raised as exceptions; they are
    recorded on the request's ``Result``. Anything that reaches the caller
    as a ``LoadBurstError`` means the run itself could not proceed.
    """


class ConfigError(LoadBurstError):
    """Raised when configuration is invalid or missing.

    Examples:
        - The target URL is empty.
        - The request count or concurrency is not positive.
        - Concurrency exceeds the total request count.
        - An environment variable has an invalid value.
    """


class EngineError(LoadBurstError):
    """Raised when the load driver itself fails during a run."""
