"""Run configuration and environment settings for loadburst."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from loadburst._internal.errors import ConfigError

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def validate_counts(total_requests: int, concurrency: int) -> None:
    """Check a request count and concurrency pair.

    Args:
        total_requests: Total number of requests to issue.
        concurrency: Requested number of concurrent workers.

    Raises:
        ConfigError: If either value is not positive or concurrency
            exceeds the request count.
    """
    if total_requests <= 0:
        msg = f"Number of requests must be greater than 0, got: {total_requests}"
        raise ConfigError(msg)
    if concurrency <= 0:
        msg = f"Concurrency must be greater than 0, got: {concurrency}"
        raise ConfigError(msg)
    if concurrency > total_requests:
        msg = (
            f"Concurrency ({concurrency}) cannot exceed the total "
            f"number of requests ({total_requests})"
        )
        raise ConfigError(msg)


@dataclass(frozen=True)
class RunConfig:
    """Parameters of a single load test run.

    Attributes:
        url: Target URL every request is sent to.
        total_requests: Total number of GET requests to issue.
        concurrency: Requested number of concurrent workers. When
            ``total_requests`` does not divide evenly, one extra worker
            runs the remainder.
    """

    url: str
    total_requests: int
    concurrency: int = 1

    def validate(self) -> RunConfig:
        """Check the run parameters.

        Returns:
            This config, so calls can be chained.

        Raises:
            ConfigError: If the URL is empty, a count is not positive, or
                concurrency exceeds the request count.
        """
        if not self.url:
            msg = "URL is required"
            raise ConfigError(msg)
        validate_counts(self.total_requests, self.concurrency)
        return self


@dataclass(frozen=True)
class Settings:
    """Ambient settings read from the environment.

    Attributes:
        default_concurrency: Concurrency used when ``--concurrency`` is omitted.
        log_level: Numeric logging level.
        log_json: Emit structured JSON logs instead of plain text.
    """

    default_concurrency: int = 1
    log_level: int = logging.INFO
    log_json: bool = False


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    msg = f"{name} must be a boolean (true/false), got: {value!r}"
    raise ConfigError(msg)


def load_settings() -> Settings:
    """Load settings from environment variables with defaults.

    Environment variables:
        LOADBURST_CONCURRENCY: Default concurrency (default: 1).
        LOADBURST_LOG_LEVEL: Logging level name (default: INFO).
        LOADBURST_LOG_JSON: Emit JSON logs (default: false).

    Returns:
        Populated Settings instance.

    Raises:
        ConfigError: If an environment variable has an invalid value.
    """
    concurrency_str = os.environ.get("LOADBURST_CONCURRENCY", "1")
    level_name = os.environ.get("LOADBURST_LOG_LEVEL", "INFO").strip().upper()

    try:
        concurrency = int(concurrency_str)
    except ValueError:
        msg = f"LOADBURST_CONCURRENCY must be an integer, got: {concurrency_str!r}"
        raise ConfigError(msg) from None

    if concurrency < 1:
        msg = f"LOADBURST_CONCURRENCY must be >= 1, got: {concurrency}"
        raise ConfigError(msg)

    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        msg = f"LOADBURST_LOG_LEVEL must be a logging level name, got: {level_name!r}"
        raise ConfigError(msg)

    return Settings(
        default_concurrency=concurrency,
        log_level=level,
        log_json=_parse_bool("LOADBURST_LOG_JSON", os.environ.get("LOADBURST_LOG_JSON", "")),
    )
