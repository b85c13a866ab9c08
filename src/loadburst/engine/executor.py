"""Single GET request execution with timing."""

from __future__ import annotations

import time

import aiohttp

from loadburst._internal.logging import get_logger
from loadburst.metrics.models import Result

logger = get_logger("engine.executor")

# Failures that mean "no usable response": transport, DNS, malformed URL,
# protocol errors and the client's default timeout.
_TRANSPORT_ERRORS = (aiohttp.ClientError, TimeoutError, OSError, ValueError)


async def execute_request(
    session: aiohttp.ClientSession,
    url: str,
    *,
    worker_id: int = 0,
) -> Result:
    """Send one GET request and return its outcome.

    The response body is read in full before returning so the connection
    goes back to the session's pool. Any HTTP status, including 4xx and
    5xx, is a successful result. Transport failures are recorded on the
    result and never raised.

    Args:
        session: Shared client session. Its timeout is left at the client
            default.
        url: Target URL.
        worker_id: Index of the issuing worker, copied onto the result.

    Returns:
        The Result of the attempt.
    """
    start = time.monotonic()
    try:
        async with session.get(url) as resp:
            await resp.read()
            status_code = resp.status
    except _TRANSPORT_ERRORS as exc:
        duration = time.monotonic() - start
        error = f"{type(exc).__name__}: {exc}"
        logger.debug(
            "Worker %d: GET %s failed after %.3fs: %s",
            worker_id,
            url,
            duration,
            error,
            extra={"url": url, "worker_id": worker_id, "duration": duration, "error": error},
        )
        return Result(status_code=0, duration=duration, error=error, worker_id=worker_id)

    return Result(
        status_code=status_code,
        duration=time.monotonic() - start,
        worker_id=worker_id,
    )
