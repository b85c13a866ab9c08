"""Fixed-pool load driver: dispatches workers and aggregates their results."""

from __future__ import annotations

import asyncio
import sys
import time
from typing import TYPE_CHECKING

import aiohttp

from loadburst._internal.config import RunConfig, validate_counts
from loadburst._internal.errors import EngineError
from loadburst._internal.logging import get_logger
from loadburst.engine.executor import execute_request
from loadburst.metrics.aggregator import ReportBuilder

if TYPE_CHECKING:
    from collections.abc import Callable

    from loadburst.metrics.models import Report, Result

logger = get_logger("engine.driver")

# Enqueued once every worker has finished sending.
_DONE = None


def _uvloop_factory() -> Callable[[], asyncio.AbstractEventLoop] | None:
    """Return uvloop's loop constructor if available.

    Returns None on Windows or if uvloop is not installed, which makes
    ``asyncio.Runner`` use the default event loop. The process-wide event
    loop policy is left untouched.
    """
    if sys.platform == "win32":
        return None

    try:
        import uvloop
    except ImportError:
        logger.debug("uvloop not available, using default asyncio event loop")
        return None

    logger.debug("Running on a uvloop event loop")
    return uvloop.new_event_loop


def plan_workers(total_requests: int, concurrency: int) -> list[int]:
    """Split ``total_requests`` into per-worker request counts.

    Each of the ``concurrency`` workers gets ``total_requests // concurrency``
    requests. A non-zero remainder is given to one extra worker, so an
    uneven split runs ``concurrency + 1`` workers.

    Args:
        total_requests: Total number of requests to issue.
        concurrency: Number of equally loaded workers.

    Returns:
        Request count per worker, in spawn order.

    Raises:
        ConfigError: If either value is not positive or concurrency
            exceeds the request count.
    """
    validate_counts(total_requests, concurrency)

    base, remainder = divmod(total_requests, concurrency)
    loads = [base] * concurrency
    if remainder:
        loads.append(remainder)
    return loads


class LoadDriver:
    """Runs one batch of GET requests against a single URL.

    Workers share one client session and one bounded result queue. Each
    worker sends its fixed number of requests sequentially. A coordinating
    task waits for all workers and then enqueues a sentinel, while the
    calling task drains the queue into a ``ReportBuilder``.

    Attributes:
        config: The validated run configuration.
        worker_loads: Planned request count per worker.
    """

    def __init__(self, config: RunConfig) -> None:
        """Initialize the driver.

        Args:
            config: Run parameters. Validated here.

        Raises:
            ConfigError: If the configuration is invalid.
        """
        self.config = config.validate()
        self.worker_loads = plan_workers(config.total_requests, config.concurrency)

    @property
    def worker_count(self) -> int:
        """Return the number of workers this run spawns."""
        return len(self.worker_loads)

    def run(self) -> Report:
        """Execute the batch to completion in a fresh event loop.

        Returns:
            The aggregated Report.

        Raises:
            EngineError: If the driver fails for a reason other than a
                request failure.
        """
        with asyncio.Runner(loop_factory=_uvloop_factory()) as runner:
            return runner.run(self.run_async())

    async def run_async(self) -> Report:
        """Execute the batch on the running event loop.

        Returns:
            The aggregated Report.

        Raises:
            EngineError: If the driver fails for a reason other than a
                request failure.
        """
        logger.info(
            "Starting run: url=%s, requests=%d, concurrency=%d, workers=%d",
            self.config.url,
            self.config.total_requests,
            self.config.concurrency,
            self.worker_count,
            extra={
                "url": self.config.url,
                "requests": self.config.total_requests,
                "concurrency": self.config.concurrency,
                "workers": self.worker_count,
            },
        )

        results: asyncio.Queue[Result | None] = asyncio.Queue(maxsize=self.config.total_requests)
        builder = ReportBuilder(self.config.total_requests, self.worker_loads)
        connector = aiohttp.TCPConnector(limit=self.worker_count)

        try:
            async with aiohttp.ClientSession(connector=connector) as session:
                start = time.monotonic()
                async with asyncio.TaskGroup() as tg:
                    workers = [
                        tg.create_task(
                            self._worker(session, worker_id, count, results),
                            name=f"loadburst-worker-{worker_id}",
                        )
                        for worker_id, count in enumerate(self.worker_loads)
                    ]
                    tg.create_task(self._close_when_done(workers, results))
                    await self._drain(results, builder)
                total_time = time.monotonic() - start
        except Exception as exc:
            logger.exception("Load driver failed", extra={"url": self.config.url})
            raise EngineError("Load driver failed") from exc

        report = builder.build(total_time)
        logger.info(
            "Run completed: duration=%.3fs, completed=%d, errors=%d, rps=%.1f",
            report.total_time,
            report.completed,
            report.errors,
            report.requests_per_second,
            extra={
                "url": self.config.url,
                "duration": report.total_time,
                "completed": report.completed,
                "errors": report.errors,
            },
        )
        return report

    async def _worker(
        self,
        session: aiohttp.ClientSession,
        worker_id: int,
        count: int,
        results: asyncio.Queue[Result | None],
    ) -> None:
        for _ in range(count):
            result = await execute_request(session, self.config.url, worker_id=worker_id)
            await results.put(result)
        logger.debug(
            "Worker %d finished %d requests",
            worker_id,
            count,
            extra={"url": self.config.url, "worker_id": worker_id, "requests": count},
        )

    @staticmethod
    async def _close_when_done(
        workers: list[asyncio.Task[None]],
        results: asyncio.Queue[Result | None],
    ) -> None:
        await asyncio.gather(*workers)
        await results.put(_DONE)

    @staticmethod
    async def _drain(
        results: asyncio.Queue[Result | None],
        builder: ReportBuilder,
    ) -> None:
        while (result := await results.get()) is not _DONE:
            builder.record(result)


def run_load_test(url: str, total_requests: int, concurrency: int = 1) -> Report:
    """Validate the parameters and run a load test to completion.

    Args:
        url: Target URL.
        total_requests: Total number of GET requests.
        concurrency: Number of equally loaded workers.

    Returns:
        The aggregated Report.

    Raises:
        ConfigError: If the parameters are invalid.
        EngineError: If the driver fails.
    """
    config = RunConfig(url=url, total_requests=total_requests, concurrency=concurrency)
    return LoadDriver(config).run()
