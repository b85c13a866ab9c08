"""Single-consumer aggregation of request results into a report."""

from __future__ import annotations

from collections import defaultdict
from typing import TYPE_CHECKING

from loadburst._internal.logging import get_logger
from loadburst.metrics.models import Report

if TYPE_CHECKING:
    from collections.abc import Iterable

    from loadburst.metrics.models import Result

logger = get_logger("metrics.aggregator")


class ReportBuilder:
    """Accumulates ``Result`` objects into a ``Report``.

    Only one consumer ever calls ``record``, so the counters are plain
    integers and dicts with no locking.

    Attributes:
        total_requests: Number of requests the run was asked to issue.
        worker_loads: Planned request count per worker.
    """

    def __init__(self, total_requests: int, worker_loads: Iterable[int] = ()) -> None:
        """Initialize an empty builder.

        Args:
            total_requests: Number of requests the run was asked to issue.
            worker_loads: Planned request count per worker, in spawn order.
        """
        self.total_requests = total_requests
        self.worker_loads = list(worker_loads)
        self._status_codes: dict[int, int] = defaultdict(int)
        self._errors = 0
        self._recorded = 0
        self._worker_completed = [0] * len(self.worker_loads)

    @property
    def recorded(self) -> int:
        """Return how many results have been recorded so far."""
        return self._recorded

    def record(self, result: Result) -> None:
        """Count one result as an error or under its status code, and against its worker.

        Args:
            result: The result to count.
        """
        self._recorded += 1
        if result.worker_id >= len(self._worker_completed):
            self._worker_completed.extend([0] * (result.worker_id + 1 - len(self._worker_completed)))
        self._worker_completed[result.worker_id] += 1
        if result.failed:
            self._errors += 1
        else:
            self._status_codes[result.status_code] += 1

    def build(self, total_time: float) -> Report:
        """Finalize the report.

        Args:
            total_time: Wall-clock seconds for the entire batch.

        Returns:
            A Report with a snapshot of the current counters.
        """
        if self._recorded != self.total_requests:
            logger.warning(
                "Recorded %d results but %d requests were planned",
                self._recorded,
                self.total_requests,
            )
        return Report(
            total_time=total_time,
            total_requests=self.total_requests,
            status_codes=dict(self._status_codes),
            errors=self._errors,
            worker_loads=list(self.worker_loads),
            worker_completed=list(self._worker_completed),
        )
