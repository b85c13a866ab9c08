"""Result and report dataclasses for loadburst."""

from __future__ import annotations

from dataclasses import dataclass, field

from loadburst._internal.types import StatusCounts

__all__ = [
    "Report",
    "Result",
]


@dataclass(frozen=True)
class Result:
    """Outcome of a single GET request attempt.

    Attributes:
        status_code: HTTP response status code (0 if the request failed
            before a response was received).
        duration: Elapsed wall-clock seconds until the body was read or
            the request failed.
        error: Failure description if the request failed, None otherwise.
        worker_id: Index of the worker that issued the request.
    """

    status_code: int
    duration: float
    error: str | None = None
    worker_id: int = 0

    @property
    def failed(self) -> bool:
        """Return True if the request failed at the transport level."""
        return self.error is not None


@dataclass
class Report:
    """Aggregated outcome of a load test run.

    Attributes:
        total_time: Wall-clock seconds for the entire batch.
        total_requests: Number of requests that were asked for.
        status_codes: Response count per HTTP status code.
        errors: Number of failed attempts.
        worker_loads: Planned request count per spawned worker, in spawn order.
        worker_completed: Results actually received from each worker, indexed
            like ``worker_loads``.
    """

    total_time: float
    total_requests: int
    status_codes: StatusCounts = field(default_factory=dict)
    errors: int = 0
    worker_loads: list[int] = field(default_factory=list)
    worker_completed: list[int] = field(default_factory=list)

    @property
    def completed(self) -> int:
        """Return the number of attempts accounted for (responses + errors)."""
        return sum(self.status_codes.values()) + self.errors

    @property
    def requests_per_second(self) -> float:
        """Return the completed attempts per second over the whole run."""
        if self.total_time <= 0:
            return 0.0
        return self.completed / self.total_time

    def to_dict(self) -> dict[str, object]:
        """Return a JSON-serialisable view of the report."""
        return {
            "total_time": self.total_time,
            "total_requests": self.total_requests,
            "completed": self.completed,
            "requests_per_second": self.requests_per_second,
            "status_codes": {str(code): count for code, count in sorted(self.status_codes.items())},
            "errors": self.errors,
            "worker_loads": list(self.worker_loads),
            "worker_completed": list(self.worker_completed),
        }
