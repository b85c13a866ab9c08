"""HTTP status code categories and descriptions."""

from __future__ import annotations

from types import MappingProxyType
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Mapping

    from loadburst._internal.types import StatusGroups

UNKNOWN_CATEGORY = "Unknown"
GENERIC_DESCRIPTION = "HTTP Status"

STATUS_DESCRIPTIONS: Mapping[int, str] = MappingProxyType(
    {
        200: "OK - Request succeeded",
        201: "Created - Resource created successfully",
        204: "No Content - Request processed, nothing to return",
        301: "Moved Permanently - Resource moved permanently",
        302: "Found - Temporary redirect",
        400: "Bad Request - Malformed request",
        401: "Unauthorized - Authentication required",
        403: "Forbidden - Access denied",
        404: "Not Found - Resource not found",
        408: "Request Timeout - Request took too long",
        429: "Too Many Requests - Rate limit exceeded",
        500: "Internal Server Error - Server failed",
        502: "Bad Gateway - Invalid upstream response",
        503: "Service Unavailable - Server unavailable",
        504: "Gateway Timeout - Upstream timed out",
    }
)

_CATEGORIES: Mapping[int, str] = MappingProxyType(
    {
        1: "Informational (1xx)",
        2: "Success (2xx)",
        3: "Redirection (3xx)",
        4: "Client Error (4xx)",
        5: "Server Error (5xx)",
    }
)


def status_category(code: int) -> str:
    """Return the category label for a status code.

    Args:
        code: HTTP status code.

    Returns:
        One of the five ``Nxx`` labels, or ``"Unknown"`` outside 100-599.
    """
    if not 100 <= code < 600:
        return UNKNOWN_CATEGORY
    return _CATEGORIES[code // 100]


def describe_status(code: int) -> str:
    """Return a human-readable description, or a generic label if unlisted."""
    return STATUS_DESCRIPTIONS.get(code, GENERIC_DESCRIPTION)


def group_status_codes(status_codes: Mapping[int, int]) -> StatusGroups:
    """Group status counts by category for display.

    Args:
        status_codes: Response count per status code.

    Returns:
        ``(category, [(code, count), ...])`` pairs with categories sorted
        alphabetically and codes ascending within each category.
    """
    grouped: dict[str, list[tuple[int, int]]] = {}
    for code, count in status_codes.items():
        grouped.setdefault(status_category(code), []).append((code, count))
    return [(category, sorted(grouped[category])) for category in sorted(grouped)]
