"""Shared type aliases for loadburst."""

from __future__ import annotations

# Status code -> number of responses carrying it.
StatusCounts = dict[int, int]

# (category label, [(status code, count), ...]) in display order.
StatusGroups = list[tuple[str, list[tuple[int, int]]]]
