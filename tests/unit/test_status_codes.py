"""Tests for status code categorization and descriptions."""

from __future__ import annotations

import pytest

from loadburst.metrics.status_codes import (
    GENERIC_DESCRIPTION,
    STATUS_DESCRIPTIONS,
    describe_status,
    group_status_codes,
    status_category,
)


@pytest.mark.parametrize(
    ("code", "category"),
    [
        (100, "Informational (1xx)"),
        (201, "Success (2xx)"),
        (302, "Redirection (3xx)"),
        (404, "Client Error (4xx)"),
        (503, "Server Error (5xx)"),
        (599, "Server Error (5xx)"),
        (0, "Unknown"),
        (99, "Unknown"),
        (600, "Unknown"),
    ],
)
def test_status_category(code: int, category: str):
    assert status_category(code) == category


def test_describe_known_status():
    assert describe_status(404).startswith("Not Found")


def test_describe_unknown_status_falls_back():
    assert describe_status(418) == GENERIC_DESCRIPTION


def test_description_table_is_read_only():
    with pytest.raises(TypeError):
        STATUS_DESCRIPTIONS[418] = "I'm a teapot"  # type: ignore[index]


def test_group_sorts_categories_and_codes():
    groups = group_status_codes({503: 1, 200: 5, 404: 2, 201: 3, 400: 4, 700: 1})
    assert groups == [
        ("Client Error (4xx)", [(400, 4), (404, 2)]),
        ("Server Error (5xx)", [(503, 1)]),
        ("Success (2xx)", [(200, 5), (201, 3)]),
        ("Unknown", [(700, 1)]),
    ]


def test_group_empty():
    assert group_status_codes({}) == []
