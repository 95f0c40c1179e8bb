"""Pytest configuration for integration tests."""

from __future__ import annotations

import os

import pytest

LIVE_TESTS_ENV = "NUMBER_TRIVIA_LIVE_TESTS"


def pytest_configure(config: pytest.Config) -> None:
    """Register integration test marker."""
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (requires network access)",
    )


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Skip integration tests unless live tests are enabled."""
    if os.environ.get(LIVE_TESTS_ENV):
        return

    skip_marker = pytest.mark.skip(reason=f"{LIVE_TESTS_ENV} not set - skipping integration tests")
    for item in items:
        item.add_marker(skip_marker)
