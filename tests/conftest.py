"""Shared test fixtures for movable.

Fixtures defined here are available to all tests in the suite without
needing an explicit import. Add project-wide fixtures here; keep
domain-specific fixtures close to the tests that use them.
"""
from __future__ import annotations

from collections.abc import Iterator

import pytest

from movable import MovableConfig, configure, tracker


@pytest.fixture()
def package_name() -> str:
    """Return the importable package name for assertions."""
    return "movable"


@pytest.fixture()
def expected_version() -> str:
    """Return the current expected version string.

    Update this fixture when cutting a release so that the version
    test immediately catches stale ``__version__`` values.
    """
    return "0.1.0"


@pytest.fixture()
def leak_tracking() -> Iterator[None]:
    """Enable leak tracking for one test and restore the previous config."""
    previous = configure(MovableConfig(track_leaks=True, warn_on_leak=True))
    tracker.reset()
    try:
        yield
    finally:
        configure(previous)
        tracker.reset()


class Closeable:
    """Minimal resource that records how often it was closed."""

    def __init__(self) -> None:
        self.close_calls = 0

    @property
    def closed(self) -> bool:
        return self.close_calls > 0

    def close(self) -> None:
        self.close_calls += 1


@pytest.fixture()
def closeable() -> Closeable:
    return Closeable()
