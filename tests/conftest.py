"""Pytest fixtures for testing.

All tests are network-isolated - socket connections are blocked by default.
"""

from __future__ import annotations

import socket

import pytest

from tests.fakes import FakeClock, FakeRatingSource, InMemoryFileSystem
from tests.support.constants import NOW
from tests.support.errors import NetworkIsolationError

# =============================================================================
# Network Isolation - Block all socket connections in tests
# =============================================================================


def _blocked_socket_connect(self: socket.socket, *args: object, **kwargs: object) -> None:
    """Raise an error if any test tries to make a real network connection."""
    _ = (self, kwargs)
    raise NetworkIsolationError(str(args))


@pytest.fixture(autouse=True)
def block_network_access(monkeypatch: pytest.MonkeyPatch) -> None:
    """Block all network access in tests.

    Tests that need HTTP should use FakeHttpClient, FakeRatingSource or MagicMock.
    """
    monkeypatch.setattr(socket.socket, "connect", _blocked_socket_connect)


@pytest.fixture
def clock() -> FakeClock:
    """Provide a clock frozen at a fixed instant."""
    return FakeClock(NOW)


@pytest.fixture
def in_memory_fs() -> InMemoryFileSystem:
    """Provide an in-memory filesystem for tests."""
    return InMemoryFileSystem()


@pytest.fixture
def rating_source() -> FakeRatingSource:
    """Provide an empty fake rating source for tests."""
    return FakeRatingSource()
