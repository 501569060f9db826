"""Exports for test fakes."""

from .clock import FakeClock
from .filesystem import InMemoryFileSystem
from .http import FakeHttpClient
from .progress import FakeProgressReporter
from .resilience import FakeRateLimiter
from .source import FakeRatingSource

__all__ = [
    "FakeClock",
    "FakeHttpClient",
    "FakeProgressReporter",
    "FakeRateLimiter",
    "FakeRatingSource",
    "InMemoryFileSystem",
]
