"""Protocol definitions for dependency injection.

These protocols define the abstract interfaces that the rating run depends on,
enabling isolated unit testing with fake implementations.
"""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Protocol, runtime_checkable

from .domain.models import LeaderboardInfo, RankedList, Score


@runtime_checkable
class HttpClient(Protocol):
    """Abstract HTTP client for making JSON API requests."""

    def get_json(self, url: str) -> object:
        """Fetch and decode JSON from URL.

        Args:
            url: The URL to fetch.

        Returns:
            The decoded JSON document.

        Raises:
            requests.RequestException: On network or HTTP errors.
        """
        ...


@runtime_checkable
class RatingSource(Protocol):
    """Abstract source of ranked pools, leaderboard info and scores."""

    def list_pool_page(self, pool_name: str, page: int) -> RankedList:
        """Return one page of a ranked pool's leaderboard ids plus its curve."""
        ...

    def get_leaderboard_info(self, leaderboard_id: str) -> LeaderboardInfo:
        """Return metadata for a leaderboard."""
        ...

    def get_top_scores(self, leaderboard_id: str) -> Sequence[Score]:
        """Return the first page of a leaderboard's scores, best first."""
        ...


@runtime_checkable
class FileSystem(Protocol):
    """Abstract filesystem for reading config and writing run outputs."""

    def read_text(self, path: Path) -> str:
        """Read text file."""
        ...

    def write_text(self, content: str, path: Path) -> None:
        """Write text file."""
        ...

    def exists(self, path: Path) -> bool:
        """Check if path exists."""
        ...

    def mkdir(self, path: Path, parents: bool = True) -> None:
        """Create directory."""
        ...


@runtime_checkable
class Clock(Protocol):
    """Source of the current wall-clock time."""

    def now(self) -> float:
        """Return the current time in seconds since the epoch."""
        ...


@runtime_checkable
class RateLimiter(Protocol):
    """Abstract rate limiter for outbound requests."""

    def wait_if_needed(self) -> None:
        """Block until a request is allowed."""
        ...


@runtime_checkable
class ProgressReporter(Protocol):
    """CLI-owned progress reporting interface."""

    def start(self, label: str, total: int | None) -> None:
        """Start a progress session."""
        ...

    def describe(self, detail: str) -> None:
        """Show what the session is currently working on."""
        ...

    def advance(self, count: int) -> None:
        """Advance progress by count."""
        ...

    def finish(self) -> None:
        """Finish a progress session."""
        ...
