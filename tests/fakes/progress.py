"""Progress reporter fakes for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing_extensions import override

from hitbloq_star_ratings.protocols import ProgressReporter


def _empty_starts() -> list[tuple[str, int | None]]:
    return []


def _empty_details() -> list[str]:
    return []


def _empty_advances() -> list[int]:
    return []


@dataclass
class FakeProgressReporter(ProgressReporter):
    """In-memory progress reporter for assertions."""

    starts: list[tuple[str, int | None]] = field(default_factory=_empty_starts)
    details: list[str] = field(default_factory=_empty_details)
    advances: list[int] = field(default_factory=_empty_advances)
    finished: int = 0

    @override
    def start(self, label: str, total: int | None) -> None:
        self.starts.append((label, total))

    @override
    def describe(self, detail: str) -> None:
        self.details.append(detail)

    @override
    def advance(self, count: int) -> None:
        self.advances.append(count)

    @override
    def finish(self) -> None:
        self.finished += 1
