"""HTTP fakes for tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing_extensions import override

from hitbloq_star_ratings.protocols import HttpClient
from tests.support.errors import FakeResponseMissingError


def _empty_responses() -> dict[str, object]:
    return {}


def _empty_calls() -> list[str]:
    return []


@dataclass
class FakeHttpClient(HttpClient):
    """Fake HTTP client that returns canned responses keyed by exact URL."""

    responses: dict[str, object] = field(default_factory=_empty_responses)
    calls: list[str] = field(default_factory=_empty_calls)

    @override
    def get_json(self, url: str) -> object:
        self.calls.append(url)
        if url in self.responses:
            return self.responses[url]
        raise FakeResponseMissingError(url)
