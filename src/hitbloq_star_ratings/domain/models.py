"""Domain records for ranked pools, leaderboards and scores."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

from .curves import CRCurve


def _empty_ratings() -> Mapping[str, float]:
    return MappingProxyType({})


@dataclass(frozen=True)
class LeaderboardInfo:
    """A ranked map difficulty and its current star rating in each pool."""

    leaderboard_id: str
    name: str
    difficulty: str
    notes: int
    star_ratings: Mapping[str, float] = field(default_factory=_empty_ratings)

    def star_rating_for(self, pool_name: str) -> float | None:
        """Return the currently assigned rating in a pool, if there is one."""
        return self.star_ratings.get(pool_name)


@dataclass(frozen=True)
class Score:
    """A single submitted play."""

    score: int
    time_set: float


@dataclass(frozen=True)
class RankedList:
    """A named pool of leaderboards sharing one CR curve."""

    pool_name: str
    leaderboard_ids: tuple[str, ...]
    cr_curve: CRCurve
