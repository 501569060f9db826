"""Boundary-neutral IO contracts for Hitbloq API payloads.

Usage example:
    from hitbloq_star_ratings.io_contracts import RankedListIO

    page: RankedListIO = {
        "leaderboard_id_list": ["abc_Expert_Standard"],
        "cr_curve": {"type": "basic"},
    }
"""

from __future__ import annotations

from typing import TypedDict


class RankedListIO(TypedDict):
    """Ranked list page payload shape."""

    leaderboard_id_list: list[str]
    cr_curve: dict[str, object]


class LeaderboardInfoIO(TypedDict):
    """Leaderboard info payload shape."""

    name: str
    difficulty: str
    notes: int
    star_rating: dict[str, float]


class ScoreIO(TypedDict):
    """Leaderboard score payload shape."""

    score: int
    time_set: float
