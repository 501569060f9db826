"""Score age estimation."""

from __future__ import annotations

from dataclasses import dataclass

SECONDS_PER_MONTH = 60 * 60 * 24 * 30


@dataclass(frozen=True)
class ScoreAge:
    """Age of a score in months and its decay weight."""

    months: float
    heuristic: float


def estimate_age(time_set: float, now: float) -> ScoreAge:
    """Estimate the age of a score set at `time_set` (epoch seconds) as of `now`.

    Ages from the future (server clock skew) are treated as zero.
    """
    months = max(0.0, (now - time_set) / SECONDS_PER_MONTH)
    return ScoreAge(months=months, heuristic=1 / (1 + months))
