"""Accuracy normalisation against the theoretical maximum score.

Usage example:
    from hitbloq_star_ratings.domain.accuracy import accuracy_percent

    accuracy_percent(3335, notes=10)  # 100.0
"""

from __future__ import annotations

from ..exceptions import InvalidNoteCountError

# Maximum raw score for maps with 1..13 notes; the combo multiplier ramps up
# over the first notes, so short maps do not follow the linear formula.
SHORT_MAP_MAX_SCORES: tuple[int, ...] = (
    115,
    345,
    575,
    805,
    1035,
    1495,
    1955,
    2415,
    2875,
    3335,
    3795,
    4255,
    4715,
)

POINTS_PER_NOTE = 920
MULTIPLIER_RAMP_DEFICIT = 7245


def max_score(notes: int) -> int:
    """Return the maximum achievable raw score for a map with `notes` notes."""
    if notes <= 0:
        raise InvalidNoteCountError(notes)
    if notes > len(SHORT_MAP_MAX_SCORES):
        return notes * POINTS_PER_NOTE - MULTIPLIER_RAMP_DEFICIT
    return SHORT_MAP_MAX_SCORES[notes - 1]


def accuracy_percent(score: int | float, notes: int) -> float:
    """Return a raw score as a percentage of the map's maximum score.

    Not clamped: a score above the theoretical maximum yields more than 100.
    """
    return score / max_score(notes) * 100
