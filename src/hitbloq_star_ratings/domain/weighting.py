"""Age-corrected weighted average accuracy of a leaderboard's top scores.

Usage example:
    from hitbloq_star_ratings.domain.models import Score
    from hitbloq_star_ratings.domain.weighting import weighted_average_accuracy

    result = weighted_average_accuracy(
        [Score(score=3335, time_set=now)],
        notes=10,
        weights=(6.0,),
        now=now,
    )
    assert result.accuracy == 100.0
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..exceptions import NoScoresError, WeightConfigurationError
from .accuracy import accuracy_percent
from .age import estimate_age
from .models import Score

DEFAULT_AGE_DECAY_FACTOR = 40.0
DEFAULT_AGE_CUTOFF_MONTHS = 4.0


@dataclass(frozen=True)
class WeightedAccuracy:
    """Breakdown of a weighted average accuracy calculation."""

    decayed_accuracy: float
    weighted_age_months: float
    accuracy: float


def weighted_average_accuracy(
    scores: Sequence[Score],
    notes: int,
    weights: Sequence[float],
    *,
    now: float,
    age_decay_factor: float = DEFAULT_AGE_DECAY_FACTOR,
    age_cutoff_months: float = DEFAULT_AGE_CUTOFF_MONTHS,
) -> WeightedAccuracy:
    """Combine the best scores into one accuracy, corrected for score age.

    Each score contributes `accuracy * weight * heuristic`; the sum is renormalised by
    `sum(weight * heuristic)` so stale scores count for less. The result is then pulled
    towards 100 in proportion to the (decay-free) weighted age of the scores, capped at
    `age_cutoff_months` and scaled by `1 / age_decay_factor`.

    Args:
        scores: Scores ordered best first. Only the first `len(weights)` are used.
        notes: Note count of the leaderboard the scores belong to.
        weights: One static weight per rank position.
        now: Current time in epoch seconds.
        age_decay_factor: Larger values weaken the age correction.
        age_cutoff_months: Age beyond which the correction stops growing.

    Returns:
        WeightedAccuracy with the corrected accuracy (0-100 nominally, not capped).
    """
    if not scores:
        raise NoScoresError()
    if len(weights) > len(scores):
        raise WeightConfigurationError.more_weights_than_scores(len(weights), len(scores))
    if any(weight < 0 for weight in weights):
        raise WeightConfigurationError.negative_weight()
    total_weight = sum(weights)
    if total_weight <= 0:
        raise WeightConfigurationError.zero_total()

    weighted_acc = 0.0
    normalisation = 0.0
    weighted_age = 0.0
    for score, weight in zip(scores, weights, strict=False):
        age = estimate_age(score.time_set, now)
        weighted_acc += accuracy_percent(score.score, notes) * weight * age.heuristic
        normalisation += weight * age.heuristic
        weighted_age += weight * age.months

    decayed = weighted_acc / normalisation
    weighted_age /= total_weight
    corrected = decayed + (100 - decayed) * (
        min(weighted_age, age_cutoff_months) / age_decay_factor
    )
    return WeightedAccuracy(
        decayed_accuracy=decayed,
        weighted_age_months=weighted_age,
        accuracy=corrected,
    )
