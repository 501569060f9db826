"""Star-rating calculation for every leaderboard in a ranked pool.

For each leaderboard the top scores are combined into an age-corrected weighted
accuracy, passed through the pool's CR curve, and turned into the star rating that
would make that accuracy worth `target_rating` CR.

Example:
    >>> from hitbloq_star_ratings.application.star_ratings import run_star_ratings
    >>> from hitbloq_star_ratings.config import RatingConfig
    >>> from hitbloq_star_ratings.infrastructure import HitbloqClient, SystemClock
    >>> run = run_star_ratings(source=source, config=RatingConfig(), clock=SystemClock())
    >>> run.records[0].star_rating
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..config import RatingConfig
from ..domain.curves import CRCurve, apply_curve
from ..domain.models import LeaderboardInfo, Score
from ..domain.weighting import weighted_average_accuracy
from ..exceptions import (
    LeaderboardProcessingError,
    RatingComputationError,
    WeightConfigurationError,
)
from ..observability import pool_logger
from ..protocols import Clock, ProgressReporter, RatingSource
from .pool import fetch_ranked_list

CR_PER_STAR_DIVISOR = 50


@dataclass(frozen=True)
class StarRatingRecord:
    """Computed rating for one leaderboard."""

    leaderboard_id: str
    name: str
    difficulty: str
    weighted_accuracy: float
    curved_value: float
    star_rating: float
    previous_star_rating: float | None


@dataclass(frozen=True)
class SkippedLeaderboard:
    """A leaderboard that produced no rating, and why."""

    leaderboard_id: str
    name: str
    reason: str


def _empty_records() -> list[StarRatingRecord]:
    return []


def _empty_skipped() -> list[SkippedLeaderboard]:
    return []


@dataclass
class StarRatingRun:
    """Results accumulated over a pool, in pool order."""

    pool_name: str
    total: int = 0
    records: list[StarRatingRecord] = field(default_factory=_empty_records)
    skipped: list[SkippedLeaderboard] = field(default_factory=_empty_skipped)


def compute_star_rating(curved_value: float, target_rating: float) -> float:
    """Return the star rating at which `curved_value` is worth `target_rating` CR."""
    if curved_value <= 0:
        raise RatingComputationError(curved_value)
    return target_rating / (CR_PER_STAR_DIVISOR * curved_value)


def rate_leaderboard(
    info: LeaderboardInfo,
    scores: list[Score],
    *,
    pool_name: str,
    curve: CRCurve,
    config: RatingConfig,
    now: float,
) -> StarRatingRecord:
    """Compute the recommended star rating for one leaderboard with at least one score."""
    weights = config.rank_weights[: len(scores)]
    weighted = weighted_average_accuracy(
        scores,
        info.notes,
        weights,
        now=now,
        age_decay_factor=config.age_decay_factor,
        age_cutoff_months=config.age_cutoff_months,
    )
    curved_value = apply_curve(weighted.accuracy, curve)
    star_rating = compute_star_rating(curved_value, config.target_rating)
    return StarRatingRecord(
        leaderboard_id=info.leaderboard_id,
        name=info.name,
        difficulty=info.difficulty,
        weighted_accuracy=weighted.accuracy,
        curved_value=curved_value,
        star_rating=star_rating,
        previous_star_rating=info.star_rating_for(pool_name),
    )


def run_star_ratings(
    *,
    source: RatingSource,
    config: RatingConfig,
    clock: Clock,
    progress: ProgressReporter | None = None,
) -> StarRatingRun:
    """Compute star ratings for every leaderboard in the configured pool.

    Leaderboards without scores, whose weights leave nothing to average, or whose
    curved value is not positive, are skipped and recorded. Any other failure aborts
    the run.

    Args:
        source: Source of pool pages, leaderboard info and scores.
        config: Rating configuration (pool, weights, decay tuning, target rating).
        clock: Clock used to age scores.
        progress: Optional progress reporter.

    Returns:
        StarRatingRun with one record per rated leaderboard.

    Raises:
        PoolFetchError: If the pool listing cannot be loaded.
        LeaderboardProcessingError: If a leaderboard fails to fetch or compute. Carries
            the partial run.
    """
    logger = pool_logger("hitbloq_star_ratings.star_ratings", config.pool_name)
    pool = fetch_ranked_list(source, config.pool_name, config.page_size)
    total = len(pool.leaderboard_ids)
    run = StarRatingRun(pool_name=config.pool_name, total=total)

    if progress is not None:
        progress.start(f"Rating {config.pool_name}", total)
    try:
        for index, leaderboard_id in enumerate(pool.leaderboard_ids, start=1):
            try:
                info = source.get_leaderboard_info(leaderboard_id)
                scores = list(source.get_top_scores(leaderboard_id))
                logger.info("%s/%s %s", index, total, info.name)
                if progress is not None:
                    progress.describe(f"{info.name} ({info.difficulty})")

                if not scores:
                    logger.info("No scores for %s.", info.name)
                    run.skipped.append(SkippedLeaderboard(leaderboard_id, info.name, "no scores"))
                    continue

                try:
                    record = rate_leaderboard(
                        info,
                        scores,
                        pool_name=config.pool_name,
                        curve=pool.cr_curve,
                        config=config,
                        now=clock.now(),
                    )
                except (RatingComputationError, WeightConfigurationError) as exc:
                    logger.warning("Skipping %s: %s", info.name, exc)
                    run.skipped.append(SkippedLeaderboard(leaderboard_id, info.name, str(exc)))
                    continue
            except Exception as exc:
                logger.error("Aborting at leaderboard %s (%s/%s)", leaderboard_id, index, total)
                raise LeaderboardProcessingError(leaderboard_id, run, exc) from exc
            finally:
                if progress is not None:
                    progress.advance(1)

            logger.info("weighted avg: %.2f", record.weighted_accuracy)
            logger.info("star rating: %.2f", record.star_rating)
            run.records.append(record)
    finally:
        if progress is not None:
            progress.finish()

    return run
