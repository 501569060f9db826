"""Application entry points for a full recalculation and for curve previews.

Example:
    >>> from hitbloq_star_ratings.application.recalculate import run_recalculation
    >>> from hitbloq_star_ratings.config import RatingConfig
    >>> from hitbloq_star_ratings.infrastructure import (
    ...     HitbloqClient,
    ...     LocalFileSystem,
    ...     SystemClock,
    ...     build_http_client,
    ... )
    >>> config = RatingConfig.from_env()
    >>> source = HitbloqClient(
    ...     http_client=build_http_client(timeout_seconds=30.0, min_delay_seconds=0.0),
    ... )
    >>> result = run_recalculation(
    ...     config=config, source=source, fs=LocalFileSystem(), clock=SystemClock()
    ... )
    >>> result.outputs["new"]
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from ..config import RatingConfig
from ..domain.curves import CRCurve, apply_curve
from ..exceptions import LeaderboardProcessingError
from ..observability import pool_logger
from ..protocols import Clock, FileSystem, ProgressReporter, RatingSource
from .outputs import write_outputs
from .pool import fetch_pool_page
from .star_ratings import StarRatingRun, compute_star_rating, run_star_ratings


@dataclass(frozen=True)
class RecalculationResult:
    """Results from a full recalculation."""

    run: StarRatingRun
    outputs: dict[str, Path]


@dataclass(frozen=True)
class CurvePreview:
    """Curved value and star rating for a hypothetical accuracy."""

    accuracy: float
    curve: CRCurve
    curved_value: float
    star_rating: float


def run_recalculation(
    *,
    config: RatingConfig,
    source: RatingSource,
    fs: FileSystem,
    clock: Clock,
    progress: ProgressReporter | None = None,
    out_dir: str | Path | None = None,
) -> RecalculationResult:
    """Rate every leaderboard in the pool and write the command scripts.

    If the run aborts part-way, whatever was computed is written (without the
    `!recalculate_cr` finaliser) before the error is re-raised.

    Args:
        config: Rating configuration (required; load once at entry point).
        source: Source of pool and leaderboard data.
        fs: Filesystem for outputs.
        clock: Clock used to age scores.
        progress: Optional progress reporter.
        out_dir: Output directory (defaults to `config.output_dir`).
    """
    logger = pool_logger("hitbloq_star_ratings.recalculate", config.pool_name)
    out_path = Path(out_dir if out_dir is not None else config.output_dir)
    try:
        run = run_star_ratings(source=source, config=config, clock=clock, progress=progress)
    except LeaderboardProcessingError as exc:
        write_outputs(exc.partial, out_path, fs, complete=False)
        logger.warning(
            "Wrote partial results for %s of %s leaderboards to %s",
            len(exc.partial.records),
            exc.partial.total,
            out_path,
        )
        raise

    outputs = write_outputs(run, out_path, fs)
    if run.skipped:
        logger.info("Skipped %s leaderboards", len(run.skipped))
    return RecalculationResult(run=run, outputs=outputs)


def preview_rating(
    *,
    accuracy: float,
    config: RatingConfig,
    source: RatingSource,
) -> CurvePreview:
    """Evaluate the pool's CR curve and star rating for a hypothetical weighted accuracy."""
    curve = fetch_pool_page(source, config.pool_name, 0).cr_curve
    curved_value = apply_curve(accuracy, curve)
    return CurvePreview(
        accuracy=accuracy,
        curve=curve,
        curved_value=curved_value,
        star_rating=compute_star_rating(curved_value, config.target_rating),
    )
