"""Tests for per-leaderboard star-rating calculation."""

from types import MappingProxyType

import pytest
import requests

from hitbloq_star_ratings.application.star_ratings import (
    compute_star_rating,
    rate_leaderboard,
    run_star_ratings,
)
from hitbloq_star_ratings.config import RatingConfig
from hitbloq_star_ratings.domain.curves import BasicCurve, LinearCurve
from hitbloq_star_ratings.domain.models import LeaderboardInfo, Score
from hitbloq_star_ratings.exceptions import (
    LeaderboardProcessingError,
    PoolFetchError,
    RatingComputationError,
)
from tests.fakes import FakeClock, FakeProgressReporter, FakeRatingSource
from tests.support.constants import NOW


def _info(
    leaderboard_id: str, *, notes: int = 10, previous: float | None = 10.0
) -> LeaderboardInfo:
    ratings = {} if previous is None else {"poodles": previous}
    return LeaderboardInfo(
        leaderboard_id=leaderboard_id,
        name=f"Song {leaderboard_id}",
        difficulty="Expert",
        notes=notes,
        star_ratings=MappingProxyType(ratings),
    )


class TestComputeStarRating:
    """Tests for curved value → star rating."""

    def test_full_curve_value_gives_target_over_fifty(self) -> None:
        assert compute_star_rating(1.0, 800.0) == 16.0

    def test_half_curve_value_doubles_rating(self) -> None:
        assert compute_star_rating(0.5, 800.0) == 32.0

    @pytest.mark.parametrize("curved", [0.0, -0.1])
    def test_non_positive_curved_value_raises(self, curved: float) -> None:
        with pytest.raises(RatingComputationError):
            compute_star_rating(curved, 800.0)


class TestRateLeaderboard:
    """Tests for rating a single leaderboard."""

    def test_perfect_fresh_score_gives_sixteen_stars(self) -> None:
        record = rate_leaderboard(
            _info("lb1", previous=12.345),
            [Score(score=3335, time_set=NOW)],
            pool_name="poodles",
            curve=BasicCurve(),
            config=RatingConfig(),
            now=NOW,
        )

        assert record.weighted_accuracy == 100.0
        assert record.curved_value == 1.0
        assert record.star_rating == 16.0
        assert f"{record.star_rating:.2f}" == "16.00"
        assert record.previous_star_rating == 12.345

    def test_weights_are_truncated_to_score_count(self) -> None:
        record = rate_leaderboard(
            _info("lb1"),
            [Score(score=3335, time_set=NOW), Score(score=2668, time_set=NOW)],
            pool_name="poodles",
            curve=LinearCurve(),
            config=RatingConfig(rank_weights=(3.0, 1.0, 1.0)),
            now=NOW,
        )

        assert record.weighted_accuracy == pytest.approx(95.0)
        assert record.curved_value == pytest.approx(0.875)
        assert record.star_rating == pytest.approx(800 / (50 * 0.875))

    def test_missing_pool_rating_is_none(self) -> None:
        record = rate_leaderboard(
            _info("lb1", previous=None),
            [Score(score=3335, time_set=NOW)],
            pool_name="poodles",
            curve=BasicCurve(),
            config=RatingConfig(),
            now=NOW,
        )

        assert record.previous_star_rating is None


class TestRunStarRatings:
    """Tests for rating a whole pool."""

    def test_rates_every_leaderboard_in_order(self, clock: FakeClock) -> None:
        source = FakeRatingSource(pages=[("lb1", "lb2")])
        source.add_leaderboard(_info("lb1"), [Score(score=3335, time_set=NOW)])
        source.add_leaderboard(_info("lb2"), [Score(score=2668, time_set=NOW)])

        run = run_star_ratings(source=source, config=RatingConfig(), clock=clock)

        assert run.pool_name == "poodles"
        assert run.total == 2
        assert [record.leaderboard_id for record in run.records] == ["lb1", "lb2"]
        assert run.records[0].star_rating == 16.0
        assert run.records[1].star_rating > run.records[0].star_rating
        assert run.skipped == []

    def test_leaderboard_without_scores_is_skipped(self, clock: FakeClock) -> None:
        source = FakeRatingSource(pages=[("lb1", "lb2")])
        source.add_leaderboard(_info("lb1"), [])
        source.add_leaderboard(_info("lb2"), [Score(score=3335, time_set=NOW)])

        run = run_star_ratings(source=source, config=RatingConfig(), clock=clock)

        assert [record.leaderboard_id for record in run.records] == ["lb2"]
        assert len(run.skipped) == 1
        assert run.skipped[0].leaderboard_id == "lb1"
        assert run.skipped[0].reason == "no scores"

    def test_zero_curved_value_is_skipped(self, clock: FakeClock) -> None:
        source = FakeRatingSource(pages=[("lb1",)], curve=LinearCurve())
        source.add_leaderboard(_info("lb1"), [Score(score=0, time_set=NOW)])

        run = run_star_ratings(source=source, config=RatingConfig(), clock=clock)

        assert run.records == []
        assert run.skipped[0].leaderboard_id == "lb1"

    def test_fetch_failure_aborts_with_partial_run(self, clock: FakeClock) -> None:
        source = FakeRatingSource(pages=[("lb1", "lb2", "lb3")])
        source.add_leaderboard(_info("lb1"), [Score(score=3335, time_set=NOW)])
        source.failures["lb2"] = requests.ConnectionError("boom")

        with pytest.raises(LeaderboardProcessingError) as exc_info:
            run_star_ratings(source=source, config=RatingConfig(), clock=clock)

        error = exc_info.value
        assert error.leaderboard_id == "lb2"
        assert [record.leaderboard_id for record in error.partial.records] == ["lb1"]
        assert isinstance(error.__cause__, requests.ConnectionError)
        assert ("get_leaderboard_info", "lb3") not in source.calls

    def test_reports_progress(self, clock: FakeClock) -> None:
        source = FakeRatingSource(pages=[("lb1", "lb2")])
        source.add_leaderboard(_info("lb1"), [])
        source.add_leaderboard(_info("lb2"), [Score(score=3335, time_set=NOW)])
        progress = FakeProgressReporter()

        run_star_ratings(source=source, config=RatingConfig(), clock=clock, progress=progress)

        assert progress.starts == [("Rating poodles", 2)]
        assert progress.details == ["Song lb1 (Expert)", "Song lb2 (Expert)"]
        assert progress.advances == [1, 1]
        assert progress.finished == 1

    def test_zero_weight_for_only_score_is_skipped_not_fatal(self, clock: FakeClock) -> None:
        source = FakeRatingSource(pages=[("lb1", "lb2")])
        source.add_leaderboard(_info("lb1"), [Score(score=3335, time_set=NOW)])
        source.add_leaderboard(
            _info("lb2"),
            [Score(score=3335, time_set=NOW), Score(score=3000, time_set=NOW)],
        )

        run = run_star_ratings(
            source=source, config=RatingConfig(rank_weights=(0.0, 1.0)), clock=clock
        )

        assert [record.leaderboard_id for record in run.records] == ["lb2"]
        assert [skipped.leaderboard_id for skipped in run.skipped] == ["lb1"]

    def test_pool_fetch_failure_raises_before_any_leaderboard(self, clock: FakeClock) -> None:
        source = FakeRatingSource(page_failures={0: requests.ConnectionError("down")})
        progress = FakeProgressReporter()

        with pytest.raises(PoolFetchError):
            run_star_ratings(
                source=source, config=RatingConfig(), clock=clock, progress=progress
            )

        assert progress.starts == []
