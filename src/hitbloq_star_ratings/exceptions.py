"""Custom exceptions for the Hitbloq star-rating recalculator.

These exceptions provide clear error handling and enable testing of error paths.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .application.star_ratings import StarRatingRun


class StarRatingError(Exception):
    """Base exception for all star-rating errors."""

    pass


class InvalidNoteCountError(StarRatingError, ValueError):
    """Raised when a leaderboard reports a non-positive note count."""

    def __init__(self, notes: int) -> None:
        self.notes = notes
        super().__init__(f"Note count must be a positive integer, got {notes}.")


class NoScoresError(StarRatingError):
    """Raised when a weighted average is requested for a leaderboard with no scores."""

    def __init__(self) -> None:
        super().__init__("At least one score is required to compute a weighted accuracy.")


class WeightConfigurationError(StarRatingError, ValueError):
    """Raised when rank weights cannot produce a weighted average."""

    @classmethod
    def more_weights_than_scores(cls, weights: int, scores: int) -> WeightConfigurationError:
        return cls(f"Got {weights} rank weights for only {scores} scores.")

    @classmethod
    def negative_weight(cls) -> WeightConfigurationError:
        return cls("Rank weights must not be negative.")

    @classmethod
    def zero_total(cls) -> WeightConfigurationError:
        return cls("Rank weights must not all be zero.")


class UnknownCurveTypeError(StarRatingError):
    """Raised when a pool uses a CR curve type this tool cannot evaluate.

    This is a fatal error - there is no fallback curve.
    """

    def __init__(self, curve_type: object) -> None:
        self.curve_type = curve_type
        super().__init__(f"Unknown CR curve type: {curve_type!r}.")


class CurveConfigurationError(StarRatingError, ValueError):
    """Raised when CR curve parameters are outside their valid range."""

    pass


class RatingComputationError(StarRatingError):
    """Raised when a curved value cannot be turned into a star rating."""

    def __init__(self, curved_value: float) -> None:
        self.curved_value = curved_value
        super().__init__(
            f"Curved value must be positive to compute a star rating, got {curved_value:.4f}."
        )


class LeaderboardProcessingError(StarRatingError):
    """Raised when the run aborts while processing a leaderboard.

    Carries the results computed before the failure so they can be flushed.
    """

    def __init__(self, leaderboard_id: str, partial: StarRatingRun, cause: Exception) -> None:
        self.leaderboard_id = leaderboard_id
        self.partial = partial
        super().__init__(f"Failed while processing leaderboard {leaderboard_id}: {cause}")


class PoolFetchError(StarRatingError):
    """Raised when a page of the ranked pool cannot be fetched or read."""

    def __init__(self, pool_name: str, page: int, cause: Exception) -> None:
        self.pool_name = pool_name
        self.page = page
        super().__init__(f"Failed to load page {page} of pool {pool_name}: {cause}")


class JsonObjectExpectedError(StarRatingError, ValueError):
    """Raised when an API response body is not valid JSON."""

    @classmethod
    def for_response(cls, url: str) -> JsonObjectExpectedError:
        return cls(f"Expected a JSON response from {url}.")


class ConfigFileNotFoundError(StarRatingError, FileNotFoundError):
    """Raised when the requested TOML config file does not exist."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Config file not found: {path}")


class ConfigFileParseError(StarRatingError, ValueError):
    """Raised when the TOML config file cannot be parsed."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is not valid TOML: {detail}")


class ConfigFileValidationError(StarRatingError, ValueError):
    """Raised when the TOML config file contains invalid values."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"Config file {path} is invalid: {detail}")
