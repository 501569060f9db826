"""Centralised, injectable configuration for the star-rating recalculator."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Self

from dotenv import load_dotenv

from .config_file import RatingConfigFile


class ConfigValueError(ValueError):
    """Base class for invalid configuration values."""


class PositiveIntegerEnvVarError(ConfigValueError):
    """Raised when an environment variable must be a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive integer.")


class PositiveNumberEnvVarError(ConfigValueError):
    """Raised when an environment variable must be a positive number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be a positive number.")


class NonNegativeIntegerEnvVarError(ConfigValueError):
    """Raised when an environment variable must be zero or a positive integer."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be zero or a positive integer.")


class NonNegativeNumberEnvVarError(ConfigValueError):
    """Raised when an environment variable must be zero or a positive number."""

    def __init__(self, env_name: str) -> None:
        super().__init__(f"{env_name} must be zero or a positive number.")


class RankWeightsError(ConfigValueError):
    """Raised when rank weights are not a usable comma-separated weight list."""

    def __init__(self, source: str) -> None:
        super().__init__(
            f"{source} must be a comma-separated list of non-negative numbers "
            "with a positive first weight (e.g. 6,3,1)."
        )


@dataclass(frozen=True)
class RatingConfig:
    """Immutable configuration object for a rating run.

    Load from environment with `RatingConfig.from_env()` or construct directly for testing.
    """

    # Pool and tuning
    pool_name: str = "poodles"
    target_rating: float = 800.0
    rank_weights: tuple[float, ...] = (6.0, 3.0, 1.0)
    age_decay_factor: float = 40.0  # lower values lower the rating of old scores more
    age_cutoff_months: float = 4.0  # age beyond which the correction stops growing

    # Hitbloq API
    page_size: int = 30
    api_base_url: str = "https://hitbloq.com/api"
    timeout_seconds: float = 30.0
    min_delay_seconds: float = 0.0
    max_rpm: int = 0

    # Outputs
    output_dir: str = "output"

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> Self:
        """Load configuration from environment variables.

        Args:
            dotenv_path: Optional path to .env file. If None, uses default .env discovery.

        Returns:
            RatingConfig instance populated from environment.
        """
        load_dotenv(dotenv_path)

        return cls(
            pool_name=os.getenv("HITBLOQ_POOL_NAME", "poodles").strip() or "poodles",
            target_rating=_parse_positive_float(
                os.getenv("TARGET_RATING", "800"), env_name="TARGET_RATING"
            ),
            rank_weights=parse_rank_weights(
                os.getenv("RANK_WEIGHTS", "6,3,1"), source="RANK_WEIGHTS"
            ),
            age_decay_factor=_parse_positive_float(
                os.getenv("AGE_DECAY_FACTOR", "40"), env_name="AGE_DECAY_FACTOR"
            ),
            age_cutoff_months=_parse_non_negative_float(
                os.getenv("AGE_CUTOFF_MONTHS", "4"), env_name="AGE_CUTOFF_MONTHS"
            ),
            page_size=_parse_positive_int(
                os.getenv("POOL_PAGE_SIZE", "30"), env_name="POOL_PAGE_SIZE"
            ),
            api_base_url=os.getenv("HITBLOQ_API_BASE_URL", "https://hitbloq.com/api").strip()
            or "https://hitbloq.com/api",
            timeout_seconds=_parse_positive_float(
                os.getenv("HITBLOQ_TIMEOUT_SECONDS", "30"), env_name="HITBLOQ_TIMEOUT_SECONDS"
            ),
            min_delay_seconds=_parse_non_negative_float(
                os.getenv("HITBLOQ_MIN_DELAY_SECONDS", "0"), env_name="HITBLOQ_MIN_DELAY_SECONDS"
            ),
            max_rpm=_parse_non_negative_int(
                os.getenv("HITBLOQ_MAX_RPM", "0"), env_name="HITBLOQ_MAX_RPM"
            ),
            output_dir=os.getenv("OUTPUT_DIR", "output").strip() or "output",
        )

    def with_overrides(
        self,
        *,
        pool_name: str | None = None,
        target_rating: float | None = None,
        rank_weights: tuple[float, ...] | None = None,
        output_dir: str | None = None,
    ) -> Self:
        """Return a new config with specified overrides (for CLI options)."""
        return replace(
            self,
            pool_name=self.pool_name if pool_name is None else pool_name.strip(),
            target_rating=self.target_rating if target_rating is None else target_rating,
            rank_weights=self.rank_weights if rank_weights is None else rank_weights,
            output_dir=self.output_dir if output_dir is None else output_dir,
        )

    def with_file_overrides(self, file_config: RatingConfigFile) -> Self:
        """Return a new config with config-file values overriding env/default values."""
        return replace(
            self,
            pool_name=self.pool_name if file_config.pool_name is None else file_config.pool_name,
            target_rating=self.target_rating
            if file_config.target_rating is None
            else file_config.target_rating,
            rank_weights=self.rank_weights
            if file_config.rank_weights is None
            else file_config.rank_weights,
            age_decay_factor=self.age_decay_factor
            if file_config.age_decay_factor is None
            else file_config.age_decay_factor,
            age_cutoff_months=self.age_cutoff_months
            if file_config.age_cutoff_months is None
            else file_config.age_cutoff_months,
            page_size=self.page_size if file_config.page_size is None else file_config.page_size,
            api_base_url=self.api_base_url
            if file_config.api_base_url is None
            else file_config.api_base_url,
            output_dir=self.output_dir
            if file_config.output_dir is None
            else file_config.output_dir,
        )


def parse_rank_weights(value: str, *, source: str) -> tuple[float, ...]:
    """Parse a comma-separated list of rank weights, best rank first.

    The first weight must be positive: a leaderboard with a single score is rated
    on that weight alone.
    """
    items = [item.strip() for item in value.split(",") if item.strip()]
    try:
        weights = tuple(float(item) for item in items)
    except ValueError as exc:
        raise RankWeightsError(source) from exc
    if not weights or weights[0] <= 0 or any(weight < 0 for weight in weights):
        raise RankWeightsError(source)
    return weights


def _parse_positive_int(value: str, *, env_name: str) -> int:
    """Parse a positive integer from an environment variable."""
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise PositiveIntegerEnvVarError(env_name) from exc
    if parsed < 1:
        raise PositiveIntegerEnvVarError(env_name)
    return parsed


def _parse_positive_float(value: str, *, env_name: str) -> float:
    """Parse a positive number from an environment variable."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise PositiveNumberEnvVarError(env_name) from exc
    if parsed <= 0:
        raise PositiveNumberEnvVarError(env_name)
    return parsed


def _parse_non_negative_int(value: str, *, env_name: str) -> int:
    """Parse zero or a positive integer from an environment variable."""
    try:
        parsed = int(value.strip())
    except ValueError as exc:
        raise NonNegativeIntegerEnvVarError(env_name) from exc
    if parsed < 0:
        raise NonNegativeIntegerEnvVarError(env_name)
    return parsed


def _parse_non_negative_float(value: str, *, env_name: str) -> float:
    """Parse zero or a positive number from an environment variable."""
    try:
        parsed = float(value.strip())
    except ValueError as exc:
        raise NonNegativeNumberEnvVarError(env_name) from exc
    if parsed < 0:
        raise NonNegativeNumberEnvVarError(env_name)
    return parsed
