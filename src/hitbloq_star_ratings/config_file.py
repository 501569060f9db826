"""Typed parsing and validation for rating config files.

Example file:
    schema_version = 1

    [ratings]
    pool_name = "poodles"
    target_rating = 800
    rank_weights = [6, 3, 1]
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from .exceptions import ConfigFileNotFoundError, ConfigFileParseError, ConfigFileValidationError
from .protocols import FileSystem

_SCHEMA_VERSION = 1


@dataclass(frozen=True)
class RatingConfigFile:
    """Validated rating config values loaded from a TOML file."""

    pool_name: str | None = None
    target_rating: float | None = None
    rank_weights: tuple[float, ...] | None = None
    age_decay_factor: float | None = None
    age_cutoff_months: float | None = None
    page_size: int | None = None
    api_base_url: str | None = None
    output_dir: str | None = None


class _RatingsSectionModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    pool_name: str | None = None
    target_rating: float | None = None
    rank_weights: tuple[float, ...] | None = None
    age_decay_factor: float | None = None
    age_cutoff_months: float | None = None
    page_size: int | None = None
    api_base_url: str | None = None
    output_dir: str | None = None

    @field_validator("pool_name", "api_base_url", "output_dir")
    @classmethod
    def _validate_non_empty_text(cls, value: str | None) -> str | None:
        if value is None:
            return None
        text = value.strip()
        if not text:
            raise ValueError
        return text

    @field_validator("target_rating", "age_decay_factor")
    @classmethod
    def _validate_positive_number(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value <= 0:
            raise ValueError
        return value

    @field_validator("age_cutoff_months")
    @classmethod
    def _validate_non_negative_number(cls, value: float | None) -> float | None:
        if value is None:
            return None
        if value < 0:
            raise ValueError
        return value

    @field_validator("page_size")
    @classmethod
    def _validate_positive_int(cls, value: int | None) -> int | None:
        if value is None:
            return None
        if value < 1:
            raise ValueError
        return value

    @field_validator("rank_weights")
    @classmethod
    def _validate_rank_weights(cls, value: tuple[float, ...] | None) -> tuple[float, ...] | None:
        if value is None:
            return None
        if not value or value[0] <= 0 or any(weight < 0 for weight in value):
            raise ValueError
        return value


class _ConfigFileModel(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    schema_version: int
    ratings: _RatingsSectionModel

    @field_validator("schema_version")
    @classmethod
    def _validate_schema_version(cls, value: int) -> int:
        if value != _SCHEMA_VERSION:
            raise ValueError
        return value


def _format_validation_error(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ("<root>",)))
    message = str(first.get("msg", "invalid value"))
    return f"{location}: {message}"


def load_rating_config_file(*, path: Path, fs: FileSystem) -> RatingConfigFile:
    """Load and validate a rating TOML config file."""
    if not fs.exists(path):
        raise ConfigFileNotFoundError(str(path))

    raw_payload = fs.read_text(path)
    try:
        payload: object = tomllib.loads(raw_payload)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigFileParseError(str(path), str(exc)) from exc

    try:
        model = _ConfigFileModel.model_validate(payload)
    except ValidationError as exc:
        raise ConfigFileValidationError(str(path), _format_validation_error(exc)) from exc

    section = model.ratings
    return RatingConfigFile(
        pool_name=section.pool_name,
        target_rating=section.target_rating,
        rank_weights=section.rank_weights,
        age_decay_factor=section.age_decay_factor,
        age_cutoff_months=section.age_cutoff_months,
        page_size=section.page_size,
        api_base_url=section.api_base_url,
        output_dir=section.output_dir,
    )
