"""Pydantic-based validation helpers for inbound IO payloads."""

from __future__ import annotations

from typing import TypeVar

from pydantic import TypeAdapter, ValidationError
from typing_extensions import Required, TypedDict

from ...io_contracts import LeaderboardInfoIO, RankedListIO, ScoreIO

SchemaT = TypeVar("SchemaT")


class IncomingDataError(ValueError):
    """Raised when inbound data fails validation."""


class RankedListInput(TypedDict, total=False):
    leaderboard_id_list: Required[list[str]]
    cr_curve: dict[str, object] | None


class LeaderboardInfoInput(TypedDict, total=False):
    name: str | None
    difficulty: str | None
    notes: Required[int]
    star_rating: dict[str, float] | None


class ScoreInput(TypedDict, total=False):
    score: Required[int]
    time_set: Required[float]


def validate_as(schema: type[SchemaT], payload: object) -> SchemaT:
    try:
        return TypeAdapter(schema).validate_python(payload)
    except ValidationError as exc:
        message = f"Invalid payload for {schema}."
        raise IncomingDataError(message) from exc


def _as_str(value: object) -> str:
    return value if isinstance(value, str) else ""


def parse_ranked_list_page(payload: object) -> RankedListIO:
    page = validate_as(RankedListInput, payload)
    return {
        "leaderboard_id_list": list(page["leaderboard_id_list"]),
        "cr_curve": dict(page.get("cr_curve") or {}),
    }


def parse_leaderboard_info(payload: object) -> LeaderboardInfoIO:
    info = validate_as(LeaderboardInfoInput, payload)
    return {
        "name": _as_str(info.get("name")),
        "difficulty": _as_str(info.get("difficulty")),
        "notes": info["notes"],
        "star_rating": dict(info.get("star_rating") or {}),
    }


def parse_scores(payload: object) -> list[ScoreIO]:
    raw_scores = validate_as(list[ScoreInput], payload)
    return [{"score": item["score"], "time_set": item["time_set"]} for item in raw_scores]
