"""Hitbloq API data source.

Usage example:
    from hitbloq_star_ratings.infrastructure.hitbloq import HitbloqClient
    from hitbloq_star_ratings.infrastructure.io.http import build_http_client

    source = HitbloqClient(
        http_client=build_http_client(timeout_seconds=30.0, min_delay_seconds=0.0),
    )
    page = source.list_pool_page("poodles", 0)
"""

from __future__ import annotations

from collections.abc import Sequence
from types import MappingProxyType
from typing_extensions import override
from urllib.parse import quote

from ..domain.curves import parse_curve
from ..domain.models import LeaderboardInfo, RankedList, Score
from ..protocols import HttpClient, RatingSource
from .io.validation import parse_leaderboard_info, parse_ranked_list_page, parse_scores

DEFAULT_API_BASE_URL = "https://hitbloq.com/api"


class HitbloqClient(RatingSource):
    """Rating source backed by the public Hitbloq REST API."""

    def __init__(self, *, http_client: HttpClient, base_url: str = DEFAULT_API_BASE_URL) -> None:
        self.http_client = http_client
        self.base_url = base_url.rstrip("/")

    def _url(self, *parts: str | int) -> str:
        path = "/".join(quote(str(part), safe="") for part in parts)
        return f"{self.base_url}/{path}"

    @override
    def list_pool_page(self, pool_name: str, page: int) -> RankedList:
        payload = self.http_client.get_json(self._url("ranked_list", pool_name, page))
        ranked = parse_ranked_list_page(payload)
        return RankedList(
            pool_name=pool_name,
            leaderboard_ids=tuple(ranked["leaderboard_id_list"]),
            cr_curve=parse_curve(ranked["cr_curve"]),
        )

    @override
    def get_leaderboard_info(self, leaderboard_id: str) -> LeaderboardInfo:
        payload = self.http_client.get_json(self._url("leaderboard", leaderboard_id, "info"))
        info = parse_leaderboard_info(payload)
        return LeaderboardInfo(
            leaderboard_id=leaderboard_id,
            name=info["name"],
            difficulty=info["difficulty"],
            notes=info["notes"],
            star_ratings=MappingProxyType(dict(info["star_rating"])),
        )

    @override
    def get_top_scores(self, leaderboard_id: str) -> Sequence[Score]:
        payload = self.http_client.get_json(self._url("leaderboard", leaderboard_id, "scores", 0))
        return [
            Score(score=item["score"], time_set=item["time_set"]) for item in parse_scores(payload)
        ]
