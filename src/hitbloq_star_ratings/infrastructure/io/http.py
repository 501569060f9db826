"""HTTP client implementation for infrastructure.

Usage example:
    import requests

    from hitbloq_star_ratings.infrastructure.io.http import RequestsHttpClient
    from hitbloq_star_ratings.infrastructure.resilience import RateLimiter

    client = RequestsHttpClient(
        session=requests.Session(),
        rate_limiter=RateLimiter(min_delay_seconds=0.25),
    )
    page = client.get_json("https://hitbloq.com/api/ranked_list/poodles/0")
"""

from __future__ import annotations

from typing_extensions import override

import requests

from ...exceptions import JsonObjectExpectedError
from ...observability import get_logger
from ...protocols import HttpClient, RateLimiter
from ..resilience import RateLimiter as RateLimiterImpl

logger = get_logger("hitbloq_star_ratings.infrastructure.http")

_USER_AGENT = "hitbloq-star-ratings"


def build_http_client(
    *, timeout_seconds: float, min_delay_seconds: float, max_rpm: int = 0
) -> RequestsHttpClient:
    session = requests.Session()
    session.headers["User-Agent"] = _USER_AGENT
    return RequestsHttpClient(
        session=session,
        rate_limiter=RateLimiterImpl(max_rpm=max_rpm, min_delay_seconds=min_delay_seconds),
        timeout_seconds=timeout_seconds,
    )


def _response_details(response: requests.Response) -> str:
    """Return a compact status/body summary for error reporting."""
    try:
        body = response.text
    except (UnicodeDecodeError, ValueError, requests.RequestException):
        body = "<unreadable>"
    body = " ".join(body.split())
    if len(body) > 300:
        body = body[:300] + "..."
    return f"status={response.status_code}, body={body}"


class RequestsHttpClient(HttpClient):
    """Requests-backed JSON client with request pacing and a per-request timeout.

    There is no retry: any network or HTTP error propagates to the caller.
    """

    def __init__(
        self,
        *,
        session: requests.Session,
        rate_limiter: RateLimiter | None = None,
        timeout_seconds: float = 30.0,
    ) -> None:
        self.session = session
        self.rate_limiter = rate_limiter or RateLimiterImpl()
        self.timeout_seconds = timeout_seconds

    @override
    def get_json(self, url: str) -> object:
        """Fetch and decode JSON from URL.

        Raises:
            requests.HTTPError: For non-2xx responses.
            requests.RequestException: For network failures and timeouts.
            JsonObjectExpectedError: If the body is not JSON.
        """
        self.rate_limiter.wait_if_needed()

        r = self.session.get(url, timeout=self.timeout_seconds)
        try:
            r.raise_for_status()
        except requests.HTTPError:
            logger.warning("Request to %s failed: %s", url, _response_details(r))
            raise

        try:
            return r.json()
        except ValueError as exc:
            raise JsonObjectExpectedError.for_response(url) from exc
