"""Ranked pool paging."""

from __future__ import annotations

from ..domain.models import RankedList
from ..exceptions import PoolFetchError, StarRatingError
from ..observability import pool_logger
from ..protocols import RatingSource

DEFAULT_PAGE_SIZE = 30


def fetch_pool_page(source: RatingSource, pool_name: str, page: int) -> RankedList:
    """Fetch one page of a pool.

    Transport and payload failures are raised as `PoolFetchError`. Curve errors
    are already domain errors and pass through unchanged.
    """
    try:
        return source.list_pool_page(pool_name, page)
    except StarRatingError:
        raise
    except Exception as exc:
        raise PoolFetchError(pool_name, page, exc) from exc


def fetch_ranked_list(
    source: RatingSource,
    pool_name: str,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> RankedList:
    """Fetch every leaderboard id in a pool.

    Pages are requested in order until one comes back shorter than `page_size`.
    The CR curve of the first page applies to the whole pool.
    """
    logger = pool_logger("hitbloq_star_ratings.pool", pool_name)
    first = fetch_pool_page(source, pool_name, 0)
    leaderboard_ids = list(first.leaderboard_ids)
    last_page_len = len(first.leaderboard_ids)
    page = 0
    while last_page_len >= page_size:
        page += 1
        next_page = fetch_pool_page(source, pool_name, page)
        leaderboard_ids.extend(next_page.leaderboard_ids)
        last_page_len = len(next_page.leaderboard_ids)

    logger.info("%s leaderboards over %s pages", len(leaderboard_ids), page + 1)
    return RankedList(
        pool_name=pool_name,
        leaderboard_ids=tuple(leaderboard_ids),
        cr_curve=first.cr_curve,
    )
