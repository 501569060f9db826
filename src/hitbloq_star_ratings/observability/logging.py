"""Run logging with UTC timestamps and pool context.

Every line of a rating run carries the pool it belongs to, so logs from runs over
different pools can be told apart:

    2024-01-02T03:04:05+0000 INFO hitbloq_star_ratings.star_ratings [poodles]: 3/120 Song

Usage example:
    from hitbloq_star_ratings.observability.logging import get_logger, pool_logger

    logger = pool_logger("hitbloq_star_ratings.star_ratings", "poodles")
    logger.info("%s/%s %s", index, total, name)
"""

from __future__ import annotations

import logging
import time
from typing_extensions import override

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s%(pool_context)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S%z"


class _RunFormatter(logging.Formatter):
    """UTC formatter that renders an optional `pool` record attribute."""

    def __init__(self) -> None:
        super().__init__(fmt=_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)
        self.converter = time.gmtime

    @override
    def format(self, record: logging.LogRecord) -> str:
        pool = getattr(record, "pool", None)
        record.pool_context = f" [{pool}]" if pool else ""
        return super().format(record)


def get_logger(name: str) -> logging.Logger:
    """Return a logger with a single stderr handler and no propagation."""
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(_RunFormatter())
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
        logger.propagate = False
    return logger


def pool_logger(name: str, pool_name: str) -> logging.LoggerAdapter[logging.Logger]:
    """Return `get_logger(name)` tagged with the pool a run is rating."""
    return logging.LoggerAdapter(get_logger(name), {"pool": pool_name})
