"""Observability helpers."""

from .logging import get_logger, pool_logger

__all__ = ["get_logger", "pool_logger"]
