"""Concrete infrastructure implementations and shared helpers."""

from .clock import SystemClock
from .hitbloq import DEFAULT_API_BASE_URL, HitbloqClient
from .io.filesystem import LocalFileSystem
from .io.http import RequestsHttpClient, build_http_client
from .resilience import RateLimiter

__all__ = [
    "DEFAULT_API_BASE_URL",
    "HitbloqClient",
    "LocalFileSystem",
    "RateLimiter",
    "RequestsHttpClient",
    "SystemClock",
    "build_http_client",
]
