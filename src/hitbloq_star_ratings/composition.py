"""Composition root for wiring CLI dependencies."""

from __future__ import annotations

from .cli import CliDependencies, create_app
from .cli_progress import CliProgressReporter
from .config import RatingConfig
from .infrastructure import HitbloqClient, LocalFileSystem, SystemClock, build_http_client


def build_cli_dependencies(*, config: RatingConfig) -> CliDependencies:
    """Build concrete dependencies for CLI commands.

    Args:
        config: Rating configuration (used for API client wiring).
    """
    http_client = build_http_client(
        timeout_seconds=config.timeout_seconds,
        min_delay_seconds=config.min_delay_seconds,
        max_rpm=config.max_rpm,
    )
    return CliDependencies(
        fs=LocalFileSystem(),
        source=HitbloqClient(http_client=http_client, base_url=config.api_base_url),
        clock=SystemClock(),
        progress=CliProgressReporter(),
    )


app = create_app(build_cli_dependencies)
