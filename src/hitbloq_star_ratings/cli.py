"""CLI for the Hitbloq star-rating recalculator.

Commands:
- recalculate: Rate every leaderboard in a pool and write bot command scripts
- preview: Show the curved value and star rating for a hypothetical accuracy
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Annotated, Protocol

import typer
from rich import print as rprint

from . import __version__
from .application.recalculate import preview_rating, run_recalculation
from .config import ConfigValueError, RankWeightsError, RatingConfig, parse_rank_weights
from .config_file import load_rating_config_file
from .exceptions import StarRatingError
from .protocols import Clock, FileSystem, ProgressReporter, RatingSource


class DependenciesBuilder(Protocol):
    """Protocol for constructing CLI dependencies."""

    def __call__(self, *, config: RatingConfig) -> CliDependencies:
        """Build dependencies for CLI commands."""
        ...


@dataclass(frozen=True)
class CliDependencies:
    """Concrete dependencies required by the CLI."""

    fs: FileSystem
    source: RatingSource
    clock: Clock
    progress: ProgressReporter | None = None


@dataclass(frozen=True)
class CliContext:
    """Runtime CLI context for a single command invocation."""

    config: RatingConfig
    deps_builder: DependenciesBuilder

    def build_dependencies(self, config: RatingConfig | None = None) -> CliDependencies:
        """Return dependencies using the configured builder."""
        return self.deps_builder(config=config or self.config)


class CliContextNotInitialisedError(typer.BadParameter):
    """Raised when CLI context is missing."""

    def __init__(self) -> None:
        super().__init__(
            "CLI context is not initialised. Use the hitbloq-star-ratings entry point."
        )


class InvalidWeightsOptionError(typer.BadParameter):
    """Raised when --weights is not a valid weight list."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)


class InvalidTargetRatingError(typer.BadParameter):
    """Raised when --target-rating is not a positive number."""

    def __init__(self, value: float) -> None:
        super().__init__(f"Target rating must be positive, got {value:g}.")


def _positive_target_rating(value: float | None) -> float | None:
    if value is not None and value <= 0:
        raise InvalidTargetRatingError(value)
    return value


def _get_context(ctx: typer.Context) -> CliContext:
    if not isinstance(ctx.obj, CliContext):
        raise CliContextNotInitialisedError()
    return ctx.obj


def _parse_weights_option(weights: str | None) -> tuple[float, ...] | None:
    if weights is None:
        return None
    try:
        return parse_rank_weights(weights, source="--weights")
    except RankWeightsError as exc:
        raise InvalidWeightsOptionError(str(exc)) from exc


def _resolve_config(
    state: CliContext,
    *,
    config_path: Path | None,
    pool: str | None = None,
    target_rating: float | None = None,
    weights: str | None = None,
    output_dir: Path | None = None,
) -> RatingConfig:
    config = state.config
    if config_path is not None:
        deps = state.build_dependencies(config)
        config = config.with_file_overrides(load_rating_config_file(path=config_path, fs=deps.fs))
    return config.with_overrides(
        pool_name=pool,
        target_rating=target_rating,
        rank_weights=_parse_weights_option(weights),
        output_dir=None if output_dir is None else str(output_dir),
    )


def _version_callback(value: bool) -> None:
    if value:
        rprint(f"hitbloq-star-ratings {__version__}")
        raise typer.Exit()


def create_app(deps_builder: DependenciesBuilder) -> typer.Typer:
    """Create a Typer app wired with the provided dependencies builder."""
    app = typer.Typer(
        add_completion=False,
        help="Hitbloq pool star ratings: top scores → weighted accuracy → CR curve → stars",
    )

    @app.callback()
    def main(
        ctx: typer.Context,
        version: Annotated[
            bool,
            typer.Option(
                "--version",
                callback=_version_callback,
                is_eager=True,
                help="Show the package version and exit",
            ),
        ] = False,
    ) -> None:
        """Initialise CLI context."""
        _ = version
        try:
            config = RatingConfig.from_env()
        except ConfigValueError as exc:
            rprint(f"[red]✗ {exc}[/red]")
            raise typer.Exit(code=1) from exc
        ctx.obj = CliContext(config=config, deps_builder=deps_builder)

    @app.command()
    def recalculate(
        ctx: typer.Context,
        pool: Annotated[
            str | None,
            typer.Option("--pool", "-p", help="Ranked pool name (default: HITBLOQ_POOL_NAME)"),
        ] = None,
        target_rating: Annotated[
            float | None,
            typer.Option(
                "--target-rating",
                "-t",
                callback=_positive_target_rating,
                help="CR the weighted top accuracy should be worth (default: 800)",
            ),
        ] = None,
        weights: Annotated[
            str | None,
            typer.Option("--weights", "-w", help="Rank weights, best first (e.g. 6,3,1)"),
        ] = None,
        output_dir: Annotated[
            Path | None,
            typer.Option("--output-dir", "-o", help="Directory for command scripts"),
        ] = None,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="TOML config file"),
        ] = None,
    ) -> None:
        """Recalculate star ratings for every leaderboard in a pool."""
        state = _get_context(ctx)
        try:
            config = _resolve_config(
                state,
                config_path=config_path,
                pool=pool,
                target_rating=target_rating,
                weights=weights,
                output_dir=output_dir,
            )
            deps = state.build_dependencies(config)
            result = run_recalculation(
                config=config,
                source=deps.source,
                fs=deps.fs,
                clock=deps.clock,
                progress=deps.progress,
            )
        except StarRatingError as exc:
            rprint(f"[red]✗ {exc}[/red]")
            raise typer.Exit(code=1) from exc

        rprint(f"[green]✓ Rated {len(result.run.records):,} leaderboards[/green]")
        for skipped in result.run.skipped:
            rprint(f"[yellow]  Skipped {skipped.name}: {skipped.reason}[/yellow]")
        for k, v in result.outputs.items():
            rprint(f"  {k}: {v}")

    @app.command()
    def preview(
        ctx: typer.Context,
        accuracy: Annotated[
            float,
            typer.Option("--accuracy", "-a", help="Weighted accuracy to evaluate (0-100)"),
        ],
        pool: Annotated[
            str | None,
            typer.Option("--pool", "-p", help="Ranked pool name (default: HITBLOQ_POOL_NAME)"),
        ] = None,
        target_rating: Annotated[
            float | None,
            typer.Option(
                "--target-rating",
                "-t",
                callback=_positive_target_rating,
                help="Target CR (default: 800)",
            ),
        ] = None,
        config_path: Annotated[
            Path | None,
            typer.Option("--config", "-c", help="TOML config file"),
        ] = None,
    ) -> None:
        """Preview the pool curve for a hypothetical weighted accuracy."""
        state = _get_context(ctx)
        try:
            config = _resolve_config(
                state, config_path=config_path, pool=pool, target_rating=target_rating
            )
            deps = state.build_dependencies(config)
            result = preview_rating(accuracy=accuracy, config=config, source=deps.source)
        except StarRatingError as exc:
            rprint(f"[red]✗ {exc}[/red]")
            raise typer.Exit(code=1) from exc

        rprint(f"[bold]{config.pool_name}[/bold] curve: {result.curve}")
        rprint(f"  accuracy: {result.accuracy:.2f}")
        rprint(f"  curved value: {result.curved_value:.4f}")
        rprint(f"  star rating: {result.star_rating:.2f}")

    _ = (main, recalculate, preview)

    return app
