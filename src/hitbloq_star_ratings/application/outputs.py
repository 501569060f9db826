"""Command scripts and readable report for a rating run.

Usage example:
    from pathlib import Path

    from hitbloq_star_ratings.application.outputs import write_outputs
    from hitbloq_star_ratings.infrastructure import LocalFileSystem

    paths = write_outputs(run, Path("output"), LocalFileSystem())
    paths["new"]  # output/star_rating_commands.txt
"""

from __future__ import annotations

from pathlib import Path

from ..observability import pool_logger
from ..protocols import FileSystem
from .star_ratings import StarRatingRecord, StarRatingRun

RESET_COMMANDS_FILE = "reset_commands.txt"
NEW_COMMANDS_FILE = "star_rating_commands.txt"
READABLE_FILE = "star_ratings_readable.txt"


def set_manual_command(leaderboard_id: str, pool_name: str, star_rating: float) -> str:
    return f"!set_manual {leaderboard_id} {pool_name} {star_rating:.2f}"


def recalculate_command(pool_name: str) -> str:
    return f"!recalculate_cr {pool_name}"


def readable_line(record: StarRatingRecord) -> str:
    previous = (
        "unrated" if record.previous_star_rating is None else f"{record.previous_star_rating:.2f}"
    )
    return f"{record.name} | {record.difficulty} | {record.star_rating:.2f} ({previous})"


def reset_commands(run: StarRatingRun, *, complete: bool = True) -> list[str]:
    """Commands restoring each rated leaderboard's previous star rating."""
    lines = [
        set_manual_command(record.leaderboard_id, run.pool_name, record.previous_star_rating)
        for record in run.records
        if record.previous_star_rating is not None
    ]
    if complete:
        lines.append(recalculate_command(run.pool_name))
    return lines


def new_rating_commands(run: StarRatingRun, *, complete: bool = True) -> list[str]:
    """Commands applying each leaderboard's computed star rating."""
    lines = [
        set_manual_command(record.leaderboard_id, run.pool_name, record.star_rating)
        for record in run.records
    ]
    if complete:
        lines.append(recalculate_command(run.pool_name))
    return lines


def readable_lines(run: StarRatingRun) -> list[str]:
    return [readable_line(record) for record in run.records]


def write_outputs(
    run: StarRatingRun,
    out_dir: Path,
    fs: FileSystem,
    *,
    complete: bool = True,
) -> dict[str, Path]:
    """Write the three run artefacts.

    A partial run (`complete=False`) is written without the `!recalculate_cr` line.

    Returns:
        Dict with paths to the reset, new and readable files.
    """
    logger = pool_logger("hitbloq_star_ratings.outputs", run.pool_name)
    fs.mkdir(out_dir, parents=True)
    paths = {
        "reset": out_dir / RESET_COMMANDS_FILE,
        "new": out_dir / NEW_COMMANDS_FILE,
        "readable": out_dir / READABLE_FILE,
    }
    fs.write_text("\n".join(reset_commands(run, complete=complete)), paths["reset"])
    fs.write_text("\n".join(new_rating_commands(run, complete=complete)), paths["new"])
    fs.write_text("\n".join(readable_lines(run)), paths["readable"])
    logger.info("Wrote %s ratings to %s", len(run.records), out_dir)
    return paths
