#!/usr/bin/env python3
"""Show the rating leaderboard and pool overview."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.config import load_engine_config
from domain.ratings.advisory import needs_review
from repositories.player_repository import ensure_schema
from repositories.stats_repository import fetch_leaderboard, fetch_overview

DEFAULT_CONFIG = ROOT_DIR / "configs" / "engine" / "default.toml"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Query the leaderboard.",
)


@app.command()
def show_leaderboard(
    page: Annotated[int, typer.Option("--page")] = 1,
    limit: Annotated[int, typer.Option("--limit", help="Players per page.")] = 20,
    skill_tier: Annotated[
        str | None,
        typer.Option("--tier", help="Only show players in this tier."),
    ] = None,
    overview: Annotated[
        bool,
        typer.Option("--overview", help="Print pool-wide summary numbers first."),
    ] = False,
    config: Annotated[Path, typer.Option("--config", help="Engine TOML config.")] = DEFAULT_CONFIG,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local pickup postgres instance."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Print players by rating, flagging those whose win rate is under review."""
    if page <= 0:
        raise typer.BadParameter("--page must be greater than 0")
    if limit <= 0:
        raise typer.BadParameter("--limit must be greater than 0")

    params = load_engine_config(config).parameters
    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        if overview:
            stats = fetch_overview(session, default_rating=params.initial_rating)
            typer.echo(
                f"players={stats.total_players} average_rating={stats.average_rating} "
                f"matches={stats.total_matches} new_players={stats.new_players}"
            )
            typer.echo(
                "tiers="
                + ",".join(f"{tier}:{count}" for tier, count in sorted(stats.tier_distribution.items()))
            )

        leaderboard = fetch_leaderboard(
            session,
            page=page,
            limit=limit,
            skill_tier=None if skill_tier is None else skill_tier.upper(),
        )

    if not leaderboard.players:
        typer.echo("No players found.")
        return

    typer.echo(f"page={leaderboard.current_page}/{leaderboard.total_pages} total={leaderboard.total_count}")
    for player in leaderboard.players:
        flag = " review" if needs_review(player, params) else ""
        typer.echo(
            f"{player.current_rank or '-':>3}. {player.name:<20} "
            f"rating={player.current_rating:4d} ({player.rank_change:+d}) "
            f"tier={player.skill_tier:<12} matches={player.total_matches:3d} "
            f"win_rate={player.win_rate:.2f}{flag}"
        )


if __name__ == "__main__":
    app()
