#!/usr/bin/env python3
"""Show one player's profile, recent matches and partners."""

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
from domain.balancing.strength import strength
from domain.config import load_engine_config
from domain.ratings.advisory import needs_review
from repositories.player_repository import SqlPlayerStore, ensure_schema
from repositories.stats_repository import fetch_match_history, fetch_partner_stats

DEFAULT_CONFIG = ROOT_DIR / "configs" / "engine" / "default.toml"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Player profile.",
)


@app.command()
def show_player(
    player_id: Annotated[str, typer.Argument(help="Player id.")],
    history_limit: Annotated[int, typer.Option("--history-limit")] = 10,
    config: Annotated[Path, typer.Option("--config", help="Engine TOML config.")] = DEFAULT_CONFIG,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local pickup postgres instance."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Print stats, review status, recent matches and frequent partners."""
    params = load_engine_config(config).parameters
    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        player = SqlPlayerStore(session).get(player_id)
        if player is None:
            typer.echo(f"Player not found: {player_id}", err=True)
            raise typer.Exit(code=1)
        history = fetch_match_history(session, player_id, limit=history_limit)
        partners = fetch_partner_stats(session, player_id)

    typer.echo(
        f"{player.name} tier={player.skill_tier} rating={player.current_rating} "
        f"peak={player.peak_rating} rank={player.current_rank} ({player.rank_change:+d})"
    )
    typer.echo(
        f"matches={player.total_matches} wins={player.wins} losses={player.losses} "
        f"win_rate={player.win_rate:.2f} recent_form={player.recent_form_win_rate:.2f} "
        f"streak={player.current_win_streak} best_streak={player.longest_win_streak} "
        f"strength={strength(player, params):.3f}"
    )
    if needs_review(player, params):
        typer.echo(
            f"review: win rate below {params.review_threshold(player.skill_tier):.2f} "
            f"for tier {player.skill_tier}"
        )

    for entry in history:
        typer.echo(
            f"{entry.played_at:%Y-%m-%d} {entry.match_id} {'WIN ' if entry.won else 'LOSS'} "
            f"{entry.score_for}-{entry.score_against} partner={entry.partner_id} "
            f"rating={entry.rating_before}->{entry.rating_after} ({entry.rating_delta:+d})"
        )
    for partner in partners:
        typer.echo(
            f"partner {partner.partner_name or partner.partner_id}: "
            f"matches={partner.matches_played} win_rate={partner.win_rate:.2f}"
        )


if __name__ == "__main__":
    app()
