#!/usr/bin/env python3
"""Pick four players and split them into two balanced teams."""

from __future__ import annotations

import random
import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.common import Team
from domain.config import load_engine_config
from domain.engine import PickupEngine
from domain.errors import InsufficientPlayersError
from repositories.player_repository import SqlPlayerStore, ensure_schema

DEFAULT_CONFIG = ROOT_DIR / "configs" / "engine" / "default.toml"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=False,
    help="Team generation.",
)


def _describe(label: str, team: Team) -> str:
    names = " + ".join(f"{player.name} ({player.skill_tier})" for player in team.players)
    return (
        f"{label}: {names} strength={team.strength:.3f} "
        f"win_rate={team.combined_win_rate:.3f}"
    )


@app.command()
def generate_teams(
    player_ids: Annotated[
        list[str] | None,
        typer.Option(
            "--player-id",
            help="Manually selected player id; repeat for each player. Fewer than 4 auto-selects.",
        ),
    ] = None,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed for the rotation tie-break shuffle."),
    ] = None,
    config: Annotated[Path, typer.Option("--config", help="Engine TOML config.")] = DEFAULT_CONFIG,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local pickup postgres instance."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Print the most balanced 2v2 split."""
    engine_config = load_engine_config(config)
    pickup = PickupEngine(engine_config.parameters, rng=random.Random(seed))

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        store = SqlPlayerStore(session)
        pool = store.get_all()
        pool_by_id = {player.player_id: player for player in pool}
        missing = [player_id for player_id in player_ids or [] if player_id not in pool_by_id]
        if missing:
            raise typer.BadParameter(f"Unknown player ids: {missing}", param_hint="--player-id")
        selected = [pool_by_id[player_id] for player_id in player_ids or []]

        try:
            partition = pickup.generate_teams(pool, selected)
        except InsufficientPlayersError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc

    typer.echo(_describe("team_a", partition.team_a))
    typer.echo(_describe("team_b", partition.team_b))
    typer.echo(f"strength_gap={partition.strength_gap:.3f}")


if __name__ == "__main__":
    app()
