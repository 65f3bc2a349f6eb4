#!/usr/bin/env python3
"""Register a new player at the baseline rating."""

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
from domain.engine import PickupEngine
from domain.errors import UnknownTierError
from repositories.player_repository import SqlPlayerStore, ensure_schema

DEFAULT_CONFIG = ROOT_DIR / "configs" / "engine" / "default.toml"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Player registration.",
)


@app.command()
def add_player(
    name: Annotated[str, typer.Option("--name", help="Display name.")],
    skill_tier: Annotated[
        str,
        typer.Option("--tier", help="Skill tier name from the engine config."),
    ],
    email: Annotated[str | None, typer.Option("--email")] = None,
    config: Annotated[Path, typer.Option("--config", help="Engine TOML config.")] = DEFAULT_CONFIG,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local pickup postgres instance."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Create a player with zeroed stats and re-rank the pool."""
    if not name.strip():
        raise typer.BadParameter("--name cannot be empty")

    engine_config = load_engine_config(config)
    pickup = PickupEngine(engine_config.parameters)

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        try:
            player = pickup.register_player(
                SqlPlayerStore(session),
                name=name.strip(),
                skill_tier=skill_tier.upper(),
                email=email,
            )
        except UnknownTierError as exc:
            raise typer.BadParameter(str(exc), param_hint="--tier") from exc

    typer.echo(
        f"created player_id={player.player_id} name={player.name} "
        f"tier={player.skill_tier} rating={player.current_rating} rank={player.current_rank}"
    )


if __name__ == "__main__":
    app()
