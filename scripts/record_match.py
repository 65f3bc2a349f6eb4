#!/usr/bin/env python3
"""Record a finished doubles match and update ratings and ranks."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Annotated
from uuid import uuid4

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory
from domain.common import MatchOutcome
from domain.config import load_engine_config
from domain.engine import PickupEngine
from domain.errors import InvalidOutcomeError, PlayerNotFoundError
from repositories.player_repository import SqlPlayerStore, ensure_schema

DEFAULT_CONFIG = ROOT_DIR / "configs" / "engine" / "default.toml"

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="Match recording.",
)


@app.command()
def record_match(
    team_a: Annotated[
        tuple[str, str],
        typer.Option("--team-a", help="Two player ids for team A."),
    ],
    team_b: Annotated[
        tuple[str, str],
        typer.Option("--team-b", help="Two player ids for team B."),
    ],
    score_a: Annotated[int, typer.Option("--score-a")],
    score_b: Annotated[int, typer.Option("--score-b")],
    match_id: Annotated[
        str | None,
        typer.Option("--match-id", help="Stable id; resubmitting the same id is rejected."),
    ] = None,
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the update result as JSON."),
    ] = False,
    config: Annotated[Path, typer.Option("--config", help="Engine TOML config.")] = DEFAULT_CONFIG,
    db_url: Annotated[
        str,
        typer.Option("--db-url", help="Database URL. Defaults to the local pickup postgres instance."),
    ] = DEFAULT_DB_URL,
) -> None:
    """Apply one match result in a single transaction."""
    outcome = MatchOutcome(
        match_id=match_id or f"match_{uuid4().hex}",
        team_a=team_a,
        team_b=team_b,
        score_a=score_a,
        score_b=score_b,
    )

    engine_config = load_engine_config(config)
    pickup = PickupEngine(engine_config.parameters)

    engine = create_db_engine(db_url)
    ensure_schema(engine)
    session_factory = create_session_factory(engine)

    with session_factory() as session:
        try:
            result = pickup.apply_match_result(
                SqlPlayerStore(session),
                outcome,
                echo=None if as_json else typer.echo,
            )
        except InvalidOutcomeError as exc:
            raise typer.BadParameter(str(exc)) from exc
        except PlayerNotFoundError as exc:
            typer.echo(str(exc), err=True)
            raise typer.Exit(code=1) from exc

    if as_json:
        typer.echo(json.dumps(result.as_payload(), indent=2))
        return

    for change, player in zip(result.changes, result.players):
        typer.echo(
            f"{player.name:<20} {'WIN ' if change.won else 'LOSS'} "
            f"rating={change.rating_before}->{change.rating_after} ({change.rating_delta:+d}) "
            f"rank={player.current_rank} ({player.rank_change:+d})"
        )


if __name__ == "__main__":
    app()
