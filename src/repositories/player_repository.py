"""SQLAlchemy-backed player record store."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.common import MatchHistoryEntry, MatchOutcome, Player, PlayerFilter
from models import Base, MatchHistoryRow, MatchRow, PlayerRow

# Key for the transaction-scoped PostgreSQL advisory lock guarding the player pool.
POOL_LOCK_KEY = 0x5049434B


def ensure_schema(engine: Engine) -> None:
    """Create the players, matches and match_history tables if they do not exist."""
    Base.metadata.create_all(
        bind=engine,
        tables=[PlayerRow.__table__, MatchRow.__table__, MatchHistoryRow.__table__],
    )


class SqlPlayerStore:
    """Player store over one SQLAlchemy session.

    ``transaction()`` opens a transaction when none is active and commits it
    on exit; inside an already-open transaction it uses a SAVEPOINT and
    leaves the final commit to the session owner. Either way it first takes
    a pool-wide lock held until the enclosing transaction ends: an advisory
    lock on PostgreSQL, ``FOR UPDATE`` on every player row on other
    server databases. SQLite engines from ``db.create_db_engine`` open
    every transaction with ``BEGIN IMMEDIATE``, which already serializes
    writers.
    """

    def __init__(self, session: Session) -> None:
        self.session = session

    @contextmanager
    def transaction(self) -> Iterator[None]:
        if self.session.in_transaction():
            with self.session.begin_nested():
                self._lock_pool()
                yield
        else:
            with self.session.begin():
                self._lock_pool()
                yield

    def get(self, player_id: str) -> Player | None:
        row = self._get_row(player_id, lock=True)
        return None if row is None else player_from_row(row)

    def get_all(self, player_filter: PlayerFilter | None = None) -> list[Player]:
        statement = select(PlayerRow).order_by(PlayerRow.id)
        if player_filter is not None:
            if player_filter.skill_tier is not None:
                statement = statement.where(PlayerRow.skill_tier == player_filter.skill_tier)
            if player_filter.min_rating is not None:
                statement = statement.where(PlayerRow.current_rating >= player_filter.min_rating)
            if player_filter.max_rating is not None:
                statement = statement.where(PlayerRow.current_rating <= player_filter.max_rating)
            if player_filter.limit is not None:
                statement = statement.limit(player_filter.limit)
        return [player_from_row(row) for row in self.session.scalars(statement)]

    def save(self, player: Player) -> None:
        row = self._get_row(player.player_id)
        if row is None:
            row = PlayerRow(player_id=player.player_id)
            self.session.add(row)
        _copy_player_to_row(player, row)
        self.session.flush()

    def append_match_history(self, entry: MatchHistoryEntry) -> None:
        self.session.execute(
            insert(MatchHistoryRow),
            [
                {
                    "player_id": entry.player_id,
                    "match_id": entry.match_id,
                    "played_at": entry.played_at,
                    "partner_id": entry.partner_id,
                    "opponent_ids": list(entry.opponent_ids),
                    "won": entry.won,
                    "score_for": entry.score_for,
                    "score_against": entry.score_against,
                    "rating_before": entry.rating_before,
                    "rating_after": entry.rating_after,
                    "rating_delta": entry.rating_delta,
                }
            ],
        )

    def record_match(self, outcome: MatchOutcome) -> None:
        team_a_player1_id, team_a_player2_id = outcome.team_a
        team_b_player1_id, team_b_player2_id = outcome.team_b
        self.session.add(
            MatchRow(
                match_id=outcome.match_id,
                played_at=outcome.played_at,
                team_a_player1_id=team_a_player1_id,
                team_a_player2_id=team_a_player2_id,
                team_b_player1_id=team_b_player1_id,
                team_b_player2_id=team_b_player2_id,
                team_a_score=outcome.score_a,
                team_b_score=outcome.score_b,
            )
        )
        self.session.flush()

    def _lock_pool(self) -> None:
        dialect = self.session.get_bind().dialect.name
        if dialect == "postgresql":
            self.session.execute(select(func.pg_advisory_xact_lock(POOL_LOCK_KEY)))
        elif dialect != "sqlite":
            self.session.execute(select(PlayerRow.id).with_for_update())

    def _get_row(self, player_id: str, *, lock: bool = False) -> PlayerRow | None:
        statement = select(PlayerRow).where(PlayerRow.player_id == player_id)
        if lock:
            statement = statement.with_for_update()
        return self.session.execute(statement).scalar_one_or_none()


def player_from_row(row: PlayerRow) -> Player:
    return Player(
        player_id=row.player_id,
        name=row.name,
        email=row.email,
        skill_tier=row.skill_tier,
        current_rating=row.current_rating,
        peak_rating=row.peak_rating,
        initial_rating=row.initial_rating,
        total_matches=row.total_matches,
        wins=row.wins,
        losses=row.losses,
        current_win_streak=row.current_win_streak,
        longest_win_streak=row.longest_win_streak,
        points_for=row.points_for,
        points_against=row.points_against,
        recent_results=tuple(bool(result) for result in (row.recent_results or [])),
        current_rank=row.current_rank,
        previous_rank=row.previous_rank,
        rank_change=row.rank_change,
        last_active_at=row.last_active_at,
    )


def _copy_player_to_row(player: Player, row: PlayerRow) -> None:
    row.name = player.name
    row.email = player.email
    row.skill_tier = player.skill_tier
    row.current_rating = player.current_rating
    row.peak_rating = player.peak_rating
    row.initial_rating = player.initial_rating
    row.total_matches = player.total_matches
    row.wins = player.wins
    row.losses = player.losses
    row.current_win_streak = player.current_win_streak
    row.longest_win_streak = player.longest_win_streak
    row.points_for = player.points_for
    row.points_against = player.points_against
    row.recent_results = [1 if won else 0 for won in player.recent_results]
    row.current_rank = player.current_rank
    row.previous_rank = player.previous_rank
    row.rank_change = player.rank_change
    row.last_active_at = player.last_active_at


__all__ = ["POOL_LOCK_KEY", "SqlPlayerStore", "ensure_schema", "player_from_row"]
