"""Read-only leaderboard, profile and overview queries."""

from __future__ import annotations

from dataclasses import dataclass
from math import ceil

from sqlalchemy import case, func, select
from sqlalchemy.orm import Session, aliased

from domain.common import MatchHistoryEntry, Player
from models import MatchHistoryRow, MatchRow, PlayerRow
from repositories.player_repository import player_from_row


@dataclass(frozen=True)
class LeaderboardPage:
    players: list[Player]
    total_count: int
    current_page: int
    total_pages: int


@dataclass(frozen=True)
class PartnerStats:
    partner_id: str
    partner_name: str | None
    matches_played: int
    win_rate: float


@dataclass(frozen=True)
class OverviewStats:
    total_players: int
    average_rating: int
    total_matches: int
    new_players: int
    tier_distribution: dict[str, int]
    top_performers: list[Player]


def fetch_leaderboard(
    session: Session,
    *,
    page: int = 1,
    limit: int = 50,
    skill_tier: str | None = None,
) -> LeaderboardPage:
    """Return one page of players ordered by rating, highest first."""
    if page <= 0:
        raise ValueError("page must be greater than 0")
    if limit <= 0:
        raise ValueError("limit must be greater than 0")

    count_statement = select(func.count(PlayerRow.id))
    statement = select(PlayerRow).order_by(PlayerRow.current_rating.desc(), PlayerRow.id)
    if skill_tier is not None:
        count_statement = count_statement.where(PlayerRow.skill_tier == skill_tier)
        statement = statement.where(PlayerRow.skill_tier == skill_tier)

    total_count = int(session.scalar(count_statement) or 0)
    rows = session.scalars(statement.limit(limit).offset((page - 1) * limit))
    return LeaderboardPage(
        players=[player_from_row(row) for row in rows],
        total_count=total_count,
        current_page=page,
        total_pages=ceil(total_count / limit),
    )


def fetch_match_history(
    session: Session,
    player_id: str,
    *,
    limit: int = 10,
) -> list[MatchHistoryEntry]:
    """Most recent rated matches for one player, newest first."""
    statement = (
        select(MatchHistoryRow)
        .where(MatchHistoryRow.player_id == player_id)
        .order_by(MatchHistoryRow.played_at.desc(), MatchHistoryRow.id.desc())
        .limit(limit)
    )
    return [
        MatchHistoryEntry(
            player_id=row.player_id,
            match_id=row.match_id,
            played_at=row.played_at,
            partner_id=row.partner_id,
            opponent_ids=tuple(row.opponent_ids or ()),
            won=row.won,
            score_for=row.score_for,
            score_against=row.score_against,
            rating_before=row.rating_before,
            rating_after=row.rating_after,
            rating_delta=row.rating_delta,
        )
        for row in session.scalars(statement)
    ]


def fetch_partner_stats(
    session: Session,
    player_id: str,
    *,
    limit: int = 10,
) -> list[PartnerStats]:
    """Most frequent partners of one player with their shared win rate."""
    partner = aliased(PlayerRow)
    matches_played = func.count(MatchHistoryRow.id).label("matches_played")
    win_rate = func.avg(case((MatchHistoryRow.won, 1.0), else_=0.0)).label("win_rate")
    statement = (
        select(MatchHistoryRow.partner_id, partner.name, matches_played, win_rate)
        .outerjoin(partner, partner.player_id == MatchHistoryRow.partner_id)
        .where(
            MatchHistoryRow.player_id == player_id,
            MatchHistoryRow.partner_id.is_not(None),
        )
        .group_by(MatchHistoryRow.partner_id, partner.name)
        .order_by(matches_played.desc(), MatchHistoryRow.partner_id)
        .limit(limit)
    )
    return [
        PartnerStats(
            partner_id=row.partner_id,
            partner_name=row.name,
            matches_played=int(row.matches_played),
            win_rate=float(row.win_rate or 0.0),
        )
        for row in session.execute(statement)
    ]


def fetch_overview(
    session: Session,
    *,
    new_player_threshold: int = 5,
    top_n: int = 5,
    default_rating: int = 1200,
) -> OverviewStats:
    """Pool-wide summary numbers."""
    total_players, average_rating = session.execute(
        select(func.count(PlayerRow.id), func.avg(PlayerRow.current_rating))
    ).one()
    total_matches = session.scalar(select(func.count(MatchRow.id)))
    new_players = session.scalar(
        select(func.count(PlayerRow.id)).where(PlayerRow.total_matches < new_player_threshold)
    )
    tier_rows = session.execute(
        select(PlayerRow.skill_tier, func.count(PlayerRow.id)).group_by(PlayerRow.skill_tier)
    )
    top_rows = session.scalars(
        select(PlayerRow).order_by(PlayerRow.current_rating.desc(), PlayerRow.id).limit(top_n)
    )

    return OverviewStats(
        total_players=int(total_players or 0),
        average_rating=round(float(average_rating)) if average_rating is not None else default_rating,
        total_matches=int(total_matches or 0),
        new_players=int(new_players or 0),
        tier_distribution={str(tier): int(count) for tier, count in tier_rows},
        top_performers=[player_from_row(row) for row in top_rows],
    )


__all__ = [
    "LeaderboardPage",
    "OverviewStats",
    "PartnerStats",
    "fetch_leaderboard",
    "fetch_match_history",
    "fetch_overview",
    "fetch_partner_stats",
]
