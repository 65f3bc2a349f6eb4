"""players table model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import CheckConstraint, DateTime, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, JSONType
from models.mixins import TimestampMixin


class PlayerRow(TimestampMixin, Base):
    """One player with rating, counters and derived rank fields."""

    __tablename__ = "players"
    __table_args__ = (
        CheckConstraint("wins + losses = total_matches", name="ck_players_match_counts"),
        CheckConstraint("peak_rating >= initial_rating", name="ck_players_peak_rating"),
        CheckConstraint("peak_rating >= current_rating", name="ck_players_peak_current"),
        CheckConstraint("current_rating >= 0", name="ck_players_current_rating_nonnegative"),
        Index("idx_players_rating", "current_rating"),
        Index("idx_players_matches", "total_matches"),
        Index("idx_players_active", "last_active_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    email: Mapped[str | None] = mapped_column(String(256), nullable=True, unique=True)
    skill_tier: Mapped[str] = mapped_column(String(32), nullable=False)
    current_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    peak_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    initial_rating: Mapped[int] = mapped_column(Integer, nullable=False)
    total_matches: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    losses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    current_win_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    longest_win_streak: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    points_for: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    points_against: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    recent_results: Mapped[list[Any]] = mapped_column(JSONType, nullable=False, default=list)
    current_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    previous_rank: Mapped[int | None] = mapped_column(Integer, nullable=True)
    rank_change: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    last_active_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
