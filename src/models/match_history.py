"""match_history table model."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base, JSONType


class MatchHistoryRow(Base):
    """Per-player rating history (one row per player per match)."""

    __tablename__ = "match_history"
    __table_args__ = (
        UniqueConstraint("player_id", "match_id", name="uq_match_history_player_match"),
        Index("idx_match_history_player", "player_id", "played_at"),
        Index("idx_match_history_match", "match_id"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    player_id: Mapped[str] = mapped_column(ForeignKey("players.player_id"), nullable=False)
    match_id: Mapped[str] = mapped_column(ForeignKey("matches.match_id"), nullable=False)
    played_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    partner_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    opponent_ids: Mapped[list[Any]] = mapped_column(JSONType, nullable=False)
    won: Mapped[bool] = mapped_column(Boolean, nullable=False)
    score_for: Mapped[int] = mapped_column(Integer, nullable=False)
    score_against: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_before: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_after: Mapped[int] = mapped_column(Integer, nullable=False)
    rating_delta: Mapped[int] = mapped_column(Integer, nullable=False)
