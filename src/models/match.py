"""matches table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class MatchRow(Base):
    """Immutable record of one finished doubles match."""

    __tablename__ = "matches"
    __table_args__ = (
        CheckConstraint("team_a_score <> team_b_score", name="ck_matches_no_tie"),
        Index("idx_matches_played_at", "played_at"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    match_id: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    played_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
    team_a_player1_id: Mapped[str] = mapped_column(ForeignKey("players.player_id"), nullable=False)
    team_a_player2_id: Mapped[str] = mapped_column(ForeignKey("players.player_id"), nullable=False)
    team_b_player1_id: Mapped[str] = mapped_column(ForeignKey("players.player_id"), nullable=False)
    team_b_player2_id: Mapped[str] = mapped_column(ForeignKey("players.player_id"), nullable=False)
    team_a_score: Mapped[int] = mapped_column(Integer, nullable=False)
    team_b_score: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False),
        nullable=False,
        server_default=func.now(),
    )
