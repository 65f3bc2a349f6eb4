"""ORM models."""

from models.base import Base
from models.match import MatchRow
from models.match_history import MatchHistoryRow
from models.player import PlayerRow

__all__ = [
    "Base",
    "MatchHistoryRow",
    "MatchRow",
    "PlayerRow",
]
