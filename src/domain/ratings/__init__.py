"""Rating updates, ranking and review advisories."""

from domain.ratings.advisory import needs_review, players_needing_review
from domain.ratings.calculator import FixedKRatingCalculator, PlayerMatchUpdate
from domain.ratings.ranking import recompute_ranks

__all__ = [
    "FixedKRatingCalculator",
    "PlayerMatchUpdate",
    "needs_review",
    "players_needing_review",
    "recompute_ranks",
]
