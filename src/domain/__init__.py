"""Pickup-session engine: rotation, team balancing and ratings."""

from domain.common import (
    MatchHistoryEntry,
    MatchOutcome,
    MatchUpdateResult,
    Partition,
    Player,
    PlayerFilter,
    RatingChange,
    Team,
)
from domain.config import EngineParameters, SkillTier
from domain.engine import PickupEngine
from domain.errors import (
    DuplicatePlayerError,
    EngineError,
    InsufficientPlayersError,
    InvalidOutcomeError,
    PlayerNotFoundError,
    UnknownTierError,
)
from domain.protocol import PlayerStore

__all__ = [
    "DuplicatePlayerError",
    "EngineError",
    "EngineParameters",
    "InsufficientPlayersError",
    "InvalidOutcomeError",
    "MatchHistoryEntry",
    "MatchOutcome",
    "MatchUpdateResult",
    "Partition",
    "PickupEngine",
    "Player",
    "PlayerFilter",
    "PlayerNotFoundError",
    "PlayerStore",
    "RatingChange",
    "SkillTier",
    "Team",
    "UnknownTierError",
]
