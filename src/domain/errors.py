"""Error taxonomy for the pickup engine."""

from __future__ import annotations


class EngineError(Exception):
    """Base class for every error raised by the engine."""


class InsufficientPlayersError(EngineError, ValueError):
    """Raised when selection or partitioning gets fewer players than it needs."""

    def __init__(self, *, required: int, available: int) -> None:
        super().__init__(f"Need at least {required} players (got {available})")
        self.required = required
        self.available = available


class DuplicatePlayerError(EngineError, ValueError):
    """Raised when registering a player id that already exists."""

    def __init__(self, player_id: str) -> None:
        super().__init__(f"Player already exists: {player_id}")
        self.player_id = player_id


class InvalidOutcomeError(EngineError, ValueError):
    """Raised for malformed or tied match outcomes."""


class PlayerNotFoundError(EngineError, KeyError):
    """Raised when a referenced player id is missing from the store."""

    def __init__(self, player_id: str) -> None:
        super().__init__(player_id)
        self.player_id = player_id

    def __str__(self) -> str:
        return f"Player not found: {self.player_id}"


class UnknownTierError(EngineError, ValueError):
    """Raised when a skill tier is not present in the configured tier table."""


__all__ = [
    "EngineError",
    "DuplicatePlayerError",
    "InsufficientPlayersError",
    "InvalidOutcomeError",
    "PlayerNotFoundError",
    "UnknownTierError",
]
