"""Demotion advisory checks."""

from __future__ import annotations

from collections.abc import Iterable

from domain.common import Player
from domain.config import DEFAULT_PARAMETERS, EngineParameters


def needs_review(player: Player, params: EngineParameters = DEFAULT_PARAMETERS) -> bool:
    """True when a player with enough matches is below their tier's win-rate threshold.

    Advisory only: the player's tier is never changed here.
    """
    if player.total_matches < params.min_games_for_review:
        return False
    return player.win_rate < params.review_threshold(player.skill_tier)


def players_needing_review(
    players: Iterable[Player],
    params: EngineParameters = DEFAULT_PARAMETERS,
) -> list[Player]:
    return [player for player in players if needs_review(player, params)]


__all__ = ["needs_review", "players_needing_review"]
