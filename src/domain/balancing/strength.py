"""Strength model used for team balancing."""

from __future__ import annotations

from collections.abc import Sequence

from domain.common import Player
from domain.config import DEFAULT_PARAMETERS, EngineParameters


def blend_strength(tier_ordinal: float, win_rate: float, params: EngineParameters) -> float:
    """Weighted blend of a tier ordinal and a win rate scaled onto the tier range."""
    return (tier_ordinal * params.tier_weight) + (
        win_rate * params.win_rate_scale * params.form_weight
    )


def strength(player: Player, params: EngineParameters = DEFAULT_PARAMETERS) -> float:
    return blend_strength(params.tier_ordinal(player.skill_tier), player.win_rate, params)


def team_strength(
    players: Sequence[Player],
    params: EngineParameters = DEFAULT_PARAMETERS,
) -> float:
    """Blend the team's average tier ordinal with its average win rate.

    An empty team has strength 0.
    """
    if not players:
        return 0.0
    return blend_strength(
        average_tier_ordinal(players, params),
        combined_win_rate(players),
        params,
    )


def average_tier_ordinal(
    players: Sequence[Player],
    params: EngineParameters = DEFAULT_PARAMETERS,
) -> float:
    if not players:
        return 0.0
    return sum(params.tier_ordinal(player.skill_tier) for player in players) / float(len(players))


def combined_win_rate(players: Sequence[Player]) -> float:
    if not players:
        return 0.0
    return sum(player.win_rate for player in players) / float(len(players))


__all__ = [
    "average_tier_ordinal",
    "blend_strength",
    "combined_win_rate",
    "strength",
    "team_strength",
]
