"""Whole-pool rank recomputation."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace

from domain.common import Player


def recompute_ranks(players: Sequence[Player]) -> list[Player]:
    """Rank every player by rating, highest first, and return them in rank order.

    Equal ratings keep the pool's iteration order. The prior ``current_rank``
    becomes ``previous_rank``; a player with no prior rank gets
    ``rank_change`` 0.
    """
    ordered = sorted(players, key=lambda player: player.current_rating, reverse=True)
    ranked: list[Player] = []
    for position, player in enumerate(ordered, start=1):
        previous_rank = player.current_rank
        rank_change = 0 if previous_rank is None else previous_rank - position
        ranked.append(
            replace(
                player,
                current_rank=position,
                previous_rank=previous_rank,
                rank_change=rank_change,
            )
        )
    return ranked


__all__ = ["recompute_ranks"]
