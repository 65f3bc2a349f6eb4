"""Fair rotation policy for choosing who plays next."""

from __future__ import annotations

import random
from collections.abc import Sequence

from domain.common import Player
from domain.errors import InsufficientPlayersError


def select_candidates(
    pool: Sequence[Player],
    count: int = 4,
    *,
    rng: random.Random | None = None,
) -> list[Player]:
    """Pick ``count`` players, fewest matches played first.

    Players with equal match counts are ordered by a random permutation
    drawn from ``rng``. The pool itself is left untouched.
    """
    if count <= 0:
        raise ValueError("count must be greater than 0")
    if len(pool) < count:
        raise InsufficientPlayersError(required=count, available=len(pool))

    shuffled = list(pool)
    (rng or random.Random()).shuffle(shuffled)
    # list.sort is stable, so equal match counts keep the shuffled order.
    shuffled.sort(key=lambda player: player.total_matches)
    return shuffled[:count]


__all__ = ["select_candidates"]
