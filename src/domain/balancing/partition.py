"""Balanced 2v2 partitioning."""

from __future__ import annotations

from collections.abc import Sequence
from math import inf

from domain.balancing.strength import (
    average_tier_ordinal,
    combined_win_rate,
    strength,
    team_strength,
)
from domain.common import Partition, Player, Team
from domain.config import DEFAULT_PARAMETERS, EngineParameters
from domain.errors import InsufficientPlayersError

PARTITION_SIZE = 4

# Indices into the strength-sorted players: the strongest player is paired
# with the 2nd, 3rd and 4th strongest in turn. Mirror splits describe the
# same partition and are not enumerated.
CANDIDATE_PAIRINGS: tuple[tuple[int, int], ...] = ((0, 1), (0, 2), (0, 3))


def build_team(players: Sequence[Player], params: EngineParameters = DEFAULT_PARAMETERS) -> Team:
    return Team(
        players=tuple(players),
        strength=team_strength(players, params),
        average_tier_ordinal=average_tier_ordinal(players, params),
        combined_win_rate=combined_win_rate(players),
    )


def partition_teams(
    players: Sequence[Player],
    params: EngineParameters = DEFAULT_PARAMETERS,
) -> Partition:
    """Split exactly four players into the two teams with the smallest strength gap.

    Ties go to the earliest pairing in ``CANDIDATE_PAIRINGS``.
    """
    if len(players) < PARTITION_SIZE:
        raise InsufficientPlayersError(required=PARTITION_SIZE, available=len(players))
    if len(players) > PARTITION_SIZE:
        raise ValueError(
            f"partition_teams expects exactly {PARTITION_SIZE} players, got {len(players)}; "
            "narrow the pool with select_candidates first"
        )
    player_ids = [player.player_id for player in players]
    if len(set(player_ids)) != len(player_ids):
        raise ValueError(f"Duplicate players in partition input: {player_ids}")

    # sorted() is stable with reverse=True, so equal strengths keep input order.
    ranked = sorted(players, key=lambda player: strength(player, params), reverse=True)

    best: Partition | None = None
    smallest_gap = inf
    for first, second in CANDIDATE_PAIRINGS:
        team_a = [ranked[first], ranked[second]]
        team_b = [player for index, player in enumerate(ranked) if index not in (first, second)]
        gap = abs(team_strength(team_a, params) - team_strength(team_b, params))
        if gap < smallest_gap:
            smallest_gap = gap
            best = Partition(
                team_a=build_team(team_a, params),
                team_b=build_team(team_b, params),
                strength_gap=gap,
            )

    if best is not None:
        return best

    team_a = ranked[0::2]
    team_b = ranked[1::2]
    return Partition(
        team_a=build_team(team_a, params),
        team_b=build_team(team_b, params),
        strength_gap=abs(team_strength(team_a, params) - team_strength(team_b, params)),
    )


__all__ = ["CANDIDATE_PAIRINGS", "PARTITION_SIZE", "build_team", "partition_teams"]
