"""Player selection and team balancing."""

from domain.balancing.partition import build_team, partition_teams
from domain.balancing.selection import select_candidates
from domain.balancing.strength import strength, team_strength

__all__ = [
    "build_team",
    "partition_teams",
    "select_candidates",
    "strength",
    "team_strength",
]
