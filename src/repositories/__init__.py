"""Database repository helpers."""

from repositories.memory import InMemoryPlayerStore
from repositories.player_repository import SqlPlayerStore, ensure_schema, player_from_row
from repositories.stats_repository import (
    LeaderboardPage,
    OverviewStats,
    PartnerStats,
    fetch_leaderboard,
    fetch_match_history,
    fetch_overview,
    fetch_partner_stats,
)

__all__ = [
    "InMemoryPlayerStore",
    "LeaderboardPage",
    "OverviewStats",
    "PartnerStats",
    "SqlPlayerStore",
    "ensure_schema",
    "fetch_leaderboard",
    "fetch_match_history",
    "fetch_overview",
    "fetch_partner_stats",
    "player_from_row",
]
