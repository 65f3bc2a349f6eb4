"""Dict-backed player store for tests and database-free callers."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Iterator
from contextlib import contextmanager

from domain.common import MatchHistoryEntry, MatchOutcome, Player, PlayerFilter


class InMemoryPlayerStore:
    """Keeps players in insertion order.

    Transactions hold a store-wide re-entrant lock and restore a snapshot on error.
    """

    def __init__(self, players: Iterable[Player] = ()) -> None:
        self._players: dict[str, Player] = {player.player_id: player for player in players}
        self.history: list[MatchHistoryEntry] = []
        self.matches: list[MatchOutcome] = []
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[None]:
        with self._lock:
            snapshot = (dict(self._players), list(self.history), list(self.matches))
            try:
                yield
            except BaseException:
                self._players, self.history, self.matches = snapshot
                raise

    def get(self, player_id: str) -> Player | None:
        return self._players.get(player_id)

    def get_all(self, player_filter: PlayerFilter | None = None) -> list[Player]:
        players = list(self._players.values())
        if player_filter is None:
            return players
        players = [player for player in players if player_filter.matches(player)]
        if player_filter.limit is not None:
            players = players[: player_filter.limit]
        return players

    def save(self, player: Player) -> None:
        self._players[player.player_id] = player

    def append_match_history(self, entry: MatchHistoryEntry) -> None:
        self.history.append(entry)

    def record_match(self, outcome: MatchOutcome) -> None:
        if any(match.match_id == outcome.match_id for match in self.matches):
            raise ValueError(f"match_id={outcome.match_id} has already been recorded")
        self.matches.append(outcome)


__all__ = ["InMemoryPlayerStore"]
