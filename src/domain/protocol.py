"""Shared protocols for the player record store."""

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

from domain.common import MatchHistoryEntry, MatchOutcome, Player, PlayerFilter


@runtime_checkable
class PlayerStore(Protocol):
    """Read/write contract the engine needs from persistence.

    Writes made inside ``transaction()`` commit together or not at all, and
    only one transaction at a time may run against the pool.
    """

    def transaction(self) -> AbstractContextManager[None]: ...

    def get(self, player_id: str) -> Player | None: ...

    def get_all(self, player_filter: PlayerFilter | None = None) -> list[Player]: ...

    def save(self, player: Player) -> None: ...

    def append_match_history(self, entry: MatchHistoryEntry) -> None: ...

    def record_match(self, outcome: MatchOutcome) -> None: ...


__all__ = ["PlayerStore"]
