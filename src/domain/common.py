"""Shared types for the pickup engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from domain.errors import InvalidOutcomeError

NEUTRAL_WIN_RATE = 0.5


@dataclass(frozen=True)
class Player:
    """Snapshot of one player row.

    Win rates are derived from the counters and never stored on their own.
    """

    player_id: str
    name: str
    skill_tier: str
    current_rating: int
    peak_rating: int
    initial_rating: int
    total_matches: int = 0
    wins: int = 0
    losses: int = 0
    current_win_streak: int = 0
    longest_win_streak: int = 0
    points_for: int = 0
    points_against: int = 0
    recent_results: tuple[bool, ...] = ()
    current_rank: int | None = None
    previous_rank: int | None = None
    rank_change: int = 0
    email: str | None = None
    last_active_at: datetime | None = None

    @property
    def win_rate(self) -> float:
        if self.total_matches <= 0:
            return NEUTRAL_WIN_RATE
        return self.wins / self.total_matches

    @property
    def recent_form_win_rate(self) -> float:
        if not self.recent_results:
            return NEUTRAL_WIN_RATE
        return sum(1 for won in self.recent_results if won) / len(self.recent_results)

    @property
    def average_score_for(self) -> float:
        if self.total_matches <= 0:
            return 0.0
        return self.points_for / self.total_matches

    @property
    def average_score_against(self) -> float:
        if self.total_matches <= 0:
            return 0.0
        return self.points_against / self.total_matches

    def as_payload(self) -> dict[str, Any]:
        return {
            "player_id": self.player_id,
            "name": self.name,
            "email": self.email,
            "skill_tier": self.skill_tier,
            "current_rating": self.current_rating,
            "peak_rating": self.peak_rating,
            "initial_rating": self.initial_rating,
            "stats": {
                "total_matches": self.total_matches,
                "wins": self.wins,
                "losses": self.losses,
                "win_rate": self.win_rate,
                "current_win_streak": self.current_win_streak,
                "longest_win_streak": self.longest_win_streak,
                "average_score_for": self.average_score_for,
                "average_score_against": self.average_score_against,
                "recent_form_win_rate": self.recent_form_win_rate,
            },
            "current_rank": self.current_rank,
            "previous_rank": self.previous_rank,
            "rank_change": self.rank_change,
            "last_active_at": _isoformat(self.last_active_at),
        }


@dataclass(frozen=True)
class PlayerFilter:
    """Optional constraints for reading the player pool."""

    skill_tier: str | None = None
    min_rating: int | None = None
    max_rating: int | None = None
    limit: int | None = None

    def matches(self, player: Player) -> bool:
        if self.skill_tier is not None and player.skill_tier != self.skill_tier:
            return False
        if self.min_rating is not None and player.current_rating < self.min_rating:
            return False
        if self.max_rating is not None and player.current_rating > self.max_rating:
            return False
        return True


@dataclass(frozen=True)
class Team:
    """Two players grouped for a single match."""

    players: tuple[Player, ...]
    strength: float
    average_tier_ordinal: float
    combined_win_rate: float

    @property
    def player_ids(self) -> tuple[str, ...]:
        return tuple(player.player_id for player in self.players)


@dataclass(frozen=True)
class Partition:
    """Best 2v2 split found by the partitioner."""

    team_a: Team
    team_b: Team
    strength_gap: float

    def as_payload(self) -> dict[str, Any]:
        return {
            "team_a": {
                "player_ids": list(self.team_a.player_ids),
                "strength": self.team_a.strength,
                "average_tier_ordinal": self.team_a.average_tier_ordinal,
                "combined_win_rate": self.team_a.combined_win_rate,
            },
            "team_b": {
                "player_ids": list(self.team_b.player_ids),
                "strength": self.team_b.strength,
                "average_tier_ordinal": self.team_b.average_tier_ordinal,
                "combined_win_rate": self.team_b.combined_win_rate,
            },
            "strength_gap": self.strength_gap,
        }


@dataclass(frozen=True)
class MatchOutcome:
    """Final score of a recorded doubles match."""

    match_id: str
    team_a: tuple[str, ...]
    team_b: tuple[str, ...]
    score_a: int
    score_b: int
    played_at: datetime = field(default_factory=lambda: datetime.now(UTC).replace(tzinfo=None))

    def validate(self) -> None:
        if not str(self.match_id).strip():
            raise InvalidOutcomeError("match_id is required")
        for label, team in (("team_a", self.team_a), ("team_b", self.team_b)):
            if len(team) != 2 or any(not player_id for player_id in team):
                raise InvalidOutcomeError(
                    f"match_id={self.match_id} {label} needs exactly 2 player ids, got {list(team)}"
                )
        if len(set(self.player_ids)) != len(self.player_ids):
            raise InvalidOutcomeError(
                f"match_id={self.match_id} lists a player more than once: {list(self.player_ids)}"
            )
        if self.score_a < 0 or self.score_b < 0:
            raise InvalidOutcomeError(
                f"match_id={self.match_id} has negative scores ({self.score_a}-{self.score_b})"
            )
        if self.score_a == self.score_b:
            raise InvalidOutcomeError(
                f"match_id={self.match_id} is tied at {self.score_a}; a winner is required"
            )

    @property
    def player_ids(self) -> tuple[str, ...]:
        return tuple(self.team_a) + tuple(self.team_b)

    @property
    def team_a_won(self) -> bool:
        return self.score_a > self.score_b

    @property
    def winning_side(self) -> str:
        """``"A"`` or ``"B"``."""
        return "A" if self.team_a_won else "B"

    @property
    def winner(self) -> tuple[str, ...]:
        return self.team_a if self.team_a_won else self.team_b

    @property
    def loser(self) -> tuple[str, ...]:
        return self.team_b if self.team_a_won else self.team_a

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> MatchOutcome:
        try:
            played_at_raw = payload.get("played_at")
            played_at = (
                datetime.now(UTC).replace(tzinfo=None)
                if played_at_raw is None
                else _naive_utc(datetime.fromisoformat(str(played_at_raw)))
            )
            return cls(
                match_id=str(payload["match_id"]),
                team_a=tuple(str(player_id) for player_id in payload["team_a"]),
                team_b=tuple(str(player_id) for player_id in payload["team_b"]),
                score_a=int(payload["score_a"]),
                score_b=int(payload["score_b"]),
                played_at=played_at,
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidOutcomeError(f"Malformed match outcome payload: {exc}") from exc

    def as_payload(self) -> dict[str, Any]:
        return {
            "match_id": self.match_id,
            "team_a": list(self.team_a),
            "team_b": list(self.team_b),
            "score_a": self.score_a,
            "score_b": self.score_b,
            "played_at": self.played_at.isoformat(),
        }


@dataclass(frozen=True)
class MatchHistoryEntry:
    """Per-player record of one rated match."""

    player_id: str
    match_id: str
    played_at: datetime
    partner_id: str | None
    opponent_ids: tuple[str, ...]
    won: bool
    score_for: int
    score_against: int
    rating_before: int
    rating_after: int
    rating_delta: int


@dataclass(frozen=True)
class RatingChange:
    player_id: str
    won: bool
    rating_before: int
    rating_after: int
    rating_delta: int


@dataclass(frozen=True)
class MatchUpdateResult:
    """Everything a caller needs after one match has been applied."""

    outcome: MatchOutcome
    players: tuple[Player, ...]
    changes: tuple[RatingChange, ...]

    def as_payload(self) -> dict[str, Any]:
        return {
            "match": self.outcome.as_payload(),
            "players": [player.as_payload() for player in self.players],
            "changes": [
                {
                    "player_id": change.player_id,
                    "won": change.won,
                    "rating_before": change.rating_before,
                    "rating_after": change.rating_after,
                    "rating_delta": change.rating_delta,
                }
                for change in self.changes
            ],
        }


def _isoformat(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(UTC).replace(tzinfo=None)


__all__ = [
    "NEUTRAL_WIN_RATE",
    "MatchHistoryEntry",
    "MatchOutcome",
    "MatchUpdateResult",
    "Partition",
    "Player",
    "PlayerFilter",
    "RatingChange",
    "Team",
]
