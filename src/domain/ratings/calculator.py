"""Fixed-step rating updates applied after each doubles match."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace

from domain.common import MatchHistoryEntry, MatchOutcome, Player
from domain.config import DEFAULT_PARAMETERS, EngineParameters
from domain.errors import PlayerNotFoundError


@dataclass(frozen=True)
class PlayerMatchUpdate:
    """Updated player snapshot plus the history row that explains it."""

    player: Player
    entry: MatchHistoryEntry


class FixedKRatingCalculator:
    """Winners gain ``k_factor`` and losers lose ``k_factor``, clamped to the rating bounds.

    Unlike Elo this ignores the rating gap and expected score entirely.
    """

    def __init__(self, params: EngineParameters = DEFAULT_PARAMETERS) -> None:
        self.params = params

    def rating_delta(self, won: bool) -> int:
        return self.params.k_factor if won else -self.params.k_factor

    def next_rating(self, rating: int, won: bool) -> int:
        return self.params.clamp_rating(rating + self.rating_delta(won))

    def apply_result(
        self,
        player: Player,
        *,
        won: bool,
        score_for: int,
        score_against: int,
        outcome: MatchOutcome,
    ) -> Player:
        post_rating = self.next_rating(player.current_rating, won)
        total_matches = player.total_matches + 1
        current_win_streak = player.current_win_streak + 1 if won else 0
        recent_results = (player.recent_results + (won,))[-self.params.recent_form_window :]
        return replace(
            player,
            current_rating=post_rating,
            peak_rating=max(player.peak_rating, post_rating),
            total_matches=total_matches,
            wins=player.wins + (1 if won else 0),
            losses=player.losses + (0 if won else 1),
            current_win_streak=current_win_streak,
            longest_win_streak=max(player.longest_win_streak, current_win_streak),
            points_for=player.points_for + score_for,
            points_against=player.points_against + score_against,
            recent_results=recent_results,
            last_active_at=outcome.played_at,
        )

    def process_match(
        self,
        outcome: MatchOutcome,
        players: Mapping[str, Player],
    ) -> list[PlayerMatchUpdate]:
        """Return one update per participant, team A first.

        ``outcome`` must already be validated.
        """
        updates: list[PlayerMatchUpdate] = []
        sides = (
            (outcome.team_a, outcome.team_b, outcome.score_a, outcome.score_b),
            (outcome.team_b, outcome.team_a, outcome.score_b, outcome.score_a),
        )
        for team, opponents, score_for, score_against in sides:
            won = score_for > score_against
            for player_id in team:
                player = players.get(player_id)
                if player is None:
                    raise PlayerNotFoundError(player_id)

                updated = self.apply_result(
                    player,
                    won=won,
                    score_for=score_for,
                    score_against=score_against,
                    outcome=outcome,
                )
                partner_id = next((other for other in team if other != player_id), None)
                entry = MatchHistoryEntry(
                    player_id=player_id,
                    match_id=outcome.match_id,
                    played_at=outcome.played_at,
                    partner_id=partner_id,
                    opponent_ids=tuple(opponents),
                    won=won,
                    score_for=score_for,
                    score_against=score_against,
                    rating_before=player.current_rating,
                    rating_after=updated.current_rating,
                    rating_delta=updated.current_rating - player.current_rating,
                )
                updates.append(PlayerMatchUpdate(player=updated, entry=entry))
        return updates


__all__ = ["FixedKRatingCalculator", "PlayerMatchUpdate"]
