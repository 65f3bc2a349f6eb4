"""Engine facade tying selection, balancing and rating updates to a player store."""

from __future__ import annotations

import random
from collections.abc import Callable, Sequence
from datetime import UTC, datetime
from uuid import uuid4

from domain.balancing.partition import PARTITION_SIZE, partition_teams
from domain.balancing.selection import select_candidates
from domain.balancing.strength import strength, team_strength
from domain.common import MatchOutcome, MatchUpdateResult, Partition, Player, RatingChange
from domain.config import DEFAULT_PARAMETERS, EngineParameters
from domain.errors import DuplicatePlayerError, PlayerNotFoundError
from domain.protocol import PlayerStore
from domain.ratings.advisory import needs_review
from domain.ratings.calculator import FixedKRatingCalculator
from domain.ratings.ranking import recompute_ranks


class PickupEngine:
    """Operations exposed to the outer service layer.

    Balancing calls are pure. Calls that write to the store run inside a
    single store transaction, and the store serializes those transactions
    across the whole pool. Engines holding the same store therefore never
    interleave their read-modify-write.
    """

    def __init__(
        self,
        params: EngineParameters = DEFAULT_PARAMETERS,
        *,
        rng: random.Random | None = None,
    ) -> None:
        self.params = params
        self.rng = rng or random.Random()
        self.calculator = FixedKRatingCalculator(params)

    def strength(self, player: Player) -> float:
        return strength(player, self.params)

    def team_strength(self, players: Sequence[Player]) -> float:
        return team_strength(players, self.params)

    def needs_review(self, player: Player) -> bool:
        return needs_review(player, self.params)

    def select_candidates(self, pool: Sequence[Player], count: int = PARTITION_SIZE) -> list[Player]:
        return select_candidates(pool, count, rng=self.rng)

    def partition_teams(self, players: Sequence[Player]) -> Partition:
        return partition_teams(players, self.params)

    def generate_teams(
        self,
        pool: Sequence[Player],
        selected: Sequence[Player] = (),
    ) -> Partition:
        """Balance a manual selection, or auto-select four players from the pool.

        More than four manual picks are narrowed to four by the rotation
        policy. Fewer than four manual picks are ignored.
        """
        if len(selected) == PARTITION_SIZE:
            players = list(selected)
        elif len(selected) > PARTITION_SIZE:
            players = self.select_candidates(selected, PARTITION_SIZE)
        else:
            players = self.select_candidates(pool, PARTITION_SIZE)
        return self.partition_teams(players)

    def register_player(
        self,
        store: PlayerStore,
        *,
        name: str,
        skill_tier: str,
        email: str | None = None,
        player_id: str | None = None,
    ) -> Player:
        """Create a player at the baseline rating and re-rank the pool.

        An existing ``player_id`` is never overwritten.
        """
        tier = self.params.tier(skill_tier)
        player = Player(
            player_id=player_id or f"player_{uuid4().hex}",
            name=name,
            email=email,
            skill_tier=tier.name,
            current_rating=self.params.initial_rating,
            peak_rating=self.params.initial_rating,
            initial_rating=self.params.initial_rating,
            last_active_at=datetime.now(UTC).replace(tzinfo=None),
        )
        with store.transaction():
            if store.get(player.player_id) is not None:
                raise DuplicatePlayerError(player.player_id)
            store.save(player)
            ranked = self._rerank(store)
        return next(item for item in ranked if item.player_id == player.player_id)

    def recompute_ranks(self, store: PlayerStore) -> list[Player]:
        with store.transaction():
            return self._rerank(store)

    def apply_match_result(
        self,
        store: PlayerStore,
        outcome: MatchOutcome,
        *,
        echo: Callable[[str], None] | None = None,
    ) -> MatchUpdateResult:
        """Rate one finished match and re-rank the whole pool atomically.

        Not safe to retry blindly: resubmitting the same outcome applies
        its rating deltas twice.
        """
        outcome.validate()

        with store.transaction():
            players: dict[str, Player] = {}
            for player_id in outcome.player_ids:
                player = store.get(player_id)
                if player is None:
                    raise PlayerNotFoundError(player_id)
                players[player_id] = player

            updates = self.calculator.process_match(outcome, players)

            store.record_match(outcome)
            for update in updates:
                store.save(update.player)
                store.append_match_history(update.entry)

            ranked = self._rerank(store)

        ranked_by_id = {player.player_id: player for player in ranked}
        result = MatchUpdateResult(
            outcome=outcome,
            players=tuple(ranked_by_id[update.player.player_id] for update in updates),
            changes=tuple(
                RatingChange(
                    player_id=update.entry.player_id,
                    won=update.entry.won,
                    rating_before=update.entry.rating_before,
                    rating_after=update.entry.rating_after,
                    rating_delta=update.entry.rating_delta,
                )
                for update in updates
            ),
        )

        if echo is not None:
            echo(
                f"recorded_match match_id={outcome.match_id} "
                f"score={outcome.score_a}-{outcome.score_b} "
                f"winners={','.join(outcome.winner)} "
                f"updated_players={len(updates)} "
                f"ranked_players={len(ranked)}"
            )
        return result

    def _rerank(self, store: PlayerStore) -> list[Player]:
        ranked = recompute_ranks(store.get_all())
        for player in ranked:
            store.save(player)
        return ranked


__all__ = ["PickupEngine"]
