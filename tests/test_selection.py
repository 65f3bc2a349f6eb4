"""Unit tests for the rotation selection policy."""

from __future__ import annotations

import random
from collections import Counter

import pytest

from domain.balancing.selection import select_candidates
from domain.common import Player
from domain.errors import InsufficientPlayersError


def _player(player_id: str, total_matches: int = 0) -> Player:
    wins = total_matches // 2
    return Player(
        player_id=player_id,
        name=player_id.title(),
        skill_tier="INTERMEDIATE",
        current_rating=1200,
        peak_rating=1200,
        initial_rating=1200,
        total_matches=total_matches,
        wins=wins,
        losses=total_matches - wins,
    )


def test_pool_smaller_than_count_raises() -> None:
    pool = [_player("a"), _player("b"), _player("c")]
    with pytest.raises(InsufficientPlayersError, match="Need at least 4 players") as exc_info:
        select_candidates(pool, 4)
    assert exc_info.value.required == 4
    assert exc_info.value.available == 3


def test_non_positive_count_raises() -> None:
    with pytest.raises(ValueError):
        select_candidates([_player("a")], 0)


def test_fewest_matches_played_are_selected_first() -> None:
    pool = [
        _player("veteran", 30),
        _player("rookie", 0),
        _player("regular", 12),
        _player("newish", 2),
        _player("casual", 5),
    ]
    selected = select_candidates(pool, 4, rng=random.Random(1))
    assert [player.player_id for player in selected] == ["rookie", "newish", "casual", "regular"]


def test_pool_is_not_mutated() -> None:
    pool = [_player("a", 3), _player("b", 1), _player("c", 2), _player("d", 0), _player("e", 0)]
    snapshot = list(pool)
    select_candidates(pool, 4, rng=random.Random(3))
    assert pool == snapshot


def test_tie_break_is_deterministic_for_a_seed() -> None:
    pool = [_player(f"p{index}", 1) for index in range(8)]
    first = select_candidates(pool, 4, rng=random.Random(42))
    second = select_candidates(pool, 4, rng=random.Random(42))
    assert [player.player_id for player in first] == [player.player_id for player in second]


def test_tie_break_only_applies_within_equal_match_counts() -> None:
    pool = [_player("busy", 9)] + [_player(f"fresh{index}", 0) for index in range(4)]
    for seed in range(20):
        selected = select_candidates(pool, 4, rng=random.Random(seed))
        assert "busy" not in {player.player_id for player in selected}


def test_tie_break_does_not_favour_pool_order() -> None:
    pool = [_player(name, 0) for name in ("a", "b", "c", "d")]
    rng = random.Random(2024)
    picks = Counter(select_candidates(pool, 1, rng=rng)[0].player_id for _ in range(4000))
    assert set(picks) == {"a", "b", "c", "d"}
    for count in picks.values():
        assert 800 < count < 1200
