"""Unit tests for balanced 2v2 partitioning."""

from __future__ import annotations

import random

import pytest

from domain.balancing.partition import CANDIDATE_PAIRINGS, partition_teams
from domain.balancing.strength import strength, team_strength
from domain.common import Player
from domain.config import SkillTier
from domain.errors import InsufficientPlayersError

_TIERS = list(SkillTier)


def _player(player_id: str, tier: SkillTier, *, wins: int = 5, losses: int = 5) -> Player:
    return Player(
        player_id=player_id,
        name=player_id.title(),
        skill_tier=tier.value,
        current_rating=1200,
        peak_rating=1200,
        initial_rating=1200,
        total_matches=wins + losses,
        wins=wins,
        losses=losses,
    )


def _ids(players: tuple[Player, ...]) -> set[str]:
    return {player.player_id for player in players}


def test_strongest_is_paired_with_weakest_when_that_split_is_closest() -> None:
    players = [
        _player("pro", SkillTier.PRO),
        _player("advanced", SkillTier.ADVANCED),
        _player("intermediate", SkillTier.INTERMEDIATE),
        _player("beginner", SkillTier.BEGINNER),
    ]
    ranked = sorted(players, key=strength, reverse=True)
    gaps = []
    for first, second in CANDIDATE_PAIRINGS:
        team_a = [ranked[first], ranked[second]]
        team_b = [player for index, player in enumerate(ranked) if index not in (first, second)]
        gaps.append(abs(team_strength(team_a) - team_strength(team_b)))
    assert gaps == pytest.approx([0.75, 0.45, 0.15])

    partition = partition_teams(players)

    assert _ids(partition.team_a.players) == {"pro", "beginner"}
    assert _ids(partition.team_b.players) == {"advanced", "intermediate"}
    assert partition.strength_gap == pytest.approx(min(gaps))


def test_equal_gaps_keep_first_candidate_in_input_order() -> None:
    players = [_player(f"p{index}", SkillTier.INTERMEDIATE) for index in range(4)]
    partition = partition_teams(players)
    assert [player.player_id for player in partition.team_a.players] == ["p0", "p1"]
    assert [player.player_id for player in partition.team_b.players] == ["p2", "p3"]
    assert partition.strength_gap == 0.0


def test_partition_is_always_two_disjoint_pairs_covering_input() -> None:
    rng = random.Random(7)
    for round_index in range(200):
        players = []
        for slot in range(4):
            wins = rng.randint(0, 10)
            players.append(
                _player(
                    f"r{round_index}s{slot}",
                    rng.choice(_TIERS),
                    wins=wins,
                    losses=rng.randint(0, 10),
                )
            )
        partition = partition_teams(players)

        team_a = _ids(partition.team_a.players)
        team_b = _ids(partition.team_b.players)
        assert len(partition.team_a.players) == 2
        assert len(partition.team_b.players) == 2
        assert team_a.isdisjoint(team_b)
        assert team_a | team_b == {player.player_id for player in players}


def test_selected_gap_is_minimal_over_candidates() -> None:
    players = [
        _player("a", SkillTier.PRO, wins=9, losses=1),
        _player("b", SkillTier.PRO, wins=2, losses=8),
        _player("c", SkillTier.BEGINNER, wins=8, losses=2),
        _player("d", SkillTier.ADVANCED, wins=5, losses=5),
    ]
    partition = partition_teams(players)
    ranked = sorted(players, key=strength, reverse=True)
    candidate_gaps = [
        abs(
            team_strength([ranked[first], ranked[second]])
            - team_strength([p for i, p in enumerate(ranked) if i not in (first, second)])
        )
        for first, second in CANDIDATE_PAIRINGS
    ]
    assert partition.strength_gap == pytest.approx(min(candidate_gaps))
    assert partition.team_a.strength == pytest.approx(team_strength(partition.team_a.players))


def test_team_carries_aggregate_win_rate_and_tier() -> None:
    players = [
        _player("pro", SkillTier.PRO, wins=8, losses=2),
        _player("advanced", SkillTier.ADVANCED),
        _player("intermediate", SkillTier.INTERMEDIATE),
        _player("beginner", SkillTier.BEGINNER, wins=2, losses=8),
    ]
    partition = partition_teams(players)
    team = partition.team_a if "pro" in _ids(partition.team_a.players) else partition.team_b
    member_rates = [player.win_rate for player in team.players]
    assert team.combined_win_rate == pytest.approx(sum(member_rates) / 2)
    assert partition.as_payload()["strength_gap"] == pytest.approx(partition.strength_gap)


def test_fewer_than_four_players_raises() -> None:
    players = [_player(f"p{index}", SkillTier.PRO) for index in range(3)]
    with pytest.raises(InsufficientPlayersError):
        partition_teams(players)


def test_more_than_four_players_raises() -> None:
    players = [_player(f"p{index}", SkillTier.PRO) for index in range(5)]
    with pytest.raises(ValueError, match="exactly 4"):
        partition_teams(players)


def test_duplicate_players_raise() -> None:
    player = _player("same", SkillTier.PRO)
    with pytest.raises(ValueError, match="Duplicate"):
        partition_teams([player, player, _player("b", SkillTier.PRO), _player("c", SkillTier.PRO)])
