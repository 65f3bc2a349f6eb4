"""Unit tests for the strength model."""

from __future__ import annotations

import pytest

from domain.balancing.strength import strength, team_strength
from domain.common import Player
from domain.config import EngineParameters, SkillTier
from domain.errors import UnknownTierError


def _player(player_id: str, tier: SkillTier, *, wins: int = 0, losses: int = 0) -> Player:
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


def test_new_player_uses_neutral_win_rate() -> None:
    player = _player("pro", SkillTier.PRO)
    assert player.win_rate == pytest.approx(0.5)
    # 3.0 * 0.6 + 0.5 * 3 * 0.4
    assert strength(player) == pytest.approx(2.4)


@pytest.mark.parametrize(
    ("tier", "wins", "losses", "expected"),
    [
        (SkillTier.BEGINNER, 0, 4, 0.6),
        (SkillTier.INTERMEDIATE, 3, 1, 1.2 + 0.9),
        (SkillTier.ADVANCED, 5, 5, 1.5 + 0.6),
        (SkillTier.PRO, 10, 0, 1.8 + 1.2),
    ],
)
def test_strength_blends_tier_and_win_rate(
    tier: SkillTier, wins: int, losses: int, expected: float
) -> None:
    assert strength(_player("p", tier, wins=wins, losses=losses)) == pytest.approx(expected)


def test_weights_come_from_parameters() -> None:
    params = EngineParameters(tier_weight=1.0, form_weight=0.0)
    player = _player("p", SkillTier.ADVANCED, wins=9, losses=1)
    assert strength(player, params) == pytest.approx(2.5)


def test_team_strength_is_order_invariant() -> None:
    first = _player("a", SkillTier.PRO, wins=7, losses=3)
    second = _player("b", SkillTier.BEGINNER, wins=1, losses=4)
    assert team_strength([first, second]) == pytest.approx(team_strength([second, first]))


def test_team_strength_uses_average_tier_and_win_rate() -> None:
    first = _player("a", SkillTier.PRO, wins=8, losses=2)
    second = _player("b", SkillTier.INTERMEDIATE, wins=2, losses=8)
    # avg ordinal 2.5, avg win rate 0.5
    assert team_strength([first, second]) == pytest.approx(2.5 * 0.6 + 0.5 * 3 * 0.4)


def test_empty_team_has_zero_strength() -> None:
    assert team_strength([]) == 0.0


def test_unknown_tier_is_rejected() -> None:
    player = Player(
        player_id="x",
        name="X",
        skill_tier="LEGEND",
        current_rating=1200,
        peak_rating=1200,
        initial_rating=1200,
    )
    with pytest.raises(UnknownTierError):
        strength(player)
