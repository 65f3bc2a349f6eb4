"""Unit tests for fixed-step rating updates."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime

import pytest

from domain.common import MatchOutcome, Player
from domain.config import EngineParameters
from domain.errors import PlayerNotFoundError
from domain.ratings.calculator import FixedKRatingCalculator


def _player(player_id: str, rating: int = 1200, **stats: int) -> Player:
    return Player(
        player_id=player_id,
        name=player_id.title(),
        skill_tier="INTERMEDIATE",
        current_rating=rating,
        peak_rating=max(rating, 1200),
        initial_rating=1200,
        **stats,
    )


def _outcome(score_a: int = 21, score_b: int = 15) -> MatchOutcome:
    return MatchOutcome(
        match_id="m1",
        team_a=("a1", "a2"),
        team_b=("b1", "b2"),
        score_a=score_a,
        score_b=score_b,
        played_at=datetime(2026, 1, 1, 19, 0, 0),
    )


def _players(**ratings: int) -> dict[str, Player]:
    players = {player_id: _player(player_id) for player_id in ("a1", "a2", "b1", "b2")}
    for player_id, rating in ratings.items():
        players[player_id] = _player(player_id, rating)
    return players


def test_winner_gains_and_loser_loses_fixed_k() -> None:
    updates = FixedKRatingCalculator().process_match(_outcome(), _players())
    by_id = {update.player.player_id: update.player for update in updates}

    assert by_id["a1"].current_rating == 1216
    assert by_id["b1"].current_rating == 1184
    assert by_id["a1"].wins == 1
    assert by_id["a1"].losses == 0
    assert by_id["b1"].wins == 0
    assert by_id["b1"].losses == 1
    assert all(player.total_matches == 1 for player in by_id.values())


def test_delta_ignores_rating_gap() -> None:
    updates = FixedKRatingCalculator().process_match(
        _outcome(), _players(a1=2000, a2=2000, b1=900, b2=900)
    )
    deltas = {update.entry.player_id: update.entry.rating_delta for update in updates}
    assert deltas == {"a1": 16, "a2": 16, "b1": -16, "b2": -16}


def test_updates_follow_team_a_then_team_b_order() -> None:
    updates = FixedKRatingCalculator().process_match(_outcome(10, 21), _players())
    assert [update.player.player_id for update in updates] == ["a1", "a2", "b1", "b2"]
    assert [update.entry.won for update in updates] == [False, False, True, True]


def test_rating_is_clamped_to_bounds() -> None:
    updates = FixedKRatingCalculator().process_match(_outcome(), _players(a1=2995, b1=110))
    by_id = {update.entry.player_id: update for update in updates}

    assert by_id["a1"].player.current_rating == 3000
    assert by_id["a1"].entry.rating_delta == 5
    assert by_id["b1"].player.current_rating == 100
    assert by_id["b1"].entry.rating_delta == -10


def test_long_streak_never_leaves_bounds() -> None:
    params = EngineParameters(k_factor=400)
    calculator = FixedKRatingCalculator(params)
    player = _player("a1")
    for _ in range(20):
        player = calculator.apply_result(
            player, won=True, score_for=21, score_against=3, outcome=_outcome()
        )
        assert params.min_rating <= player.current_rating <= params.max_rating
    assert player.current_rating == params.max_rating
    assert player.current_win_streak == 20
    assert player.longest_win_streak == 20


def test_peak_rating_never_decreases() -> None:
    calculator = FixedKRatingCalculator()
    player = _player("a1")
    peaks = [player.peak_rating]
    for won in (True, True, False, False, False, True, False, True, True, True):
        player = calculator.apply_result(
            player, won=won, score_for=21 if won else 15, score_against=15 if won else 21,
            outcome=_outcome(),
        )
        peaks.append(player.peak_rating)
    assert peaks == sorted(peaks)
    assert player.peak_rating >= player.initial_rating
    assert player.peak_rating == 1232
    assert player.current_rating == 1232


def test_loss_resets_streak_and_keeps_longest() -> None:
    calculator = FixedKRatingCalculator()
    player = _player("a1", current_win_streak=4, longest_win_streak=6, total_matches=10, wins=7, losses=3)
    player = calculator.apply_result(player, won=False, score_for=18, score_against=21, outcome=_outcome())
    assert player.current_win_streak == 0
    assert player.longest_win_streak == 6
    assert player.wins + player.losses == player.total_matches
    assert player.win_rate == pytest.approx(7 / 11)


def test_recent_form_window_is_bounded() -> None:
    calculator = FixedKRatingCalculator(EngineParameters(recent_form_window=3))
    player = _player("a1")
    for won in (False, False, True, True, True):
        player = calculator.apply_result(
            player, won=won, score_for=21, score_against=10, outcome=_outcome()
        )
    assert player.recent_results == (True, True, True)
    assert player.recent_form_win_rate == pytest.approx(1.0)
    assert player.win_rate == pytest.approx(0.6)


def test_points_and_activity_are_tracked() -> None:
    outcome = _outcome(21, 17)
    updates = FixedKRatingCalculator().process_match(outcome, _players())
    by_id = {update.player.player_id: update.player for update in updates}
    assert by_id["a1"].points_for == 21
    assert by_id["a1"].points_against == 17
    assert by_id["b2"].average_score_for == pytest.approx(17.0)
    assert by_id["b2"].last_active_at == outcome.played_at


def test_history_entry_records_partner_and_opponents() -> None:
    updates = FixedKRatingCalculator().process_match(_outcome(), _players())
    entry = next(update.entry for update in updates if update.entry.player_id == "b2")
    assert entry.partner_id == "b1"
    assert entry.opponent_ids == ("a1", "a2")
    assert entry.score_for == 15
    assert entry.score_against == 21
    assert entry.rating_before == 1200
    assert entry.rating_after == 1184
    assert entry.rating_delta == entry.rating_after - entry.rating_before


def test_missing_player_raises() -> None:
    players = _players()
    del players["b2"]
    with pytest.raises(PlayerNotFoundError):
        FixedKRatingCalculator().process_match(_outcome(), players)


def test_inputs_are_not_mutated() -> None:
    players = _players()
    snapshot = {player_id: replace(player) for player_id, player in players.items()}
    FixedKRatingCalculator().process_match(_outcome(), players)
    assert players == snapshot
