"""Unit tests for match outcome validation and payloads."""

from __future__ import annotations

import json
from datetime import datetime

import pytest

from domain.common import MatchOutcome
from domain.errors import InvalidOutcomeError


def _outcome(**overrides: object) -> MatchOutcome:
    values: dict[str, object] = {
        "match_id": "m1",
        "team_a": ("a1", "a2"),
        "team_b": ("b1", "b2"),
        "score_a": 21,
        "score_b": 19,
        "played_at": datetime(2026, 3, 4, 18, 30, 0),
    }
    values.update(overrides)
    return MatchOutcome(**values)  # type: ignore[arg-type]


def test_winner_and_loser_follow_scores() -> None:
    outcome = _outcome(score_a=12, score_b=21)
    outcome.validate()
    assert outcome.winner == ("b1", "b2")
    assert outcome.loser == ("a1", "a2")
    assert not outcome.team_a_won
    assert outcome.winning_side == "B"
    assert _outcome().winning_side == "A"


def test_tie_is_rejected() -> None:
    with pytest.raises(InvalidOutcomeError, match="tied"):
        _outcome(score_a=21, score_b=21).validate()


@pytest.mark.parametrize(
    "overrides",
    [
        {"team_a": ("a1",)},
        {"team_b": ("b1", "")},
        {"team_a": ("a1", "a2", "a3")},
        {"team_b": ("a1", "b2")},
        {"score_a": -1},
        {"match_id": " "},
    ],
)
def test_malformed_outcomes_are_rejected(overrides: dict[str, object]) -> None:
    with pytest.raises(InvalidOutcomeError):
        _outcome(**overrides).validate()


def test_payload_survives_json() -> None:
    outcome = _outcome()
    restored = MatchOutcome.from_payload(json.loads(json.dumps(outcome.as_payload())))
    assert restored == outcome


def test_malformed_payload_raises_invalid_outcome() -> None:
    with pytest.raises(InvalidOutcomeError, match="Malformed"):
        MatchOutcome.from_payload({"match_id": "m1", "team_a": ["a1", "a2"]})


def test_offset_timestamps_are_stored_as_naive_utc() -> None:
    payload = _outcome().as_payload()
    payload["played_at"] = "2026-03-04T20:30:00+02:00"
    restored = MatchOutcome.from_payload(payload)
    assert restored.played_at == datetime(2026, 3, 4, 18, 30, 0)
    assert restored.played_at.tzinfo is None
