"""Tests for the Storm League draft order."""
import pytest

from hots_fever.models.draft import DraftPhase, DraftState, DraftStep, StepType, Team
from hots_fever.services.draft_sequence import (
    DRAFT_SEQUENCE,
    TOTAL_STEPS,
    describe_turn,
    get_step,
    get_team_bans,
    get_team_picks,
    get_unavailable_heroes,
    is_draft_complete,
)

EXPECTED_ORDER = [
    ("A", "ban"), ("B", "ban"), ("A", "ban"), ("B", "ban"),
    ("A", "pick"), ("B", "pick"), ("B", "pick"), ("A", "pick"), ("A", "pick"),
    ("B", "ban"), ("A", "ban"),
    ("B", "pick"), ("B", "pick"), ("A", "pick"), ("A", "pick"), ("B", "pick"),
]


def test_sequence_order():
    assert TOTAL_STEPS == 16
    assert [(s.team.value, s.type.value) for s in DRAFT_SEQUENCE] == EXPECTED_ORDER


def test_each_step_is_one_selection():
    # Grouped labels like "Pick 2" still mean one hero per step
    assert all(isinstance(step, DraftStep) for step in DRAFT_SEQUENCE)
    for team in Team:
        bans = [s for s in DRAFT_SEQUENCE if s.team == team and s.type == StepType.BAN]
        picks = [s for s in DRAFT_SEQUENCE if s.team == team and s.type == StepType.PICK]
        assert len(bans) == 3
        assert len(picks) == 5
        assert [s.label for s in picks] == [f"Pick {n}" for n in range(1, 6)]
        assert [s.label for s in bans] == [f"Ban {n}" for n in range(1, 4)]


@pytest.mark.parametrize("index", [-1, 16, 100])
def test_get_step_out_of_range(index):
    assert get_step(index) is None


def test_is_draft_complete():
    assert not is_draft_complete(15)
    assert is_draft_complete(16)


def test_team_opponent():
    assert Team.A.opponent is Team.B
    assert Team.B.opponent is Team.A


@pytest.fixture
def mid_draft():
    heroes = ["Zeratul", "Hanzo", "Tracer", "Medivh", "Muradin", "Uther", "Valla", "Rehgar", "Sonya"]
    return DraftState(
        phase=DraftPhase.DRAFTING,
        map="Cursed Hollow",
        current_step=len(heroes),
        selections=dict(enumerate(heroes)),
    )


def test_team_picks_and_bans(mid_draft):
    assert get_team_bans(mid_draft, Team.A) == ["Zeratul", "Tracer"]
    assert get_team_bans(mid_draft, Team.B) == ["Hanzo", "Medivh"]
    assert get_team_picks(mid_draft, Team.A) == ["Muradin", "Rehgar", "Sonya"]
    assert get_team_picks(mid_draft, Team.B) == ["Uther", "Valla"]


def test_unavailable_covers_bans_and_picks(mid_draft):
    unavailable = get_unavailable_heroes(mid_draft)
    assert "Zeratul" in unavailable
    assert "Valla" in unavailable
    assert len(unavailable) == 9


def test_describe_turn():
    assert describe_turn(0, Team.A) == "YOUR TEAM - Ban 1"
    assert describe_turn(1, Team.A) == "OPPONENT - Ban 1"
    assert describe_turn(6, Team.B) == "YOUR TEAM - Pick 2"
    assert describe_turn(16, Team.A) == "Draft complete"
