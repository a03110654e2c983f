"""Tests for the draft session reducer."""
import copy

import pytest

from hots_fever.models.draft import (
    DraftAction,
    DraftActionType,
    DraftPhase,
    DraftState,
    PlayerSlot,
    SkillTier,
    Team,
)
from hots_fever.services.draft_state_machine import create_initial_state, draft_reducer

ROSTER = [
    "Zeratul", "Hanzo", "Tracer", "Medivh",
    "Muradin", "Uther", "Valla", "Rehgar", "Sonya",
    "Genji", "Malfurion",
    "Johanna", "Raynor", "Li-Ming", "Dehaka", "Abathur",
]


def act(state, type_, **payload):
    return draft_reducer(state, DraftAction(type=type_, **payload))


@pytest.fixture
def drafting():
    state = act(create_initial_state(), DraftActionType.SET_MAP, map="Cursed Hollow")
    return act(state, DraftActionType.START_DRAFT)


def _select_all(state, heroes):
    for hero in heroes:
        state = act(state, DraftActionType.SELECT_HERO, hero=hero)
    return state


def test_initial_state():
    state = create_initial_state()
    assert state.phase == DraftPhase.SETUP
    assert state.current_step == 0
    assert state.player_slots == [PlayerSlot()] * 5
    assert state.selections == {}


class TestSetup:
    def test_setters(self):
        state = create_initial_state()
        state = act(state, DraftActionType.SET_MAP, map="Towers of Doom")
        state = act(state, DraftActionType.SET_TIER, tier=SkillTier.HIGH)
        state = act(state, DraftActionType.SET_TEAM, team=Team.B)
        assert state.map == "Towers of Doom"
        assert state.tier == SkillTier.HIGH
        assert state.our_team == Team.B
        assert state.enemy_team == Team.A

    def test_set_player(self):
        state = act(create_initial_state(), DraftActionType.SET_PLAYER, slot_index=2, battletag="Alice#1")
        assert state.player_slots[2].battletag == "Alice#1"
        assert state.battletags == ["Alice#1"]

        cleared = act(state, DraftActionType.SET_PLAYER, slot_index=2, battletag="")
        assert cleared.player_slots[2].battletag is None

    @pytest.mark.parametrize("slot_index", [-1, 5, None])
    def test_set_player_bad_slot_is_noop(self, slot_index):
        state = create_initial_state()
        assert act(state, DraftActionType.SET_PLAYER, slot_index=slot_index, battletag="X#1") is state

    def test_start_requires_map(self):
        state = create_initial_state()
        assert act(state, DraftActionType.START_DRAFT) is state

    def test_start_draft(self, drafting):
        assert drafting.phase == DraftPhase.DRAFTING
        assert drafting.current_step == 0


class TestSelectHero:
    def test_select_in_setup_is_noop(self):
        state = create_initial_state()
        assert act(state, DraftActionType.SELECT_HERO, hero="Valla") is state

    def test_select_advances_one_step(self, drafting):
        state = act(drafting, DraftActionType.SELECT_HERO, hero="Valla")
        assert state.current_step == 1
        assert state.selections == {0: "Valla"}
        assert state.phase == DraftPhase.DRAFTING

    def test_selected_hero_is_unavailable(self, drafting):
        state = act(drafting, DraftActionType.SELECT_HERO, hero="Valla")
        assert act(state, DraftActionType.SELECT_HERO, hero="Valla") is state

    def test_sixteenth_selection_completes(self, drafting):
        state = _select_all(drafting, ROSTER)
        assert state.current_step == 16
        assert state.phase == DraftPhase.COMPLETE
        assert len(state.selections) == 16

    def test_select_past_end_is_noop(self, drafting):
        state = _select_all(drafting, ROSTER)
        assert act(state, DraftActionType.SELECT_HERO, hero="Tyrael") is state


class TestUndo:
    def test_undo_at_start_is_noop(self, drafting):
        assert act(drafting, DraftActionType.UNDO) is drafting

    def test_undo_removes_selection_and_assignment(self, drafting):
        state = _select_all(drafting, ROSTER[:5])
        state = act(state, DraftActionType.ASSIGN_PLAYER, step_index=4, battletag="Alice#1")
        undone = act(state, DraftActionType.UNDO)
        assert undone.current_step == 4
        assert 4 not in undone.selections
        assert undone.player_assignments == {}

    def test_undo_keeps_complete_phase(self, drafting):
        state = act(_select_all(drafting, ROSTER), DraftActionType.UNDO)
        assert state.current_step == 15
        assert state.phase == DraftPhase.COMPLETE

    @pytest.mark.parametrize("steps", [1, 7, 16])
    def test_undo_then_reselect_round_trips(self, drafting, steps):
        state = _select_all(drafting, ROSTER[:steps])
        redone = act(act(state, DraftActionType.UNDO), DraftActionType.SELECT_HERO, hero=ROSTER[steps - 1])
        assert redone == state


class TestAssignPlayer:
    def test_assign_selected_step(self, drafting):
        state = _select_all(drafting, ROSTER[:5])
        state = act(state, DraftActionType.ASSIGN_PLAYER, step_index=4, battletag="Alice#1")
        assert state.player_assignments == {4: "Alice#1"}

    def test_assign_unselected_step_is_noop(self, drafting):
        assert act(drafting, DraftActionType.ASSIGN_PLAYER, step_index=4, battletag="Alice#1") is drafting


def test_reset(drafting):
    state = _select_all(drafting, ROSTER[:3])
    assert act(state, DraftActionType.RESET) == create_initial_state()


def test_reducer_never_mutates_input(drafting):
    state = act(_select_all(drafting, ROSTER[:5]), DraftActionType.ASSIGN_PLAYER, step_index=4, battletag="A#1")
    snapshot = copy.deepcopy(state)
    for action in [
        DraftAction(DraftActionType.SELECT_HERO, hero="Tyrael"),
        DraftAction(DraftActionType.UNDO),
        DraftAction(DraftActionType.SET_PLAYER, slot_index=0, battletag="B#2"),
        DraftAction(DraftActionType.ASSIGN_PLAYER, step_index=0, battletag="B#2"),
        DraftAction(DraftActionType.RESET),
    ]:
        draft_reducer(state, action)
    assert state == snapshot
    assert isinstance(state, DraftState)
