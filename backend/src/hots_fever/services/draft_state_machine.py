"""Draft session reducer.

draft_reducer is the only way to change a DraftState. It never mutates
its input; illegal or malformed actions return the state unchanged.

Phase transitions: setup -> drafting -> complete. UNDO steps back one
selection without touching the phase; only RESET returns to setup.
"""
import logging
from dataclasses import replace

from hots_fever.models.draft import (
    DraftAction,
    DraftActionType,
    DraftPhase,
    DraftState,
    PlayerSlot,
)
from hots_fever.services.draft_sequence import TOTAL_STEPS

logger = logging.getLogger(__name__)


def create_initial_state() -> DraftState:
    """Fresh setup-phase state with five empty roster slots."""
    return DraftState()


def draft_reducer(state: DraftState, action: DraftAction) -> DraftState:
    """Apply one action and return the resulting state."""
    handler = _HANDLERS.get(action.type)
    if handler is None:
        return state
    return handler(state, action)


def _set_map(state: DraftState, action: DraftAction) -> DraftState:
    if not action.map:
        return state
    return replace(state, map=action.map)


def _set_tier(state: DraftState, action: DraftAction) -> DraftState:
    if action.tier is None:
        return state
    return replace(state, tier=action.tier)


def _set_team(state: DraftState, action: DraftAction) -> DraftState:
    if action.team is None:
        return state
    return replace(state, our_team=action.team)


def _set_player(state: DraftState, action: DraftAction) -> DraftState:
    index = action.slot_index
    if index is None or not 0 <= index < len(state.player_slots):
        return state
    slots = list(state.player_slots)
    slots[index] = PlayerSlot(battletag=action.battletag or None)
    return replace(state, player_slots=slots)


def _start_draft(state: DraftState, action: DraftAction) -> DraftState:
    if not state.map or state.phase != DraftPhase.SETUP:
        return state
    return replace(state, phase=DraftPhase.DRAFTING)


def _select_hero(state: DraftState, action: DraftAction) -> DraftState:
    if state.phase == DraftPhase.SETUP or state.current_step >= TOTAL_STEPS:
        return state
    if not action.hero or action.hero in state.selections.values():
        logger.debug(f"Ignoring selection of unavailable hero {action.hero!r}")
        return state

    selections = {**state.selections, state.current_step: action.hero}
    next_step = state.current_step + 1
    phase = DraftPhase.COMPLETE if next_step >= TOTAL_STEPS else DraftPhase.DRAFTING
    return replace(state, selections=selections, current_step=next_step, phase=phase)


def _assign_player(state: DraftState, action: DraftAction) -> DraftState:
    if action.step_index is None or not action.battletag:
        return state
    if action.step_index not in state.selections:
        return state
    assignments = {**state.player_assignments, action.step_index: action.battletag}
    return replace(state, player_assignments=assignments)


def _undo(state: DraftState, action: DraftAction) -> DraftState:
    if state.current_step <= 0:
        return state
    prev_step = state.current_step - 1
    selections = {k: v for k, v in state.selections.items() if k != prev_step}
    assignments = {k: v for k, v in state.player_assignments.items() if k != prev_step}
    return replace(
        state,
        selections=selections,
        player_assignments=assignments,
        current_step=prev_step,
    )


def _reset(state: DraftState, action: DraftAction) -> DraftState:
    return create_initial_state()


_HANDLERS = {
    DraftActionType.SET_MAP: _set_map,
    DraftActionType.SET_TIER: _set_tier,
    DraftActionType.SET_TEAM: _set_team,
    DraftActionType.SET_PLAYER: _set_player,
    DraftActionType.START_DRAFT: _start_draft,
    DraftActionType.SELECT_HERO: _select_hero,
    DraftActionType.ASSIGN_PLAYER: _assign_player,
    DraftActionType.UNDO: _undo,
    DraftActionType.RESET: _reset,
}
