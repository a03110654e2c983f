"""Storm League draft order.

16 steps, indices 0-15:
    Opening bans (4): A, B, A, B
    First picks (5):  A, B, B, A, A
    Mid bans (2):     B, A
    Final picks (5):  B, B, A, A, B

Each step selects exactly one hero. Labels such as "Pick 2" name the
team's nth pick, not a multi-hero step.
"""
from typing import Optional

from hots_fever.models.draft import DraftState, DraftStep, StepType, Team

DRAFT_SEQUENCE: tuple[DraftStep, ...] = (
    # Opening bans
    DraftStep(Team.A, StepType.BAN, "Ban 1"),
    DraftStep(Team.B, StepType.BAN, "Ban 1"),
    DraftStep(Team.A, StepType.BAN, "Ban 2"),
    DraftStep(Team.B, StepType.BAN, "Ban 2"),
    # First picks
    DraftStep(Team.A, StepType.PICK, "Pick 1"),
    DraftStep(Team.B, StepType.PICK, "Pick 1"),
    DraftStep(Team.B, StepType.PICK, "Pick 2"),
    DraftStep(Team.A, StepType.PICK, "Pick 2"),
    DraftStep(Team.A, StepType.PICK, "Pick 3"),
    # Mid bans
    DraftStep(Team.B, StepType.BAN, "Ban 3"),
    DraftStep(Team.A, StepType.BAN, "Ban 3"),
    # Final picks
    DraftStep(Team.B, StepType.PICK, "Pick 3"),
    DraftStep(Team.B, StepType.PICK, "Pick 4"),
    DraftStep(Team.A, StepType.PICK, "Pick 4"),
    DraftStep(Team.A, StepType.PICK, "Pick 5"),
    DraftStep(Team.B, StepType.PICK, "Pick 5"),
)

TOTAL_STEPS = len(DRAFT_SEQUENCE)


def get_step(step_index: int) -> Optional[DraftStep]:
    """Get the step at an index, or None outside the sequence."""
    if step_index < 0 or step_index >= TOTAL_STEPS:
        return None
    return DRAFT_SEQUENCE[step_index]


def is_draft_complete(step_index: int) -> bool:
    return step_index >= TOTAL_STEPS


def _selected_for(state: DraftState, team: Team, step_type: StepType) -> list[str]:
    heroes = []
    for index in range(min(state.current_step, TOTAL_STEPS)):
        step = DRAFT_SEQUENCE[index]
        hero = state.selections.get(index)
        if hero and step.team == team and step.type == step_type:
            heroes.append(hero)
    return heroes


def get_team_picks(state: DraftState, team: Team) -> list[str]:
    """Heroes picked by a team so far, in draft order."""
    return _selected_for(state, team, StepType.PICK)


def get_team_bans(state: DraftState, team: Team) -> list[str]:
    """Heroes banned by a team so far, in draft order."""
    return _selected_for(state, team, StepType.BAN)


def get_unavailable_heroes(state: DraftState) -> set[str]:
    """Every hero already banned or picked by either side."""
    return set(state.selections.values())


def describe_turn(step_index: int, our_team: Team) -> str:
    """Human-readable turn label, e.g. 'YOUR TEAM - Pick 2'."""
    step = get_step(step_index)
    if step is None:
        return "Draft complete"
    owner = "YOUR TEAM" if step.team == our_team else "OPPONENT"
    return f"{owner} - {step.label}"
