"""Draft state, step and action models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Team(str, Enum):
    """Draft sides. 'A' has first ban and first pick."""

    A = "A"
    B = "B"

    @property
    def opponent(self) -> "Team":
        return Team.B if self is Team.A else Team.A


class StepType(str, Enum):
    BAN = "ban"
    PICK = "pick"


class DraftPhase(str, Enum):
    """Lifecycle of a draft session."""

    SETUP = "setup"
    DRAFTING = "drafting"
    COMPLETE = "complete"


class SkillTier(str, Enum):
    """Coarse skill bucket used to select aggregate stats."""

    LOW = "low"
    MID = "mid"
    HIGH = "high"


@dataclass(frozen=True)
class DraftStep:
    """A single ban or pick turn. Every step selects exactly one hero."""

    team: Team
    type: StepType
    label: str


@dataclass(frozen=True)
class PlayerSlot:
    """A roster slot on our team. battletag=None means generic stats only."""

    battletag: Optional[str] = None


def _empty_slots() -> list[PlayerSlot]:
    return [PlayerSlot() for _ in range(5)]


@dataclass
class DraftState:
    """Complete state of a draft session.

    selections maps step index -> hero and only holds indices below
    current_step. player_assignments maps step index -> battletag for
    our own picks.
    """

    phase: DraftPhase = DraftPhase.SETUP
    map: Optional[str] = None
    tier: SkillTier = SkillTier.MID
    our_team: Team = Team.A
    current_step: int = 0
    selections: dict[int, str] = field(default_factory=dict)
    player_slots: list[PlayerSlot] = field(default_factory=_empty_slots)
    player_assignments: dict[int, str] = field(default_factory=dict)

    @property
    def enemy_team(self) -> Team:
        return self.our_team.opponent

    @property
    def battletags(self) -> list[str]:
        """Battletags assigned to our roster slots, in slot order."""
        return [slot.battletag for slot in self.player_slots if slot.battletag]


class DraftActionType(str, Enum):
    """The only legal state mutations."""

    SET_MAP = "SET_MAP"
    SET_TIER = "SET_TIER"
    SET_TEAM = "SET_TEAM"
    SET_PLAYER = "SET_PLAYER"
    START_DRAFT = "START_DRAFT"
    SELECT_HERO = "SELECT_HERO"
    ASSIGN_PLAYER = "ASSIGN_PLAYER"
    UNDO = "UNDO"
    RESET = "RESET"


@dataclass(frozen=True)
class DraftAction:
    """A reducer action. Only the payload fields relevant to `type` are read."""

    type: DraftActionType
    map: Optional[str] = None
    tier: Optional[SkillTier] = None
    team: Optional[Team] = None
    slot_index: Optional[int] = None
    battletag: Optional[str] = None
    hero: Optional[str] = None
    step_index: Optional[int] = None
