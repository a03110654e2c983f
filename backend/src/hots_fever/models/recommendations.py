"""Recommendation models for draft suggestions."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Literal, Optional

from hots_fever.models.competency import HeroCompetency

Priority = Literal["critical", "important", "nice-to-have"]

PRIORITY_ORDER: dict[str, int] = {"critical": 0, "important": 1, "nice-to-have": 2}


class ReasonType(str, Enum):
    """Kinds of justification attached to a recommendation."""

    HERO_WR = "hero_wr"              # Hero base win rate delta from 50%
    COUNTER = "counter"              # Counter delta vs an opposing hero
    SYNERGY = "synergy"              # Synergy delta with an ally hero
    ROLE_NEED = "role_need"          # Fills a needed role
    ROLE_PENALTY = "role_penalty"    # Duplicate healer/tank, support stacking
    PLAYER_STRONG = "player_strong"  # A roster player is strong on this hero
    BAN_WORTHY = "ban_worthy"        # High win/ban rate, threat to our comp


@dataclass
class RecommendationReason:
    """One justification line. delta is in percentage points."""

    type: ReasonType
    label: str
    delta: float


@dataclass
class DraftRecommendation:
    """A scored candidate hero for the current draft step."""

    hero: str
    net_delta: float
    reasons: list[RecommendationReason] = field(default_factory=list)
    suggested_player: Optional[str] = None

    def to_dict(self) -> dict:
        """Serialize to dictionary for JSON response."""
        data = asdict(self)
        data["reasons"] = [
            {"type": r.type.value, "label": r.label, "delta": r.delta} for r in self.reasons
        ]
        return data


@dataclass
class RoleNeed:
    """A team-composition need and the heroes that would fill it."""

    role: str
    priority: Priority
    heroes: list[str] = field(default_factory=list)


@dataclass
class AssignedPlayer:
    battletag: str
    slot: int


@dataclass
class HeroRecommendation:
    """A candidate hero paired with the roster player best suited to it."""

    hero: str
    player: Optional[AssignedPlayer]
    competency: Optional[HeroCompetency]
    reasoning: str
    priority: Priority
    no_one_competent: bool


@dataclass
class RecommendationResult:
    """Matcher output: at most 10 recommendations plus composition warnings."""

    recommendations: list[HeroRecommendation] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
