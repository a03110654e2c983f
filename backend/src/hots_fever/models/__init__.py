"""Data models for the HotS draft assistant."""

from hots_fever.models.match import MatchRecord
from hots_fever.models.draft import (
    DraftAction,
    DraftActionType,
    DraftPhase,
    DraftState,
    DraftStep,
    PlayerSlot,
    SkillTier,
    StepType,
    Team,
)
from hots_fever.models.draft_data import (
    DraftData,
    HeroStat,
    PairStat,
    PlayerHeroStat,
    PlayerMapStat,
)
from hots_fever.models.competency import (
    HeroCompetency,
    HeroRecord,
    MapRecord,
    PlayerCompetency,
    PlayerData,
)
from hots_fever.models.recommendations import (
    DraftRecommendation,
    HeroRecommendation,
    ReasonType,
    RecommendationReason,
    RecommendationResult,
    RoleNeed,
)

__all__ = [
    "MatchRecord",
    "DraftAction",
    "DraftActionType",
    "DraftPhase",
    "DraftState",
    "DraftStep",
    "PlayerSlot",
    "SkillTier",
    "StepType",
    "Team",
    "DraftData",
    "HeroStat",
    "PairStat",
    "PlayerHeroStat",
    "PlayerMapStat",
    "HeroCompetency",
    "HeroRecord",
    "MapRecord",
    "PlayerCompetency",
    "PlayerData",
    "DraftRecommendation",
    "HeroRecommendation",
    "ReasonType",
    "RecommendationReason",
    "RecommendationResult",
    "RoleNeed",
]
