"""Business logic services."""

from hots_fever.services.draft_recommendation_engine import (
    DraftPolicy,
    DraftRecommendationEngine,
    generate_recommendations,
)
from hots_fever.services.draft_state_machine import create_initial_state, draft_reducer

__all__ = [
    "DraftPolicy",
    "DraftRecommendationEngine",
    "generate_recommendations",
    "create_initial_state",
    "draft_reducer",
]
