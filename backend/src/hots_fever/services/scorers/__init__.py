"""Scoring components for the draft recommendation engine."""
from hots_fever.services.scorers.hero_strength_scorer import HeroStrengthScorer
from hots_fever.services.scorers.matchup_calculator import MatchupCalculator
from hots_fever.services.scorers.player_strength_scorer import PlayerStrengthScorer
from hots_fever.services.scorers.role_composition_scorer import RoleCompositionScorer

__all__ = [
    "HeroStrengthScorer",
    "MatchupCalculator",
    "PlayerStrengthScorer",
    "RoleCompositionScorer",
]
