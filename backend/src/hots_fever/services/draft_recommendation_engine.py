"""Draft recommendation engine.

Scores every available hero for the current draft step as a sum of
percentage-point deltas from 50%. Each factor contributes only when its
data clears a sample-size gate, so the net delta reads as "how much better
than a coin flip" and every point is explained by a reason line.

Three contexts, decided by the current step:
    - Ban (either team): deny strong, contested or threatening heroes.
    - Our pick: hero strength, counters, synergies, our players, roles.
    - Enemy pick: what the opponent would most like to take.
"""
import logging
from dataclasses import dataclass
from typing import Iterable, Optional

from hots_fever.config import Settings
from hots_fever.models.draft import DraftState, StepType
from hots_fever.models.draft_data import DraftData
from hots_fever.models.recommendations import DraftRecommendation, RecommendationReason
from hots_fever.services.draft_sequence import (
    TOTAL_STEPS,
    get_step,
    get_team_picks,
    get_unavailable_heroes,
)
from hots_fever.services.mawp import CONFIDENCE_THRESHOLD
from hots_fever.services.scorers import (
    HeroStrengthScorer,
    MatchupCalculator,
    PlayerStrengthScorer,
    RoleCompositionScorer,
)
from hots_fever.utils.hero_roles import ALL_HEROES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DraftPolicy:
    """Tunable scoring knobs, in percentage points."""

    role_need_bonus: float = RoleCompositionScorer.ROLE_NEED_BONUS
    secondary_role_bonus: float = RoleCompositionScorer.SECONDARY_ROLE_BONUS
    duplicate_role_penalty: float = RoleCompositionScorer.DUPLICATE_ROLE_PENALTY
    support_stack_penalty: float = RoleCompositionScorer.SUPPORT_STACK_PENALTY
    ban_filled_role_penalty: float = RoleCompositionScorer.BAN_FILLED_ROLE_PENALTY
    confidence_threshold: int = CONFIDENCE_THRESHOLD
    recommendation_limit: int = 15

    @classmethod
    def from_settings(cls, settings: Settings) -> "DraftPolicy":
        return cls(
            role_need_bonus=settings.role_need_bonus,
            secondary_role_bonus=settings.secondary_role_bonus,
            duplicate_role_penalty=settings.duplicate_role_penalty,
            support_stack_penalty=settings.support_stack_penalty,
            ban_filled_role_penalty=settings.ban_filled_role_penalty,
            confidence_threshold=settings.confidence_threshold,
            recommendation_limit=settings.recommendation_limit,
        )


class DraftRecommendationEngine:
    """Ranks candidate heroes for the step a draft is currently on."""

    def __init__(self, policy: Optional[DraftPolicy] = None, hero_pool: Optional[Iterable[str]] = None):
        self.policy = policy or DraftPolicy()
        # Alphabetical pool makes the stable sort break ties by name
        self.hero_pool = tuple(sorted(hero_pool)) if hero_pool is not None else ALL_HEROES
        self.hero_scorer = HeroStrengthScorer()
        self.matchup_calculator = MatchupCalculator()
        self.player_scorer = PlayerStrengthScorer(self.policy.confidence_threshold)
        self.role_scorer = RoleCompositionScorer(
            role_need_bonus=self.policy.role_need_bonus,
            secondary_role_bonus=self.policy.secondary_role_bonus,
            duplicate_role_penalty=self.policy.duplicate_role_penalty,
            support_stack_penalty=self.policy.support_stack_penalty,
            ban_filled_role_penalty=self.policy.ban_filled_role_penalty,
        )

    def get_recommendations(self, state: DraftState, data: DraftData) -> list[DraftRecommendation]:
        """Top recommendations for the current step, best first.

        Returns an empty list once all 16 steps are filled.
        """
        if state.current_step >= TOTAL_STEPS:
            return []
        step = get_step(state.current_step)

        unavailable = get_unavailable_heroes(state)
        candidates = [hero for hero in self.hero_pool if hero not in unavailable]
        our_picks = get_team_picks(state, state.our_team)
        enemy_picks = get_team_picks(state, state.enemy_team)

        if step.type == StepType.BAN:
            context = "ban"
            scored = [self._score_ban(hero, our_picks, enemy_picks, data) for hero in candidates]
        elif step.team == state.our_team:
            context = "our pick"
            available_players = self._unassigned_players(state)
            scored = [
                self._score_our_pick(hero, our_picks, enemy_picks, available_players, data)
                for hero in candidates
            ]
        else:
            context = "enemy pick"
            scored = [self._score_enemy_pick(hero, our_picks, data) for hero in candidates]

        scored.sort(key=lambda rec: rec.net_delta, reverse=True)
        logger.debug(
            f"Step {state.current_step} ({context}): scored {len(scored)} heroes, "
            f"top={scored[0].hero if scored else None}"
        )
        return scored[: self.policy.recommendation_limit]

    def _score_our_pick(
        self,
        hero: str,
        our_picks: list[str],
        enemy_picks: list[str],
        available_players: list[str],
        data: DraftData,
    ) -> DraftRecommendation:
        reasons: list[RecommendationReason] = []

        base = self.hero_scorer.base_reason(hero, data)
        if base:
            reasons.append(base)
        reasons.extend(self.matchup_calculator.counter_reasons(hero, enemy_picks, data))
        reasons.extend(self.matchup_calculator.synergy_reasons(hero, our_picks, data))

        player_reason, suggested_player = self.player_scorer.best_player(hero, available_players, data)
        if player_reason:
            reasons.append(player_reason)

        need = self.role_scorer.role_need_reason(hero, our_picks)
        if need:
            reasons.append(need)
        penalty = self.role_scorer.role_penalty_reason(hero, our_picks)
        if penalty:
            reasons.append(penalty)

        return self._build(hero, reasons, suggested_player)

    def _score_ban(
        self,
        hero: str,
        our_picks: list[str],
        enemy_picks: list[str],
        data: DraftData,
    ) -> DraftRecommendation:
        reasons = self.hero_scorer.ban_reasons(hero, data)
        reasons.extend(self.matchup_calculator.threat_reasons(hero, our_picks, data))
        filled = self.role_scorer.ban_role_reason(hero, enemy_picks)
        if filled:
            reasons.append(filled)
        return self._build(hero, reasons)

    def _score_enemy_pick(
        self,
        hero: str,
        our_picks: list[str],
        data: DraftData,
    ) -> DraftRecommendation:
        """Threats the opponent might take: base strength and counters to our picks.

        Their comp and roster are unknown, so no synergy, role or player terms.
        """
        reasons: list[RecommendationReason] = []
        base = self.hero_scorer.base_reason(hero, data)
        if base:
            reasons.append(base)
        reasons.extend(self.matchup_calculator.counter_reasons(hero, our_picks, data))
        return self._build(hero, reasons)

    @staticmethod
    def _unassigned_players(state: DraftState) -> list[str]:
        assigned = set(state.player_assignments.values())
        return [battletag for battletag in state.battletags if battletag not in assigned]

    @staticmethod
    def _build(
        hero: str,
        reasons: list[RecommendationReason],
        suggested_player: Optional[str] = None,
    ) -> DraftRecommendation:
        net_delta = round(sum((reason.delta for reason in reasons), 0.0), 1)
        return DraftRecommendation(
            hero=hero,
            net_delta=net_delta,
            reasons=reasons,
            suggested_player=suggested_player,
        )


def generate_recommendations(
    state: DraftState,
    data: DraftData,
    policy: Optional[DraftPolicy] = None,
) -> list[DraftRecommendation]:
    """Convenience wrapper around DraftRecommendationEngine."""
    return DraftRecommendationEngine(policy).get_recommendations(state, data)
