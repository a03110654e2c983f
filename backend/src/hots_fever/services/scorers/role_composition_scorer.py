"""Team-composition role bonuses and penalties."""
from typing import Iterable, Optional

from hots_fever.models.recommendations import ReasonType, RecommendationReason
from hots_fever.utils.hero_roles import (
    BRUISER,
    DAMAGE_ROLES,
    HEALER,
    MELEE_ASSASSIN,
    SUPPORT,
    TANK,
    calculate_role_balance,
    get_hero_role,
)


class RoleCompositionScorer:
    """Scores a hero against the roles a team already has.

    Values are hand-tuned policy knobs in percentage points.
    """

    ROLE_NEED_BONUS = 3.0
    SECONDARY_ROLE_BONUS = 1.5
    DUPLICATE_ROLE_PENALTY = 15.0
    SUPPORT_STACK_PENALTY = 8.0
    BAN_FILLED_ROLE_PENALTY = 8.0

    def __init__(
        self,
        role_need_bonus: float = ROLE_NEED_BONUS,
        secondary_role_bonus: float = SECONDARY_ROLE_BONUS,
        duplicate_role_penalty: float = DUPLICATE_ROLE_PENALTY,
        support_stack_penalty: float = SUPPORT_STACK_PENALTY,
        ban_filled_role_penalty: float = BAN_FILLED_ROLE_PENALTY,
    ):
        self.role_need_bonus = role_need_bonus
        self.secondary_role_bonus = secondary_role_bonus
        self.duplicate_role_penalty = duplicate_role_penalty
        self.support_stack_penalty = support_stack_penalty
        self.ban_filled_role_penalty = ban_filled_role_penalty

    def role_need_reason(self, hero: str, our_picks: Iterable[str]) -> Optional[RecommendationReason]:
        """Bonus for the team's first Tank, Healer or damage hero.

        A smaller bonus goes to the first Bruiser or Melee Assassin once a
        Tank is in place.
        """
        role = get_hero_role(hero)
        if role is None:
            return None
        balance = calculate_role_balance(our_picks)

        if role == TANK and balance.tank == 0:
            return self._need(f"Fills critical {TANK} need", self.role_need_bonus)
        if role == HEALER and balance.healer == 0:
            return self._need(f"Fills critical {HEALER} need", self.role_need_bonus)
        if role in DAMAGE_ROLES and balance.damage == 0:
            return self._need("Fills critical Damage need", self.role_need_bonus)
        if balance.tank > 0:
            if role == BRUISER and balance.bruiser == 0:
                return self._need(f"Adds a {BRUISER} next to the Tank", self.secondary_role_bonus)
            if role == MELEE_ASSASSIN and balance.melee_assassin == 0:
                return self._need(f"Adds a {MELEE_ASSASSIN} next to the Tank", self.secondary_role_bonus)
        return None

    def role_penalty_reason(self, hero: str, our_picks: Iterable[str]) -> Optional[RecommendationReason]:
        """Penalty for a second Healer or Tank, or a third Support."""
        role = get_hero_role(hero)
        if role is None:
            return None
        balance = calculate_role_balance(our_picks)

        if role in (HEALER, TANK) and balance.count(role) >= 1:
            return RecommendationReason(
                type=ReasonType.ROLE_PENALTY,
                label=f"Second {role}",
                delta=-self.duplicate_role_penalty,
            )
        if role == SUPPORT and balance.support >= 2:
            return RecommendationReason(
                type=ReasonType.ROLE_PENALTY,
                label=f"Too many {SUPPORT} heroes",
                delta=-self.support_stack_penalty,
            )
        return None

    def ban_role_reason(self, hero: str, enemy_picks: Iterable[str]) -> Optional[RecommendationReason]:
        """Banning a Healer/Tank is wasted once the enemy already has one."""
        role = get_hero_role(hero)
        if role not in (HEALER, TANK):
            return None
        if calculate_role_balance(enemy_picks).count(role) == 0:
            return None
        return RecommendationReason(
            type=ReasonType.ROLE_PENALTY,
            label=f"Enemy already has a {role}",
            delta=-self.ban_filled_role_penalty,
        )

    def _need(self, label: str, delta: float) -> RecommendationReason:
        return RecommendationReason(type=ReasonType.ROLE_NEED, label=label, delta=delta)
