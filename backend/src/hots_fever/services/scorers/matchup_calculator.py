"""Pairwise counter and synergy deltas.

A pair entry that is missing and an entry under the sample gate are both
"no data": the factor is left out of the sum. Numerically that matches an
exact 50% entry, which contributes 0.
"""
from typing import Iterable, Optional

from hots_fever.models.draft_data import DraftData, PairStat
from hots_fever.models.recommendations import ReasonType, RecommendationReason
from hots_fever.services.scorers.hero_strength_scorer import to_points


class MatchupCalculator:
    """Calculates counter and synergy contributions against picked heroes."""

    MIN_GAMES = 30
    NOISE_FLOOR = 1.0
    # A candidate counters one of our picks hard enough to be worth a ban
    THREAT_WIN_RATE = 0.53

    def pair_delta(self, stat: Optional[PairStat]) -> Optional[float]:
        """Rounded delta for one pair, None for no data or noise."""
        if stat is None or stat.games < self.MIN_GAMES:
            return None
        delta = round(to_points(stat.win_rate), 1)
        if abs(delta) < self.NOISE_FLOOR:
            return None
        return delta

    def counter_reasons(
        self, hero: str, opponents: Iterable[str], data: DraftData
    ) -> list[RecommendationReason]:
        """How `hero` fares against each opposing hero."""
        reasons = []
        for opponent in opponents:
            stat = data.get_counter(hero, opponent)
            delta = self.pair_delta(stat)
            if delta is None:
                continue
            reasons.append(RecommendationReason(
                type=ReasonType.COUNTER,
                label=f"{stat.win_rate * 100:.1f}% vs {opponent}",
                delta=delta,
            ))
        return reasons

    def synergy_reasons(
        self, hero: str, allies: Iterable[str], data: DraftData
    ) -> list[RecommendationReason]:
        """How `hero` pairs with each allied hero."""
        reasons = []
        for ally in allies:
            stat = data.get_synergy(hero, ally)
            delta = self.pair_delta(stat)
            if delta is None:
                continue
            reasons.append(RecommendationReason(
                type=ReasonType.SYNERGY,
                label=f"{stat.win_rate * 100:.1f}% with {ally}",
                delta=delta,
            ))
        return reasons

    def threat_reasons(
        self, hero: str, our_picks: Iterable[str], data: DraftData
    ) -> list[RecommendationReason]:
        """Our picks that `hero` counters strongly (ban-phase denial)."""
        reasons = []
        for pick in our_picks:
            stat = data.get_counter(hero, pick)
            if stat is None or stat.games < self.MIN_GAMES or stat.win_rate < self.THREAT_WIN_RATE:
                continue
            reasons.append(RecommendationReason(
                type=ReasonType.COUNTER,
                label=f"Counters our {pick} ({stat.win_rate * 100:.1f}%)",
                delta=round(to_points(stat.win_rate), 1),
            ))
        return reasons
