"""Hero base-strength scoring from aggregate tier stats."""
from typing import Optional

from hots_fever.models.draft_data import DraftData
from hots_fever.models.recommendations import ReasonType, RecommendationReason


def to_points(rate: float) -> float:
    """Convert a win-rate fraction to percentage points away from 50%."""
    return (rate - 0.5) * 100


class HeroStrengthScorer:
    """Scores heroes on overall win rate and community ban rate."""

    MIN_GAMES = 100
    NOISE_FLOOR = 0.5
    # Heroes banned this often are considered contested
    CONTESTED_BAN_RATE = 0.15
    BAN_RATE_FACTOR = 0.1
    # Map win rates shown in labels only above this sample size
    MAP_LABEL_MIN_GAMES = 20

    def win_rate_delta(self, hero: str, data: DraftData) -> Optional[float]:
        """Rounded base win rate delta, or None without a trustworthy sample."""
        stat = data.get_hero_stat(hero)
        if stat is None or stat.games < self.MIN_GAMES:
            return None
        return round(to_points(stat.win_rate), 1)

    def base_reason(self, hero: str, data: DraftData) -> Optional[RecommendationReason]:
        """Hero win rate vs 50%, dropped below the noise floor."""
        delta = self.win_rate_delta(hero, data)
        if delta is None or abs(delta) < self.NOISE_FLOOR:
            return None
        return RecommendationReason(
            type=ReasonType.HERO_WR,
            label=self._win_rate_label(hero, data),
            delta=delta,
        )

    def ban_reasons(self, hero: str, data: DraftData) -> list[RecommendationReason]:
        """Reasons to deny a hero: strong win rate and heavy community bans."""
        stat = data.get_hero_stat(hero)
        if stat is None:
            return []

        reasons = []
        delta = round(to_points(stat.win_rate), 1)
        if delta > 0:
            reasons.append(RecommendationReason(
                type=ReasonType.BAN_WORTHY,
                label=self._win_rate_label(hero, data),
                delta=delta,
            ))

        if stat.ban_rate >= self.CONTESTED_BAN_RATE:
            reasons.append(RecommendationReason(
                type=ReasonType.BAN_WORTHY,
                label=f"{stat.ban_rate * 100:.0f}% ban rate",
                delta=round(stat.ban_rate * 100 * self.BAN_RATE_FACTOR, 1),
            ))

        return reasons

    def _win_rate_label(self, hero: str, data: DraftData) -> str:
        stat = data.get_hero_stat(hero)
        label = f"{stat.win_rate * 100:.1f}% overall WR"
        map_stat = data.get_hero_map_stat(hero)
        if map_stat is not None and map_stat.games >= self.MAP_LABEL_MIN_GAMES:
            label += f", {map_stat.win_rate * 100:.1f}% on this map"
        return label
