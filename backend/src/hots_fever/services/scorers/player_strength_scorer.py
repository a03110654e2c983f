"""Roster player strength on a hero, built on confidence-adjusted MAWP."""
from typing import Iterable, Optional

from hots_fever.models.draft_data import DraftData
from hots_fever.models.recommendations import ReasonType, RecommendationReason
from hots_fever.services.mawp import CONFIDENCE_THRESHOLD, confidence_adjusted_mawp
from hots_fever.services.scorers.hero_strength_scorer import to_points


class PlayerStrengthScorer:
    """Credits the single best available roster player on a hero."""

    MIN_GAMES = 10
    MIN_DELTA = 2.0
    MAP_STRONG_MIN_GAMES = 5
    MAP_STRONG_WIN_RATE = 0.55

    def __init__(self, confidence_threshold: int = CONFIDENCE_THRESHOLD):
        self.confidence_threshold = confidence_threshold

    def best_player(
        self, hero: str, battletags: Iterable[str], data: DraftData
    ) -> tuple[Optional[RecommendationReason], Optional[str]]:
        """Return (reason, battletag) for the strongest player, or (None, None).

        Only players with 10+ games on the hero are considered, and the best
        one is reported only when worth at least +2 points.
        """
        best_tag = None
        best_delta = None
        best_adjusted = 0.0

        for battletag in battletags:
            stat = data.get_player_stat(battletag, hero)
            if stat is None or stat.games < self.MIN_GAMES:
                continue
            adjusted = confidence_adjusted_mawp(
                stat.mawp, stat.win_rate, stat.games, self.confidence_threshold
            )
            delta = round(to_points(adjusted), 1)
            if best_delta is None or delta > best_delta:
                best_tag, best_delta, best_adjusted = battletag, delta, adjusted

        if best_tag is None or best_delta < self.MIN_DELTA:
            return None, None

        label = f"{best_tag.split('#')[0]} {best_adjusted * 100:.1f}% MAWP"
        map_stat = data.get_player_map_stat(best_tag, hero)
        if (
            map_stat is not None
            and map_stat.games >= self.MAP_STRONG_MIN_GAMES
            and map_stat.win_rate >= self.MAP_STRONG_WIN_RATE
        ):
            label += ", strong on this map"

        reason = RecommendationReason(type=ReasonType.PLAYER_STRONG, label=label, delta=best_delta)
        return reason, best_tag
