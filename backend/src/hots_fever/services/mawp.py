"""Momentum-Adjusted Win Percentage (MAWP).

Estimates a player's current win probability on a hero, combining three
mechanisms:

1. Game-count weighting - recent games matter more:
   w_games(rank) = 1.0                             if rank <= 30
   w_games(rank) = exp(-LAMBDA_G * (rank - 30))    otherwise
   LAMBDA_G = ln(2) / 30  (half-life of 30 games past the cliff)

2. Time-decay blending - old outcomes blend toward 50%:
   w_time(days) = 1.0                              if days <= 180
   w_time(days) = exp(-LAMBDA_T * (days - 180))    otherwise
   LAMBDA_T = ln(2) / 90  (half-life of 90 days past the cliff)

   effective_outcome = outcome * w_time + 0.5 * (1 - w_time)

   An old loss drifts toward a coin flip instead of disappearing.

3. Bayesian padding - with fewer than 30 games, (30 - n) phantom 50%
   observations at full weight are added, shrinking small samples to 50%.

   MAWP = (SUM(w_games * effective_outcome) + 0.5 * phantoms)
        / (SUM(w_games) + phantoms)

Results are fractions in [0, 1]; multiply by 100 only for display.
"""

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Iterable, Literal, Optional, Sequence

from hots_fever.models.match import MatchRecord

LAMBDA_G = math.log(2) / 30
LAMBDA_T = math.log(2) / 90

# Pad up to this many games; also the full-confidence game count
CONFIDENCE_THRESHOLD = 30

GAME_COUNT_CLIFF = 30
TIME_CLIFF_DAYS = 180
RECENT_WINDOW = 20
RECENT_MIN_GAMES = 5

SECONDS_PER_DAY = 86400

ConfidenceLabel = Literal["low", "limited", "high"]


def game_count_weight(rank: int) -> float:
    """Weight for a match at the given 1-based recency rank (1 = newest)."""
    if rank <= GAME_COUNT_CLIFF:
        return 1.0
    return math.exp(-LAMBDA_G * (rank - GAME_COUNT_CLIFF))


def time_weight(days_diff: float) -> float:
    """Blend factor for a match played `days_diff` days ago.

    Used to pull the outcome toward 50%, not as a weight multiplier.
    """
    if days_diff <= TIME_CLIFF_DAYS:
        return 1.0
    return math.exp(-LAMBDA_T * (days_diff - TIME_CLIFF_DAYS))


def _as_aware(moment: datetime) -> datetime:
    # Naive datetimes are treated as UTC so mixed inputs still compare
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


def _days_between(earlier: datetime, later: datetime) -> float:
    return (_as_aware(later) - _as_aware(earlier)).total_seconds() / SECONDS_PER_DAY


def compute_mawp(matches: Sequence[MatchRecord], now: Optional[datetime] = None) -> float:
    """Compute MAWP from a list of matches.

    Args:
        matches: Match records in any order. Not mutated.
        now: Reference time for time decay. Defaults to the current UTC time.

    Returns:
        MAWP as a fraction in [0, 1]. Exactly 0.5 for empty input.
    """
    if not matches:
        return 0.5

    ref_time = now or datetime.now(timezone.utc)
    newest_first = sorted(matches, key=lambda m: _as_aware(m.game_date), reverse=True)

    weighted_sum = 0.0
    weight_sum = 0.0

    for rank, match in enumerate(newest_first, start=1):
        w_games = game_count_weight(rank)
        w_time = time_weight(_days_between(match.game_date, ref_time))

        outcome = 1.0 if match.win else 0.0
        effective_outcome = outcome * w_time + 0.5 * (1.0 - w_time)

        weighted_sum += w_games * effective_outcome
        weight_sum += w_games

    if len(newest_first) < CONFIDENCE_THRESHOLD:
        phantom_count = CONFIDENCE_THRESHOLD - len(newest_first)
        weighted_sum += phantom_count * 0.5
        weight_sum += phantom_count

    return weighted_sum / weight_sum if weight_sum > 0 else 0.5


def compute_mawp_percent(matches: Sequence[MatchRecord], now: Optional[datetime] = None) -> float:
    """Compute MAWP as a percentage (0-100)."""
    return compute_mawp(matches, now) * 100


def confidence_adjusted_mawp(
    mawp: Optional[float],
    win_rate: float,
    games: int,
    confidence_threshold: int = CONFIDENCE_THRESHOLD,
) -> float:
    """Blend MAWP with the raw win rate according to sample size.

    MAWP gets weight min(games / threshold, 1), the raw win rate gets the
    complement. Both inputs must share a unit (fraction or percent); the
    result is in that unit. A missing MAWP falls back to the raw win rate.
    """
    if mawp is None:
        return win_rate
    if confidence_threshold <= 0:
        return mawp
    weight = min(max(games, 0) / confidence_threshold, 1.0)
    return weight * mawp + (1.0 - weight) * win_rate


def confidence_label(games: int, confidence_threshold: int = CONFIDENCE_THRESHOLD) -> ConfidenceLabel:
    """Label how much a MAWP value can be trusted."""
    if games < confidence_threshold / 3:
        return "low"
    if games < confidence_threshold:
        return "limited"
    return "high"


@dataclass
class HeroMatchSummary:
    """Per-hero aggregate derived from match history. Rates are fractions."""

    hero: str
    games: int
    wins: int
    win_rate: float
    mawp: float
    recent_win_rate: Optional[float]
    trend: Optional[float]


def summarize_hero_matches(
    hero: str,
    matches: Iterable[MatchRecord],
    now: Optional[datetime] = None,
) -> HeroMatchSummary:
    """Aggregate one hero's matches into win rate, MAWP and recent form.

    recent_win_rate covers the newest 20 games and needs at least 5;
    trend is recent_win_rate minus the lifetime win rate.
    """
    records = list(matches)
    games = len(records)
    wins = sum(1 for m in records if m.win)
    win_rate = wins / games if games else 0.0

    newest_first = sorted(records, key=lambda m: _as_aware(m.game_date), reverse=True)
    recent = newest_first[:RECENT_WINDOW]
    recent_win_rate = None
    trend = None
    if len(recent) >= RECENT_MIN_GAMES:
        recent_win_rate = sum(1 for m in recent if m.win) / len(recent)
        trend = recent_win_rate - win_rate

    return HeroMatchSummary(
        hero=hero,
        games=games,
        wins=wins,
        win_rate=win_rate,
        mawp=compute_mawp(records, now),
        recent_win_rate=recent_win_rate,
        trend=trend,
    )
