"""Precomputed, read-only statistics bundle consumed by the draft engine.

All rates are fractions in [0, 1]. Lookups for unknown heroes or players
return None, which scorers treat as "no data" and skip.
"""

from dataclasses import dataclass, field
from typing import Mapping, Optional


@dataclass(frozen=True)
class HeroStat:
    """Aggregate hero stats for one skill tier."""

    win_rate: float
    pick_rate: float = 0.0
    ban_rate: float = 0.0
    games: int = 0


@dataclass(frozen=True)
class PairStat:
    """Pairwise hero stat: synergy ("with") or counter ("against")."""

    win_rate: float
    games: int = 0


@dataclass(frozen=True)
class PlayerHeroStat:
    """A player's record on one hero."""

    games: int
    wins: int
    win_rate: float
    mawp: Optional[float] = None


@dataclass(frozen=True)
class PlayerMapStat:
    """A player's record on one hero on the selected map."""

    win_rate: float
    games: int


@dataclass(frozen=True)
class DraftData:
    """Statistics for one map/tier combination.

    counters[a][b] is hero a's win rate when facing hero b (asymmetric).
    synergies[a][b] is the win rate of a and b on the same team (symmetric).
    """

    hero_stats: Mapping[str, HeroStat] = field(default_factory=dict)
    hero_map_stats: Mapping[str, PairStat] = field(default_factory=dict)
    synergies: Mapping[str, Mapping[str, PairStat]] = field(default_factory=dict)
    counters: Mapping[str, Mapping[str, PairStat]] = field(default_factory=dict)
    player_stats: Mapping[str, Mapping[str, PlayerHeroStat]] = field(default_factory=dict)
    player_map_stats: Mapping[str, Mapping[str, PlayerMapStat]] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "DraftData":
        return cls()

    def get_hero_stat(self, hero: str) -> Optional[HeroStat]:
        return self.hero_stats.get(hero)

    def get_hero_map_stat(self, hero: str) -> Optional[PairStat]:
        return self.hero_map_stats.get(hero)

    def get_synergy(self, hero: str, ally: str) -> Optional[PairStat]:
        return self.synergies.get(hero, {}).get(ally)

    def get_counter(self, hero: str, opponent: str) -> Optional[PairStat]:
        return self.counters.get(hero, {}).get(opponent)

    def get_player_stat(self, battletag: str, hero: str) -> Optional[PlayerHeroStat]:
        return self.player_stats.get(battletag, {}).get(hero)

    def get_player_map_stat(self, battletag: str, hero: str) -> Optional[PlayerMapStat]:
        return self.player_map_stats.get(battletag, {}).get(hero)
