"""Player competency models."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class HeroCompetency:
    """How well a player plays one hero. win_rate is a percentage (0-100)."""

    hero: str
    win_rate: float
    games: int
    competency_score: float
    map_bonus: bool = False
    role: Optional[str] = None


@dataclass
class PlayerCompetency:
    """A roster member's hero pool, sorted by competency_score descending."""

    battletag: str
    slot: int
    top_heroes: list[HeroCompetency] = field(default_factory=list)
    total_games: int = 0
    overall_win_rate: float = 0.0

    def get_hero(self, hero: str) -> Optional[HeroCompetency]:
        return next((h for h in self.top_heroes if h.hero == hero), None)


@dataclass
class HeroRecord:
    """A player's lifetime record on one hero (percent win rate)."""

    hero: str
    win_rate: float
    games: int


@dataclass
class MapRecord:
    """A player's per-hero records on one map."""

    map: str
    heroes: list[HeroRecord] = field(default_factory=list)


@dataclass
class PlayerData:
    """Previously-fetched player stats used to build competencies."""

    hero_stats: list[HeroRecord] = field(default_factory=list)
    map_stats: list[MapRecord] = field(default_factory=list)
    total_games: int = 0
    overall_win_rate: float = 0.0
