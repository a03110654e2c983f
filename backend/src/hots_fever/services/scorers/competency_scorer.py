"""Player competency scoring.

Competency combines a player's win rate on a hero with log-scaled
experience and an optional map bonus:

    competency = (win_rate / 100) * ln(games + 1) * map_multiplier

The log factor damps very high game counts, so 60% over 40 games does not
bury 70% over 15 games.
"""
import math
from typing import Optional

from hots_fever.models.competency import (
    HeroCompetency,
    MapRecord,
    PlayerCompetency,
    PlayerData,
)
from hots_fever.utils.hero_roles import get_hero_role

MIN_COMPETENT_GAMES = 5
MIN_COMPETENT_WIN_RATE = 45.0
MIN_GOOD_WIN_RATE = 50.0

MAP_BONUS_MIN_GAMES = 3
MAP_BONUS_MIN_WIN_RATE = 60.0
MAP_BONUS_MULTIPLIER = 1.2


def _has_map_bonus(hero: str, selected_map: Optional[str], map_stats: Optional[list[MapRecord]]) -> bool:
    if not selected_map or not map_stats:
        return False
    map_data = next((m for m in map_stats if m.map == selected_map), None)
    if map_data is None:
        return False
    hero_on_map = next((h for h in map_data.heroes if h.hero == hero), None)
    return (
        hero_on_map is not None
        and hero_on_map.games >= MAP_BONUS_MIN_GAMES
        and hero_on_map.win_rate >= MAP_BONUS_MIN_WIN_RATE
    )


def calculate_hero_competency(
    hero: str,
    win_rate: float,
    games: int,
    selected_map: Optional[str] = None,
    map_stats: Optional[list[MapRecord]] = None,
) -> HeroCompetency:
    """Calculate competency for a single hero. win_rate is a percentage."""
    if games == 0:
        return HeroCompetency(hero=hero, win_rate=0, games=0, competency_score=0, map_bonus=False)

    map_bonus = _has_map_bonus(hero, selected_map, map_stats)
    map_multiplier = MAP_BONUS_MULTIPLIER if map_bonus else 1.0

    competency_score = (win_rate / 100) * math.log(games + 1) * map_multiplier

    return HeroCompetency(
        hero=hero,
        win_rate=win_rate,
        games=games,
        competency_score=competency_score,
        map_bonus=map_bonus,
        role=get_hero_role(hero),
    )


def calculate_player_competency(
    battletag: str,
    slot: int,
    player_data: Optional[PlayerData],
    selected_map: Optional[str] = None,
) -> PlayerCompetency:
    """Calculate competency for every hero a player has played.

    Unregistered players (no data) get an empty competency.
    """
    if player_data is None:
        return PlayerCompetency(battletag=battletag, slot=slot)

    competencies = [
        calculate_hero_competency(
            stat.hero, stat.win_rate, stat.games, selected_map, player_data.map_stats
        )
        for stat in player_data.hero_stats
    ]
    top_heroes = sorted(
        (c for c in competencies if c.games > 0),
        key=lambda c: c.competency_score,
        reverse=True,
    )

    return PlayerCompetency(
        battletag=battletag,
        slot=slot,
        top_heroes=top_heroes,
        total_games=player_data.total_games,
        overall_win_rate=player_data.overall_win_rate,
    )


def get_top_heroes(player_competency: PlayerCompetency, count: int = 5) -> list[HeroCompetency]:
    return player_competency.top_heroes[:count]


def find_best_player_for_hero(
    hero: str,
    player_competencies: list[PlayerCompetency],
) -> tuple[Optional[PlayerCompetency], Optional[HeroCompetency]]:
    """Find the player with the highest competency on a hero.

    Ties keep the earlier player. Players with a zero score never win.
    """
    best_player = None
    best_competency = None
    highest_score = 0.0

    for player in player_competencies:
        hero_comp = player.get_hero(hero)
        if hero_comp and hero_comp.competency_score > highest_score:
            best_player = player
            best_competency = hero_comp
            highest_score = hero_comp.competency_score

    return best_player, best_competency


def is_competent_with(hero: str, player_competency: PlayerCompetency) -> bool:
    """At least 5 games and 45%+ - slightly below even is fine with experience."""
    hero_comp = player_competency.get_hero(hero)
    if hero_comp is None:
        return False
    return hero_comp.games >= MIN_COMPETENT_GAMES and hero_comp.win_rate >= MIN_COMPETENT_WIN_RATE


def is_good_with(hero: str, player_competency: PlayerCompetency) -> bool:
    hero_comp = player_competency.get_hero(hero)
    if hero_comp is None:
        return False
    return hero_comp.games >= MIN_COMPETENT_GAMES and hero_comp.win_rate >= MIN_GOOD_WIN_RATE


def format_competency(competency: HeroCompetency) -> str:
    """Short display string, e.g. 'Muradin (56.0% WR, 40g)'."""
    base = f"{competency.hero} ({competency.win_rate:.1f}% WR, {competency.games}g)"
    return f"{base} - strong on this map" if competency.map_bonus else base
