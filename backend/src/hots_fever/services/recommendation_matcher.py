"""Match candidate heroes to the roster players best suited to play them."""
import logging
from typing import Iterable

from hots_fever.models.competency import HeroCompetency, PlayerCompetency
from hots_fever.models.recommendations import (
    PRIORITY_ORDER,
    AssignedPlayer,
    HeroRecommendation,
    RecommendationResult,
    RoleNeed,
)
from hots_fever.services.scorers.competency_scorer import (
    MIN_COMPETENT_GAMES,
    find_best_player_for_hero,
    is_competent_with,
)
from hots_fever.utils.hero_roles import (
    DAMAGE_ROLES,
    HERO_ROLE_NAMES,
    HEALER,
    TANK,
    calculate_role_balance,
    get_heroes_for_role,
)

logger = logging.getLogger(__name__)

MAX_RECOMMENDATIONS = 10


def match_heroes_to_players(
    candidate_heroes: Iterable[str],
    player_competencies: list[PlayerCompetency],
    role_needs: list[RoleNeed],
) -> RecommendationResult:
    """Pair each candidate hero with the roster player most competent on it.

    Heroes nobody has 5+ games on are kept and flagged no_one_competent so
    the caller can still draft them. Results are ordered by role-need
    priority, then competency score, and cut to the top 10. A warning is
    raised for every critical role need nobody on the roster can fill.
    """
    recommendations: list[HeroRecommendation] = []

    for hero in candidate_heroes:
        player, competency = find_best_player_for_hero(hero, player_competencies)

        priority = "nice-to-have"
        reasoning = "Good overall pick"
        for need in role_needs:
            if hero in need.heroes:
                priority = need.priority
                reasoning = f"Fills {need.role} role"
                break

        recommendations.append(
            HeroRecommendation(
                hero=hero,
                player=AssignedPlayer(player.battletag, player.slot) if player else None,
                competency=competency,
                reasoning=reasoning,
                priority=priority,
                no_one_competent=not _anyone_has_experience([hero], player_competencies),
            )
        )

    recommendations.sort(
        key=lambda r: (
            PRIORITY_ORDER[r.priority],
            -(r.competency.competency_score if r.competency else 0.0),
        )
    )

    warnings = []
    for need in role_needs:
        if need.priority != "critical":
            continue
        if not _anyone_has_experience(need.heroes, player_competencies):
            warnings.append(f"No one has experience with {need.role} heroes")

    if warnings:
        logger.debug(f"Roster gaps: {warnings}")

    return RecommendationResult(
        recommendations=recommendations[:MAX_RECOMMENDATIONS],
        warnings=warnings,
    )


def _anyone_has_experience(heroes: list[str], player_competencies: list[PlayerCompetency]) -> bool:
    for hero in heroes:
        for player in player_competencies:
            competency = player.get_hero(hero)
            if competency is not None and competency.games >= MIN_COMPETENT_GAMES:
                return True
    return False


def can_anyone_play_role(role_heroes: Iterable[str], player_competencies: list[PlayerCompetency]) -> bool:
    """Check if any roster player is competent with any hero of a role."""
    return any(
        is_competent_with(hero, player)
        for hero in role_heroes
        for player in player_competencies
    )


def get_player_capable_heroes(
    available_heroes: Iterable[str],
    player_competency: PlayerCompetency,
    min_games: int = MIN_COMPETENT_GAMES,
) -> list[HeroCompetency]:
    """Heroes from a list that the player has at least `min_games` on."""
    available = set(available_heroes)
    return [
        h for h in player_competency.top_heroes
        if h.hero in available and h.games >= min_games
    ]


def analyze_role_needs(
    current_picks: Iterable[str],
    available_heroes: Iterable[str],
) -> list[RoleNeed]:
    """Build role needs for our current picks.

    Tank and Healer are critical while absent; each assassin role is
    important while the team has fewer than two of it.
    """
    balance = calculate_role_balance(current_picks)
    available = list(available_heroes)
    needs: list[RoleNeed] = []

    for role in HERO_ROLE_NAMES:
        current = balance.count(role)
        if role in (TANK, HEALER) and current == 0:
            priority = "critical"
        elif role in DAMAGE_ROLES and current < 2:
            priority = "important"
        else:
            continue
        needs.append(RoleNeed(role=role, priority=priority, heroes=get_heroes_for_role(role, available)))

    return needs
