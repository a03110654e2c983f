"""Tests for matching candidate heroes to roster players."""
import pytest

from hots_fever.models.competency import HeroRecord, PlayerData
from hots_fever.models.recommendations import RoleNeed
from hots_fever.services.recommendation_matcher import (
    MAX_RECOMMENDATIONS,
    analyze_role_needs,
    can_anyone_play_role,
    get_player_capable_heroes,
    match_heroes_to_players,
)
from hots_fever.services.scorers.competency_scorer import calculate_player_competency
from hots_fever.utils.hero_roles import ALL_HEROES, HEALER, TANK, get_heroes_for_role


@pytest.fixture
def roster():
    alice = calculate_player_competency(
        "Alice#1",
        0,
        PlayerData(hero_stats=[HeroRecord("Muradin", 60.0, 40), HeroRecord("Valla", 55.0, 10)]),
    )
    bob = calculate_player_competency(
        "Bob#2",
        1,
        PlayerData(hero_stats=[HeroRecord("Valla", 62.0, 50), HeroRecord("Uther", 48.0, 3)]),
    )
    return [alice, bob]


class TestAnalyzeRoleNeeds:
    def test_empty_team(self):
        needs = analyze_role_needs([], ALL_HEROES)
        assert [(n.role, n.priority) for n in needs] == [
            ("Tank", "critical"),
            ("Melee Assassin", "important"),
            ("Ranged Assassin", "important"),
            ("Healer", "critical"),
        ]
        assert "Muradin" in needs[0].heroes

    def test_filled_roles_drop_out(self):
        needs = analyze_role_needs(["Muradin", "Valla", "Raynor", "Uther"], ALL_HEROES)
        assert [n.role for n in needs] == ["Melee Assassin"]

    def test_heroes_limited_to_available(self):
        needs = analyze_role_needs([], ["Muradin", "Valla"])
        tank = next(n for n in needs if n.role == TANK)
        assert tank.heroes == ["Muradin"]


class TestMatchHeroesToPlayers:
    def test_priority_ordering_and_reasoning(self, roster):
        needs = analyze_role_needs([], ALL_HEROES)
        result = match_heroes_to_players(["Abathur", "Valla", "Muradin"], roster, needs)

        heroes = [r.hero for r in result.recommendations]
        assert heroes == ["Muradin", "Valla", "Abathur"]

        muradin, valla, abathur = result.recommendations
        assert muradin.priority == "critical"
        assert muradin.reasoning == "Fills Tank role"
        assert muradin.player.battletag == "Alice#1"
        assert valla.player.battletag == "Bob#2"
        assert valla.player.slot == 1
        assert abathur.priority == "nice-to-have"
        assert abathur.reasoning == "Good overall pick"
        assert abathur.player is None
        assert abathur.no_one_competent is True

    def test_thin_experience_is_flagged(self, roster):
        result = match_heroes_to_players(["Uther"], roster, [])
        rec = result.recommendations[0]
        assert rec.player.battletag == "Bob#2"
        assert rec.no_one_competent is True

    def test_experience_counts_across_whole_roster(self):
        alice = calculate_player_competency(
            "Alice#1", 0, PlayerData(hero_stats=[HeroRecord("Muradin", 100.0, 4)])
        )
        bob = calculate_player_competency(
            "Bob#2", 1, PlayerData(hero_stats=[HeroRecord("Muradin", 50.0, 10)])
        )
        needs = [RoleNeed(TANK, "critical", get_heroes_for_role(TANK))]

        result = match_heroes_to_players(["Muradin"], [alice, bob], needs)

        rec = result.recommendations[0]
        # Alice still pairs on the higher score, but Bob covers the games bar
        assert rec.player.battletag == "Alice#1"
        assert rec.no_one_competent is False
        assert result.warnings == []

    def test_same_priority_sorted_by_competency(self, roster):
        result = match_heroes_to_players(["Valla", "Muradin"], roster, [])
        assert [r.hero for r in result.recommendations] == ["Valla", "Muradin"]

    def test_warns_on_uncovered_critical_role(self, roster):
        needs = analyze_role_needs([], ALL_HEROES)
        result = match_heroes_to_players(["Muradin"], roster, needs)
        assert result.warnings == ["No one has experience with Healer heroes"]

    def test_important_needs_never_warn(self):
        needs = [RoleNeed("Melee Assassin", "important", get_heroes_for_role("Melee Assassin"))]
        result = match_heroes_to_players(["Zeratul"], [], needs)
        assert result.warnings == []

    def test_truncates_to_max(self, roster):
        result = match_heroes_to_players(ALL_HEROES[:20], roster, [])
        assert len(result.recommendations) == MAX_RECOMMENDATIONS


def test_can_anyone_play_role(roster):
    assert can_anyone_play_role(get_heroes_for_role(TANK), roster)
    # Bob's 3 Uther games are below the competency bar
    assert not can_anyone_play_role(get_heroes_for_role(HEALER), roster)


def test_get_player_capable_heroes(roster):
    alice = roster[0]
    assert [h.hero for h in get_player_capable_heroes(["Valla", "Muradin"], alice)] == ["Muradin", "Valla"]
    assert [h.hero for h in get_player_capable_heroes(["Valla", "Muradin"], alice, min_games=20)] == ["Muradin"]
