"""Tests for the draft scoring components."""
import pytest

from hots_fever.models.draft_data import DraftData, HeroStat, PairStat, PlayerHeroStat, PlayerMapStat
from hots_fever.models.recommendations import ReasonType
from hots_fever.services.scorers import (
    HeroStrengthScorer,
    MatchupCalculator,
    PlayerStrengthScorer,
    RoleCompositionScorer,
)


class TestHeroStrengthScorer:
    @pytest.fixture
    def scorer(self):
        return HeroStrengthScorer()

    def test_base_reason(self, scorer):
        data = DraftData(hero_stats={"Valla": HeroStat(win_rate=0.545, games=100)})
        reason = scorer.base_reason("Valla", data)
        assert reason.type == ReasonType.HERO_WR
        assert reason.delta == 4.5
        assert reason.label == "54.5% overall WR"

    def test_base_reason_needs_sample(self, scorer):
        data = DraftData(hero_stats={"Valla": HeroStat(win_rate=0.6, games=99)})
        assert scorer.base_reason("Valla", data) is None

    def test_base_reason_noise_floor(self, scorer):
        data = DraftData(hero_stats={"Valla": HeroStat(win_rate=0.504, games=500)})
        assert scorer.base_reason("Valla", data) is None

    def test_negative_base_reason(self, scorer):
        data = DraftData(hero_stats={"Valla": HeroStat(win_rate=0.46, games=500)})
        assert scorer.base_reason("Valla", data).delta == -4.0

    def test_map_win_rate_in_label(self, scorer):
        data = DraftData(
            hero_stats={"Valla": HeroStat(win_rate=0.52, games=500)},
            hero_map_stats={"Valla": PairStat(win_rate=0.6, games=25)},
        )
        assert scorer.base_reason("Valla", data).label == "52.0% overall WR, 60.0% on this map"

    def test_ban_reasons(self, scorer):
        data = DraftData(hero_stats={"Valla": HeroStat(win_rate=0.53, ban_rate=0.2, games=200)})
        reasons = scorer.ban_reasons("Valla", data)
        assert [r.delta for r in reasons] == [3.0, 2.0]
        assert all(r.type == ReasonType.BAN_WORTHY for r in reasons)
        assert reasons[1].label == "20% ban rate"

    def test_ban_reasons_ignore_sample_size(self, scorer):
        data = DraftData(hero_stats={"Valla": HeroStat(win_rate=0.60, games=80)})
        reasons = scorer.ban_reasons("Valla", data)
        assert [r.delta for r in reasons] == [10.0]
        # Picks still want the full sample
        assert scorer.base_reason("Valla", data) is None

    def test_ban_reasons_skip_weak_and_uncontested(self, scorer):
        data = DraftData(hero_stats={"Valla": HeroStat(win_rate=0.47, ban_rate=0.14, games=200)})
        assert scorer.ban_reasons("Valla", data) == []

    def test_ban_reasons_no_data(self, scorer):
        assert scorer.ban_reasons("Valla", DraftData.empty()) == []


class TestMatchupCalculator:
    @pytest.fixture
    def calculator(self):
        return MatchupCalculator()

    @pytest.mark.parametrize(
        "stat,expected",
        [
            (None, None),
            (PairStat(0.7, 29), None),
            (PairStat(0.505, 100), None),
            (PairStat(0.56, 30), 6.0),
            (PairStat(0.44, 30), -6.0),
        ],
    )
    def test_pair_delta(self, calculator, stat, expected):
        assert calculator.pair_delta(stat) == expected

    def test_counter_and_synergy_reasons(self, calculator):
        data = DraftData(
            counters={"Valla": {"Muradin": PairStat(0.56, 40), "Uther": PairStat(0.47, 40)}},
            synergies={"Valla": {"Rehgar": PairStat(0.54, 60)}},
        )
        counters = calculator.counter_reasons("Valla", ["Muradin", "Uther", "Sonya"], data)
        assert [(r.label, r.delta) for r in counters] == [("56.0% vs Muradin", 6.0), ("47.0% vs Uther", -3.0)]

        synergies = calculator.synergy_reasons("Valla", ["Rehgar"], data)
        assert [(r.type, r.delta) for r in synergies] == [(ReasonType.SYNERGY, 4.0)]

    def test_threat_reasons(self, calculator):
        data = DraftData(
            counters={
                "Valla": {
                    "Muradin": PairStat(0.53, 30),
                    "Uther": PairStat(0.529, 300),
                    "Sonya": PairStat(0.7, 29),
                }
            }
        )
        reasons = calculator.threat_reasons("Valla", ["Muradin", "Uther", "Sonya"], data)
        assert [(r.label, r.delta) for r in reasons] == [("Counters our Muradin (53.0%)", 3.0)]


class TestPlayerStrengthScorer:
    @pytest.fixture
    def scorer(self):
        return PlayerStrengthScorer()

    def test_best_player_credited(self, scorer):
        data = DraftData(
            player_stats={
                "Alice#1": {"Valla": PlayerHeroStat(games=40, wins=22, win_rate=0.55, mawp=0.6)},
                "Bob#2": {"Valla": PlayerHeroStat(games=40, wins=21, win_rate=0.525, mawp=0.53)},
                "Carol#3": {"Valla": PlayerHeroStat(games=9, wins=9, win_rate=1.0, mawp=0.9)},
            }
        )
        reason, battletag = scorer.best_player("Valla", ["Bob#2", "Alice#1", "Carol#3"], data)
        assert battletag == "Alice#1"
        assert reason.type == ReasonType.PLAYER_STRONG
        assert reason.delta == 10.0
        assert reason.label == "Alice 60.0% MAWP"

    def test_small_edge_not_reported(self, scorer):
        data = DraftData(
            player_stats={"Alice#1": {"Valla": PlayerHeroStat(games=30, wins=15, win_rate=0.5, mawp=0.515)}}
        )
        assert scorer.best_player("Valla", ["Alice#1"], data) == (None, None)

    def test_confidence_blend(self, scorer):
        data = DraftData(
            player_stats={"Alice#1": {"Valla": PlayerHeroStat(games=15, wins=8, win_rate=0.5, mawp=0.7)}}
        )
        reason, _ = scorer.best_player("Valla", ["Alice#1"], data)
        assert reason.delta == 10.0

    def test_strong_map_noted(self, scorer):
        data = DraftData(
            player_stats={"Alice#1": {"Valla": PlayerHeroStat(games=40, wins=24, win_rate=0.6, mawp=0.6)}},
            player_map_stats={"Alice#1": {"Valla": PlayerMapStat(win_rate=0.6, games=5)}},
        )
        reason, _ = scorer.best_player("Valla", ["Alice#1"], data)
        assert reason.label.endswith(", strong on this map")

    def test_no_players(self, scorer):
        assert scorer.best_player("Valla", [], DraftData.empty()) == (None, None)


class TestRoleCompositionScorer:
    @pytest.fixture
    def scorer(self):
        return RoleCompositionScorer()

    @pytest.mark.parametrize(
        "hero,picks,delta",
        [
            ("Muradin", [], 3.0),
            ("Uther", ["Muradin"], 3.0),
            ("Valla", ["Muradin"], 3.0),
            ("Zeratul", [], 3.0),
            ("Sonya", ["Muradin", "Valla"], 1.5),
            ("Zeratul", ["Muradin", "Valla"], 1.5),
        ],
    )
    def test_role_need(self, scorer, hero, picks, delta):
        reason = scorer.role_need_reason(hero, picks)
        assert reason.type == ReasonType.ROLE_NEED
        assert reason.delta == delta

    @pytest.mark.parametrize(
        "hero,picks",
        [
            ("Sonya", ["Valla"]),
            ("Muradin", ["Johanna"]),
            ("Raynor", ["Valla"]),
            ("Abathur", []),
            ("Teemo", []),
        ],
    )
    def test_no_role_need(self, scorer, hero, picks):
        assert scorer.role_need_reason(hero, picks) is None

    def test_second_healer_and_tank(self, scorer):
        assert scorer.role_penalty_reason("Uther", ["Rehgar"]).delta == -15.0
        assert scorer.role_penalty_reason("Uther", ["Rehgar"]).label == "Second Healer"
        assert scorer.role_penalty_reason("Muradin", ["Johanna"]).delta == -15.0

    def test_support_stacking(self, scorer):
        assert scorer.role_penalty_reason("Abathur", ["Medivh"]) is None
        assert scorer.role_penalty_reason("Abathur", ["Medivh", "Tassadar"]).delta == -8.0

    def test_ban_filled_role(self, scorer):
        assert scorer.ban_role_reason("Uther", ["Rehgar"]).delta == -8.0
        assert scorer.ban_role_reason("Uther", ["Muradin"]) is None
        assert scorer.ban_role_reason("Valla", ["Raynor"]) is None

    def test_custom_values(self):
        scorer = RoleCompositionScorer(role_need_bonus=5.0, duplicate_role_penalty=20.0)
        assert scorer.role_need_reason("Muradin", []).delta == 5.0
        assert scorer.role_penalty_reason("Muradin", ["Johanna"]).delta == -20.0
