"""Tests for the built-in distribution strategies and their helpers."""

import pytest

from squadload.schemas.athlete import HistoricalPerformance
from squadload.schemas.cluster import Cluster
from squadload.schemas.profile import AthleteProfile, FitnessLevel
from squadload.schemas.recovery import SessionIntensity
from squadload.strategies.balanced import BalancedStrategy
from squadload.strategies.fitness import FitnessBasedStrategy
from squadload.strategies.groups import group_intensity, intensity_score, make_group, recommend_equipment, split_evenly
from squadload.strategies.position import PositionBasedStrategy
from squadload.strategies.recovery import RecoveryFocusedStrategy


# ======================================================================
# Helpers
# ======================================================================


def _profile(athlete_id: str, fitness: float = 75.0, fatigue: float = 40.0, risk: float = 20.0,
             recovery: float = 60.0, position: str = "Forward") -> AthleteProfile:
    return AthleteProfile(
        id=athlete_id,
        name=athlete_id.upper(),
        position=position,
        fitness=FitnessLevel(overall=fitness, strength=fitness, endurance=fitness, agility=fitness,
                             recovery=recovery),
        injury_risk=risk,
        current_load=90,
        fatigue=fatigue,
        availability=100,
        historical_performance=HistoricalPerformance(consistency=80, improvement=0, compliance=90),
    )


def _cluster(index: int, members: list[AthleteProfile]) -> Cluster:
    return Cluster(id=f"cluster-{index}", name=f"Group {index}", centroid=[0.0] * 8, members=members,
                   characteristics=[f"Label {index}"], recommended_load=60.0)


def _ids(groups) -> list[list[str]]:
    return [[p.id for p in g.members] for g in groups]


# ======================================================================
# split_evenly
# ======================================================================


class TestSplitEvenly:
    @pytest.mark.parametrize(
        "n, parts, sizes",
        [
            (5, 2, [3, 2]),
            (20, 2, [10, 10]),
            (7, 3, [3, 2, 2]),
            (2, 5, [1, 1]),
            (4, 1, [4]),
        ],
    )
    def test_sizes(self, n, parts, sizes):
        assert [len(b) for b in split_evenly(list(range(n)), parts)] == sizes

    def test_blocks_are_contiguous(self):
        assert split_evenly([1, 2, 3, 4, 5], 2) == [[1, 2, 3], [4, 5]]

    @pytest.mark.parametrize("items, parts", [([], 3), ([1, 2], 0)])
    def test_degenerate(self, items, parts):
        assert split_evenly(items, parts) == []


# ======================================================================
# Group helpers
# ======================================================================


class TestGroupHelpers:
    def test_intensity_score(self):
        assert intensity_score([_profile("a", fitness=90, fatigue=10, risk=10)]) == pytest.approx(82.0)

    @pytest.mark.parametrize(
        "fitness, fatigue, risk, expected",
        [
            (90, 10, 10, SessionIntensity.HIGH),
            (70, 20, 10, SessionIntensity.MEDIUM),
            (60, 60, 30, SessionIntensity.LOW),
        ],
    )
    def test_group_intensity(self, fitness, fatigue, risk, expected):
        assert group_intensity([_profile("a", fitness=fitness, fatigue=fatigue, risk=risk)]) == expected

    def test_equipment(self):
        assert recommend_equipment([_profile("a")]) == ["Cones", "Stopwatch"]
        big = [_profile(f"p{i}") for i in range(9)]
        assert "Bibs" in recommend_equipment(big)
        assert "Resistance Bands" in recommend_equipment([_profile("a", risk=60)])

    def test_make_group(self):
        group = make_group("g", "Group", [_profile("a"), _profile("b")], ["extra"])
        assert group.notes == ["2 athletes", "extra"]
        assert group.estimated_duration == 60
        assert group.size == 2


# ======================================================================
# Strategies
# ======================================================================


class TestBalancedStrategy:
    def test_flattens_clusters_in_order(self):
        c1 = _cluster(1, [_profile("a"), _profile("b"), _profile("c")])
        c2 = _cluster(2, [_profile("d"), _profile("e")])
        groups = BalancedStrategy().build_groups([], [c1, c2], 2)
        assert _ids(groups) == [["a", "b", "c"], ["d", "e"]]
        assert [g.id for g in groups] == ["session-1", "session-2"]

    def test_falls_back_to_profiles(self):
        profiles = [_profile(x) for x in "abcd"]
        assert _ids(BalancedStrategy().build_groups(profiles, [], 2)) == [["a", "b"], ["c", "d"]]

    def test_defaults(self):
        s = BalancedStrategy()
        assert s.strategy_id == "balanced"
        assert s.default_parameters.max_group_size == 12
        assert s.uses_clusters is True


class TestFitnessBasedStrategy:
    def test_fittest_clusters_first(self):
        low = _cluster(1, [_profile("low1", fitness=50), _profile("low2", fitness=50)])
        high = _cluster(2, [_profile("high", fitness=90)])
        mid = _cluster(3, [_profile("mid", fitness=70)])
        groups = FitnessBasedStrategy().build_groups([], [low, high, mid], 2)
        assert _ids(groups) == [["high", "mid"], ["low1", "low2"]]
        assert groups[0].notes[1] == "Fitness-based grouping"
        assert "Label 2" in groups[0].notes

    def test_every_cluster_is_placed(self):
        clusters = [_cluster(i, [_profile(f"p{i}", fitness=40 + i * 5)]) for i in range(1, 6)]
        groups = FitnessBasedStrategy().build_groups([], clusters, 2)
        assert sorted(p for ids in _ids(groups) for p in ids) == sorted(f"p{i}" for i in range(1, 6))


class TestPositionBasedStrategy:
    def test_positions_dealt_to_sessions(self):
        profiles = [_profile("f1", position="Forward"), _profile("d1", position="Defense"),
                    _profile("f2", position="Forward"), _profile("g1", position="Goalie")]
        groups = PositionBasedStrategy().build_groups(profiles, [], 2)
        assert [g.name for g in groups] == ["Forward/Defense Group", "Goalie Group"]
        assert _ids(groups) == [["f1", "f2", "d1"], ["g1"]]

    def test_does_not_need_clusters(self):
        assert PositionBasedStrategy().uses_clusters is False


class TestRecoveryFocusedStrategy:
    def test_highest_need_first_and_low_intensity(self):
        profiles = [
            _profile("fresh", fitness=95, fatigue=5, risk=5, recovery=90),
            _profile("tired", fitness=95, fatigue=90, risk=60, recovery=20),
            _profile("ok", fitness=95, fatigue=30, risk=10, recovery=70),
        ]
        groups = RecoveryFocusedStrategy().build_groups(profiles, [], 2)
        assert _ids(groups) == [["tired", "ok"], ["fresh"]]
        assert groups[0].recommended_intensity == SessionIntensity.LOW
        assert groups[1].recommended_intensity == SessionIntensity.HIGH

    def test_focus_notes(self):
        groups = RecoveryFocusedStrategy().build_groups(
            [_profile("tired", fatigue=90, risk=60, recovery=20), _profile("fresh", fatigue=5, risk=5, recovery=90)],
            [], 2)
        assert "Focus on recovery" in groups[0].notes
        assert "Moderate training load" in groups[1].notes

    def test_standing_warning(self):
        assert RecoveryFocusedStrategy().warnings == ["Some high-fatigue players may need reduced intensity"]
