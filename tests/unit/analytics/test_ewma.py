"""Tests for EWMA smoothing, volatility and forecasting."""

import datetime
import random

import pytest

from squadload.analytics.ewma import (
    EWMAConfig,
    EWMASmoother,
    compute_ewma,
    forecast_confidence,
    smooth,
)
from squadload.repositories.workload_history import WorkloadHistoryRepository
from squadload.schemas.athlete import HistoricalPerformance
from squadload.schemas.profile import AthleteProfile, FitnessLevel
from squadload.schemas.workload import WorkloadSession

AS_OF = datetime.date(2024, 5, 31)


def _daily(loads: list[float], end: datetime.date = AS_OF, athlete_id: str = "a1") -> list[WorkloadSession]:
    """Sessions on consecutive days ending at *end*, oldest first."""
    start = end - datetime.timedelta(days=len(loads) - 1)
    return [WorkloadSession(athlete_id=athlete_id, date=start + datetime.timedelta(days=i), planned_load=load)
            for i, load in enumerate(loads)]


def _profile(athlete_id: str, overall: float) -> AthleteProfile:
    return AthleteProfile(id=athlete_id, name=athlete_id,
                          fitness=FitnessLevel(overall=overall, strength=70, endurance=70, agility=70, recovery=60),
                          injury_risk=10, current_load=90, fatigue=40, availability=100,
                          historical_performance=HistoricalPerformance(consistency=80, improvement=0, compliance=90))


# ======================================================================
# smooth
# ======================================================================


class TestSmooth:
    def test_single_update(self):
        assert smooth([100.0], 50.0, 0.2) == [pytest.approx(60.0)]

    def test_recursive_updates(self):
        assert smooth([100.0, 100.0], 50.0, 0.2) == pytest.approx([60.0, 68.0])

    def test_empty(self):
        assert smooth([], 50.0, 0.2) == []

    def test_alpha_one_tracks_input(self):
        assert smooth([10.0, 30.0, 20.0], 50.0, 1.0) == pytest.approx([10.0, 30.0, 20.0])


# ======================================================================
# compute_ewma
# ======================================================================


class TestComputeEWMA:
    @pytest.mark.parametrize("load", [40.0, 60.0, 100.0])
    def test_converges_to_constant_load(self, load):
        state = compute_ewma("a1", _daily([load] * 20), AS_OF)
        assert abs(state.current - load) <= 0.01 * load

    def test_no_sessions_returns_baseline(self):
        state = compute_ewma("a1", [], AS_OF)
        assert state.current == pytest.approx(50.0)
        assert state.trend == []
        assert state.volatility == 0.0
        assert state.forecast.next_7_days == pytest.approx([50.0] * 7)

    def test_explicit_seed(self):
        assert compute_ewma("a1", [], AS_OF, seed=80.0).current == pytest.approx(80.0)

    def test_trend_covers_trailing_14_days(self):
        state = compute_ewma("a1", _daily([60.0] * 20), AS_OF)
        assert len(state.trend) == 14
        assert state.trend[-1] == pytest.approx(state.current)

    def test_volatility_is_population_stddev(self):
        state = compute_ewma("a1", _daily([40.0, 60.0] * 7), AS_OF)
        assert state.volatility == pytest.approx(10.0)

    def test_sessions_after_reference_date_ignored(self):
        sessions = _daily([60.0] * 5) + _daily([100.0], end=AS_OF + datetime.timedelta(days=1))
        assert compute_ewma("a1", sessions, AS_OF).current == pytest.approx(
            compute_ewma("a1", _daily([60.0] * 5), AS_OF).current)

    def test_linear_forecast_is_clamped(self):
        state = compute_ewma("a1", _daily([100.0, 100.0]), AS_OF)
        # last 68, delta +8 per day
        assert state.forecast.next_7_days[:3] == pytest.approx([76.0, 84.0, 92.0])
        assert state.forecast.next_7_days[-1] == 100.0

    def test_forecast_without_rng_has_no_noise(self):
        sessions = _daily([40.0, 60.0] * 7)
        a = compute_ewma("a1", sessions, AS_OF)
        b = compute_ewma("a1", sessions, AS_OF)
        assert a.forecast == b.forecast

    def test_forecast_noise_is_seeded(self):
        sessions = _daily([40.0, 60.0] * 7)
        a = compute_ewma("a1", sessions, AS_OF, rng=random.Random(1))
        b = compute_ewma("a1", sessions, AS_OF, rng=random.Random(1))
        assert a.forecast.next_7_days == b.forecast.next_7_days

    def test_noise_can_be_disabled(self):
        sessions = _daily([40.0, 60.0] * 7)
        quiet = compute_ewma("a1", sessions, AS_OF, config=EWMAConfig(forecast_noise=False), rng=random.Random(1))
        assert quiet.forecast.next_7_days == compute_ewma("a1", sessions, AS_OF).forecast.next_7_days

    def test_forecast_bounds(self):
        state = compute_ewma("a1", _daily([0.0, 100.0] * 7), AS_OF, rng=random.Random(2))
        assert len(state.forecast.next_7_days) == 7
        assert all(0.0 <= v <= 100.0 for v in state.forecast.next_7_days)

    @pytest.mark.parametrize(
        "volatility, expected",
        [(0.0, 85.0), (10.0, 65.0), (30.0, 50.0)],
    )
    def test_forecast_confidence(self, volatility, expected):
        assert forecast_confidence(volatility) == pytest.approx(expected)


# ======================================================================
# EWMASmoother
# ======================================================================


class TestEWMASmoother:
    @pytest.fixture
    def repo(self):
        repo = WorkloadHistoryRepository()
        for session in _daily([70.0] * 10):
            repo.append(session)
        return repo

    def test_compute_is_idempotent(self, repo):
        smoother = EWMASmoother(repo)
        first = smoother.compute("a1", AS_OF)
        second = smoother.compute("a1", AS_OF)
        assert first == second

    def test_stored_baseline_seeds_the_fold(self):
        smoother = EWMASmoother(WorkloadHistoryRepository())
        smoother.set_baseline("a1", 80.0)
        assert smoother.baseline("a1") == 80.0
        assert smoother.baseline("a2") == 50.0
        assert smoother.compute("a1", AS_OF).current == pytest.approx(80.0)

    def test_negative_baseline_rejected(self):
        with pytest.raises(ValueError):
            EWMASmoother(WorkloadHistoryRepository()).set_baseline("a1", -1.0)

    def test_latest(self, repo):
        smoother = EWMASmoother(repo)
        assert smoother.latest("a1") is None
        state = smoother.compute("a1", AS_OF)
        assert smoother.latest("a1") == state

    def test_uses_configured_alpha(self, repo):
        state = EWMASmoother(repo, EWMAConfig(alpha=1.0)).compute("a1", AS_OF)
        assert state.current == pytest.approx(70.0)

    def test_profile_seeds_baseline_from_fitness(self):
        smoother = EWMASmoother(WorkloadHistoryRepository())
        smoother.seed_from_profile(_profile("a1", overall=80.0))
        assert smoother.baseline("a1") == pytest.approx(66.0)

    def test_later_profile_reseeds(self):
        smoother = EWMASmoother(WorkloadHistoryRepository())
        smoother.seed_from_profile(_profile("a1", overall=80.0))
        smoother.seed_from_profile(_profile("a1", overall=60.0))
        assert smoother.baseline("a1") == pytest.approx(62.0)

    def test_profile_does_not_override_explicit_baseline(self):
        smoother = EWMASmoother(WorkloadHistoryRepository())
        smoother.set_baseline("a1", 40.0)
        smoother.seed_from_profile(_profile("a1", overall=80.0))
        assert smoother.baseline("a1") == 40.0
