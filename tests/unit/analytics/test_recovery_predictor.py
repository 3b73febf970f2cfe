"""Tests for the recovery predictor.

ACWR and EWMA inputs are built directly so each rule can be exercised in
isolation.
"""

import datetime
import random

import pytest

from squadload.analytics.recovery import (
    NEXT_SESSION_RULES,
    RecoveryConfig,
    acwr_fatigue_bonus,
    compute_fatigue,
    estimate_recovery_hours,
    generate_recommendations,
    next_session_guidance,
    predict_recovery,
)
from squadload.schemas.acwr import ACWRRecord, RiskStatus, Trend
from squadload.schemas.athlete import HistoricalPerformance
from squadload.schemas.ewma import EWMAState, LoadForecast
from squadload.schemas.profile import AthleteProfile, FitnessLevel
from squadload.schemas.recovery import Priority, RecommendationType, SessionIntensity

NOW = datetime.datetime(2024, 1, 10, 8, 0)


# ======================================================================
# Helpers
# ======================================================================


def _acwr(ratio: float = 1.0, status: RiskStatus = RiskStatus.MODERATE) -> ACWRRecord:
    return ACWRRecord(athlete_id="a1", athlete_name="Ada", date=NOW.date(), acute_load=ratio * 40.0,
                      chronic_load=40.0, ratio=ratio, status=status, trend=Trend.STABLE, previous_ratio=ratio,
                      recommendation="-")


def _ewma(current: float = 50.0, volatility: float = 0.0) -> EWMAState:
    return EWMAState(athlete_id="a1", date=NOW.date(), current=current, trend=[current], volatility=volatility,
                     forecast=LoadForecast(next_7_days=[current] * 7, confidence=85.0))


def _profile(recovery: float) -> AthleteProfile:
    return AthleteProfile(id="a1", name="Ada Profile", position="Center",
                          fitness=FitnessLevel(overall=70, strength=70, endurance=70, agility=70, recovery=recovery),
                          injury_risk=20, current_load=90, fatigue=40, availability=100,
                          historical_performance=HistoricalPerformance(consistency=80, improvement=0, compliance=90))


# ======================================================================
# Fatigue
# ======================================================================


class TestFatigue:
    @pytest.mark.parametrize(
        "ratio, bonus",
        [(0.5, 0.0), (1.09, 0.0), (1.1, 15.0), (1.29, 15.0), (1.3, 25.0), (1.49, 25.0), (1.5, 35.0), (3.0, 35.0)],
    )
    def test_acwr_bonus(self, ratio, bonus):
        assert acwr_fatigue_bonus(ratio) == bonus

    def test_formula(self):
        # 30 + 15 + 0.4 × 60 + 0.8 × 5
        assert compute_fatigue(_acwr(1.2), _ewma(60.0, 5.0)) == pytest.approx(73.0)

    def test_clamped_to_100(self):
        assert compute_fatigue(_acwr(1.6, RiskStatus.VERY_HIGH), _ewma(100.0, 10.0)) == 100.0

    def test_variation_off_by_default(self):
        plain = compute_fatigue(_acwr(), _ewma())
        assert compute_fatigue(_acwr(), _ewma(), rng=random.Random(4)) == plain

    def test_variation_when_enabled(self):
        cfg = RecoveryConfig(fatigue_variation=20.0)
        values = {compute_fatigue(_acwr(), _ewma(), rng=random.Random(seed), config=cfg) for seed in range(5)}
        assert all(40.0 <= v <= 60.0 for v in values)
        assert len(values) > 1


# ======================================================================
# Recovery hours
# ======================================================================


class TestRecoveryHours:
    def test_average_or_better_capacity(self):
        assert estimate_recovery_hours(50.0, 70.0) == 40

    def test_low_capacity_takes_longer(self):
        assert estimate_recovery_hours(50.0, 30.0) == 48

    def test_minimum_is_8_hours(self):
        assert estimate_recovery_hours(5.0, 90.0) == 8

    def test_variability_only_adds_time(self):
        for seed in range(10):
            hours = estimate_recovery_hours(50.0, 70.0, rng=random.Random(seed))
            assert 40 <= hours <= 52


# ======================================================================
# Rule tables
# ======================================================================


class TestRecommendations:
    def test_moderate_fatigue(self):
        recs = generate_recommendations(50.0, _acwr(1.0))
        assert [r.type for r in recs] == [RecommendationType.SLEEP, RecommendationType.NUTRITION]
        assert recs[0].priority == Priority.MEDIUM

    def test_high_fatigue_and_spike(self):
        recs = generate_recommendations(75.0, _acwr(1.4, RiskStatus.HIGH))
        assert [r.type for r in recs] == [
            RecommendationType.REST,
            RecommendationType.ACTIVE_RECOVERY,
            RecommendationType.SLEEP,
            RecommendationType.NUTRITION,
        ]
        assert recs[2].priority == Priority.HIGH

    def test_low_fatigue_only_sleep(self):
        recs = generate_recommendations(30.0, _acwr(1.0))
        assert [r.type for r in recs] == [RecommendationType.SLEEP]


class TestNextSession:
    def test_rule_order(self):
        assert [r.name for r in NEXT_SESSION_RULES] == ["severe", "elevated", "clear"]

    @pytest.mark.parametrize(
        "status, fatigue, intensity, restriction_count",
        [
            (RiskStatus.VERY_HIGH, 40.0, SessionIntensity.LOW, 2),
            (RiskStatus.MODERATE, 85.0, SessionIntensity.LOW, 2),
            (RiskStatus.HIGH, 40.0, SessionIntensity.MEDIUM, 1),
            (RiskStatus.MODERATE, 65.0, SessionIntensity.MEDIUM, 1),
            (RiskStatus.MODERATE, 40.0, SessionIntensity.HIGH, 0),
        ],
    )
    def test_intensity_cap(self, status, fatigue, intensity, restriction_count):
        guidance = next_session_guidance(24, _acwr(1.0, status), fatigue, NOW)
        assert guidance.recommended_intensity == intensity
        assert len(guidance.restrictions) == restriction_count

    def test_earliest_date(self):
        assert next_session_guidance(40, _acwr(), 50.0, NOW).earliest_date == datetime.date(2024, 1, 12)


# ======================================================================
# predict_recovery
# ======================================================================


class TestPredictRecovery:
    def test_neutral_prediction(self):
        prediction = predict_recovery(_acwr(1.0), _ewma(50.0), NOW)
        assert prediction.current_fatigue == pytest.approx(50.0)
        assert prediction.readiness_score == pytest.approx(50.0)
        assert prediction.estimated_recovery_hours == 40
        assert prediction.athlete_name == "Ada"
        assert prediction.next_session.earliest_date == datetime.date(2024, 1, 12)
        assert prediction.next_session.recommended_intensity == SessionIntensity.HIGH

    def test_profile_capacity_and_name(self):
        prediction = predict_recovery(_acwr(1.0), _ewma(50.0), NOW, profile=_profile(recovery=30.0))
        assert prediction.estimated_recovery_hours == 48
        assert prediction.athlete_name == "Ada Profile"

    def test_overloaded_athlete(self):
        prediction = predict_recovery(_acwr(1.8, RiskStatus.VERY_HIGH), _ewma(90.0, 12.0), NOW)
        assert prediction.current_fatigue == 100.0
        assert prediction.readiness_score == 0.0
        assert prediction.next_session.recommended_intensity == SessionIntensity.LOW
        assert prediction.recommendations[0].type == RecommendationType.REST

    def test_seeded_prediction_is_repeatable(self):
        a = predict_recovery(_acwr(1.2), _ewma(60.0, 5.0), NOW, rng=random.Random(3))
        b = predict_recovery(_acwr(1.2), _ewma(60.0, 5.0), NOW, rng=random.Random(3))
        assert a == b
