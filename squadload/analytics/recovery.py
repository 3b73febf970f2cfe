"""
Recovery predictor — combines ACWR, EWMA and profile into guidance.

Architecture (three inputs, one consequence):
    1. **ACWR** — load spike signal (ratio and risk status)
    2. **EWMA** — smoothed recent load and its volatility
    3. **Profile** — individual recovery capacity

Model
-----
Fatigue score (0–100)::

    fatigue = 30
            + 35 / 25 / 15   for ratio >= 1.5 / >= 1.3 / >= 1.1
            + 0.4 × EWMA
            + 0.8 × volatility
            [+ individual variation]

The individual variation term is a placeholder for physiological sensor
input.  It is off by default (amplitude 0) and never needed for the risk
model; enable it only for illustrative simulations.

Recovery time (hours)::

    hours = 0.8 × fatigue
          × (1 + (50 - capacity) / 100)   when capacity < 50
          × (1 + u × variability)         when an rng is supplied
    hours = max(8, round(hours))

Readiness is ``100 - fatigue``.  Recommendations and next-session
restrictions come from ordered rule tables.
"""

from __future__ import annotations

import datetime
import random
from dataclasses import dataclass
from typing import Optional

from pydantic import BaseModel, Field

from squadload.analytics.rules import Rule, all_matches, first_match
from squadload.core.entropy import centred, clamp, fraction
from squadload.schemas.acwr import ACWRRecord, RiskStatus
from squadload.schemas.ewma import EWMAState
from squadload.schemas.profile import AthleteProfile
from squadload.schemas.recovery import (
    NextSessionGuidance,
    Priority,
    RecommendationType,
    RecoveryPrediction,
    RecoveryRecommendation,
    SessionIntensity,
)

# ======================================================================
# Configuration
# ======================================================================

# ACWR tiers: (minimum ratio, fatigue bonus), highest first.
_ACWR_FATIGUE_TIERS: list[tuple[float, float]] = [(1.5, 35.0), (1.3, 25.0), (1.1, 15.0)]


class RecoveryConfig(BaseModel):
    """Configuration for the recovery predictor."""

    base_fatigue: float = Field(30.0, ge=0.0, le=100.0)
    ewma_weight: float = Field(0.4, ge=0.0)
    volatility_weight: float = Field(0.8, ge=0.0)
    fatigue_variation: float = Field(0.0, ge=0.0, description="Width of the individual variation term; 0 disables")
    hours_per_fatigue_point: float = Field(0.8, gt=0.0)
    average_recovery_capacity: float = Field(50.0, ge=0.0, le=100.0)
    recovery_variability: float = Field(0.3, ge=0.0, description="Max fractional increase from individual variability")
    minimum_recovery_hours: int = Field(8, ge=0)
    default_recovery_capacity: float = Field(70.0, ge=0.0, le=100.0,
                                             description="Capacity used when no profile is known")


DEFAULT_RECOVERY_CONFIG = RecoveryConfig()


# ======================================================================
# Fatigue and recovery time
# ======================================================================


def acwr_fatigue_bonus(ratio: float) -> float:
    for minimum, bonus in _ACWR_FATIGUE_TIERS:
        if ratio >= minimum:
            return bonus
    return 0.0


def compute_fatigue(acwr: ACWRRecord, ewma: EWMAState, rng: Optional[random.Random] = None,
                    config: Optional[RecoveryConfig] = None, ) -> float:
    cfg = config or DEFAULT_RECOVERY_CONFIG
    fatigue = cfg.base_fatigue
    fatigue += acwr_fatigue_bonus(acwr.ratio)
    fatigue += ewma.current * cfg.ewma_weight
    fatigue += ewma.volatility * cfg.volatility_weight
    if cfg.fatigue_variation > 0:
        fatigue += centred(rng, cfg.fatigue_variation)
    return clamp(fatigue, 0.0, 100.0)


def estimate_recovery_hours(fatigue: float, recovery_capacity: float, rng: Optional[random.Random] = None,
                            config: Optional[RecoveryConfig] = None, ) -> int:
    cfg = config or DEFAULT_RECOVERY_CONFIG
    hours = fatigue * cfg.hours_per_fatigue_point

    if recovery_capacity < cfg.average_recovery_capacity:
        hours *= 1.0 + (cfg.average_recovery_capacity - recovery_capacity) / 100.0

    hours *= 1.0 + fraction(rng, cfg.recovery_variability)

    return max(cfg.minimum_recovery_hours, round(hours))


# ======================================================================
# Rule tables
# ======================================================================


@dataclass(frozen=True)
class RecoveryContext:
    fatigue: float
    ratio: float
    status: RiskStatus


RECOMMENDATION_RULES: list[Rule[RecoveryContext, RecoveryRecommendation]] = [
    Rule("rest", lambda c: c.fatigue > 70,
         lambda c: RecoveryRecommendation(type=RecommendationType.REST, priority=Priority.HIGH,
                                          description="Complete rest or very light activity",
                                          duration="24-48 hours", expected_impact=30, )),
    Rule("active_recovery", lambda c: c.ratio > 1.3,
         lambda c: RecoveryRecommendation(type=RecommendationType.ACTIVE_RECOVERY, priority=Priority.HIGH,
                                          description="Light aerobic exercise, stretching, mobility work",
                                          duration="30-45 minutes", expected_impact=25, )),
    Rule("sleep", lambda c: True,
         lambda c: RecoveryRecommendation(type=RecommendationType.SLEEP,
                                          priority=Priority.HIGH if c.fatigue > 50 else Priority.MEDIUM,
                                          description="Ensure 8-9 hours of quality sleep", duration="Nightly",
                                          expected_impact=35, )),
    Rule("nutrition", lambda c: c.fatigue > 40,
         lambda c: RecoveryRecommendation(type=RecommendationType.NUTRITION, priority=Priority.MEDIUM,
                                          description="Focus on post-workout nutrition and hydration",
                                          duration="24-48 hours post-session", expected_impact=20, )),
]

# Intensity cap and restrictions: first match wins.
NEXT_SESSION_RULES: list[Rule[RecoveryContext, tuple[SessionIntensity, list[str]]]] = [
    Rule("severe", lambda c: c.status == RiskStatus.VERY_HIGH or c.fatigue > 80,
         lambda c: (SessionIntensity.LOW, ["No high-intensity intervals", "Limit session to 45 minutes"])),
    Rule("elevated", lambda c: c.status == RiskStatus.HIGH or c.fatigue > 60,
         lambda c: (SessionIntensity.MEDIUM, ["Avoid maximum efforts"])),
    Rule("clear", lambda c: True, lambda c: (SessionIntensity.HIGH, [])),
]


def generate_recommendations(fatigue: float, acwr: ACWRRecord) -> list[RecoveryRecommendation]:
    return all_matches(RECOMMENDATION_RULES, RecoveryContext(fatigue, acwr.ratio, acwr.status))


def next_session_guidance(recovery_hours: int, acwr: ACWRRecord, fatigue: float,
                          now: datetime.datetime, ) -> NextSessionGuidance:
    intensity, restrictions = first_match(NEXT_SESSION_RULES, RecoveryContext(fatigue, acwr.ratio, acwr.status))
    earliest = now + datetime.timedelta(hours=recovery_hours)
    return NextSessionGuidance(earliest_date=earliest.date(), recommended_intensity=intensity,
                               restrictions=list(restrictions), )


# ======================================================================
# Main entry point
# ======================================================================


def predict_recovery(acwr: ACWRRecord, ewma: EWMAState, now: datetime.datetime,
                     profile: Optional[AthleteProfile] = None, rng: Optional[random.Random] = None,
                     config: Optional[RecoveryConfig] = None, ) -> RecoveryPrediction:
    """Predict fatigue, recovery time and next-session guidance.

    Args:
        acwr: The athlete's current ACWR record.
        ewma: The athlete's current EWMA state.
        now: Reference moment for the earliest next-session date.
        profile: Athlete profile; a neutral recovery capacity is used
            when ``None``.
        rng: Optional entropy for individual variability.
        config: Optional :class:`RecoveryConfig` override.
    """
    cfg = config or DEFAULT_RECOVERY_CONFIG
    capacity = profile.fitness.recovery if profile is not None else cfg.default_recovery_capacity

    fatigue = compute_fatigue(acwr, ewma, rng, cfg)
    hours = estimate_recovery_hours(fatigue, capacity, rng, cfg)

    return RecoveryPrediction(athlete_id=acwr.athlete_id,
                              athlete_name=profile.name if profile is not None else acwr.athlete_name,
                              current_fatigue=fatigue, estimated_recovery_hours=hours,
                              readiness_score=clamp(100.0 - fatigue, 0.0, 100.0),
                              recommendations=generate_recommendations(fatigue, acwr),
                              next_session=next_session_guidance(hours, acwr, fatigue, now), )
