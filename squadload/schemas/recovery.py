"""
Recovery prediction schemas.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RecommendationType(str, Enum):
    ACTIVE_RECOVERY = "active-recovery"
    REST = "rest"
    NUTRITION = "nutrition"
    SLEEP = "sleep"
    THERAPY = "therapy"


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class SessionIntensity(str, Enum):
    """Intensity label used for session guidance and group prescriptions."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RecoveryRecommendation(BaseModel):
    type: RecommendationType
    priority: Priority
    description: str
    duration: str
    expected_impact: float = Field(..., ge=0.0, le=100.0)


class NextSessionGuidance(BaseModel):
    """When and how hard the athlete should train next."""

    earliest_date: datetime.date
    recommended_intensity: SessionIntensity
    restrictions: list[str] = Field(default_factory=list)


class RecoveryPrediction(BaseModel):
    """Fatigue, recovery time and next-session guidance for one athlete."""

    athlete_id: str
    athlete_name: Optional[str] = None
    current_fatigue: float = Field(..., ge=0.0, le=100.0)
    estimated_recovery_hours: int = Field(..., ge=0)
    readiness_score: float = Field(..., ge=0.0, le=100.0)
    recommendations: list[RecoveryRecommendation] = Field(default_factory=list)
    next_session: NextSessionGuidance
