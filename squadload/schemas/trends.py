"""
Performance trend schemas.

Performance is inferred from workload behaviour only; the core has no
direct performance measurements.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from squadload.schemas.acwr import Trend


class Timeframe(str, Enum):
    WEEK = "week"
    MONTH = "month"
    SEASON = "season"


TIMEFRAME_DAYS: dict[Timeframe, int] = {
    Timeframe.WEEK: 7,
    Timeframe.MONTH: 30,
    Timeframe.SEASON: 90,
}


class PlateauPrediction(BaseModel):
    date: datetime.date
    confidence: float = Field(..., ge=0.0, le=100.0)
    interventions: list[str] = Field(default_factory=list)


class PerformanceTrend(BaseModel):
    athlete_id: str
    timeframe: Timeframe
    workload_trend: float = Field(..., description="% change of average load vs the previous timeframe")
    performance_change: float = Field(..., ge=-50.0, le=50.0)
    consistency_score: float = Field(..., ge=0.0, le=100.0)
    improvement_rate: float = Field(..., ge=-50.0, le=50.0)
    predicted_plateau: Optional[PlateauPrediction] = None
    injury_risk_trend: Trend
