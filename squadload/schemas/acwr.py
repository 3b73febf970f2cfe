"""
ACWR (Acute:Chronic Workload Ratio) schemas.

The ACWR is an injury-risk *proxy*, not a diagnosis.  Status labels are
operational categories:

- ``low-risk``        — ratio < 0.8
- ``moderate-risk``   — 0.8 <= ratio < 1.3
- ``high-risk``       — 1.3 <= ratio < 1.5
- ``very-high-risk``  — ratio >= 1.5
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class RiskStatus(str, Enum):
    LOW = "low-risk"
    MODERATE = "moderate-risk"
    HIGH = "high-risk"
    VERY_HIGH = "very-high-risk"


class Trend(str, Enum):
    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


class ACWRRecord(BaseModel):
    """ACWR state for one athlete on one reference date."""

    athlete_id: str
    athlete_name: Optional[str] = None
    date: datetime.date
    acute_load: float = Field(..., ge=0.0, description="Average daily weighted load over the acute window")
    chronic_load: float = Field(..., ge=0.0, description="Average daily weighted load over the chronic window")
    ratio: float = Field(..., ge=0.0, description="acute / chronic; 1.0 when chronic load is zero")
    status: RiskStatus
    trend: Trend
    previous_ratio: float = Field(..., ge=0.0, description="Ratio one acute window earlier")
    recommendation: str
