"""
Fatigue alert schemas.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class AlertSeverity(str, Enum):
    INFO = "info"
    WARNING = "warning"
    CRITICAL = "critical"


class AlertType(str, Enum):
    HIGH_LOAD = "high-load"
    RAPID_INCREASE = "rapid-increase"
    POOR_RECOVERY = "poor-recovery"
    INJURY_RISK = "injury-risk"
    PLATEAU = "plateau"


class FatigueAlert(BaseModel):
    athlete_id: str
    athlete_name: Optional[str] = None
    severity: AlertSeverity
    type: AlertType
    message: str
    recommendations: list[str] = Field(default_factory=list)
    triggered_at: datetime.datetime
    resolved: bool = False
