"""
Raw athlete input records.

These are the plain records handed to the core by the roster, wellness and
medical layers.  Only ``id`` and ``name`` are required; everything else is
optional and falls back to neutral defaults in the profile builder.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, Field


class WellnessStatus(str, Enum):
    """Roster-level wellness flag."""
    HEALTHY = "healthy"
    INJURED = "injured"
    LIMITED = "limited"
    UNAVAILABLE = "unavailable"


class FatigueLevel(str, Enum):
    """Self-reported fatigue level from a readiness check-in."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class RestrictionSeverity(str, Enum):
    MINOR = "minor"
    MODERATE = "moderate"
    SEVERE = "severe"


class RestrictionType(str, Enum):
    INJURY = "injury"
    ILLNESS = "illness"
    OTHER = "other"


class HistoricalPerformance(BaseModel):
    """Long-run behaviour of an athlete across past training blocks."""

    consistency: float = Field(..., ge=0.0, le=100.0, description="Attendance/output consistency (0–100)")
    improvement: float = Field(..., ge=-50.0, le=50.0, description="Improvement over the last block (%)")
    compliance: float = Field(..., ge=0.0, le=100.0, description="Compliance with prescribed load (0–100)")


class AthleteRecord(BaseModel):
    """An athlete as known to the roster."""

    id: str
    name: str
    position: Optional[str] = None
    jersey_number: Optional[Union[int, str]] = None
    team: Optional[str] = None
    wellness_status: Optional[WellnessStatus] = None
    historical_performance: Optional[HistoricalPerformance] = Field(
        None, description="Known history; synthesised when absent",
    )


class ReadinessSnapshot(BaseModel):
    """Per-athlete readiness check-in: training status, load and fatigue."""

    athlete_id: str
    status: Optional[str] = Field(None, description="Free-form readiness status, e.g. 'ready', 'caution'")
    load: Optional[float] = Field(None, ge=0.0, description="Current load as a percentage of baseline")
    fatigue: Optional[FatigueLevel] = None


class MedicalRestriction(BaseModel):
    """An active medical restriction attached to an athlete."""

    athlete_id: str
    severity: RestrictionSeverity
    type: RestrictionType = RestrictionType.OTHER
    description: Optional[str] = None
