"""
Workload session schema.

A :class:`WorkloadSession` is one training session logged for one athlete.
Sessions are append-only per athlete; the history repository keeps a
rolling window of them.

The *weighted load* of a session is what the ACWR windows accumulate::

    weighted = effective_load × intensity_multiplier × (duration / 60)

where ``effective_load`` is the actual load when recorded, otherwise the
planned load.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field


class Intensity(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    MAX = "max"


class SessionType(str, Enum):
    STRENGTH = "strength"
    CONDITIONING = "conditioning"
    HYBRID = "hybrid"
    AGILITY = "agility"
    RECOVERY = "recovery"
    OTHER = "other"


INTENSITY_MULTIPLIERS: dict[Intensity, float] = {
    Intensity.LOW: 0.7,
    Intensity.MEDIUM: 1.0,
    Intensity.HIGH: 1.3,
    Intensity.MAX: 1.6,
}


class WorkloadSession(BaseModel):
    """A single logged training session."""

    athlete_id: str
    date: datetime.date
    session_id: Optional[str] = None
    session_type: SessionType = SessionType.OTHER
    planned_load: float = Field(..., ge=0.0, description="Planned load (0–100)")
    actual_load: Optional[float] = Field(None, ge=0.0, description="Recorded load, if known")
    duration: float = Field(60.0, ge=0.0, description="Session duration in minutes")
    intensity: Intensity = Intensity.MEDIUM
    rpe: Optional[float] = Field(None, ge=1.0, le=10.0, description="Rate of perceived exertion 1–10")

    @property
    def effective_load(self) -> float:
        """Actual load when recorded (zero included), otherwise planned load."""
        return self.actual_load if self.actual_load is not None else self.planned_load

    @property
    def weighted_load(self) -> float:
        multiplier = INTENSITY_MULTIPLIERS.get(self.intensity, 1.0)
        return self.effective_load * multiplier * (self.duration / 60.0)
