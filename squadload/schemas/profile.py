"""
Athlete profile schema.

The :class:`AthleteProfile` is the fundamental unit consumed by both the
grouping path (clustering, distribution) and the risk path (recovery
prediction).  It is built on demand from upstream records and never
persisted by the core.

All percentage fields are bounded to 0–100.  ``current_load`` is a
percentage of the athlete's baseline and may exceed 100 to represent
overload.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from squadload.schemas.athlete import HistoricalPerformance, MedicalRestriction

# Order of the clustering feature vector.
FEATURE_NAMES = ["overall", "strength", "endurance", "agility", "injury_risk", "current_load", "fatigue",
                 "availability", ]

MAX_CURRENT_LOAD = 150.0


class FitnessLevel(BaseModel):
    """Fitness dimensions, each 0–100."""

    overall: float = Field(..., ge=0.0, le=100.0)
    strength: float = Field(..., ge=0.0, le=100.0)
    endurance: float = Field(..., ge=0.0, le=100.0)
    agility: float = Field(..., ge=0.0, le=100.0)
    recovery: float = Field(..., ge=0.0, le=100.0, description="Recovery capacity")


class AthleteProfile(BaseModel):
    """Normalised multi-dimensional fitness/risk profile."""

    id: str
    name: str
    position: str = "Unknown"
    fitness: FitnessLevel
    injury_risk: float = Field(..., ge=0.0, le=100.0)
    current_load: float = Field(..., ge=0.0, le=MAX_CURRENT_LOAD, description="Percent of baseline; >100 is overload")
    fatigue: float = Field(..., ge=0.0, le=100.0)
    availability: float = Field(..., ge=0.0, le=100.0)
    medical_restrictions: list[MedicalRestriction] = Field(default_factory=list)
    historical_performance: HistoricalPerformance

    def feature_vector(self) -> list[float]:
        """Return the 8 clustering features in :data:`FEATURE_NAMES` order."""
        return [self.fitness.overall, self.fitness.strength, self.fitness.endurance, self.fitness.agility,
                self.injury_risk, self.current_load, self.fatigue, self.availability, ]

    @property
    def recovery_need(self) -> float:
        """Higher means the athlete needs more recovery."""
        return self.fatigue + self.injury_risk - self.fitness.recovery
