"""
Athlete cluster schema.

Clusters are recomputed on every clustering call and never persisted.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from squadload.schemas.profile import AthleteProfile


class Cluster(BaseModel):
    id: str
    name: str
    centroid: list[float] = Field(..., description="8-dimensional feature vector (see FEATURE_NAMES)")
    members: list[AthleteProfile] = Field(default_factory=list)
    characteristics: list[str] = Field(default_factory=list)
    recommended_load: float = Field(..., ge=40.0, le=100.0, description="Recommended load (% of normal)")

    @property
    def size(self) -> int:
        return len(self.members)

    @property
    def mean_fitness(self) -> float:
        if not self.members:
            return 0.0
        return sum(p.fitness.overall for p in self.members) / len(self.members)
