"""
Distribution schemas.

A :class:`SessionGroup` is a derived grouping handed straight back to the
caller; it is not an owned entity.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from squadload.schemas.profile import AthleteProfile
from squadload.schemas.recovery import SessionIntensity


class StrategyParameters(BaseModel):
    """Tunable parameters of a distribution strategy."""

    max_group_size: Optional[int] = Field(None, ge=1, description="Groups above this size are split")
    min_fitness_variation: Optional[float] = Field(None, ge=0.0)
    prioritize_recovery: bool = False
    balance_positions: bool = False


class SessionGroup(BaseModel):
    id: str
    name: str
    members: list[AthleteProfile] = Field(default_factory=list)
    recommended_intensity: SessionIntensity
    estimated_duration: int = Field(60, ge=0, description="Minutes")
    equipment: list[str] = Field(default_factory=list)
    notes: list[str] = Field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.members)


class AlternativeDistribution(BaseModel):
    strategy_id: str
    name: str
    session_groups: list[SessionGroup] = Field(default_factory=list)
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)
    score: float = Field(..., ge=0.0, le=100.0)


class DistributionResult(BaseModel):
    strategy_id: str = Field(..., description="Strategy actually applied (after any fallback)")
    session_groups: list[SessionGroup] = Field(default_factory=list)
    reasoning: list[str] = Field(default_factory=list)
    confidence_score: float = Field(..., ge=0.0, le=100.0)
    alternative_options: list[AlternativeDistribution] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class StrategyInfo(BaseModel):
    """Catalogue entry describing a registered strategy."""

    strategy_id: str
    name: str
    description: str
    parameters: StrategyParameters
