"""
Shared helpers for building session groups.
"""

from __future__ import annotations

from typing import Sequence, TypeVar

from squadload.schemas.distribution import SessionGroup
from squadload.schemas.profile import AthleteProfile
from squadload.schemas.recovery import SessionIntensity

T = TypeVar("T")

DEFAULT_SESSION_MINUTES = 60

# Intensity score thresholds: score > 70 high, > 50 medium, else low.
_HIGH_INTENSITY_SCORE = 70.0
_MEDIUM_INTENSITY_SCORE = 50.0


def split_evenly(items: Sequence[T], parts: int) -> list[list[T]]:
    """Split *items* into at most *parts* contiguous, non-empty blocks.

    Block sizes differ by at most one; earlier blocks take the extra item.
    """
    if parts < 1 or not items:
        return []
    parts = min(parts, len(items))
    size, extra = divmod(len(items), parts)
    blocks = []
    start = 0
    for index in range(parts):
        end = start + size + (1 if index < extra else 0)
        blocks.append(list(items[start:end]))
        start = end
    return blocks


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def intensity_score(members: Sequence[AthleteProfile]) -> float:
    """``meanFitness − 0.5×meanFatigue − 0.3×meanInjuryRisk``."""
    return (_mean([p.fitness.overall for p in members]) - 0.5 * _mean([p.fatigue for p in members])
            - 0.3 * _mean([p.injury_risk for p in members]))


def group_intensity(members: Sequence[AthleteProfile]) -> SessionIntensity:
    score = intensity_score(members)
    if score > _HIGH_INTENSITY_SCORE:
        return SessionIntensity.HIGH
    if score > _MEDIUM_INTENSITY_SCORE:
        return SessionIntensity.MEDIUM
    return SessionIntensity.LOW


def recommend_equipment(members: Sequence[AthleteProfile]) -> list[str]:
    equipment = ["Cones", "Stopwatch"]
    if len(members) > 8:
        equipment.append("Bibs")
    if any(p.injury_risk > 50 for p in members):
        equipment.append("Resistance Bands")
    return equipment


def make_group(group_id: str, name: str, members: list[AthleteProfile], notes: list[str]) -> SessionGroup:
    return SessionGroup(id=group_id, name=name, members=members, recommended_intensity=group_intensity(members),
                        estimated_duration=DEFAULT_SESSION_MINUTES, equipment=recommend_equipment(members),
                        notes=[f"{len(members)} athletes", *notes], )
