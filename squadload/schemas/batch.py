"""Combined batch prediction schema."""

from __future__ import annotations

from pydantic import BaseModel, Field

from squadload.schemas.acwr import ACWRRecord
from squadload.schemas.alerts import FatigueAlert
from squadload.schemas.recovery import RecoveryPrediction


class BatchPredictions(BaseModel):
    """``acwr`` and ``recovery`` are parallel to the requested ids; ``alerts`` is flat."""

    acwr: list[ACWRRecord] = Field(default_factory=list)
    recovery: list[RecoveryPrediction] = Field(default_factory=list)
    alerts: list[FatigueAlert] = Field(default_factory=list)
