"""
EWMA (Exponentially Weighted Moving Average) schemas.

The smoothed load follows::

    EWMA_t = alpha × load_t + (1 - alpha) × EWMA_{t-1}
"""

from __future__ import annotations

import datetime

from pydantic import BaseModel, Field


class LoadForecast(BaseModel):
    """Short-horizon load forecast."""

    next_7_days: list[float] = Field(default_factory=list)
    confidence: float = Field(..., ge=0.0, le=100.0)
    factors: list[str] = Field(default_factory=list)


class EWMAState(BaseModel):
    """Smoothed workload state for one athlete."""

    athlete_id: str
    date: datetime.date
    current: float = Field(..., ge=0.0, description="Current smoothed load")
    trend: list[float] = Field(default_factory=list, description="Smoothed values over the trailing 14 days")
    volatility: float = Field(..., ge=0.0, description="Std-dev of loads over the trailing 14 days")
    forecast: LoadForecast
