"""
ACWR (Acute:Chronic Workload Ratio).

The ACWR compares what an athlete has done recently (acute window, 7
days) with what they are accustomed to (chronic window, 28 days).  It is
used as:

- an indicator of load spikes or under-exposure,
- an injury-risk *proxy* feeding recovery prediction and alerts.

Model
-----
Every session contributes a weighted load::

    weighted = effective_load × intensity_multiplier × (duration / 60)

    intensity_multiplier: low 0.7, medium 1.0, high 1.3, max 1.6

Each window's load is the *average daily* weighted load: the sum over the
window divided by the window length in days.  Windows are inclusive
calendar ranges ending on the reference date.

    ratio = acute / chronic        (1.0 when chronic == 0)

The trend compares the ratio with the ratio one acute window earlier.

Key design choices
------------------
1. **Zero-chronic guard** — no history means a neutral ratio of 1.0
   rather than a division error.  This can understate risk for athletes
   with no training history; the policy is kept as-is on purpose.
2. **Status buckets are half-open** — ``[0.8, 1.3)`` is moderate,
   ``[1.3, 1.5)`` high, ``>= 1.5`` very high.
3. **Recommendation lookup** — a fixed table keyed by ``(status, trend)``.
"""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from squadload.repositories.workload_history import WorkloadHistoryRepository
from squadload.schemas.acwr import ACWRRecord, RiskStatus, Trend

# ======================================================================
# Configuration
# ======================================================================


class ACWRConfig(BaseModel):
    """Configuration for the ACWR computation."""

    acute_days: int = Field(7, ge=3, le=14)
    chronic_days: int = Field(28, ge=14, le=56)
    trend_threshold: float = Field(0.1, ge=0.0, description="Ratio change that counts as a trend")


# Singleton default config
DEFAULT_CONFIG = ACWRConfig()

# ======================================================================
# Status labelling
# ======================================================================

_THRESHOLDS: list[tuple[RiskStatus, float, float]] = [(RiskStatus.LOW, 0.0, 0.8), (RiskStatus.MODERATE, 0.8, 1.3),
                                                      (RiskStatus.HIGH, 1.3, 1.5),
                                                      (RiskStatus.VERY_HIGH, 1.5, float("inf")), ]


def _label_acwr(value: float) -> RiskStatus:
    """Map an ACWR float to its risk status."""
    for label, low, high in _THRESHOLDS:
        if low <= value < high:
            return label
    return RiskStatus.VERY_HIGH


def _label_trend(current: float, previous: float, threshold: float) -> Trend:
    if current > previous + threshold:
        return Trend.INCREASING
    if current < previous - threshold:
        return Trend.DECREASING
    return Trend.STABLE


# ======================================================================
# Recommendation table
# ======================================================================

_RECOMMENDATIONS: dict[tuple[RiskStatus, Trend], str] = {
    (RiskStatus.LOW, Trend.DECREASING): "Consider gradually increasing training load",
    (RiskStatus.LOW, Trend.STABLE): "Maintain current training progression",
    (RiskStatus.LOW, Trend.INCREASING): "Maintain current training progression",
    (RiskStatus.MODERATE, Trend.DECREASING): "Monitor closely and maintain current load",
    (RiskStatus.MODERATE, Trend.STABLE): "Monitor closely and maintain current load",
    (RiskStatus.MODERATE, Trend.INCREASING): "Monitor closely and avoid further load increases",
    (RiskStatus.HIGH, Trend.DECREASING): "Reduce training intensity and volume",
    (RiskStatus.HIGH, Trend.STABLE): "Reduce training intensity and volume",
    (RiskStatus.HIGH, Trend.INCREASING): "Reduce training intensity and volume before adding load",
    (RiskStatus.VERY_HIGH, Trend.DECREASING): "Immediate load reduction recommended - high injury risk",
    (RiskStatus.VERY_HIGH, Trend.STABLE): "Immediate load reduction recommended - high injury risk",
    (RiskStatus.VERY_HIGH, Trend.INCREASING): "Immediate load reduction recommended - high injury risk",
}


def recommend(status: RiskStatus, trend: Trend) -> str:
    return _RECOMMENDATIONS[(status, trend)]


# ======================================================================
# Window computation
# ======================================================================


def _period_load(repo: WorkloadHistoryRepository, athlete_id: str, as_of: datetime.date, days: int) -> float:
    """Average daily weighted load over the *days* ending on *as_of*."""
    start = as_of - datetime.timedelta(days=days - 1)
    return repo.sum_weighted_load_by_date_range(athlete_id, start, as_of) / days


def compute_ratio(acute: float, chronic: float) -> float:
    """``acute / chronic``, or exactly ``1.0`` when chronic load is zero."""
    if chronic <= 0:
        return 1.0
    return acute / chronic


def _window_ratio(repo: WorkloadHistoryRepository, athlete_id: str, as_of: datetime.date,
                  cfg: ACWRConfig, ) -> tuple[float, float, float]:
    acute = _period_load(repo, athlete_id, as_of, cfg.acute_days)
    chronic = _period_load(repo, athlete_id, as_of, cfg.chronic_days)
    return acute, chronic, compute_ratio(acute, chronic)


def previous_ratio(repo: WorkloadHistoryRepository, athlete_id: str, as_of: datetime.date,
                   config: Optional[ACWRConfig] = None, ) -> float:
    """Ratio computed one acute window before *as_of*."""
    cfg = config or DEFAULT_CONFIG
    earlier = as_of - datetime.timedelta(days=cfg.acute_days)
    return _window_ratio(repo, athlete_id, earlier, cfg)[2]


# ======================================================================
# Main entry point
# ======================================================================


def compute_acwr(repo: WorkloadHistoryRepository, athlete_id: str, as_of: datetime.date,
                 config: Optional[ACWRConfig] = None, athlete_name: Optional[str] = None, ) -> ACWRRecord:
    """Compute the ACWR record for one athlete.

    Args:
        repo: Workload history repository.
        athlete_id: Athlete ID.
        as_of: Reference date (typically today).
        config: Optional :class:`ACWRConfig` override (uses
            ``DEFAULT_CONFIG`` if ``None``).
        athlete_name: Display name copied onto the record.

    Returns:
        :class:`ACWRRecord` with loads, ratio, status, trend and
        recommendation.
    """
    cfg = config or DEFAULT_CONFIG

    acute, chronic, ratio = _window_ratio(repo, athlete_id, as_of, cfg)
    prior = previous_ratio(repo, athlete_id, as_of, cfg)

    status = _label_acwr(ratio)
    trend = _label_trend(ratio, prior, cfg.trend_threshold)

    return ACWRRecord(athlete_id=athlete_id, athlete_name=athlete_name, date=as_of, acute_load=acute,
                      chronic_load=chronic, ratio=ratio, status=status, trend=trend, previous_ratio=prior,
                      recommendation=recommend(status, trend), )
