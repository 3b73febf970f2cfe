"""
Performance trend analysis from workload history.

Compares the trailing timeframe (week 7 d, month 30 d, season 90 d) with
the one before it and derives consistency, an estimated performance
change, an improvement rate, a plateau prediction and the direction of
injury risk.
"""

from __future__ import annotations

import datetime
import statistics
from typing import Optional, Sequence

from squadload.analytics.acwr import ACWRConfig, compute_acwr
from squadload.core.entropy import clamp
from squadload.repositories.workload_history import WorkloadHistoryRepository
from squadload.schemas.acwr import Trend
from squadload.schemas.trends import TIMEFRAME_DAYS, PerformanceTrend, PlateauPrediction, Timeframe
from squadload.schemas.workload import WorkloadSession

PLATEAU_MIN_SESSIONS = 14
PLATEAU_HORIZON_DAYS = 14
PLATEAU_CONFIDENCE = 75.0
INJURY_TREND_THRESHOLD = 0.2

PLATEAU_INTERVENTIONS = [
    "Vary training intensity",
    "Introduce new exercise modalities",
    "Adjust periodization",
    "Consider brief recovery period",
]


def average_load(sessions: Sequence[WorkloadSession]) -> float:
    if not sessions:
        return 0.0
    return sum(s.effective_load for s in sessions) / len(sessions)


def consistency_score(sessions: Sequence[WorkloadSession]) -> float:
    """``100 - 2×stddev`` of effective loads; 100 with fewer than 2 sessions."""
    if len(sessions) < 2:
        return 100.0
    deviation = statistics.pstdev([s.effective_load for s in sessions])
    return clamp(100.0 - deviation * 2.0, 0.0, 100.0)


def estimate_performance_change(workload_trend: float, consistency: float) -> float:
    """Gradual load increases help, steep ones and detraining hurt."""
    change = 0.0
    if 0 < workload_trend < 20:
        change += workload_trend * 0.5
    elif workload_trend > 20:
        change -= (workload_trend - 20) * 0.3
    elif workload_trend < -10:
        change += workload_trend * 0.2
    change += (consistency - 50) * 0.1
    return clamp(change, -50.0, 50.0)


def predict_plateau(sessions: Sequence[WorkloadSession], as_of: datetime.date) -> Optional[PlateauPrediction]:
    """Plateau when the last two blocks of 7 sessions barely differ."""
    if len(sessions) < PLATEAU_MIN_SESSIONS:
        return None

    recent = sessions[-7:]
    previous = sessions[-14:-7]
    change = abs(average_load(recent) - average_load(previous))

    if change < 5 and consistency_score(recent) > 85:
        return PlateauPrediction(date=as_of + datetime.timedelta(days=PLATEAU_HORIZON_DAYS),
                                 confidence=PLATEAU_CONFIDENCE, interventions=list(PLATEAU_INTERVENTIONS), )
    return None


def injury_risk_trend(current_ratio: float, previous_ratio: float) -> Trend:
    if current_ratio > previous_ratio + INJURY_TREND_THRESHOLD:
        return Trend.INCREASING
    if current_ratio < previous_ratio - INJURY_TREND_THRESHOLD:
        return Trend.DECREASING
    return Trend.STABLE


def analyze_performance_trends(repo: WorkloadHistoryRepository, athlete_id: str, as_of: datetime.date,
                               timeframe: Timeframe = Timeframe.MONTH,
                               acwr_config: Optional[ACWRConfig] = None, ) -> PerformanceTrend:
    """Analyse workload-derived performance trends for one athlete."""
    days = TIMEFRAME_DAYS[timeframe]
    recent_start = as_of - datetime.timedelta(days=days - 1)
    previous_end = recent_start - datetime.timedelta(days=1)
    previous_start = previous_end - datetime.timedelta(days=days - 1)

    recent = repo.get_by_athlete_date_range(athlete_id, recent_start, as_of)
    previous = repo.get_by_athlete_date_range(athlete_id, previous_start, previous_end)

    recent_avg = average_load(recent)
    previous_avg = average_load(previous)
    workload_trend = (recent_avg - previous_avg) / previous_avg * 100.0 if previous_avg > 0 else 0.0

    consistency = consistency_score(recent)
    acwr = compute_acwr(repo, athlete_id, as_of, acwr_config)

    return PerformanceTrend(athlete_id=athlete_id, timeframe=timeframe, workload_trend=workload_trend,
                            performance_change=estimate_performance_change(workload_trend, consistency),
                            consistency_score=consistency,
                            improvement_rate=clamp(workload_trend * 0.3 + consistency * 0.1, -50.0, 50.0),
                            predicted_plateau=predict_plateau(recent, as_of),
                            injury_risk_trend=injury_risk_trend(acwr.ratio, acwr.previous_ratio), )
