"""Pydantic records consumed and returned by the analytics core."""

from squadload.schemas.athlete import (
    AthleteRecord,
    FatigueLevel,
    HistoricalPerformance,
    MedicalRestriction,
    ReadinessSnapshot,
    RestrictionSeverity,
    RestrictionType,
    WellnessStatus,
)
from squadload.schemas.profile import FEATURE_NAMES, AthleteProfile, FitnessLevel
from squadload.schemas.workload import Intensity, SessionType, WorkloadSession
from squadload.schemas.acwr import ACWRRecord, RiskStatus, Trend
from squadload.schemas.ewma import EWMAState, LoadForecast
from squadload.schemas.recovery import (
    NextSessionGuidance,
    Priority,
    RecommendationType,
    RecoveryPrediction,
    RecoveryRecommendation,
    SessionIntensity,
)
from squadload.schemas.trends import PerformanceTrend, PlateauPrediction, Timeframe
from squadload.schemas.alerts import AlertSeverity, AlertType, FatigueAlert
from squadload.schemas.cluster import Cluster
from squadload.schemas.distribution import (
    AlternativeDistribution,
    DistributionResult,
    SessionGroup,
    StrategyInfo,
    StrategyParameters,
)
from squadload.schemas.batch import BatchPredictions

__all__ = [
    "AthleteRecord",
    "FatigueLevel",
    "HistoricalPerformance",
    "MedicalRestriction",
    "ReadinessSnapshot",
    "RestrictionSeverity",
    "RestrictionType",
    "WellnessStatus",
    "FEATURE_NAMES",
    "AthleteProfile",
    "FitnessLevel",
    "Intensity",
    "SessionType",
    "WorkloadSession",
    "ACWRRecord",
    "RiskStatus",
    "Trend",
    "EWMAState",
    "LoadForecast",
    "NextSessionGuidance",
    "Priority",
    "RecommendationType",
    "RecoveryPrediction",
    "RecoveryRecommendation",
    "SessionIntensity",
    "PerformanceTrend",
    "PlateauPrediction",
    "Timeframe",
    "AlertSeverity",
    "AlertType",
    "FatigueAlert",
    "Cluster",
    "AlternativeDistribution",
    "DistributionResult",
    "SessionGroup",
    "StrategyInfo",
    "StrategyParameters",
    "BatchPredictions",
]
