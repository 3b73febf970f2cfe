"""
Analytics core.

Grouping path: profile_builder → clustering → distribution.
Risk path: acwr + ewma → recovery → alerts, with trends alongside.
"""

from squadload.analytics.acwr import ACWRConfig, compute_acwr
from squadload.analytics.alerts import generate_alerts
from squadload.analytics.clustering import ClusteringConfig, cluster_profiles
from squadload.analytics.distribution import available_strategies, distribute
from squadload.analytics.ewma import EWMAConfig, EWMASmoother, compute_ewma
from squadload.analytics.profile_builder import ProfileConfig, build_profile, build_profiles
from squadload.analytics.recovery import RecoveryConfig, predict_recovery
from squadload.analytics.trends import analyze_performance_trends

__all__ = [
    "ACWRConfig",
    "compute_acwr",
    "generate_alerts",
    "ClusteringConfig",
    "cluster_profiles",
    "available_strategies",
    "distribute",
    "EWMAConfig",
    "EWMASmoother",
    "compute_ewma",
    "ProfileConfig",
    "build_profile",
    "build_profiles",
    "RecoveryConfig",
    "predict_recovery",
    "analyze_performance_trends",
]
