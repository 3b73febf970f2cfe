"""
Grouping service.

Front door of the grouping path: profile building, clustering and
session distribution.  Every call draws a fresh generator from the
configured :class:`EntropySource`, so the same roster and seed always
produce the same profiles, clusters and groups.
"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from squadload.analytics import distribution, profile_builder
from squadload.analytics.clustering import ClusteringConfig, cluster_profiles
from squadload.core.config import Settings
from squadload.core.config import settings as default_settings
from squadload.core.entropy import EntropySource
from squadload.schemas.athlete import AthleteRecord, MedicalRestriction, ReadinessSnapshot
from squadload.schemas.cluster import Cluster
from squadload.schemas.distribution import DistributionResult, StrategyInfo, StrategyParameters
from squadload.schemas.profile import AthleteProfile
from squadload.strategies import DEFAULT_STRATEGY_ID, DistributionStrategy


class GroupingService:
    """Service for turning a roster into training groups."""

    def __init__(self, settings: Optional[Settings] = None, entropy: Optional[EntropySource] = None):
        self.settings = settings or default_settings
        self.entropy = entropy or EntropySource(self.settings.RANDOM_SEED)
        self.clustering_config = ClusteringConfig(max_iterations=self.settings.KMEANS_MAX_ITERATIONS,
                                                  convergence_threshold=self.settings.KMEANS_CONVERGENCE_THRESHOLD, )

    # ------------------------------------------------------------------
    # Profiles
    # ------------------------------------------------------------------

    def build_profiles(self, athletes: Iterable[AthleteRecord],
                       readiness: Optional[Iterable[ReadinessSnapshot]] = None,
                       restrictions: Optional[Iterable[MedicalRestriction]] = None, ) -> list[AthleteProfile]:
        rng = self.entropy.spawn() if self.settings.PROFILE_JITTER else None
        return profile_builder.build_profiles(athletes, readiness=readiness, restrictions=restrictions, rng=rng)

    # ------------------------------------------------------------------
    # Clustering and distribution
    # ------------------------------------------------------------------

    def cluster(self, profiles: list[AthleteProfile], k: Optional[int] = None) -> list[Cluster]:
        k = self.settings.DEFAULT_CLUSTER_COUNT if k is None else k
        return cluster_profiles(profiles, k, self.entropy.spawn(), self.clustering_config)

    def distribute(self, profiles: list[AthleteProfile],
                   strategy: Union[str, DistributionStrategy] = DEFAULT_STRATEGY_ID, session_count: int = 2,
                   parameters: Optional[StrategyParameters] = None, ) -> DistributionResult:
        return distribution.distribute(profiles, strategy, session_count=session_count, parameters=parameters,
                                       rng=self.entropy.spawn(), clustering_config=self.clustering_config, )

    @staticmethod
    def available_strategies() -> list[StrategyInfo]:
        return distribution.available_strategies()
