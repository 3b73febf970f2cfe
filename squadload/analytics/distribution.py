"""
Distribution strategy engine — profiles into session groups.

Flow
----
1. Resolve the strategy.  An unknown name falls back to ``balanced`` and
   the fallback is reported as a warning; the output is advisory, so
   nothing is raised.
2. Cluster the profiles (``k = min(n, sessions + 1)``) when the strategy
   works on clusters.
3. Let the strategy build groups.
4. Split every group larger than ``max_group_size`` into near-equal
   sub-groups that keep the parent's intensity, equipment and notes.
5. Score confidence, attach up to two alternative distributions built
   with other registered strategies, and collect warnings.

Confidence
----------
Base 80; mean absolute deviation of group sizes < 2 → +10, > 5 → −15;
mean availability > 90 → +10, < 70 → −20; clamped to [50, 100].

Every input profile ends up in exactly one output group.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional, Union

from squadload.analytics.clustering import ClusteringConfig, cluster_profiles
from squadload.core.entropy import clamp
from squadload.schemas.cluster import Cluster
from squadload.schemas.distribution import (
    AlternativeDistribution,
    DistributionResult,
    SessionGroup,
    StrategyInfo,
    StrategyParameters,
)
from squadload.schemas.profile import AthleteProfile
from squadload.strategies import DEFAULT_STRATEGY_ID, DistributionStrategy, StrategyRegistry
from squadload.strategies.groups import split_evenly

logger = logging.getLogger(__name__)

BASE_CONFIDENCE = 80.0
MAX_ALTERNATIVES = 2
DEFAULT_CLUSTER_SEED = 42


# ======================================================================
# Strategy resolution
# ======================================================================


def resolve_strategy(strategy: Union[str, DistributionStrategy]) -> tuple[DistributionStrategy, Optional[str]]:
    """Return ``(strategy, warning)``; *warning* is set when falling back."""
    if isinstance(strategy, DistributionStrategy):
        return strategy, None

    found = StrategyRegistry.get(strategy)
    if found is not None:
        return found, None

    logger.warning("Unknown distribution strategy %r, falling back to %s (available: %s)", strategy,
                   DEFAULT_STRATEGY_ID, ", ".join(StrategyRegistry.available_strategy_ids()))
    return (StrategyRegistry.get_or_raise(DEFAULT_STRATEGY_ID),
            f"Unknown strategy '{strategy}'; balanced distribution applied instead")


def available_strategies() -> list[StrategyInfo]:
    return [s.info() for s in StrategyRegistry.all()]


# ======================================================================
# Post-processing
# ======================================================================


def enforce_max_group_size(groups: list[SessionGroup], max_group_size: Optional[int]) -> list[SessionGroup]:
    """Split groups above *max_group_size* into near-equal sub-groups."""
    if not max_group_size:
        return list(groups)

    adjusted: list[SessionGroup] = []
    for group in groups:
        if group.size <= max_group_size:
            adjusted.append(group)
            continue

        parts = math.ceil(group.size / max_group_size)
        for i, members in enumerate(split_evenly(group.members, parts), start=1):
            adjusted.append(group.model_copy(update={
                "id": f"{group.id}-split-{i}",
                "name": f"{group.name} ({i})",
                "members": members,
                "notes": [*group.notes, "Split from larger group"],
            }))
    return adjusted


def confidence_score(groups: list[SessionGroup]) -> float:
    if not groups:
        return 50.0

    score = BASE_CONFIDENCE

    sizes = [g.size for g in groups]
    mean_size = sum(sizes) / len(sizes)
    size_variation = sum(abs(s - mean_size) for s in sizes) / len(sizes)
    if size_variation < 2:
        score += 10
    elif size_variation > 5:
        score -= 15

    members = [p for g in groups for p in g.members]
    if members:
        mean_availability = sum(p.availability for p in members) / len(members)
        if mean_availability > 90:
            score += 10
        elif mean_availability < 70:
            score -= 20

    return clamp(score, 50.0, 100.0)


def _collect_warnings(strategy: DistributionStrategy, profiles: list[AthleteProfile]) -> list[str]:
    warnings = list(strategy.warnings)
    unavailable = sum(1 for p in profiles if p.availability <= 0)
    if unavailable:
        warnings.append(f"{unavailable} athlete(s) currently unavailable but included in groups")
    return warnings


# ======================================================================
# Building
# ======================================================================


class _ClusterCache:
    """Clusters the profiles at most once per distribution call."""

    def __init__(self, profiles: list[AthleteProfile], k: int, rng: random.Random,
                 config: Optional[ClusteringConfig]):
        self._args = (profiles, k, rng, config)
        self._clusters: Optional[list[Cluster]] = None

    def get(self) -> list[Cluster]:
        if self._clusters is None:
            profiles, k, rng, config = self._args
            self._clusters = cluster_profiles(profiles, k, rng, config)
        return self._clusters


def _build(strategy: DistributionStrategy, profiles: list[AthleteProfile], clusters: _ClusterCache,
           session_count: int, parameters: Optional[StrategyParameters], ) -> list[SessionGroup]:
    params = parameters or strategy.default_parameters
    groups = strategy.build_groups(profiles, clusters.get() if strategy.uses_clusters else [], session_count)
    return enforce_max_group_size(groups, params.max_group_size)


def _alternatives(selected: DistributionStrategy, profiles: list[AthleteProfile], clusters: _ClusterCache,
                  session_count: int, ) -> list[AlternativeDistribution]:
    others = [s for s in StrategyRegistry.all() if s.strategy_id != selected.strategy_id][:MAX_ALTERNATIVES]
    alternatives = []
    for strategy in others:
        groups = _build(strategy, profiles, clusters, session_count, None)
        alternatives.append(AlternativeDistribution(strategy_id=strategy.strategy_id, name=strategy.display_name,
                                                    session_groups=groups, pros=strategy.pros,
                                                    cons=strategy.cons, score=confidence_score(groups), ))
    return alternatives


# ======================================================================
# Main entry point
# ======================================================================


def distribute(profiles: list[AthleteProfile], strategy: Union[str, DistributionStrategy] = DEFAULT_STRATEGY_ID,
               session_count: int = 2, parameters: Optional[StrategyParameters] = None,
               rng: Optional[random.Random] = None, clustering_config: Optional[ClusteringConfig] = None,
               include_alternatives: bool = True, ) -> DistributionResult:
    """Distribute *profiles* across *session_count* sessions.

    Args:
        profiles: Profiles to distribute.
        strategy: Strategy instance or registered ``strategy_id``.
        session_count: Number of sessions; values below 1 are treated as 1.
        parameters: Overrides the strategy's default parameters.
        rng: Entropy for k-means seeding; a fixed-seed generator when ``None``.
        clustering_config: Optional k-means config override.
        include_alternatives: Compute alternative distributions.

    Returns:
        :class:`DistributionResult`; never raises for plausible input.
    """
    selected, fallback_warning = resolve_strategy(strategy)
    reasoning: list[str] = []
    warnings: list[str] = []

    if fallback_warning:
        warnings.append(fallback_warning)
        reasoning.append("Default balanced distribution applied")

    if session_count < 1:
        warnings.append(f"Session count {session_count} is invalid; using 1 session")
        session_count = 1

    profiles = list(profiles)
    if not profiles:
        warnings.append("No athletes to distribute")
        return DistributionResult(strategy_id=selected.strategy_id, reasoning=reasoning,
                                  confidence_score=confidence_score([]), warnings=warnings, )

    k = min(len(profiles), session_count + 1)
    clusters = _ClusterCache(profiles, k, rng or random.Random(DEFAULT_CLUSTER_SEED), clustering_config)

    groups = _build(selected, profiles, clusters, session_count, parameters)

    reasoning.append(selected.reasoning)
    if selected.uses_clusters:
        reasoning.append(f"{len(clusters.get())} fitness/risk cluster(s) identified across {len(profiles)} athletes")
    warnings.extend(_collect_warnings(selected, profiles))

    alternatives = _alternatives(selected, profiles, clusters, session_count) if include_alternatives else []

    logger.debug("Distributed %d athletes into %d group(s) with %s", len(profiles), len(groups),
                 selected.strategy_id)

    return DistributionResult(strategy_id=selected.strategy_id, session_groups=groups, reasoning=reasoning,
                              confidence_score=confidence_score(groups), alternative_options=alternatives,
                              warnings=warnings, )
