"""
Clustering engine — k-means over athlete profiles.

Profiles are clustered in the 8-dimensional feature space defined by
:data:`~squadload.schemas.profile.FEATURE_NAMES` (overall, strength,
endurance and agility fitness, injury risk, current load, fatigue,
availability).

Algorithm
---------
1. **k-means++ seeding** — the first centroid is a uniformly random
   profile; each further centroid is drawn with probability proportional
   to the squared distance from the nearest centroid chosen so far.
2. **Lloyd iterations** — assign every profile to its nearest centroid
   (Euclidean), recompute each centroid as the per-dimension mean of its
   members, stop once every centroid moves less than the convergence
   threshold or after the iteration cap.

Guarantees
----------
- The output is a partition of the input: each profile appears in
  exactly one cluster.
- At most ``max(k, 1)`` clusters are returned.  A centroid that loses all of its
  members keeps its previous position while iterating and is dropped
  from the result.
- Fewer profiles than ``k``, or ``k < 1``, yields exactly one cluster
  holding everyone.  The partition takes precedence over a count of zero.
- Given the same ``rng`` seed the result is identical.
"""

from __future__ import annotations

import logging
import math
import random
from collections import Counter
from dataclasses import dataclass
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from squadload.analytics.rules import Rule, all_matches, first_match
from squadload.core.entropy import clamp
from squadload.schemas.cluster import Cluster
from squadload.schemas.profile import AthleteProfile

logger = logging.getLogger(__name__)


class ClusteringConfig(BaseModel):
    """Configuration for k-means clustering."""

    max_iterations: int = Field(100, ge=1)
    convergence_threshold: float = Field(0.001, gt=0.0)


DEFAULT_CLUSTERING_CONFIG = ClusteringConfig()


# ======================================================================
# Vector helpers
# ======================================================================


def euclidean_distance(a: Sequence[float], b: Sequence[float]) -> float:
    return math.sqrt(sum((x - y) ** 2 for x, y in zip(a, b)))


def compute_centroid(vectors: Sequence[Sequence[float]]) -> list[float]:
    """Per-dimension mean.  Empty input gives an empty centroid."""
    if not vectors:
        return []
    count = len(vectors)
    return [sum(column) / count for column in zip(*vectors)]


def _nearest(vector: Sequence[float], centroids: Sequence[Sequence[float]]) -> int:
    """Index of the nearest centroid; ties go to the lowest index."""
    best_index = 0
    best_distance = math.inf
    for index, centroid in enumerate(centroids):
        distance = euclidean_distance(vector, centroid)
        if distance < best_distance:
            best_distance = distance
            best_index = index
    return best_index


# ======================================================================
# k-means++ seeding
# ======================================================================


def seed_centroids(vectors: Sequence[Sequence[float]], k: int, rng: random.Random) -> list[list[float]]:
    """Choose ``k`` initial centroids with the k-means++ rule."""
    centroids = [list(vectors[rng.randrange(len(vectors))])]

    while len(centroids) < k:
        weights = [min(euclidean_distance(v, c) for c in centroids) ** 2 for v in vectors]
        total = sum(weights)
        if total == 0:
            # Every remaining point coincides with a centroid.
            centroids.append(list(vectors[rng.randrange(len(vectors))]))
            continue

        threshold = rng.random() * total
        cumulative = 0.0
        chosen = len(vectors) - 1
        for index, weight in enumerate(weights):
            cumulative += weight
            if weight > 0 and cumulative >= threshold:
                chosen = index
                break
        centroids.append(list(vectors[chosen]))

    return centroids


# ======================================================================
# Lloyd iterations
# ======================================================================


def _assign(vectors: Sequence[Sequence[float]], centroids: Sequence[Sequence[float]]) -> list[int]:
    return [_nearest(v, centroids) for v in vectors]


def _update_centroids(vectors: Sequence[Sequence[float]], assignment: Sequence[int],
                      centroids: Sequence[Sequence[float]], ) -> list[list[float]]:
    updated = []
    for index, previous in enumerate(centroids):
        members = [v for v, a in zip(vectors, assignment) if a == index]
        updated.append(compute_centroid(members) if members else list(previous))
    return updated


def _has_converged(old: Sequence[Sequence[float]], new: Sequence[Sequence[float]], threshold: float) -> bool:
    return all(euclidean_distance(a, b) < threshold for a, b in zip(old, new))


def run_kmeans(vectors: Sequence[Sequence[float]], k: int, rng: random.Random,
               config: Optional[ClusteringConfig] = None, ) -> tuple[list[int], list[list[float]], int]:
    """Run k-means++ / Lloyd on raw vectors.

    Returns:
        ``(assignment, centroids, iterations)`` where ``assignment[i]`` is
        the centroid index of ``vectors[i]``.
    """
    cfg = config or DEFAULT_CLUSTERING_CONFIG
    centroids = seed_centroids(vectors, k, rng)
    assignment = _assign(vectors, centroids)

    iterations = 0
    while iterations < cfg.max_iterations:
        iterations += 1
        new_centroids = _update_centroids(vectors, assignment, centroids)
        converged = _has_converged(centroids, new_centroids, cfg.convergence_threshold)
        centroids = new_centroids
        assignment = _assign(vectors, centroids)
        if converged:
            logger.debug("k-means converged after %d iterations (k=%d)", iterations, k)
            break
    else:
        logger.debug("k-means stopped at the iteration cap (%d, k=%d)", cfg.max_iterations, k)

    return assignment, centroids, iterations


# ======================================================================
# Cluster annotation
# ======================================================================


@dataclass(frozen=True)
class ClusterStats:
    """Aggregate statistics used to describe a cluster."""

    size: int
    mean_fitness: float
    mean_fatigue: float
    mean_risk: float
    dominant_position: Optional[str]
    dominant_share: float

    @classmethod
    def of(cls, members: Sequence[AthleteProfile]) -> ClusterStats:
        if not members:
            return cls(0, 0.0, 0.0, 0.0, None, 0.0)
        n = len(members)
        position, count = Counter(p.position for p in members).most_common(1)[0]
        return cls(size=n, mean_fitness=sum(p.fitness.overall for p in members) / n,
                   mean_fatigue=sum(p.fatigue for p in members) / n,
                   mean_risk=sum(p.injury_risk for p in members) / n, dominant_position=position,
                   dominant_share=count / n, )


# Fitness tier: exactly one applies.
FITNESS_RULES: list[Rule[ClusterStats, str]] = [
    Rule("high_fitness", lambda s: s.mean_fitness > 80, lambda s: "High Fitness"),
    Rule("developing_fitness", lambda s: s.mean_fitness < 60, lambda s: "Developing Fitness"),
    Rule("moderate_fitness", lambda s: True, lambda s: "Moderate Fitness"),
]

# Additional descriptors: every matching rule applies.
DESCRIPTOR_RULES: list[Rule[ClusterStats, str]] = [
    Rule("high_fatigue", lambda s: s.mean_fatigue > 70, lambda s: "High Fatigue"),
    Rule("well_rested", lambda s: s.mean_fatigue < 30, lambda s: "Well Rested"),
    Rule("elevated_risk", lambda s: s.mean_risk > 50, lambda s: "Elevated Injury Risk"),
    Rule("position_focus", lambda s: s.dominant_position is not None and s.dominant_share > 0.6,
         lambda s: f"{s.dominant_position} Focused"),
]


def describe_cluster(members: Sequence[AthleteProfile]) -> list[str]:
    """Human-readable characteristics of a group of profiles."""
    if not members:
        return []
    stats = ClusterStats.of(members)
    characteristics = [first_match(FITNESS_RULES, stats)]
    characteristics.extend(all_matches(DESCRIPTOR_RULES, stats))
    return characteristics


def recommended_load(members: Sequence[AthleteProfile]) -> float:
    """``0.8×fitness − 0.3×fatigue − 0.2×risk`` clamped to [40, 100]."""
    if not members:
        return 40.0
    stats = ClusterStats.of(members)
    load = stats.mean_fitness * 0.8 - stats.mean_fatigue * 0.3 - stats.mean_risk * 0.2
    return clamp(load, 40.0, 100.0)


def _make_cluster(index: int, members: list[AthleteProfile], centroid: list[float], name: str) -> Cluster:
    return Cluster(id=f"cluster-{index}", name=name, centroid=centroid, members=members,
                   characteristics=describe_cluster(members), recommended_load=recommended_load(members), )


# ======================================================================
# Main entry point
# ======================================================================


def cluster_profiles(profiles: Sequence[AthleteProfile], k: int, rng: random.Random,
                     config: Optional[ClusteringConfig] = None, ) -> list[Cluster]:
    """Group *profiles* into at most ``max(k, 1)`` clusters.

    Args:
        profiles: Profiles to cluster.
        k: Requested cluster count.  Values below 1 are treated as 1.
        rng: Entropy for k-means++ seeding.
        config: Optional :class:`ClusteringConfig` override.

    Returns:
        Clusters in centroid-seed order, empty clusters removed.
    """
    if not profiles:
        return []

    vectors = [p.feature_vector() for p in profiles]

    if len(profiles) < k or k <= 1:
        return [_make_cluster(1, list(profiles), compute_centroid(vectors), "All Athletes")]

    assignment, centroids, _ = run_kmeans(vectors, k, rng, config)

    clusters: list[Cluster] = []
    for index in range(len(centroids)):
        members = [p for p, a in zip(profiles, assignment) if a == index]
        if not members:
            continue
        number = len(clusters) + 1
        centroid = compute_centroid([p.feature_vector() for p in members])
        clusters.append(_make_cluster(number, members, centroid, f"Group {number}"))

    return clusters
