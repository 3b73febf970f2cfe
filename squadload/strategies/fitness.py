"""
Fitness-based distribution strategy.

Orders clusters by mean overall fitness (highest first) and assigns
contiguous blocks of whole clusters to sessions, so athletes of similar
fitness train together.  Group sizes follow the cluster sizes and can be
uneven.
"""

from squadload.schemas.cluster import Cluster
from squadload.schemas.distribution import SessionGroup, StrategyParameters
from squadload.schemas.profile import AthleteProfile
from squadload.strategies.base import DistributionStrategy
from squadload.strategies.groups import make_group, split_evenly


class FitnessBasedStrategy(DistributionStrategy):
    """Similar-fitness athletes share a session."""

    @property
    def strategy_id(self) -> str:
        return "fitness-based"

    @property
    def display_name(self) -> str:
        return "Fitness-Based Grouping"

    @property
    def description(self) -> str:
        return "Group athletes with similar fitness levels for targeted training"

    @property
    def default_parameters(self) -> StrategyParameters:
        return StrategyParameters(max_group_size=10, min_fitness_variation=15)

    @property
    def reasoning(self) -> str:
        return "Athletes grouped by similar fitness levels for targeted training"

    @property
    def pros(self) -> list[str]:
        return ["Targeted training intensity", "Better progression tracking", "Reduced injury risk"]

    @property
    def cons(self) -> list[str]:
        return ["Uneven group sizes", "Less position variety"]

    def build_groups(self, profiles: list[AthleteProfile], clusters: list[Cluster],
                     session_count: int, ) -> list[SessionGroup]:
        ranked = sorted(clusters, key=lambda c: c.mean_fitness, reverse=True)
        groups = []
        for i, block in enumerate(split_evenly(ranked, session_count), start=1):
            members = [p for c in block for p in c.members]
            labels = sorted({label for c in block for label in c.characteristics})
            notes = ["Fitness-based grouping", *labels]
            groups.append(make_group(f"fitness-group-{i}", f"Fitness Group {i}", members, notes))
        return groups
