"""
Balanced distribution strategy.

Flattens the clustered profiles into one ordered list (cluster by
cluster) and slices it into ``session_count`` contiguous blocks of
near-equal size.  It is also the fallback for unknown strategy names.
"""

from squadload.schemas.cluster import Cluster
from squadload.schemas.distribution import SessionGroup, StrategyParameters
from squadload.schemas.profile import AthleteProfile
from squadload.strategies.base import DistributionStrategy
from squadload.strategies.groups import make_group, split_evenly


class BalancedStrategy(DistributionStrategy):
    """Even group sizes across sessions."""

    @property
    def strategy_id(self) -> str:
        return "balanced"

    @property
    def display_name(self) -> str:
        return "Balanced Distribution"

    @property
    def description(self) -> str:
        return "Evenly distribute athletes across sessions with similar group sizes"

    @property
    def default_parameters(self) -> StrategyParameters:
        return StrategyParameters(max_group_size=12, min_fitness_variation=20)

    @property
    def reasoning(self) -> str:
        return "Athletes distributed evenly across sessions for balanced training loads"

    @property
    def pros(self) -> list[str]:
        return ["Equal group sizes", "Simple implementation", "Fair distribution"]

    @property
    def cons(self) -> list[str]:
        return ["May mix fitness levels", "Less specialized training"]

    def build_groups(self, profiles: list[AthleteProfile], clusters: list[Cluster],
                     session_count: int, ) -> list[SessionGroup]:
        ordered = [p for c in clusters for p in c.members] if clusters else list(profiles)
        return [make_group(f"session-{i}", f"Session Group {i}", block, ["Balanced distribution"])
                for i, block in enumerate(split_evenly(ordered, session_count), start=1)]
