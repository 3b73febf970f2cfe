"""
Position-based distribution strategy.

Groups profiles by position (in order of first appearance) and deals
contiguous blocks of positions out to sessions.  Works on raw profiles;
no clustering is needed.
"""

from squadload.schemas.cluster import Cluster
from squadload.schemas.distribution import SessionGroup, StrategyParameters
from squadload.schemas.profile import AthleteProfile
from squadload.strategies.base import DistributionStrategy
from squadload.strategies.groups import make_group, split_evenly


class PositionBasedStrategy(DistributionStrategy):
    """Role-specific sessions."""

    @property
    def strategy_id(self) -> str:
        return "position-based"

    @property
    def display_name(self) -> str:
        return "Position-Specific Training"

    @property
    def description(self) -> str:
        return "Group athletes by position for role-specific skill development"

    @property
    def default_parameters(self) -> StrategyParameters:
        return StrategyParameters(max_group_size=8, balance_positions=True)

    @property
    def reasoning(self) -> str:
        return "Athletes grouped by position for role-specific training"

    @property
    def uses_clusters(self) -> bool:
        return False

    @property
    def pros(self) -> list[str]:
        return ["Role-specific skills", "Position-focused drills", "Team chemistry"]

    @property
    def cons(self) -> list[str]:
        return ["Variable fitness levels", "Potential size imbalances"]

    def build_groups(self, profiles: list[AthleteProfile], clusters: list[Cluster],
                     session_count: int, ) -> list[SessionGroup]:
        by_position: dict[str, list[AthleteProfile]] = {}
        for profile in profiles:
            by_position.setdefault(profile.position, []).append(profile)

        groups = []
        for i, positions in enumerate(split_evenly(list(by_position), session_count), start=1):
            members = [p for position in positions for p in by_position[position]]
            groups.append(make_group(f"position-group-{i}", f"{'/'.join(positions)} Group", members,
                                     [f"Positions: {', '.join(positions)}"]))
        return groups
