"""
Recovery-focused distribution strategy.

Sorts individual profiles by recovery need (``fatigue + injury_risk -
recovery_capacity``, highest first) and slices them into session-sized
blocks.  The highest-need block always trains at low intensity.
"""

from squadload.schemas.cluster import Cluster
from squadload.schemas.distribution import SessionGroup, StrategyParameters
from squadload.schemas.profile import AthleteProfile
from squadload.schemas.recovery import SessionIntensity
from squadload.strategies.base import DistributionStrategy
from squadload.strategies.groups import make_group, split_evenly

# Mean recovery need above which a group is told to focus on recovery.
_RECOVERY_FOCUS_NEED = 50.0


class RecoveryFocusedStrategy(DistributionStrategy):
    """Separate the athletes who most need to recover."""

    @property
    def strategy_id(self) -> str:
        return "recovery-focused"

    @property
    def display_name(self) -> str:
        return "Recovery-Focused"

    @property
    def description(self) -> str:
        return "Prioritize athlete recovery needs and fatigue management"

    @property
    def default_parameters(self) -> StrategyParameters:
        return StrategyParameters(max_group_size=15, prioritize_recovery=True)

    @property
    def reasoning(self) -> str:
        return "Distribution prioritizes athlete recovery needs"

    @property
    def uses_clusters(self) -> bool:
        return False

    @property
    def pros(self) -> list[str]:
        return ["Injury prevention", "Optimal recovery", "Sustainable training"]

    @property
    def cons(self) -> list[str]:
        return ["Complex to manage", "May limit high performers"]

    @property
    def warnings(self) -> list[str]:
        return ["Some high-fatigue players may need reduced intensity"]

    def build_groups(self, profiles: list[AthleteProfile], clusters: list[Cluster],
                     session_count: int, ) -> list[SessionGroup]:
        ranked = sorted(profiles, key=lambda p: p.recovery_need, reverse=True)
        groups = []
        for i, block in enumerate(split_evenly(ranked, session_count), start=1):
            need = sum(p.recovery_need for p in block) / len(block)
            focus = "Focus on recovery" if need > _RECOVERY_FOCUS_NEED else "Moderate training load"
            group = make_group(f"recovery-group-{i}", f"Recovery Group {i}", block, [focus])
            if i == 1:
                group.recommended_intensity = SessionIntensity.LOW
            groups.append(group)
        return groups
