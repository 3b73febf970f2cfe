"""
Abstract base class for distribution strategies.

Every distribution strategy implements this interface.  A strategy
defines:

- A unique strategy identifier (slug)
- A display name and description
- Default parameters (notably the maximum group size)
- The reasoning, pros, cons and warnings reported with its output
- How profiles (or their clusters) become session groups
"""

from abc import ABC, abstractmethod

from squadload.schemas.cluster import Cluster
from squadload.schemas.distribution import SessionGroup, StrategyInfo, StrategyParameters
from squadload.schemas.profile import AthleteProfile


class DistributionStrategy(ABC):
    """Abstract base class that every distribution strategy must implement."""

    @property
    @abstractmethod
    def strategy_id(self) -> str:
        """Unique slug identifier, e.g. ``'balanced'``."""
        ...

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Human-readable name, e.g. ``'Balanced Distribution'``."""
        ...

    @property
    @abstractmethod
    def description(self) -> str:
        ...

    @property
    @abstractmethod
    def default_parameters(self) -> StrategyParameters:
        ...

    @property
    @abstractmethod
    def reasoning(self) -> str:
        """One-line explanation reported with the distribution."""
        ...

    @abstractmethod
    def build_groups(self, profiles: list[AthleteProfile], clusters: list[Cluster],
                     session_count: int, ) -> list[SessionGroup]:
        """Build session groups.

        Args:
            profiles: Every profile to distribute, in input order.
            clusters: The same profiles clustered; empty when
                :attr:`uses_clusters` is ``False``.
            session_count: Number of sessions requested (>= 1).

        Returns:
            Non-empty groups whose members together are exactly
            *profiles*.
        """
        ...

    # ------------------------------------------------------------------
    # Optional overrides with sensible defaults
    # ------------------------------------------------------------------

    @property
    def uses_clusters(self) -> bool:
        """If ``True`` the engine clusters the profiles first.  Default ``True``."""
        return True

    @property
    def pros(self) -> list[str]:
        return []

    @property
    def cons(self) -> list[str]:
        return []

    @property
    def warnings(self) -> list[str]:
        """Warnings always attached to this strategy's output.  Default none."""
        return []

    def info(self) -> StrategyInfo:
        return StrategyInfo(strategy_id=self.strategy_id, name=self.display_name, description=self.description,
                            parameters=self.default_parameters, )
