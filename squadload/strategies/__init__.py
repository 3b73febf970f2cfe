"""
Distribution strategy system.

Import this module to register all available strategies.
New strategies are added by:
  1. Creating a class implementing :class:`DistributionStrategy`
  2. Adding a registration line below
"""

from squadload.strategies.balanced import BalancedStrategy
from squadload.strategies.base import DistributionStrategy
from squadload.strategies.fitness import FitnessBasedStrategy
from squadload.strategies.position import PositionBasedStrategy
from squadload.strategies.recovery import RecoveryFocusedStrategy
from squadload.strategies.registry import StrategyRegistry

# Register all built-in strategies (registration order drives alternatives)
StrategyRegistry.register(BalancedStrategy())
StrategyRegistry.register(FitnessBasedStrategy())
StrategyRegistry.register(PositionBasedStrategy())
StrategyRegistry.register(RecoveryFocusedStrategy())

DEFAULT_STRATEGY_ID = "balanced"

__all__ = ["DEFAULT_STRATEGY_ID", "DistributionStrategy", "StrategyRegistry"]
