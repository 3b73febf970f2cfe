"""
Distribution strategy registry.

Central registry for all available distribution strategies.  Strategies
are registered at import time via :func:`StrategyRegistry.register`.
The registry provides lookup by ``strategy_id`` and enumeration of all
available strategies in registration order.
"""

from __future__ import annotations

from typing import Optional

from squadload.strategies.base import DistributionStrategy


class StrategyRegistry:
    """Singleton registry of available distribution strategies."""

    _strategies: dict[str, DistributionStrategy] = {}

    @classmethod
    def register(cls, strategy: DistributionStrategy) -> None:
        """Register a strategy.

        Raises :class:`ValueError` if ``strategy_id`` is already taken.
        """
        if strategy.strategy_id in cls._strategies:
            raise ValueError(
                f"Strategy '{strategy.strategy_id}' already registered"
            )
        cls._strategies[strategy.strategy_id] = strategy

    @classmethod
    def get(cls, strategy_id: str) -> Optional[DistributionStrategy]:
        """Get a strategy by *strategy_id*.  Returns ``None`` if not found."""
        return cls._strategies.get(strategy_id)

    @classmethod
    def get_or_raise(cls, strategy_id: str) -> DistributionStrategy:
        """Get a strategy by *strategy_id*.

        Raises :class:`KeyError` if not found.
        """
        strategy = cls._strategies.get(strategy_id)
        if not strategy:
            raise KeyError(
                f"Strategy '{strategy_id}' not registered. "
                f"Available: {list(cls._strategies.keys())}"
            )
        return strategy

    @classmethod
    def all(cls) -> list[DistributionStrategy]:
        """Return all registered strategies in registration order."""
        return list(cls._strategies.values())

    @classmethod
    def available_strategy_ids(cls) -> list[str]:
        """Return sorted list of all registered ``strategy_id`` values."""
        return sorted(cls._strategies.keys())
