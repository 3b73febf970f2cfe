"""Tests for the distribution strategy registry."""

import pytest

from squadload.strategies import DEFAULT_STRATEGY_ID, StrategyRegistry
from squadload.strategies.balanced import BalancedStrategy
from squadload.strategies.base import DistributionStrategy


class _SingleGroupStrategy(DistributionStrategy):
    strategy_id = "single-group"
    display_name = "Single Group"
    description = "Everyone trains together"
    reasoning = "One session for the whole squad"

    @property
    def default_parameters(self):
        return BalancedStrategy().default_parameters

    def build_groups(self, profiles, clusters, session_count):
        return []


class TestStrategyRegistry:
    def test_builtins_registered(self):
        assert StrategyRegistry.available_strategy_ids() == [
            "balanced", "fitness-based", "position-based", "recovery-focused",
        ]

    def test_registration_order(self):
        assert [s.strategy_id for s in StrategyRegistry.all()][:4] == [
            "balanced", "fitness-based", "position-based", "recovery-focused",
        ]

    def test_default_strategy_exists(self):
        assert StrategyRegistry.get(DEFAULT_STRATEGY_ID) is not None

    def test_get_unknown(self):
        assert StrategyRegistry.get("nope") is None

    def test_get_or_raise(self):
        assert StrategyRegistry.get_or_raise("balanced").strategy_id == "balanced"
        with pytest.raises(KeyError):
            StrategyRegistry.get_or_raise("nope")

    def test_duplicate_registration(self):
        with pytest.raises(ValueError):
            StrategyRegistry.register(BalancedStrategy())

    def test_register_custom_strategy(self, monkeypatch):
        monkeypatch.setattr(StrategyRegistry, "_strategies", dict(StrategyRegistry._strategies))
        StrategyRegistry.register(_SingleGroupStrategy())
        assert StrategyRegistry.get("single-group") is not None
        assert StrategyRegistry.available_strategy_ids()[-1] == "single-group"

    def test_info(self):
        info = StrategyRegistry.get_or_raise("position-based").info()
        assert info.strategy_id == "position-based"
        assert info.name == "Position-Specific Training"
        assert info.parameters.max_group_size == 8
