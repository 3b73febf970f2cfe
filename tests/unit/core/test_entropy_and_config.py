"""Tests for the entropy source and settings."""

import random

import pytest

from squadload.core.config import Settings
from squadload.core.entropy import EntropySource, centred, clamp, fraction, uniform_between


# ======================================================================
# EntropySource
# ======================================================================


class TestEntropySource:
    def test_spawn_is_fresh_each_time(self):
        source = EntropySource(42)
        first = [source.spawn().random() for _ in range(3)]
        assert first[0] == first[1] == first[2]

    def test_spawn_matches_seeded_random(self):
        assert EntropySource(9).spawn().random() == random.Random(9).random()

    def test_streams_are_independent(self):
        source = EntropySource(1)
        a = source.spawn()
        a.random()
        assert source.spawn().random() == random.Random(1).random()


# ======================================================================
# Draw helpers
# ======================================================================


class TestDrawHelpers:
    def test_neutral_values_without_rng(self):
        assert uniform_between(None, 60.0, 90.0) == 75.0
        assert centred(None, 20.0) == 0.0
        assert fraction(None, 20.0) == 0.0

    def test_ranges_with_rng(self):
        rng = random.Random(0)
        for _ in range(100):
            assert 60.0 <= uniform_between(rng, 60.0, 90.0) <= 90.0
            assert -10.0 <= centred(rng, 20.0) <= 10.0
            assert 0.0 <= fraction(rng, 20.0) <= 20.0

    @pytest.mark.parametrize("value, expected", [(-5.0, 0.0), (50.0, 50.0), (120.0, 100.0)])
    def test_clamp(self, value, expected):
        assert clamp(value, 0.0, 100.0) == expected


# ======================================================================
# Settings
# ======================================================================


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.RANDOM_SEED == 42
        assert s.KMEANS_MAX_ITERATIONS == 100
        assert s.KMEANS_CONVERGENCE_THRESHOLD == pytest.approx(0.001)
        assert s.HISTORY_RETENTION_DAYS == 90
        assert s.EWMA_ALPHA == pytest.approx(0.2)
        assert s.FATIGUE_VARIATION == 0.0

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SQUADLOAD_RANDOM_SEED", "7")
        monkeypatch.setenv("SQUADLOAD_PROFILE_JITTER", "false")
        s = Settings()
        assert s.RANDOM_SEED == 7
        assert s.PROFILE_JITTER is False
