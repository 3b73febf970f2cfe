"""
Seedable entropy for the analytics core.

Randomness is used in two places only: k-means++ seeding and the
illustrative jitter applied when synthesising profiles and forecasts.
It never comes from the global :mod:`random` state.

:class:`EntropySource` hands out a *fresh* ``random.Random(seed)`` per
call, so two calls with the same seed see the same stream and produce
identical results.

The helper draws accept ``rng=None`` and return a neutral value: the
midpoint for baseline draws, zero for additive perturbations.  This lets every
algorithm run fully deterministically without any entropy at all.
"""

from __future__ import annotations

import random
from typing import Optional


class EntropySource:
    """Factory for seeded :class:`random.Random` instances."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    def spawn(self) -> random.Random:
        """Return a new generator seeded with :attr:`seed`."""
        return random.Random(self.seed)


def uniform_between(rng: Optional[random.Random], low: float, high: float) -> float:
    """Uniform draw in ``[low, high]``; midpoint when *rng* is ``None``."""
    if rng is None:
        return (low + high) / 2.0
    return low + rng.random() * (high - low)


def centred(rng: Optional[random.Random], spread: float) -> float:
    """Zero-mean draw in ``[-spread/2, spread/2]``; ``0`` when *rng* is ``None``."""
    if rng is None:
        return 0.0
    return (rng.random() - 0.5) * spread


def fraction(rng: Optional[random.Random], spread: float) -> float:
    """Draw in ``[0, spread]``; ``0`` when *rng* is ``None``."""
    if rng is None:
        return 0.0
    return rng.random() * spread


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
