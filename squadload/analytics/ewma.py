"""
EWMA (Exponentially Weighted Moving Average) smoothing of workload.

Model
-----
One smoothed value per athlete, updated once per session in
chronological order::

    EWMA_t = alpha × load_t + (1 - alpha) × EWMA_{t-1}

with ``alpha = 0.2``.  The fold starts from the athlete's stored
baseline, or the neutral baseline 50 when none was stored.  A registered
profile seeds ``50 + 0.2 × overall fitness`` unless a baseline was set
explicitly.  The fold runs over every retained session up to the
reference date.  The result depends only on the history and the
baseline, so calling it twice gives the same value.

Derived metrics
---------------
- **trend** — EWMA value after each session in the trailing 14 days.
- **volatility** — population standard deviation of the raw session
  loads in the trailing 14 days.
- **forecast** — 7 daily values by linear extrapolation of the last trend
  delta, plus an optional noise term ``(u - 0.5) × volatility × 0.5``,
  clamped to [0, 100].  Confidence is ``clamp(85 - 2×volatility, 50, 95)``.

With a constant load ``L`` the error against ``L`` shrinks by a factor
``(1 - alpha)`` per session; 20 sessions leave about 1.2 % of the initial
gap.
"""

from __future__ import annotations

import datetime
import logging
import random
import statistics
from typing import Optional, Sequence

from pydantic import BaseModel, Field

from squadload.core.entropy import centred, clamp
from squadload.repositories.workload_history import WorkloadHistoryRepository
from squadload.schemas.ewma import EWMAState, LoadForecast
from squadload.schemas.profile import AthleteProfile
from squadload.schemas.workload import WorkloadSession

logger = logging.getLogger(__name__)

# ======================================================================
# Configuration
# ======================================================================


class EWMAConfig(BaseModel):
    """Configuration for EWMA smoothing and forecasting."""

    alpha: float = Field(0.2, gt=0.0, le=1.0)
    baseline: float = Field(50.0, ge=0.0, description="Seed value when no baseline is stored")
    profile_fitness_weight: float = Field(0.2, ge=0.0, description="Share of overall fitness added to the seed "
                                                                  "of a registered profile")
    trend_days: int = Field(14, ge=1)
    forecast_days: int = Field(7, ge=1)
    forecast_noise: bool = Field(True, description="Add volatility-scaled noise when an rng is supplied")


DEFAULT_EWMA_CONFIG = EWMAConfig()


# ======================================================================
# Core computation
# ======================================================================


def smooth(loads: Sequence[float], seed: float, alpha: float) -> list[float]:
    """EWMA value after each load in *loads*."""
    values = []
    current = seed
    for load in loads:
        current = alpha * load + (1.0 - alpha) * current
        values.append(current)
    return values


def forecast_confidence(volatility: float) -> float:
    return clamp(85.0 - 2.0 * volatility, 50.0, 95.0)


def _forecast(trend: list[float], current: float, volatility: float, rng: Optional[random.Random],
              cfg: EWMAConfig, ) -> LoadForecast:
    last = trend[-1] if trend else current
    delta = trend[-1] - trend[-2] if len(trend) > 1 else 0.0
    noise_rng = rng if cfg.forecast_noise else None

    predictions = []
    for day in range(1, cfg.forecast_days + 1):
        noise = centred(noise_rng, volatility * 0.5)
        predictions.append(clamp(last + delta * day + noise, 0.0, 100.0))

    return LoadForecast(next_7_days=predictions, confidence=forecast_confidence(volatility),
                        factors=["Recent training patterns", f"Load volatility: {volatility:.1f}",
                                 "Athlete fitness profile", ], )


def compute_ewma(athlete_id: str, sessions: Sequence[WorkloadSession], as_of: datetime.date,
                 seed: Optional[float] = None, config: Optional[EWMAConfig] = None,
                 rng: Optional[random.Random] = None, ) -> EWMAState:
    """Compute the EWMA state from a chronological session list.

    Args:
        athlete_id: Athlete ID.
        sessions: The athlete's sessions, oldest first.  Sessions after
            *as_of* are ignored.
        as_of: Reference date.
        seed: Starting value; the configured baseline when ``None``.
        config: Optional :class:`EWMAConfig` override.
        rng: Optional entropy for forecast noise.
    """
    cfg = config or DEFAULT_EWMA_CONFIG
    start_value = cfg.baseline if seed is None else seed
    window_start = as_of - datetime.timedelta(days=cfg.trend_days - 1)

    included = [s for s in sessions if s.date <= as_of]
    values = smooth([s.effective_load for s in included], start_value, cfg.alpha)
    current = values[-1] if values else start_value

    trend = [v for s, v in zip(included, values) if s.date >= window_start]
    recent_loads = [s.effective_load for s in included if s.date >= window_start]
    volatility = statistics.pstdev(recent_loads) if recent_loads else 0.0

    return EWMAState(athlete_id=athlete_id, date=as_of, current=current, trend=trend, volatility=volatility,
                     forecast=_forecast(trend, current, volatility, rng, cfg), )


# ======================================================================
# Per-athlete smoother
# ======================================================================


class EWMASmoother:
    """Keeps per-athlete baselines and the last computed state."""

    def __init__(self, repo: WorkloadHistoryRepository, config: Optional[EWMAConfig] = None):
        self.repo = repo
        self.config = config or DEFAULT_EWMA_CONFIG
        self._baselines: dict[str, float] = {}
        self._explicit: set[str] = set()
        self._latest: dict[str, EWMAState] = {}

    def set_baseline(self, athlete_id: str, value: float) -> None:
        """Store the value the fold starts from for *athlete_id*."""
        if value < 0:
            raise ValueError("EWMA baseline must be non-negative")
        self._baselines[athlete_id] = value
        self._explicit.add(athlete_id)

    def seed_from_profile(self, profile: AthleteProfile) -> None:
        """Derive the baseline from *profile* unless one was set explicitly."""
        if profile.id in self._explicit:
            return
        self._baselines[profile.id] = (self.config.baseline
                                       + self.config.profile_fitness_weight * profile.fitness.overall)

    def baseline(self, athlete_id: str) -> float:
        return self._baselines.get(athlete_id, self.config.baseline)

    def latest(self, athlete_id: str) -> Optional[EWMAState]:
        """Most recently computed state, if any."""
        return self._latest.get(athlete_id)

    def compute(self, athlete_id: str, as_of: datetime.date, rng: Optional[random.Random] = None) -> EWMAState:
        state = compute_ewma(athlete_id, self.repo.get_by_athlete(athlete_id), as_of,
                             seed=self.baseline(athlete_id), config=self.config, rng=rng, )
        self._latest[athlete_id] = state
        logger.debug("EWMA for %s on %s: %.2f (volatility %.2f)", athlete_id, as_of, state.current,
                     state.volatility)
        return state
