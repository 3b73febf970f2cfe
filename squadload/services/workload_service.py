"""
Workload analytics service.

Front door of the risk path::

    add_workload_session → history
    history → ACWR + EWMA → recovery prediction → alerts

Reference dates default to the injected clock (``datetime.now`` unless
overridden), so tests can pin "today".  Registered profiles supply the
athlete name, the recovery capacity and the injury-risk alert input;
athletes without a profile get neutral defaults.
"""

from __future__ import annotations

import datetime
import logging
from typing import Callable, Iterable, Optional

from squadload.analytics import trends
from squadload.analytics.acwr import DEFAULT_CONFIG, ACWRConfig, compute_acwr
from squadload.analytics.alerts import generate_alerts
from squadload.analytics.ewma import EWMAConfig, EWMASmoother
from squadload.analytics.recovery import RecoveryConfig
from squadload.analytics.recovery import predict_recovery as _predict_recovery
from squadload.core.config import Settings
from squadload.core.config import settings as default_settings
from squadload.core.entropy import EntropySource
from squadload.repositories.workload_history import WorkloadHistoryRepository
from squadload.schemas.acwr import ACWRRecord
from squadload.schemas.alerts import FatigueAlert
from squadload.schemas.batch import BatchPredictions
from squadload.schemas.ewma import EWMAState
from squadload.schemas.profile import AthleteProfile
from squadload.schemas.recovery import RecoveryPrediction
from squadload.schemas.trends import PerformanceTrend, Timeframe
from squadload.schemas.workload import WorkloadSession

logger = logging.getLogger(__name__)


class WorkloadAnalyticsService:
    """Service for workload tracking and risk prediction."""

    def __init__(self, settings: Optional[Settings] = None, repository: Optional[WorkloadHistoryRepository] = None,
                 entropy: Optional[EntropySource] = None,
                 clock: Optional[Callable[[], datetime.datetime]] = None, acwr_config: Optional[ACWRConfig] = None, ):
        self.settings = settings or default_settings
        self.repository = repository or WorkloadHistoryRepository(self.settings.HISTORY_RETENTION_DAYS)
        self.entropy = entropy or EntropySource(self.settings.RANDOM_SEED)
        self.clock = clock or datetime.datetime.now

        self.acwr_config = acwr_config or DEFAULT_CONFIG
        self.smoother = EWMASmoother(self.repository, EWMAConfig(alpha=self.settings.EWMA_ALPHA,
                                                                 baseline=self.settings.EWMA_BASELINE,
                                                                 forecast_noise=self.settings.FORECAST_NOISE, ))
        self.recovery_config = RecoveryConfig(fatigue_variation=self.settings.FATIGUE_VARIATION,
                                              recovery_variability=self.settings.RECOVERY_VARIABILITY, )
        self._profiles: dict[str, AthleteProfile] = {}

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def register_profiles(self, profiles: Iterable[AthleteProfile]) -> None:
        """Remember profiles by id and seed their EWMA baselines.

        A later profile replaces an earlier one.  Baselines set through
        :meth:`set_ewma_baseline` are kept.
        """
        for profile in profiles:
            self._profiles[profile.id] = profile
            self.smoother.seed_from_profile(profile)

    def add_workload_session(self, session: WorkloadSession) -> int:
        """Append a session to the history.  Returns the number trimmed."""
        return self.repository.append(session)

    def set_ewma_baseline(self, athlete_id: str, value: float) -> None:
        self.smoother.set_baseline(athlete_id, value)

    # ------------------------------------------------------------------
    # Per-athlete analytics
    # ------------------------------------------------------------------

    def get_acwr(self, athlete_id: str, as_of: Optional[datetime.date] = None) -> ACWRRecord:
        return compute_acwr(self.repository, athlete_id, self._date(as_of), self.acwr_config,
                            athlete_name=self._name(athlete_id), )

    def get_ewma(self, athlete_id: str, as_of: Optional[datetime.date] = None) -> EWMAState:
        return self.smoother.compute(athlete_id, self._date(as_of), rng=self.entropy.spawn())

    def predict_recovery(self, athlete_id: str, as_of: Optional[datetime.date] = None) -> RecoveryPrediction:
        now = self._moment(as_of)
        acwr = self.get_acwr(athlete_id, now.date())
        ewma = self.get_ewma(athlete_id, now.date())
        return _predict_recovery(acwr, ewma, now, profile=self._profiles.get(athlete_id), rng=self.entropy.spawn(),
                                 config=self.recovery_config, )

    def analyze_performance_trends(self, athlete_id: str, timeframe: Timeframe = Timeframe.MONTH,
                                   as_of: Optional[datetime.date] = None, ) -> PerformanceTrend:
        return trends.analyze_performance_trends(self.repository, athlete_id, self._date(as_of), timeframe,
                                                 self.acwr_config, )

    def get_alerts(self, athlete_id: str, as_of: Optional[datetime.date] = None) -> list[FatigueAlert]:
        now = self._moment(as_of)
        acwr = self.get_acwr(athlete_id, now.date())
        recovery = self.predict_recovery(athlete_id, now.date())
        trend = self.analyze_performance_trends(athlete_id, as_of=now.date())
        alerts = generate_alerts(acwr, recovery, now, trend=trend, profile=self._profiles.get(athlete_id))
        if alerts:
            logger.info("%d alert(s) raised for athlete %s", len(alerts), athlete_id)
        return alerts

    # ------------------------------------------------------------------
    # Batch variants
    # ------------------------------------------------------------------

    def get_batch_acwr(self, athlete_ids: list[str], as_of: Optional[datetime.date] = None) -> list[ACWRRecord]:
        return [self.get_acwr(athlete_id, as_of) for athlete_id in athlete_ids]

    def get_batch_ewma(self, athlete_ids: list[str], as_of: Optional[datetime.date] = None) -> list[EWMAState]:
        return [self.get_ewma(athlete_id, as_of) for athlete_id in athlete_ids]

    def get_batch_recovery(self, athlete_ids: list[str],
                           as_of: Optional[datetime.date] = None, ) -> list[RecoveryPrediction]:
        return [self.predict_recovery(athlete_id, as_of) for athlete_id in athlete_ids]

    def get_batch_alerts(self, athlete_ids: list[str],
                         as_of: Optional[datetime.date] = None, ) -> list[list[FatigueAlert]]:
        return [self.get_alerts(athlete_id, as_of) for athlete_id in athlete_ids]

    def get_batch_predictions(self, athlete_ids: list[str],
                              as_of: Optional[datetime.date] = None, ) -> BatchPredictions:
        """ACWR and recovery per athlete plus every alert, flattened."""
        return BatchPredictions(acwr=self.get_batch_acwr(athlete_ids, as_of),
                                recovery=self.get_batch_recovery(athlete_ids, as_of),
                                alerts=[a for alerts in self.get_batch_alerts(athlete_ids, as_of) for a in alerts], )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _moment(self, as_of: Optional[datetime.date]) -> datetime.datetime:
        if as_of is None:
            return self.clock()
        return datetime.datetime.combine(as_of, datetime.time())

    def _date(self, as_of: Optional[datetime.date]) -> datetime.date:
        return as_of if as_of is not None else self.clock().date()

    def _name(self, athlete_id: str) -> Optional[str]:
        profile = self._profiles.get(athlete_id)
        return profile.name if profile is not None else None
