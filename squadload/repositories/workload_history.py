"""
Workload history repository.

In-memory, per-athlete append log of :class:`WorkloadSession` records.
Includes the window queries used by the ACWR, EWMA and trend
computations.

Each athlete's log is kept in chronological order and trimmed to a
rolling retention window (90 days by default, measured back from the
athlete's newest session) on every insert.  Appends for the same athlete
are serialised by a per-athlete lock; appends for different athletes do
not contend.
"""

from __future__ import annotations

import bisect
import datetime
import logging
import threading
from typing import Optional

from squadload.schemas.workload import WorkloadSession

logger = logging.getLogger(__name__)

DEFAULT_RETENTION_DAYS = 90


class WorkloadHistoryRepository:
    """Repository for per-athlete workload history."""

    def __init__(self, retention_days: int = DEFAULT_RETENTION_DAYS):
        if retention_days < 1:
            raise ValueError("retention_days must be at least 1")
        self.retention_days = retention_days
        self._logs: dict[str, list[WorkloadSession]] = {}
        self._locks: dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

    def _lock_for(self, athlete_id: str) -> threading.Lock:
        with self._registry_lock:
            lock = self._locks.get(athlete_id)
            if lock is None:
                lock = self._locks[athlete_id] = threading.Lock()
            return lock

    # ------------------------------------------------------------------
    # Mutation
    # ------------------------------------------------------------------

    def append(self, entry: WorkloadSession) -> int:
        """Insert *entry* in date order and trim the athlete's window.

        Sessions sharing a date keep their insertion order.  Returns the
        number of sessions removed by the trim (the new entry itself is
        removed when it is already older than the window).
        """
        with self._lock_for(entry.athlete_id):
            # Copy-on-write: readers keep iterating the previous list.
            log = list(self._logs.get(entry.athlete_id, []))
            dates = [s.date for s in log]
            log.insert(bisect.bisect_right(dates, entry.date), entry)

            cutoff = log[-1].date - datetime.timedelta(days=self.retention_days - 1)
            first_kept = bisect.bisect_left([s.date for s in log], cutoff)
            trimmed = log[first_kept:]
            self._logs[entry.athlete_id] = trimmed

        removed = first_kept
        if removed:
            logger.info("Trimmed %d session(s) older than %s for athlete %s", removed, cutoff, entry.athlete_id)
        return removed

    def clear(self, athlete_id: Optional[str] = None) -> None:
        """Drop one athlete's history, or everything.

        Takes each athlete's lock, so an append in progress finishes
        before its log is dropped.
        """
        if athlete_id is not None:
            with self._lock_for(athlete_id):
                self._logs.pop(athlete_id, None)
            return

        with self._registry_lock:
            locks = list(self._locks.items())
        for known_id, lock in locks:
            with lock:
                self._logs.pop(known_id, None)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def athlete_ids(self) -> list[str]:
        return sorted(self._logs.keys())

    def get_by_athlete(self, athlete_id: str) -> list[WorkloadSession]:
        """Snapshot of the athlete's retained history, oldest first."""
        return list(self._logs.get(athlete_id, []))

    def get_by_athlete_date_range(self, athlete_id: str, start: datetime.date,
                                  end: datetime.date, ) -> list[WorkloadSession]:
        """Sessions with ``start <= date <= end``, oldest first."""
        return [s for s in self._logs.get(athlete_id, []) if start <= s.date <= end]

    def count_by_athlete_date_range(self, athlete_id: str, start: datetime.date, end: datetime.date, ) -> int:
        return len(self.get_by_athlete_date_range(athlete_id, start, end))

    def sum_weighted_load_by_date_range(self, athlete_id: str, start: datetime.date,
                                        end: datetime.date, ) -> float:
        """Sum of intensity/duration-weighted loads in the range.  Critical for ACWR."""
        return sum(s.weighted_load for s in self.get_by_athlete_date_range(athlete_id, start, end))
