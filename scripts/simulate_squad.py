"""Simulate a squad: profiles, training groups and four weeks of workload risk."""

import datetime
import logging

from squadload.core.config import Settings
from squadload.core.entropy import EntropySource
from squadload.schemas.athlete import (
    AthleteRecord,
    FatigueLevel,
    MedicalRestriction,
    ReadinessSnapshot,
    RestrictionSeverity,
    RestrictionType,
    WellnessStatus,
)
from squadload.schemas.workload import Intensity, SessionType, WorkloadSession
from squadload.services import GroupingService, WorkloadAnalyticsService

# ─── Roster ──────────────────────────────────────────────────────────
ROSTER = [
    ("p01", "Lina Berg", "Forward"),
    ("p02", "Ole Strand", "Forward"),
    ("p03", "Maja Lund", "Center"),
    ("p04", "Jon Dahl", "Center"),
    ("p05", "Ida Moe", "Winger"),
    ("p06", "Erik Holm", "Winger"),
    ("p07", "Sara Vik", "Defense"),
    ("p08", "Nils Aas", "Defense"),
    ("p09", "Tora Bakke", "Defense"),
    ("p10", "Kai Lie", "Goalie"),
    ("p11", "Vera Nes", "Forward"),
    ("p12", "Are Foss", "Defense"),
]

READINESS = [
    ("p02", FatigueLevel.HIGH, 125.0),
    ("p05", FatigueLevel.LOW, 85.0),
    ("p07", FatigueLevel.MEDIUM, 100.0),
]

RESTRICTIONS = [
    ("p04", RestrictionSeverity.MODERATE, RestrictionType.INJURY, "Hamstring strain"),
    ("p09", RestrictionSeverity.MINOR, RestrictionType.ILLNESS, "Cold"),
]

# ─── Weekly load patterns (load, intensity) by weekday, Mon..Sun ────
STEADY_WEEK = [(60, Intensity.MEDIUM), (55, Intensity.LOW), (65, Intensity.MEDIUM), None,
               (60, Intensity.MEDIUM), (70, Intensity.HIGH), None]
SPIKE_WEEK = [(90, Intensity.HIGH), (90, Intensity.HIGH), (85, Intensity.MAX), (90, Intensity.HIGH),
              (90, Intensity.HIGH), None, None]

TODAY = datetime.datetime(2024, 3, 29, 8, 0)
SESSION_TYPES = [SessionType.CONDITIONING, SessionType.STRENGTH, SessionType.AGILITY, SessionType.HYBRID]


def _records():
    athletes = [AthleteRecord(id=i, name=n, position=p,
                              wellness_status=WellnessStatus.LIMITED if i == "p04" else WellnessStatus.HEALTHY)
                for i, n, p in ROSTER]
    readiness = [ReadinessSnapshot(athlete_id=i, fatigue=f, load=l) for i, f, l in READINESS]
    restrictions = [MedicalRestriction(athlete_id=i, severity=s, type=t, description=d)
                    for i, s, t, d in RESTRICTIONS]
    return athletes, readiness, restrictions


def _log_weeks(service, athlete_id, weeks):
    """Log one pattern per week, ending in the week containing TODAY."""
    monday = TODAY.date() - datetime.timedelta(days=TODAY.weekday() + 7 * (len(weeks) - 1))
    for w, pattern in enumerate(weeks):
        for weekday, slot in enumerate(pattern):
            day = monday + datetime.timedelta(days=7 * w + weekday)
            if slot is None or day > TODAY.date():
                continue
            load, intensity = slot
            service.add_workload_session(WorkloadSession(athlete_id=athlete_id, date=day, planned_load=load,
                                                         intensity=intensity,
                                                         session_type=SESSION_TYPES[weekday % len(SESSION_TYPES)]))


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    settings = Settings()
    entropy = EntropySource(settings.RANDOM_SEED)

    grouping = GroupingService(settings, entropy)
    athletes, readiness, restrictions = _records()
    profiles = grouping.build_profiles(athletes, readiness, restrictions)

    # ── Profiles ────────────────────────────────────────────────────
    print()
    print("=" * 86)
    print(f"{'ID':<5} {'Name':<12} {'Position':<9} {'Fit':>6} {'Risk':>6} {'Load':>6} {'Fat':>6} {'Avail':>6}")
    print("=" * 86)
    for p in profiles:
        print(f"{p.id:<5} {p.name:<12} {p.position:<9} {p.fitness.overall:>6.1f} {p.injury_risk:>6.1f} "
              f"{p.current_load:>6.1f} {p.fatigue:>6.1f} {p.availability:>6.0f}")

    # ── Clusters ────────────────────────────────────────────────────
    print()
    print("CLUSTERS")
    for c in grouping.cluster(profiles, k=3):
        print(f"  {c.name:<10} n={c.size:<3} load={c.recommended_load:>5.1f}%  {', '.join(c.characteristics)}")

    # ── Distributions ───────────────────────────────────────────────
    for info in grouping.available_strategies():
        result = grouping.distribute(profiles, info.strategy_id, session_count=2)
        print()
        print(f"{info.name} (confidence {result.confidence_score:.0f})")
        for g in result.session_groups:
            print(f"  {g.name:<26} {g.recommended_intensity.value:<7} {', '.join(p.id for p in g.members)}")
        for warning in result.warnings:
            print(f"  ! {warning}")

    # ── Workload risk ───────────────────────────────────────────────
    analytics = WorkloadAnalyticsService(settings, entropy=entropy, clock=lambda: TODAY)
    analytics.register_profiles(profiles)
    for p in profiles:
        weeks = [STEADY_WEEK] * 3 + [SPIKE_WEEK] if p.id in ("p02", "p06") else [STEADY_WEEK] * 4
        _log_weeks(analytics, p.id, weeks)

    ids = [p.id for p in profiles]
    batch = analytics.get_batch_predictions(ids)

    print()
    print("=" * 86)
    print(f"{'ID':<5} {'Acute':>7} {'Chronic':>8} {'ACWR':>6} {'Status':<15} {'Fatigue':>8} {'Hours':>6} {'Next':<7}")
    print("=" * 86)
    for acwr, recovery in zip(batch.acwr, batch.recovery):
        print(f"{acwr.athlete_id:<5} {acwr.acute_load:>7.1f} {acwr.chronic_load:>8.1f} {acwr.ratio:>6.2f} "
              f"{acwr.status.value:<15} {recovery.current_fatigue:>8.1f} {recovery.estimated_recovery_hours:>6} "
              f"{recovery.next_session.recommended_intensity.value:<7}")

    print()
    print("ALERTS")
    for alert in batch.alerts:
        print(f"  [{alert.severity.value:<8}] {alert.athlete_name:<12} {alert.type.value:<15} {alert.message}")


if __name__ == "__main__":
    main()
