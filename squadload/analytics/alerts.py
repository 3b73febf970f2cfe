"""
Alert generator — stateless threshold rules over risk-path outputs.

Rules, in evaluation order:

============== ========================================== =================
type           trigger                                    severity
============== ========================================== =================
high-load      ACWR status high-risk / very-high-risk     warning / critical
poor-recovery  fatigue > 75                               warning, >85 critical
rapid-increase ACWR trend increasing and ratio > 1.2      warning
injury-risk    profile injury risk >= 70                  warning, >=85 critical
plateau        plateau predicted with confidence > 70     info
============== ========================================== =================
"""

from __future__ import annotations

import datetime
from dataclasses import dataclass
from typing import Optional

from squadload.analytics.rules import Rule, all_matches
from squadload.schemas.acwr import ACWRRecord, RiskStatus, Trend
from squadload.schemas.alerts import AlertSeverity, AlertType, FatigueAlert
from squadload.schemas.profile import AthleteProfile
from squadload.schemas.recovery import RecoveryPrediction
from squadload.schemas.trends import PerformanceTrend

INJURY_RISK_WARNING = 70.0
INJURY_RISK_CRITICAL = 85.0


@dataclass(frozen=True)
class AlertContext:
    acwr: ACWRRecord
    recovery: RecoveryPrediction
    trend: Optional[PerformanceTrend] = None
    profile: Optional[AthleteProfile] = None


@dataclass(frozen=True)
class AlertDraft:
    """Alert content produced by a rule, before it is stamped."""

    severity: AlertSeverity
    type: AlertType
    message: str
    recommendations: list[str]


def _high_load(c: AlertContext) -> AlertDraft:
    return AlertDraft(severity=AlertSeverity.CRITICAL if c.acwr.status == RiskStatus.VERY_HIGH else AlertSeverity.WARNING,
                     type=AlertType.HIGH_LOAD,
                     message=f"ACWR ratio of {c.acwr.ratio:.2f} indicates {c.acwr.status.value.replace('-', ' ')}",
                     recommendations=["Reduce training intensity for next 2-3 sessions",
                                      "Focus on recovery activities", "Monitor for injury symptoms", ], )


def _poor_recovery(c: AlertContext) -> AlertDraft:
    fatigue = c.recovery.current_fatigue
    return AlertDraft(severity=AlertSeverity.CRITICAL if fatigue > 85 else AlertSeverity.WARNING,
                     type=AlertType.POOR_RECOVERY, message=f"High fatigue level ({fatigue:.0f}%)",
                     recommendations=[f"Estimated recovery time: {c.recovery.estimated_recovery_hours}h",
                                      "Consider rest day or active recovery", "Evaluate sleep and nutrition", ], )


def _rapid_increase(c: AlertContext) -> AlertDraft:
    return AlertDraft(severity=AlertSeverity.WARNING, type=AlertType.RAPID_INCREASE,
                     message="Training load increasing rapidly",
                     recommendations=["Gradual load progression recommended", "Monitor recovery indicators",
                                      "Consider load distribution adjustments", ], )


def _injury_risk(c: AlertContext) -> AlertDraft:
    risk = c.profile.injury_risk
    return AlertDraft(severity=AlertSeverity.CRITICAL if risk >= INJURY_RISK_CRITICAL else AlertSeverity.WARNING,
                     type=AlertType.INJURY_RISK, message=f"Elevated injury risk ({risk:.0f}%)",
                     recommendations=["Review active medical restrictions", "Prefer low-impact training",
                                      "Coordinate with medical staff", ], )


def _plateau(c: AlertContext) -> AlertDraft:
    return AlertDraft(severity=AlertSeverity.INFO, type=AlertType.PLATEAU, message="Performance plateau predicted",
                     recommendations=list(c.trend.predicted_plateau.interventions), )


ALERT_RULES: list[Rule[AlertContext, AlertDraft]] = [
    Rule("high_load", lambda c: c.acwr.status in (RiskStatus.HIGH, RiskStatus.VERY_HIGH), _high_load),
    Rule("poor_recovery", lambda c: c.recovery.current_fatigue > 75, _poor_recovery),
    Rule("rapid_increase", lambda c: c.acwr.trend == Trend.INCREASING and c.acwr.ratio > 1.2, _rapid_increase),
    Rule("injury_risk", lambda c: c.profile is not None and c.profile.injury_risk >= INJURY_RISK_WARNING,
         _injury_risk),
    Rule("plateau", lambda c: (c.trend is not None and c.trend.predicted_plateau is not None
                               and c.trend.predicted_plateau.confidence > 70), _plateau),
]


def generate_alerts(acwr: ACWRRecord, recovery: RecoveryPrediction, triggered_at: datetime.datetime,
                    trend: Optional[PerformanceTrend] = None,
                    profile: Optional[AthleteProfile] = None, ) -> list[FatigueAlert]:
    """Evaluate :data:`ALERT_RULES` and stamp every matching alert."""
    context = AlertContext(acwr=acwr, recovery=recovery, trend=trend, profile=profile)
    name = recovery.athlete_name or acwr.athlete_name
    return [FatigueAlert(athlete_id=acwr.athlete_id, athlete_name=name, severity=draft.severity, type=draft.type,
                         message=draft.message, recommendations=draft.recommendations, triggered_at=triggered_at, )
            for draft in all_matches(ALERT_RULES, context)]
