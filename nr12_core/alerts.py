"""Dashboard alerts built from risk entries and open action items."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, List, Optional

from .config import Settings
from .engine import InvalidScoreError, classify_risk_tier
from .models import ActionItem, ActionStatus, RemediationPriority, RiskEntry, RiskTier

DEFAULT_LIMIT = 10
UNDATED_DAYS = 999

_SEVERITY_ORDER = {
    RemediationPriority.CRITICAL: 0,
    RemediationPriority.HIGH: 1,
    RemediationPriority.MEDIUM: 2,
    RemediationPriority.LOW: 3,
}


@dataclass(frozen=True)
class Alert:
    kind: str  # RISK_CRITICAL or ACTION_DUE
    severity: RemediationPriority
    title: str
    entity_id: str
    days_until: int = 0
    due_date: Optional[date] = None

    def to_dict(self) -> Dict[str, object]:
        return {
            "kind": self.kind,
            "severity": self.severity.value,
            "title": self.title,
            "entity_id": self.entity_id,
            "days_until": self.days_until,
            "due_date": self.due_date.isoformat() if self.due_date else None,
        }


def critical_risk_alerts(
    risks: Iterable[RiskEntry],
    limit: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> List[Alert]:
    """Alerts for unacceptable and critical risks, highest HRN first.

    Entries without a usable HRN are left to the risk gate and skipped here.
    """

    limit = _resolve_limit(limit, settings)
    scored = []
    for risk in risks:
        try:
            tier = classify_risk_tier(risk.hrn_number)
        except InvalidScoreError:
            continue
        if tier in (RiskTier.UNACCEPTABLE, RiskTier.CRITICAL):
            scored.append((risk, tier))

    scored.sort(key=lambda pair: pair[0].hrn_number, reverse=True)
    return [
        Alert(
            kind="RISK_CRITICAL",
            severity=RemediationPriority.CRITICAL if tier is RiskTier.CRITICAL else RemediationPriority.HIGH,
            title=f"Risk {tier.label}: {_truncate(risk.hazard, 40)} (HRN {risk.hrn_number:g})",
            entity_id=risk.id,
        )
        for risk, tier in scored[:limit]
    ]


def pending_action_alerts(
    actions: Iterable[ActionItem],
    today: date,
    limit: Optional[int] = None,
    settings: Optional[Settings] = None,
) -> List[Alert]:
    """Alerts for open or in-progress actions ordered by due date."""

    limit = _resolve_limit(limit, settings)
    pending = [a for a in actions if a.status in (ActionStatus.OPEN, ActionStatus.IN_PROGRESS)]
    pending.sort(key=lambda a: (a.due_date is None, a.due_date or date.max))

    alerts = []
    for action in pending[:limit]:
        days = (action.due_date - today).days if action.due_date else UNDATED_DAYS
        priority = RemediationPriority(action.priority)
        severity = priority if priority in _SEVERITY_ORDER else RemediationPriority.MEDIUM
        alerts.append(
            Alert(
                kind="ACTION_DUE",
                severity=severity,
                title=f"Pending action: {_truncate(action.description, 50)}",
                entity_id=action.id,
                days_until=days,
                due_date=action.due_date,
            )
        )
    return alerts


def sort_alerts(alerts: Iterable[Alert]) -> List[Alert]:
    """Most severe first, then the ones due soonest."""
    return sorted(alerts, key=lambda a: (_SEVERITY_ORDER[a.severity], a.days_until))


def _resolve_limit(limit: Optional[int], settings: Optional[Settings]) -> int:
    if limit is not None:
        return limit
    return settings.alert_limit if settings is not None else DEFAULT_LIMIT


def _truncate(text: str, max_length: int) -> str:
    if len(text) <= max_length:
        return text
    return text[: max_length - 3] + "..."
