"""Domain models for the NR-12 risk scoring and report readiness core."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, Optional, Tuple


class RiskTier(str, Enum):
    """Risk tiers derived from the hazard rating number (HRN)."""

    ACCEPTABLE = "ACCEPTABLE"
    TOLERABLE = "TOLERABLE"
    UNACCEPTABLE = "UNACCEPTABLE"
    CRITICAL = "CRITICAL"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        """Portuguese label stored by the reporting application."""
        return _TIER_LABELS[self]

    @classmethod
    def from_label(cls, value: str) -> "RiskTier":
        """Resolve either the English name or the Portuguese label."""
        key = (value or "").strip().upper()
        for tier, label in _TIER_LABELS.items():
            if key in (tier.value, label):
                return tier
        raise ValueError(f"Unknown risk tier: {value!r}")


_TIER_LABELS = {
    RiskTier.ACCEPTABLE: "ACEITAVEL",
    RiskTier.TOLERABLE: "TOLERAVEL",
    RiskTier.UNACCEPTABLE: "INACEITAVEL",
    RiskTier.CRITICAL: "CRITICO",
}


class RemediationPriority(str, Enum):
    """Priority vocabulary used by corrective action items."""

    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"
    IMPROVEMENT = "IMPROVEMENT"  # set by users, never derived from a score

    def __str__(self) -> str:
        return self.value


class ChecklistStatus(str, Enum):
    COMPLIANT = "COMPLIANT"
    NONCOMPLIANT = "NONCOMPLIANT"
    NOT_APPLICABLE = "NOT_APPLICABLE"

    def __str__(self) -> str:
        return self.value


class ActionStatus(str, Enum):
    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    VERIFIED = "VERIFIED"

    def __str__(self) -> str:
        return self.value


class ReportStatus(str, Enum):
    DRAFT = "DRAFT"
    IN_REVIEW = "IN_REVIEW"
    READY = "READY"
    SIGNED = "SIGNED"
    ARCHIVED = "ARCHIVED"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Machine:
    """Equipment linked to a report."""

    id: str
    tag: str = ""
    name: str = ""


@dataclass(frozen=True)
class ChecklistResponse:
    """Answer to one checklist requirement for one machine within a report."""

    id: str
    status: ChecklistStatus
    machine_id: Optional[str] = None
    requirement_id: Optional[str] = None
    observation: Optional[str] = None


@dataclass(frozen=True)
class RiskEntry:
    """Identified hazard of a risk assessment with its stored HRN."""

    id: str
    hazard: str = ""
    hrn_number: Optional[float] = None  # None while the calculation is pending
    hrn_severity: Optional[float] = None
    hrn_probability: Optional[float] = None
    hrn_frequency: Optional[float] = None
    risk_level: Optional[RiskTier] = None


@dataclass(frozen=True)
class ActionItem:
    """Corrective action belonging to an action plan."""

    id: str
    description: str = ""
    priority: RemediationPriority = RemediationPriority.MEDIUM
    status: ActionStatus = ActionStatus.OPEN
    due_days: Optional[int] = None
    due_date: Optional[date] = None


@dataclass(frozen=True)
class HazardAssessment:
    """Scored hazard: HRN plus everything derived from it."""

    severity: float
    probability: float
    frequency: float
    hrn_number: float
    tier: RiskTier
    priority: RemediationPriority
    deadline_days: int

    def to_dict(self) -> Dict[str, object]:
        return {
            "severity": self.severity,
            "probability": self.probability,
            "frequency": self.frequency,
            "hrn_number": self.hrn_number,
            "tier": self.tier.value,
            "priority": self.priority.value,
            "deadline_days": self.deadline_days,
        }


@dataclass(frozen=True)
class GateResult:
    """Outcome of one readiness gate. A failure always carries a reason."""

    ok: bool
    message: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.ok and not self.message:
            raise ValueError("A failed gate result requires a message.")

    @classmethod
    def passed(cls) -> "GateResult":
        return cls(ok=True)

    @classmethod
    def failed(cls, message: str) -> "GateResult":
        return cls(ok=False, message=message)

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {"ok": self.ok}
        if self.message is not None:
            data["message"] = self.message
        return data


@dataclass(frozen=True)
class ReadinessResult:
    """Aggregate of all gates for one report."""

    can_sign: bool
    failed_gates: Tuple[str, ...] = ()
    messages: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, object]:
        return {
            "can_sign": self.can_sign,
            "failed_gates": list(self.failed_gates),
            "messages": dict(self.messages),
        }
