"""Risk scoring and report readiness core for NR-12 compliance reports."""

from .models import (
    ActionItem,
    ActionStatus,
    ChecklistResponse,
    ChecklistStatus,
    GateResult,
    HazardAssessment,
    Machine,
    ReadinessResult,
    RemediationPriority,
    ReportStatus,
    RiskEntry,
    RiskTier,
)
from .engine import (
    FREQUENCY_VALUES,
    PROBABILITY_VALUES,
    SEVERITY_VALUES,
    InvalidFactorError,
    InvalidScoreError,
    action_due_date,
    assess_hazard,
    classify_risk_tier,
    compute_hazard_score,
    derive_priority,
    standard_deadline_days,
)
from .gates import (
    GATE_LABELS,
    check_action_plan_gate,
    check_checklist_gate,
    check_inventory_gate,
    check_risk_gate,
    evaluate_all_gates,
    non_compliant_responses,
)
from .conversions import RecordError, evaluate_rows
from .config import ConfigError, Settings, load_settings

__all__ = [
    "ActionItem",
    "ActionStatus",
    "ChecklistResponse",
    "ChecklistStatus",
    "GateResult",
    "HazardAssessment",
    "Machine",
    "ReadinessResult",
    "RemediationPriority",
    "ReportStatus",
    "RiskEntry",
    "RiskTier",
    "SEVERITY_VALUES",
    "PROBABILITY_VALUES",
    "FREQUENCY_VALUES",
    "InvalidFactorError",
    "InvalidScoreError",
    "action_due_date",
    "assess_hazard",
    "classify_risk_tier",
    "compute_hazard_score",
    "derive_priority",
    "standard_deadline_days",
    "GATE_LABELS",
    "check_action_plan_gate",
    "check_checklist_gate",
    "check_inventory_gate",
    "check_risk_gate",
    "evaluate_all_gates",
    "non_compliant_responses",
    "RecordError",
    "evaluate_rows",
    "ConfigError",
    "Settings",
    "load_settings",
]
