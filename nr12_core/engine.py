"""Pure HRN routines: factor validation, scoring and tier/priority mapping."""

from __future__ import annotations

import logging
import math
import numbers
from datetime import date, timedelta
from typing import Tuple, Union

from .models import HazardAssessment, RemediationPriority, RiskTier

logger = logging.getLogger(__name__)

SEVERITY_VALUES: Tuple[float, ...] = (0.1, 0.5, 1, 2, 4, 8, 15)
PROBABILITY_VALUES: Tuple[float, ...] = (0.033, 1, 1.5, 2.5, 4, 5, 8, 10, 15)
FREQUENCY_VALUES: Tuple[float, ...] = (0.1, 0.2, 1, 1.5, 2.5, 4, 5)

# Lower bounds (inclusive) of tiers 1..3; rank 0 is everything below 50.
_RANK_THRESHOLDS: Tuple[float, ...] = (50, 200, 400)

_TIERS_BY_RANK = (
    RiskTier.ACCEPTABLE,
    RiskTier.TOLERABLE,
    RiskTier.UNACCEPTABLE,
    RiskTier.CRITICAL,
)
_PRIORITIES_BY_RANK = (
    RemediationPriority.LOW,
    RemediationPriority.MEDIUM,
    RemediationPriority.HIGH,
    RemediationPriority.CRITICAL,
)

_DEADLINE_DAYS = {
    RemediationPriority.CRITICAL: 7,
    RemediationPriority.HIGH: 15,
    RemediationPriority.MEDIUM: 30,
    RemediationPriority.LOW: 60,
}


class InvalidFactorError(ValueError):
    """Raised when a severity/probability/frequency value is not on the menu."""

    def __init__(self, factor: str, value: object) -> None:
        self.factor = factor
        self.value = value
        super().__init__(f"Invalid {factor} value: {value!r}")


class InvalidScoreError(ValueError):
    """Raised when a score is negative, NaN, infinite or not a number."""


def compute_hazard_score(severity: float, probability: float, frequency: float) -> float:
    """Return the HRN ``severity * probability * frequency``.

    Each factor must be an exact member of its permitted set; nothing is
    rounded or clamped.
    """

    _check_factor("severity", severity, SEVERITY_VALUES)
    _check_factor("probability", probability, PROBABILITY_VALUES)
    _check_factor("frequency", frequency, FREQUENCY_VALUES)
    return severity * probability * frequency


def classify_risk_tier(score: float) -> RiskTier:
    """Map a non-negative HRN to its risk tier (lower bounds inclusive)."""
    return _TIERS_BY_RANK[_score_rank(score)]


def derive_priority(score: float) -> RemediationPriority:
    """Map a non-negative HRN to the remediation priority of its tier."""
    return _PRIORITIES_BY_RANK[_score_rank(score)]


def standard_deadline_days(priority: Union[RemediationPriority, str]) -> int:
    """Return the standard remediation deadline in days for ``priority``.

    ``IMPROVEMENT`` has no standard deadline and is rejected.
    """

    try:
        key = RemediationPriority(priority)
    except ValueError:
        raise ValueError(f"Unknown remediation priority: {priority!r}") from None
    if key not in _DEADLINE_DAYS:
        raise ValueError(f"No standard deadline is defined for priority {key.value}.")
    return _DEADLINE_DAYS[key]


def assess_hazard(severity: float, probability: float, frequency: float) -> HazardAssessment:
    """Score a hazard and derive tier, priority and deadline in one step."""

    score = compute_hazard_score(severity, probability, frequency)
    priority = derive_priority(score)
    assessment = HazardAssessment(
        severity=severity,
        probability=probability,
        frequency=frequency,
        hrn_number=score,
        tier=classify_risk_tier(score),
        priority=priority,
        deadline_days=standard_deadline_days(priority),
    )
    logger.debug("HRN %s x %s x %s = %s (%s)", severity, probability, frequency, score, assessment.tier)
    return assessment


def action_due_date(priority: Union[RemediationPriority, str], start: date) -> date:
    """Return ``start`` shifted by the standard deadline of ``priority``."""
    return start + timedelta(days=standard_deadline_days(priority))


def _check_factor(name: str, value: object, permitted: Tuple[float, ...]) -> None:
    # bool is an int subclass; True would otherwise match 1
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidFactorError(name, value)
    if value not in permitted:
        raise InvalidFactorError(name, value)


def _score_rank(score: object) -> int:
    if isinstance(score, bool) or not isinstance(score, numbers.Real):
        raise InvalidScoreError(f"Score must be a number, got {score!r}.")
    if not math.isfinite(score):
        raise InvalidScoreError(f"Score must be finite, got {score!r}.")
    if score < 0:
        raise InvalidScoreError(f"Score must be non-negative, got {score!r}.")
    rank = 0
    for threshold in _RANK_THRESHOLDS:
        if score >= threshold:
            rank += 1
    return rank
