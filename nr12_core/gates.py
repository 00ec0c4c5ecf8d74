"""Readiness gates deciding whether a report may be signed.

Each gate inspects a snapshot supplied by the caller and returns a
:class:`GateResult`. The gates are independent; :func:`evaluate_all_gates`
runs them in the fixed order A, B, C, E and reports the labels of the ones
that failed in that order. There is no gate D.
"""

from __future__ import annotations

import logging
import math
import numbers
from typing import Callable, Collection, Iterable, List, Tuple

from .models import (
    ActionItem,
    ChecklistResponse,
    ChecklistStatus,
    GateResult,
    Machine,
    ReadinessResult,
    RiskEntry,
)

logger = logging.getLogger(__name__)

GATE_INVENTORY = "Gate A (Inventário)"
GATE_CHECKLIST = "Gate B (Checklist)"
GATE_RISK = "Gate C (Riscos)"
GATE_ACTION_PLAN = "Gate E (Plano de Ação)"

GATE_LABELS: Tuple[str, ...] = (GATE_INVENTORY, GATE_CHECKLIST, GATE_RISK, GATE_ACTION_PLAN)


def check_inventory_gate(machines: Collection[Machine]) -> GateResult:
    """Gate A: at least one machine is linked to the report."""
    if len(machines) == 0:
        return GateResult.failed("report must have at least one linked machine")
    return GateResult.passed()


def check_checklist_gate(responses: Collection[ChecklistResponse], required_count: int) -> GateResult:
    """Gate B: at least ``required_count`` checklist responses exist.

    Only the number of responses is compared. Which requirements were
    answered is not checked, and ``required_count`` is derived by the caller
    from the requirement catalogue and the report's machines.
    """

    if isinstance(required_count, bool) or not isinstance(required_count, numbers.Integral):
        raise ValueError(f"required_count must be an integer, got {required_count!r}.")
    if required_count < 0:
        raise ValueError(f"required_count must be non-negative, got {required_count}.")

    responded = len(responses)
    if responded < required_count:
        return GateResult.failed(f"checklist incomplete: {responded}/{required_count} responses")
    return GateResult.passed()


def check_risk_gate(risks: Collection[RiskEntry], machines: Collection[Machine]) -> GateResult:
    """Gate C: risks are recorded for assessed machines and every HRN is complete."""

    if len(machines) > 0 and len(risks) == 0:
        return GateResult.failed("no risk appreciation recorded")
    if any(not _has_valid_hrn(risk) for risk in risks):
        return GateResult.failed("risk entries exist with invalid or pending HRN calculation")
    return GateResult.passed()


def check_action_plan_gate(
    actions: Collection[ActionItem],
    non_compliant: Collection[ChecklistResponse],
) -> GateResult:
    """Gate E: some action plan exists whenever a non-conformance exists.

    Actions are not matched one-to-one against non-conformances.
    """

    if len(non_compliant) > 0 and len(actions) == 0:
        return GateResult.failed("non-conformances exist without a corresponding action plan")
    return GateResult.passed()


def non_compliant_responses(responses: Iterable[ChecklistResponse]) -> List[ChecklistResponse]:
    """Return the responses whose status is ``NONCOMPLIANT``, in input order."""
    return [r for r in responses if r.status == ChecklistStatus.NONCOMPLIANT]


def evaluate_all_gates(
    machines: Collection[Machine],
    responses: Collection[ChecklistResponse],
    risks: Collection[RiskEntry],
    actions: Collection[ActionItem],
    required_checklist_count: int,
) -> ReadinessResult:
    """Run gates A, B, C and E and aggregate them into a signability verdict."""

    checks: Tuple[Tuple[str, Callable[[], GateResult]], ...] = (
        (GATE_INVENTORY, lambda: check_inventory_gate(machines)),
        (GATE_CHECKLIST, lambda: check_checklist_gate(responses, required_checklist_count)),
        (GATE_RISK, lambda: check_risk_gate(risks, machines)),
        (GATE_ACTION_PLAN, lambda: check_action_plan_gate(actions, non_compliant_responses(responses))),
    )

    failed: List[str] = []
    messages = {}
    for label, check in checks:
        result = check()
        if not result.ok:
            failed.append(label)
            messages[label] = result.message
            logger.debug("%s failed: %s", label, result.message)

    return ReadinessResult(can_sign=not failed, failed_gates=tuple(failed), messages=messages)


def _has_valid_hrn(risk: RiskEntry) -> bool:
    value = risk.hrn_number
    if value is None or isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    if math.isnan(value):
        return False
    return value != 0
