import copy

import pytest

from nr12_core.gates import (
    GATE_ACTION_PLAN,
    GATE_CHECKLIST,
    GATE_INVENTORY,
    GATE_LABELS,
    GATE_RISK,
    check_action_plan_gate,
    check_checklist_gate,
    check_inventory_gate,
    check_risk_gate,
    evaluate_all_gates,
    non_compliant_responses,
)
from nr12_core.models import (
    ActionItem,
    ChecklistResponse,
    ChecklistStatus,
    Machine,
    RiskEntry,
)


def _nonconformity(idx: int = 0) -> ChecklistResponse:
    return ChecklistResponse(id=f"nc-{idx}", status=ChecklistStatus.NONCOMPLIANT, machine_id="m-1")


def test_gate_labels_skip_d() -> None:
    assert GATE_LABELS == (
        "Gate A (Inventário)",
        "Gate B (Checklist)",
        "Gate C (Riscos)",
        "Gate E (Plano de Ação)",
    )


def test_inventory_gate(machines: list[Machine]) -> None:
    assert check_inventory_gate(machines).ok
    result = check_inventory_gate([])
    assert not result.ok
    assert result.message == "report must have at least one linked machine"


@pytest.mark.parametrize("responded, required, ok", [(4, 4, True), (5, 4, True), (3, 4, False), (0, 0, True)])
def test_checklist_gate_compares_counts(responded: int, required: int, ok: bool) -> None:
    responses = [ChecklistResponse(id=str(i), status=ChecklistStatus.COMPLIANT) for i in range(responded)]
    result = check_checklist_gate(responses, required)
    assert result.ok is ok
    if not ok:
        assert f"{responded}/{required}" in result.message


def test_checklist_gate_counts_duplicates() -> None:
    # Three answers to the same requirement still satisfy a count of three.
    responses = [
        ChecklistResponse(id=str(i), status=ChecklistStatus.COMPLIANT, requirement_id="q-1") for i in range(3)
    ]
    assert check_checklist_gate(responses, 3).ok


@pytest.mark.parametrize("bad", [-1, 2.5, True, "3"])
def test_checklist_gate_rejects_bad_required_count(bad: object) -> None:
    with pytest.raises(ValueError):
        check_checklist_gate([], bad)  # type: ignore[arg-type]


def test_risk_gate_requires_entries_when_machines_exist(machines: list[Machine]) -> None:
    result = check_risk_gate([], machines)
    assert not result.ok
    assert result.message == "no risk appreciation recorded"


def test_risk_gate_passes_without_machines_or_risks() -> None:
    assert check_risk_gate([], []).ok


@pytest.mark.parametrize("hrn", [None, 0, 0.0, float("nan")])
def test_risk_gate_rejects_pending_hrn(machines: list[Machine], scored_risks: list[RiskEntry], hrn: object) -> None:
    risks = scored_risks + [RiskEntry(id="k-3", hazard="Queimadura", hrn_number=hrn)]  # type: ignore[arg-type]
    result = check_risk_gate(risks, machines)
    assert not result.ok
    assert result.message == "risk entries exist with invalid or pending HRN calculation"


def test_risk_gate_checks_hrn_even_without_machines() -> None:
    assert not check_risk_gate([RiskEntry(id="k-1", hrn_number=0)], []).ok


def test_risk_gate_passes_with_scored_entries(machines: list[Machine], scored_risks: list[RiskEntry]) -> None:
    assert check_risk_gate(scored_risks, machines).ok


def test_action_plan_gate(actions: list[ActionItem]) -> None:
    assert check_action_plan_gate([], []).ok
    assert check_action_plan_gate(actions, []).ok
    assert check_action_plan_gate(actions, [_nonconformity(0), _nonconformity(1)]).ok

    result = check_action_plan_gate([], [_nonconformity()])
    assert not result.ok
    assert result.message == "non-conformances exist without a corresponding action plan"


def test_non_compliant_responses_filters_and_keeps_order() -> None:
    responses = [
        ChecklistResponse(id="1", status=ChecklistStatus.COMPLIANT),
        _nonconformity(2),
        ChecklistResponse(id="3", status=ChecklistStatus.NOT_APPLICABLE),
        _nonconformity(4),
    ]
    assert [r.id for r in non_compliant_responses(responses)] == ["nc-2", "nc-4"]


def test_evaluate_all_gates_passes_for_complete_report(
    machines: list[Machine],
    compliant_responses: list[ChecklistResponse],
    scored_risks: list[RiskEntry],
) -> None:
    result = evaluate_all_gates(machines, compliant_responses, scored_risks, [], 4)

    assert result.can_sign
    assert result.failed_gates == ()
    assert result.to_dict() == {"can_sign": True, "failed_gates": [], "messages": {}}


def test_evaluate_all_gates_without_machines() -> None:
    result = evaluate_all_gates([], [], [], [], 0)

    assert not result.can_sign
    assert result.failed_gates == (GATE_INVENTORY,)


def test_evaluate_all_gates_without_machines_still_checks_other_gates() -> None:
    result = evaluate_all_gates([], [_nonconformity()], [], [], 2)

    assert result.failed_gates == (GATE_INVENTORY, GATE_CHECKLIST, GATE_ACTION_PLAN)


def test_evaluate_all_gates_missing_risks_fails_gate_c(
    machines: list[Machine],
    compliant_responses: list[ChecklistResponse],
) -> None:
    result = evaluate_all_gates(machines, compliant_responses, [], [], 4)

    assert not result.can_sign
    assert result.failed_gates == (GATE_RISK,)
    assert result.messages[GATE_RISK] == "no risk appreciation recorded"


def test_evaluate_all_gates_derives_non_conformances(
    machines: list[Machine],
    scored_risks: list[RiskEntry],
    actions: list[ActionItem],
) -> None:
    responses = [ChecklistResponse(id="ok", status=ChecklistStatus.COMPLIANT), _nonconformity()]

    without_plan = evaluate_all_gates(machines, responses, scored_risks, [], 2)
    with_plan = evaluate_all_gates(machines, responses, scored_risks, actions, 2)

    assert without_plan.failed_gates == (GATE_ACTION_PLAN,)
    assert with_plan.can_sign


def test_evaluate_all_gates_reports_failures_in_check_order() -> None:
    machines = [Machine(id="m-1")]
    risks = [RiskEntry(id="k-1", hrn_number=None)]
    responses = [_nonconformity()]

    result = evaluate_all_gates(machines, responses, risks, [], 5)

    assert result.failed_gates == (GATE_CHECKLIST, GATE_RISK, GATE_ACTION_PLAN)
    assert list(result.messages) == list(result.failed_gates)
    assert result.messages[GATE_CHECKLIST] == "checklist incomplete: 1/5 responses"


def test_evaluate_all_gates_is_idempotent_and_does_not_mutate(
    machines: list[Machine],
    scored_risks: list[RiskEntry],
) -> None:
    responses = [_nonconformity()]
    snapshot = copy.deepcopy((machines, responses, scored_risks))

    first = evaluate_all_gates(machines, responses, scored_risks, [], 3)
    second = evaluate_all_gates(machines, responses, scored_risks, [], 3)

    assert first == second
    assert first.to_dict() == second.to_dict()
    assert (machines, responses, scored_risks) == snapshot


def test_evaluate_all_gates_accepts_status_strings() -> None:
    responses = [ChecklistResponse(id="1", status="NONCOMPLIANT")]  # type: ignore[arg-type]
    result = evaluate_all_gates([Machine(id="m")], responses, [RiskEntry(id="k", hrn_number=2)], [], 1)

    assert result.failed_gates == (GATE_ACTION_PLAN,)
