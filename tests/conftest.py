import pytest

from nr12_core.models import (
    ActionItem,
    ChecklistResponse,
    ChecklistStatus,
    Machine,
    RemediationPriority,
    RiskEntry,
)


@pytest.fixture
def machines() -> list[Machine]:
    """Two machines linked to the report under test."""
    return [Machine(id="m-1", tag="PR-01", name="Prensa"), Machine(id="m-2", tag="SR-02", name="Serra")]


@pytest.fixture
def compliant_responses() -> list[ChecklistResponse]:
    return [
        ChecklistResponse(id=f"r-{i}", status=ChecklistStatus.COMPLIANT, machine_id="m-1", requirement_id=f"q-{i}")
        for i in range(4)
    ]


@pytest.fixture
def scored_risks() -> list[RiskEntry]:
    return [
        RiskEntry(id="k-1", hazard="Esmagamento", hrn_number=80.0),
        RiskEntry(id="k-2", hazard="Corte", hrn_number=450.0),
    ]


@pytest.fixture
def actions() -> list[ActionItem]:
    return [ActionItem(id="a-1", description="Instalar cortina de luz", priority=RemediationPriority.HIGH)]
