"""Helpers that turn data-layer rows into the records the gates consume."""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Iterable, Mapping, Optional, Type, TypeVar

from .gates import evaluate_all_gates
from .models import (
    ActionItem,
    ActionStatus,
    ChecklistResponse,
    ChecklistStatus,
    Machine,
    ReadinessResult,
    RemediationPriority,
    RiskEntry,
    RiskTier,
)

E = TypeVar("E", bound=Enum)


class RecordError(ValueError):
    """Raised when a raw row cannot be translated into a domain record."""


def machine_from_mapping(raw: Mapping[str, object]) -> Machine:
    context = _context("machine", raw)
    return Machine(
        id=_required_str(raw, "id", context),
        tag=_optional_str(raw, "tag") or "",
        name=_optional_str(raw, "name") or "",
    )


def checklist_response_from_mapping(raw: Mapping[str, object]) -> ChecklistResponse:
    context = _context("checklist response", raw)
    return ChecklistResponse(
        id=_required_str(raw, "id", context),
        status=_required_enum(raw, "status", ChecklistStatus, context),
        machine_id=_optional_str(raw, "machine_id"),
        requirement_id=_optional_str(raw, "requirement_id"),
        observation=_optional_str(raw, "observation"),
    )


def risk_entry_from_mapping(raw: Mapping[str, object]) -> RiskEntry:
    """Build a :class:`RiskEntry`; a missing ``hrn_number`` stays ``None``.

    The stored HRN is taken as-is. Whether it is complete is for the risk
    gate to decide, so zero is kept rather than rejected here.
    """

    context = _context("risk entry", raw)
    return RiskEntry(
        id=_required_str(raw, "id", context),
        hazard=_optional_str(raw, "hazard") or "",
        hrn_number=_optional_float(raw, "hrn_number", context),
        hrn_severity=_optional_float(raw, "hrn_severity", context),
        hrn_probability=_optional_float(raw, "hrn_probability", context),
        hrn_frequency=_optional_float(raw, "hrn_frequency", context),
        risk_level=_optional_tier(raw, "risk_level", context),
    )


def action_item_from_mapping(raw: Mapping[str, object]) -> ActionItem:
    context = _context("action item", raw)
    priority = _optional_enum(raw, "priority", RemediationPriority, context)
    status = _optional_enum(raw, "status", ActionStatus, context)
    return ActionItem(
        id=_required_str(raw, "id", context),
        description=_optional_str(raw, "description") or "",
        priority=priority or RemediationPriority.MEDIUM,
        status=status or ActionStatus.OPEN,
        due_days=_optional_int(raw, "due_days", context),
        due_date=_optional_date(raw, "due_date", context),
    )


def evaluate_rows(
    machines: Iterable[Mapping[str, object]],
    responses: Iterable[Mapping[str, object]],
    risks: Iterable[Mapping[str, object]],
    actions: Iterable[Mapping[str, object]],
    required_checklist_count: int,
) -> ReadinessResult:
    """Convert raw rows and run :func:`evaluate_all_gates` on them."""
    return evaluate_all_gates(
        [machine_from_mapping(row) for row in machines],
        [checklist_response_from_mapping(row) for row in responses],
        [risk_entry_from_mapping(row) for row in risks],
        [action_item_from_mapping(row) for row in actions],
        required_checklist_count,
    )


def _context(kind: str, raw: Mapping[str, object]) -> str:
    for key in ("tag", "name", "id"):
        val = raw.get(key)
        if isinstance(val, str) and val.strip():
            return f"{kind} '{val}'"
    return kind


def _is_blank(value: object) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _optional_str(raw: Mapping[str, object], key: str) -> Optional[str]:
    value = raw.get(key)
    if _is_blank(value):
        return None
    return str(value)


def _required_str(raw: Mapping[str, object], key: str, context: str) -> str:
    value = _optional_str(raw, key)
    if value is None:
        raise RecordError(f"{context}: missing required field '{key}'.")
    return value


def _optional_enum(raw: Mapping[str, object], key: str, enum_type: Type[E], context: str) -> Optional[E]:
    value = raw.get(key)
    if _is_blank(value):
        return None
    try:
        return enum_type(str(value).strip().upper())
    except ValueError:
        raise RecordError(f"{context}: invalid value {value!r} for '{key}'.") from None


def _required_enum(raw: Mapping[str, object], key: str, enum_type: Type[E], context: str) -> E:
    value = _optional_enum(raw, key, enum_type, context)
    if value is None:
        raise RecordError(f"{context}: missing required field '{key}'.")
    return value


def _optional_tier(raw: Mapping[str, object], key: str, context: str) -> Optional[RiskTier]:
    value = raw.get(key)
    if _is_blank(value):
        return None
    try:
        return RiskTier.from_label(str(value))
    except ValueError:
        raise RecordError(f"{context}: invalid value {value!r} for '{key}'.") from None


def _optional_float(raw: Mapping[str, object], key: str, context: str) -> Optional[float]:
    value = raw.get(key)
    if _is_blank(value):
        return None
    if isinstance(value, bool):
        raise RecordError(f"{context}: invalid numeric value for '{key}'.")
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        raise RecordError(f"{context}: invalid numeric value for '{key}'.") from None


def _optional_int(raw: Mapping[str, object], key: str, context: str) -> Optional[int]:
    value = _optional_float(raw, key, context)
    if value is None:
        return None
    if not value.is_integer():
        raise RecordError(f"{context}: '{key}' must be a whole number.")
    return int(value)


def _optional_date(raw: Mapping[str, object], key: str, context: str) -> Optional[date]:
    value = raw.get(key)
    if _is_blank(value):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.fromisoformat(text[:10]).date()
    except ValueError:
        raise RecordError(f"{context}: invalid date {value!r} for '{key}'.") from None
