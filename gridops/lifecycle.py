"""
gridops/lifecycle.py

Maintenance record status lifecycle.

Status is restricted to four values. Transitions are currently unrestricted:
any status may move to any other, including itself. ALLOWED_TRANSITIONS is the
single table to tighten if a stricter lifecycle is ever adopted; the
maintenance manager reads it inside its atomic update.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, FrozenSet, Tuple

from gridops.errors import IllegalStatusTransition, ValidationFailure


class MaintenanceStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    EMERGENCY_REPAIR = "EMERGENCY_REPAIR"


DEFAULT_STATUS = MaintenanceStatus.SCHEDULED

ALLOWED_TRANSITIONS: Dict[MaintenanceStatus, FrozenSet[MaintenanceStatus]] = {
    status: frozenset(MaintenanceStatus) for status in MaintenanceStatus
}


def parse_status(value: Any) -> MaintenanceStatus:
    """Return the status member for value, or raise ValidationFailure."""
    if isinstance(value, MaintenanceStatus):
        return value
    if not isinstance(value, str):
        raise ValidationFailure(f"status must be a string, got {type(value).__name__}")
    try:
        return MaintenanceStatus(value)
    except ValueError:
        allowed = ", ".join(s.value for s in MaintenanceStatus)
        raise ValidationFailure(f"status must be one of {allowed}")


def allowed_predecessors(new: MaintenanceStatus) -> Tuple[MaintenanceStatus, ...]:
    """Statuses from which a record may move to `new`, in declaration order."""
    return tuple(
        current for current in MaintenanceStatus
        if new in ALLOWED_TRANSITIONS.get(current, frozenset())
    )


def transition_error(current: Any, new: Any) -> IllegalStatusTransition:
    return IllegalStatusTransition(
        f"status cannot move from {parse_status(current).value} to {parse_status(new).value}"
    )
