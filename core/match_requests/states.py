"""Match request lifecycle: pending -> accepted | rejected."""

from enum import Enum
from typing import Dict, FrozenSet

from core.exceptions import InvalidTransitionError


class MatchRequestStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"


ALLOWED_TRANSITIONS: Dict[MatchRequestStatus, FrozenSet[MatchRequestStatus]] = {
    MatchRequestStatus.PENDING: frozenset({MatchRequestStatus.ACCEPTED, MatchRequestStatus.REJECTED}),
    MatchRequestStatus.ACCEPTED: frozenset(),
    MatchRequestStatus.REJECTED: frozenset(),
}


def _status_value(status) -> str:
    return status.value if isinstance(status, MatchRequestStatus) else str(status)


def can_transition(current, target) -> bool:
    try:
        current_status = MatchRequestStatus(_status_value(current))
        target_status = MatchRequestStatus(_status_value(target))
    except ValueError:
        return False
    return target_status in ALLOWED_TRANSITIONS[current_status]


def is_terminal(status) -> bool:
    try:
        return not ALLOWED_TRANSITIONS[MatchRequestStatus(_status_value(status))]
    except ValueError:
        return True


def ensure_transition(current, target) -> None:
    if not can_transition(current, target):
        raise InvalidTransitionError(_status_value(current), _status_value(target))
