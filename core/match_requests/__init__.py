"""Match Requests Module - request lifecycle and connection creation."""
from core.match_requests.states import (
    MatchRequestStatus, ALLOWED_TRANSITIONS, can_transition, ensure_transition, is_terminal
)
from core.match_requests.service import (
    MatchRequestService, SendResult, AcceptResult, RejectResult
)

__all__ = [
    'MatchRequestStatus', 'ALLOWED_TRANSITIONS', 'can_transition', 'ensure_transition', 'is_terminal',
    'MatchRequestService', 'SendResult', 'AcceptResult', 'RejectResult',
]
