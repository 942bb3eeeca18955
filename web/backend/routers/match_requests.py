#!/usr/bin/env python3
"""
Match request endpoints - send, accept, reject and list requests.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access import AccessContext
from ..config import get_config
from ..dependencies import get_db, get_access_context
from ..services.match_request_service import MatchRequestServiceWrapper
from ..models.requests import SendMatchRequest
from ..models.responses import MatchRequestActionResponse, MatchRequestsResponse
from ..utils import validate_uuid

router = APIRouter(prefix="/api/match-requests", tags=["match-requests"])


def get_match_request_service(db: Session = Depends(get_db)) -> MatchRequestServiceWrapper:
    """Dependency to get match request service."""
    return MatchRequestServiceWrapper(db, get_config())


@router.post("/send", response_model=MatchRequestActionResponse, status_code=201)
def send_match_request(
    body: SendMatchRequest,
    access: AccessContext = Depends(get_access_context),
    service: MatchRequestServiceWrapper = Depends(get_match_request_service)
):
    """
    Send a match request.

    If the receiver already sent the caller a pending request, that request
    is accepted instead and ``auto_accepted`` is true.
    """
    return service.send(access, body)


@router.post("/{request_id}/accept", response_model=MatchRequestActionResponse)
def accept_match_request(
    request_id: str,
    access: AccessContext = Depends(get_access_context),
    service: MatchRequestServiceWrapper = Depends(get_match_request_service)
):
    """Accept a pending request addressed to the caller and create a connection."""
    return service.accept(access, validate_uuid(request_id, "request_id"))


@router.post("/{request_id}/reject", response_model=MatchRequestActionResponse)
def reject_match_request(
    request_id: str,
    access: AccessContext = Depends(get_access_context),
    service: MatchRequestServiceWrapper = Depends(get_match_request_service)
):
    """Reject a pending request addressed to the caller."""
    return service.reject(access, validate_uuid(request_id, "request_id"))


@router.get("/incoming", response_model=MatchRequestsResponse)
def get_incoming_requests(
    access: AccessContext = Depends(get_access_context),
    service: MatchRequestServiceWrapper = Depends(get_match_request_service)
):
    """Pending requests addressed to the caller, newest first."""
    return service.list_incoming(access)


@router.get("/outgoing", response_model=MatchRequestsResponse)
def get_outgoing_requests(
    access: AccessContext = Depends(get_access_context),
    service: MatchRequestServiceWrapper = Depends(get_match_request_service)
):
    """Every request the caller sent, newest first."""
    return service.list_outgoing(access)
