#!/usr/bin/env python3
"""
Connection endpoints - list and view buddies.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from core.access import AccessContext
from ..dependencies import get_db, get_access_context
from ..services.connection_service import ConnectionService
from ..models.responses import ConnectionsResponse, ConnectionDetailResponse
from ..utils import validate_uuid

router = APIRouter(prefix="/api/connections", tags=["connections"])


def get_connection_service(db: Session = Depends(get_db)) -> ConnectionService:
    """Dependency to get connection service."""
    return ConnectionService(db)


@router.get("", response_model=ConnectionsResponse)
def get_connections(
    access: AccessContext = Depends(get_access_context),
    service: ConnectionService = Depends(get_connection_service)
):
    """List the caller's connections with each buddy's profile."""
    return service.list_connections(access)


@router.get("/{connection_id}", response_model=ConnectionDetailResponse)
def get_connection(
    connection_id: str,
    access: AccessContext = Depends(get_access_context),
    service: ConnectionService = Depends(get_connection_service)
):
    """Get one connection; only its two users may view it."""
    return service.get_connection(access, validate_uuid(connection_id, "connection_id"))
