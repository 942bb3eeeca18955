#!/usr/bin/env python3
"""
Connection service - a user's buddies.
"""

import logging
from typing import Dict

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.access import AccessContext
from core.exceptions import ConnectionNotFoundError, DataStoreError, PermissionDeniedError
from database.models import Connection, User
from database.repositories import ConnectionRepository, UserRepository, to_uuid
from ..models.responses import (
    BuddyProfile,
    ConnectionDetailResponse,
    ConnectionSummary,
    ConnectionsResponse,
)
from ..utils import safe_datetime_iso, user_profile_dict

logger = logging.getLogger(__name__)


class ConnectionService:
    """Service for reading connections."""

    def __init__(self, db: Session):
        self.db = db
        self.connections = ConnectionRepository(db)
        self.users = UserRepository(db)

    def list_connections(self, access: AccessContext) -> ConnectionsResponse:
        user_id = access.require_user()
        try:
            connections = self.connections.list_for_user(user_id)
            users = self.users.get_many(str(c.other_user_id(user_id)) for c in connections)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load connections") from e

        summaries = [self._to_summary(c, user_id, users) for c in connections]
        return ConnectionsResponse(success=True, count=len(summaries), connections=summaries)

    def get_connection(self, access: AccessContext, connection_id: str) -> ConnectionDetailResponse:
        """
        Get one connection with the buddy's profile.

        Raises:
            ConnectionNotFoundError: No such connection.
            PermissionDeniedError: The caller is not one of the two users.
        """
        user_id = access.require_user()
        try:
            connection = self.connections.get_by_id(to_uuid(connection_id))
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load connection {connection_id}") from e

        if not connection:
            raise ConnectionNotFoundError(f"Connection {connection_id} not found")
        if user_id not in (str(connection.user1_id), str(connection.user2_id)):
            raise PermissionDeniedError("You do not have permission to view this connection")

        buddy_id = str(connection.other_user_id(user_id))
        try:
            users = self.users.get_many([buddy_id])
            match_reason = connection.match_request.match_reason if connection.match_request else None
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load connection {connection_id}") from e

        return ConnectionDetailResponse(
            success=True,
            connection=self._to_summary(connection, user_id, users),
            match_reason=match_reason
        )

    @staticmethod
    def _to_summary(connection: Connection, user_id: str, users: Dict[str, User]) -> ConnectionSummary:
        buddy_id = str(connection.other_user_id(user_id))
        return ConnectionSummary(
            id=str(connection.id),
            buddy=BuddyProfile(**user_profile_dict(users.get(buddy_id), buddy_id, include_career_goals=True)),
            compatibility_score=connection.compatibility_score,
            match_request_id=str(connection.match_request_id) if connection.match_request_id else None,
            created_at=safe_datetime_iso(connection.created_at)
        )
