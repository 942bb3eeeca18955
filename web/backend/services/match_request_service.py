#!/usr/bin/env python3
"""
Match request service wrapper for the web application.
"""

import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from core.access import AccessContext
from core.config_loader import AppConfig
from core.exceptions import DataStoreError
from core.match_requests import MatchRequestService, AcceptResult
from database.models import MatchRequest, Connection, User
from database.repositories import (
    UserRepository,
    MatchRequestRepository,
    ConnectionRepository,
    NotificationRepository,
)
from notification import NotificationService
from ..models.requests import SendMatchRequest
from ..models.responses import (
    MatchRequestActionResponse,
    MatchRequestsResponse,
    MatchRequestSummary,
    ConnectionSummary,
    MatchedUser,
    BuddyProfile,
)
from ..utils import commit_session, safe_datetime_iso, user_profile_dict

logger = logging.getLogger(__name__)


class MatchRequestServiceWrapper:
    """Wrapper for MatchRequestService with database session."""

    def __init__(self, db: Session, config: Optional[AppConfig] = None):
        self.db = db
        self.config = config or AppConfig()
        self.users = UserRepository(db)
        self.match_requests = MatchRequestRepository(db)
        self.service = MatchRequestService(
            users=self.users,
            match_requests=self.match_requests,
            connections=ConnectionRepository(db),
            notifications=NotificationService(NotificationRepository(db), self.config.notifications),
            config=self.config.match_requests
        )

    def send(self, access: AccessContext, body: SendMatchRequest) -> MatchRequestActionResponse:
        result = self.service.send(
            access,
            body.receiver_id,
            compatibility_score=body.compatibility_score,
            match_reason=body.match_reason,
            match_details=body.match_details
        )
        commit_session(self.db)

        if isinstance(result, AcceptResult):
            return self._action_response(
                access, result.request, "Match request accepted and connection created",
                connection=result.connection, auto_accepted=True
            )
        return self._action_response(access, result.request, "Match request sent successfully")

    def accept(self, access: AccessContext, request_id: str) -> MatchRequestActionResponse:
        result = self.service.accept(access, request_id)
        commit_session(self.db)
        return self._action_response(
            access, result.request, "Match request accepted and connection created",
            connection=result.connection
        )

    def reject(self, access: AccessContext, request_id: str) -> MatchRequestActionResponse:
        result = self.service.reject(access, request_id)
        commit_session(self.db)
        return self._action_response(access, result.request, "Match request rejected")

    def list_incoming(self, access: AccessContext) -> MatchRequestsResponse:
        return self._list_response(self.service.list_incoming(access))

    def list_outgoing(self, access: AccessContext) -> MatchRequestsResponse:
        return self._list_response(self.service.list_outgoing(access))

    def _list_response(self, requests: List[MatchRequest]) -> MatchRequestsResponse:
        users = self._load_users(requests)
        summaries = [self._to_summary(r, users) for r in requests]
        return MatchRequestsResponse(success=True, count=len(summaries), requests=summaries)

    def _action_response(
        self,
        access: AccessContext,
        request: MatchRequest,
        message: str,
        connection: Optional[Connection] = None,
        auto_accepted: bool = False
    ) -> MatchRequestActionResponse:
        users = self._load_users([request])
        connection_summary = None
        if connection is not None:
            buddy_id = str(connection.other_user_id(access.user_id))
            connection_summary = ConnectionSummary(
                id=str(connection.id),
                buddy=BuddyProfile(**user_profile_dict(users.get(buddy_id), buddy_id, include_career_goals=True)),
                compatibility_score=connection.compatibility_score,
                match_request_id=str(connection.match_request_id) if connection.match_request_id else None,
                created_at=safe_datetime_iso(connection.created_at)
            )
        return MatchRequestActionResponse(
            success=True,
            message=message,
            request=self._to_summary(request, users),
            auto_accepted=auto_accepted,
            connection=connection_summary
        )

    def _load_users(self, requests: List[MatchRequest]) -> Dict[str, User]:
        ids = set()
        for request in requests:
            ids.add(str(request.sender_id))
            ids.add(str(request.receiver_id))
        try:
            return self.users.get_many(ids)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load user profiles") from e

    @staticmethod
    def _to_summary(request: MatchRequest, users: Dict[str, User]) -> MatchRequestSummary:
        sender_id = str(request.sender_id)
        receiver_id = str(request.receiver_id)
        return MatchRequestSummary(
            id=str(request.id),
            sender_id=sender_id,
            receiver_id=receiver_id,
            sender=MatchedUser(**user_profile_dict(users.get(sender_id), sender_id)),
            receiver=MatchedUser(**user_profile_dict(users.get(receiver_id), receiver_id)),
            compatibility_score=request.compatibility_score,
            match_reason=request.match_reason,
            match_details=request.match_details,
            status=request.status,
            created_at=safe_datetime_iso(request.created_at),
            updated_at=safe_datetime_iso(request.updated_at)
        )
