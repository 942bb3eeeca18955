#!/usr/bin/env python3
"""
Match Request Service - the state machine between interest and connection.

send -> pending request (or auto-accept when the receiver already asked)
accept -> accepted request + exactly one Connection
reject -> rejected request

Primary writes raise DataStoreError on failure; notifications are
best-effort side effects written through NotificationService.notify.
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from core.access import AccessContext
from core.config_loader import MatchRequestConfig
from core.exceptions import (
    ValidationError,
    UserNotFoundError,
    MatchRequestNotFoundError,
    DuplicateMatchRequestError,
    ConflictError,
    DataStoreError,
)
from core.match_requests.states import MatchRequestStatus, ensure_transition
from database.models import MatchRequest, Connection
from database.repositories import (
    UserRepository,
    MatchRequestRepository,
    ConnectionRepository,
    to_uuid,
)
from notification.service import NotificationService

logger = logging.getLogger(__name__)


@dataclass
class SendResult:
    request: MatchRequest
    auto_accepted: bool = False


@dataclass
class AcceptResult:
    request: MatchRequest
    connection: Connection
    auto_accepted: bool = False


@dataclass
class RejectResult:
    request: MatchRequest


class MatchRequestService:
    """Validates and applies match request transitions."""

    def __init__(
        self,
        users: UserRepository,
        match_requests: MatchRequestRepository,
        connections: ConnectionRepository,
        notifications: NotificationService,
        config: Optional[MatchRequestConfig] = None
    ):
        self.users = users
        self.match_requests = match_requests
        self.connections = connections
        self.notifications = notifications
        self.config = config or MatchRequestConfig()

    def send(
        self,
        access: AccessContext,
        receiver_id: Any,
        compatibility_score: Optional[int] = None,
        match_reason: Optional[str] = None,
        match_details: Optional[Dict[str, Any]] = None
    ) -> Union[SendResult, AcceptResult]:
        """
        Send a match request from the acting user to ``receiver_id``.

        If the receiver already has a pending request to the sender, that
        request is accepted instead and an AcceptResult is returned.

        Raises:
            ValidationError: receiver missing, malformed, or the sender itself
            UserNotFoundError: receiver does not exist
            DuplicateMatchRequestError: a request already exists for the pair
            DataStoreError: the request could not be written
        """
        sender_id = access.require_user()
        if not receiver_id:
            raise ValidationError("receiver_id is required")
        try:
            receiver_id = str(to_uuid(receiver_id))
        except ValueError:
            raise ValidationError("receiver_id must be a valid user id", details={"receiver_id": str(receiver_id)})
        if receiver_id == sender_id:
            raise ValidationError("Cannot send a match request to yourself")

        try:
            receiver = self.users.get_by_id(receiver_id)
            existing = self.match_requests.get_for_pair(sender_id, receiver_id)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load match request state") from e

        if not receiver:
            raise UserNotFoundError(f"User {receiver_id} not found")

        if existing:
            return self._resolve_existing(access, existing)

        if compatibility_score is None:
            compatibility_score = self.config.default_compatibility_score
        if not match_reason:
            match_reason = self.config.default_match_reason

        try:
            with self.match_requests.savepoint():
                request = self.match_requests.create(
                    sender_id=sender_id,
                    receiver_id=receiver_id,
                    compatibility_score=compatibility_score,
                    match_reason=match_reason,
                    match_details=match_details
                )
        except IntegrityError:
            # Lost a race with a concurrent insert for the same pair
            logger.info(f"Concurrent match request detected between {sender_id} and {receiver_id}")
            return self._resolve_existing(access, self._reload_pair(sender_id, receiver_id))
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to create match request") from e

        logger.info(f"Match request {request.id} sent from {sender_id} to {receiver_id}")

        sender_name = self._display_names([sender_id]).get(sender_id)
        self.notifications.notify_match_request(access.as_service(), receiver_id, sender_name, request.id)
        return SendResult(request=request)

    def accept(self, access: AccessContext, request_id: Any) -> AcceptResult:
        user_id = access.require_user()
        request = self._get_addressed_request(user_id, request_id)
        return self._accept(access, request)

    def reject(self, access: AccessContext, request_id: Any) -> RejectResult:
        user_id = access.require_user()
        request = self._get_addressed_request(user_id, request_id)
        ensure_transition(request.status, MatchRequestStatus.REJECTED)

        try:
            self.match_requests.update_status(request, MatchRequestStatus.REJECTED.value)
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to reject match request {request.id}") from e

        logger.info(f"Match request {request.id} rejected by {user_id}")

        receiver_name = self._display_names([user_id]).get(user_id)
        self.notifications.notify_match_rejected(
            access.as_service(), request.sender_id, receiver_name, request.id
        )
        return RejectResult(request=request)

    def list_incoming(self, access: AccessContext) -> List[MatchRequest]:
        """Pending requests addressed to the acting user, newest first."""
        user_id = access.require_user()
        try:
            return self.match_requests.list_incoming(user_id, status=MatchRequestStatus.PENDING.value)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load incoming match requests") from e

    def list_outgoing(self, access: AccessContext) -> List[MatchRequest]:
        """Every request the acting user sent, newest first."""
        user_id = access.require_user()
        try:
            return self.match_requests.list_outgoing(user_id)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to load outgoing match requests") from e

    def _resolve_existing(self, access: AccessContext, existing: MatchRequest) -> AcceptResult:
        sender_id = access.require_user()
        is_incoming = str(existing.receiver_id) == sender_id

        if is_incoming and existing.status == MatchRequestStatus.PENDING.value:
            logger.info(f"Reciprocal request for {existing.id}, auto-accepting")
            return self._accept(access, existing, auto_accepted=True)

        raise DuplicateMatchRequestError(existing.id, existing.status, is_incoming)

    def _reload_pair(self, sender_id: str, receiver_id: str) -> MatchRequest:
        try:
            existing = self.match_requests.get_for_pair(sender_id, receiver_id)
        except SQLAlchemyError as e:
            raise DataStoreError("Failed to create match request") from e
        if existing is None:
            raise DataStoreError("Failed to create match request")
        return existing

    def _get_addressed_request(self, user_id: str, request_id: Any) -> MatchRequest:
        try:
            request = self.match_requests.get_by_id(to_uuid(request_id))
        except ValueError:
            request = None
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to load match request {request_id}") from e

        if not request or str(request.receiver_id) != user_id:
            raise MatchRequestNotFoundError(
                f"Match request {request_id} not found or not addressed to you"
            )
        return request

    def _accept(self, access: AccessContext, request: MatchRequest, auto_accepted: bool = False) -> AcceptResult:
        acceptor_id = str(request.receiver_id)
        sender_id = str(request.sender_id)
        ensure_transition(request.status, MatchRequestStatus.ACCEPTED)

        try:
            self.match_requests.update_status(request, MatchRequestStatus.ACCEPTED.value)
            connection = self.connections.create(
                user1_id=acceptor_id,
                user2_id=sender_id,
                compatibility_score=request.compatibility_score,
                match_request_id=request.id
            )
        except IntegrityError as e:
            raise ConflictError(
                "A connection already exists for this match request",
                details={"request_id": str(request.id)}
            ) from e
        except SQLAlchemyError as e:
            raise DataStoreError(f"Failed to accept match request {request.id}") from e

        logger.info(f"Match request {request.id} accepted, connection {connection.id} created")

        names = self._display_names([acceptor_id, sender_id])
        self.notifications.notify_match_confirmed(
            access.as_service(),
            acceptor_id, names.get(acceptor_id),
            sender_id, names.get(sender_id),
            connection.id
        )
        return AcceptResult(request=request, connection=connection, auto_accepted=auto_accepted)

    def _display_names(self, user_ids: List[str]) -> Dict[str, Optional[str]]:
        """Full names for notification text; a failed lookup yields no names."""
        try:
            with self.users.savepoint():
                users = self.users.get_many(user_ids)
        except SQLAlchemyError as e:
            logger.error(f"Failed to load display names for {user_ids}: {e}", exc_info=True)
            return {}
        return {user_id: user.full_name for user_id, user in users.items()}
