import logging
from typing import Any, Dict, List, Optional, Set

from sqlalchemy import select, or_

from database.models import MatchRequest, make_pair_key
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class MatchRequestRepository(BaseRepository):
    def get_by_id(self, request_id: Any) -> Optional[MatchRequest]:
        stmt = select(MatchRequest).where(MatchRequest.id == to_uuid(request_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_for_pair(self, user_a: Any, user_b: Any) -> Optional[MatchRequest]:
        """The request between two users in either direction, if any."""
        stmt = select(MatchRequest).where(MatchRequest.pair_key == make_pair_key(user_a, user_b))
        return self.db.execute(stmt).scalar_one_or_none()

    def create(
        self,
        sender_id: Any,
        receiver_id: Any,
        compatibility_score: int,
        match_reason: Optional[str],
        match_details: Optional[Dict[str, Any]] = None
    ) -> MatchRequest:
        request = MatchRequest(
            sender_id=to_uuid(sender_id),
            receiver_id=to_uuid(receiver_id),
            pair_key=make_pair_key(sender_id, receiver_id),
            compatibility_score=compatibility_score,
            match_reason=match_reason,
            match_details=match_details,
            status='pending'
        )
        self.db.add(request)
        self.db.flush()
        return request

    def update_status(self, request: MatchRequest, status: str) -> MatchRequest:
        request.status = status
        self.db.flush()
        return request

    def list_incoming(self, user_id: Any, status: Optional[str] = 'pending') -> List[MatchRequest]:
        stmt = select(MatchRequest).where(MatchRequest.receiver_id == to_uuid(user_id))
        if status is not None:
            stmt = stmt.where(MatchRequest.status == status)
        stmt = stmt.order_by(MatchRequest.created_at.desc())
        return self.db.execute(stmt).scalars().all()

    def list_outgoing(self, user_id: Any, status: Optional[str] = None) -> List[MatchRequest]:
        stmt = select(MatchRequest).where(MatchRequest.sender_id == to_uuid(user_id))
        if status is not None:
            stmt = stmt.where(MatchRequest.status == status)
        stmt = stmt.order_by(MatchRequest.created_at.desc())
        return self.db.execute(stmt).scalars().all()

    def list_for_user(self, user_id: Any) -> List[MatchRequest]:
        """Every request the user sent or received, newest first."""
        uid = to_uuid(user_id)
        stmt = select(MatchRequest).where(
            or_(MatchRequest.sender_id == uid, MatchRequest.receiver_id == uid)
        ).order_by(MatchRequest.created_at.desc())
        return self.db.execute(stmt).scalars().all()

    def get_counterpart_ids(self, user_id: Any) -> Set[str]:
        """Ids of users the given user has a request with, in any status."""
        uid = to_uuid(user_id)
        stmt = select(MatchRequest.sender_id, MatchRequest.receiver_id).where(
            or_(MatchRequest.sender_id == uid, MatchRequest.receiver_id == uid)
        )
        ids = set()
        for sender_id, receiver_id in self.db.execute(stmt).all():
            ids.add(str(receiver_id if sender_id == uid else sender_id))
        return ids
