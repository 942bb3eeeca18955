import logging
from typing import Any, List, Optional, Set

from sqlalchemy import select, or_

from database.models import Connection
from database.repositories.base import BaseRepository, to_uuid

logger = logging.getLogger(__name__)


class ConnectionRepository(BaseRepository):
    def create(
        self,
        user1_id: Any,
        user2_id: Any,
        compatibility_score: int,
        match_request_id: Any = None
    ) -> Connection:
        connection = Connection(
            user1_id=to_uuid(user1_id),
            user2_id=to_uuid(user2_id),
            compatibility_score=compatibility_score,
            match_request_id=to_uuid(match_request_id)
        )
        self.db.add(connection)
        self.db.flush()
        logger.info(f"Created connection {connection.id} between {user1_id} and {user2_id}")
        return connection

    def get_by_id(self, connection_id: Any) -> Optional[Connection]:
        stmt = select(Connection).where(Connection.id == to_uuid(connection_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def get_by_request_id(self, match_request_id: Any) -> Optional[Connection]:
        stmt = select(Connection).where(Connection.match_request_id == to_uuid(match_request_id))
        return self.db.execute(stmt).scalar_one_or_none()

    def list_for_user(self, user_id: Any) -> List[Connection]:
        uid = to_uuid(user_id)
        stmt = select(Connection).where(
            or_(Connection.user1_id == uid, Connection.user2_id == uid)
        ).order_by(Connection.created_at.desc())
        return self.db.execute(stmt).scalars().all()

    def get_connected_user_ids(self, user_id: Any) -> Set[str]:
        return {str(c.other_user_id(user_id)) for c in self.list_for_user(user_id)}
