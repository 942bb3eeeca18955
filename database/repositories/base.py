import uuid
from typing import Any, Optional

from sqlalchemy.orm import Session, SessionTransaction


def to_uuid(value: Any) -> Optional[uuid.UUID]:
    """Coerce a str/UUID id into a UUID for Uuid column comparisons."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    return uuid.UUID(str(value))


class BaseRepository:
    def __init__(self, db: Session):
        self.db = db

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def savepoint(self) -> SessionTransaction:
        """Nested transaction; a failure inside rolls back to this point only."""
        return self.db.begin_nested()
