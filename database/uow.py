import contextlib
import logging

from sqlalchemy.orm import Session

from database.repositories import (
    UserRepository,
    RubricScoreRepository,
    MatchRequestRepository,
    ConnectionRepository,
    NotificationRepository,
)

logger = logging.getLogger(__name__)


class BuddyUnitOfWork:
    """All repositories bound to one Session."""

    def __init__(self, session: Session):
        self.session = session
        self.users = UserRepository(session)
        self.scores = RubricScoreRepository(session)
        self.match_requests = MatchRequestRepository(session)
        self.connections = ConnectionRepository(session)
        self.notifications = NotificationRepository(session)


@contextlib.contextmanager
def buddy_uow(session_factory=None):
    """Per-unit-of-work transaction scope.

    Yields a BuddyUnitOfWork bound to a fresh Session. Commits on success,
    rolls back on exception, always closes.

    Usage:
        with buddy_uow() as uow:
            scores = uow.scores.get_scores(user_id, access)
            # perform operations...
        # commit happens automatically on successful exit
    """
    if session_factory is None:
        from database.database import SessionLocal
        session_factory = SessionLocal

    session = session_factory()
    try:
        yield BuddyUnitOfWork(session)
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
