from database.repositories.base import BaseRepository, to_uuid
from database.repositories.user import UserRepository
from database.repositories.rubric_score import RubricScoreRepository
from database.repositories.match_request import MatchRequestRepository
from database.repositories.connection import ConnectionRepository
from database.repositories.notification import NotificationRepository

__all__ = [
    'BaseRepository',
    'to_uuid',
    'UserRepository',
    'RubricScoreRepository',
    'MatchRequestRepository',
    'ConnectionRepository',
    'NotificationRepository',
]
