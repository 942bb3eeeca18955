from .base import Base, JSONType, utcnow
from .user import User
from .rubric_score import RubricScore
from .match_request import MatchRequest, make_pair_key
from .connection import Connection
from .notification import Notification

__all__ = [
    'Base',
    'JSONType',
    'utcnow',
    'User',
    'RubricScore',
    'MatchRequest',
    'make_pair_key',
    'Connection',
    'Notification',
]
