"""Business logic services."""

from .match_service import MatchService
from .match_request_service import MatchRequestServiceWrapper
from .connection_service import ConnectionService
from .notification_service import NotificationServiceWrapper
from .profile_service import ProfileService
