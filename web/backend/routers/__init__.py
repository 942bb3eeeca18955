"""API route handlers."""

from .matches import router as matches_router
from .match_requests import router as match_requests_router
from .connections import router as connections_router
from .notifications import router as notifications_router
from .profile import router as profile_router
