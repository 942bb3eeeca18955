#!/usr/bin/env python3
"""
Service-layer exceptions shared by the core services and the web layer.

Every exception carries an optional ``details`` dict that the web layer
renders next to the error message.
"""

from typing import Any, Dict, Optional


class ServiceException(Exception):
    """Base exception for service layer errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.details = details or {}


class ValidationError(ServiceException):
    """Raised when caller input is missing or invalid."""
    pass


class PermissionDeniedError(ServiceException):
    """Raised when the access context may not touch a row."""
    pass


class NotFoundError(ServiceException):
    """Raised when a requested entity does not exist."""
    pass


class UserNotFoundError(NotFoundError):
    """Raised when a user is not found."""
    pass


class MatchRequestNotFoundError(NotFoundError):
    """Raised when a match request is not found or not actionable by the caller."""
    pass


class ConnectionNotFoundError(NotFoundError):
    """Raised when a connection is not found."""
    pass


class NotificationNotFoundError(NotFoundError):
    """Raised when a notification is not found."""
    pass


class ConflictError(ServiceException):
    """Raised when an operation collides with existing state."""
    pass


class DuplicateMatchRequestError(ConflictError):
    """Raised when a match request already exists between two users."""

    def __init__(self, request_id: Any, request_status: str, is_incoming: bool):
        super().__init__(
            "A match request already exists between these users",
            details={
                "request_id": str(request_id) if request_id is not None else None,
                "request_status": request_status,
                "is_incoming": is_incoming,
            }
        )
        self.request_status = request_status
        self.is_incoming = is_incoming


class InvalidTransitionError(ConflictError):
    """Raised when a match request cannot move to the requested status."""

    def __init__(self, current: str, target: str):
        super().__init__(
            f"Cannot change match request status from '{current}' to '{target}'",
            details={"current_status": current, "target_status": target}
        )
        self.current = current
        self.target = target


class DependencyError(ServiceException):
    """Raised when an external collaborator fails."""
    pass


class DataStoreError(DependencyError):
    """Raised when a datastore read or write fails."""
    pass
