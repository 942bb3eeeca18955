#!/usr/bin/env python3
"""
Access context passed explicitly into datastore and state-machine operations.

A ``user`` scope may only read or write rows owned by its user. A ``service``
scope may touch any row; it is only ever obtained through ``as_service()``
so that escalations stay visible at the call site.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from core.exceptions import PermissionDeniedError


class AccessScope(str, Enum):
    USER = "user"
    SERVICE = "service"


@dataclass(frozen=True)
class AccessContext:
    """Who is acting, and with which privileges."""
    user_id: Optional[str]
    scope: AccessScope = AccessScope.USER

    @classmethod
    def for_user(cls, user_id: Any) -> "AccessContext":
        return cls(user_id=str(user_id), scope=AccessScope.USER)

    @classmethod
    def system(cls) -> "AccessContext":
        """Service scope not acting on behalf of any user (CLI, maintenance)."""
        return cls(user_id=None, scope=AccessScope.SERVICE)

    def as_service(self) -> "AccessContext":
        """Same acting user, elevated to service scope."""
        return AccessContext(user_id=self.user_id, scope=AccessScope.SERVICE)

    @property
    def is_service(self) -> bool:
        return self.scope == AccessScope.SERVICE

    def can_access(self, owner_id: Any) -> bool:
        if self.is_service:
            return True
        return self.user_id is not None and str(owner_id) == self.user_id

    def require_access(self, owner_id: Any) -> None:
        if not self.can_access(owner_id):
            raise PermissionDeniedError(
                f"User {self.user_id} may not access data owned by {owner_id}"
            )

    def require_user(self) -> str:
        """Return the acting user id; operations that act as a user need one."""
        if not self.user_id:
            raise PermissionDeniedError("This operation requires an acting user")
        return self.user_id
