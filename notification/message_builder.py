from enum import Enum
from typing import Optional

from pydantic import BaseModel


class NotificationType(str, Enum):
    MATCH_REQUEST = "match_request"
    MATCH_CONFIRMED = "match_confirmed"
    MATCH_REJECTED = "match_rejected"


# Display name fallbacks when a profile row has no name
UNKNOWN_SENDER_NAME = "Someone"
ACCEPTOR_FALLBACK_NAME = "your match"
SENDER_FALLBACK_NAME = "their match"


class NotificationContent(BaseModel):
    type: NotificationType
    title: str
    message: str


class NotificationMessageBuilder:
    """Builds the title/message pair for each match request transition."""

    @staticmethod
    def match_request(sender_name: Optional[str]) -> NotificationContent:
        return NotificationContent(
            type=NotificationType.MATCH_REQUEST,
            title="New Match Request",
            message=f"{sender_name or UNKNOWN_SENDER_NAME} wants to connect with you!"
        )

    @staticmethod
    def match_confirmed(other_name: str) -> NotificationContent:
        return NotificationContent(
            type=NotificationType.MATCH_CONFIRMED,
            title="New Connection!",
            message=f"You are now connected with {other_name}!"
        )

    @staticmethod
    def match_rejected(receiver_name: Optional[str]) -> NotificationContent:
        return NotificationContent(
            type=NotificationType.MATCH_REJECTED,
            title="Match Request Rejected",
            message=f"{receiver_name or UNKNOWN_SENDER_NAME} has declined your connection request."
        )
