"""Messages pushed to kiosk displays."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from photo_kiosk.domain.sessions import SessionStatus


class NotificationType(str, Enum):
    """Kinds of push notifications."""

    IMAGE_READY = "image_ready"
    STATUS_UPDATE = "status_update"
    PRINT_STATUS = "print_status"


class SessionNotification(BaseModel):
    """Single self-describing notification for a session."""

    model_config = ConfigDict(populate_by_name=True, use_enum_values=True)

    type: NotificationType
    session_id: str = Field(alias="sessionId")
    status: SessionStatus | None = None
    image_url: str | None = Field(default=None, alias="imageUrl")
    message: str | None = None

    def to_text(self) -> str:
        """Serialize as a JSON text frame, omitting absent fields."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def image_ready(token: str, image_url: str) -> SessionNotification:
    """Build the notification sent once an image is stored."""
    return SessionNotification(
        type=NotificationType.IMAGE_READY,
        session_id=token,
        image_url=image_url,
        status=SessionStatus.IMAGE_READY,
        message="Image uploaded and ready for editing",
    )


def status_update(
    token: str, status: SessionStatus, message: str | None = None
) -> SessionNotification:
    """Build a status change notification."""
    return SessionNotification(
        type=NotificationType.STATUS_UPDATE,
        session_id=token,
        status=status,
        message=message or f"Status updated to: {status.value}",
    )


def connected(token: str) -> SessionNotification:
    """Build the welcome message sent when a channel attaches."""
    return SessionNotification(
        type=NotificationType.STATUS_UPDATE,
        session_id=token,
        message="Connected to session",
    )
