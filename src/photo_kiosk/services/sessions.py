"""Session state machine for kiosk photo printing."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Protocol

from photo_kiosk.domain import notifications
from photo_kiosk.domain.errors import (
    InvalidTransitionError,
    NoImageToPrintError,
    PrintFailedError,
    SessionNotFoundError,
)
from photo_kiosk.domain.sessions import KioskSession, SessionStatus, can_transition
from photo_kiosk.services.notifications import NotificationHub
from photo_kiosk.services.session_store import SessionStore

_logger = logging.getLogger(__name__)

_UPLOADABLE = frozenset({SessionStatus.WAITING, SessionStatus.IMAGE_READY})


class PrintClient(Protocol):
    """Interface for the physical print operation."""

    async def print_image(self, image_path: str) -> None:
        """Print the image at ``image_path`` or raise on failure."""


@dataclass
class KioskSessionService:
    """Drives session transitions and notifies subscribed kiosks."""

    store: SessionStore
    hub: NotificationHub
    print_client: PrintClient
    base_url: str
    print_timeout_seconds: float | None = None

    def create_session(self) -> KioskSession:
        """Create a new session waiting for an image."""
        session = self.store.create()
        _logger.info("Session created: %s", session.token)
        return session

    def get_session(self, token: str) -> KioskSession:
        """Return the current session state."""
        session = self.store.get(token)
        if session is None:
            raise SessionNotFoundError(token)
        return session

    def get_image_path(self, token: str) -> str | None:
        """Return the stored image path for a session, if any."""
        return self.get_session(token).image_path

    def kiosk_url(self, token: str) -> str:
        return f"{self.base_url}/kiosk?token={token}"

    def mobile_url(self, token: str) -> str:
        return f"{self.base_url}/m/session?token={token}"

    def image_url(self, token: str) -> str:
        return f"{self.base_url}/session/{token}/image"

    def upload_image(self, token: str, image_path: str) -> KioskSession:
        """Attach an uploaded image and announce it to the kiosk."""
        session = self.get_session(token)
        if session.status not in _UPLOADABLE:
            raise InvalidTransitionError(token, session.status, "upload an image")
        updated = self.store.set_image(token, image_path)
        if updated is None:
            raise SessionNotFoundError(token)
        self.hub.publish(token, notifications.image_ready(token, self.image_url(token)))
        return updated

    async def print_session(
        self, token: str, upload_path: str | None = None
    ) -> KioskSession:
        """Print the session image, publishing each status change.

        An image sent along with the request is stored first, so the session
        still passes through ``image_ready`` before ``printing``.
        """
        session = self.get_session(token)
        if upload_path is None and session.image_path is None:
            raise NoImageToPrintError(token)
        if session.status not in _UPLOADABLE:
            raise InvalidTransitionError(token, session.status, "print")
        if upload_path is not None:
            session = self.upload_image(token, upload_path)
        image_path = session.image_path
        if image_path is None:
            raise NoImageToPrintError(token)

        self._transition(token, SessionStatus.PRINTING)
        try:
            await self._run_print(image_path)
        except Exception as exc:
            _logger.exception("Print failed for session %s", token)
            self._transition(token, SessionStatus.ERROR)
            raise PrintFailedError(token, str(exc) or type(exc).__name__) from exc
        return self._transition(token, SessionStatus.PRINTED)

    async def _run_print(self, image_path: str) -> None:
        if self.print_timeout_seconds is None:
            await self.print_client.print_image(image_path)
            return
        await asyncio.wait_for(
            self.print_client.print_image(image_path),
            timeout=self.print_timeout_seconds,
        )

    def _transition(self, token: str, target: SessionStatus) -> KioskSession:
        # Re-read: other requests may have run while a print was in flight.
        current = self.get_session(token)
        if not can_transition(current.status, target):
            raise InvalidTransitionError(
                token, current.status, f"move to {target.value}"
            )
        updated = self.store.update(token, status=target)
        if updated is None:
            raise SessionNotFoundError(token)
        self.hub.publish(token, notifications.status_update(token, target))
        return updated
